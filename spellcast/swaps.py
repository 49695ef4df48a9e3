from __future__ import annotations

from dataclasses import dataclass
from typing import Collection, Iterator, Sequence

from spellcast.grid import Position
from spellcast.scoring import GEMS_PER_SWAP, letter_value

# Replacement candidates, most useful first. Not all 26 letters: this keeps the
# branching factor per cell small at the cost of missing some swaps.
SWAP_POOL = (
    "S", "R", "E", "A", "T", "I", "N", "L", "O", "U", "D",
    "G", "H", "Y", "C", "M", "P", "B", "F", "W", "K", "V",
)
HIGH_FREQUENCY = frozenset("SREAT")
MAX_SWAP_OPTIONS = 4


def _parse_flag(value) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    if isinstance(value, str):
        text = value.strip().lower()
        if text in ("1", "true", "yes"):
            return True
        if text in ("", "0", "false", "no"):
            return False
    raise ValueError(f"allow_swaps must be a boolean, got {value!r}")


@dataclass(frozen=True)
class SolverSettings:
    available_gems: int = 0
    max_swaps: int = 0
    allow_swaps: bool = False

    def __post_init__(self):
        if self.available_gems < 0 or self.max_swaps < 0:
            raise ValueError("available_gems and max_swaps must be non-negative")

    @property
    def effective_max_swaps(self) -> int:
        if not self.allow_swaps:
            return 0
        return max(0, min(self.max_swaps, self.available_gems // GEMS_PER_SWAP))

    @classmethod
    def from_dict(cls, data: dict | None) -> SolverSettings:
        data = data or {}
        if not isinstance(data, dict):
            raise ValueError("settings must be an object")
        return cls(
            available_gems=int(data.get("available_gems", 0)),
            max_swaps=int(data.get("max_swaps", 0)),
            allow_swaps=_parse_flag(data.get("allow_swaps", False)),
        )


@dataclass(frozen=True)
class SwapRecord:
    position: Position
    original: str
    replacement: str

    def to_dict(self) -> dict:
        return {
            "position": {"row": self.position.row, "col": self.position.col},
            "original": self.original,
            "replacement": self.replacement,
        }


def swap_candidates(original: str) -> list[str]:
    """Pool letters worth trying in place of ``original``."""
    base = letter_value(original)
    return [
        letter for letter in SWAP_POOL
        if letter != original and (letter_value(letter) >= base or letter in HIGH_FREQUENCY)
    ]


def swap_options(
    position: Position,
    original: str,
    swaps_used: Sequence[SwapRecord],
    settings: SolverSettings,
    viable: Collection[str] | None = None,
) -> Iterator[tuple[str, SwapRecord]]:
    """Yield (replacement, record) pairs for swapping the letter at ``position``.

    ``viable`` restricts candidates to letters the dictionary can continue
    with; it is applied before the per-cell cap.
    """
    if len(swaps_used) >= settings.effective_max_swaps:
        return
    if any(s.position == position for s in swaps_used):
        return
    produced = 0
    for letter in swap_candidates(original):
        if viable is not None and letter not in viable:
            continue
        yield letter, SwapRecord(position, original, letter)
        produced += 1
        if produced >= MAX_SWAP_OPTIONS:
            break
