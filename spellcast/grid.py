from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator, NamedTuple, Sequence

DIRECTIONS = (
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1),           (0, 1),
    (1, -1),  (1, 0),  (1, 1),
)


class Position(NamedTuple):
    row: int
    col: int


class Multiplier(str, Enum):
    DL = "DL"
    TL = "TL"
    DW = "DW"
    TW = "TW"

    @property
    def letter_factor(self) -> int:
        return {"DL": 2, "TL": 3}.get(self.value, 1)

    @property
    def word_factor(self) -> int:
        return {"DW": 2, "TW": 3}.get(self.value, 1)

    @classmethod
    def parse(cls, value: Any) -> Multiplier | None:
        if value is None or isinstance(value, cls):
            return value
        text = str(value).strip().upper().replace("_", "")
        if not text or text == "NONE":
            return None
        text = _MULTIPLIER_ALIASES.get(text, text)
        try:
            return cls(text)
        except ValueError:
            raise ValueError(f"Unknown multiplier {value!r}") from None


_MULTIPLIER_ALIASES = {
    "DOUBLELETTER": "DL",
    "TRIPLELETTER": "TL",
    "DOUBLEWORD": "DW",
    "TRIPLEWORD": "TW",
}


@dataclass(frozen=True)
class Cell:
    letter: str | None = None
    multiplier: Multiplier | None = None

    def __post_init__(self):
        if self.letter is not None and (
            len(self.letter) != 1 or not ("A" <= self.letter <= "Z")
        ):
            raise ValueError(f"Cell letter must be one uppercase letter, got {self.letter!r}")

    @property
    def occupied(self) -> bool:
        return self.letter is not None

    @classmethod
    def parse(cls, raw: Any) -> Cell:
        """Build a cell from a letter string or a {"letter", "multiplier"} mapping."""
        if isinstance(raw, cls):
            return raw
        multiplier = None
        if isinstance(raw, dict):
            multiplier = Multiplier.parse(raw.get("multiplier"))
            raw = raw.get("letter")
        if raw is not None and not isinstance(raw, str):
            raise ValueError(f"Cell letter must be a string, got {raw!r}")
        letter = (raw or "").strip().upper() or None
        return cls(letter, multiplier)


class Grid:
    """Immutable letter grid with 8-way adjacency.

    Rows are not required to be the same length; callers check ``is_valid``
    before searching.
    """

    def __init__(self, cells: Sequence[Sequence[Cell]]):
        self._cells: tuple[tuple[Cell, ...], ...] = tuple(tuple(row) for row in cells)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Any]]) -> Grid:
        return cls([[Cell.parse(raw) for raw in row] for row in rows])

    @property
    def rows(self) -> int:
        return len(self._cells)

    @property
    def cols(self) -> int:
        return len(self._cells[0]) if self._cells else 0

    @property
    def is_valid(self) -> bool:
        """Non-empty and rectangular."""
        return self.cols > 0 and all(len(row) == self.cols for row in self._cells)

    def in_bounds(self, pos: Position) -> bool:
        r, c = pos
        return 0 <= r < self.rows and 0 <= c < len(self._cells[r])

    def cell(self, pos: Position) -> Cell:
        r, c = pos
        return self._cells[r][c]

    def letter_at(self, pos: Position) -> str | None:
        return self.cell(pos).letter

    def multiplier_at(self, pos: Position) -> Multiplier | None:
        return self.cell(pos).multiplier

    def is_occupied(self, pos: Position) -> bool:
        return self.in_bounds(pos) and self.cell(pos).occupied

    def positions(self) -> Iterator[Position]:
        for r, row in enumerate(self._cells):
            for c in range(len(row)):
                yield Position(r, c)

    def occupied_positions(self) -> list[Position]:
        return [pos for pos in self.positions() if self.cell(pos).occupied]

    def neighbors(self, pos: Position) -> list[Position]:
        r, c = pos
        adj = []
        for dr, dc in DIRECTIONS:
            npos = Position(r + dr, c + dc)
            if self.in_bounds(npos):
                adj.append(npos)
        return adj

    def __repr__(self) -> str:
        text = " / ".join(
            " ".join(cell.letter or "." for cell in row) for row in self._cells
        )
        return f"Grid({text})"


def are_adjacent(a: Position, b: Position) -> bool:
    return a != b and abs(a[0] - b[0]) <= 1 and abs(a[1] - b[1]) <= 1


class Visited:
    """Cells used by the path currently being explored from one start cell."""

    __slots__ = ("_marks",)

    def __init__(self):
        self._marks: set[Position] = set()

    def __contains__(self, pos: Position) -> bool:
        return pos in self._marks

    def __len__(self) -> int:
        return len(self._marks)

    @contextmanager
    def hold(self, pos: Position):
        self._marks.add(pos)
        try:
            yield
        finally:
            self._marks.discard(pos)
