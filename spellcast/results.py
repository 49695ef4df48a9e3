from __future__ import annotations

from dataclasses import dataclass, field

from spellcast.grid import Position
from spellcast.swaps import SwapRecord


@dataclass(frozen=True)
class FoundWord:
    word: str
    path: tuple[Position, ...]
    score: int
    swaps_used: tuple[SwapRecord, ...] = ()
    gem_cost: int = 0

    def to_dict(self) -> dict:
        return {
            "word": self.word,
            "path": [{"row": p.row, "col": p.col} for p in self.path],
            "score": self.score,
            "swaps_used": [s.to_dict() for s in self.swaps_used],
            "gem_cost": self.gem_cost,
        }


@dataclass
class ResultAggregator:
    """Best-scoring path per word for one search."""

    _entries: dict[str, FoundWord] = field(default_factory=dict)
    best_score: int = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, word: str) -> bool:
        return word in self._entries

    def get(self, word: str) -> FoundWord | None:
        return self._entries.get(word)

    def record(self, candidate: FoundWord) -> bool:
        """Keep ``candidate`` if its word is new or it beats the stored score."""
        existing = self._entries.get(candidate.word)
        if existing is not None and candidate.score <= existing.score:
            return False
        self._entries[candidate.word] = candidate
        self.best_score = max(self.best_score, candidate.score)
        return True

    def finalize(self) -> list[FoundWord]:
        # Score desc, length desc, then alphabetical
        return sorted(
            self._entries.values(),
            key=lambda fw: (-fw.score, -len(fw.word), fw.word),
        )
