"""Word scoring: letter values, cell multipliers, length bonus and gem cost.

The same step function (``apply_cell``) drives both the pure ``score_word``
and the incremental totals the search keeps while walking a path, so the two
always agree.
"""
from __future__ import annotations

from typing import Sequence

from spellcast.grid import Grid, Multiplier, Position

# Spellcast letter values
LETTER_SCORES: dict[str, int] = {
    "A": 1, "B": 4, "C": 4, "D": 2, "E": 1, "F": 4, "G": 3, "H": 3, "I": 1, "J": 10,
    "K": 5, "L": 2, "M": 4, "N": 2, "O": 1, "P": 4, "Q": 10, "R": 1, "S": 1, "T": 1,
    "U": 2, "V": 5, "W": 4, "X": 8, "Y": 3, "Z": 10,
}
MAX_LETTER_SCORE = max(LETTER_SCORES.values())

GEMS_PER_SWAP = 3
LENGTH_BONUS_PER_LETTER = 3
LENGTH_BONUS_FROM = 4


def letter_value(letter: str) -> int:
    return LETTER_SCORES.get(letter.upper(), 1)


def gem_cost(swap_count: int) -> int:
    return swap_count * GEMS_PER_SWAP


def length_bonus(length: int) -> int:
    return LENGTH_BONUS_PER_LETTER * max(0, length - LENGTH_BONUS_FROM)


def apply_cell(letter: str, multiplier: Multiplier | None) -> tuple[int, int]:
    """Points for one letter on one cell, and the word factor the cell adds."""
    points = letter_value(letter)
    if multiplier is None:
        return points, 1
    return points * multiplier.letter_factor, multiplier.word_factor


def final_score(letter_sum: int, word_multiplier: int, length: int, swap_count: int) -> int:
    total = letter_sum * word_multiplier + length_bonus(length)
    total = max(0, total)
    total = max(0, total - gem_cost(swap_count))
    return int(round(total))


def score_word(word: str, path: Sequence[Position], grid: Grid, swaps: Sequence = ()) -> int:
    """Score ``word`` spelled along ``path``.

    Letters come from ``word`` itself, so a swapped cell scores its
    replacement letter; multipliers come from the grid cells.
    """
    if len(word) != len(path):
        raise ValueError(f"Path length {len(path)} does not match word {word!r}")
    letter_sum = 0
    word_multiplier = 1
    for letter, pos in zip(word, path):
        points, factor = apply_cell(letter, grid.multiplier_at(pos))
        letter_sum += points
        word_multiplier *= factor
    return final_score(letter_sum, word_multiplier, len(word), len(swaps))
