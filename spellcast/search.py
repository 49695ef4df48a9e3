from __future__ import annotations

import logging
import time
from typing import Callable, Iterable

from spellcast.grid import Cell, Grid, Multiplier, Position, Visited
from spellcast.metrics import StageTimer
from spellcast.results import FoundWord, ResultAggregator
from spellcast.scoring import apply_cell, final_score, gem_cost, length_bonus, letter_value
from spellcast.swaps import SWAP_POOL, SolverSettings, SwapRecord, swap_options
from spellcast.settings import settings as config
from spellcast.trie import Trie, TrieNode, default_trie

logger = logging.getLogger("spellcast")

START_BONUS = {
    Multiplier.TW: 50,
    Multiplier.DW: 30,
    Multiplier.TL: 20,
    Multiplier.DL: 10,
}


def _or(value, default):
    return default if value is None else value


def start_priority(cell: Cell) -> int:
    priority = letter_value(cell.letter)
    if cell.multiplier is not None:
        priority += START_BONUS[cell.multiplier]
    return priority


class WordSearch:
    """One search over one grid.

    Holds everything a single call needs (best score, collected results,
    timing) so nothing is shared between calls except the read-only trie.

    Tuning options left as None are read from the process settings. Branches
    at least ``prune_min_length`` long are dropped when even their optimistic
    bound falls under ``prune_ratio`` of the best score so far; words scoring
    below that fraction can be missed. Pass ``timeout=math.inf`` for no
    deadline.
    """

    def __init__(
        self,
        grid: Grid,
        trie: Trie,
        settings: SolverSettings | None = None,
        *,
        timeout: float | None = None,
        prune_ratio: float | None = None,
        prune_min_length: int | None = None,
        min_word_length: int | None = None,
        max_word_length: int | None = None,
        clock: Callable[[], float] = time.perf_counter,
    ):
        self.grid = grid
        self.trie = trie
        self.settings = settings or SolverSettings()
        self.timeout = _or(timeout, config.SEARCH_TIMEOUT_SECONDS)
        self.prune_ratio = _or(prune_ratio, config.PRUNE_RATIO)
        self.prune_min_length = _or(prune_min_length, config.PRUNE_MIN_LENGTH)
        self.min_word_length = _or(min_word_length, config.MIN_WORD_LENGTH)
        self.max_word_length = _or(max_word_length, config.MAX_WORD_LENGTH)
        self.results = ResultAggregator()
        self.timed_out = False
        self.starts_searched = 0
        self.failed_starts = 0
        self._clock = clock
        self._max_swaps = self.settings.effective_max_swaps

    def start_positions(self) -> list[Position]:
        """Occupied cells, highest priority first, row-major among equals."""
        occupied = self.grid.occupied_positions()
        return sorted(occupied, key=lambda pos: -start_priority(self.grid.cell(pos)))

    def run(self) -> list[FoundWord]:
        if not self.grid.is_valid:
            logger.warning("Skipping search on invalid grid %r", self.grid)
            return []

        starts = self.start_positions()
        self._prepare_bound(starts)
        timer = StageTimer(self._clock)
        logger.info("Searching %d start cells (max_swaps=%d)", len(starts), self._max_swaps)

        for pos in starts:
            if timer.elapsed > self.timeout:
                self.timed_out = True
                logger.warning(
                    "Search timed out after %.1fs (%d/%d start cells searched)",
                    self.timeout, self.starts_searched, len(starts),
                )
                break
            try:
                self._explore(pos, self.trie.root, Visited(), "", (), (), 0, 1)
            except Exception:
                self.failed_starts += 1
                logger.exception("Search from start cell %s failed, skipping it", pos)
            self.starts_searched += 1

        logger.info(
            "Found %d words from %d start cells in %.1fms",
            len(self.results), self.starts_searched, timer.total_ms,
        )
        return self.results.finalize()

    def _prepare_bound(self, occupied: list[Position]):
        pool_best = max(letter_value(ch) for ch in SWAP_POOL)
        best_cell = 0
        best_swap_cell = 0
        word_factor = 1
        for pos in occupied:
            cell = self.grid.cell(pos)
            points, factor = apply_cell(cell.letter, cell.multiplier)
            letter_factor = cell.multiplier.letter_factor if cell.multiplier else 1
            best_cell = max(best_cell, points)
            best_swap_cell = max(best_swap_cell, points, pool_best * letter_factor)
            word_factor *= factor
        self._occupied_count = len(occupied)
        self._best_cell_points = best_cell
        self._best_swap_cell_points = best_swap_cell
        self._grid_word_factor = word_factor

    def upper_bound(self, node: TrieNode, letter_sum: int, length: int, swap_count: int) -> int:
        """Optimistic final score for any word extending the current prefix.

        Never below the real best extension: every remaining letter is
        assumed to land on the best cell and every word multiplier on the
        grid is assumed to apply.
        """
        remaining = max(0, min(
            self.max_word_length - length,
            node.depth,
            self._occupied_count - length,
        ))
        if swap_count < self._max_swaps:
            per_letter = self._best_swap_cell_points
        else:
            per_letter = self._best_cell_points
        total = (letter_sum + remaining * per_letter) * self._grid_word_factor
        total += length_bonus(length + remaining)
        return max(0, total - gem_cost(swap_count))

    def _letter_options(
        self, pos: Position, cell: Cell, node: TrieNode, swaps: tuple[SwapRecord, ...],
    ) -> Iterable[tuple[str, SwapRecord | None]]:
        yield cell.letter, None
        if self._max_swaps:
            yield from swap_options(pos, cell.letter, swaps, self.settings, viable=node.children)

    def _explore(
        self,
        pos: Position,
        node: TrieNode,
        visited: Visited,
        word: str,
        path: tuple[Position, ...],
        swaps: tuple[SwapRecord, ...],
        letter_sum: int,
        word_multiplier: int,
    ):
        cell = self.grid.cell(pos)
        path = path + (pos,)
        for letter, swap in self._letter_options(pos, cell, node, swaps):
            child = self.trie.descend(node, letter)
            if child is None:
                continue

            points, factor = apply_cell(letter, cell.multiplier)
            new_word = word + letter
            new_swaps = swaps + (swap,) if swap is not None else swaps
            new_sum = letter_sum + points
            new_multiplier = word_multiplier * factor
            length = len(new_word)

            if length >= self.prune_min_length:
                bound = self.upper_bound(child, new_sum, length, len(new_swaps))
                if bound < self.prune_ratio * self.results.best_score:
                    continue

            if length >= self.min_word_length and child.is_word:
                self.results.record(FoundWord(
                    word=new_word,
                    path=path,
                    score=final_score(new_sum, new_multiplier, length, len(new_swaps)),
                    swaps_used=new_swaps,
                    gem_cost=gem_cost(len(new_swaps)),
                ))

            if length < self.max_word_length and child.children:
                with visited.hold(pos):
                    for npos in self.grid.neighbors(pos):
                        if npos not in visited and self.grid.is_occupied(npos):
                            self._explore(
                                npos, child, visited, new_word, path,
                                new_swaps, new_sum, new_multiplier,
                            )


def search(
    grid: Grid,
    settings: SolverSettings | None = None,
    trie: Trie | None = None,
    **options,
) -> list[FoundWord]:
    """Find and rank every word on ``grid``.

    ``trie`` defaults to the configured dictionary, loaded once per process.
    Extra keyword options are passed to :class:`WordSearch`.
    """
    if trie is None:
        trie = default_trie()
    return WordSearch(grid, trie, settings, **options).run()
