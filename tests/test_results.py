from spellcast.grid import Position
from spellcast.results import FoundWord, ResultAggregator
from spellcast.swaps import SwapRecord


def _found(word: str, score: int, row: int = 0) -> FoundWord:
    path = tuple(Position(row, c) for c in range(len(word)))
    return FoundWord(word=word, path=path, score=score)


def test_keeps_higher_score():
    agg = ResultAggregator()
    assert agg.record(_found("CAT", 6))
    assert agg.record(_found("CAT", 12, row=1))
    assert not agg.record(_found("CAT", 8, row=2))
    assert agg.get("CAT").score == 12
    assert agg.get("CAT").path[0] == Position(1, 0)
    assert len(agg) == 1


def test_tie_keeps_existing():
    agg = ResultAggregator()
    agg.record(_found("CAT", 6, row=0))
    assert not agg.record(_found("CAT", 6, row=3))
    assert agg.get("CAT").path[0].row == 0


def test_best_score_tracks_max():
    agg = ResultAggregator()
    agg.record(_found("CAT", 6))
    agg.record(_found("ZOO", 12))
    agg.record(_found("DOG", 5))
    assert agg.best_score == 12


def test_finalize_ordering():
    agg = ResultAggregator()
    for word, score in [("CAT", 6), ("STONE", 9), ("BONE", 9), ("ZOO", 12), ("ACT", 6)]:
        agg.record(_found(word, score))
    ranked = [fw.word for fw in agg.finalize()]
    assert ranked == ["ZOO", "STONE", "BONE", "ACT", "CAT"]


def test_to_dict():
    fw = FoundWord(
        word="CAT",
        path=(Position(0, 0), Position(0, 1), Position(0, 2)),
        score=3,
        swaps_used=(SwapRecord(Position(0, 1), "O", "A"),),
        gem_cost=3,
    )
    data = fw.to_dict()
    assert data["path"][1] == {"row": 0, "col": 1}
    assert data["swaps_used"] == [{"position": {"row": 0, "col": 1}, "original": "O", "replacement": "A"}]
    assert data["gem_cost"] == 3
