import pytest

from witness_complex.active_witness import ActiveWitness, ActiveWitnessSet, NearestLandmarkCursor
from witness_complex.spatial import NearestLandmarkTable


def _counting(pairs, pulled):
    for p in pairs:
        pulled.append(p)
        yield p


def _members(active):
    """Witness ids currently in `active`, in order (keeps everybody)."""
    ids = []
    active.filter_round(lambda aw: ids.append(aw.witness_id) is None)
    return ids


def test_cursor_pulls_lazily_and_caches():
    pulled = []
    cursor = NearestLandmarkCursor(_counting([(2, 0.1), (0, 0.4), (1, 0.9)], pulled))
    assert len(pulled) == 0

    assert cursor.pair_at(1) == (0, 0.4)
    assert len(pulled) == 2
    # revisiting an earlier position does not touch the source
    assert cursor.pair_at(0) == (2, 0.1)
    assert len(pulled) == 2
    assert len(cursor) == 2


def test_cursor_end_and_invalid_position():
    cursor = NearestLandmarkCursor([(0, 0.0)])
    assert cursor.pair_at(1) is None
    assert cursor.pair_at(5) is None
    assert cursor.pair_at(0) == (0, 0.0)
    with pytest.raises(IndexError):
        cursor.pair_at(-1)


def test_active_set_creates_one_cursor_per_witness():
    table = NearestLandmarkTable([[(0, 0.0), (1, 1.0)], [(1, 0.0)], []])
    active = ActiveWitnessSet(range(len(table)), table)
    first_pairs = []

    assert len(active) == 3
    active.filter_round(lambda aw: first_pairs.append(aw.cursor.pair_at(0)) is None)
    assert first_pairs == [(0, 0.0), (1, 0.0), None]
    assert _members(active) == [0, 1, 2]


def test_filter_round_visits_every_witness_and_keeps_order():
    table = NearestLandmarkTable([[(0, 0.0)]] * 5)
    active = ActiveWitnessSet(range(5), table)
    visited = []

    def contributes(aw: ActiveWitness) -> bool:
        visited.append(aw.witness_id)
        return aw.witness_id % 2 == 0

    dropped = active.filter_round(contributes)

    assert visited == [0, 1, 2, 3, 4]
    assert dropped == 2
    assert _members(active) == [0, 2, 4]

    assert active.filter_round(lambda aw: False) == 3
    assert not active
