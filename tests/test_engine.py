import math

import pytest

from witness_complex.active_witness import ActiveWitness, NearestLandmarkCursor
from witness_complex.construction import _pushed, add_all_faces_of_dimension, all_faces_in
from witness_complex.simplex_tree import SimplexTreeSink


def _sink_with_vertices(n):
    sink = SimplexTreeSink()
    for i in range(n):
        sink.insert_simplex([i], 0.0)
    return sink


def test_all_faces_in_reports_max_facet_filtration():
    sink = _sink_with_vertices(3)
    sink.insert_simplex([0, 1], 0.5)
    sink.insert_simplex([1, 2], 0.25)
    assert all_faces_in([0, 1, 2], sink) is None

    sink.insert_simplex([0, 2], 0.75)
    assert all_faces_in([2, 0, 1], sink) == 0.75
    assert all_faces_in([0, 1], sink) == 0.0


def test_engine_inserts_witnessed_edges_and_restores_prefix():
    sink = _sink_with_vertices(3)
    witness = ActiveWitness(0, NearestLandmarkCursor([(1, 0.0), (0, 1.0), (2, 4.0)]))
    simplex = []

    assert add_all_faces_of_dimension(1, 0.0, math.inf, 0, simplex, sink, witness)

    assert simplex == []
    assert sink.simplices_of_dimension(1) == [((0, 1), 0.0)]


def test_engine_reports_inactive_when_no_facets_exist():
    sink = _sink_with_vertices(3)
    witness = ActiveWitness(0, NearestLandmarkCursor([(0, 0.0), (1, 1.0), (2, 2.0)]))
    simplex = []

    assert not add_all_faces_of_dimension(2, 10.0, math.inf, 0, simplex, sink, witness)
    assert simplex == []
    assert sink.simplices_of_dimension(2) == []


def test_engine_existing_simplex_keeps_first_filtration_but_stays_active():
    sink = _sink_with_vertices(2)
    sink.insert_simplex([0, 1], 0.5)
    witness = ActiveWitness(0, NearestLandmarkCursor([(0, 0.0), (1, 1.0)]))

    assert add_all_faces_of_dimension(1, 0.0, math.inf, 0, [], sink, witness)
    assert sink.filtration((0, 1)) == 0.5


def test_pushed_restores_prefix_on_error():
    simplex = [4]
    with pytest.raises(KeyError):
        with _pushed(simplex, 7):
            assert simplex == [4, 7]
            raise KeyError("boom")
    assert simplex == [4]


def test_pushed_detects_corrupted_prefix():
    simplex = []
    with pytest.raises(RuntimeError):
        with _pushed(simplex, 3):
            simplex.pop()
