import numpy as np
import pytest

from witness_complex.spatial import KdTreeLandmarkIndex, NearestLandmarkTable


def test_kdtree_query_enumerates_all_landmarks_in_order():
    rng = np.random.default_rng(0)
    landmarks = rng.normal(size=(50, 4))
    witness = rng.normal(size=4)
    index = KdTreeLandmarkIndex(landmarks, initial_neighbors=3)

    pairs = list(index.query(witness))

    assert sorted(i for i, _ in pairs) == list(range(50))
    dists = [d for _, d in pairs]
    assert all(a <= b for a, b in zip(dists, dists[1:]))
    expected = np.sort(((landmarks - witness) ** 2).sum(axis=1))
    np.testing.assert_allclose(dists, expected, rtol=1e-9, atol=1e-12)


def test_kdtree_query_with_ties_produces_each_landmark_once():
    # 12 landmarks on a circle around the witness: all distances equal
    angles = np.linspace(0.0, 2.0 * np.pi, 12, endpoint=False)
    landmarks = np.stack([np.cos(angles), np.sin(angles)], axis=1)
    index = KdTreeLandmarkIndex(landmarks, initial_neighbors=1)

    pairs = list(index.query([0.0, 0.0]))

    assert sorted(i for i, _ in pairs) == list(range(12))


def test_kdtree_query_is_lazy():
    index = KdTreeLandmarkIndex(np.arange(20, dtype=float).reshape(-1, 1), initial_neighbors=2)
    it = index.query([0.2])
    assert next(it) == (0, pytest.approx(0.04))
    assert next(it) == (1, pytest.approx(0.64))


def test_kdtree_rejects_bad_input():
    with pytest.raises(ValueError):
        KdTreeLandmarkIndex([1.0, 2.0, 3.0])
    with pytest.raises(ValueError):
        KdTreeLandmarkIndex([[0.0, 0.0]], initial_neighbors=0)
    index = KdTreeLandmarkIndex([[0.0, 0.0]])
    with pytest.raises(ValueError):
        index.query([0.0, 0.0, 0.0])


def test_empty_landmarks():
    index = KdTreeLandmarkIndex([])
    assert len(index) == 0
    assert list(index.query([0.0])) == []


def test_nearest_landmark_table():
    table = NearestLandmarkTable([[(3, 0.5), (1, 2)], [(0, 0.0)]])
    assert len(table) == 2
    assert table.num_landmarks == 4
    assert list(table.query(0)) == [(3, 0.5), (1, 2.0)]

    with pytest.raises(ValueError):
        NearestLandmarkTable([[(1, 0.5, 3)]])
    with pytest.raises(ValueError):
        NearestLandmarkTable([[(-1, 0.5)]])


@pytest.mark.parametrize("initial_neighbors", [1, 2, 8])
def test_kdtree_squared_distances_are_exact(initial_neighbors):
    index = KdTreeLandmarkIndex([[1.0, 0.0], [1.0, 1.0], [1.0, -1.0]], initial_neighbors=initial_neighbors)
    assert list(index.query([0.0, 0.0])) == [(0, 1.0), (1, 2.0), (2, 2.0)]


def test_kdtree_lattice_ties_ordered_by_distance_then_id():
    landmarks = np.array([[x, y] for x in range(4) for y in range(4)], dtype=float)
    witness = np.array([1.5, 1.5])
    index = KdTreeLandmarkIndex(landmarks, initial_neighbors=3)

    pairs = list(index.query(witness))

    d2 = ((landmarks - witness) ** 2).sum(axis=1)
    expected = [(int(i), float(d2[i])) for i in np.lexsort((np.arange(16), d2))]
    assert pairs == expected
