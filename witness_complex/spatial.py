"""witness_complex.spatial

Nearest-landmark search: for a witness, enumerate *all* landmarks by
non-decreasing squared distance, lazily.

Two backends are provided:

- KdTreeLandmarkIndex: scipy's cKDTree over Euclidean landmark coordinates.
  cKDTree has no incremental nearest-neighbour iterator, so we query the k
  nearest with k doubling on demand and only emit landmarks not yet produced.
  The tree only orders the search: reported squared distances are recomputed
  from the coordinates, so landmarks at exactly the same squared distance
  compare equal.
- NearestLandmarkTable: precomputed rows of (landmark id, squared distance)
  pairs, one row per witness; the witness is addressed by its row index.
"""

from __future__ import annotations

from typing import Any, Iterator, List, Optional, Sequence, Set

import numpy as np
from numpy.typing import NDArray
from scipy.spatial import cKDTree

from .schema import NearestLandmarkPair
from .utils import as_point_array, squared_distances

# Relative slack between cKDTree distances and squared distances recomputed
# from coordinates.
_BOUNDARY_RTOL = 1e-9


class KdTreeLandmarkIndex:
    """Incremental nearest-landmark queries backed by `scipy.spatial.cKDTree`."""

    def __init__(
        self,
        landmarks: Any,
        *,
        leafsize: int = 16,
        initial_neighbors: int = 8,
    ):
        if initial_neighbors < 1:
            raise ValueError("initial_neighbors must be >= 1")
        self.landmarks: NDArray[np.float64] = as_point_array(landmarks, name="landmarks")
        self.initial_neighbors = int(initial_neighbors)
        self._tree: Optional[cKDTree] = None
        if self.landmarks.shape[0] > 0:
            self._tree = cKDTree(self.landmarks, leafsize=leafsize)

    def __len__(self) -> int:
        return int(self.landmarks.shape[0])

    @property
    def ambient_dimension(self) -> int:
        return int(self.landmarks.shape[1])

    def query(self, witness: Any) -> Iterator[NearestLandmarkPair]:
        n = len(self)
        if self._tree is None:
            return iter(())
        point = np.asarray(witness, dtype=np.float64)
        if point.shape != (self.ambient_dimension,):
            raise ValueError(
                f"witness has shape {point.shape}, expected ({self.ambient_dimension},)"
            )
        return self._incremental(point, n)

    def _incremental(self, point: NDArray[np.float64], n: int) -> Iterator[NearestLandmarkPair]:
        seen: Set[int] = set()
        k = min(self.initial_neighbors, n)
        while True:
            dists, ids = self._tree.query(point, k=k)
            dists = np.atleast_1d(dists)
            ids = np.atleast_1d(ids)
            exact = squared_distances(self.landmarks[ids], point)
            if k == n:
                bound = np.inf
            else:
                # Anything outside this chunk is at tree distance >= dists[-1];
                # hold back landmarks too close to that boundary for the next chunk.
                bound = float(dists[-1]) ** 2 * (1.0 - _BOUNDARY_RTOL)
            for j in np.lexsort((ids, exact)):
                i = int(ids[j])
                d2 = float(exact[j])
                if i in seen or d2 > bound:
                    continue
                seen.add(i)
                yield i, d2
            if k == n:
                return
            k = min(2 * k, n)


class NearestLandmarkTable:
    """Precomputed nearest landmark table.

    `table[w]` lists (landmark id, squared distance) pairs for witness `w`, sorted
    by non-decreasing distance. Rows may be truncated, in which case the witness
    simply never sees the landmarks missing from its row.
    """

    def __init__(self, table: Sequence[Sequence[Sequence[float]]]):
        self.rows: List[List[NearestLandmarkPair]] = []
        for w, row in enumerate(table):
            pairs: List[NearestLandmarkPair] = []
            for pair in row:
                if len(pair) != 2:
                    raise ValueError(f"row {w}: expected (landmark_id, squared_distance) pairs, got {pair!r}")
                landmark, dist2 = int(pair[0]), float(pair[1])
                if landmark < 0:
                    raise ValueError(f"row {w}: negative landmark id {landmark}")
                pairs.append((landmark, dist2))
            self.rows.append(pairs)

    def __len__(self) -> int:
        return len(self.rows)

    @property
    def num_landmarks(self) -> int:
        """One more than the largest landmark id appearing in the table."""
        top = -1
        for row in self.rows:
            for landmark, _ in row:
                top = max(top, landmark)
        return top + 1

    def query(self, witness: int) -> Iterator[NearestLandmarkPair]:
        return iter(self.rows[int(witness)])
