"""
Weak Witness Complex: Construction
==================================

This module handles:
1. Recursively enumerating, per witness, the landmark combinations it
   witnesses at a given dimension (the face enumeration engine)
2. Driving the construction dimension by dimension over the active witnesses
3. The public WitnessComplex / EuclideanWitnessComplex classes

A witness w witnesses a simplex σ with relaxation α² when every landmark of σ
is at squared distance at most d² + α² from w, where d² is the squared
distance from w to the closest landmark left out of σ. The filtration value of
σ is the smallest such relaxation, raised to the filtration of its facets.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Sequence

import logging
import math

import numpy as np
from numpy.typing import NDArray

from .active_witness import ActiveWitness, ActiveWitnessSet
from .config import default_config
from .schema import Filtration, LandmarkId, NearestNeighborIndex, SimplicialComplexForWitness
from .simplex_tree import SimplexTreeSink
from .spatial import KdTreeLandmarkIndex, NearestLandmarkTable

logger = logging.getLogger(__name__)


# =============================================================================
# Face Enumeration
# =============================================================================

@contextmanager
def _pushed(simplex: List[LandmarkId], landmark: LandmarkId) -> Iterator[List[LandmarkId]]:
    """Append `landmark` to the prefix for the duration of the block."""
    depth = len(simplex)
    simplex.append(landmark)
    try:
        yield simplex
    finally:
        if len(simplex) != depth + 1 or simplex[-1] != landmark:
            raise RuntimeError(
                f"simplex prefix corrupted: expected {landmark} at depth {depth}, got {simplex!r}"
            )
        simplex.pop()


def all_faces_in(
    simplex: Sequence[LandmarkId],
    sc: SimplicialComplexForWitness,
) -> Optional[Filtration]:
    """
    Check that every facet of `simplex` is already in the complex.

    Parameters
    ----------
    simplex : sequence of int
        Vertices of the candidate simplex (at least two).
    sc : SimplicialComplexForWitness
        The complex being built.

    Returns
    -------
    The largest filtration value among the facets, or None as soon as one
    facet is missing.
    """
    max_facet = 0.0
    for skip in range(len(simplex)):
        facet = [v for i, v in enumerate(simplex) if i != skip]
        handle = sc.find(facet)
        if handle is None:
            return None
        max_facet = max(max_facet, sc.filtration(handle))
    return max_facet


def add_all_faces_of_dimension(
    dim: int,
    alpha2: float,
    norelax_dist2: float,
    position: int,
    simplex: List[LandmarkId],
    sc: SimplicialComplexForWitness,
    witness: ActiveWitness,
) -> bool:
    """
    Insert every simplex extending `simplex` by `dim + 1` landmarks that the
    witness sees from `position` onwards.

    Parameters
    ----------
    dim : int
        Number of landmarks still to add after the next one (0 at the leaf).
    alpha2 : float
        Squared relaxation budget.
    norelax_dist2 : float
        Squared distance of the closest landmark left out so far (inf when
        none has been left out yet). Landmarks up to this distance need no
        relaxation.
    position : int
        First cursor position to consider.
    simplex : list of int
        The prefix chosen so far. Restored to its entry state on return.
    sc : SimplicialComplexForWitness
        The complex being built.
    witness : ActiveWitness
        The witness whose nearest landmark sequence is scanned.

    Returns
    -------
    True if at least one candidate had all of its facets in the complex,
    i.e. the witness stays active for this dimension.

    Notes
    -----
    Landmarks are sorted by distance, so the scan stops at the first landmark
    with `dist2 - alpha2 > norelax_dist2`: nothing farther can qualify.
    Continuing the scan past a landmark is the branch that leaves it out of
    the simplex; it then becomes the closest omitted landmark if it is within
    the current boundary.
    """
    cursor = witness.cursor
    will_be_active = False
    pair = cursor.pair_at(position)
    while pair is not None and pair[1] - alpha2 <= norelax_dist2:
        landmark, dist2 = pair
        with _pushed(simplex, landmark):
            if dim > 0:
                # Extensions of a prefix that is not a simplex cannot have all their faces.
                if sc.find(simplex) is not None:
                    will_be_active = add_all_faces_of_dimension(
                        dim - 1,
                        alpha2,
                        norelax_dist2,
                        position + 1,
                        simplex,
                        sc,
                        witness,
                    ) or will_be_active
            else:
                filtration_value = 0.0
                if dist2 > norelax_dist2:
                    filtration_value = dist2 - norelax_dist2
                facets_max = all_faces_in(simplex, sc)
                if facets_max is not None:
                    will_be_active = True
                    sc.insert_simplex(simplex, max(filtration_value, facets_max))
        if dist2 <= norelax_dist2:
            norelax_dist2 = dist2
        position += 1
        pair = cursor.pair_at(position)
    return will_be_active


# =============================================================================
# Construction
# =============================================================================

class _WitnessComplexBase:
    """
    Shared construction over any nearest-neighbour index.

    Parameters
    ----------
    index : NearestNeighborIndex
        Streams (landmark id, squared distance) pairs for one witness.
    witnesses : sequence
        Whatever `index.query` accepts, one item per witness.
    num_landmarks : int
        Landmark ids are 0 .. num_landmarks - 1.
    """

    def __init__(self, index: NearestNeighborIndex, witnesses: Sequence[Any], num_landmarks: int):
        self._index = index
        self._witnesses = witnesses
        self._num_landmarks = int(num_landmarks)

    @property
    def num_landmarks(self) -> int:
        return self._num_landmarks

    @property
    def num_witnesses(self) -> int:
        return len(self._witnesses)

    def create_complex(
        self,
        complex: SimplicialComplexForWitness,
        max_alpha_square: float,
        limit_dimension: Optional[int] = None,
    ) -> bool:
        """
        Fill `complex` with the weak witness complex of relaxation `max_alpha_square`.

        Parameters
        ----------
        complex : SimplicialComplexForWitness
            An empty complex, e.g. `SimplexTreeSink()`.
        max_alpha_square : float
            Squared relaxation parameter, >= 0.
        limit_dimension : int, optional
            Largest simplex dimension to build (default: no limit).

        Returns
        -------
        False (with a logged reason, and `complex` untouched) if a
        precondition fails, True otherwise.
        """
        if complex.num_vertices() > 0:
            logger.warning("Witness complex cannot create complex - complex is not empty.")
            return False
        if max_alpha_square < 0:
            logger.warning(
                "Witness complex cannot create complex - squared relaxation parameter must be non-negative (got %s).",
                max_alpha_square,
            )
            return False
        if limit_dimension is not None and limit_dimension < 0:
            logger.warning(
                "Witness complex cannot create complex - limit dimension must be non-negative (got %s).",
                limit_dimension,
            )
            return False
        max_dim = math.inf if limit_dimension is None else limit_dimension

        # Every landmark is a vertex, whether or not a witness sees it.
        for i in range(self._num_landmarks):
            complex.insert_simplex([i], 0.0)

        active_witnesses = ActiveWitnessSet(self._witnesses, self._index)
        simplex: List[LandmarkId] = []
        k = 1
        while active_witnesses and k <= max_dim:

            def contributes(aw: ActiveWitness) -> bool:
                ok = add_all_faces_of_dimension(
                    k,
                    max_alpha_square,
                    math.inf,
                    0,
                    simplex,
                    complex,
                    aw,
                )
                if simplex:
                    raise RuntimeError(f"simplex prefix not empty after witness {aw.witness_id}: {simplex!r}")
                return ok

            dropped = active_witnesses.filter_round(contributes)
            logger.debug(
                "dimension %d: %d witnesses dropped, %d still active",
                k,
                dropped,
                len(active_witnesses),
            )
            k += 1
        complex.set_dimension(k - 1)
        return True

    def create_simplex_tree(
        self,
        max_alpha_square: float,
        limit_dimension: Optional[int] = None,
    ) -> SimplexTreeSink:
        """Build the complex into a fresh GUDHI-backed `SimplexTreeSink`."""
        sink = SimplexTreeSink()
        if not self.create_complex(sink, max_alpha_square, limit_dimension=limit_dimension):
            raise ValueError(
                f"invalid witness complex parameters: max_alpha_square={max_alpha_square}, "
                f"limit_dimension={limit_dimension}"
            )
        return sink


class WitnessComplex(_WitnessComplexBase):
    """
    (Weak) witness complex from a nearest landmark table.

    Parameters
    ----------
    nearest_landmark_table : sequence of rows
        `table[w]` lists (landmark id, squared distance) pairs for witness w by
        non-decreasing distance.
    num_landmarks : int, optional
        Number of landmarks. Defaults to one more than the largest landmark id
        in the table.
    """

    def __init__(
        self,
        nearest_landmark_table: Sequence[Sequence[Sequence[float]]],
        num_landmarks: Optional[int] = None,
    ):
        table = NearestLandmarkTable(nearest_landmark_table)
        if num_landmarks is None:
            num_landmarks = table.num_landmarks
        elif num_landmarks < table.num_landmarks:
            raise ValueError(
                f"num_landmarks={num_landmarks} but the table refers to landmark {table.num_landmarks - 1}"
            )
        super().__init__(table, range(len(table)), num_landmarks)


class EuclideanWitnessComplex(_WitnessComplexBase):
    """
    (Weak) witness complex of landmark and witness points in R^d.

    Parameters
    ----------
    landmarks : array-like, shape (L, d)
        Landmark coordinates; row i is landmark (vertex) i.
    witnesses : array-like, shape (W, d)
        Witness coordinates.
    leafsize, initial_neighbors : int
        Forwarded to `KdTreeLandmarkIndex`.
    """

    def __init__(
        self,
        landmarks: Any,
        witnesses: Any,
        *,
        leafsize: int = 16,
        initial_neighbors: int = 8,
    ):
        index = KdTreeLandmarkIndex(landmarks, leafsize=leafsize, initial_neighbors=initial_neighbors)
        witness_points = np.asarray(witnesses, dtype=np.float64)
        if witness_points.size == 0:
            witness_points = witness_points.reshape(0, index.ambient_dimension if len(index) else 0)
        if witness_points.ndim != 2:
            raise ValueError(f"witnesses must be a 2D array of shape (N, d), got shape {witness_points.shape}")
        if len(index) and witness_points.shape[0] and witness_points.shape[1] != index.ambient_dimension:
            raise ValueError(
                f"witnesses live in R^{witness_points.shape[1]} but landmarks in R^{index.ambient_dimension}"
            )
        super().__init__(index, witness_points, len(index))
        self._landmarks = index.landmarks

    def get_point(self, vertex: LandmarkId) -> NDArray[np.float64]:
        """Coordinates of the landmark behind `vertex`."""
        return self._landmarks[vertex]


def build_witness_complex(
    landmarks: Any,
    witnesses: Any,
    config: Optional[Dict[str, Any]] = None,
) -> SimplexTreeSink:
    """Euclidean witness complex with parameters taken from `config`."""
    cfg = default_config()
    if config:
        cfg.update(config)

    wc = EuclideanWitnessComplex(
        landmarks,
        witnesses,
        leafsize=int(cfg["kdtree_leafsize"]),
        initial_neighbors=int(cfg["initial_neighbors"]),
    )
    return wc.create_simplex_tree(
        float(cfg["max_alpha_square"]),
        limit_dimension=cfg["limit_dimension"],
    )
