"""witness_complex.schema

Lightweight data-model definitions used across the package.

We keep these as plain tuples / TypedDicts so that:
- results are JSON-serialisable with minimal fuss
- the library stays friendly to notebooks/scripts

The construction refers to:
- landmarks, identified by their position in the landmark list (LandmarkId)
- (landmark id, squared distance) pairs streamed per witness
- simplices (sorted tuples of landmark ids) with a filtration value
"""

from __future__ import annotations

from typing import Any, Dict, Iterator, List, Optional, Protocol, Sequence, Tuple, TypedDict


LandmarkId = int
Filtration = float
NearestLandmarkPair = Tuple[LandmarkId, float]   # (landmark id, squared distance)
Simplex = Tuple[LandmarkId, ...]                 # sorted, duplicate-free


# ---------------------------------------------------------------------------
# Collaborator capabilities
# ---------------------------------------------------------------------------

class NearestNeighborIndex(Protocol):
    """Enumerates all landmarks by non-decreasing squared distance to a witness."""

    def query(self, witness: Any) -> Iterator[NearestLandmarkPair]:
        ...


class SimplicialComplexForWitness(Protocol):
    """What the construction needs from the complex it fills."""

    def num_vertices(self) -> int:
        ...

    def find(self, simplex: Sequence[LandmarkId]) -> Optional[Simplex]:
        ...

    def filtration(self, handle: Simplex) -> Filtration:
        ...

    def insert_simplex(self, simplex: Sequence[LandmarkId], filtration: Filtration) -> bool:
        ...

    def set_dimension(self, dimension: int) -> None:
        ...


# ---------------------------------------------------------------------------
# Serialised output
# ---------------------------------------------------------------------------

class SimplexRecord(TypedDict):
    vertices: List[LandmarkId]
    dim: int
    filtration: Filtration


class ComplexSummary(TypedDict):
    num_vertices: int
    num_simplices: int
    dimension: int
    counts_by_dim: Dict[int, int]
    max_filtration: Filtration


class ComplexDocument(TypedDict, total=False):
    """A witness complex as written by `io.save_complex`."""
    summary: ComplexSummary
    simplices: List[SimplexRecord]
    config: Dict[str, Any]
    library_versions: Dict[str, str]
    notes: str
