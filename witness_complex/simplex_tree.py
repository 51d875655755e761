"""witness_complex.simplex_tree

The filtered simplicial complex the construction writes into.

Storage is delegated to GUDHI's SimplexTree; this adapter exposes the small
surface the witness construction consumes (find / filtration / insert /
dimension) with two rules the construction relies on:

- simplices are addressed by their sorted vertex tuple (the "handle")
- a simplex is inserted once; re-inserting an existing simplex is a no-op, so
  the filtration recorded at first insertion never changes
"""

from __future__ import annotations

from typing import Iterator, List, Optional, Sequence, Tuple

import gudhi

from .schema import Filtration, LandmarkId, Simplex


class SimplexTreeSink:
    def __init__(self, simplex_tree: Optional[gudhi.SimplexTree] = None):
        self._st = simplex_tree if simplex_tree is not None else gudhi.SimplexTree()
        self._dimension: Optional[int] = None

    @property
    def simplex_tree(self) -> gudhi.SimplexTree:
        """The underlying GUDHI SimplexTree (e.g. to compute persistence downstream)."""
        return self._st

    # -- consumed by the construction -------------------------------------

    def num_vertices(self) -> int:
        return int(self._st.num_vertices())

    def find(self, simplex: Sequence[LandmarkId]) -> Optional[Simplex]:
        handle = tuple(sorted(int(v) for v in simplex))
        if self._st.find(list(handle)):
            return handle
        return None

    def filtration(self, handle: Simplex) -> Filtration:
        return float(self._st.filtration(list(handle)))

    def insert_simplex(self, simplex: Sequence[LandmarkId], filtration: Filtration) -> bool:
        """Insert `simplex` with `filtration`; returns False if it was already there."""
        vertices = sorted(int(v) for v in simplex)
        if self._st.find(vertices):
            return False
        return bool(self._st.insert(vertices, filtration=float(filtration)))

    def set_dimension(self, dimension: int) -> None:
        """Record the dimension reached by the construction."""
        self._dimension = int(dimension)

    # -- read helpers -------------------------------------------------------

    @property
    def dimension(self) -> int:
        """Dimension recorded by the construction, else the largest simplex dimension."""
        if self._dimension is not None:
            return self._dimension
        return int(self._st.dimension())

    def num_simplices(self) -> int:
        return int(self._st.num_simplices())

    def get_simplices(self) -> Iterator[Tuple[Simplex, Filtration]]:
        for simplex, filt in self._st.get_simplices():
            yield tuple(sorted(int(v) for v in simplex)), float(filt)

    def simplices_of_dimension(self, dim: int) -> List[Tuple[Simplex, Filtration]]:
        return sorted((s, f) for s, f in self.get_simplices() if len(s) == dim + 1)

    def __contains__(self, simplex: Sequence[LandmarkId]) -> bool:
        return self.find(simplex) is not None

    def __len__(self) -> int:
        return self.num_simplices()
