"""witness_complex.active_witness

Per-witness bookkeeping for the construction:

- NearestLandmarkCursor: a forward-only view over one witness's nearest
  landmark sequence. Pairs are pulled from the spatial index only when a
  position is first read and cached afterwards, so the search can revisit any
  position it has already reached without ever restarting the query.
- ActiveWitness: a witness still able to contribute simplices.
- ActiveWitnessSet: the witnesses still active in the current round.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, Iterator, List, Optional

from .schema import NearestLandmarkPair, NearestNeighborIndex


class NearestLandmarkCursor:
    def __init__(self, pairs: Iterable[NearestLandmarkPair]):
        self._source: Optional[Iterator[NearestLandmarkPair]] = iter(pairs)
        self._cache: List[NearestLandmarkPair] = []

    def __len__(self) -> int:
        """Number of pairs read from the index so far."""
        return len(self._cache)

    def pair_at(self, position: int) -> Optional[NearestLandmarkPair]:
        """Pair at `position`, or None once the landmarks are used up."""
        if position < 0:
            raise IndexError(f"cursor position must be non-negative, got {position}")
        while position >= len(self._cache):
            if self._source is None:
                return None
            try:
                self._cache.append(next(self._source))
            except StopIteration:
                self._source = None
                return None
        return self._cache[position]


class ActiveWitness:
    __slots__ = ("witness_id", "cursor")

    def __init__(self, witness_id: int, cursor: NearestLandmarkCursor):
        self.witness_id = witness_id
        self.cursor = cursor

    def __repr__(self) -> str:
        return f"ActiveWitness(witness_id={self.witness_id}, read={len(self.cursor)})"


class ActiveWitnessSet:
    """Witnesses that may still contribute simplices at the current dimension.

    Membership only changes through `filter_round`, which builds the next
    round's collection from scratch instead of erasing while iterating.
    """

    def __init__(self, witnesses: Iterable[Any], index: NearestNeighborIndex):
        self._active: List[ActiveWitness] = [
            ActiveWitness(w_id, NearestLandmarkCursor(index.query(w)))
            for w_id, w in enumerate(witnesses)
        ]

    def __len__(self) -> int:
        return len(self._active)

    def __bool__(self) -> bool:
        return bool(self._active)

    def filter_round(self, contributes: Callable[[ActiveWitness], bool]) -> int:
        """Run `contributes` on every active witness and keep those returning True.

        Every witness is visited, whatever the outcome for the others.
        Returns the number of witnesses dropped.
        """
        survivors: List[ActiveWitness] = []
        for aw in list(self._active):
            if contributes(aw):
                survivors.append(aw)
        dropped = len(self._active) - len(survivors)
        self._active = survivors
        return dropped
