"""Summary + pretty-print helpers for built complexes.

This module keeps presentation logic out of the construction so it stays
easy to extend.
"""

from __future__ import annotations

from typing import Dict

from .schema import ComplexSummary
from .simplex_tree import SimplexTreeSink


def complex_summary(sink: SimplexTreeSink) -> ComplexSummary:
    """Counts per dimension plus the largest filtration value."""
    counts: Dict[int, int] = {}
    max_filtration = 0.0
    for simplex, filt in sink.get_simplices():
        dim = len(simplex) - 1
        counts[dim] = counts.get(dim, 0) + 1
        max_filtration = max(max_filtration, filt)
    return {
        "num_vertices": sink.num_vertices(),
        "num_simplices": sink.num_simplices(),
        "dimension": sink.dimension,
        "counts_by_dim": dict(sorted(counts.items())),
        "max_filtration": max_filtration,
    }


def print_complex_summary(sink: SimplexTreeSink, max_simplices: int = 0) -> None:
    """Print a compact table of simplex counts (and optionally the first simplices by filtration)."""
    summary = complex_summary(sink)
    if summary["num_simplices"] == 0:
        print("(empty complex)")
        return

    print("=" * 40)
    print("WITNESS COMPLEX")
    print("=" * 40)
    print(f"  vertices:       {summary['num_vertices']}")
    print(f"  simplices:      {summary['num_simplices']}")
    print(f"  dimension:      {summary['dimension']}")
    print(f"  max filtration: {summary['max_filtration']:.4f}")
    print()
    print(f"  {'dim':>3}  {'count':>8}")
    for dim, count in summary["counts_by_dim"].items():
        print(f"  {dim:>3}  {count:>8}")

    if max_simplices > 0:
        print()
        rows = sorted(sink.get_simplices(), key=lambda sf: (sf[1], len(sf[0]), sf[0]))
        for simplex, filt in rows[:max_simplices]:
            print(f"  {filt:8.4f}  {list(simplex)}")
        if len(rows) > max_simplices:
            print(f"  ... ({len(rows) - max_simplices} more)")
