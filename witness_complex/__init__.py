"""witness_complex

(Weak) witness complexes: a filtered simplicial complex on a few landmark
points, whose simplices are voted in by a larger set of witness points.

The public API is intentionally small:

- default_config
- EuclideanWitnessComplex / WitnessComplex (create_complex, create_simplex_tree)
- build_witness_complex
- SimplexTreeSink (GUDHI-backed complex store)
- KdTreeLandmarkIndex, NearestLandmarkTable
- complex_summary, print_complex_summary
- complex_to_json, save_complex
"""

from .config import default_config
from .construction import EuclideanWitnessComplex, WitnessComplex, build_witness_complex
from .simplex_tree import SimplexTreeSink
from .spatial import KdTreeLandmarkIndex, NearestLandmarkTable
from .pretty import complex_summary, print_complex_summary
from .io import complex_to_json, save_complex

__all__ = [
    "default_config",
    "EuclideanWitnessComplex",
    "WitnessComplex",
    "build_witness_complex",
    "SimplexTreeSink",
    "KdTreeLandmarkIndex",
    "NearestLandmarkTable",
    "complex_summary",
    "print_complex_summary",
    "complex_to_json",
    "save_complex",
]
