"""witness_complex.utils

Point arithmetic and small helpers used throughout the codebase.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import NDArray


def as_point_array(points: Any, name: str = "points") -> NDArray[np.float64]:
    """Coerce a sequence of coordinate vectors into an (N, d) float array."""
    arr = np.asarray(points, dtype=np.float64)
    if arr.ndim == 1 and arr.size == 0:
        return arr.reshape(0, 0)
    if arr.ndim != 2:
        raise ValueError(f"{name} must be a 2D array of shape (N, d), got shape {arr.shape}")
    return arr


def squared_distances(points: NDArray[np.float64], point: NDArray[np.float64]) -> NDArray[np.float64]:
    """Squared Euclidean distance from each row of `points` to `point`, without a square root."""
    diff = np.asarray(points, dtype=np.float64) - np.asarray(point, dtype=np.float64)
    return (diff * diff).sum(axis=-1)


def to_jsonable(obj: Any) -> Any:
    """Recursively convert numpy types into JSON-friendly python types."""
    if isinstance(obj, (str, int, float, bool)) or obj is None:
        return obj
    if isinstance(obj, dict):
        return {str(k): to_jsonable(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [to_jsonable(v) for v in obj]
    if isinstance(obj, np.ndarray):
        return obj.tolist()
    if isinstance(obj, (np.floating,)):
        return float(obj)
    if isinstance(obj, (np.integer,)):
        return int(obj)
    # fall back to string
    return str(obj)
