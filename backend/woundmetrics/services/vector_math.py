"""
Small vector helpers used by every measurement service.

Points are handled as float64 NumPy arrays of shape ``(3,)`` and
boundaries as arrays of shape ``(n, 3)``.  Callers may pass plain
tuples, lists or pydantic-derived sequences; ``as_point`` and
``as_points`` coerce them once at the edge of each service.
"""

from __future__ import annotations

from typing import Iterable, Sequence

import numpy as np


def as_point(p: Sequence[float]) -> np.ndarray:
    """Coerce ``p`` into a float64 array of shape ``(3,)``.

    Raises:
        ValueError: If ``p`` does not hold exactly three coordinates.
    """
    arr = np.asarray(p, dtype=float).reshape(-1)
    if arr.shape != (3,):
        raise ValueError(f"Expected a 3D point, got shape {arr.shape}")
    return arr


def as_points(points: Iterable[Sequence[float]]) -> np.ndarray:
    """Coerce an ordered collection of points into an ``(n, 3)`` array.

    An empty input yields an empty ``(0, 3)`` array so that length checks
    downstream behave uniformly.
    """
    if isinstance(points, np.ndarray):
        arr = points.astype(float, copy=False)
    else:
        arr = np.asarray([as_point(p) for p in points], dtype=float)
    if arr.size == 0:
        return np.zeros((0, 3), dtype=float)
    if arr.ndim != 2 or arr.shape[1] != 3:
        raise ValueError(f"Expected an (n, 3) point array, got shape {arr.shape}")
    return arr


def distance(a: Sequence[float], b: Sequence[float]) -> float:
    """Euclidean distance between two points."""
    return float(np.linalg.norm(as_point(b) - as_point(a)))


def cross(a: Sequence[float], b: Sequence[float]) -> np.ndarray:
    return np.cross(as_point(a), as_point(b))


def dot(a: Sequence[float], b: Sequence[float]) -> float:
    return float(np.dot(as_point(a), as_point(b)))


def normalize(v: Sequence[float]) -> np.ndarray:
    """Return ``v`` scaled to unit length.

    A zero-length vector is returned unchanged (all zeros) instead of
    producing NaNs, so degenerate planes collapse areas and depths to 0.
    """
    arr = as_point(v)
    length = float(np.linalg.norm(arr))
    if length == 0.0:
        return np.zeros(3, dtype=float)
    return arr / length
