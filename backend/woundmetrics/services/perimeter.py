"""
Perimeter of a closed boundary.

Two variants are exposed: the smoothed one used by the metrics
pipeline and an unsmoothed one used by the calibrated measurement path.
"""

from __future__ import annotations

from typing import Iterable, Sequence

import numpy as np

from .constants import DEFAULT_SMOOTHING_ITERATIONS
from .smoothing import smooth_boundary
from .vector_math import as_points


def closed_perimeter(points: Iterable[Sequence[float]]) -> float:
    """Sum of edge lengths around a closed ring.

    Consecutive points are joined in order and the last point is joined
    back to the first.  Returns 0.0 for fewer than two points.
    """
    pts = as_points(points)
    if len(pts) <= 1:
        return 0.0
    edges = np.diff(pts, axis=0)
    total = float(np.linalg.norm(edges, axis=1).sum())
    # Close the ring
    total += float(np.linalg.norm(pts[0] - pts[-1]))
    return total


def boundary_perimeter_m(
    points: Iterable[Sequence[float]],
    iterations: int = DEFAULT_SMOOTHING_ITERATIONS,
) -> float:
    """Perimeter in meters after smoothing the boundary."""
    return closed_perimeter(smooth_boundary(points, iterations=iterations))


def perimeter_in_meters(points: Iterable[Sequence[float]]) -> float:
    """Perimeter in meters of the raw, unsmoothed boundary."""
    return closed_perimeter(points)
