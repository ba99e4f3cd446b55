"""
Corner-cutting (Chaikin) smoothing of closed boundaries.

The user-traced boundary is noisy and its corners are as sharp as the
tap positions that produced them.  One smoothing pass replaces every
edge ``(current, next)`` of the closed ring with two points placed at
one quarter and three quarters along the edge, which rounds off each
corner while keeping the polygon's overall shape.  A pass doubles the
number of points; passes can be chained.

Boundaries with two points or fewer are returned untouched, so callers
must not assume the output grew.
"""

from __future__ import annotations

import logging
import os
from typing import Iterable, Sequence

import numpy as np

from .constants import DEFAULT_SMOOTHING_ITERATIONS
from .vector_math import as_points

logger = logging.getLogger(__name__)


def chaikin_smooth_once(points: Iterable[Sequence[float]]) -> np.ndarray:
    """Apply a single corner-cutting pass to a closed polygon.

    For each index ``i`` the pair ``(points[i], points[(i + 1) % n])``
    contributes ``Q = 0.75 * current + 0.25 * next`` followed by
    ``R = 0.25 * current + 0.75 * next``.

    Args:
        points: Ordered boundary points, implicitly closed.

    Returns:
        An ``(2n, 3)`` array of smoothed points.
    """
    pts = as_points(points)
    if len(pts) == 0:
        return pts
    nxt = np.roll(pts, -1, axis=0)
    q = 0.75 * pts + 0.25 * nxt
    r = 0.25 * pts + 0.75 * nxt
    # Interleave Q and R so each edge keeps its position in the ring
    out = np.empty((2 * len(pts), 3), dtype=float)
    out[0::2] = q
    out[1::2] = r
    return out


def smooth_boundary(
    points: Iterable[Sequence[float]],
    iterations: int = DEFAULT_SMOOTHING_ITERATIONS,
) -> np.ndarray:
    """Smooth a closed boundary ``iterations`` times.

    Args:
        points: Ordered boundary points.
        iterations: Number of chained passes.  Zero or negative values
            leave the boundary unchanged.

    Returns:
        The smoothed ``(m, 3)`` array.  When the input has two points or
        fewer it is returned as-is (``m == n``).
    """
    result = as_points(points)
    n_in = len(result)
    if n_in <= 2:
        return result
    for _ in range(max(0, int(iterations))):
        result = chaikin_smooth_once(result)
    if os.getenv("METRICS_DEBUG"):
        logger.debug(
            "smooth_boundary: %d -> %d points after %d pass(es)",
            n_in,
            len(result),
            iterations,
        )
    return result
