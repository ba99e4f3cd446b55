"""
Planar area of a captured boundary.

The boundary is smoothed, a plane is fitted to the smoothed points and
each point is projected into a 2D coordinate system lying on that
plane.  The enclosed area is then the absolute value of the shoelace
sum over the projected polygon.

Everything here works in the caller's length unit (meters in, square
meters out).  Conversion to output units happens in the metrics
calculator only.
"""

from __future__ import annotations

import logging
from typing import Iterable, Sequence, Tuple

import numpy as np

from .constants import DEFAULT_SMOOTHING_ITERATIONS, HELPER_AXIS_SWITCH
from .plane_fit import fit_plane
from .smoothing import smooth_boundary
from .vector_math import as_point, as_points, normalize

logger = logging.getLogger(__name__)


def plane_basis(normal: Sequence[float]) -> Tuple[np.ndarray, np.ndarray]:
    """Build an orthonormal ``(right, forward)`` basis on a plane.

    A helper axis is crossed with the unit normal to obtain ``right``;
    X is used unless the normal is nearly parallel to it, in which case
    Y is used instead.  ``forward`` completes the right-handed frame.

    Args:
        normal: Plane normal of any length.

    Returns:
        Two vectors spanning the plane.  Both are zero when ``normal``
        is zero.
    """
    up = normalize(normal)
    if abs(up[0]) < HELPER_AXIS_SWITCH:
        helper = np.array([1.0, 0.0, 0.0])
    else:
        helper = np.array([0.0, 1.0, 0.0])
    right = normalize(np.cross(up, helper))
    forward = np.cross(up, right)
    return right, forward


def project_to_plane(
    points: Iterable[Sequence[float]],
    origin: Sequence[float],
    right: Sequence[float],
    forward: Sequence[float],
) -> np.ndarray:
    """Express each point in the 2D frame ``(origin, right, forward)``.

    Returns:
        An ``(n, 2)`` array of ``(u, v)`` coordinates.
    """
    pts = as_points(points)
    rel = pts - as_point(origin)
    basis = np.stack([as_point(right), as_point(forward)], axis=1)
    return rel @ basis


def polygon_area_2d(points_uv: Sequence[Sequence[float]]) -> float:
    """Signed shoelace area of a closed ring of (u, v) points.

    Counter-clockwise rings are positive.  Fewer than three points give 0.0.
    """
    uv = np.asarray(points_uv, dtype=float).reshape(-1, 2)
    if len(uv) < 3:
        return 0.0
    u, v = uv[:, 0], uv[:, 1]
    return 0.5 * float(np.sum(u * np.roll(v, -1) - np.roll(u, -1) * v))


def boundary_area_m2(
    points: Iterable[Sequence[float]],
    iterations: int = DEFAULT_SMOOTHING_ITERATIONS,
) -> float:
    """Area enclosed by a boundary, projected onto its fitted plane.

    Args:
        points: Ordered boundary points in meters.
        iterations: Smoothing passes applied before fitting.

    Returns:
        Unsigned area in square meters; 0.0 when fewer than three points
        remain after smoothing.
    """
    smoothed = smooth_boundary(points, iterations=iterations)
    if len(smoothed) <= 2:
        return 0.0
    plane = fit_plane(smoothed)
    if plane.is_degenerate:
        logger.debug("boundary_area_m2: degenerate plane normal, area collapses to 0")
    right, forward = plane_basis(plane.normal)
    uv = project_to_plane(smoothed, plane.origin, right, forward)
    return abs(polygon_area_2d(uv))
