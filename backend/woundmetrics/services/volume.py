"""
Approximate volume under a boundary.

The volume is modelled as a prism: the boundary's planar area times the
perpendicular depth of a user-selected reference point below (or above)
the boundary plane.

Note that the area comes from the smoothed boundary while the plane used
for the depth is fitted to the raw boundary.  Both are kept that way so
results stay comparable with earlier measurements.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

from .area import boundary_area_m2
from .constants import DEFAULT_SMOOTHING_ITERATIONS
from .plane_fit import fit_plane, point_to_plane_distance
from .vector_math import as_points

logger = logging.getLogger(__name__)


def boundary_depth_m(
    points: Iterable[Sequence[float]],
    reference: Optional[Sequence[float]],
) -> float:
    """Unsigned distance from ``reference`` to the raw boundary's plane.

    Returns 0.0 when there is no reference point or fewer than three
    boundary points.
    """
    pts = as_points(points)
    if len(pts) <= 2 or reference is None:
        return 0.0
    return point_to_plane_distance(reference, fit_plane(pts))


def boundary_volume_m3(
    points: Iterable[Sequence[float]],
    reference: Optional[Sequence[float]],
    iterations: int = DEFAULT_SMOOTHING_ITERATIONS,
    area_m2: Optional[float] = None,
) -> float:
    """Estimate the enclosed volume in cubic meters.

    Args:
        points: Ordered boundary points in meters.
        reference: The depth point, or ``None`` when the user has not
            picked one.
        iterations: Smoothing passes used for the area term.
        area_m2: Area already computed for the same boundary, reused
            instead of being recomputed.

    Returns:
        ``area_m2 * depth_m``, or 0.0 when the boundary has fewer than
        three points or ``reference`` is missing.
    """
    pts = as_points(points)
    if len(pts) <= 2 or reference is None:
        return 0.0
    if area_m2 is None:
        area_m2 = boundary_area_m2(pts, iterations=iterations)
    depth_m = boundary_depth_m(pts, reference)
    logger.debug("boundary_volume_m3: area=%.6f m2 depth=%.6f m", area_m2, depth_m)
    return area_m2 * depth_m
