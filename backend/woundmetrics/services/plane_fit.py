"""
Plane estimation for captured boundaries.

A boundary traced on a scanned surface is treated as lying on a single
plane.  The plane is estimated coarsely: its origin is the first point
and its normal is the cross product of the edges from the first point
to the second and third.  No averaging over the remaining points is
performed, so noisy or collinear leading points degrade the estimate;
the downstream area and depth then shrink towards zero rather than
failing.

The ``Plane`` value mirrors the origin/normal pair used elsewhere in the
services.  Its normal is not necessarily unit length; helpers that need
a unit normal normalise it themselves.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Iterable, Sequence

import numpy as np

from .constants import FALLBACK_NORMAL
from .vector_math import as_point, as_points, normalize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Plane:
    """A plane in 3D space.

    Attributes:
        origin: A point on the plane (meters).
        normal: A vector perpendicular to the plane.  May be of any
            length, including zero for degenerate input.
    """

    origin: np.ndarray
    normal: np.ndarray

    @property
    def is_degenerate(self) -> bool:
        """True when the normal has no usable direction."""
        return float(np.linalg.norm(self.normal)) == 0.0


def best_fit_normal(points: Iterable[Sequence[float]]) -> np.ndarray:
    """Estimate a plane normal from the first three points.

    Args:
        points: Ordered points.  Only the first three are used.

    Returns:
        ``(P1 - P0) x (P2 - P0)`` without normalisation, or the fixed
        fallback ``(0, 1, 0)`` when fewer than three points are given.
    """
    pts = as_points(points)
    if len(pts) < 3:
        return np.asarray(FALLBACK_NORMAL, dtype=float)
    v1 = pts[1] - pts[0]
    v2 = pts[2] - pts[0]
    return np.cross(v1, v2)


def fit_plane(points: Iterable[Sequence[float]]) -> Plane:
    """Build a :class:`Plane` from an ordered boundary.

    The origin is the first point and the normal comes from
    :func:`best_fit_normal`.  An empty boundary yields a plane through
    the coordinate origin.
    """
    pts = as_points(points)
    origin = pts[0].copy() if len(pts) else np.zeros(3, dtype=float)
    plane = Plane(origin=origin, normal=best_fit_normal(pts))
    if os.getenv("METRICS_DEBUG"):
        logger.debug(
            "fit_plane: origin=%s normal=%s degenerate=%s",
            plane.origin.tolist(),
            plane.normal.tolist(),
            plane.is_degenerate,
        )
    return plane


def point_to_plane_distance(point: Sequence[float], plane: Plane) -> float:
    """Unsigned perpendicular distance from ``point`` to ``plane``.

    A point behind the plane reports the same depth as its mirror image
    in front of it.
    """
    diff = as_point(point) - plane.origin
    n = normalize(plane.normal)
    return abs(float(np.dot(diff, n)))
