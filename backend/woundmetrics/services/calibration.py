"""
Scale calibration from a reference object of known length.

The user marks the two ends of an object whose real length is known.
The ratio of the known length to the measured distance gives a scale
factor that can be applied to later distance queries.
"""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from .constants import CALIBRATION_MIN_DISTANCE
from .vector_math import as_points, distance


def compute_calibration_scale(
    points: Iterable[Sequence[float]],
    known_length: float,
    min_distance: float = CALIBRATION_MIN_DISTANCE,
) -> Optional[float]:
    """Derive a scale factor from the first two points.

    Args:
        points: Ordered points; only ``points[0]`` and ``points[1]`` are
            used.
        known_length: Real-world distance between those points (meters).
        min_distance: Measured distances at or below this value are too
            small to calibrate against.

    Returns:
        ``known_length / measured`` or ``None`` when there are fewer than
        two points or the measured distance is too small.
    """
    pts = as_points(points)
    if len(pts) < 2:
        return None
    measured = distance(pts[0], pts[1])
    if measured > min_distance:
        return float(known_length) / measured
    return None
