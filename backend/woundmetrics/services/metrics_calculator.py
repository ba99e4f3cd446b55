"""
Computation context for wound measurements.

``MetricsCalculator`` holds everything a measurement session needs
between calls: the user-traced boundary, the optional depth point, an
opaque handle to the scan the points came from, the calibration scale
and the last metrics that were handed out.  Only the calibration scale
and the last metrics change as a side effect of calling into it; the
host replaces the boundary and the depth point directly.

The calculator performs no locking.  A host that shares an instance
between threads must serialise calls itself (see ``session_store``).

Typical usage::

    calc = MetricsCalculator()
    calc.set_boundary(points, reference_point=depth_point)
    result = calc.calculate_metrics()
    if result is not None:
        show(result.perimeter_cm, result.area_cm2, result.volume_cm3)
"""

from __future__ import annotations

import logging
from typing import Any, Dict, NamedTuple, Optional, Protocol, Sequence

import numpy as np

from .area import boundary_area_m2
from .calibration import compute_calibration_scale
from .constants import (
    CHANGE_THRESHOLD,
    DEFAULT_SMOOTHING_ITERATIONS,
    M2_TO_CM2,
    M3_TO_CM3,
    M_TO_CM,
)
from .perimeter import boundary_perimeter_m, perimeter_in_meters
from .plane_fit import fit_plane
from .smoothing import smooth_boundary
from .vector_math import as_point, as_points, distance
from .volume import boundary_volume_m3

logger = logging.getLogger(__name__)


class ScanDataSource(Protocol):
    """Opaque handle to the scan a boundary was captured from.

    The calculator stores it for the host's convenience and never reads
    from it; only the boundary and reference points feed the math.
    """


class Metrics(NamedTuple):
    """Perimeter (cm), area (cm²) and volume (cm³) of a boundary."""

    perimeter_cm: float
    area_cm2: float
    volume_cm3: float


def compute_metrics_for(
    points: Sequence[Sequence[float]],
    reference_point: Optional[Sequence[float]] = None,
    smoothing_iterations: int = DEFAULT_SMOOTHING_ITERATIONS,
) -> Metrics:
    """Run the full pipeline on a boundary without any session state.

    Args:
        points: Ordered boundary points in meters.
        reference_point: Optional depth point in meters.
        smoothing_iterations: Passes applied before perimeter and area.

    Returns:
        The output-unit :class:`Metrics`.
    """
    pts = as_points(points)
    perimeter_m = boundary_perimeter_m(pts, iterations=smoothing_iterations)
    area_m2 = boundary_area_m2(pts, iterations=smoothing_iterations)
    # Volume reuses the m² area to avoid converting it back from cm²
    volume_m3 = boundary_volume_m3(
        pts, reference_point, iterations=smoothing_iterations, area_m2=area_m2
    )
    return Metrics(
        perimeter_cm=perimeter_m * M_TO_CM,
        area_cm2=area_m2 * M2_TO_CM2,
        volume_cm3=volume_m3 * M3_TO_CM3,
    )


class MetricsCalculator:
    """Stateful measurement context for one capture session.

    Attributes:
        boundary_points: Ordered ``(n, 3)`` boundary in meters.
        reference_point: Optional depth point in meters.
        scan_source: Opaque scan handle supplied by the host.
        smoothing_iterations: Passes applied before perimeter and area.
        change_threshold: Minimum per-metric change (output units) for a
            new result to be emitted.
        calibration_scale: Factor applied by the scaled queries only.
        last_metrics: Most recently emitted result, ``None`` until the
            first emission.
    """

    def __init__(
        self,
        smoothing_iterations: int = DEFAULT_SMOOTHING_ITERATIONS,
        change_threshold: float = CHANGE_THRESHOLD,
        scan_source: Optional[ScanDataSource] = None,
    ) -> None:
        self.boundary_points: np.ndarray = as_points([])
        self.reference_point: Optional[np.ndarray] = None
        self.scan_source: Optional[ScanDataSource] = scan_source
        self.smoothing_iterations = smoothing_iterations
        self.change_threshold = change_threshold
        self.calibration_scale: float = 1.0
        self.last_metrics: Optional[Metrics] = None

    # ------------------------------------------------------------------
    # Inputs

    def set_boundary(
        self,
        points: Sequence[Sequence[float]],
        reference_point: Optional[Sequence[float]] = None,
    ) -> None:
        """Replace the boundary and the depth point."""
        self.boundary_points = as_points(points)
        self.reference_point = None if reference_point is None else as_point(reference_point)

    def reset_baseline(self) -> None:
        """Forget the last emitted metrics so the next result is emitted."""
        self.last_metrics = None

    # ------------------------------------------------------------------
    # Primary pipeline

    def compute_metrics(self) -> Metrics:
        """Compute perimeter, area and volume without touching the gate."""
        return compute_metrics_for(
            self.boundary_points,
            self.reference_point,
            smoothing_iterations=self.smoothing_iterations,
        )

    def has_significant_change(self, metrics: Metrics) -> bool:
        """Whether ``metrics`` differs enough from the last emitted result.

        Always true before anything has been emitted.
        """
        last = self.last_metrics
        if last is None:
            return True
        return any(
            abs(old - new) > self.change_threshold
            for old, new in zip(last, metrics)
        )

    def calculate_metrics(self) -> Optional[Metrics]:
        """Compute metrics and emit them only when they changed enough.

        Returns:
            The new :class:`Metrics` when emitted, otherwise ``None``.  A
            suppressed result leaves the stored baseline untouched.
        """
        metrics = self.compute_metrics()
        if not self.has_significant_change(metrics):
            logger.debug("calculate_metrics: change below threshold, result suppressed")
            return None
        self.last_metrics = metrics
        return metrics

    def describe(self) -> Dict[str, Any]:
        """Diagnostics about the current inputs.

        Reports point counts before and after smoothing and the plane
        normals used for area and for depth, flagging degenerate ones.
        """
        smoothed = smooth_boundary(self.boundary_points, iterations=self.smoothing_iterations)
        area_plane = fit_plane(smoothed)
        depth_plane = fit_plane(self.boundary_points)
        return {
            "pointCount": int(len(self.boundary_points)),
            "smoothedPointCount": int(len(smoothed)),
            "smoothingIterations": self.smoothing_iterations,
            "hasReferencePoint": self.reference_point is not None,
            "planeNormal": area_plane.normal.tolist(),
            "depthPlaneNormal": depth_plane.normal.tolist(),
            "degenerateNormal": bool(
                len(smoothed) >= 3 and area_plane.is_degenerate
            ),
        }

    # ------------------------------------------------------------------
    # Calibrated measurements

    def calibrate_with_known_length(self, known_length: float) -> bool:
        """Derive the calibration scale from the first two boundary points.

        Args:
            known_length: Real-world distance between ``boundary_points[0]``
                and ``boundary_points[1]`` in meters.

        Returns:
            True when the scale was updated.  When there are fewer than
            two points or they nearly coincide the previous scale is kept.
        """
        scale = compute_calibration_scale(self.boundary_points, known_length)
        if scale is None:
            logger.debug("calibrate_with_known_length: skipped, reference too short")
            return False
        self.calibration_scale = scale
        logger.info("Calibrated. scale factor = %s", scale)
        return True

    def scaled_distance(self, p1: Sequence[float], p2: Sequence[float]) -> float:
        """Distance between two points in meters, times the calibration scale."""
        return distance(p1, p2) * self.calibration_scale

    def scaled_perimeter(self) -> float:
        """Unsmoothed boundary perimeter in meters, times the calibration scale."""
        return perimeter_in_meters(self.boundary_points) * self.calibration_scale
