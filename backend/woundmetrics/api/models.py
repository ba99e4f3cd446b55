"""
Pydantic data models for the wound metrics API.

These models define the shapes of requests and responses used by the
backend.  All coordinates are in meters; reported metrics are in
centimeters, square centimeters and cubic centimeters.
"""

from __future__ import annotations

from typing import Any, Dict, List

from pydantic import BaseModel, Field


class Point3(BaseModel):
    """Single 3D point in meters.  NaN and infinite coordinates are rejected."""

    x: float = Field(..., allow_inf_nan=False)
    y: float = Field(..., allow_inf_nan=False)
    z: float = Field(..., allow_inf_nan=False)

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)


class SessionCreateRequest(BaseModel):
    """Optional parameters when opening a measurement session."""

    smoothingIterations: int = Field(
        default=1,
        ge=0,
        le=8,
        description="Corner-cutting passes applied before perimeter and area",
    )


class MetricsValues(BaseModel):
    """Perimeter, area and volume of a boundary."""

    perimeterCm: float = Field(..., description="Closed boundary length in centimeters")
    areaCm2: float = Field(..., description="Projected planar area in square centimeters")
    volumeCm3: float = Field(..., description="Area times depth in cubic centimeters")


class SessionInfo(BaseModel):
    """State of a measurement session."""

    sessionId: str = Field(..., description="Unique identifier for the session")
    smoothingIterations: int = Field(..., description="Smoothing passes used by this session")
    pointCount: int = Field(default=0, description="Number of boundary points currently set")
    referencePoint: Point3 | None = Field(
        default=None, description="Depth point used for the volume estimate"
    )
    calibrationScale: float = Field(
        default=1.0, description="Scale factor applied by the scaled measurement queries"
    )
    lastMetrics: MetricsValues | None = Field(
        default=None, description="Most recently emitted metrics, if any"
    )


class BoundaryUpdateRequest(BaseModel):
    """Request body replacing a session's boundary and depth point."""

    points: List[Point3] = Field(
        ..., description="Ordered boundary points; the last point connects back to the first"
    )
    referencePoint: Point3 | None = Field(
        default=None, description="Optional depth point for the volume estimate"
    )
    resetBaseline: bool = Field(
        default=False,
        description="Forget the last emitted metrics so the next computation is always emitted",
    )


class MetricsResponse(BaseModel):
    """Result of a gated computation.

    ``metrics`` is null when the change from the last emitted result is
    below the significance threshold.
    """

    sessionId: str = Field(..., description="Identifier of the session")
    emitted: bool = Field(..., description="Whether a new result was emitted")
    metrics: MetricsValues | None = Field(
        default=None, description="The new metrics, or null when suppressed"
    )
    metadata: Dict[str, Any] = Field(
        default_factory=dict,
        description="Diagnostics such as point counts and the fitted plane normal",
    )


class OneShotMetricsRequest(BaseModel):
    """Request body for a stateless metrics computation."""

    points: List[Point3] = Field(..., description="Ordered boundary points")
    referencePoint: Point3 | None = Field(default=None, description="Optional depth point")
    smoothingIterations: int = Field(default=1, ge=0, le=8)


class CalibrationRequest(BaseModel):
    """Known length of the reference spanned by the first two boundary points."""

    knownLength: float = Field(
        ..., gt=0.0, allow_inf_nan=False, description="Real-world length in meters"
    )


class CalibrationResponse(BaseModel):
    calibrationScale: float = Field(..., description="Scale factor after the request")
    applied: bool = Field(
        ..., description="False when the reference points were too close to calibrate"
    )


class ScaledDistanceRequest(BaseModel):
    a: Point3
    b: Point3


class ScaledLengthResponse(BaseModel):
    """A length in meters after applying the calibration scale."""

    value: float = Field(..., description="Calibrated length in meters")
    calibrationScale: float = Field(..., description="Scale factor that was applied")
