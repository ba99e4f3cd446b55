"""
Routes for measurement sessions.

A capture client opens a session, pushes the boundary the user traced
(and optionally the depth point they picked), then asks for metrics as
often as it likes.  The session remembers the last result it handed
out and only returns a new one when perimeter, area or volume moved by
more than the significance threshold, so a client polling on every
frame is not flooded with identical numbers.

Every endpoint that takes a session lock is declared with plain ``def``
so FastAPI runs it on its worker threadpool; waiting on a lock there
never stalls the event loop.  Each session's lock is held for the
duration of a call, which keeps concurrent requests for the same
session from interleaving.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException

from .models import (
    BoundaryUpdateRequest,
    CalibrationRequest,
    CalibrationResponse,
    MetricsResponse,
    MetricsValues,
    OneShotMetricsRequest,
    Point3,
    ScaledDistanceRequest,
    ScaledLengthResponse,
    SessionCreateRequest,
    SessionInfo,
)
from ..services.metrics_calculator import Metrics, compute_metrics_for
from ..services.session_store import (
    MeasurementSession,
    create_session as create_session_entry,
    delete_session as delete_session_entry,
    get_session,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _require_session(session_id: str) -> MeasurementSession:
    session = get_session(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return session


def _metrics_values(metrics: Optional[Metrics]) -> Optional[MetricsValues]:
    if metrics is None:
        return None
    return MetricsValues(
        perimeterCm=metrics.perimeter_cm,
        areaCm2=metrics.area_cm2,
        volumeCm3=metrics.volume_cm3,
    )


def _session_info(session: MeasurementSession) -> SessionInfo:
    calc = session.calculator
    reference = None
    if calc.reference_point is not None:
        x, y, z = (float(v) for v in calc.reference_point)
        reference = Point3(x=x, y=y, z=z)
    return SessionInfo(
        sessionId=session.session_id,
        smoothingIterations=calc.smoothing_iterations,
        pointCount=int(len(calc.boundary_points)),
        referencePoint=reference,
        calibrationScale=calc.calibration_scale,
        lastMetrics=_metrics_values(calc.last_metrics),
    )


@router.post("/sessions", response_model=SessionInfo, status_code=201)
async def create_session(body: Optional[SessionCreateRequest] = None) -> SessionInfo:
    """Open a new measurement session.

    Args:
        body: Optional settings; the smoothing iteration count defaults
            to a single pass.

    Returns:
        SessionInfo: The empty session, including its identifier.
    """
    params = body or SessionCreateRequest()
    session = create_session_entry(smoothing_iterations=params.smoothingIterations)
    logger.info("Opened session %s", session.session_id)
    return _session_info(session)


@router.get("/sessions/{session_id}", response_model=SessionInfo)
def read_session(session_id: str) -> SessionInfo:
    """Return the current state of a session.

    Raises:
        HTTPException: If the session does not exist.
    """
    session = _require_session(session_id)
    with session.lock:
        return _session_info(session)


@router.delete("/sessions/{session_id}", status_code=204)
async def delete_session(session_id: str) -> None:
    """Close a session and discard its calibration and last metrics."""
    if not delete_session_entry(session_id):
        raise HTTPException(status_code=404, detail="Session not found")


@router.put("/sessions/{session_id}/boundary", response_model=SessionInfo)
def update_boundary(session_id: str, body: BoundaryUpdateRequest) -> SessionInfo:
    """Replace the boundary points and depth point of a session."""
    session = _require_session(session_id)
    reference = body.referencePoint.as_tuple() if body.referencePoint is not None else None
    with session.lock:
        session.calculator.set_boundary(
            [p.as_tuple() for p in body.points],
            reference_point=reference,
        )
        if body.resetBaseline:
            session.calculator.reset_baseline()
        return _session_info(session)


@router.post("/sessions/{session_id}/metrics", response_model=MetricsResponse)
def calculate_session_metrics(session_id: str) -> MetricsResponse:
    """Compute metrics for the session's boundary.

    The result is only returned when it differs significantly from the
    last one returned for this session; otherwise ``emitted`` is false
    and ``metrics`` is null.
    """
    session = _require_session(session_id)
    with session.lock:
        try:
            result = session.calculator.calculate_metrics()
            meta = session.calculator.describe()
        except Exception as exc:
            logger.exception("metrics computation failed for session_id=%s: %s", session_id, exc)
            raise HTTPException(status_code=500, detail=f"Failed to compute metrics: {exc}")
    if result is None:
        logger.debug("Session %s: result suppressed", session_id)
    return MetricsResponse(
        sessionId=session_id,
        emitted=result is not None,
        metrics=_metrics_values(result),
        metadata=meta,
    )


@router.post("/sessions/{session_id}/calibration", response_model=CalibrationResponse)
def calibrate_session(session_id: str, body: CalibrationRequest) -> CalibrationResponse:
    """Calibrate against the first two boundary points.

    If those points are missing or nearly coincide the previous scale is
    kept and ``applied`` is false.
    """
    session = _require_session(session_id)
    with session.lock:
        applied = session.calculator.calibrate_with_known_length(body.knownLength)
        return CalibrationResponse(
            calibrationScale=session.calculator.calibration_scale,
            applied=applied,
        )


@router.post("/sessions/{session_id}/scaled-distance", response_model=ScaledLengthResponse)
def scaled_distance(session_id: str, body: ScaledDistanceRequest) -> ScaledLengthResponse:
    """Distance between two points, corrected by the session's calibration."""
    session = _require_session(session_id)
    with session.lock:
        calc = session.calculator
        value = calc.scaled_distance(body.a.as_tuple(), body.b.as_tuple())
        return ScaledLengthResponse(value=value, calibrationScale=calc.calibration_scale)


@router.get("/sessions/{session_id}/scaled-perimeter", response_model=ScaledLengthResponse)
def scaled_perimeter(session_id: str) -> ScaledLengthResponse:
    """Unsmoothed boundary perimeter, corrected by the session's calibration."""
    session = _require_session(session_id)
    with session.lock:
        calc = session.calculator
        return ScaledLengthResponse(
            value=calc.scaled_perimeter(),
            calibrationScale=calc.calibration_scale,
        )


@router.post("/metrics", response_model=MetricsValues)
def calculate_metrics_once(body: OneShotMetricsRequest) -> MetricsValues:
    """Compute metrics for a boundary without opening a session.

    No change gating applies; the result is always returned.
    """
    reference = body.referencePoint.as_tuple() if body.referencePoint is not None else None
    try:
        metrics = compute_metrics_for(
            [p.as_tuple() for p in body.points],
            reference,
            smoothing_iterations=body.smoothingIterations,
        )
    except Exception as exc:
        logger.exception("one-shot metrics computation failed: %s", exc)
        raise HTTPException(status_code=500, detail=f"Failed to compute metrics: {exc}")
    return _metrics_values(metrics)
