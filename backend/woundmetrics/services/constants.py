"""
Tunable constants shared by the measurement services.

All internal geometry is expressed in meters.  The conversion factors
below are applied once, when a result leaves the pipeline, so that
intermediate values never get converted twice.
"""

from __future__ import annotations

from typing import Tuple

# Number of corner-cutting passes applied before perimeter and area.
DEFAULT_SMOOTHING_ITERATIONS: int = 1

# A new result is emitted only when one of the three metrics moved by
# more than this amount (in output units: cm, cm², cm³).
CHANGE_THRESHOLD: float = 0.1

# Two calibration points closer than this (meters) are ignored.
CALIBRATION_MIN_DISTANCE: float = 0.001

# Normal returned when fewer than three points are available.
FALLBACK_NORMAL: Tuple[float, float, float] = (0.0, 1.0, 0.0)

# Above this |normal.x| the helper axis switches from X to Y when
# building the in-plane basis.
HELPER_AXIS_SWITCH: float = 0.9

# Output unit conversions.
M_TO_CM: float = 100.0
M2_TO_CM2: float = 10_000.0
M3_TO_CM3: float = 1_000_000.0
