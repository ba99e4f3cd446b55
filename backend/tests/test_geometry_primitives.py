"""
Tests for the vector helpers, plane fitting and the in-plane basis.

These exercise the low-level pieces every metric is built on: point
coercion, the unit-length helper's behaviour on zero vectors, the
three-point normal estimate with its fallback, and unsigned
point-to-plane distances.
"""

from __future__ import annotations

import math
import sys
from pathlib import Path

import numpy as np
import pytest

# Make the backend package importable when running tests directly via pytest
sys.path.append(str(Path(__file__).resolve().parents[1]))

from woundmetrics.services.area import plane_basis
from woundmetrics.services.plane_fit import (
    Plane,
    best_fit_normal,
    fit_plane,
    point_to_plane_distance,
)
from woundmetrics.services.vector_math import (
    as_point,
    as_points,
    cross,
    distance,
    dot,
    normalize,
)


def test_as_point_rejects_wrong_dimension() -> None:
    with pytest.raises(ValueError):
        as_point((1.0, 2.0))


def test_as_points_empty_has_three_columns() -> None:
    pts = as_points([])
    assert pts.shape == (0, 3)


def test_distance_cross_dot() -> None:
    assert math.isclose(distance((0, 0, 0), (3, 4, 0)), 5.0)
    assert np.allclose(cross((1, 0, 0), (0, 1, 0)), (0, 0, 1))
    assert math.isclose(dot((1, 2, 3), (4, 5, 6)), 32.0)


def test_normalize_unit_and_zero() -> None:
    """Non-zero vectors become unit length; the zero vector stays zero."""
    n = normalize((0.0, 3.0, 4.0))
    assert math.isclose(float(np.linalg.norm(n)), 1.0)
    assert np.allclose(n, (0.0, 0.6, 0.8))
    z = normalize((0.0, 0.0, 0.0))
    assert np.all(z == 0.0)
    assert not np.any(np.isnan(z))


def test_best_fit_normal_fallback_for_short_input() -> None:
    """Fewer than three points yield the fixed (0, 1, 0) normal."""
    assert np.allclose(best_fit_normal([]), (0.0, 1.0, 0.0))
    assert np.allclose(best_fit_normal([(0, 0, 0), (1, 0, 0)]), (0.0, 1.0, 0.0))


def test_best_fit_normal_uses_first_three_points_unnormalised() -> None:
    """Only the first three points matter and the result keeps its length."""
    pts = [(0, 0, 0), (2, 0, 0), (0, 3, 0), (5, 5, 9), (-4, 2, 7)]
    assert np.allclose(best_fit_normal(pts), (0.0, 0.0, 6.0))


def test_best_fit_normal_collinear_is_zero() -> None:
    pts = [(0, 0, 0), (1, 0, 0), (2, 0, 0)]
    assert np.allclose(best_fit_normal(pts), (0.0, 0.0, 0.0))
    assert fit_plane(pts).is_degenerate


def test_fit_plane_origin_is_first_point() -> None:
    plane = fit_plane([(1, 2, 3), (2, 2, 3), (1, 3, 3)])
    assert np.allclose(plane.origin, (1, 2, 3))
    assert np.allclose(plane.normal, (0, 0, 1))
    assert not plane.is_degenerate


def test_point_to_plane_distance_is_unsigned() -> None:
    """Points on either side of the plane report the same depth."""
    plane = Plane(origin=np.zeros(3), normal=np.array([0.0, 0.0, 2.0]))
    assert math.isclose(point_to_plane_distance((1.0, 1.0, -0.3), plane), 0.3)
    assert math.isclose(point_to_plane_distance((1.0, 1.0, 0.3), plane), 0.3)


@pytest.mark.parametrize(
    "normal",
    [(0.0, 0.0, 1.0), (1.0, 0.0, 0.0), (0.95, 0.1, 0.0), (0.2, -0.7, 0.4)],
)
def test_plane_basis_is_orthonormal(normal: tuple[float, float, float]) -> None:
    """``right`` and ``forward`` are unit length, orthogonal and in-plane."""
    right, forward = plane_basis(normal)
    up = normalize(normal)
    assert math.isclose(float(np.linalg.norm(right)), 1.0, rel_tol=1e-9)
    assert math.isclose(float(np.linalg.norm(forward)), 1.0, rel_tol=1e-9)
    assert abs(float(np.dot(right, forward))) < 1e-9
    assert abs(float(np.dot(right, up))) < 1e-9
    assert abs(float(np.dot(forward, up))) < 1e-9


def test_plane_basis_switches_helper_axis_near_x() -> None:
    """A normal along X uses Y as helper, giving right = +Z."""
    right, forward = plane_basis((1.0, 0.0, 0.0))
    assert np.allclose(right, (0.0, 0.0, 1.0))
    assert np.allclose(forward, (0.0, -1.0, 0.0))


def test_plane_basis_of_zero_normal_is_zero() -> None:
    right, forward = plane_basis((0.0, 0.0, 0.0))
    assert np.all(right == 0.0)
    assert np.all(forward == 0.0)
