"""Tests for corner-cutting boundary smoothing."""

from __future__ import annotations

import sys
from pathlib import Path

import numpy as np

sys.path.append(str(Path(__file__).resolve().parents[1]))

from woundmetrics.services.smoothing import chaikin_smooth_once, smooth_boundary


SQUARE = [(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (1.0, 1.0, 0.0), (0.0, 1.0, 0.0)]


def test_single_pass_doubles_point_count() -> None:
    triangle = [(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.0, 1.0, 0.0)]
    assert len(smooth_boundary(triangle, iterations=1)) == 6
    assert len(smooth_boundary(SQUARE, iterations=2)) == 16


def test_pass_emits_quarter_points_in_edge_order() -> None:
    """Each edge contributes Q (quarter) then R (three quarters), wrapping at the end."""
    out = chaikin_smooth_once(SQUARE)
    expected = [
        (0.25, 0.0, 0.0), (0.75, 0.0, 0.0),
        (1.0, 0.25, 0.0), (1.0, 0.75, 0.0),
        (0.75, 1.0, 0.0), (0.25, 1.0, 0.0),
        (0.0, 0.75, 0.0), (0.0, 0.25, 0.0),
    ]
    assert np.allclose(out, expected)


def test_short_boundaries_are_returned_unchanged() -> None:
    """Two points or fewer are not smoothed, whatever the iteration count."""
    pair = [(0.0, 0.0, 0.0), (0.5, 0.0, 0.0)]
    out = smooth_boundary(pair, iterations=3)
    assert out.shape == (2, 3)
    assert np.allclose(out, pair)
    assert smooth_boundary([], iterations=1).shape == (0, 3)


def test_zero_iterations_is_identity() -> None:
    out = smooth_boundary(SQUARE, iterations=0)
    assert np.allclose(out, SQUARE)


def test_pass_preserves_vertex_centroid() -> None:
    rng = np.random.default_rng(7)
    pts = rng.normal(size=(9, 3))
    out = chaikin_smooth_once(pts)
    assert np.allclose(out.mean(axis=0), pts.mean(axis=0))


def test_order_matters() -> None:
    """Reordering the boundary changes the smoothed result."""
    reordered = [SQUARE[0], SQUARE[2], SQUARE[1], SQUARE[3]]
    assert not np.allclose(smooth_boundary(SQUARE), smooth_boundary(reordered))
