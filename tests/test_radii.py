"""Test radius profiling.

Tests for inkstroke.stroke_engine.radii:
    - Taper resolution (off / full / distance)
    - Radius lower bound (>= 0.01) for every option combination
    - Thinning 0 gives a constant radius of size / 2
    - Real-pressure strokes shorter than size get a uniform radius
    - Tapers shrink the ends
    - Inputs are not mutated

Run:
    pytest tests/test_radii.py -v
"""

import numpy as np
import pytest

from inkstroke.stroke_engine.points import get_stroke_points
from inkstroke.stroke_engine.radii import (
    MIN_RADIUS,
    resolve_taper,
    set_stroke_point_radii,
)


# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture
def line_samples():
    """Straight stroke with accelerating spacing."""
    xs = np.cumsum(np.linspace(2, 14, 25))
    return np.stack([xs, np.zeros_like(xs), np.full_like(xs, 0.6)], axis=1)


def _radii(samples, options):
    return [p.radius for p in set_stroke_point_radii(get_stroke_points(samples, options), options)]


# ============================================================================
# TAPER RESOLUTION
# ============================================================================

def test_resolve_taper():
    assert resolve_taper(False, 16, 100) == 0.0
    assert resolve_taper(True, 16, 100) == 100.0
    assert resolve_taper(True, 16, 5) == 16.0
    assert resolve_taper(25.0, 16, 100) == 25.0


# ============================================================================
# RADII
# ============================================================================

def test_empty():
    assert set_stroke_point_radii([]) == []


@pytest.mark.parametrize("options", [
    {},
    {"thinning": 1.0},
    {"thinning": -1.0},
    {"thinning": 0.9, "easing": "easeInExpo"},
    {"simulatePressure": False},
    {"start": {"taper": True}, "end": {"taper": True}},
    {"start": {"taper": 30}, "end": {"taper": 30}, "thinning": -0.8},
    {"size": 0.5},
    {"size": 0.01, "thinning": 0},
    {"size": 0},
    {"size": -4},
])
def test_radius_lower_bound(line_samples, options):
    radii = _radii(line_samples, options)
    assert radii
    assert min(radii) >= MIN_RADIUS


def test_two_sample_radii_within_thinning_bounds():
    options = {"size": 16, "simulatePressure": True}
    radii = _radii([(0, 0, 0.5), (20, 0, 0.5)], options)
    assert len(radii) >= 2
    assert all(16 * 0.1 <= r <= 16 * 0.9 for r in radii)


def test_zero_thinning_constant_radius(line_samples):
    radii = _radii(line_samples, {"size": 10, "thinning": 0})
    np.testing.assert_allclose(radii, 5.0)


def test_single_point_default_radius():
    radii = _radii([(10, 10)], {"size": 16})
    assert radii == [pytest.approx(8.0)]


def test_short_real_pressure_stroke_uniform():
    radii = _radii([(0, 0, 0.3), (5, 0, 0.9)], {"size": 16, "simulatePressure": False})
    # size * (0.5 - 0.5 * (0.5 - 0.9))
    assert radii == [pytest.approx(11.2)]


def test_real_pressure_changes_width():
    light = [(x, 0, 0.1) for x in range(0, 200, 10)]
    heavy = [(x, 0, 1.0) for x in range(0, 200, 10)]
    opts = {"size": 16, "simulatePressure": False, "thinning": 0.8}
    assert np.mean(_radii(heavy, opts)) > np.mean(_radii(light, opts))


def test_full_taper_shrinks_ends(line_samples):
    opts = {"start": {"taper": True}, "end": {"taper": True}}
    radii = _radii(line_samples, opts)
    mid = radii[len(radii) // 2]
    assert radii[0] == pytest.approx(MIN_RADIUS)
    assert radii[-1] == pytest.approx(MIN_RADIUS)
    assert mid > radii[1] and mid > radii[-2]


def test_taper_distance_only_affects_zone(line_samples):
    plain = _radii(line_samples, {})
    pts = get_stroke_points(line_samples, {})
    tapered = _radii(line_samples, {"start": {"taper": 20}})
    for p, a, b in zip(pts, plain, tapered):
        if p.running_length >= 20:
            assert a == pytest.approx(b)
        else:
            assert b <= a


def test_taper_easing_override(line_samples):
    base = {"start": {"taper": 200}}
    quad = _radii(line_samples, base)
    lin = _radii(line_samples, {"start": {"taper": 200, "easing": "linear"}})
    # ease_out_quad(t) >= t on [0, 1]
    assert all(q >= l - 1e-12 for q, l in zip(quad, lin))


def test_inputs_not_mutated(line_samples):
    pts = get_stroke_points(line_samples, {})
    before = [p.radius for p in pts]
    out = set_stroke_point_radii(pts, {})
    assert [p.radius for p in pts] == before
    assert out is not pts
