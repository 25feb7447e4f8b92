"""Test point resampling.

Tests for inkstroke.stroke_engine.points:
    - Sample coercion (arrays, pairs, mappings, objects)
    - Empty and single-sample strokes
    - Two-sample strokes keep both endpoints
    - running_length starts at 0 and never decreases
    - Pen-lift noise stripping (real pressure only)
    - Duplicate samples never produce NaN directions
    - Caller samples are not mutated
    - Determinism

Run:
    pytest tests/test_points.py -v
"""

from types import SimpleNamespace

import numpy as np
import pytest

from inkstroke.stroke_engine import points as points_mod
from inkstroke.stroke_engine.points import coerce_samples, get_stroke_points


# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture
def wavy_samples():
    """Noisy wavy stroke, seeded."""
    rng = np.random.default_rng(7)
    x = np.linspace(0, 200, 40)
    y = 20 * np.sin(x / 25) + rng.normal(0, 0.8, size=x.shape)
    p = np.clip(0.5 + rng.normal(0, 0.1, size=x.shape), 0.05, 1.0)
    return np.stack([x, y, p], axis=1)


# ============================================================================
# COERCION
# ============================================================================

def test_coerce_array_without_pressure():
    arr = coerce_samples(np.array([[0.0, 0.0], [1.0, 2.0]]))
    assert arr.shape == (2, 3)
    np.testing.assert_array_equal(arr[:, 2], [0.5, 0.5])


def test_coerce_mixed_sequence():
    arr = coerce_samples([
        (0, 0),
        [1, 2, 0.9],
        {"x": 3, "y": 4, "pressure": 0.2},
        {"x": 5, "y": 6, "z": 0.3},
        SimpleNamespace(x=7, y=8),
        SimpleNamespace(x=9, y=10, pressure=0.7),
    ])
    np.testing.assert_allclose(arr, [
        [0, 0, 0.5],
        [1, 2, 0.9],
        [3, 4, 0.2],
        [5, 6, 0.3],
        [7, 8, 0.5],
        [9, 10, 0.7],
    ])


def test_coerce_empty():
    assert coerce_samples([]).shape == (0, 3)
    assert coerce_samples(np.zeros((0, 2))).shape == (0, 3)


@pytest.mark.parametrize("bad", [
    [(1, 2, 3, 4)],
    [(1,)],
    np.zeros((3, 4)),
    np.zeros(5),
])
def test_coerce_bad_shapes(bad):
    with pytest.raises(ValueError):
        coerce_samples(bad)


# ============================================================================
# RESAMPLING
# ============================================================================

def test_empty_input():
    assert get_stroke_points([]) == []


def test_single_sample():
    pts = get_stroke_points([(10, 10)], {"size": 16})
    assert len(pts) == 1
    np.testing.assert_array_equal(pts[0].point, [10.0, 10.0])
    assert pts[0].running_length == 0.0
    assert pts[0].pressure == 0.5


def test_two_samples_keep_endpoints():
    """Separation 20 exceeds the size/3 merge threshold, so both ends survive."""
    pts = get_stroke_points(
        [(0, 0, 0.5), (20, 0, 0.5)],
        {"size": 16, "simulatePressure": True},
    )
    assert len(pts) >= 2
    np.testing.assert_allclose(pts[0].point, [0.0, 0.0])
    np.testing.assert_allclose(pts[-1].point, [20.0, 0.0])
    assert abs(pts[-1].running_length - 20.0) < 2


def test_two_samples_with_streamline():
    # Subdivided to 0, 5, 10, 15, 20 (+ duplicate); the first three blends
    # stay within size of the origin and are dropped as start jitter
    pts = get_stroke_points([(0, 0), (20, 0)], {"size": 16, "streamline": 0.5})
    xs = [p.point[0] for p in pts]
    assert xs == [pytest.approx(0.0), pytest.approx(11.5), pytest.approx(20.0)]
    assert pts[-1].running_length == pytest.approx(20.0)


def test_two_real_pressure_samples_not_pinned():
    pts = get_stroke_points(
        [(0, 0, 0.5), (40, 0, 0.5)],
        {"size": 4, "streamline": 0.5, "simulatePressure": False},
    )
    # Real pressure: no subdivision, the final sample is still blended
    assert len(pts) == 3
    assert pts[-1].point[0] < 40.0


def test_close_samples_fold_into_first():
    pts = get_stroke_points([(0, 0), (1, 1), (2, 0)], {"size": 16})
    assert len(pts) == 1
    np.testing.assert_array_equal(pts[0].point, [0.0, 0.0])


def test_running_length_monotonic(wavy_samples):
    pts = get_stroke_points(wavy_samples, {"size": 8, "simulate_pressure": False})
    lengths = [p.running_length for p in pts]
    assert lengths[0] == 0.0
    assert all(b >= a for a, b in zip(lengths, lengths[1:]))


def test_running_length_matches_distances(wavy_samples):
    pts = get_stroke_points(wavy_samples, {"size": 8})
    total = sum(p.distance for p in pts)
    assert pts[-1].running_length == pytest.approx(total)


def test_vectors_are_unit_and_finite(wavy_samples):
    pts = get_stroke_points(wavy_samples, {"size": 8})
    for p in pts:
        assert np.all(np.isfinite(p.vector))
        assert np.hypot(*p.vector) == pytest.approx(1.0)


def test_first_vector_borrowed_from_second():
    pts = get_stroke_points([(0, 0), (20, 0), (40, 0), (60, 0)], {"streamline": 0})
    np.testing.assert_array_equal(pts[0].vector, pts[1].vector)
    np.testing.assert_allclose(pts[1].vector, [-1.0, 0.0])


def test_no_streamline_keeps_inputs():
    samples = [(0, 0), (20, 0), (40, 10), (60, 0)]
    pts = get_stroke_points(samples, {"size": 16, "streamline": 0})
    np.testing.assert_allclose([p.point for p in pts], samples)


def test_streamline_smooths_toward_previous():
    samples = [(0, 0), (40, 0), (80, 0), (120, 0), (160, 0), (200, 0)]
    pts = get_stroke_points(samples, {"size": 4, "streamline": 0.9})
    assert pts[1].point[0] < 40.0


def test_last_keeps_final_sample_verbatim():
    samples = [(0, 0), (40, 0), (80, 30), (120, 0)]
    pts = get_stroke_points(samples, {"size": 4, "streamline": 0.8, "last": True})
    np.testing.assert_allclose(pts[-1].point, [120.0, 0.0])


def test_duplicate_samples_do_not_produce_nan():
    samples = [(0, 0), (20, 0), (20, 0), (20, 0), (40, 0)]
    pts = get_stroke_points(samples, {"size": 4, "streamline": 0})
    assert len(pts) == 3
    for p in pts:
        assert np.all(np.isfinite(p.vector))


def test_start_noise_dropped_until_moved_size():
    samples = [(0, 0), (3, 0), (6, 0), (40, 0), (80, 0)]
    pts = get_stroke_points(samples, {"size": 16, "streamline": 0})
    xs = [p.point[0] for p in pts]
    assert 3.0 not in xs and 6.0 not in xs
    assert pts[1].distance == pytest.approx(40.0)


def test_low_pressure_ends_stripped_with_real_pressure():
    samples = [(0, 0, 0.01), (10, 0, 0.5), (30, 0, 0.5), (50, 0, 0.5), (70, 0, 0.005)]
    pts = get_stroke_points(samples, {"size": 16, "simulatePressure": False, "streamline": 0})
    np.testing.assert_allclose([p.point for p in pts], [[10, 0], [30, 0], [50, 0]])
    assert all(p.pressure == 0.5 for p in pts)


def test_low_pressure_kept_with_simulated_pressure():
    samples = [(0, 0, 0.01), (30, 0, 0.5), (60, 0, 0.005)]
    pts = get_stroke_points(samples, {"size": 16, "streamline": 0})
    np.testing.assert_allclose(pts[0].point, [0.0, 0.0])


def test_all_samples_stripped_gives_placeholder():
    pts = get_stroke_points([(3, 4, 0.0), (9, 9, 0.001)], {"simulatePressure": False})
    assert len(pts) == 1
    np.testing.assert_array_equal(pts[0].point, [3.0, 4.0])
    assert pts[0].pressure == points_mod.STRIPPED_PRESSURE


def test_stationary_stroke_uses_max_pressure():
    samples = [(5, 5, 0.3), (5.2, 5, 0.9), (5.1, 5.1, 0.4)]
    pts = get_stroke_points(samples, {"simulatePressure": False})
    assert all(p.pressure == 0.9 for p in pts)


def test_samples_not_mutated(wavy_samples):
    before = wavy_samples.copy()
    get_stroke_points(wavy_samples, {"size": 8, "simulatePressure": False})
    np.testing.assert_array_equal(wavy_samples, before)


def test_deterministic(wavy_samples):
    a = get_stroke_points(wavy_samples, {"size": 8})
    b = get_stroke_points(wavy_samples, {"size": 8})
    assert len(a) == len(b)
    for pa, pb in zip(a, b):
        np.testing.assert_array_equal(pa.point, pb.point)
        np.testing.assert_array_equal(pa.vector, pb.vector)
        assert pa.running_length == pb.running_length
