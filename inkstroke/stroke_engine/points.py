"""Point resampling: raw pointer samples → stroke points.

Cleans and interpolates a noisy sequence of (x, y, pressure) samples into
StrokePoints carrying adjusted position, direction, pressure and running
arc length. Radius is left at 1.0; radii.set_stroke_point_radii() fills it.

Pipeline (single pass, no in-place mutation of the caller's samples):
    1. Strip pen-lift noise (very low pressure) at both ends
    2. Fold samples close to the first / last sample into it
    3. Streamline: blend each sample toward the previous accepted point
    4. Drop start-of-stroke jitter until the stroke has moved `size`
    5. Accumulate running length, direction vectors

All thresholds below are empirically tuned for visual quality.
"""

import logging
from dataclasses import dataclass, replace
from typing import Any, List, Mapping, Sequence, Tuple, Union

import numpy as np

from ..utils import geometry, validators

logger = logging.getLogger(__name__)

# Samples below these pressures at the ends of a stroke are pen-lift noise
MIN_START_PRESSURE = 0.025
MIN_END_PRESSURE = 0.01

DEFAULT_PRESSURE = 0.5
# Pressure of the placeholder point when every sample was stripped
STRIPPED_PRESSURE = 0.15

# Samples within size / 3 of the first or last sample are folded into it
MERGE_DISTANCE_DIVISOR = 3.0

# Streamline interpolation factor: t = BASE + (1 - streamline) * RANGE
STREAMLINE_BASE = 0.15
STREAMLINE_RANGE = 0.85

# Samples with index below this are dropped until the stroke has moved `size`
START_NOISE_SAMPLES = 4

# A two-sample simulated stroke is split into this many segments
TWO_SAMPLE_SEGMENTS = 4

# Placeholder direction for strokes too short to define one
DEFAULT_VECTOR = geometry.unit(geometry.vec(1.0, 1.0))


@dataclass(frozen=True, eq=False)
class StrokePoint:
    """Resampled point of a freehand stroke.

    Attributes
    ----------
    point : np.ndarray
        Adjusted (streamlined) position, shape (2,)
    input : np.ndarray
        Raw sample position, shape (2,)
    vector : np.ndarray
        Unit direction from this point toward the previous point
    pressure : float
        Pressure in [0, 1]
    distance : float
        Distance to the previous stroke point
    running_length : float
        Arc length from the first stroke point
    radius : float
        Stroke half-width at this point (set by the radius profiler)
    """
    point: np.ndarray
    input: np.ndarray
    vector: np.ndarray
    pressure: float
    distance: float
    running_length: float
    radius: float = 1.0


RawSamples = Union[np.ndarray, Sequence[Any]]


def coerce_samples(samples: RawSamples) -> np.ndarray:
    """Normalize raw samples to a float64 array of shape (N, 3).

    Parameters
    ----------
    samples : array or sequence
        Any of:
        - array of shape (N, 2) or (N, 3)
        - sequence of (x, y) / (x, y, pressure) pairs/triples
        - sequence of mappings with 'x', 'y' and optional 'pressure' (or 'z')
        - sequence of objects with x / y (and optional pressure) attributes

    Returns
    -------
    np.ndarray
        Columns [x, y, pressure]; missing pressure defaults to 0.5

    Raises
    ------
    ValueError
        If a sample cannot be interpreted as a 2-D point
    """
    if isinstance(samples, np.ndarray):
        arr = np.asarray(samples, dtype=np.float64)
        if arr.size == 0:
            return np.zeros((0, 3), dtype=np.float64)
        if arr.ndim != 2 or arr.shape[1] not in (2, 3):
            raise ValueError(f"Expected samples of shape (N, 2) or (N, 3), got {arr.shape}")
        if arr.shape[1] == 2:
            arr = np.hstack([arr, np.full((arr.shape[0], 1), DEFAULT_PRESSURE)])
        return arr.copy()

    rows = [_sample_row(s) for s in samples]
    if not rows:
        return np.zeros((0, 3), dtype=np.float64)
    return np.array(rows, dtype=np.float64)


def _sample_row(sample: Any) -> Tuple[float, float, float]:
    if isinstance(sample, Mapping):
        pressure = sample.get('pressure', sample.get('z'))
        x, y = sample['x'], sample['y']
    elif hasattr(sample, 'x') and hasattr(sample, 'y'):
        pressure = getattr(sample, 'pressure', getattr(sample, 'z', None))
        x, y = sample.x, sample.y
    else:
        values = list(sample)
        if len(values) not in (2, 3):
            raise ValueError(f"Sample must have 2 or 3 components, got {len(values)}: {sample!r}")
        x, y = values[0], values[1]
        pressure = values[2] if len(values) == 3 else None

    if pressure is None:
        pressure = DEFAULT_PRESSURE
    return float(x), float(y), float(pressure)


def _strip_low_pressure(pts: np.ndarray) -> np.ndarray:
    """Slice off leading / trailing samples below the pen-lift thresholds."""
    start = 0
    while start < len(pts) and pts[start, 2] < MIN_START_PRESSURE:
        start += 1
    end = len(pts)
    while end > start and pts[end - 1, 2] < MIN_END_PRESSURE:
        end -= 1
    return pts[start:end]


def _fold_endpoints(pts: np.ndarray, size: float) -> Tuple[np.ndarray, int]:
    """Fold samples near the first and last sample into those samples.

    Returns
    -------
    Tuple[np.ndarray, int]
        New sample array and number of samples folded into the last one

    Notes
    -----
    Folded samples donate their pressure (maximum wins). The first sample
    is never folded into the last, so closed loops keep their start.
    """
    limit = (size / MERGE_DISTANCE_DIVISOR) ** 2

    first = pts[0].copy()
    j = 1
    while j < len(pts) and geometry.dist2(pts[j, :2], first[:2]) <= limit:
        first[2] = max(first[2], pts[j, 2])
        j += 1

    rest = pts[j:]
    if len(rest) == 0:
        return first[None, :], 0

    last = rest[-1].copy()
    keep = len(rest) - 1
    while keep > 0 and geometry.dist2(rest[keep - 1, :2], last[:2]) <= limit:
        last[2] = max(last[2], rest[keep - 1, 2])
        keep -= 1

    removed = len(rest) - 1 - keep
    folded = np.vstack([first[None, :], rest[:keep], last[None, :]])
    return folded, removed


def _subdivide_two_samples(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Replace a two-sample stroke with evenly spaced samples from a to b."""
    ts = np.arange(TWO_SAMPLE_SEGMENTS + 1, dtype=np.float64) / TWO_SAMPLE_SEGMENTS
    return a[None, :] + (b - a)[None, :] * ts[:, None]


def get_stroke_points(
    samples: RawSamples,
    options: validators.StrokeOptionsLike = None
) -> List[StrokePoint]:
    """Resample raw pointer samples into stroke points.

    Parameters
    ----------
    samples : array or sequence
        Raw samples in capture order (see coerce_samples for accepted forms)
    options : StrokeOptions, dict or None
        Uses size, streamline, simulate_pressure and last

    Returns
    -------
    List[StrokePoint]
        Stroke points with non-decreasing running_length starting at 0;
        empty list for empty input

    Notes
    -----
    The stroke is treated as complete (its final sample duplicated so the
    streamline blend does not cut the tail short) when `last` is set, when
    pressure is real, when the last two samples are closer than `size`, or
    when samples were folded into the last one.

    A two-sample stroke with simulated pressure is subdivided and handled as
    if `last` were set: its final sample is kept verbatim, so both endpoints
    survive and running_length reaches the full separation.
    """
    opts = validators.resolve_stroke_options(options)
    raw = coerce_samples(samples)

    if raw.shape[0] == 0:
        return []

    size = opts.size
    streamline = opts.streamline
    simulate = opts.simulate_pressure

    # Interpolation level between points
    t = STREAMLINE_BASE + (1 - streamline) * STREAMLINE_RANGE

    pts = raw if simulate else _strip_low_pressure(raw)

    if pts.shape[0] == 0:
        origin = raw[0, :2].copy()
        return [
            StrokePoint(
                point=origin,
                input=origin.copy(),
                vector=DEFAULT_VECTOR.copy(),
                pressure=DEFAULT_PRESSURE if simulate else STRIPPED_PRESSURE,
                distance=0.0,
                running_length=0.0,
                radius=1.0,
            )
        ]

    pts, removed_near_end = _fold_endpoints(pts, size)

    # Both samples of a two-sample dash are real pen-down / pen-up positions
    subdivided = len(pts) == 2 and simulate
    pin_last = opts.last or subdivided

    is_complete = (
        pin_last
        or not simulate
        or (len(pts) > 1 and geometry.dist2(pts[-1, :2], pts[-2, :2]) < size ** 2)
        or removed_near_end > 0
    )

    if subdivided:
        pts = _subdivide_two_samples(pts[0], pts[1])

    if is_complete and streamline > 0:
        pts = np.vstack([pts, pts[-1:]])

    first = pts[0, :2].copy()
    stroke_points = [
        StrokePoint(
            point=first,
            input=first.copy(),
            vector=DEFAULT_VECTOR.copy(),
            pressure=DEFAULT_PRESSURE if simulate else float(pts[0, 2]),
            distance=0.0,
            running_length=0.0,
        )
    ]

    prev = stroke_points[0]
    total_length = 0.0
    n = len(pts)

    for i in range(1, n):
        sample = pts[i, :2]

        if pin_last and i == n - 1:
            point = sample.copy()
        else:
            point = geometry.lerp(sample, prev.point, 1 - t)

        if np.array_equal(point, prev.point):
            continue

        distance = geometry.dist(point, prev.point)

        # Wait until the stroke has moved away from its origin
        if i < START_NOISE_SAMPLES and total_length + distance < size:
            continue

        total_length += distance

        prev = StrokePoint(
            point=point,
            input=sample.copy(),
            vector=geometry.unit(prev.point - point, fallback=prev.vector),
            pressure=DEFAULT_PRESSURE if simulate else float(pts[i, 2]),
            distance=distance,
            running_length=total_length,
        )
        stroke_points.append(prev)

    # No direction is defined at the very start: borrow the second point's
    if len(stroke_points) > 1:
        stroke_points[0] = replace(stroke_points[0], vector=stroke_points[1].vector.copy())

    # Effectively stationary strokes: uniform pressure avoids flicker
    if total_length < 1:
        max_pressure = max(sp.pressure for sp in stroke_points)
        stroke_points = [replace(sp, pressure=max_pressure) for sp in stroke_points]

    logger.debug(
        f"Resampled {raw.shape[0]} samples → {len(stroke_points)} stroke points "
        f"(length={total_length:.2f}, complete={is_complete})"
    )

    return stroke_points
