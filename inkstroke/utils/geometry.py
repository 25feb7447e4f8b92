"""2-D vector operations for stroke outlines.

Provides:
    - Vector primitives: unit, per, lerp, rotate about a center
    - Products: dot (dpr), 2-D cross (cpr)
    - Distances: dist, dist2
    - Polyline operations: length, bbox

Used by:
    - Resampler: direction vectors and running length
    - Track builder: offsets, corner fans, squared-distance dedup
    - Cap composer: round caps and dots
    - Path emitter: midpoints and rounded joins

All points are float64 numpy arrays of shape (2,). Polylines are arrays of
shape (N, 2). Coordinates are in whatever unit the caller samples in (usually
screen pixels); nothing here converts units.
"""

import math
from typing import Optional, Sequence, Tuple

import numpy as np


def vec(x: float, y: float) -> np.ndarray:
    """Build a 2-D point/vector as float64 array."""
    return np.array([x, y], dtype=np.float64)


def unit(v: np.ndarray, fallback: Optional[np.ndarray] = None) -> np.ndarray:
    """Normalize vector to unit length.

    Parameters
    ----------
    v : np.ndarray
        Vector, shape (2,)
    fallback : np.ndarray, optional
        Returned (as a copy) when v has zero length; zero vector if None

    Returns
    -------
    np.ndarray
        Unit vector, shape (2,)

    Notes
    -----
    Zero-length input would otherwise produce NaN components, which poison
    every offset computed downstream. Callers choose the fallback (usually
    the previous direction).
    """
    length = math.hypot(v[0], v[1])
    if length < 1e-12:
        if fallback is None:
            return np.zeros(2, dtype=np.float64)
        return np.array(fallback, dtype=np.float64)
    return v / length


def per(v: np.ndarray) -> np.ndarray:
    """Perpendicular of v: (x, y) → (y, -x)."""
    return np.array([v[1], -v[0]], dtype=np.float64)


def lerp(a: np.ndarray, b: np.ndarray, t: float) -> np.ndarray:
    """Linear interpolation a + (b - a)·t."""
    return a + (b - a) * t


def dpr(a: np.ndarray, b: np.ndarray) -> float:
    """Dot product of two 2-D vectors."""
    return float(a[0] * b[0] + a[1] * b[1])


def cpr(a: np.ndarray, b: np.ndarray) -> float:
    """2-D cross product (z component of a × b)."""
    return float(a[0] * b[1] - b[0] * a[1])


def dist(a: np.ndarray, b: np.ndarray) -> float:
    """Euclidean distance between two points."""
    return math.hypot(a[0] - b[0], a[1] - b[1])


def dist2(a: np.ndarray, b: np.ndarray) -> float:
    """Squared Euclidean distance (cheap comparison against thresholds)."""
    dx = a[0] - b[0]
    dy = a[1] - b[1]
    return float(dx * dx + dy * dy)


def rot_with(a: np.ndarray, center: np.ndarray, r: float) -> np.ndarray:
    """Rotate point a around center by r radians (counter-clockwise in a
    y-up frame, clockwise on screen).

    Parameters
    ----------
    a : np.ndarray
        Point to rotate, shape (2,)
    center : np.ndarray
        Rotation center, shape (2,)
    r : float
        Angle in radians

    Returns
    -------
    np.ndarray
        Rotated point, shape (2,)
    """
    s = math.sin(r)
    c = math.cos(r)
    px = a[0] - center[0]
    py = a[1] - center[1]
    return np.array(
        [px * c - py * s + center[0], px * s + py * c + center[1]],
        dtype=np.float64,
    )


def med(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Midpoint of a and b."""
    return (a + b) / 2.0


def as_polyline(points: Sequence) -> np.ndarray:
    """Coerce a point sequence to a float64 array of shape (N, 2).

    Accepts lists of pairs, lists of arrays or an existing array. Extra
    columns (e.g. pressure) are dropped. Empty input gives shape (0, 2).
    """
    arr = np.asarray(points, dtype=np.float64)
    if arr.size == 0:
        return np.zeros((0, 2), dtype=np.float64)
    if arr.ndim != 2 or arr.shape[1] < 2:
        raise ValueError(f"Expected points of shape (N, 2+), got {arr.shape}")
    return arr[:, :2]


def polyline_length(points: np.ndarray) -> float:
    """Compute total length of polyline.

    Parameters
    ----------
    points : np.ndarray
        Polyline vertices, shape (N, 2)

    Returns
    -------
    float
        Sum of segment lengths; 0.0 for fewer than 2 points
    """
    points = as_polyline(points)
    if points.shape[0] < 2:
        return 0.0
    diffs = points[1:] - points[:-1]
    return float(np.linalg.norm(diffs, axis=1).sum())


def polyline_bbox(points: np.ndarray) -> Tuple[float, float, float, float]:
    """Compute axis-aligned bounding box of polyline.

    Returns
    -------
    Tuple[float, float, float, float]
        (xmin, ymin, xmax, ymax); (0, 0, 0, 0) if no points
    """
    points = as_polyline(points)
    if points.shape[0] == 0:
        return (0.0, 0.0, 0.0, 0.0)
    xmin, ymin = points.min(axis=0)
    xmax, ymax = points.max(axis=0)
    return (float(xmin), float(ymin), float(xmax), float(ymax))

