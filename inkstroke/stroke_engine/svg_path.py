"""SVG path data emission for outlines and centre lines.

Two renderings:
    get_svg_path_from_points()  : smooth quadratic chain through the
                                  midpoints of consecutive vertices
                                  (M / Q / T, closed with Z or ended with L)
    get_draw_line_path_data()   : rounded polyline (L / Q joins) plus a
                                  deterministic hand-drawn jittered copy

Coordinates are rounded to 4 decimals with trailing zeros stripped, so
"10.0000" is written as "10" and "-0" as "0".
"""

from typing import List, Sequence, Tuple

import numpy as np

from ..utils import geometry, hashing
from .points import StrokePoint

PRECISION = 4

# Rough path: corner rounding distance is capped at this many stroke widths
ROUNDNESS_WIDTHS = 2.0
# Rough path: jitter amplitude as a fraction of stroke width
JITTER_FRACTION = 1.0 / 3.0


def format_number(v: float) -> str:
    """Format a coordinate with fixed precision and no trailing zeros."""
    s = f"{float(v):.{PRECISION}f}".rstrip('0').rstrip('.')
    if s in ("-0", ""):
        return "0"
    return s


def precise(p: np.ndarray) -> str:
    """Format a point as 'x,y'."""
    return f"{format_number(p[0])},{format_number(p[1])}"


def average(a: np.ndarray, b: np.ndarray) -> str:
    """Format the midpoint of two points as 'x,y'."""
    return precise(geometry.med(a, b))


def get_svg_path_from_points(points: Sequence, closed: bool = True) -> str:
    """Smooth SVG path through a sequence of points.

    Parameters
    ----------
    points : sequence or np.ndarray
        Vertices, shape (N, 2)
    closed : bool
        Wrap back through the first two points and close with Z; otherwise
        end with a line to the last point

    Returns
    -------
    str
        Path data; "" for fewer than 2 points
    """
    pts = geometry.as_polyline(points)
    n = len(pts)

    if n < 2:
        return ""
    if n == 2:
        return f"M{precise(pts[0])} L{precise(pts[1])}"

    mids = [average(pts[i], pts[i + 1]) for i in range(2, n - 1)]

    if closed:
        tokens = [
            f"M{average(pts[0], pts[1])}",
            f"Q{precise(pts[1])}",
            average(pts[1], pts[2]),
        ]
        tail = mids + [average(pts[-1], pts[0]), average(pts[0], pts[1])]
        tokens.append(f"T{tail[0]}")
        tokens.extend(tail[1:])
        tokens.append("Z")
        return " ".join(tokens)

    tokens = [
        f"M{precise(pts[0])}",
        f"Q{precise(pts[1])}",
        average(pts[1], pts[2]),
    ]
    if mids:
        tokens.append(f"T{mids[0]}")
        tokens.extend(mids[1:])
    tokens.append(f"L{precise(pts[-1])}")
    return " ".join(tokens)


def get_svg_path_from_stroke_points(
    stroke_points: List[StrokePoint],
    closed: bool = False
) -> str:
    """Centre-line path through the adjusted positions of stroke points."""
    if not stroke_points:
        return ""
    return get_svg_path_from_points([sp.point for sp in stroke_points], closed=closed)


def _rounded_polyline(pts: np.ndarray, roundness: float) -> str:
    """Polyline with corners cut by a quadratic join at each inner vertex."""
    n = len(pts)
    parts = [f"M{precise(pts[0])} L"]
    p0 = pts[0]

    for i in range(n - 1):
        p1 = pts[i + 1]
        distance = geometry.dist(p0, p1)
        if distance > 0:
            vector = (p1 - p0) / distance * min(distance / 4, roundness)
        else:
            vector = np.zeros(2)

        q0 = p0 + vector
        q1 = p1 - vector

        if i == n - 2:
            parts.append(f"{precise(q0)} L{precise(p1)}")
        else:
            parts.append(f"{precise(q0)} L{precise(q1)} Q{precise(p1)} ")
            p0 = p1

    return "".join(parts)


def get_draw_line_path_data(
    seed: str,
    outline: Sequence,
    stroke_width: float
) -> Tuple[str, str]:
    """Clean and hand-drawn ("rough") path data for a polyline.

    Parameters
    ----------
    seed : str
        Identity string seeding the jitter; same seed → identical output
    outline : sequence or np.ndarray
        Polyline vertices, shape (N, 2)
    stroke_width : float
        Controls corner rounding and jitter amplitude

    Returns
    -------
    Tuple[str, str]
        (clean, rough). rough is the clean path followed by a jittered copy
        (every vertex after the first offset by up to stroke_width / 3 per
        axis). ("", "") for fewer than 2 vertices.

    Notes
    -----
    Jitter comes from a local numpy Generator seeded by SHA-256 of `seed`;
    no global random state is read or written.
    """
    pts = geometry.as_polyline(outline)
    if len(pts) < 2:
        return "", ""

    roundness = stroke_width * ROUNDNESS_WIDTHS
    amplitude = stroke_width * JITTER_FRACTION

    rng = np.random.default_rng(hashing.seed_from_string(seed))
    jitter = rng.uniform(-1.0, 1.0, size=(len(pts) - 1, 2)) * amplitude

    shaken = pts.copy()
    shaken[1:] += jitter

    clean = _rounded_polyline(pts, roundness)
    rough = _rounded_polyline(shaken, roundness)
    return clean, f"{clean} {rough}"
