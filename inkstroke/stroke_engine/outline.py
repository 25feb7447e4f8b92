"""Outline composition: tracks + caps → closed outline ring.

Ring winding: left track (forward), end cap, right track (reversed),
start cap. Single-point strokes that are untapered (or complete) become a
12-sided dot instead.

Cap styles:
    tapered : no start cap; the end cap is just the last centre point
    round   : rotation fan around the first / last centre point. The end
              fan turns 1.5 times round so sharp terminal turns do not
              self-intersect the cap.
    flat    : 4-point rectangle across the first / last track points
"""

import logging
import math
from typing import List

import numpy as np

from ..utils import geometry, validators
from .points import StrokePoint
from .radii import resolve_tapers
from .tracks import FIXED_PI, get_stroke_outline_tracks

logger = logging.getLogger(__name__)

DOT_SIDES = 12
START_CAP_STEPS = 8
END_CAP_STEPS = 29
END_CAP_TURNS = 3

# Flat caps are drawn slightly wider than the track gap to hide seams
FLAT_CAP_INNER = 0.5
FLAT_CAP_OUTER = 0.51
FLAT_END_INSET = 0.99


def _dot(center: np.ndarray, start: np.ndarray) -> np.ndarray:
    return np.array([
        geometry.rot_with(start, center, 2 * math.pi * k / DOT_SIDES)
        for k in range(DOT_SIDES)
    ])


def _start_cap(
    first_point: np.ndarray,
    left0: np.ndarray,
    right0: np.ndarray,
    cap: bool
) -> List[np.ndarray]:
    if cap:
        return [
            geometry.rot_with(right0, first_point, FIXED_PI * k / START_CAP_STEPS)
            for k in range(1, START_CAP_STEPS + 1)
        ]

    corners = left0 - right0
    a = corners * FLAT_CAP_INNER
    b = corners * FLAT_CAP_OUTER
    return [first_point - a, first_point - b, first_point + b, first_point + a]


def _end_cap(last_point: np.ndarray, last: StrokePoint, cap: bool) -> List[np.ndarray]:
    direction = -geometry.per(last.vector)
    edge = direction * last.radius

    if cap:
        start = last_point + edge
        return [
            geometry.rot_with(start, last_point, FIXED_PI * END_CAP_TURNS * k / END_CAP_STEPS)
            for k in range(1, END_CAP_STEPS + 1)
        ]

    inset = edge * FLAT_END_INSET
    return [last_point + edge, last_point + inset, last_point - inset, last_point - edge]


def get_stroke_outline_points(
    stroke_points: List[StrokePoint],
    options: validators.StrokeOptionsLike = None
) -> np.ndarray:
    """Compose the closed outline polygon of a stroke.

    Parameters
    ----------
    stroke_points : List[StrokePoint]
        Stroke points with radii (output of set_stroke_point_radii())
    options : StrokeOptions, dict or None
        Uses size, smoothing, start / end cap and taper, last

    Returns
    -------
    np.ndarray
        Outline ring, shape (M, 2); shape (0, 2) for empty input or size <= 0
    """
    opts = validators.resolve_stroke_options(options)

    if not stroke_points or opts.size <= 0:
        return np.zeros((0, 2), dtype=np.float64)

    first = stroke_points[0]
    last = stroke_points[-1]
    single = len(stroke_points) == 1

    taper_start, taper_end = resolve_tapers(opts, last.running_length)

    first_point = first.point
    last_point = first.point + geometry.vec(1.0, 1.0) if single else last.point

    if single and (not (taper_start or taper_end) or opts.last):
        offset = geometry.unit(geometry.per(first_point - last_point)) * -first.radius
        return _dot(first_point, first_point + offset)

    left, right = get_stroke_outline_tracks(stroke_points, opts)

    if taper_start or (taper_end and single):
        start_cap = []
    else:
        start_cap = _start_cap(first_point, left[0], right[0], opts.start.cap)

    if taper_end or (taper_start and single):
        end_cap = [last_point]
    else:
        end_cap = _end_cap(last_point, last, opts.end.cap)

    parts = [left]
    if end_cap:
        parts.append(np.array(end_cap))
    parts.append(right[::-1])
    if start_cap:
        parts.append(np.array(start_cap))

    outline = np.vstack(parts)
    logger.debug(
        f"Outline: {len(left)} left + {len(right)} right track points, "
        f"{len(start_cap)} start / {len(end_cap)} end cap points"
    )
    return outline
