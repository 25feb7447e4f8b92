"""Outline tracks: left / right offset polylines around the stroke centerline.

Walks the stroke points once. Each point is offset perpendicular to its
direction by its radius. Where the direction reverses sharply, a plain
offset would fold the outline over itself, so corners are classified:

    sharp corner     : dot(vector, prev_vector) < 0 and the previous point
                       was not already handled as a corner
    upcoming corner  : dot(next_vector, vector) < 0.2

A corner becomes a "soft" corner (single offset pair along the previous
direction) when the turn is moderate and enough stroke remains, otherwise a
"sharp" corner: a 14-point fan around the raw input position sweeping
slightly more than pi, like a small round cap.

Ordinary points are deduplicated per side: a new offset point is kept only
if it is farther than (size · smoothing)² (squared distance) from the last
kept point on that side.

The pass is a pure reduction over _TrackState, which carries the previous
direction, the last kept point per side and the corner flag between points.
"""

import math
from dataclasses import dataclass, field
from typing import List, Tuple

import numpy as np

from ..utils import geometry, validators
from .points import StrokePoint

# Turn is "upcoming sharp" when the next direction's dot product drops below this
UPCOMING_CORNER_DPR = 0.2

# Corners with next dot product above this (and stroke remaining) are soft
SOFT_CORNER_MIN_DPR = -0.62

# Angular steps in a sharp-corner fan; the fan has one more point than steps
CORNER_FAN_STEPS = 13

# Rendering surfaces leave hairline gaps at exactly pi; a tiny overshoot closes them
FIXED_PI = math.pi + 0.0001


@dataclass
class _TrackState:
    """Accumulator threaded through the single pass over stroke points."""
    prev_vector: np.ndarray
    pl: np.ndarray
    pr: np.ndarray
    prev_sharp: bool = False
    left: List[np.ndarray] = field(default_factory=list)
    right: List[np.ndarray] = field(default_factory=list)


def _to_array(points: List[np.ndarray]) -> np.ndarray:
    if not points:
        return np.zeros((0, 2), dtype=np.float64)
    return np.array(points, dtype=np.float64)


def _corner_fan(sp: StrokePoint, prev_vector: np.ndarray) -> Tuple[List[np.ndarray], List[np.ndarray]]:
    """Fan points around the raw input position for a sharp corner."""
    offset = geometry.per(prev_vector) * sp.radius
    start = sp.input - offset
    left = []
    right = []
    for step in range(CORNER_FAN_STEPS + 1):
        t = step / CORNER_FAN_STEPS
        left.append(geometry.rot_with(start, sp.input, FIXED_PI * t))
        right.append(geometry.rot_with(start, sp.input, FIXED_PI - FIXED_PI * t))
    return left, right


def _soft_corner(
    sp: StrokePoint,
    prev_vector: np.ndarray,
    next_vector: np.ndarray
) -> Tuple[np.ndarray, np.ndarray]:
    """Single offset pair along the previous direction; side from cross sign."""
    offset = prev_vector * sp.radius
    if geometry.cpr(prev_vector, next_vector) < 0:
        return sp.point + offset, sp.point - offset
    return sp.point - offset, sp.point + offset


def get_stroke_outline_tracks(
    stroke_points: List[StrokePoint],
    options: validators.StrokeOptionsLike = None
) -> Tuple[np.ndarray, np.ndarray]:
    """Build the left and right outline tracks of a stroke.

    Parameters
    ----------
    stroke_points : List[StrokePoint]
        Stroke points with radii (output of set_stroke_point_radii())
    options : StrokeOptions, dict or None
        Uses size and smoothing

    Returns
    -------
    Tuple[np.ndarray, np.ndarray]
        (left, right), each shape (M, 2), both in forward arc-length order.
        Two empty (0, 2) arrays for empty input or size <= 0.

    Notes
    -----
    First and last stroke points are always offset directly by their own
    direction; caps are attached to them later by the outline composer.
    """
    opts = validators.resolve_stroke_options(options)
    size = opts.size

    if not stroke_points or size <= 0:
        empty = np.zeros((0, 2), dtype=np.float64)
        return empty, empty.copy()

    n = len(stroke_points)
    total_length = stroke_points[-1].running_length
    min_distance = (size * opts.smoothing) ** 2

    state = _TrackState(
        prev_vector=stroke_points[0].vector,
        pl=stroke_points[0].point,
        pr=stroke_points[0].point,
    )

    for i, sp in enumerate(stroke_points):
        if i == 0 or i == n - 1:
            offset = geometry.per(sp.vector) * sp.radius
            state.left.append(sp.point - offset)
            state.right.append(sp.point + offset)
            state.prev_sharp = False
            continue

        next_vector = stroke_points[i + 1].vector
        prev_dpr = geometry.dpr(sp.vector, state.prev_vector)
        next_dpr = geometry.dpr(next_vector, sp.vector)

        is_sharp = prev_dpr < 0 and not state.prev_sharp
        is_next_sharp = next_dpr < UPCOMING_CORNER_DPR

        if is_sharp or is_next_sharp:
            if next_dpr > SOFT_CORNER_MIN_DPR and total_length - sp.running_length > sp.radius:
                tl, tr = _soft_corner(sp, state.prev_vector, next_vector)
                state.left.append(tl)
                state.right.append(tr)
            else:
                fan_left, fan_right = _corner_fan(sp, state.prev_vector)
                state.left.extend(fan_left)
                state.right.extend(fan_right)
                tl, tr = fan_left[-1], fan_right[-1]

            state.pl = tl
            state.pr = tr
            if is_next_sharp:
                state.prev_sharp = True
            continue

        state.prev_sharp = False

        offset = geometry.per(geometry.lerp(next_vector, sp.vector, next_dpr)) * sp.radius

        tl = sp.point - offset
        if i <= 1 or geometry.dist2(state.pl, tl) > min_distance:
            state.left.append(tl)
            state.pl = tl

        tr = sp.point + offset
        if i <= 1 or geometry.dist2(state.pr, tr) > min_distance:
            state.right.append(tr)
            state.pr = tr

        state.prev_vector = sp.vector

    return _to_array(state.left), _to_array(state.right)
