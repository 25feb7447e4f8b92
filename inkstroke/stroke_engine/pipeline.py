"""End-to-end stroke pipeline helpers.

Chains the stages:
    raw samples → get_stroke_points → set_stroke_point_radii
                → get_stroke_outline_points → get_svg_path_from_points

and provides the "line draw" style used for polylines drawn in a
hand-drawn look (fixed thinning, no streamline, complete stroke).
"""

import logging
from typing import Sequence

import numpy as np

from ..utils import geometry, validators
from .outline import get_stroke_outline_points
from .points import RawSamples, get_stroke_points
from .radii import set_stroke_point_radii
from .svg_path import (
    get_svg_path_from_points,
    get_svg_path_from_stroke_points,
    precise,
)

logger = logging.getLogger(__name__)

LINE_DRAW_THINNING = 0.4
LINE_DRAW_SMOOTHING = 0.5


def get_stroke(
    samples: RawSamples,
    options: validators.StrokeOptionsLike = None
) -> np.ndarray:
    """Outline polygon of a freehand stroke.

    Parameters
    ----------
    samples : array or sequence
        Raw (x, y[, pressure]) samples
    options : StrokeOptions, dict or None
        Stroke options

    Returns
    -------
    np.ndarray
        Outline ring, shape (M, 2)
    """
    opts = validators.resolve_stroke_options(options)
    stroke_points = set_stroke_point_radii(get_stroke_points(samples, opts), opts)
    outline = get_stroke_outline_points(stroke_points, opts)
    logger.debug(f"Stroke: {len(stroke_points)} stroke points → {len(outline)} outline points")
    return outline


def get_stroke_svg_path(
    samples: RawSamples,
    options: validators.StrokeOptionsLike = None
) -> str:
    """Closed smooth SVG path of a freehand stroke outline."""
    return get_svg_path_from_points(get_stroke(samples, options), closed=True)


def line_draw_options(stroke_width: float) -> validators.StrokeOptions:
    """Options for drawing a polyline in the hand-drawn style."""
    return validators.StrokeOptions(
        size=stroke_width,
        thinning=LINE_DRAW_THINNING,
        streamline=0.0,
        smoothing=LINE_DRAW_SMOOTHING,
        simulate_pressure=True,
        last=True,
    )


def get_line_draw_path(vertices: Sequence, stroke_width: float) -> str:
    """Closed outline path of a polyline drawn in the hand-drawn style.

    Parameters
    ----------
    vertices : sequence or np.ndarray
        Polyline vertices, shape (N, 2)
    stroke_width : float
        Stroke diameter

    Returns
    -------
    str
        Closed path data; "" if the outline has fewer than 2 points
    """
    opts = line_draw_options(stroke_width)
    return get_stroke_svg_path(geometry.as_polyline(vertices), opts)


def get_line_indicator_path(
    vertices: Sequence,
    stroke_width: float,
    dash: str = "draw"
) -> str:
    """Centre-line path of a polyline.

    The "draw" dash style follows the resampled stroke points so the
    indicator matches the hand-drawn outline; any other style is the
    straight polyline through the vertices.
    """
    pts = geometry.as_polyline(vertices)

    if dash == "draw":
        opts = line_draw_options(stroke_width)
        return get_svg_path_from_stroke_points(get_stroke_points(pts, opts))

    if len(pts) < 2:
        return ""
    commands = [f"M{precise(pts[0])}"] + [f"L{precise(p)}" for p in pts[1:]]
    return " ".join(commands)
