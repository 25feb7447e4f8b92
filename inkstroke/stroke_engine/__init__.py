"""Freehand stroke geometry engine.

Turns raw pointer samples (position + optional pressure) into a closed
outline polygon and SVG path data.

Stages:
    - points: resampling, streamlining, running length (get_stroke_points)
    - radii: simulated / real pressure and taper → radius (set_stroke_point_radii)
    - tracks: left / right offset tracks with corner handling
    - outline: caps and dots → closed ring (get_stroke_outline_points)
    - svg_path: smooth and hand-drawn path data
    - pipeline: end-to-end helpers

Invariants:
    - Every stage is pure: inputs are never mutated, outputs are new objects
    - Degenerate geometry (empty input, size <= 0) degrades to empty output
    - Every radius in a non-empty output is >= 0.01
    - Jitter is seeded from the caller's id only; no global random state

Used by:
    - scripts/preview_stroke.py: render presets to SVG
"""

from .outline import get_stroke_outline_points
from .pipeline import (
    get_line_draw_path,
    get_line_indicator_path,
    get_stroke,
    get_stroke_svg_path,
    line_draw_options,
)
from .points import StrokePoint, coerce_samples, get_stroke_points
from .radii import set_stroke_point_radii
from .svg_path import (
    get_draw_line_path_data,
    get_svg_path_from_points,
    get_svg_path_from_stroke_points,
)
from .tracks import get_stroke_outline_tracks

__all__ = [
    'StrokePoint',
    'coerce_samples',
    'get_stroke_points',
    'set_stroke_point_radii',
    'get_stroke_outline_tracks',
    'get_stroke_outline_points',
    'get_svg_path_from_points',
    'get_svg_path_from_stroke_points',
    'get_draw_line_path_data',
    'get_stroke',
    'get_stroke_svg_path',
    'line_draw_options',
    'get_line_draw_path',
    'get_line_indicator_path',
]
