"""inkstroke: pressure-sensitive freehand stroke outlines.

This package turns sparse, noisy pointer samples into closed outline
polygons and SVG path data that render as natural pen strokes.

Architecture layers (strict one-way dependency):
    scripts/ → inkstroke/stroke_engine/ → inkstroke/utils/

Key invariants:
    - Points are float64 numpy arrays; polylines have shape (N, 2)
    - Options are validated, immutable pydantic models
    - YAML-only configs
    - Pure, deterministic computation (no I/O in stroke_engine)
"""

__version__ = "1.0.0"

from .stroke_engine import (
    StrokePoint,
    get_draw_line_path_data,
    get_line_draw_path,
    get_line_indicator_path,
    get_stroke,
    get_stroke_outline_points,
    get_stroke_outline_tracks,
    get_stroke_points,
    get_stroke_svg_path,
    get_svg_path_from_points,
    get_svg_path_from_stroke_points,
    set_stroke_point_radii,
)
from .utils.validators import CapOptions, StrokeOptions

__all__ = [
    'CapOptions',
    'StrokeOptions',
    'StrokePoint',
    'get_stroke_points',
    'set_stroke_point_radii',
    'get_stroke_outline_tracks',
    'get_stroke_outline_points',
    'get_svg_path_from_points',
    'get_svg_path_from_stroke_points',
    'get_draw_line_path_data',
    'get_stroke',
    'get_stroke_svg_path',
    'get_line_draw_path',
    'get_line_indicator_path',
]
