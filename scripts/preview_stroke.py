#!/usr/bin/env python3
"""Stroke preview tool for visual validation.

CLI tool to build stroke outlines from recorded pointer samples using a
named preset, and write them as a standalone SVG document for inspection
in any browser.

Usage:
    # Single preset
    python scripts/preview_stroke.py --samples configs/sample_strokes.yaml \
        --preset pen --output outputs/preview/pen.svg

    # Overlay the resampled centre line
    python scripts/preview_stroke.py --samples configs/sample_strokes.yaml \
        --preset brush --output outputs/preview/brush.svg --show_centerline

    # Hand-drawn polyline style
    python scripts/preview_stroke.py --samples configs/sample_strokes.yaml \
        --line_draw 3.5 --seed shape:abc --output outputs/preview/line.svg

Samples file (YAML):
    strokes:
      - [[x, y, pressure], [x, y, pressure], ...]
      - [{x: 0, y: 0}, {x: 10, y: 4, pressure: 0.6}, ...]

    A bare list of samples is accepted as a single stroke.

Outputs:
    - <output>.svg: outline fills (plus optional centre line overlay)
"""

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Any, List

import numpy as np

# Allow running from a source checkout without installation
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from inkstroke.stroke_engine import pipeline, svg_path
from inkstroke.stroke_engine.points import coerce_samples, get_stroke_points
from inkstroke.utils import fs, geometry, hashing, logging_config, validators


def parse_args(argv=None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Preview freehand strokes as SVG",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )

    parser.add_argument(
        '--samples',
        type=str,
        required=True,
        help='Path to YAML file containing pointer samples'
    )

    # Style (mutually exclusive)
    style_group = parser.add_mutually_exclusive_group()
    style_group.add_argument(
        '--preset',
        type=str,
        default='pen',
        help='Preset name from the presets file, default: pen'
    )
    style_group.add_argument(
        '--line_draw',
        type=float,
        metavar='STROKE_WIDTH',
        help='Render samples as hand-drawn polylines of this stroke width'
    )

    parser.add_argument(
        '--presets_file',
        type=str,
        default='configs/stroke_presets.v1.yaml',
        help='Stroke presets YAML, default: configs/stroke_presets.v1.yaml'
    )
    parser.add_argument(
        '--seed',
        type=str,
        default='preview',
        help='Jitter seed for --line_draw rough outline, default: preview'
    )

    # Output settings
    parser.add_argument(
        '--output',
        type=str,
        default='outputs/preview/stroke.svg',
        help='Output SVG path, default: outputs/preview/stroke.svg'
    )
    parser.add_argument(
        '--margin',
        type=float,
        default=10.0,
        help='Margin around the strokes in stroke units, default: 10'
    )
    parser.add_argument(
        '--fill',
        type=str,
        default='#1d1d1d',
        help='Outline fill color, default: #1d1d1d'
    )
    parser.add_argument(
        '--show_centerline',
        action='store_true',
        help='Overlay the resampled centre line'
    )

    # Logging
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable debug logging'
    )
    parser.add_argument(
        '--log_file',
        type=str,
        default=None,
        help='Also write JSON log lines to this file'
    )

    return parser.parse_args(argv)


def load_strokes_from_file(path: Path) -> List[np.ndarray]:
    """Load sample strokes from YAML.

    Returns
    -------
    List[np.ndarray]
        One (N, 3) sample array per stroke

    Raises
    ------
    ValueError
        If the file does not contain a stroke list
    """
    data: Any = fs.load_yaml(path)

    if isinstance(data, dict):
        if 'strokes' not in data:
            raise ValueError(f"Samples file {path} has no 'strokes' key")
        raw_strokes = data['strokes']
    elif isinstance(data, list):
        raw_strokes = [data]
    else:
        raise ValueError(f"Samples file {path} must be a list or mapping, got {type(data).__name__}")

    if not isinstance(raw_strokes, list):
        raise ValueError(f"'strokes' in {path} must be a list")

    return [coerce_samples(s) for s in raw_strokes]


def build_svg(
    paths: List[str],
    bbox,
    margin: float,
    fill: str,
    centerlines: List[str]
) -> str:
    """Assemble a standalone SVG document."""
    xmin, ymin, xmax, ymax = bbox
    x = xmin - margin
    y = ymin - margin
    w = max(xmax - xmin, 1.0) + 2 * margin
    h = max(ymax - ymin, 1.0) + 2 * margin

    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<svg xmlns="http://www.w3.org/2000/svg" viewBox="{x:.2f} {y:.2f} {w:.2f} {h:.2f}" '
        f'width="{w:.0f}" height="{h:.0f}">',
    ]
    for d in paths:
        if d:
            lines.append(f'  <path d="{d}" fill="{fill}" stroke="none"/>')
    for d in centerlines:
        if d:
            lines.append(f'  <path d="{d}" fill="none" stroke="#e03131" stroke-width="0.5"/>')
    lines.append('</svg>')
    return "\n".join(lines) + "\n"


def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)

    # Setup logging
    log_level = "DEBUG" if args.verbose else "INFO"
    logging_config.setup_logging(
        log_level=log_level,
        log_file=args.log_file,
        json=True,
        context={'app': 'preview_stroke'}
    )
    logger = logging.getLogger(__name__)

    samples_path = Path(args.samples)
    logger.info(f"Loading samples from: {samples_path}")
    strokes = load_strokes_from_file(samples_path)
    logger.info(f"Loaded {len(strokes)} stroke(s)")

    if args.line_draw is not None:
        style = f"line_draw({args.line_draw})"
        options = pipeline.line_draw_options(args.line_draw)
    else:
        style = args.preset
        logger.info(f"Loading preset '{args.preset}' from: {args.presets_file}")
        options = validators.load_stroke_options(args.presets_file, args.preset)

    start_time = time.time()

    outlines = []
    paths = []
    centerlines = []
    with logging_config.log_context(style=style):
        for i, samples in enumerate(strokes):
            outline = pipeline.get_stroke(samples, options)
            outlines.append(outline)

            if args.line_draw is not None:
                _, rough = svg_path.get_draw_line_path_data(
                    f"{args.seed}:{i}", samples[:, :2], args.line_draw
                )
                centerlines.append(rough)
                paths.append(pipeline.get_line_draw_path(samples[:, :2], args.line_draw))
            else:
                paths.append(svg_path.get_svg_path_from_points(outline, closed=True))

            if args.show_centerline:
                centerlines.append(
                    svg_path.get_svg_path_from_stroke_points(get_stroke_points(samples, options))
                )

            logger.debug(f"Stroke {i}: {len(samples)} samples → {len(outline)} outline points")

    build_time = time.time() - start_time
    logger.info(f"Outlines built in {build_time * 1000:.1f}ms")

    all_points = np.vstack(outlines) if outlines else np.zeros((0, 2))
    bbox = geometry.polyline_bbox(all_points)
    digest = hashing.sha256_array(all_points)
    logger.info(f"Outline hash: {digest[:16]} ({len(all_points)} points)")

    svg = build_svg(paths, bbox, args.margin, args.fill, centerlines)

    output_path = fs.atomic_write_text(args.output, svg)
    logger.info(f"Saved SVG: {output_path}")

    logging_config.shutdown()
    return 0


if __name__ == '__main__':
    sys.exit(main())
