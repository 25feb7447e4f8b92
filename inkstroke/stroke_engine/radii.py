"""Radius profiling: pressure (real or simulated) and taper → stroke radius.

radius = size · easing(0.5 − thinning · (0.5 − pressure))

Simulated pressure treats fast movement (large spacing between stroke
points) as light pressure. Real pressure is smoothed toward the previous
value so single noisy samples do not bulge the outline.

Taper zones shrink the radius near the start / end of the stroke by the
smaller of the two taper easing curves, evaluated at the normalized distance
into the zone.
"""

from dataclasses import replace
from typing import List, Tuple, Union

from ..utils import easings, validators
from .points import StrokePoint

# Rate of change for smoothed / simulated pressure
RATE_OF_PRESSURE_CHANGE = 0.275

# Initial pressure is estimated from points within this many sizes of the start
INITIAL_PRESSURE_SPAN = 5.0

# Blend weight for real pressure while estimating the initial pressure
INITIAL_PRESSURE_BLEND = 0.5

MIN_RADIUS = 0.01


def resolve_taper(
    taper: Union[bool, float],
    size: float,
    total_length: float
) -> float:
    """Convert a taper setting to a distance.

    Parameters
    ----------
    taper : bool or float
        False → 0 (off); True → max(size, total_length) (full length);
        number → distance as given
    size : float
        Stroke size
    total_length : float
        Running length of the last stroke point

    Returns
    -------
    float
        Taper distance (0 means no taper)
    """
    if taper is False:
        return 0.0
    if taper is True:
        return max(size, total_length)
    return float(taper)


def resolve_tapers(
    options: validators.StrokeOptions,
    total_length: float
) -> Tuple[float, float]:
    """Taper distances (start, end) for a stroke of total_length."""
    return (
        resolve_taper(options.start.taper, options.size, total_length),
        resolve_taper(options.end.taper, options.size, total_length),
    )


def _radius(options: validators.StrokeOptions, pressure: float) -> float:
    return options.size * options.easing(0.5 - options.thinning * (0.5 - pressure))


def set_stroke_point_radii(
    stroke_points: List[StrokePoint],
    options: validators.StrokeOptionsLike = None
) -> List[StrokePoint]:
    """Compute the radius of every stroke point.

    Parameters
    ----------
    stroke_points : List[StrokePoint]
        Output of get_stroke_points()
    options : StrokeOptions, dict or None
        Uses size, thinning, simulate_pressure, easing, start/end taper

    Returns
    -------
    List[StrokePoint]
        New stroke points with radius populated (input is not modified)

    Notes
    -----
    Strokes with real pressure that are shorter than `size` get a uniform
    radius from their maximum pressure, since there is too little movement
    to model anything else.
    """
    opts = validators.resolve_stroke_options(options)

    if not stroke_points:
        return []

    size = opts.size
    thinning = opts.thinning
    simulate = opts.simulate_pressure
    total_length = stroke_points[-1].running_length

    if size <= 0:
        return [replace(sp, radius=MIN_RADIUS) for sp in stroke_points]

    if not simulate and total_length < size:
        max_pressure = max(sp.pressure for sp in stroke_points)
        radius = max(MIN_RADIUS, _radius(opts, max_pressure))
        return [replace(sp, pressure=max_pressure, radius=radius) for sp in stroke_points]

    # Estimate initial pressure from the start of the stroke; drawn lines
    # almost always start slow, which would otherwise leave a dot
    prev_pressure = stroke_points[0].pressure
    for sp in stroke_points:
        if sp.running_length > size * INITIAL_PRESSURE_SPAN:
            break
        spacing = min(1.0, sp.distance / size)
        if simulate:
            rp = min(1.0, 1.0 - spacing)
            p = min(1.0, prev_pressure + (rp - prev_pressure) * (spacing * RATE_OF_PRESSURE_CHANGE))
        else:
            p = min(1.0, prev_pressure + (sp.pressure - prev_pressure) * INITIAL_PRESSURE_BLEND)
        prev_pressure = prev_pressure + (p - prev_pressure) * 0.5

    radii = []
    for sp in stroke_points:
        if not thinning:
            radii.append(max(MIN_RADIUS, size / 2))
            continue

        spacing = min(1.0, sp.distance / size)
        if simulate:
            rp = min(1.0, 1.0 - spacing)
            pressure = min(1.0, prev_pressure + (rp - prev_pressure) * (spacing * RATE_OF_PRESSURE_CHANGE))
        else:
            pressure = min(1.0, prev_pressure + (sp.pressure - prev_pressure) * (spacing * RATE_OF_PRESSURE_CHANGE))

        radii.append(max(MIN_RADIUS, _radius(opts, pressure)))
        prev_pressure = pressure

    taper_start, taper_end = resolve_tapers(opts, total_length)

    if taper_start or taper_end:
        start_ease = opts.start.easing or easings.ease_out_quad
        end_ease = opts.end.easing or easings.ease_out_cubic

        for i, sp in enumerate(stroke_points):
            remaining = total_length - sp.running_length
            ts = start_ease(sp.running_length / taper_start) if sp.running_length < taper_start else 1.0
            te = end_ease(remaining / taper_end) if remaining < taper_end else 1.0
            radii[i] = max(MIN_RADIUS, radii[i] * min(ts, te))

    return [replace(sp, radius=r) for sp, r in zip(stroke_points, radii)]
