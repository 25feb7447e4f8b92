"""Named easing curves on [0, 1].

Used for:
    - Pressure → radius mapping (StrokeOptions.easing)
    - Taper falloff at stroke start/end (CapOptions.easing)

Curves are plain functions so they can be passed directly in options;
YAML presets refer to them by name through get_easing().
"""

import math
from typing import Callable, Dict

EasingFn = Callable[[float], float]


def linear(t: float) -> float:
    return t


def ease_in_quad(t: float) -> float:
    return t * t


def ease_out_quad(t: float) -> float:
    return t * (2 - t)


def ease_in_out_quad(t: float) -> float:
    return 2 * t * t if t < 0.5 else -1 + (4 - 2 * t) * t


def ease_in_cubic(t: float) -> float:
    return t * t * t


def ease_out_cubic(t: float) -> float:
    return (t - 1) ** 3 + 1


def ease_in_out_cubic(t: float) -> float:
    if t < 0.5:
        return 4 * t * t * t
    return (t - 1) * (2 * t - 2) * (2 * t - 2) + 1


def ease_in_sine(t: float) -> float:
    return 1 - math.cos((t * math.pi) / 2)


def ease_out_sine(t: float) -> float:
    return math.sin((t * math.pi) / 2)


def ease_in_out_sine(t: float) -> float:
    return -(math.cos(math.pi * t) - 1) / 2


def ease_in_expo(t: float) -> float:
    return 0.0 if t <= 0 else 2 ** (10 * t - 10)


def ease_out_expo(t: float) -> float:
    return 1.0 if t >= 1 else 1 - 2 ** (-10 * t)


EASINGS: Dict[str, EasingFn] = {
    'linear': linear,
    'ease_in_quad': ease_in_quad,
    'ease_out_quad': ease_out_quad,
    'ease_in_out_quad': ease_in_out_quad,
    'ease_in_cubic': ease_in_cubic,
    'ease_out_cubic': ease_out_cubic,
    'ease_in_out_cubic': ease_in_out_cubic,
    'ease_in_sine': ease_in_sine,
    'ease_out_sine': ease_out_sine,
    'ease_in_out_sine': ease_in_out_sine,
    'ease_in_expo': ease_in_expo,
    'ease_out_expo': ease_out_expo,
}


def get_easing(name: str) -> EasingFn:
    """Look up easing curve by name.

    Parameters
    ----------
    name : str
        Snake-case name (e.g. "ease_out_quad"); camelCase ("easeOutQuad")
        is accepted too

    Returns
    -------
    EasingFn
        Easing function

    Raises
    ------
    ValueError
        If name is unknown
    """
    key = ''.join('_' + c.lower() if c.isupper() else c for c in name).lstrip('_')
    try:
        return EASINGS[key]
    except KeyError:
        raise ValueError(
            f"Unknown easing '{name}'. Expected one of {sorted(EASINGS)}"
        ) from None
