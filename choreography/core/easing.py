"""
Easing curves for path playback.

Easings remap normalized progress (0-1) before it is turned into path time,
so a ball can accelerate out of a kick and settle into a mark. Both ends are
fixed points: every curve maps 0 to 0 and 1 to 1.
"""

from typing import Callable, Dict, List, Tuple, Union

from .exceptions import ParameterError

EasingFn = Callable[[float], float]


def linear(t: float) -> float:
    """No easing."""
    return t


def ease_in(t: float) -> float:
    """Quadratic ease in (slow start, fast end)."""
    return t * t


def ease_out(t: float) -> float:
    """Quadratic ease out (fast start, slow end)."""
    return 1 - (1 - t) * (1 - t)


def ease_in_out(t: float) -> float:
    """Quadratic ease in-out. Symmetric about (0.5, 0.5)."""
    return 2 * t * t if t < 0.5 else 1 - pow(-2 * t + 2, 2) / 2


def ease_in_cubic(t: float) -> float:
    return t * t * t


def ease_out_cubic(t: float) -> float:
    return 1 - pow(1 - t, 3)


def ease_in_out_cubic(t: float) -> float:
    return 4 * t * t * t if t < 0.5 else 1 - pow(-2 * t + 2, 3) / 2


def ease_in_expo(t: float) -> float:
    return 0.0 if t == 0 else pow(2, 10 * t - 10)


def ease_out_expo(t: float) -> float:
    return 1.0 if t == 1 else 1 - pow(2, -10 * t)


def ease_in_out_expo(t: float) -> float:
    if t == 0:
        return 0.0
    if t == 1:
        return 1.0
    if t < 0.5:
        return pow(2, 20 * t - 10) / 2
    return (2 - pow(2, -20 * t + 10)) / 2


def _cubic_bezier_point(t: float, p1: float, p2: float) -> float:
    # Endpoints fixed at 0 and 1
    mt = 1 - t
    return 3 * mt * mt * t * p1 + 3 * mt * t * t * p2 + t * t * t


def bezier_easing(x1: float, y1: float, x2: float, y2: float, t: float) -> float:
    """
    CSS-style cubic bezier easing.

    Control points: (0,0), (x1,y1), (x2,y2), (1,1)

    Args:
        x1, y1: First control point
        x2, y2: Second control point
        t: Progress 0-1

    Returns:
        Eased progress
    """
    if t <= 0:
        return 0.0
    if t >= 1:
        return 1.0

    # Bisect for the curve parameter whose x matches t
    low, high = 0.0, 1.0
    for _ in range(30):
        mid = (low + high) / 2
        if _cubic_bezier_point(mid, x1, x2) < t:
            low = mid
        else:
            high = mid

    return _cubic_bezier_point((low + high) / 2, y1, y2)


# Format: (x1, y1, x2, y2) control points
EASING_PRESETS: Dict[str, Tuple[float, float, float, float]] = {
    "ease": (0.25, 0.1, 0.25, 1.0),
    "easeIn": (0.42, 0.0, 1.0, 1.0),
    "easeOut": (0.0, 0.0, 0.58, 1.0),
    "easeInOut": (0.42, 0.0, 0.58, 1.0),
    "easeInOutSine": (0.37, 0.0, 0.63, 1.0),
    "easeOutBack": (0.34, 1.56, 0.64, 1.0),
    "anticipate": (0.38, -0.4, 0.88, 1.0),
}


SIMPLE_EASINGS: Dict[str, EasingFn] = {
    "linear": linear,
    "ease_in": ease_in,
    "ease_out": ease_out,
    "ease_in_out": ease_in_out,
    "ease_in_cubic": ease_in_cubic,
    "ease_out_cubic": ease_out_cubic,
    "ease_in_out_cubic": ease_in_out_cubic,
    "ease_in_expo": ease_in_expo,
    "ease_out_expo": ease_out_expo,
    "ease_in_out_expo": ease_in_out_expo,
}


def get_easing(easing: Union[str, EasingFn]) -> EasingFn:
    """
    Resolve an easing by name, or pass a callable through.

    Names are looked up in SIMPLE_EASINGS first, then EASING_PRESETS.

    Raises:
        ParameterError: If the name is unknown
    """
    if callable(easing):
        return easing
    if easing in SIMPLE_EASINGS:
        return SIMPLE_EASINGS[easing]
    if easing in EASING_PRESETS:
        x1, y1, x2, y2 = EASING_PRESETS[easing]
        return lambda t: bezier_easing(x1, y1, x2, y2, t)
    raise ParameterError(
        f"Unknown easing '{easing}'",
        parameter="easing",
        available=list_easings(),
    )


def list_easings() -> List[str]:
    """Get list of available easing names."""
    return sorted(set(SIMPLE_EASINGS) | set(EASING_PRESETS))


__all__ = [
    "EasingFn",
    "linear",
    "ease_in",
    "ease_out",
    "ease_in_out",
    "ease_in_cubic",
    "ease_out_cubic",
    "ease_in_out_cubic",
    "ease_in_expo",
    "ease_out_expo",
    "ease_in_out_expo",
    "bezier_easing",
    "EASING_PRESETS",
    "SIMPLE_EASINGS",
    "get_easing",
    "list_easings",
]
