import math
from numbers import Real

import numpy as np
import pandas as pd

from ggspring.typecheck import typecheck


DEFAULT_DIAMETER = 1
DEFAULT_TENSION = 0.75
DEFAULT_N = 50


def check_spring_params(diameter, tension, n):
    if not tension > 0:
        raise ValueError(f"`tension` must be larger than zero, got {tension}.")
    if not diameter > 0:
        raise ValueError(f"`diameter` must be larger than zero, got {diameter}.")
    if not n > 0:
        raise ValueError(f"`n` must be larger than zero, got {n}.")


@typecheck
def create_spring(x: Real, y: Real, xend: Real, yend: Real, diameter: Real = DEFAULT_DIAMETER, tension: Real = DEFAULT_TENSION, n: Real = DEFAULT_N) -> pd.DataFrame:
    """Approximate a coil spring running from (x, y) to (xend, yend) with a polyline.

    The spring makes one revolution every ``diameter * tension`` units of length
    and is sampled with ``n`` points per revolution. The number of points is
    rounded up, so a spring between two identical points has no points at all.

    Returns a data frame with columns ``x`` and ``y`` in drawing order.
    """
    check_spring_params(diameter, tension, n)
    if not all(math.isfinite(v) for v in (x, y, xend, yend)):
        raise ValueError(f"Spring endpoints must be finite, got ({x}, {y}) -> ({xend}, {yend}).")

    length = math.hypot(xend - x, yend - y)
    n_revolutions = length / (diameter * tension)
    n_points = math.ceil(n * n_revolutions)

    radians = np.linspace(0, n_revolutions * 2 * np.pi, n_points)
    centers_x = np.linspace(x, xend, n_points)
    centers_y = np.linspace(y, yend, n_points)
    return pd.DataFrame({
        "x": np.cos(radians) * diameter / 2 + centers_x,
        "y": np.sin(radians) * diameter / 2 + centers_y,
    })
