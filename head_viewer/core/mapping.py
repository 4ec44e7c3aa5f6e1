"""
Value-to-visual mapping.

Normalizes scalar values against the global range and turns them into a
red-to-green sphere color and a clamped sphere scale.
"""

from dataclasses import dataclass
from typing import Tuple

import numpy as np

MIN_SCALE = 0.08
MAX_SCALE = 0.12
BASE_SCALE = 0.1


@dataclass(frozen=True)
class ValueRange:
    """Global scalar bounds over every point and every timestep."""
    min: float
    max: float

    @property
    def span(self) -> float:
        return self.max - self.min


def compute_value_range(values: np.ndarray) -> ValueRange:
    """Compute the global (min, max) of a (n_points, n_times) series array."""
    values = np.asarray(values)
    if values.size == 0:
        raise ValueError("cannot compute a value range of an empty array")
    return ValueRange(min=float(values.min()), max=float(values.max()))


def percentage(values, value_range: ValueRange) -> np.ndarray:
    """
    Position of each value between min (0.0) and max (1.0).

    A degenerate range (min == max) maps every value to 0.0.
    """
    values = np.asarray(values, dtype=np.float64)
    if value_range.span == 0:
        return np.zeros_like(values)
    return (values - value_range.min) / value_range.span


def map_values(values, value_range: ValueRange) -> Tuple[np.ndarray, np.ndarray]:
    """
    Map scalar values to RGBA colors and uniform scale factors.

    Args:
        values: Scalar values, one per point. Values outside the range are
            clamped to it.
        value_range: Normalization domain.

    Returns:
        tuple: (colors, scales). Colors are uint8 RGBA with shape (n, 4),
        red at the minimum and green at the maximum. Scales are
        ``clamp(0.1 - (0.5 - p), 0.08, 0.12)`` with shape (n,).
    """
    p = np.clip(percentage(values, value_range), 0.0, 1.0)

    green = np.rint(p * 255.0)
    colors = np.empty(p.shape + (4,), dtype=np.uint8)
    colors[..., 0] = 255 - green
    colors[..., 1] = green
    colors[..., 2] = 0
    colors[..., 3] = 255

    scales = np.clip(BASE_SCALE - (0.5 - p), MIN_SCALE, MAX_SCALE)
    return colors, scales


def map_value(value: float, value_range: ValueRange) -> Tuple[Tuple[int, int, int, int], float]:
    """Map a single value to an ``(r, g, b, a)`` color and a scale factor."""
    colors, scales = map_values([value], value_range)
    return tuple(int(c) for c in colors[0]), float(scales[0])
