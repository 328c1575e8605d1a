"""Mapping from pixel positions to the figure's local frame."""

import math
from typing import Any

import numpy as np

from vignettify.config import VignetteConfig


def figure_center(width: int, height: int, config: VignetteConfig) -> tuple[float, float]:
    """Centre of the figure in pixel coordinates.

    Offsets are percentages of half the width and half the height.

    Returns:
        (center_x, center_y)
    """
    center_x = width / 2.0 * (1.0 + config.center_offset_x_percent / 100.0)
    center_y = height / 2.0 * (1.0 + config.center_offset_y_percent / 100.0)
    return (center_x, center_y)


def to_figure_frame(
    rows: Any,
    cols: Any,
    width: int,
    height: int,
    config: VignetteConfig,
) -> tuple[Any, Any]:
    """Rotate and fold pixel coordinates into the figure frame.

    ``rows`` and ``cols`` may be scalars or broadcastable numpy arrays.
    The offset from the figure centre is rotated by the negative
    orientation, then folded into the first quadrant.

    Args:
        rows: Pixel row index (or indices)
        cols: Pixel column index (or indices)
        width: Image width in pixels
        height: Image height in pixels
        config: Vignette configuration

    Returns:
        (|x'|, |y'|) in the figure frame
    """
    center_x, center_y = figure_center(width, height, config)
    theta = math.radians(config.effective_orientation)
    cos_t = math.cos(theta)
    sin_t = math.sin(theta)

    dx = np.asarray(cols, dtype=np.float64) - center_x
    dy = np.asarray(rows, dtype=np.float64) - center_y

    x_prime = dx * cos_t + dy * sin_t
    y_prime = -dx * sin_t + dy * cos_t
    return (np.abs(x_prime), np.abs(y_prime))
