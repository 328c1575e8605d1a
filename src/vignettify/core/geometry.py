"""Per-shape geometry for vignette boundaries.

Each shape is described by three pure functions:
- inner_size: half-axes of the preserved region for an image and coverage
- band_extent: band thickness along the figure's local x and y axes
- contains: whether figure-frame points lie inside a boundary

The functions are looked up in a closed table keyed by VignetteShape.
``contains`` works element-wise on numpy arrays as well as on floats.
Points must already be folded into the first quadrant (absolute values),
as every figure is symmetric about both local axes.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import numpy as np

from vignettify.config import VignetteShape

InnerSizeFn = Callable[[int, int, float], tuple[float, float]]
BandExtentFn = Callable[[tuple[float, float], int, int, float], tuple[float, float]]
ContainsFn = Callable[[Any, Any, float, float], Any]


def raw_half_axes(width: int, height: int, coverage_percent: float) -> tuple[float, float]:
    """Unconstrained inner half-axes: ``dimension * coverage / 100 / 2``.

    Args:
        width: Image width in pixels
        height: Image height in pixels
        coverage_percent: Preserved region as a percentage of each dimension

    Returns:
        (half_width, half_height) of the preserved region
    """
    return (
        width * coverage_percent / 100.0 / 2.0,
        height * coverage_percent / 100.0 / 2.0,
    )


def independent_inner_size(
    width: int, height: int, coverage_percent: float
) -> tuple[float, float]:
    """Inner half-axes that follow the image aspect ratio."""
    return raw_half_axes(width, height, coverage_percent)


def equal_inner_size(width: int, height: int, coverage_percent: float) -> tuple[float, float]:
    """Inner half-axes forced equal, using the smaller candidate."""
    half_a, half_b = raw_half_axes(width, height, coverage_percent)
    half = min(half_a, half_b)
    return (half, half)


def uniform_band_extent(
    inner_size: tuple[float, float],  # noqa: ARG001
    band_width_pixels: int,
    image_width: int,  # noqa: ARG001
    coverage_percent: float,  # noqa: ARG001
) -> tuple[float, float]:
    """Band of the same pixel thickness along both axes."""
    return (float(band_width_pixels), float(band_width_pixels))


def diamond_band_extent(
    inner_size: tuple[float, float],
    band_width_pixels: int,
    image_width: int,  # noqa: ARG001
    coverage_percent: float,  # noqa: ARG001
) -> tuple[float, float]:
    """Band derived from a linearly extrapolated outer diamond.

    The outer major half-axis lies ``band`` pixels beyond the inner one, so
    the blend weights span the full raised cosine along x. The outer minor
    half-axis keeps the inner diamond's proportions, so the band is thinner
    or thicker along y than along x for non-square images.
    """
    a0, b0 = inner_size
    a_last = a0 + band_width_pixels
    b_last = b0 * a_last / a0
    return (a_last - a0, b_last - b0)


def ellipse_potential(x: Any, y: Any, a: float, b: float) -> Any:
    """Negative inside the ellipse with half-axes (a, b), zero on it."""
    return (x / a) ** 2 + (y / b) ** 2 - 1.0


def diamond_potential(x: Any, y: Any, a: float, b: float) -> Any:
    """Negative inside the diamond with half-diagonals (a, b), zero on it."""
    return x / a + y / b - 1.0


def ellipse_contains(x: Any, y: Any, a: float, b: float) -> Any:
    """Strict containment in an axis-aligned ellipse."""
    return ellipse_potential(x, y, a, b) < 0.0


def diamond_contains(x: Any, y: Any, a: float, b: float) -> Any:
    """Strict containment in an axis-aligned diamond."""
    return diamond_potential(x, y, a, b) < 0.0


def box_contains(x: Any, y: Any, a: float, b: float) -> Any:
    """Containment in the closed box [0, a] x [0, b]."""
    return np.logical_and(
        np.logical_and(x >= 0.0, x <= a),
        np.logical_and(y >= 0.0, y <= b),
    )


@dataclass(frozen=True)
class ShapeGeometry:
    """The three geometry rules of one vignette shape.

    Attributes:
        inner_size: (width, height, coverage) -> inner half-axes
        band_extent: (inner, band, width, coverage) -> band along (x, y)
        contains: (x, y, a, b) -> inside boundary with half-axes (a, b)
        equal_axes: True when both half-axes are always identical
    """

    inner_size: InnerSizeFn
    band_extent: BandExtentFn
    contains: ContainsFn
    equal_axes: bool = False


GEOMETRIES: dict[VignetteShape, ShapeGeometry] = {
    VignetteShape.CIRCLE: ShapeGeometry(
        inner_size=equal_inner_size,
        band_extent=uniform_band_extent,
        contains=ellipse_contains,
        equal_axes=True,
    ),
    VignetteShape.ELLIPSE: ShapeGeometry(
        inner_size=independent_inner_size,
        band_extent=uniform_band_extent,
        contains=ellipse_contains,
    ),
    VignetteShape.DIAMOND: ShapeGeometry(
        inner_size=independent_inner_size,
        band_extent=diamond_band_extent,
        contains=diamond_contains,
    ),
    VignetteShape.SQUARE: ShapeGeometry(
        inner_size=equal_inner_size,
        band_extent=uniform_band_extent,
        contains=box_contains,
        equal_axes=True,
    ),
    VignetteShape.RECTANGLE: ShapeGeometry(
        inner_size=independent_inner_size,
        band_extent=uniform_band_extent,
        contains=box_contains,
    ),
}


def geometry_for(shape: VignetteShape) -> ShapeGeometry:
    """Look up the geometry rules for a shape.

    Args:
        shape: Vignette shape

    Returns:
        ShapeGeometry for the shape
    """
    return GEOMETRIES[VignetteShape(shape)]
