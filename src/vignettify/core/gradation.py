"""Gradation table construction.

The transition band is split into ``steps`` nested sub-bands. Each
sub-band gets a blend weight from a raised cosine evaluated at its
midpoint: ``0.5 * (1 + cos(pi / band * (mid_major - a0)))``. Unlike a
linear ramp, the raised cosine has a continuous first derivative at both
edges of the band, so neither the inner nor the outer boundary shows a
visible seam.
"""

import math

from vignettify.config import VignetteConfig
from vignettify.core.geometry import geometry_for
from vignettify.domain import GradationTable
from vignettify.exceptions import InvalidConfigurationError


def validate_config(width: int, height: int, config: VignetteConfig) -> None:
    """Reject configurations that cannot produce a finite table.

    Args:
        width: Image width in pixels
        height: Image height in pixels
        config: Vignette configuration

    Raises:
        InvalidConfigurationError: If band width, step count or image size
            is not positive
    """
    if width <= 0 or height <= 0:
        raise InvalidConfigurationError("image", f"dimensions must be positive, got {width}x{height}")
    if config.band_width_pixels <= 0:
        raise InvalidConfigurationError(
            "band_width_pixels", f"must be > 0, got {config.band_width_pixels}"
        )
    if config.gradation_steps <= 0:
        raise InvalidConfigurationError(
            "gradation_steps", f"must be > 0, got {config.gradation_steps}"
        )


def build_gradation_table(width: int, height: int, config: VignetteConfig) -> GradationTable:
    """Build the boundary axes and blend weights for one configuration.

    Args:
        width: Image width in pixels
        height: Image height in pixels
        config: Vignette configuration

    Returns:
        GradationTable with steps + 1 boundaries and steps weight pairs

    Raises:
        InvalidConfigurationError: If the configuration is invalid or the
            geometry collapses to a non-positive inner axis
    """
    validate_config(width, height, config)

    geometry = geometry_for(config.shape)
    steps = config.gradation_steps
    band = config.band_width_pixels

    a0, b0 = geometry.inner_size(width, height, config.coverage_percent)
    if not (a0 > 0.0 and b0 > 0.0 and math.isfinite(a0) and math.isfinite(b0)):
        raise InvalidConfigurationError(
            "coverage_percent",
            f"inner region collapses to half-axes ({a0:g}, {b0:g})",
        )

    band_x, band_y = geometry.band_extent((a0, b0), band, width, config.coverage_percent)
    if not (band_x > 0.0 and band_y > 0.0 and math.isfinite(band_x) and math.isfinite(band_y)):
        raise InvalidConfigurationError(
            "band_width_pixels",
            f"band extent ({band_x:g}, {band_y:g}) is not positive",
        )

    step_x = band_x / steps
    step_y = band_y / steps

    major = tuple(a0 + i * step_x for i in range(steps + 1))
    minor = tuple(b0 + i * step_y for i in range(steps + 1))
    mid_major = tuple(a0 + (i + 0.5) * step_x for i in range(steps))
    mid_minor = tuple(b0 + (i + 0.5) * step_y for i in range(steps))

    image_weights = tuple(
        0.5 * (1.0 + math.cos(math.pi / band * (mid - a0))) for mid in mid_major
    )
    border_weights = tuple(1.0 - w for w in image_weights)

    return GradationTable(
        major_axes=major,
        minor_axes=minor,
        mid_major_axes=mid_major,
        mid_minor_axes=mid_minor,
        image_weights=image_weights,
        border_weights=border_weights,
        band_extent=(band_x, band_y),
    )
