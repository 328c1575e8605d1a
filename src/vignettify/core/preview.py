"""Preview sizing and preview-to-full-resolution scaling.

Settings are usually tuned on a reduced preview that fits a square
viewport. Percent-based settings carry over to the full image unchanged;
pixel-based ones (band width and gradation steps) are divided by the
preview scale factor so the saved image looks like the preview.
"""

from vignettify.config import VignetteConfig


def preview_size(width: int, height: int, viewport: int = 600) -> tuple[int, int]:
    """Fit an image into a square viewport, keeping its aspect ratio.

    The longer side becomes ``viewport``; the shorter one is scaled with
    integer arithmetic.

    Args:
        width: Original width in pixels
        height: Original height in pixels
        viewport: Viewport side in pixels

    Returns:
        (preview_width, preview_height), each at least 1
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Image dimensions must be positive, got {width}x{height}")

    if width > height:
        scaled_width = viewport
        scaled_height = height * viewport // width
    else:
        scaled_height = viewport
        scaled_width = width * viewport // height

    return (max(scaled_width, 1), max(scaled_height, 1))


def preview_scale_factor(
    width: int, height: int, preview_width: int, preview_height: int
) -> float:
    """Uniform scale factor between an image and its preview."""
    return min(preview_width / width, preview_height / height)


def scale_config_to_full_resolution(config: VignetteConfig, scale_factor: float) -> VignetteConfig:
    """Map settings tuned on a preview to the full-resolution image.

    Args:
        config: Configuration as tuned on the preview
        scale_factor: Preview size divided by original size

    Returns:
        New configuration with band width and step count rescaled

    Raises:
        ValueError: If the scale factor is not positive
    """
    if scale_factor <= 0:
        raise ValueError(f"Scale factor must be positive, got {scale_factor}")

    return config.model_copy(
        update={
            "band_width_pixels": max(1, round(config.band_width_pixels / scale_factor)),
            "gradation_steps": max(1, round(config.gradation_steps / scale_factor)),
        }
    )
