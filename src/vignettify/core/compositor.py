"""Per-pixel classification and colour blending.

Every pixel is mapped into the figure frame and classified against the
gradation table:
- inside the innermost boundary: kept as is
- outside the outermost boundary: replaced by the border colour
- in between: blended with the weights of the first (innermost) boundary
  that contains it

Rows are independent, so an image can be composited as a set of row
chunks in any order. ``process_chunk`` is the picklable entry point used
by the worker pool.
"""

import time
import traceback
from dataclasses import dataclass, field
from typing import Any

import numpy as np
from numpy.typing import NDArray

from vignettify.config import VignetteConfig
from vignettify.core.geometry import geometry_for
from vignettify.core.gradation import build_gradation_table
from vignettify.core.transform import to_figure_frame
from vignettify.domain import GradationTable, Image

# Region labels; blended pixels carry their sub-band index (>= 0)
PRESERVED = -1
BORDER = -2


@dataclass
class RegionCounts:
    """Number of pixels falling in each region."""

    preserved: int = 0
    blended: int = 0
    border: int = 0
    per_band: list[int] = field(default_factory=list)

    def add(self, other: "RegionCounts") -> None:
        """Accumulate counts from another chunk."""
        self.preserved += other.preserved
        self.blended += other.blended
        self.border += other.border
        if len(self.per_band) < len(other.per_band):
            self.per_band.extend([0] * (len(other.per_band) - len(self.per_band)))
        for i, count in enumerate(other.per_band):
            self.per_band[i] += count

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {
            "preserved": self.preserved,
            "blended": self.blended,
            "border": self.border,
            "per_band": list(self.per_band),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RegionCounts":
        """Deserialize from dictionary."""
        return cls(
            preserved=data["preserved"],
            blended=data["blended"],
            border=data["border"],
            per_band=list(data["per_band"]),
        )

    @classmethod
    def from_labels(cls, labels: NDArray[np.int32], steps: int) -> "RegionCounts":
        """Count region labels produced by classify_rows."""
        band_labels = labels[labels >= 0]
        return cls(
            preserved=int(np.count_nonzero(labels == PRESERVED)),
            blended=int(band_labels.size),
            border=int(np.count_nonzero(labels == BORDER)),
            per_band=np.bincount(band_labels, minlength=steps).tolist(),
        )


def classify_rows(
    row_start: int,
    row_stop: int,
    width: int,
    height: int,
    config: VignetteConfig,
    table: GradationTable,
) -> NDArray[np.int32]:
    """Label every pixel in rows [row_start, row_stop).

    Boundaries are tested from the innermost outward and the first one
    containing a pixel decides its sub-band. A pixel inside the outer
    boundary that no step claims is labelled BORDER.

    Returns:
        int32 array of shape (row_stop - row_start, width) holding
        PRESERVED, BORDER or a sub-band index in [0, steps)
    """
    rows = np.arange(row_start, row_stop, dtype=np.float64)[:, np.newaxis]
    cols = np.arange(width, dtype=np.float64)[np.newaxis, :]
    x, y = to_figure_frame(rows, cols, width, height, config)

    contains = geometry_for(config.shape).contains
    inside_inner = contains(x, y, *table.inner_axes)
    inside_outer = contains(x, y, *table.outer_axes)

    labels = np.full(x.shape, BORDER, dtype=np.int32)
    pending = np.logical_and(inside_outer, np.logical_not(inside_inner))

    for step in range(1, table.steps + 1):
        if not pending.any():
            break
        hit = np.logical_and(pending, contains(x, y, *table.axes_at(step)))
        labels[hit] = step - 1
        pending &= ~hit

    labels[inside_inner] = PRESERVED
    return labels


def blend_pixels(
    pixels: NDArray[np.uint8],
    labels: NDArray[np.int32],
    table: GradationTable,
    border_color: tuple[int, int, int],
) -> NDArray[np.uint8]:
    """Produce output colours for labelled pixels.

    Blended channels are rounded to the nearest integer and clipped to
    [0, 255].

    Args:
        pixels: Source pixels, shape (rows, width, 3)
        labels: Region labels from classify_rows, shape (rows, width)
        table: Gradation table supplying the blend weights
        border_color: RGB colour outside the outer boundary

    Returns:
        New uint8 array with the same shape as ``pixels``
    """
    out = np.array(pixels, dtype=np.uint8, copy=True)
    border = np.asarray(border_color, dtype=np.float64)

    out[labels == BORDER] = np.asarray(border_color, dtype=np.uint8)

    band_mask = labels >= 0
    if band_mask.any():
        bands = labels[band_mask]
        image_w = np.asarray(table.image_weights, dtype=np.float64)[bands][:, np.newaxis]
        border_w = np.asarray(table.border_weights, dtype=np.float64)[bands][:, np.newaxis]
        mixed = pixels[band_mask].astype(np.float64) * image_w + border * border_w
        out[band_mask] = np.clip(np.rint(mixed), 0, 255).astype(np.uint8)

    return out


def composite_rows(
    pixels: NDArray[np.uint8],
    row_start: int,
    width: int,
    height: int,
    config: VignetteConfig,
    table: GradationTable,
) -> tuple[NDArray[np.uint8], RegionCounts]:
    """Composite a horizontal slice of the image.

    Args:
        pixels: Source rows, shape (n_rows, width, 3)
        row_start: Index of the first row of the slice in the full image
        width: Full image width
        height: Full image height
        config: Vignette configuration
        table: Gradation table for ``config`` at this image size

    Returns:
        (output rows, region counts)
    """
    row_stop = row_start + pixels.shape[0]
    labels = classify_rows(row_start, row_stop, width, height, config, table)
    out = blend_pixels(pixels, labels, table, config.border_color)
    return out, RegionCounts.from_labels(labels, table.steps)


def composite_image(
    image: Image,
    config: VignetteConfig,
    table: GradationTable | None = None,
) -> tuple[Image, RegionCounts]:
    """Composite a whole image in the current process.

    Args:
        image: Source image
        config: Vignette configuration
        table: Prebuilt table (built from ``config`` if None)

    Returns:
        (new image, region counts)

    Raises:
        InvalidConfigurationError: If the configuration is invalid
    """
    if table is None:
        table = build_gradation_table(image.width, image.height, config)

    out, counts = composite_rows(image.pixels, 0, image.width, image.height, config, table)
    return Image(pixels=out), counts


def apply_vignette(image: Image, config: VignetteConfig) -> Image:
    """Return a vignetted copy of ``image``.

    Example:
        config = VignetteConfig(shape=VignetteShape.CIRCLE, band_width_pixels=40)
        result = apply_vignette(image, config)
    """
    result, _ = composite_image(image, config)
    return result


def process_chunk(
    pixels: NDArray[np.uint8],
    row_start: int,
    width: int,
    height: int,
    config_dict: dict[str, Any],
    table_dict: dict[str, Any],
) -> dict[str, Any]:
    """Composite one row chunk.

    Top-level function designed to be picklable for use with ProcessPoolExecutor.

    Args:
        pixels: Source rows of the chunk
        row_start: Index of the chunk's first row in the full image
        width: Full image width
        height: Full image height
        config_dict: Serialized vignette configuration
        table_dict: Serialized gradation table

    Returns:
        Dictionary containing either:
        - Success: {"row_start": int, "pixels": ndarray, "counts": dict, "duration_ms": float}
        - Error: {"error": str, "row_start": int, "traceback": str, "duration_ms": float}
    """
    start_time = time.time()

    try:
        config = VignetteConfig(**config_dict)
        table = GradationTable.from_dict(table_dict)

        out, counts = composite_rows(pixels, row_start, width, height, config, table)

        duration_ms = (time.time() - start_time) * 1000
        return {
            "row_start": row_start,
            "pixels": out,
            "counts": counts.to_dict(),
            "duration_ms": duration_ms,
        }

    except Exception as e:
        duration_ms = (time.time() - start_time) * 1000
        return {
            "error": str(e),
            "row_start": row_start,
            "traceback": traceback.format_exc(),
            "duration_ms": duration_ms,
        }
