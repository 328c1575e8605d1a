"""Gradation table value type.

The table describes ``steps + 1`` nested boundary curves, from the inner
(fully preserved) boundary at step 0 to the outer boundary at step
``steps``, plus a blend weight pair for each of the ``steps`` sub-bands.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class GradationTable:
    """Boundary axes and blend weights derived from one configuration.

    Attributes:
        major_axes: Half-axis along the figure's local x at each boundary
        minor_axes: Half-axis along the figure's local y at each boundary
        mid_major_axes: Local-x half-axis at the middle of each sub-band
        mid_minor_axes: Local-y half-axis at the middle of each sub-band
        image_weights: Weight of the source pixel in each sub-band
        border_weights: Weight of the border colour in each sub-band
        band_extent: Total band thickness along (x, y)
    """

    major_axes: tuple[float, ...]
    minor_axes: tuple[float, ...]
    mid_major_axes: tuple[float, ...]
    mid_minor_axes: tuple[float, ...]
    image_weights: tuple[float, ...]
    border_weights: tuple[float, ...]
    band_extent: tuple[float, float]

    @property
    def steps(self) -> int:
        """Number of sub-bands in the transition."""
        return len(self.image_weights)

    @property
    def inner_axes(self) -> tuple[float, float]:
        """Half-axes of the innermost (step 0) boundary."""
        return (self.major_axes[0], self.minor_axes[0])

    @property
    def outer_axes(self) -> tuple[float, float]:
        """Half-axes of the outermost boundary."""
        return (self.major_axes[-1], self.minor_axes[-1])

    def axes_at(self, step: int) -> tuple[float, float]:
        """Half-axes of the boundary at ``step``."""
        return (self.major_axes[step], self.minor_axes[step])

    def weights_at(self, band: int) -> tuple[float, float]:
        """(image, border) weight pair of sub-band ``band``."""
        return (self.image_weights[band], self.border_weights[band])

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC.

        Returns:
            Dictionary representation of the table
        """
        return {
            "major": list(self.major_axes),
            "minor": list(self.minor_axes),
            "mid_major": list(self.mid_major_axes),
            "mid_minor": list(self.mid_minor_axes),
            "image_weights": list(self.image_weights),
            "border_weights": list(self.border_weights),
            "band_extent": list(self.band_extent),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GradationTable":
        """Deserialize from dictionary.

        Args:
            data: Dictionary representation of a table

        Returns:
            GradationTable instance
        """
        band_x, band_y = data["band_extent"]
        return cls(
            major_axes=tuple(data["major"]),
            minor_axes=tuple(data["minor"]),
            mid_major_axes=tuple(data["mid_major"]),
            mid_minor_axes=tuple(data["mid_minor"]),
            image_weights=tuple(data["image_weights"]),
            border_weights=tuple(data["border_weights"]),
            band_extent=(band_x, band_y),
        )
