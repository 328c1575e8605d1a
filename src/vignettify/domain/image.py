"""In-memory RGB image.

An Image is produced once per source load and replaced wholesale by each
transform. Its pixel array is read-only so no caller can observe an
in-place mutation.
"""

from collections.abc import Iterable
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from vignettify.domain.color import RGB


@dataclass(frozen=True, eq=False)
class Image:
    """Row-major RGB image.

    Attributes:
        pixels: uint8 array of shape (height, width, 3), RGB channel order
    """

    pixels: NDArray[np.uint8]

    def __post_init__(self) -> None:
        array = np.array(self.pixels, dtype=np.uint8, copy=True)
        if array.ndim != 3 or array.shape[2] != 3:
            raise ValueError(f"Expected an (height, width, 3) array, got shape {array.shape}")
        if array.shape[0] == 0 or array.shape[1] == 0:
            raise ValueError("Image dimensions must be positive")
        array.setflags(write=False)
        object.__setattr__(self, "pixels", array)

    @property
    def width(self) -> int:
        """Image width in pixels."""
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        """Image height in pixels."""
        return int(self.pixels.shape[0])

    @property
    def pixel_count(self) -> int:
        """Number of pixels (width x height)."""
        return self.width * self.height

    def pixel(self, row: int, col: int) -> RGB:
        """Return the colour at (row, col)."""
        r, g, b = self.pixels[row, col]
        return (int(r), int(g), int(b))

    def to_triples(self) -> list[RGB]:
        """Flatten to a row-major list of RGB triples."""
        return [(int(r), int(g), int(b)) for r, g, b in self.pixels.reshape(-1, 3)]

    def equals(self, other: "Image") -> bool:
        """Check whether two images hold identical pixels."""
        return bool(np.array_equal(self.pixels, other.pixels))

    @classmethod
    def from_triples(cls, width: int, height: int, triples: Iterable[RGB]) -> "Image":
        """Build an image from a row-major sequence of RGB triples.

        Args:
            width: Image width in pixels
            height: Image height in pixels
            triples: width x height colours, row by row

        Returns:
            Image instance

        Raises:
            ValueError: If the number of triples does not match the size
        """
        flat = np.asarray(list(triples), dtype=np.uint8)
        if flat.shape != (width * height, 3):
            raise ValueError(
                f"Expected {width * height} RGB triples for {width}x{height}, "
                f"got array of shape {flat.shape}"
            )
        return cls(pixels=flat.reshape(height, width, 3))

    @classmethod
    def filled(cls, width: int, height: int, color: RGB) -> "Image":
        """Build a single-colour image."""
        pixels = np.empty((height, width, 3), dtype=np.uint8)
        pixels[:, :] = color
        return cls(pixels=pixels)
