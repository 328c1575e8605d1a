"""Image reader for loading raster files.

This module provides the ImageReader class for loading image files
and extracting their pixels into domain models.
"""

from pathlib import Path

from PIL import Image as PILImage
from PIL import UnidentifiedImageError

from vignettify.domain import Image
from vignettify.exceptions import ImageLoadError
from vignettify.io.converter import SUPPORTED_MODES, pil_to_domain


class ImageReader:
    """Loads image files and converts them to domain Images.

    Only 24-bit RGB and 32-bit RGBA/RGBX images are accepted; the alpha
    byte of 32-bit images is discarded.

    Example:
        with ImageReader(Path("photo.png")) as reader:
            image = reader.read()
    """

    def __init__(self, image_path: Path) -> None:
        """Initialize the image reader.

        Args:
            image_path: Path to the image file
        """
        self._image_path = image_path
        self._image: PILImage.Image | None = None

    def load(self) -> None:
        """Open and decode the image file.

        Raises:
            FileNotFoundError: If the image file does not exist
            ImageLoadError: If the file is not a readable image
        """
        if not self._image_path.exists():
            raise FileNotFoundError(f"Image file not found: {self._image_path}")

        try:
            image = PILImage.open(self._image_path)
            image.load()
        except (UnidentifiedImageError, OSError) as e:
            raise ImageLoadError(str(self._image_path), str(e)) from e

        self._image = image

    def _require_loaded(self) -> PILImage.Image:
        if self._image is None:
            raise RuntimeError("Image not loaded. Call load() first.")
        return self._image

    @property
    def format(self) -> str:
        """Return the file format reported by Pillow (e.g. 'PNG', 'JPEG').

        Raises:
            RuntimeError: If image has not been loaded yet
        """
        return self._require_loaded().format or "unknown"

    @property
    def mode(self) -> str:
        """Return the Pillow pixel mode (e.g. 'RGB', 'RGBA')."""
        return self._require_loaded().mode

    @property
    def size(self) -> tuple[int, int]:
        """Return (width, height) in pixels."""
        return self._require_loaded().size

    @property
    def bits_per_pixel(self) -> int | None:
        """Return 24 or 32 for supported modes, None otherwise."""
        return SUPPORTED_MODES.get(self.mode)

    @property
    def is_supported(self) -> bool:
        """Whether the pixel mode can be handed to the compositor."""
        return self.mode in SUPPORTED_MODES

    def read(self) -> Image:
        """Convert the loaded image to a domain Image.

        Returns:
            Image with RGB pixels

        Raises:
            RuntimeError: If image has not been loaded yet
            UnsupportedImageFormatError: If the pixel mode is not 24/32-bit
        """
        return pil_to_domain(self._require_loaded(), source=str(self._image_path))

    def read_resized(self, width: int, height: int) -> Image:
        """Read the image resampled to (width, height).

        Used for previews. Unsupported pixel modes are still rejected.
        """
        image = self._require_loaded()
        resized = image.resize((width, height), PILImage.Resampling.LANCZOS)
        return pil_to_domain(resized, source=str(self._image_path))

    def close(self) -> None:
        """Close the image file and free resources."""
        if self._image is not None:
            self._image.close()
            self._image = None

    def __enter__(self) -> "ImageReader":
        """Context manager entry."""
        self.load()
        return self

    def __exit__(self, _exc_type: object, _exc_val: object, _exc_tb: object) -> None:
        """Context manager exit."""
        self.close()
