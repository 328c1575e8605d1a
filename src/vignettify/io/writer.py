"""Image writer for saving vignetted images.

This module provides the ImageWriter class for writing results with the
vignetted naming convention.
"""

from pathlib import Path

from vignettify.domain import Image
from vignettify.exceptions import ImageSaveError, UnsupportedImageFormatError
from vignettify.io.converter import domain_to_pil

# File extensions and the Pillow format used to write them
SAVE_FORMATS = {
    ".png": "PNG",
    ".jpg": "JPEG",
    ".jpeg": "JPEG",
    ".bmp": "BMP",
}


class ImageWriter:
    """Writes domain Images to PNG, JPEG or BMP files.

    Example:
        writer = ImageWriter(Path("output.png"))
        writer.save(image)
    """

    def __init__(self, output_path: Path, jpeg_quality: int = 95) -> None:
        """Initialize the image writer.

        Args:
            output_path: Path where the image will be saved
            jpeg_quality: Quality used when writing JPEG files

        Raises:
            UnsupportedImageFormatError: If the extension is not writable
        """
        self._output_path = output_path
        self._jpeg_quality = jpeg_quality
        self._format = self.format_for(output_path)

    @property
    def output_path(self) -> Path:
        """Destination path."""
        return self._output_path

    @property
    def format(self) -> str:
        """Pillow format name used for saving."""
        return self._format

    @staticmethod
    def format_for(path: Path) -> str:
        """Return the Pillow format for a file extension.

        Raises:
            UnsupportedImageFormatError: If the extension is not PNG, JPEG or BMP
        """
        suffix = path.suffix.lower()
        if suffix not in SAVE_FORMATS:
            raise UnsupportedImageFormatError(
                str(path),
                f"cannot save '{suffix or '(no extension)'}' files; use .png, .jpg or .bmp",
            )
        return SAVE_FORMATS[suffix]

    def save(self, image: Image) -> None:
        """Save the image to the output path.

        Raises:
            ImageSaveError: If the file cannot be written
        """
        pil_image = domain_to_pil(image)
        options = {"quality": self._jpeg_quality} if self._format == "JPEG" else {}

        try:
            pil_image.save(self._output_path, format=self._format, **options)
        except OSError as e:
            raise ImageSaveError(str(self._output_path), str(e)) from e

    @staticmethod
    def get_vignetted_path(input_path: Path) -> Path:
        """Generate output path with vignetted naming convention.

        Converts: photo.jpg -> photo-Vignetted.jpg
                  scan.tif  -> scan-Vignetted.png (unwritable extensions become PNG)

        Args:
            input_path: Original image file path

        Returns:
            Path with -Vignetted suffix before extension
        """
        suffix = input_path.suffix
        if suffix.lower() not in SAVE_FORMATS:
            suffix = ".png"
        return input_path.parent / f"{input_path.stem}-Vignetted{suffix}"

    @staticmethod
    def protect_source(input_path: Path, output_path: Path) -> Path:
        """Avoid overwriting the source image.

        Vignetting is lossy, so when the output would replace the input an
        underscore is appended to the file stem instead.

        Args:
            input_path: Source image path
            output_path: Requested output path

        Returns:
            ``output_path``, or ``<stem>_<ext>`` next to it if it is the source
        """
        try:
            same = output_path.resolve() == input_path.resolve()
        except OSError:
            same = output_path == input_path

        if same:
            return output_path.parent / f"{output_path.stem}_{output_path.suffix}"
        return output_path
