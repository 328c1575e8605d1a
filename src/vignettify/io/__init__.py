"""Image I/O layer for vignettify.

This module handles reading and writing image files using Pillow.
It provides a clean abstraction layer between Pillow and the
domain models.

Key responsibilities:
- Load images and reject unsupported pixel formats
- Normalize raw BGR/BGRA/RGB byte streams to RGB pixels
- Write results as PNG, JPEG or BMP
- Choose output names that never overwrite the source

Key classes:
- ImageReader: Load images into domain models
- ImageWriter: Save domain images
"""

from vignettify.io.converter import ChannelOrder, decode_pixel_buffer, encode_rgb24
from vignettify.io.reader import ImageReader
from vignettify.io.writer import ImageWriter

__all__ = [
    "ChannelOrder",
    "ImageReader",
    "ImageWriter",
    "decode_pixel_buffer",
    "encode_rgb24",
]
