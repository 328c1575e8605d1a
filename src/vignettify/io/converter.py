"""Conversion between raw pixel buffers, Pillow images and domain Images.

Decoders commonly hand out 24-bit BGR or 32-bit BGRA rows, possibly
padded to a stride. The compositor only ever sees RGB triples, so
channel reordering and alpha stripping happen here.
"""

from enum import Enum

import numpy as np
from PIL import Image as PILImage

from vignettify.domain import Image
from vignettify.exceptions import UnsupportedImageFormatError

SUPPORTED_BITS_PER_PIXEL = (24, 32)

# Pillow modes accepted as 24-bit (no alpha) or 32-bit (alpha/padding dropped)
SUPPORTED_MODES = {
    "RGB": 24,
    "RGBA": 32,
    "RGBX": 32,
}


class ChannelOrder(str, Enum):
    """Byte order of the colour channels in a raw buffer."""

    BGR = "bgr"
    RGB = "rgb"


def default_stride(width: int, bits_per_pixel: int) -> int:
    """Bytes per row without padding."""
    return (width * bits_per_pixel + 7) // 8


def decode_pixel_buffer(
    raw: bytes,
    width: int,
    height: int,
    bits_per_pixel: int,
    channel_order: ChannelOrder = ChannelOrder.BGR,
    stride: int | None = None,
) -> Image:
    """Normalize a raw 24/32-bit pixel buffer to an RGB Image.

    Args:
        raw: Pixel bytes, row-major
        width: Image width in pixels
        height: Image height in pixels
        bits_per_pixel: 24 (3 bytes/pixel) or 32 (4 bytes/pixel, 4th ignored)
        channel_order: Order of the first three bytes of each pixel
        stride: Bytes per row including padding (default: no padding)

    Returns:
        Image with RGB pixels

    Raises:
        UnsupportedImageFormatError: If bits_per_pixel is not 24 or 32
        ValueError: If the buffer is too small for the given geometry
    """
    if bits_per_pixel not in SUPPORTED_BITS_PER_PIXEL:
        raise UnsupportedImageFormatError(
            f"{bits_per_pixel}bpp buffer",
            "only 24-bit and 32-bit pixel buffers are supported",
        )

    bytes_per_pixel = bits_per_pixel // 8
    row_bytes = default_stride(width, bits_per_pixel)
    if stride is None:
        stride = row_bytes
    if stride < row_bytes:
        raise ValueError(f"Stride {stride} is smaller than a row of {row_bytes} bytes")
    if len(raw) < stride * (height - 1) + row_bytes:
        raise ValueError(
            f"Buffer of {len(raw)} bytes is too small for {width}x{height} at stride {stride}"
        )

    buffer = np.frombuffer(raw, dtype=np.uint8)
    padded = np.zeros(stride * height, dtype=np.uint8)
    available = min(len(buffer), stride * height)
    padded[:available] = buffer[:available]

    rows = padded.reshape(height, stride)[:, :row_bytes]
    pixels = rows.reshape(height, width, bytes_per_pixel)[:, :, :3]

    if channel_order is ChannelOrder.BGR:
        pixels = pixels[:, :, ::-1]

    return Image(pixels=pixels)


def encode_rgb24(image: Image, stride: int | None = None) -> bytes:
    """Serialize an Image to a flat 24-bit RGB buffer.

    Args:
        image: Image to serialize
        stride: Bytes per row; rows are zero-padded up to it

    Returns:
        ``stride * height`` bytes

    Raises:
        ValueError: If stride is smaller than ``width * 3``
    """
    row_bytes = image.width * 3
    if stride is None:
        stride = row_bytes
    if stride < row_bytes:
        raise ValueError(f"Stride {stride} is smaller than a row of {row_bytes} bytes")

    out = np.zeros((image.height, stride), dtype=np.uint8)
    out[:, :row_bytes] = image.pixels.reshape(image.height, row_bytes)
    return out.tobytes()


def pil_to_domain(pil_image: PILImage.Image, source: str = "image") -> Image:
    """Convert a Pillow image to a domain Image.

    Args:
        pil_image: Decoded Pillow image
        source: Name used in error messages

    Returns:
        Image with RGB pixels (alpha discarded)

    Raises:
        UnsupportedImageFormatError: If the mode is not 24/32-bit RGB
    """
    if pil_image.mode not in SUPPORTED_MODES:
        raise UnsupportedImageFormatError(
            source,
            f"pixel mode '{pil_image.mode}' is not a 24-bit or 32-bit colour format",
        )

    array = np.asarray(pil_image, dtype=np.uint8)
    return Image(pixels=array[:, :, :3])


def domain_to_pil(image: Image) -> PILImage.Image:
    """Convert a domain Image to a Pillow RGB image."""
    return PILImage.fromarray(np.ascontiguousarray(image.pixels))
