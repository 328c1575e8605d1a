"""Unit tests for the Image I/O layer.

Tests for ImageReader, ImageWriter, and converter functions.
"""

from pathlib import Path

import numpy as np
import pytest
from PIL import Image as PILImage

from vignettify.domain import Image
from vignettify.exceptions import ImageLoadError, UnsupportedImageFormatError
from vignettify.io.converter import (
    ChannelOrder,
    decode_pixel_buffer,
    default_stride,
    domain_to_pil,
    encode_rgb24,
    pil_to_domain,
)
from vignettify.io.reader import ImageReader
from vignettify.io.writer import ImageWriter


@pytest.fixture
def rgb_png(tmp_path: Path) -> Path:
    """Create a 4x3 RGB PNG."""
    path = tmp_path / "rgb.png"
    PILImage.new("RGB", (4, 3), (10, 20, 30)).save(path)
    return path


@pytest.fixture
def rgba_png(tmp_path: Path) -> Path:
    """Create a 4x3 RGBA PNG with partial transparency."""
    path = tmp_path / "rgba.png"
    PILImage.new("RGBA", (4, 3), (10, 20, 30, 40)).save(path)
    return path


@pytest.fixture
def gray_png(tmp_path: Path) -> Path:
    """Create an 8-bit grayscale PNG."""
    path = tmp_path / "gray.png"
    PILImage.new("L", (4, 3), 128).save(path)
    return path


class TestDecodePixelBuffer:
    """Tests for raw buffer normalization."""

    def test_bgr24(self):
        image = decode_pixel_buffer(bytes([1, 2, 3, 4, 5, 6]), 2, 1, 24)
        assert image.to_triples() == [(3, 2, 1), (6, 5, 4)]

    def test_bgra32_drops_alpha(self):
        raw = bytes([1, 2, 3, 255, 4, 5, 6, 0])
        image = decode_pixel_buffer(raw, 2, 1, 32)
        assert image.to_triples() == [(3, 2, 1), (6, 5, 4)]

    def test_rgb_order(self):
        image = decode_pixel_buffer(bytes([1, 2, 3, 4, 5, 6]), 1, 2, 24, ChannelOrder.RGB)
        assert image.to_triples() == [(1, 2, 3), (4, 5, 6)]

    def test_padded_stride(self):
        raw = bytes([1, 2, 3, 0, 4, 5, 6, 0])
        image = decode_pixel_buffer(raw, 1, 2, 24, stride=4)
        assert image.to_triples() == [(3, 2, 1), (6, 5, 4)]

    def test_last_row_without_padding(self):
        raw = bytes([1, 2, 3, 0, 4, 5, 6])
        image = decode_pixel_buffer(raw, 1, 2, 24, stride=4)
        assert image.pixel(1, 0) == (6, 5, 4)

    @pytest.mark.parametrize("bits", [8, 16, 48])
    def test_unsupported_depth(self, bits):
        with pytest.raises(UnsupportedImageFormatError, match="24-bit and 32-bit"):
            decode_pixel_buffer(bytes(64), 2, 2, bits)

    def test_buffer_too_small(self):
        with pytest.raises(ValueError, match="too small"):
            decode_pixel_buffer(bytes(5), 2, 1, 24)

    def test_stride_too_small(self):
        with pytest.raises(ValueError, match="Stride"):
            decode_pixel_buffer(bytes(12), 2, 2, 24, stride=4)

    def test_default_stride(self):
        assert default_stride(5, 24) == 15
        assert default_stride(5, 32) == 20


class TestEncodeRgb24:
    """Tests for flat RGB output."""

    def test_unpadded(self):
        image = Image.from_triples(2, 1, [(1, 2, 3), (4, 5, 6)])
        assert encode_rgb24(image) == bytes([1, 2, 3, 4, 5, 6])

    def test_padded(self):
        image = Image.from_triples(2, 2, [(1, 2, 3), (4, 5, 6), (7, 8, 9), (10, 11, 12)])
        raw = encode_rgb24(image, stride=8)
        assert len(raw) == 16
        assert raw[:8] == bytes([1, 2, 3, 4, 5, 6, 0, 0])
        assert raw[8:] == bytes([7, 8, 9, 10, 11, 12, 0, 0])

    def test_stride_too_small(self):
        with pytest.raises(ValueError, match="Stride"):
            encode_rgb24(Image.filled(2, 1, (0, 0, 0)), stride=5)


class TestPilConversion:
    """Tests for Pillow <-> domain conversion."""

    def test_rgbx_accepted(self):
        pil_image = PILImage.new("RGBX", (2, 2), (1, 2, 3, 0))
        assert pil_to_domain(pil_image).pixel(1, 1) == (1, 2, 3)

    @pytest.mark.parametrize("mode", ["L", "P", "1", "CMYK", "I;16"])
    def test_other_modes_rejected(self, mode):
        pil_image = PILImage.new(mode, (2, 2))
        with pytest.raises(UnsupportedImageFormatError):
            pil_to_domain(pil_image, source="test")

    def test_domain_to_pil(self):
        image = Image.filled(3, 2, (9, 8, 7))
        pil_image = domain_to_pil(image)
        assert pil_image.mode == "RGB"
        assert pil_image.size == (3, 2)
        assert pil_image.getpixel((2, 1)) == (9, 8, 7)


class TestImageReader:
    """Tests for ImageReader class."""

    def test_init(self):
        path = Path("test.png")
        reader = ImageReader(path)
        assert reader._image_path == path
        assert reader._image is None

    def test_load_nonexistent_file(self):
        reader = ImageReader(Path("nonexistent.png"))
        with pytest.raises(FileNotFoundError):
            reader.load()

    def test_load_invalid_file(self, tmp_path: Path):
        path = tmp_path / "not-an-image.png"
        path.write_text("hello")
        with pytest.raises(ImageLoadError):
            ImageReader(path).load()

    def test_properties_before_load(self):
        reader = ImageReader(Path("test.png"))
        with pytest.raises(RuntimeError, match="Image not loaded"):
            _ = reader.size
        with pytest.raises(RuntimeError, match="Image not loaded"):
            reader.read()

    def test_read_rgb(self, rgb_png: Path):
        with ImageReader(rgb_png) as reader:
            assert reader.format == "PNG"
            assert reader.mode == "RGB"
            assert reader.size == (4, 3)
            assert reader.bits_per_pixel == 24
            image = reader.read()
        assert image.width == 4
        assert image.height == 3
        assert set(image.to_triples()) == {(10, 20, 30)}

    def test_read_rgba_discards_alpha(self, rgba_png: Path):
        with ImageReader(rgba_png) as reader:
            assert reader.bits_per_pixel == 32
            image = reader.read()
        assert image.pixel(0, 0) == (10, 20, 30)

    def test_read_grayscale_rejected(self, gray_png: Path):
        with ImageReader(gray_png) as reader:
            assert not reader.is_supported
            assert reader.bits_per_pixel is None
            with pytest.raises(UnsupportedImageFormatError):
                reader.read()

    def test_read_resized(self, rgb_png: Path):
        with ImageReader(rgb_png) as reader:
            image = reader.read_resized(2, 1)
        assert (image.width, image.height) == (2, 1)

    def test_close(self, rgb_png: Path):
        reader = ImageReader(rgb_png)
        reader.load()
        reader.close()
        assert reader._image is None


class TestImageWriter:
    """Tests for ImageWriter class."""

    def test_format_for(self):
        assert ImageWriter.format_for(Path("a.PNG")) == "PNG"
        assert ImageWriter.format_for(Path("a.jpeg")) == "JPEG"
        assert ImageWriter.format_for(Path("a.bmp")) == "BMP"

    def test_unsupported_extension(self):
        with pytest.raises(UnsupportedImageFormatError):
            ImageWriter(Path("out.gif"))

    @pytest.mark.parametrize("suffix", [".png", ".bmp"])
    def test_lossless_roundtrip(self, tmp_path: Path, suffix: str):
        rng = np.random.default_rng(7)
        image = Image(pixels=rng.integers(0, 256, size=(5, 6, 3), dtype=np.uint8))
        path = tmp_path / f"out{suffix}"
        ImageWriter(path).save(image)

        with ImageReader(path) as reader:
            assert reader.read().equals(image)

    def test_jpeg_written(self, tmp_path: Path):
        path = tmp_path / "out.jpg"
        ImageWriter(path).save(Image.filled(8, 8, (200, 100, 50)))
        with PILImage.open(path) as written:
            assert written.format == "JPEG"
            assert written.size == (8, 8)

    def test_get_vignetted_path(self):
        assert ImageWriter.get_vignetted_path(Path("dir/photo.jpg")) == Path("dir/photo-Vignetted.jpg")

    def test_get_vignetted_path_unwritable_extension(self):
        assert ImageWriter.get_vignetted_path(Path("scan.tif")) == Path("scan-Vignetted.png")

    def test_protect_source(self, tmp_path: Path):
        source = tmp_path / "photo.png"
        assert ImageWriter.protect_source(source, source) == tmp_path / "photo_.png"

    def test_protect_source_other_path(self, tmp_path: Path):
        source = tmp_path / "photo.png"
        other = tmp_path / "other.png"
        assert ImageWriter.protect_source(source, other) == other
