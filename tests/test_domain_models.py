"""Tests for domain models to verify they work correctly."""

import numpy as np
import pytest

from vignettify.domain import GradationTable, Image, parse_color
from vignettify.exceptions import InvalidConfigurationError


class TestImage:
    """Tests for Image class."""

    def test_image_creation(self) -> None:
        """Test basic image creation from an array."""
        pixels = np.zeros((3, 4, 3), dtype=np.uint8)
        image = Image(pixels=pixels)
        assert image.width == 4
        assert image.height == 3
        assert image.pixel_count == 12

    def test_image_copies_source_array(self) -> None:
        """Test that later changes to the source array are not visible."""
        pixels = np.zeros((2, 2, 3), dtype=np.uint8)
        image = Image(pixels=pixels)
        pixels[0, 0] = (255, 255, 255)
        assert image.pixel(0, 0) == (0, 0, 0)

    def test_image_pixels_read_only(self) -> None:
        """Test that pixel data cannot be mutated in place."""
        image = Image.filled(2, 2, (1, 2, 3))
        with pytest.raises(ValueError):
            image.pixels[0, 0] = (9, 9, 9)

    def test_image_immutable(self) -> None:
        """Test that the pixels attribute cannot be replaced."""
        image = Image.filled(2, 2, (1, 2, 3))
        with pytest.raises(AttributeError):
            image.pixels = np.zeros((2, 2, 3), dtype=np.uint8)  # type: ignore

    def test_image_rejects_bad_shape(self) -> None:
        """Test that non-RGB arrays are rejected."""
        with pytest.raises(ValueError, match="height, width, 3"):
            Image(pixels=np.zeros((2, 2), dtype=np.uint8))

    def test_image_rejects_empty(self) -> None:
        """Test that zero-sized images are rejected."""
        with pytest.raises(ValueError, match="positive"):
            Image(pixels=np.zeros((0, 2, 3), dtype=np.uint8))

    def test_from_triples_row_major(self) -> None:
        """Test that triples fill rows first."""
        triples = [(1, 1, 1), (2, 2, 2), (3, 3, 3), (4, 4, 4), (5, 5, 5), (6, 6, 6)]
        image = Image.from_triples(3, 2, triples)
        assert image.pixel(0, 2) == (3, 3, 3)
        assert image.pixel(1, 0) == (4, 4, 4)
        assert image.to_triples() == triples

    def test_from_triples_wrong_count(self) -> None:
        """Test that a mismatched triple count is rejected."""
        with pytest.raises(ValueError, match="Expected 4 RGB triples"):
            Image.from_triples(2, 2, [(0, 0, 0)] * 3)

    def test_equals(self) -> None:
        """Test pixel-wise equality."""
        a = Image.filled(3, 3, (10, 20, 30))
        b = Image.filled(3, 3, (10, 20, 30))
        c = Image.filled(3, 3, (10, 20, 31))
        assert a.equals(b)
        assert not a.equals(c)


class TestGradationTable:
    """Tests for GradationTable class."""

    @pytest.fixture
    def table(self) -> GradationTable:
        """Create a two-step table."""
        return GradationTable(
            major_axes=(10.0, 12.0, 14.0),
            minor_axes=(5.0, 7.0, 9.0),
            mid_major_axes=(11.0, 13.0),
            mid_minor_axes=(6.0, 8.0),
            image_weights=(0.85, 0.15),
            border_weights=(0.15, 0.85),
            band_extent=(4.0, 4.0),
        )

    def test_table_properties(self, table: GradationTable) -> None:
        """Test derived properties."""
        assert table.steps == 2
        assert table.inner_axes == (10.0, 5.0)
        assert table.outer_axes == (14.0, 9.0)
        assert table.axes_at(1) == (12.0, 7.0)
        assert table.weights_at(1) == (0.15, 0.85)

    def test_table_serialization(self, table: GradationTable) -> None:
        """Test table serialization and deserialization."""
        restored = GradationTable.from_dict(table.to_dict())
        assert restored == table

    def test_table_immutable(self, table: GradationTable) -> None:
        """Test that table is immutable."""
        with pytest.raises(AttributeError):
            table.image_weights = (1.0, 0.0)  # type: ignore


class TestParseColor:
    """Tests for parse_color."""

    def test_comma_separated(self) -> None:
        assert parse_color("20, 20, 240") == (20, 20, 240)

    def test_hex(self) -> None:
        assert parse_color("#1414f0") == (20, 20, 240)

    def test_named(self) -> None:
        assert parse_color("black") == (0, 0, 0)

    def test_out_of_range(self) -> None:
        with pytest.raises(InvalidConfigurationError, match="0-255"):
            parse_color("0,0,256")

    def test_wrong_channel_count(self) -> None:
        with pytest.raises(InvalidConfigurationError, match="three channels"):
            parse_color("1,2")

    def test_unknown_name(self) -> None:
        with pytest.raises(InvalidConfigurationError, match="unknown colour"):
            parse_color("not-a-colour")
