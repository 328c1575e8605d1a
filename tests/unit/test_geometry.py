"""Tests for per-shape geometry rules."""

import numpy as np
import pytest

from vignettify.config import VignetteShape
from vignettify.core.geometry import (
    GEOMETRIES,
    box_contains,
    diamond_band_extent,
    diamond_contains,
    ellipse_contains,
    equal_inner_size,
    geometry_for,
    independent_inner_size,
    raw_half_axes,
    uniform_band_extent,
)


class TestInnerSize:
    """Tests for inner half-axis derivation."""

    def test_raw_half_axes(self):
        """Half-axes are dimension * coverage / 100 / 2."""
        assert raw_half_axes(200, 100, 50.0) == (50.0, 25.0)

    def test_independent_follows_aspect_ratio(self):
        assert independent_inner_size(200, 100, 80.0) == (80.0, 40.0)

    def test_equal_takes_minimum(self):
        assert equal_inner_size(200, 100, 80.0) == (40.0, 40.0)
        assert equal_inner_size(100, 300, 80.0) == (40.0, 40.0)

    @pytest.mark.parametrize("shape", [VignetteShape.CIRCLE, VignetteShape.SQUARE])
    def test_equal_axis_shapes(self, shape):
        geometry = geometry_for(shape)
        assert geometry.equal_axes
        a, b = geometry.inner_size(300, 120, 60.0)
        assert a == b

    @pytest.mark.parametrize(
        "shape", [VignetteShape.ELLIPSE, VignetteShape.DIAMOND, VignetteShape.RECTANGLE]
    )
    def test_independent_axis_shapes(self, shape):
        geometry = geometry_for(shape)
        assert not geometry.equal_axes
        assert geometry.inner_size(300, 120, 60.0) == (90.0, 36.0)


class TestBandExtent:
    """Tests for band thickness derivation."""

    def test_uniform_band(self):
        assert uniform_band_extent((25.0, 15.0), 4, 100, 50.0) == (4.0, 4.0)

    def test_diamond_band_differs_per_axis(self):
        """A non-square diamond gets a different band along x and y."""
        band_x, band_y = diamond_band_extent((25.0, 15.0), 4, 100, 50.0)
        assert band_x == pytest.approx(4.0)
        assert band_y == pytest.approx(2.4)
        assert band_x != pytest.approx(band_y)

    def test_diamond_band_square_image(self):
        band_x, band_y = diamond_band_extent((25.0, 25.0), 4, 100, 50.0)
        assert band_x == pytest.approx(band_y)

    @pytest.mark.parametrize(
        "shape",
        [
            VignetteShape.CIRCLE,
            VignetteShape.ELLIPSE,
            VignetteShape.SQUARE,
            VignetteShape.RECTANGLE,
        ],
    )
    def test_non_diamond_shapes_are_uniform(self, shape):
        geometry = geometry_for(shape)
        inner = geometry.inner_size(100, 60, 50.0)
        assert geometry.band_extent(inner, 4, 100, 50.0) == (4.0, 4.0)


class TestContains:
    """Tests for containment rules."""

    def test_ellipse_strict(self):
        assert ellipse_contains(0.0, 0.0, 4.0, 2.0)
        assert ellipse_contains(3.9, 0.0, 4.0, 2.0)
        assert not ellipse_contains(4.0, 0.0, 4.0, 2.0)
        assert not ellipse_contains(3.0, 1.5, 4.0, 2.0)

    def test_diamond_strict(self):
        assert diamond_contains(1.0, 0.5, 4.0, 2.0)
        assert not diamond_contains(2.0, 1.0, 4.0, 2.0)
        assert not diamond_contains(3.0, 1.0, 4.0, 2.0)

    def test_box_closed(self):
        assert box_contains(4.0, 2.0, 4.0, 2.0)
        assert box_contains(0.0, 0.0, 4.0, 2.0)
        assert not box_contains(4.01, 0.0, 4.0, 2.0)
        assert not box_contains(0.0, 2.01, 4.0, 2.0)

    def test_vectorized(self):
        x = np.array([0.0, 1.0, 5.0])
        y = np.array([0.0, 1.0, 0.0])
        result = ellipse_contains(x, y, 4.0, 4.0)
        assert result.tolist() == [True, True, False]

    @pytest.mark.parametrize("shape", [VignetteShape.CIRCLE, VignetteShape.SQUARE])
    def test_equal_axes_symmetric_under_swap(self, shape):
        """Swapping x and y (a 90 degree turn) does not change containment."""
        contains = geometry_for(shape).contains
        grid = np.linspace(0.0, 6.0, 25)
        x, y = np.meshgrid(grid, grid)
        assert np.array_equal(contains(x, y, 4.0, 4.0), contains(y, x, 4.0, 4.0))

    def test_every_shape_has_geometry(self):
        assert set(GEOMETRIES) == set(VignetteShape)

    def test_geometry_for_accepts_string_value(self):
        assert geometry_for("diamond") is GEOMETRIES[VignetteShape.DIAMOND]  # type: ignore[arg-type]
