"""Core processing algorithms for vignettify.

This module contains the core algorithms for:

- Shape geometry (inner size, band extent, containment per shape)
- Gradation tables (nested boundaries and raised-cosine weights)
- Coordinate transformation into the rotated, offset figure frame
- Pixel compositing (classification and colour blending)

All functions are designed to be:
- Stateless (safe for use in worker processes)
- Pure (no side effects, new pixel buffers on every call)

Key functions:
- geometry_for: Look up the geometry rules of a shape
- build_gradation_table: Derive boundaries and weights for a config
- to_figure_frame: Map pixel rows/columns into the figure frame
- classify_rows: Label pixels as preserved, blended or border
- apply_vignette: Vignette an in-memory image

Key classes:
- ShapeGeometry: The geometry rules of one shape
- VignetteProcessor: Loads, composites in parallel and saves images
"""

from vignettify.core.compositor import (
    BORDER,
    PRESERVED,
    RegionCounts,
    apply_vignette,
    blend_pixels,
    classify_rows,
    composite_image,
    composite_rows,
    process_chunk,
)
from vignettify.core.geometry import GEOMETRIES, ShapeGeometry, geometry_for
from vignettify.core.gradation import build_gradation_table, validate_config
from vignettify.core.preview import (
    preview_scale_factor,
    preview_size,
    scale_config_to_full_resolution,
)
from vignettify.core.processor import VignetteProcessor, row_chunks
from vignettify.core.transform import figure_center, to_figure_frame

__all__ = [
    # Compositor
    "BORDER",
    "GEOMETRIES",
    "PRESERVED",
    "RegionCounts",
    # Geometry
    "ShapeGeometry",
    # Processor classes
    "VignetteProcessor",
    "apply_vignette",
    "blend_pixels",
    # Gradation
    "build_gradation_table",
    "classify_rows",
    "composite_image",
    "composite_rows",
    # Transform
    "figure_center",
    "geometry_for",
    # Preview
    "preview_scale_factor",
    "preview_size",
    "process_chunk",
    "row_chunks",
    "scale_config_to_full_resolution",
    "to_figure_frame",
    "validate_config",
]
