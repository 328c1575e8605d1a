"""Domain models for vignettify.

This module contains the value types passed between the I/O adapter,
the table builder and the compositor. All models are designed to be:

- Immutable (frozen dataclasses, read-only pixel arrays)
- Serializable for inter-process communication (parallel processing)
- Independent of Pillow implementation details

Key classes:
- Image: Width, height and an RGB pixel buffer
- GradationTable: Nested boundary axes and blend weights for one config
- RGB: An (r, g, b) triple
"""

from vignettify.domain.color import RGB, parse_color
from vignettify.domain.gradation import GradationTable
from vignettify.domain.image import Image

__all__: list[str] = [
    "RGB",
    "GradationTable",
    "Image",
    "parse_color",
]
