"""Vignettify - Apply shaped vignette borders to raster images.

Vignettify keeps the centre of an image untouched and blends the edges
toward a border colour. The transition follows one of five figures
(circle, ellipse, diamond, square, rectangle) and is smoothed with a
raised-cosine weight so no seam is visible at either edge of the band.

Example:
    $ vignettify photo.jpg --shape ellipse --band-width 80

This will create photo-Vignetted.jpg next to the source image.
"""

__version__ = "0.1.0"
__author__ = "Vignettify Developers"

__all__ = ["__author__", "__version__"]
