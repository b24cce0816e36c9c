"""
POD 1: Image Source Module
Handles image decoding and read-only pixel grid access
"""

from .pixel_grid import PixelGrid, PixelSource, to_rgba
from .loader import RasterPixelGrid, load_image, open_raster

__all__ = [
    "PixelGrid",
    "PixelSource",
    "RasterPixelGrid",
    "load_image",
    "open_raster",
    "to_rgba"
]
