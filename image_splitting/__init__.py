"""
Image splitting: decompose decoded raster images into tile grids
"""

from .pod1_image_source import PixelGrid, PixelSource, RasterPixelGrid, load_image, open_raster
from .pod2_splitting import (
    InvalidParameterError,
    SplitConfig,
    SplitEngine,
    SplitResult,
    Tile,
    split_by_size,
    split_uniform,
    stitch_tiles
)

__version__ = "0.1.0"

__all__ = [
    "PixelGrid",
    "PixelSource",
    "RasterPixelGrid",
    "load_image",
    "open_raster",
    "InvalidParameterError",
    "SplitConfig",
    "SplitEngine",
    "SplitResult",
    "Tile",
    "split_by_size",
    "split_uniform",
    "stitch_tiles"
]
