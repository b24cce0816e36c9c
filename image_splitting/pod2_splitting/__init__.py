"""
POD 2: Splitting Module
Handles uniform grid and fixed tile-size splitting of decoded images
"""

from .engine import SplitEngine, split_by_size, split_uniform, stitch_tiles
from .exceptions import InvalidParameterError
from .schemas import SplitConfig, SplitMode, SplitResult, Tile, TileBounds, TilePosition

__all__ = [
    "SplitEngine",
    "SplitConfig",
    "SplitMode",
    "SplitResult",
    "Tile",
    "TileBounds",
    "TilePosition",
    "InvalidParameterError",
    "split_uniform",
    "split_by_size",
    "stitch_tiles"
]
