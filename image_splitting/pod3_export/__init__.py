"""
POD 3: Export Module
Handles writing split tiles to disk
"""

from .writer import save_tiles, tile_filename

__all__ = [
    "save_tiles",
    "tile_filename"
]
