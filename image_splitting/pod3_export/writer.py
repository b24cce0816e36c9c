"""
Tile Writer - persists split tiles as numbered image files
"""

import logging
from pathlib import Path
from typing import List, Optional, Sequence, Union
import os

from PIL import Image
from tqdm import tqdm

from ..common.config import settings
from ..pod2_splitting.schemas import Tile

logger = logging.getLogger(__name__)

# Pillow format name -> file extension
FORMAT_EXTENSIONS = {
    "PNG": "png",
    "TIFF": "tif",
    "WEBP": "webp",
    "BMP": "bmp",
}


def tile_filename(tile: Tile, prefix: str = "tile", extension: str = "png") -> str:
    """Build the file name for a tile, e.g. tile_001_002.png"""
    return f"{prefix}_{tile.position.to_string()}.{extension}"


def save_tiles(
    tiles: Sequence[Tile],
    output_dir: Union[str, os.PathLike],
    prefix: str = "tile",
    image_format: Optional[str] = None
) -> List[Path]:
    """
    Save tiles to disk

    Args:
        tiles: Tiles to write
        output_dir: Directory for output tiles (created if missing)
        prefix: File name prefix
        image_format: Pillow format name (settings.output_format if omitted)

    Returns:
        Paths of the written files, in tile order
    """
    image_format = (image_format or settings.output_format).upper()
    if image_format not in FORMAT_EXTENSIONS:
        raise ValueError(
            f"Unsupported output format: {image_format} "
            f"(expected one of {sorted(FORMAT_EXTENSIONS)})"
        )
    extension = FORMAT_EXTENSIONS[image_format]

    out_dir = Path(output_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    paths = []
    for tile in tqdm(tiles, desc="Saving tiles", disable=not settings.show_progress):
        if tile.width == 0 or tile.height == 0:
            raise ValueError(f"Cannot save empty tile {tile.position.to_string()} ({tile.width}x{tile.height})")

        tile_path = out_dir / tile_filename(tile, prefix, extension)
        Image.fromarray(tile.pixels).save(tile_path, format=image_format)
        paths.append(tile_path)

    logger.info(f"Saved {len(paths)} tiles to {out_dir}")
    return paths
