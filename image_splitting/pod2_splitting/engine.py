"""
Split Engine - Core image splitting functionality
"""

import logging
import os
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np

from .geometry import (
    TileLayout,
    calculate_grid_size,
    sized_grid,
    uniform_grid,
    validate_dimension
)
from .schemas import SplitConfig, SplitMode, SplitResult, Tile, TileBounds, TilePosition
from ..common.config import settings
from ..pod1_image_source import PixelGrid, PixelSource, load_image

logger = logging.getLogger(__name__)

ImageInput = Union[PixelSource, np.ndarray, str, os.PathLike]


def resolve_source(image: ImageInput) -> PixelSource:
    """
    Turn a path, array or pixel source into something regions can be read from

    Args:
        image: Path to an image file, RGBA/RGB/gray uint8 array, or PixelSource

    Returns:
        PixelSource
    """
    if isinstance(image, (str, os.PathLike)):
        return load_image(image)
    if isinstance(image, np.ndarray):
        return PixelGrid.from_array(image)
    if isinstance(image, PixelSource):
        return image
    raise TypeError(f"Unsupported image input: {type(image).__name__}")


class SplitEngine:
    """
    Engine for splitting decoded images into tile grids
    Supports uniform grids and fixed tile sizes, with optional parallel extraction
    """

    def __init__(self, config: Optional[SplitConfig] = None):
        """
        Initialize split engine

        Args:
            config: Split configuration
        """
        self.config = config or SplitConfig()
        self._executor: Optional[ThreadPoolExecutor] = None

    def split_uniform(
        self,
        image: ImageInput,
        rows: Optional[int] = None,
        cols: Optional[int] = None
    ) -> SplitResult:
        """
        Split an image into rows x cols equal tiles

        Tile size is floor(width / cols) x floor(height / rows); the
        remainder on the right and bottom edges is not covered.

        Args:
            image: Image to split
            rows: Grid rows (config default if omitted)
            cols: Grid columns (config default if omitted)

        Returns:
            SplitResult with rows * cols tiles
        """
        rows = validate_dimension("rows", self.config.grid_rows if rows is None else rows)
        cols = validate_dimension("cols", self.config.grid_cols if cols is None else cols)
        source = resolve_source(image)

        layout = uniform_grid(source.width, source.height, rows, cols)
        return self._run(source, SplitMode.UNIFORM, (rows, cols), layout)

    def split_by_size(
        self,
        image: ImageInput,
        tile_width: Optional[int] = None,
        tile_height: Optional[int] = None
    ) -> SplitResult:
        """
        Split an image into tiles of a fixed size

        The last column and row are clamped to the remaining pixels, so
        the tiles cover the image exactly once.

        Args:
            image: Image to split
            tile_width: Tile width in pixels (config default if omitted)
            tile_height: Tile height in pixels (config default if omitted)

        Returns:
            SplitResult with ceil(width / tile_width) * ceil(height / tile_height) tiles
        """
        tile_width = validate_dimension(
            "tile_width", self.config.tile_width if tile_width is None else tile_width
        )
        tile_height = validate_dimension(
            "tile_height", self.config.tile_height if tile_height is None else tile_height
        )
        source = resolve_source(image)

        grid_size = calculate_grid_size(source.width, source.height, tile_width, tile_height)
        layout = sized_grid(source.width, source.height, tile_width, tile_height)
        return self._run(source, SplitMode.SIZED, grid_size, layout)

    def _run(
        self,
        source: PixelSource,
        mode: SplitMode,
        grid_size: Tuple[int, int],
        layout: TileLayout
    ) -> SplitResult:
        """Extract every tile of a layout and wrap them in a result"""
        start_time = time.time()
        regions = list(layout)

        if self.config.parallel and len(regions) >= settings.parallel_min_tiles:
            tiles = self._extract_parallel(source, regions)
        else:
            tiles = [
                self._extract_tile(source, index, position, bounds)
                for index, (position, bounds) in enumerate(regions)
            ]

        processing_time = time.time() - start_time
        rows, cols = grid_size

        result = SplitResult(
            mode=mode,
            tiles=tiles,
            grid_size=grid_size,
            image_size=(source.width, source.height),
            total_tiles=len(tiles),
            processing_time=processing_time
        )

        logger.info(
            f"Split {source.width}x{source.height} image into {rows}x{cols} grid "
            f"({len(tiles)} tiles, {mode.value}) in {processing_time:.3f} seconds"
        )

        return result

    def _extract_parallel(
        self,
        source: PixelSource,
        regions: Sequence[Tuple[TilePosition, TileBounds]]
    ) -> List[Tile]:
        """
        Extract tiles on the thread pool

        Each tile lands in the slot of its row-major index, so the
        output order never depends on completion order.
        """
        executor = self._get_executor()
        tiles: List[Optional[Tile]] = [None] * len(regions)

        futures = {
            executor.submit(self._extract_tile, source, index, position, bounds): index
            for index, (position, bounds) in enumerate(regions)
        }
        try:
            for future in as_completed(futures):
                tiles[futures[future]] = future.result()
        except Exception:
            for future in futures:
                future.cancel()
            raise

        logger.debug(f"Extracted {len(tiles)} tiles on {settings.max_workers} workers")
        return tiles

    def _extract_tile(
        self,
        source: PixelSource,
        index: int,
        position: TilePosition,
        bounds: TileBounds
    ) -> Tile:
        """
        Extract a single tile from the image

        Args:
            source: Pixel source
            index: Row-major tile index
            position: Tile position
            bounds: Tile bounds

        Returns:
            Tile owning its pixel buffer
        """
        pixels = source.extract_region(bounds.x, bounds.y, bounds.width, bounds.height)
        return Tile(index=index, position=position, bounds=bounds, pixels=pixels)

    def _get_executor(self) -> ThreadPoolExecutor:
        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=settings.max_workers)
        return self._executor

    def cleanup(self):
        """Cleanup resources"""
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    def __enter__(self) -> "SplitEngine":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.cleanup()


def split_uniform(image: ImageInput, rows: int = 3, cols: int = 3) -> List[Tile]:
    """
    Split an image into a rows x cols grid of equal tiles (3x3 by default)

    Args:
        image: Path, uint8 array or PixelSource

    Returns:
        rows * cols tiles in row-major order
    """
    with SplitEngine() as engine:
        return engine.split_uniform(image, rows, cols).tiles


def split_by_size(image: ImageInput, tile_width: int, tile_height: int) -> List[Tile]:
    """
    Split an image into tiles of tile_width x tile_height pixels

    Args:
        image: Path, uint8 array or PixelSource
        tile_width: Tile width in pixels, at least 1
        tile_height: Tile height in pixels, at least 1

    Returns:
        Tiles in row-major order; edge tiles are clamped to the image
    """
    with SplitEngine() as engine:
        return engine.split_by_size(image, tile_width, tile_height).tiles


def stitch_tiles(
    tiles: Sequence[Tile],
    width: Optional[int] = None,
    height: Optional[int] = None
) -> np.ndarray:
    """
    Paste tiles back into a single RGBA image

    Args:
        tiles: Tiles to reassemble
        width: Canvas width (tile extent if omitted)
        height: Canvas height (tile extent if omitted)

    Returns:
        uint8 array of shape (height, width, 4); uncovered pixels are zero
    """
    if not tiles:
        raise ValueError("No tiles to stitch")

    if width is None:
        width = max(tile.bounds.x + tile.bounds.width for tile in tiles)
    if height is None:
        height = max(tile.bounds.y + tile.bounds.height for tile in tiles)

    canvas = np.zeros((height, width, 4), dtype=np.uint8)
    filled = np.zeros((height, width), dtype=bool)

    for tile in tiles:
        x_start, y_start, x_end, y_end = tile.bounds.pixel_bounds
        if x_end > width or y_end > height:
            raise ValueError(f"Tile {tile.position.to_string()} exceeds canvas {width}x{height}")
        if filled[y_start:y_end, x_start:x_end].any():
            raise ValueError(f"Tile {tile.position.to_string()} overlaps a previous tile")

        canvas[y_start:y_end, x_start:x_end] = tile.pixels
        filled[y_start:y_end, x_start:x_end] = True

    logger.debug(f"Stitched {len(tiles)} tiles into {width}x{height} image")
    return canvas
