"""
Image loading - codec boundary for Pillow and rasterio sources
"""

import logging
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Tuple, Union
import os

import numpy as np
import rasterio
from rasterio.enums import ColorInterp
from rasterio.windows import Window
from PIL import Image

from .pixel_grid import PixelGrid, check_region, to_rgba, RGBA_CHANNELS

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]

RASTER_SUFFIXES = {".tif", ".tiff"}


def palette_table(colormap) -> np.ndarray:
    """
    Build an index -> RGBA lookup table from a rasterio colormap

    Indexes missing from the colormap map to opaque black.

    Args:
        colormap: Mapping of palette index to (r, g, b, a)

    Returns:
        uint8 array of shape (256, 4)
    """
    table = np.zeros((256, RGBA_CHANNELS), dtype=np.uint8)
    table[:, 3] = 255
    for index, color in colormap.items():
        if 0 <= index < 256:
            rgba = tuple(color)[:RGBA_CHANNELS]
            table[index, :len(rgba)] = rgba
    return table


class RasterPixelGrid:
    """
    Lazy RGBA view over an open rasterio dataset
    Regions are fetched with windowed reads, so the full raster is never loaded
    """

    def __init__(self, dataset):
        """
        Initialize raster view

        Args:
            dataset: Open rasterio dataset reader
        """
        if not 1 <= dataset.count <= RGBA_CHANNELS:
            raise ValueError(f"Unsupported band count: {dataset.count} (expected 1-4)")
        if any(dtype != "uint8" for dtype in dataset.dtypes):
            raise ValueError(f"Unsupported raster dtypes: {dataset.dtypes} (expected uint8)")

        self._palette = None
        if dataset.colorinterp[0] == ColorInterp.palette:
            if dataset.count != 1:
                raise ValueError(f"Unsupported palette raster with {dataset.count} bands")
            self._palette = palette_table(dataset.colormap(1))

        self._dataset = dataset
        # Dataset handles are not safe to share across threads
        self._lock = threading.Lock()

    @property
    def width(self) -> int:
        return self._dataset.width

    @property
    def height(self) -> int:
        return self._dataset.height

    @property
    def size(self) -> Tuple[int, int]:
        """(width, height) in pixels"""
        return self.width, self.height

    @property
    def has_palette(self) -> bool:
        """Whether pixel values are colour indexes into a colormap"""
        return self._palette is not None

    def extract_region(self, x: int, y: int, width: int, height: int) -> np.ndarray:
        """
        Read a rectangular region as a new RGBA buffer

        Args:
            x: Left edge in pixels
            y: Top edge in pixels
            width: Region width in pixels
            height: Region height in pixels

        Returns:
            uint8 array of shape (height, width, 4)
        """
        check_region(x, y, width, height, self.size)
        if width == 0 or height == 0:
            return np.zeros((height, width, RGBA_CHANNELS), dtype=np.uint8)

        with self._lock:
            data = self._dataset.read(window=Window(x, y, width, height))

        if self._palette is not None:
            return self._palette[data[0]]

        # (bands, rows, cols) -> (rows, cols, bands)
        return to_rgba(np.transpose(data, (1, 2, 0)))

    def to_pixel_grid(self) -> PixelGrid:
        """Materialise the whole raster in memory"""
        return PixelGrid(self.extract_region(0, 0, self.width, self.height))

    def __repr__(self) -> str:
        return f"RasterPixelGrid(width={self.width}, height={self.height}, name={self._dataset.name!r})"


@contextmanager
def open_raster(image_path: PathLike) -> Iterator[RasterPixelGrid]:
    """
    Open a raster for lazy region extraction

    Args:
        image_path: Path to a GDAL-readable raster

    Yields:
        RasterPixelGrid bound to the open dataset
    """
    path = Path(image_path)
    if not path.exists():
        raise FileNotFoundError(f"Image file not found: {path}")

    try:
        src = rasterio.open(path)
    except Exception as e:
        logger.error(f"Error opening raster {path}: {e}")
        raise

    with src:
        logger.debug(f"Opened raster {path} ({src.width}x{src.height}, {src.count} bands)")
        yield RasterPixelGrid(src)


def load_image(image_path: PathLike) -> PixelGrid:
    """
    Decode an image file into an RGBA pixel grid

    TIFF files go through rasterio, everything else through Pillow.
    Palette TIFFs are handed to Pillow, which applies the TIFF
    colormap at its stored 8-bit precision.
    Decoder errors are logged and re-raised unchanged.

    Args:
        image_path: Path to input image

    Returns:
        PixelGrid holding the decoded image
    """
    path = Path(image_path)
    if not path.exists():
        raise FileNotFoundError(f"Image file not found: {path}")

    grid = None
    if path.suffix.lower() in RASTER_SUFFIXES:
        try:
            with open_raster(path) as raster:
                if raster.has_palette:
                    logger.debug(f"Decoding palette raster {path} with Pillow")
                else:
                    grid = raster.to_pixel_grid()
        except Exception as e:
            logger.error(f"Error decoding raster {path}: {e}")
            raise

    if grid is None:
        try:
            with Image.open(path) as img:
                grid = PixelGrid.from_pil(img)
        except Exception as e:
            logger.error(f"Error decoding image {path}: {e}")
            raise

    logger.debug(f"Loaded {path} as {grid.width}x{grid.height} RGBA")
    return grid
