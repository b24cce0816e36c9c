"""
Pixel grid access - read-only RGBA views over decoded images
"""

from typing import Protocol, Tuple, runtime_checkable

import numpy as np

RGBA_CHANNELS = 4


@runtime_checkable
class PixelSource(Protocol):
    """Anything the splitters can read rectangular RGBA regions from"""

    @property
    def width(self) -> int:
        ...

    @property
    def height(self) -> int:
        ...

    def extract_region(self, x: int, y: int, width: int, height: int) -> np.ndarray:
        ...


def to_rgba(array: np.ndarray) -> np.ndarray:
    """
    Normalise a decoded uint8 pixel array to a new (H, W, 4) RGBA array

    Accepts gray (H, W) or (H, W, 1), gray+alpha (H, W, 2),
    RGB (H, W, 3) and RGBA (H, W, 4) layouts. The result never
    shares memory with the input.

    Args:
        array: Decoded pixel data

    Returns:
        C-contiguous uint8 array of shape (H, W, 4)
    """
    if array.dtype != np.uint8:
        raise ValueError(f"Unsupported pixel dtype: {array.dtype} (expected uint8)")

    if array.ndim == 2:
        array = array[:, :, np.newaxis]
    if array.ndim != 3:
        raise ValueError(f"Unsupported pixel array shape: {array.shape}")

    height, width, channels = array.shape
    opaque = np.full((height, width, 1), 255, dtype=np.uint8)

    if channels == 1:
        return np.concatenate([array, array, array, opaque], axis=2)
    if channels == 2:
        gray, alpha = array[:, :, :1], array[:, :, 1:]
        return np.concatenate([gray, gray, gray, alpha], axis=2)
    if channels == 3:
        return np.concatenate([array, opaque], axis=2)
    if channels == RGBA_CHANNELS:
        return np.array(array, dtype=np.uint8, order="C", copy=True)

    raise ValueError(f"Unsupported channel count: {channels}")


def check_region(
    x: int,
    y: int,
    width: int,
    height: int,
    image_size: Tuple[int, int]
):
    """
    Validate a region against image bounds

    Zero-sized regions are allowed as long as their origin lies
    inside [0, image_width] x [0, image_height].

    Args:
        x: Left edge in pixels
        y: Top edge in pixels
        width: Region width in pixels
        height: Region height in pixels
        image_size: (width, height) of the source image
    """
    image_width, image_height = image_size
    if width < 0 or height < 0:
        raise ValueError(f"Region size must be non-negative: {width}x{height}")
    if x < 0 or y < 0:
        raise ValueError(f"Region origin must be non-negative: ({x}, {y})")
    if x + width > image_width or y + height > image_height:
        raise ValueError(
            f"Region ({x}, {y}, {width}, {height}) exceeds image bounds "
            f"{image_width}x{image_height}"
        )


class PixelGrid:
    """
    Immutable in-memory RGBA image

    Holds a read-only (height, width, 4) uint8 array. Regions are
    returned as fresh arrays the caller owns.
    """

    def __init__(self, pixels: np.ndarray):
        """
        Initialize pixel grid

        Args:
            pixels: RGBA array of shape (height, width, 4), dtype uint8
        """
        if pixels.ndim != 3 or pixels.shape[2] != RGBA_CHANNELS:
            raise ValueError(f"Expected (height, width, 4) RGBA array, got {pixels.shape}")
        if pixels.dtype != np.uint8:
            raise ValueError(f"Unsupported pixel dtype: {pixels.dtype} (expected uint8)")

        self._pixels = np.array(pixels, order="C", copy=True)
        self._pixels.setflags(write=False)

    @classmethod
    def from_array(cls, array: np.ndarray) -> "PixelGrid":
        """Build a grid from a gray, gray+alpha, RGB or RGBA uint8 array"""
        return cls(to_rgba(np.asarray(array)))

    @classmethod
    def from_pil(cls, image) -> "PixelGrid":
        """Build a grid from a Pillow image, converting it to RGBA"""
        return cls(np.asarray(image.convert("RGBA"), dtype=np.uint8))

    @property
    def width(self) -> int:
        return self._pixels.shape[1]

    @property
    def height(self) -> int:
        return self._pixels.shape[0]

    @property
    def size(self) -> Tuple[int, int]:
        """(width, height) in pixels"""
        return self.width, self.height

    @property
    def pixels(self) -> np.ndarray:
        """Read-only view of the underlying RGBA array"""
        return self._pixels

    def extract_region(self, x: int, y: int, width: int, height: int) -> np.ndarray:
        """
        Copy a rectangular region into a new RGBA buffer

        Args:
            x: Left edge in pixels
            y: Top edge in pixels
            width: Region width in pixels
            height: Region height in pixels

        Returns:
            Writable uint8 array of shape (height, width, 4)
        """
        check_region(x, y, width, height, self.size)
        return self._pixels[y:y + height, x:x + width].copy()

    def __repr__(self) -> str:
        return f"PixelGrid(width={self.width}, height={self.height})"
