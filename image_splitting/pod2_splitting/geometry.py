"""
Grid geometry - integer tile layout calculations
"""

from numbers import Integral
from typing import Generator, Tuple

from .exceptions import InvalidParameterError
from .schemas import TileBounds, TilePosition

TileLayout = Generator[Tuple[TilePosition, TileBounds], None, None]


def validate_dimension(name: str, value) -> int:
    """
    Check that a tile or grid dimension is a positive integer

    Args:
        name: Parameter name used in the error message
        value: Value to check

    Returns:
        The value as a plain int
    """
    if isinstance(value, bool) or not isinstance(value, Integral):
        raise InvalidParameterError(f"{name} must be an integer, got {value!r}")
    if value < 1:
        raise InvalidParameterError(f"{name} must be at least 1, got {value}")
    return int(value)


def ceil_div(dividend: int, divisor: int) -> int:
    """Exact integer ceiling division for a non-negative dividend"""
    divisor = validate_dimension("divisor", divisor)
    return (dividend + divisor - 1) // divisor


def calculate_grid_size(
    image_width: int,
    image_height: int,
    tile_width: int,
    tile_height: int
) -> Tuple[int, int]:
    """
    Calculate how many tiles of the given size cover an image

    Args:
        image_width: Image width in pixels
        image_height: Image height in pixels
        tile_width: Tile width in pixels
        tile_height: Tile height in pixels

    Returns:
        Tuple of (rows, cols)
    """
    cols = ceil_div(image_width, validate_dimension("tile_width", tile_width))
    rows = ceil_div(image_height, validate_dimension("tile_height", tile_height))
    return rows, cols


def uniform_grid(
    image_width: int,
    image_height: int,
    rows: int = 3,
    cols: int = 3
) -> TileLayout:
    """
    Generate equal-sized tile regions for a rows x cols grid

    Tile size is floored, so the last image_width % cols columns and
    image_height % rows rows of pixels belong to no tile.

    Args:
        image_width: Image width in pixels
        image_height: Image height in pixels
        rows: Number of grid rows
        cols: Number of grid columns

    Yields:
        Tuple of (position, bounds) in row-major order
    """
    rows = validate_dimension("rows", rows)
    cols = validate_dimension("cols", cols)
    sub_width = image_width // cols
    sub_height = image_height // rows

    for row in range(rows):
        for col in range(cols):
            yield (
                TilePosition(row=row, col=col),
                TileBounds(x=col * sub_width, y=row * sub_height, width=sub_width, height=sub_height)
            )


def sized_grid(
    image_width: int,
    image_height: int,
    tile_width: int,
    tile_height: int
) -> TileLayout:
    """
    Generate tile regions of a fixed size, clamping the last row and column

    Args:
        image_width: Image width in pixels
        image_height: Image height in pixels
        tile_width: Tile width in pixels
        tile_height: Tile height in pixels

    Yields:
        Tuple of (position, bounds) in row-major order
    """
    tile_width = validate_dimension("tile_width", tile_width)
    tile_height = validate_dimension("tile_height", tile_height)
    rows, cols = calculate_grid_size(image_width, image_height, tile_width, tile_height)

    for row in range(rows):
        for col in range(cols):
            x_start = col * tile_width
            y_start = row * tile_height

            # Last row/column may be narrower or shorter
            actual_width = min(image_width - x_start, tile_width)
            actual_height = min(image_height - y_start, tile_height)

            yield (
                TilePosition(row=row, col=col),
                TileBounds(x=x_start, y=y_start, width=actual_width, height=actual_height)
            )
