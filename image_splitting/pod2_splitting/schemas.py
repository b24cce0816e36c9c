"""
Schemas for splitting module
"""

from datetime import datetime
from enum import Enum
from typing import List, Tuple, Optional, Dict, Any
import numpy as np
from pydantic import BaseModel, Field, validator

from ..common.config import settings


class SplitMode(str, Enum):
    """Splitting strategies"""
    UNIFORM = "uniform"  # fixed rows x cols, remainder dropped
    SIZED = "sized"  # fixed tile size, edge tiles clamped


class TilePosition(BaseModel):
    """Position of tile in the grid"""
    row: int
    col: int

    def to_string(self) -> str:
        """Convert to string format for naming"""
        return f"{self.row:03d}_{self.col:03d}"


class TileBounds(BaseModel):
    """Tile region in source image pixels"""
    x: int
    y: int
    width: int
    height: int

    @property
    def pixel_bounds(self) -> Tuple[int, int, int, int]:
        """minx, miny, maxx, maxy in pixels (max exclusive)"""
        return self.x, self.y, self.x + self.width, self.y + self.height

    @property
    def area(self) -> int:
        return self.width * self.height

    def contains(self, px: int, py: int) -> bool:
        """Check whether a source pixel falls inside this tile"""
        return self.x <= px < self.x + self.width and self.y <= py < self.y + self.height


class Tile(BaseModel):
    """A single extracted sub-image"""
    index: int  # row-major emission index
    position: TilePosition
    bounds: TileBounds
    pixels: np.ndarray  # (height, width, 4) uint8, owned by this tile

    class Config:
        arbitrary_types_allowed = True

    @validator('pixels')
    def validate_pixels(cls, v):
        """Validate RGBA buffer layout"""
        if v.ndim != 3 or v.shape[2] != 4:
            raise ValueError(f"Tile pixels must be (height, width, 4), got {v.shape}")
        if v.dtype != np.uint8:
            raise ValueError(f"Tile pixels must be uint8, got {v.dtype}")
        return v

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @property
    def size(self) -> Tuple[int, int]:
        """(width, height) in pixels"""
        return self.width, self.height


class SplitConfig(BaseModel):
    """Configuration for a split engine"""
    tile_width: int = Field(default_factory=lambda: settings.tile_width, description="Tile width in pixels")
    tile_height: int = Field(default_factory=lambda: settings.tile_height, description="Tile height in pixels")
    grid_rows: int = Field(default_factory=lambda: settings.grid_rows, description="Rows for uniform splitting")
    grid_cols: int = Field(default_factory=lambda: settings.grid_cols, description="Columns for uniform splitting")
    parallel: bool = Field(default=True, description="Extract large grids on the thread pool")

    @validator('tile_width', 'tile_height', 'grid_rows', 'grid_cols')
    def validate_positive(cls, v):
        """Validate dimensions"""
        if v < 1:
            raise ValueError(f"Dimension must be positive: {v}")
        return v


class SplitResult(BaseModel):
    """Result of a split operation"""
    mode: SplitMode
    tiles: List[Tile]
    grid_size: Tuple[int, int]  # rows, cols
    image_size: Tuple[int, int]  # width, height
    total_tiles: int
    processing_time: float  # seconds
    created_at: datetime = Field(default_factory=datetime.now)

    def get_tile_by_position(self, row: int, col: int) -> Optional[Tile]:
        """Get tile by grid position"""
        rows, cols = self.grid_size
        if 0 <= row < rows and 0 <= col < cols:
            return self.tiles[row * cols + col]
        return None

    def get_coverage_map(self) -> Dict[str, Any]:
        """Get coverage statistics"""
        width, height = self.image_size
        covered_area = sum(tile.bounds.area for tile in self.tiles)
        image_area = width * height

        return {
            'total_tiles': self.total_tiles,
            'grid_size': self.grid_size,
            'covered_area': covered_area,
            'image_area': image_area,
            'coverage_ratio': covered_area / image_area if image_area else 0.0
        }
