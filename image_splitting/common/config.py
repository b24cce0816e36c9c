"""
Configuration management for image splitting
"""

import logging
from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings"""

    # Uniform grid
    grid_rows: int = Field(
        default=3,
        description="Default number of rows for uniform splitting"
    )
    grid_cols: int = Field(
        default=3,
        description="Default number of columns for uniform splitting"
    )

    # Tile-size splitting
    tile_width: int = Field(
        default=100,
        description="Default tile width in pixels"
    )
    tile_height: int = Field(
        default=100,
        description="Default tile height in pixels"
    )

    # Performance
    max_workers: int = Field(
        default=4,
        description="Maximum number of worker threads"
    )
    parallel_min_tiles: int = Field(
        default=64,
        description="Tile count from which extraction runs on the thread pool"
    )

    # Export
    output_format: str = Field(
        default="PNG",
        description="Image format used when saving tiles"
    )
    show_progress: bool = Field(
        default=True,
        description="Show a progress bar while saving tiles"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )
    log_file: Optional[str] = Field(
        default=None,
        description="Log file path"
    )

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        env_prefix = "IMAGE_SPLITTING_"
        case_sensitive = False


def configure_logging(level: Optional[str] = None, log_file: Optional[str] = None):
    """
    Configure root logging from settings

    Args:
        level: Overrides settings.log_level
        log_file: Overrides settings.log_file
    """
    handlers = [logging.StreamHandler()]
    path = log_file or settings.log_file
    if path:
        handlers.append(logging.FileHandler(path, encoding="utf-8"))

    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=handlers,
        force=True
    )


# Create global settings instance
settings = Settings()
