"""
Unit tests for tile export (POD3)
"""

import pytest
import numpy as np
from PIL import Image

from image_splitting.common.config import settings
from image_splitting.pod1_image_source import PixelGrid
from image_splitting.pod2_splitting import split_by_size, split_uniform
from image_splitting.pod3_export import save_tiles, tile_filename


@pytest.fixture(autouse=True)
def quiet_progress(monkeypatch):
    """Disable progress bars in tests"""
    monkeypatch.setattr(settings, "show_progress", False)


@pytest.fixture
def tiles():
    """Create tiles of a 5x3 image"""
    pixels = np.zeros((3, 5, 4), dtype=np.uint8)
    pixels[..., 0] = np.arange(5)
    pixels[..., 3] = 255
    return split_by_size(PixelGrid(pixels), 2, 2)


class TestSaveTiles:
    """Test writing tiles to disk"""

    def test_tile_filename(self, tiles):
        """Test numbered naming"""
        assert tile_filename(tiles[4]) == "tile_001_001.png"
        assert tile_filename(tiles[0], "img", "tif") == "img_000_000.tif"

    def test_save_png(self, tiles, tmp_path):
        """Test tiles are written and decode back unchanged"""
        out_dir = tmp_path / "out"
        paths = save_tiles(tiles, out_dir)

        assert len(paths) == 6
        assert paths[2].name == "tile_000_002.png"
        for path, tile in zip(paths, tiles):
            with Image.open(path) as img:
                assert img.mode == "RGBA"
                np.testing.assert_array_equal(np.asarray(img), tile.pixels)

    def test_unsupported_format(self, tiles, tmp_path):
        with pytest.raises(ValueError, match="Unsupported output format"):
            save_tiles(tiles, tmp_path, image_format="GIF")

    def test_empty_tile(self, tmp_path):
        """Test degenerate tiles cannot be written"""
        degenerate = split_uniform(PixelGrid(np.zeros((2, 2, 4), dtype=np.uint8)))
        with pytest.raises(ValueError, match="empty tile"):
            save_tiles(degenerate, tmp_path)
