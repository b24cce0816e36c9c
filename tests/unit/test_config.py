"""
Unit tests for configuration
"""

import logging

from image_splitting.common.config import Settings, configure_logging


class TestSettings:
    """Test settings loading"""

    def test_defaults(self):
        config = Settings()
        assert config.grid_rows == 3
        assert config.grid_cols == 3
        assert config.max_workers == 4

    def test_environment_override(self, monkeypatch):
        """Test prefixed environment variables"""
        monkeypatch.setenv("IMAGE_SPLITTING_TILE_WIDTH", "256")
        monkeypatch.setenv("image_splitting_log_level", "DEBUG")

        config = Settings()
        assert config.tile_width == 256
        assert config.log_level == "DEBUG"

    def test_configure_logging(self, tmp_path):
        """Test log file handler setup"""
        log_file = tmp_path / "split.log"
        configure_logging(level="debug", log_file=str(log_file))

        logging.getLogger("image_splitting.test").debug("hello")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert "hello" in log_file.read_text(encoding="utf-8")
        configure_logging(level="WARNING")
