"""
config/config.py 單元測試
驗證 Config 的設定驗證功能。
"""

from pathlib import Path
from unittest.mock import patch

import logging

import pytest

from verifykit.config.config import Config, ConfigValidationError


class TestConfigValidation:
    """設定驗證"""

    def test_defaults_valid(self):
        with patch.object(Config, "LOG_LEVEL", "WARNING"), \
                patch.object(Config, "LOG_DIR", None), \
                patch.object(Config, "LOG_JSON", False):
            assert Config.validate() == []

    def test_invalid_log_level_raises(self):
        with patch.object(Config, "LOG_LEVEL", "VERBOSE"):
            with pytest.raises(ConfigValidationError) as exc_info:
                Config.validate()
        assert "VERBOSE" in str(exc_info.value)
        assert len(exc_info.value.errors) == 1

    def test_log_dir_is_file_raises(self, tmp_path):
        file_path = tmp_path / "not_a_dir"
        file_path.write_text("x")
        with patch.object(Config, "LOG_LEVEL", "INFO"), patch.object(Config, "LOG_DIR", file_path):
            with pytest.raises(ConfigValidationError, match="不是目錄"):
                Config.validate()

    def test_json_without_dir_warns(self):
        with patch.object(Config, "LOG_LEVEL", "INFO"), \
                patch.object(Config, "LOG_DIR", None), \
                patch.object(Config, "LOG_JSON", True):
            warnings = Config.validate()
        assert any("VERIFYKIT_LOG_JSON" in w for w in warnings)

    def test_log_dir_ok(self, tmp_path):
        with patch.object(Config, "LOG_LEVEL", "DEBUG"), \
                patch.object(Config, "LOG_DIR", Path(tmp_path)), \
                patch.object(Config, "LOG_JSON", True):
            assert Config.validate() == []


class TestLogLevel:

    def test_known_level(self):
        with patch.object(Config, "LOG_LEVEL", "DEBUG"):
            assert Config.log_level() == logging.DEBUG

    def test_unknown_level_falls_back(self):
        with patch.object(Config, "LOG_LEVEL", "NOPE"):
            assert Config.log_level() == logging.WARNING
