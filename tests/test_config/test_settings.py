#!/usr/bin/env python3
"""
测试全局设置与日志配置
"""

import logging
import os

import pytest
from pydantic import ValidationError

from progress_observer.config import get_settings, reset_settings, update_settings
from progress_observer.utils.logging import setup_logging


class TestSettings:
    """测试全局设置"""

    def test_defaults(self):
        settings = get_settings()
        assert settings.log_level == "WARNING"
        assert settings.log_file is None
        assert settings.default_output_format == "table"
        assert settings.default_interval_seconds == 0.5
        assert settings.default_max_scale_factor == 2.0

    def test_singleton(self):
        assert get_settings() is get_settings()

    def test_update_and_reset(self):
        update_settings(log_level="DEBUG", not_a_setting=1)
        assert get_settings().log_level == "DEBUG"
        assert not hasattr(get_settings(), "not_a_setting")

        reset_settings()
        assert get_settings().log_level == "WARNING"

    def test_update_is_validated(self):
        with pytest.raises(ValidationError):
            update_settings(default_max_scale_factor=0.5)


class TestSetupLogging:
    """测试日志配置"""

    def test_uses_settings_level(self):
        update_settings(log_level="INFO")
        logger = setup_logging()
        assert logger.name == "progress_observer"
        assert logger.level == logging.INFO
        assert len(logger.handlers) == 1

    def test_does_not_duplicate_handlers(self):
        setup_logging("DEBUG")
        logger = setup_logging("ERROR")
        assert len(logger.handlers) == 1
        assert logger.level == logging.ERROR
        assert logger.handlers[0].level == logging.ERROR

    def test_log_file(self, tmp_path):
        log_file = tmp_path / "observer.log"
        logger = setup_logging("DEBUG", str(log_file))
        logging.getLogger("progress_observer.estimator.base").debug("写入日志文件")
        for handler in logger.handlers:
            handler.flush()
        assert "写入日志文件" in log_file.read_text(encoding="utf-8")

    def test_switching_log_file_replaces_handler(self, tmp_path):
        first_file = tmp_path / "first.log"
        second_file = tmp_path / "second.log"
        setup_logging("INFO", str(first_file))
        logger = setup_logging("INFO", str(second_file))

        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0], logging.FileHandler)
        assert logger.handlers[0].baseFilename == os.path.abspath(str(second_file))

        logging.getLogger("progress_observer.estimator.base").info("切换后的日志")
        logger.handlers[0].flush()
        assert "切换后的日志" in second_file.read_text(encoding="utf-8")
        assert "切换后的日志" not in first_file.read_text(encoding="utf-8")

    def test_switching_back_to_stderr(self, tmp_path):
        setup_logging("INFO", str(tmp_path / "observer.log"))
        logger = setup_logging("INFO")

        assert len(logger.handlers) == 1
        assert not isinstance(logger.handlers[0], logging.FileHandler)

    def test_keeps_caller_handlers(self, tmp_path):
        logger = logging.getLogger("progress_observer")
        own_handler = logging.NullHandler()
        logger.addHandler(own_handler)

        setup_logging("INFO")
        setup_logging("INFO", str(tmp_path / "observer.log"))

        assert own_handler in logger.handlers
        assert len(logger.handlers) == 2
