"""
日志配置测试
"""

import logging
import logging.handlers

import pytest

from dbeaver_config_tool.utils.logging_utils import (
    APP_LOGGER_NAME,
    get_logger,
    set_log_level,
    setup_logging,
)


class TestLoggingUtils:
    """logging_utils测试类"""

    def test_setup_file_logging(self, tmp_path):
        """测试文件日志和子logger继承"""
        logger = setup_logging(level="DEBUG", log_dir=tmp_path)

        assert logger.name == APP_LOGGER_NAME
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0], logging.handlers.RotatingFileHandler)

        get_logger(f"{APP_LOGGER_NAME}.core.mapper").info("映射完成")
        logger.handlers[0].flush()

        content = (tmp_path / f"{APP_LOGGER_NAME}.log").read_text(encoding="utf-8")
        assert "日志系统初始化完成" in content
        assert "映射完成" in content

    def test_setup_twice_does_not_duplicate_handlers(self, tmp_path):
        """测试重复配置不会叠加handler"""
        setup_logging(log_dir=tmp_path, log_to_console=True)
        logger = setup_logging(log_dir=tmp_path, log_to_console=True)

        assert len(logger.handlers) == 2

    def test_console_only(self, tmp_path):
        """测试只输出到控制台时不创建日志文件"""
        logger = setup_logging(log_to_console=True, log_to_file=False, log_dir=tmp_path)

        assert len(logger.handlers) == 1
        assert not (tmp_path / f"{APP_LOGGER_NAME}.log").exists()

    def test_no_outputs(self):
        """测试未启用任何输出"""
        with pytest.raises(ValueError):
            setup_logging(log_to_console=False, log_to_file=False)

    def test_invalid_level(self, tmp_path):
        """测试无效的日志级别"""
        with pytest.raises(ValueError):
            setup_logging(level="LOUD", log_dir=tmp_path)

    def test_set_log_level(self, tmp_path):
        """测试动态调整日志级别"""
        logger = setup_logging(level="INFO", log_dir=tmp_path)

        set_log_level(APP_LOGGER_NAME, "warning")

        assert logger.level == logging.WARNING
        assert all(handler.level == logging.WARNING for handler in logger.handlers)
