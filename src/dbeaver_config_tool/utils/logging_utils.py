# SPDX-FileCopyrightText: 2025-present wangquanqing <wangquanqing1636@sina.com>
#
# SPDX-License-Identifier: MIT
"""
日志配置模块

提供统一的日志配置和管理功能，支持多级别日志输出、文件轮转和格式化。
本模块封装了Python标准库logging模块，命令行入口通过 setup_logging 配置
应用logger，各模块通过 get_logger(__name__) 获取子logger。

主要功能：
- setup_logging: 快速配置日志系统
- get_logger: 获取指定名称的logger
- set_log_level: 动态调整日志级别
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path

from .path_utils import PathHelper

# 应用logger名称，与包名一致，使模块logger自动继承其handler
APP_LOGGER_NAME = "dbeaver_config_tool"

# 默认日志格式 - 包含时间、模块名、级别、消息和源码位置
DEFAULT_LOG_FORMAT = (
    "%(asctime)s - %(name)s - %(levelname)s - %(message)s "
    + "[%(filename)s:%(lineno)d]"
)

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
LOG_LEVEL_MAP = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def setup_logging(
    app_name: str = APP_LOGGER_NAME,
    level: str = "INFO",
    log_to_console: bool = False,
    log_to_file: bool = True,
    max_file_size: int = 10 * 1024 * 1024,  # 10MB
    backup_count: int = 5,
    log_format: str | None = None,
    log_dir: str | Path | None = None,
) -> logging.Logger:
    """
    配置并初始化应用程序的日志系统

    支持控制台和文件输出，自动创建日志目录。重复调用会替换已有handler，
    不会产生重复日志。

    Args:
        app_name (str): 应用名称，用于日志目录、日志文件名和logger名称
        level (str): 日志级别，可选值：DEBUG, INFO, WARNING, ERROR, CRITICAL
        log_to_console (bool): 是否输出到控制台（stderr），默认False
        log_to_file (bool): 是否输出到文件，默认True
        max_file_size (int): 单个日志文件最大大小（字节），默认10MB
        backup_count (int): 保留的备份日志文件数量，默认5个
        log_format (str | None): 自定义日志格式字符串
        log_dir (str | Path | None): 自定义日志目录，为None时使用用户配置目录下的 logs

    Returns:
        logging.Logger: 配置好的应用logger

    Raises:
        ValueError: 当日志级别无效或未启用任何输出方式时
        OSError: 当无法创建日志目录或文件时
        PermissionError: 当没有权限访问日志目录时

    Example:
        >>> logger = setup_logging(level="DEBUG", log_to_console=True)
        >>> logger.info("开始生成 DBeaver 配置")
    """
    log_level = _validate_log_level(level)

    if not log_to_file and not log_to_console:
        raise ValueError("至少需要启用一种日志输出方式（控制台或文件）")

    format_to_use = log_format if log_format is not None else DEFAULT_LOG_FORMAT
    formatter = logging.Formatter(format_to_use)

    logger = logging.getLogger(app_name)
    logger.setLevel(log_level)

    # 清除已有的handler，避免重复配置导致的重复日志
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    log_file: Path | None = None
    log_file_exists = True

    if log_to_file:
        if log_dir is None:
            log_dir_path = PathHelper.get_user_config_dir(app_name) / "logs"
        else:
            log_dir_path = Path(log_dir)

        try:
            log_dir_path.mkdir(parents=True, exist_ok=True)
        except PermissionError as e:
            raise PermissionError(f"没有权限创建日志目录 {log_dir_path}: {str(e)}")
        except OSError as e:
            raise OSError(f"无法创建日志目录 {log_dir_path}: {str(e)}")

        log_file = log_dir_path / f"{app_name}.log"
        log_file_exists = os.path.exists(log_file)

        try:
            file_handler = logging.handlers.RotatingFileHandler(
                filename=str(log_file),
                maxBytes=max_file_size,
                backupCount=backup_count,
                encoding="utf-8",
            )
        except PermissionError as e:
            raise PermissionError(f"没有权限写入日志文件 {log_file}: {str(e)}")
        except OSError as e:
            raise OSError(f"无法创建日志文件 {log_file}: {str(e)}")
        file_handler.setFormatter(formatter)
        file_handler.setLevel(log_level)
        logger.addHandler(file_handler)

    if log_to_console:
        # 标准输出留给报告和 preview 文档
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
        console_handler.setLevel(log_level)
        logger.addHandler(console_handler)

    if not log_file_exists:
        logger.info(
            f"日志系统初始化完成 - 应用: {app_name}, "
            f"级别: {level.upper()}, 日志文件: {log_file}"
        )

    return logger


def _validate_log_level(level: str) -> int:
    """
    验证并转换日志级别字符串为对应的logging常量

    Raises:
        ValueError: 当日志级别无效时抛出
    """
    level_upper = level.upper()
    if level_upper not in VALID_LOG_LEVELS:
        raise ValueError(f"无效的日志级别: '{level}'，有效值为: {VALID_LOG_LEVELS}")
    return LOG_LEVEL_MAP[level_upper]


def get_logger(name: str) -> logging.Logger:
    """
    获取指定名称的logger实例

    建议在模块级别使用 get_logger(__name__)，未配置handler时继承上级logger配置。
    """
    return logging.getLogger(name)


def set_log_level(logger_name: str, level: str) -> None:
    """
    动态设置指定logger的日志级别

    同时更新logger和所有关联handler的级别，确保立即生效。

    Raises:
        ValueError: 当日志级别无效时
    """
    log_level = _validate_log_level(level)
    logger = get_logger(logger_name)
    logger.setLevel(log_level)

    for handler in logger.handlers:
        handler.setLevel(log_level)
