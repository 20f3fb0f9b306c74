# SPDX-FileCopyrightText: 2025-present wangquanqing <wangquanqing1636@sina.com>
#
# SPDX-License-Identifier: MIT
"""
工具模块

提供日志管理和跨平台路径处理等通用工具功能。

使用示例：
    >>> from dbeaver_config_tool.utils import get_logger, setup_logging, PathHelper
    >>> setup_logging(level="INFO", log_to_console=True)
    >>> logger = get_logger(__name__)
    >>> PathHelper.expand_home("~/.ssh/id_ed25519")
"""

from .logging_utils import get_logger, set_log_level, setup_logging
from .path_utils import PathHelper

__all__ = [
    # ==================== 日志管理模块 ====================
    "setup_logging",
    "get_logger",
    "set_log_level",
    # ==================== 路径处理模块 ====================
    "PathHelper",
]
