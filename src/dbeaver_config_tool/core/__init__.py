# SPDX-FileCopyrightText: 2025-present wangquanqing <wangquanqing1636@sina.com>
#
# SPDX-License-Identifier: MIT
"""
核心模块

连接描述解析、连接 ID / URL 推导、文档映射、凭据加密和配置文件写入。
"""

from .config import SetupSettings, resolve_settings
from .crypto import CredentialEncryptor
from .exceptions import (
    ConfigError,
    CryptoError,
    DBeaverSetupError,
    FileSystemError,
    ValidationError,
)
from .mapper import CONNECTION_TYPE_CATALOG, DescriptorMapper, MappingResult, build_documents
from .models import ConnectionDescriptor, SshTunnel, parse_connections
from .writer import ConfigWriter, WrittenFiles, render_data_sources

__all__ = [
    # 数据模型
    "ConnectionDescriptor",
    "SshTunnel",
    "parse_connections",
    # 映射与加密
    "CONNECTION_TYPE_CATALOG",
    "DescriptorMapper",
    "MappingResult",
    "build_documents",
    "CredentialEncryptor",
    # 输出与配置
    "ConfigWriter",
    "WrittenFiles",
    "render_data_sources",
    "SetupSettings",
    "resolve_settings",
    # 异常类
    "DBeaverSetupError",
    "ConfigError",
    "CryptoError",
    "FileSystemError",
    "ValidationError",
]
