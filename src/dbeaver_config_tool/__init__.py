# SPDX-FileCopyrightText: 2025-present wangquanqing <wangquanqing1636@sina.com>
#
# SPDX-License-Identifier: MIT
"""
DBeaver Config Tool - DBeaver 连接配置生成工具
==============================================

根据 JSON 格式的连接描述列表生成 DBeaver 的 data-sources.json 和加密的
credentials-config.json。

主要特性:
- 支持 MySQL 8, PostgreSQL, MariaDB 驱动
- 可选的 SSH 隧道配置
- 与 DBeaver 兼容的 AES-192-CBC 凭据加密
- 命令行界面和API接口

使用示例:
    >>> from dbeaver_config_tool import ConfigWriter, build_documents, parse_connections
    >>> result = build_documents(parse_connections(connections_json))
    >>> ConfigWriter("/path/to/.dbeaver").write(result)
"""

from .core.crypto import CredentialEncryptor
from .core.exceptions import (
    ConfigError,
    CryptoError,
    DBeaverSetupError,
    FileSystemError,
    ValidationError,
)
from .core.identifiers import build_connection_url, derive_id, resolve_provider, slugify
from .core.mapper import DescriptorMapper, MappingResult, build_documents
from .core.models import ConnectionDescriptor, SshTunnel, parse_connections
from .core.writer import ConfigWriter

__version__ = "0.1.0"

__all__ = [
    # 映射与加密
    "ConnectionDescriptor",
    "SshTunnel",
    "parse_connections",
    "DescriptorMapper",
    "MappingResult",
    "build_documents",
    "CredentialEncryptor",
    "ConfigWriter",
    # 标识与 URL 推导
    "slugify",
    "derive_id",
    "resolve_provider",
    "build_connection_url",
    # 异常类
    "DBeaverSetupError",
    "ConfigError",
    "CryptoError",
    "FileSystemError",
    "ValidationError",
]
