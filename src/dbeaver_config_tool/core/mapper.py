# SPDX-FileCopyrightText: 2025-present wangquanqing <wangquanqing1636@sina.com>
#
# SPDX-License-Identifier: MIT
"""
连接描述映射模块

把连接描述序列转换为 DBeaver 的两份文档：

- data-sources.json: 连接注册表（主机、端口、URL、SSH 隧道等非敏感信息）
- credentials-config.json 的明文: 凭据注册表（用户名和密码）

两份文档使用相同的连接 ID 作为键。ID 冲突时后出现的连接覆盖先出现的连接，
覆盖会记录警告日志，但不会改变输出内容。
"""

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List

from ..utils.logging_utils import get_logger
from .identifiers import (
    build_connection_url,
    derive_id,
    expand_home,
    is_supported_driver,
    resolve_provider,
)
from .models import ConnectionDescriptor, SshTunnel

logger = get_logger(__name__)

# 每次生成都会写入的连接类型定义，不来自输入
CONNECTION_TYPE_CATALOG: Dict[str, Dict[str, Any]] = {
    "dev": {
        "name": "Development",
        "color": "255,255,255",
        "description": "Regular development database",
        "auto-commit": True,
        "confirm-execute": False,
        "confirm-data-change": False,
        "smart-commit": False,
        "smart-commit-recover": False,
        "auto-close-transactions": True,
        "close-transactions-period": 1800,
        "auto-close-connections": True,
        "close-connections-period": 14400,
    },
}

CONFIGURATION_TYPE = "MANUAL"
CONNECTION_TYPE = "dev"
AUTH_MODEL = "native"
TUNNEL_HANDLER_ID = "ssh_tunnel"
TUNNEL_HANDLER_TYPE = "TUNNEL"
TUNNEL_ALIVE_INTERVAL_MS = 5000
CONNECTION_CREDENTIAL_KEY = "#connection"


@dataclass
class MappingResult:
    """
    映射结果

    Attributes:
        data_sources: 连接注册表文档
        credentials: 凭据注册表文档
        duplicate_ids: 被后续连接覆盖的连接 ID（按覆盖发生顺序，可重复）
    """

    data_sources: Dict[str, Any]
    credentials: Dict[str, Any]
    duplicate_ids: List[str] = field(default_factory=list)

    @property
    def connection_count(self) -> int:
        return len(self.data_sources["connections"])


class DescriptorMapper:
    """
    连接描述映射器

    无状态，每次调用 map() 都从空文档开始构建。

    Example:
        >>> mapper = DescriptorMapper()
        >>> result = mapper.map(parse_connections(text))
        >>> list(result.data_sources["connections"])
        ['mysql8-my-db']
    """

    def map(self, descriptors: Iterable[ConnectionDescriptor]) -> MappingResult:
        """
        按输入顺序映射所有连接描述

        Args:
            descriptors: 连接描述序列

        Returns:
            MappingResult: 两份文档及 ID 冲突信息
        """
        data_sources: Dict[str, Any] = {
            "folders": {},
            "connections": {},
            "connection-types": copy.deepcopy(CONNECTION_TYPE_CATALOG),
        }
        credentials: Dict[str, Any] = {}
        result = MappingResult(data_sources=data_sources, credentials=credentials)

        for descriptor in descriptors:
            connection_id = derive_id(descriptor.driver, descriptor.name)

            if not is_supported_driver(descriptor.driver):
                logger.warning(
                    f"未识别的驱动 '{descriptor.driver}'（连接 {connection_id}），"
                    "按 mysql 处理"
                )

            if connection_id in data_sources["connections"]:
                logger.warning(f"连接 ID 冲突，后出现的连接将覆盖之前的配置: {connection_id}")
                result.duplicate_ids.append(connection_id)

            data_sources["connections"][connection_id] = self._build_registry_entry(
                descriptor
            )
            credentials[connection_id] = self._build_credential_entry(descriptor)
            logger.debug(f"连接已映射: {connection_id}")

        logger.info(f"映射完成，共 {result.connection_count} 个连接")
        return result

    def _build_registry_entry(self, descriptor: ConnectionDescriptor) -> Dict[str, Any]:
        """构建 data-sources.json 中的单个连接条目"""
        port = "" if descriptor.port is None else str(descriptor.port)
        configuration: Dict[str, Any] = {
            "host": descriptor.host,
            "port": port,
            "database": descriptor.database or "",
            "url": build_connection_url(
                descriptor.driver, descriptor.host, port, descriptor.database
            ),
            "configurationType": CONFIGURATION_TYPE,
            "type": CONNECTION_TYPE,
            "closeIdleConnection": False,
            "auth-model": AUTH_MODEL,
        }

        if descriptor.ssh is not None:
            configuration["handlers"] = {
                TUNNEL_HANDLER_ID: self._build_tunnel_handler(descriptor.ssh)
            }

        return {
            "provider": resolve_provider(descriptor.driver),
            "driver": descriptor.driver,
            "name": descriptor.name,
            "save-password": True,
            "configuration": configuration,
        }

    def _build_tunnel_handler(self, ssh: SshTunnel) -> Dict[str, Any]:
        return {
            "type": TUNNEL_HANDLER_TYPE,
            "enabled": True,
            "save-password": True,
            "properties": {
                "host": ssh.host,
                "port": ssh.port,
                "authType": ssh.auth_type,
                "keyPath": expand_home(ssh.key_path) or "",
                "implementation": ssh.implementation,
                "bypassHostVerification": False,
                "aliveInterval": TUNNEL_ALIVE_INTERVAL_MS,
            },
        }

    def _build_credential_entry(self, descriptor: ConnectionDescriptor) -> Dict[str, Any]:
        """构建凭据条目，SSH 隧道密码始终为空字符串"""
        entry: Dict[str, Any] = {
            CONNECTION_CREDENTIAL_KEY: {
                "user": descriptor.user or "",
                "password": descriptor.password or "",
            },
        }
        if descriptor.ssh is not None:
            entry[TUNNEL_HANDLER_ID] = {
                "user": descriptor.ssh.user or "",
                "password": "",
            }
        return entry


def build_documents(descriptors: Iterable[ConnectionDescriptor]) -> MappingResult:
    """使用默认映射器构建两份文档"""
    return DescriptorMapper().map(descriptors)
