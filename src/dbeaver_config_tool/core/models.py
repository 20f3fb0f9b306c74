# SPDX-FileCopyrightText: 2025-present wangquanqing <wangquanqing1636@sina.com>
#
# SPDX-License-Identifier: MIT
"""
连接描述数据模型

定义输入的连接描述 (ConnectionDescriptor) 和可选的 SSH 隧道参数 (SshTunnel)，
并负责把 JSON 文本解析为这些不可变对象。

解析只做结构检查：顶层必须是数组，元素和 ssh 字段必须是对象，name / driver
必须是字符串，端口必须是字符串或整数。字段缺失不报错，按默认值处理。

输入格式示例::

    [
      {
        "name": "My DB",
        "driver": "mysql8",
        "host": "db.example.com",
        "port": "3306",
        "database": "app",
        "user": "dbuser",
        "password": "dbpassword",
        "ssh": {
          "host": "bastion.example.com",
          "port": 22,
          "user": "ssh-user",
          "authType": "PUBLIC_KEY",
          "keyPath": "~/.ssh/id_ed25519",
          "implementation": "sshj"
        }
      }
    ]
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ..utils.logging_utils import get_logger
from .exceptions import ValidationError

logger = get_logger(__name__)

SSH_DEFAULT_PORT = 22
SSH_AUTH_PUBLIC_KEY = "PUBLIC_KEY"
SSH_AUTH_AGENT = "AGENT"
SSH_IMPL_SSHJ = "sshj"
SSH_IMPL_JSCH = "jsch"


@dataclass(frozen=True)
class SshTunnel:
    """
    SSH 隧道参数

    Attributes:
        host: SSH 跳板机地址
        port: SSH 端口，默认 22
        user: SSH 用户名
        auth_type: 认证方式，PUBLIC_KEY 或 AGENT
        key_path: 私钥路径，可使用 "~/" 简写
        implementation: 隧道实现，sshj 或 jsch
    """

    host: str = ""
    port: Any = SSH_DEFAULT_PORT
    user: Optional[str] = None
    auth_type: str = SSH_AUTH_PUBLIC_KEY
    key_path: Optional[str] = None
    implementation: str = SSH_IMPL_SSHJ

    @classmethod
    def from_dict(cls, data: Dict[str, Any], index: int | None = None) -> "SshTunnel":
        # 空值（None、""、0）都按缺省处理
        return cls(
            host=data.get("host") or "",
            port=_normalize_port(data.get("port"), "ssh.port", index) or SSH_DEFAULT_PORT,
            user=data.get("user"),
            auth_type=data.get("authType") or SSH_AUTH_PUBLIC_KEY,
            key_path=data.get("keyPath"),
            implementation=data.get("implementation") or SSH_IMPL_SSHJ,
        )


@dataclass(frozen=True)
class ConnectionDescriptor:
    """
    单个数据库连接描述

    Attributes:
        name: 显示名称，用于生成连接 ID
        driver: 驱动标识，mysql8 / postgres-jdbc / mariaDB
        host: 数据库主机
        port: 数据库端口，字符串或整数均可
        database: 数据库名，可为空
        user: 数据库用户名
        password: 数据库密码
        ssh: 可选的 SSH 隧道参数
    """

    name: str = ""
    driver: str = ""
    host: str = ""
    port: Any = None
    database: Optional[str] = None
    user: Optional[str] = None
    password: Optional[str] = None
    ssh: Optional[SshTunnel] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any], index: int | None = None) -> "ConnectionDescriptor":
        """
        从 JSON 对象构建连接描述

        Args:
            data: 单个连接的 JSON 对象
            index: 在输入数组中的位置，仅用于错误信息

        Raises:
            ValidationError: 当 ssh 字段存在但不是对象、name/driver 不是字符串
                或端口类型无效时
        """
        ssh_data = data.get("ssh")
        ssh: Optional[SshTunnel] = None
        # 空对象也视为启用隧道，null/false 等空值视为未配置
        if isinstance(ssh_data, dict):
            ssh = SshTunnel.from_dict(ssh_data, index)
        elif ssh_data:
            raise ValidationError(
                "ssh 字段必须是对象",
                "INPUT_004",
                field_name="ssh",
                expected_type="object",
                index=index,
            )

        name = _optional_str(data, "name", index)
        driver = _optional_str(data, "driver", index)
        if not name:
            logger.warning(f"第 {index} 个连接缺少名称，连接 ID 将只包含驱动前缀")
        if not driver:
            logger.warning(f"第 {index} 个连接缺少驱动标识")

        return cls(
            name=name,
            driver=driver,
            host=data.get("host") or "",
            port=_normalize_port(data.get("port"), "port", index),
            database=data.get("database"),
            user=data.get("user"),
            password=data.get("password"),
            ssh=ssh,
        )


def _optional_str(data: Dict[str, Any], key: str, index: int | None) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError(
            f"第 {index} 个连接的 {key} 必须是字符串",
            "INPUT_005",
            field_name=key,
            expected_type="string",
            index=index,
        )
    return value


def _normalize_port(value: Any, field_name: str, index: int | None) -> Any:
    """
    检查端口类型

    接受字符串和整数；整数值的浮点数（如 1e3）转为整数，
    布尔值和带小数的数字视为无效。
    """
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    raise ValidationError(
        f"第 {index} 个连接的 {field_name} 必须是字符串或整数",
        "INPUT_005",
        field_name=field_name,
        expected_type="string or integer",
        index=index,
    )


def _reject_constant(token: str) -> Any:
    # NaN / Infinity / -Infinity 不是标准 JSON
    raise ValidationError(f"连接描述不是合法的 JSON: 不支持的常量 {token}", "INPUT_001")


def parse_connections(text: str) -> List[ConnectionDescriptor]:
    """
    解析连接描述 JSON 数组

    Args:
        text: JSON 文本

    Returns:
        List[ConnectionDescriptor]: 按输入顺序排列的连接描述

    Raises:
        ValidationError: 当文本不是合法 JSON（含 NaN、Infinity 常量）、顶层不是数组、
            元素不是对象或字段类型无效时

    Example:
        >>> descriptors = parse_connections('[{"name": "My DB", "driver": "mysql8"}]')
        >>> descriptors[0].name
        'My DB'
    """
    try:
        raw = json.loads(text, parse_constant=_reject_constant)
    except (json.JSONDecodeError, TypeError) as e:
        logger.error(f"连接描述不是合法的 JSON: {str(e)}")
        raise ValidationError(f"连接描述不是合法的 JSON: {str(e)}", "INPUT_001") from e

    if not isinstance(raw, list):
        raise ValidationError(
            "连接描述必须是 JSON 数组",
            "INPUT_002",
            expected_type="array",
            details={"actual_type": type(raw).__name__},
        )

    descriptors = []
    for index, item in enumerate(raw):
        if not isinstance(item, dict):
            raise ValidationError(
                f"第 {index} 个连接描述必须是对象",
                "INPUT_003",
                expected_type="object",
                index=index,
            )
        descriptors.append(ConnectionDescriptor.from_dict(item, index))

    logger.debug(f"已解析 {len(descriptors)} 个连接描述")
    return descriptors
