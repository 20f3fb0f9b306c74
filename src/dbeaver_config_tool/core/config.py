# SPDX-FileCopyrightText: 2025-present wangquanqing <wangquanqing1636@sina.com>
#
# SPDX-License-Identifier: MIT
"""
运行配置模块

收集一次生成所需的输入：连接描述 JSON 文本和输出目录。来源按优先级为
命令行参数 > TOML 设置文件 > 环境变量。

环境变量：
- DBEAVER_CONNECTIONS: 连接描述 JSON 数组
- DBEAVER_DIR: DBeaver 配置目录

TOML 设置文件示例::

    [setup]
    connections_file = "connections.json"   # 或 connections = '[...]'
    output_dir = "~/.local/share/DBeaverData/workspace6/General/.dbeaver"
    backup = true
    log_level = "DEBUG"

设置文件中的相对路径以设置文件所在目录为基准。
"""

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping

from ..utils.logging_utils import VALID_LOG_LEVELS, get_logger
from ..utils.path_utils import PathHelper
from .exceptions import ConfigError

logger = get_logger(__name__)

ENV_CONNECTIONS = "DBEAVER_CONNECTIONS"
ENV_OUTPUT_DIR = "DBEAVER_DIR"
SETTINGS_SECTION = "setup"

ERROR_MISSING_INPUT = f"{ENV_CONNECTIONS} 和 {ENV_OUTPUT_DIR} 是必需的"


@dataclass(frozen=True)
class SetupSettings:
    """
    单次生成的运行配置

    Attributes:
        connections_json (str): 连接描述 JSON 文本
        output_dir (Path): 输出目录
        backup (bool): 覆盖前是否备份已有文件
        log_level (str): 日志级别
    """

    connections_json: str
    output_dir: Path
    backup: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "SetupSettings":
        """
        从环境变量读取配置

        Raises:
            ConfigError: 当任一必需环境变量缺失或为空时
        """
        environ = os.environ if environ is None else environ
        connections_json = environ.get(ENV_CONNECTIONS)
        output_dir = environ.get(ENV_OUTPUT_DIR)

        missing = [
            name
            for name, value in ((ENV_CONNECTIONS, connections_json), (ENV_OUTPUT_DIR, output_dir))
            if not value
        ]
        if missing:
            raise ConfigError(
                ERROR_MISSING_INPUT,
                "CONFIG_001",
                config_key=", ".join(missing),
            )

        return cls(connections_json=connections_json, output_dir=Path(output_dir))

    @classmethod
    def from_toml(cls, path: str | Path) -> "SetupSettings":
        """
        从 TOML 设置文件读取配置

        Raises:
            ConfigError: 当文件无法读取、格式无效或缺少必需字段时
        """
        values = load_settings_file(path)
        missing = [
            key
            for key in ("connections_json", "output_dir")
            if key not in values
        ]
        if missing:
            raise ConfigError(
                f"设置文件缺少必需字段: {', '.join(missing)}",
                "CONFIG_003",
                config_file=str(path),
            )
        return cls(**values)


def load_settings_file(path: str | Path) -> Dict[str, Any]:
    """
    读取 TOML 设置文件中的 [setup] 表

    Returns:
        Dict[str, Any]: 只包含文件中出现的字段，键名与 SetupSettings 属性一致

    Raises:
        ConfigError: 当文件不存在、TOML 格式错误或字段类型不正确时
    """
    settings_path = Path(path)
    try:
        with open(settings_path, "rb") as f:
            raw = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        logger.error(f"设置文件TOML格式错误: {str(e)}")
        raise ConfigError(
            f"设置文件格式无效: {str(e)}", "CONFIG_002", config_file=str(settings_path)
        ) from e
    except OSError as e:
        logger.error(f"读取设置文件失败: {str(e)}")
        raise ConfigError(
            f"设置文件读取失败: {str(e)}", "CONFIG_002", config_file=str(settings_path)
        ) from e

    section = raw.get(SETTINGS_SECTION, {})
    if not isinstance(section, dict):
        raise ConfigError(
            f"[{SETTINGS_SECTION}] 必须是表", "CONFIG_002", config_file=str(settings_path)
        )

    base_dir = settings_path.parent
    values: Dict[str, Any] = {}

    if "connections" in section:
        values["connections_json"] = _require_str(section, "connections", settings_path)
    elif "connections_file" in section:
        connections_file = _resolve_path(
            _require_str(section, "connections_file", settings_path), base_dir
        )
        values["connections_json"] = read_connections_file(connections_file)

    if "output_dir" in section:
        values["output_dir"] = _resolve_path(
            _require_str(section, "output_dir", settings_path), base_dir
        )

    if "backup" in section:
        if not isinstance(section["backup"], bool):
            raise ConfigError(
                "backup 必须是布尔值",
                "CONFIG_002",
                config_file=str(settings_path),
                config_key="backup",
            )
        values["backup"] = section["backup"]

    if "log_level" in section:
        log_level = _require_str(section, "log_level", settings_path).upper()
        if log_level not in VALID_LOG_LEVELS:
            raise ConfigError(
                f"无效的日志级别: {log_level}",
                "CONFIG_002",
                config_file=str(settings_path),
                config_key="log_level",
            )
        values["log_level"] = log_level

    logger.debug(f"设置文件已加载: {settings_path}")
    return values


def read_connections_file(path: str | Path) -> str:
    """
    读取连接描述 JSON 文件内容

    Raises:
        ConfigError: 当文件无法读取时
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except OSError as e:
        logger.error(f"读取连接描述文件失败: {str(e)}")
        raise ConfigError(
            f"连接描述文件读取失败: {str(e)}", "CONFIG_004", config_file=str(path)
        ) from e


def resolve_settings(
    connections_json: str | None = None,
    output_dir: str | Path | None = None,
    config_file: str | Path | None = None,
    backup: bool | None = None,
    log_level: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> SetupSettings:
    """
    合并三种来源的配置

    优先级: 显式参数 > TOML 设置文件 > 环境变量。

    Raises:
        ConfigError: 当合并后仍缺少连接描述或输出目录时
    """
    environ = os.environ if environ is None else environ

    values: Dict[str, Any] = {}
    if environ.get(ENV_CONNECTIONS):
        values["connections_json"] = environ[ENV_CONNECTIONS]
    if environ.get(ENV_OUTPUT_DIR):
        values["output_dir"] = Path(environ[ENV_OUTPUT_DIR])

    if config_file is not None:
        values.update(load_settings_file(config_file))

    if connections_json is not None:
        values["connections_json"] = connections_json
    if output_dir is not None:
        values["output_dir"] = Path(output_dir)
    if backup is not None:
        values["backup"] = backup
    if log_level is not None:
        values["log_level"] = log_level.upper()

    missing = [
        name
        for key, name in (("connections_json", ENV_CONNECTIONS), ("output_dir", ENV_OUTPUT_DIR))
        if not values.get(key)
    ]
    if missing:
        raise ConfigError(ERROR_MISSING_INPUT, "CONFIG_001", config_key=", ".join(missing))

    return SetupSettings(**values)


def _require_str(section: Dict[str, Any], key: str, settings_path: Path) -> str:
    value = section[key]
    if not isinstance(value, str):
        raise ConfigError(
            f"{key} 必须是字符串",
            "CONFIG_002",
            config_file=str(settings_path),
            config_key=key,
        )
    return value


def _resolve_path(value: str, base_dir: Path) -> Path:
    path = Path(PathHelper.expand_home(value))
    return path if path.is_absolute() else base_dir / path
