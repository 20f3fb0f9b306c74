# SPDX-FileCopyrightText: 2025-present wangquanqing <wangquanqing1636@sina.com>
#
# SPDX-License-Identifier: MIT
"""
连接标识与 URL 推导模块

纯函数集合：根据驱动和名称生成稳定的连接 ID，解析 DBeaver provider，
拼接驱动相关的 JDBC 连接 URL，以及展开 SSH 私钥路径中的主目录简写。

未识别的驱动不会报错，provider 和 URL scheme 都回退到 mysql。
"""

import re

from ..utils.path_utils import PathHelper

DRIVER_MYSQL8 = "mysql8"
DRIVER_POSTGRES = "postgres-jdbc"
DRIVER_MARIADB = "mariaDB"

SUPPORTED_DRIVERS = (DRIVER_MYSQL8, DRIVER_POSTGRES, DRIVER_MARIADB)

DEFAULT_PROVIDER = "mysql"
DEFAULT_URL_SCHEME = "mysql"

# 驱动 -> DBeaver provider
PROVIDER_MAP = {
    DRIVER_POSTGRES: "postgresql",
}

# 驱动 -> JDBC URL scheme
URL_SCHEME_MAP = {
    DRIVER_POSTGRES: "postgresql",
    DRIVER_MARIADB: "mariadb",
}

_NON_ALNUM_RUN = re.compile(r"[^a-z0-9]+")


def slugify(name: str) -> str:
    """
    将显示名称转换为 slug

    转为小写，连续的非 [a-z0-9] 字符替换为单个 "-"，并去掉首尾的 "-"。

    Example:
        >>> slugify("My DB (prod)")
        'my-db-prod'
    """
    return _NON_ALNUM_RUN.sub("-", name.lower()).strip("-")


def derive_id(driver: str, name: str) -> str:
    """
    生成连接 ID: ``{driver}-{slug(name)}``

    名称为空时返回 ``"{driver}-"``，不做特殊处理。

    Example:
        >>> derive_id("mysql8", "My DB")
        'mysql8-my-db'
    """
    return f"{driver}-{slugify(name)}"


def resolve_provider(driver: str) -> str:
    """返回驱动对应的 DBeaver provider，未知驱动回退为 mysql"""
    return PROVIDER_MAP.get(driver, DEFAULT_PROVIDER)


def is_supported_driver(driver: str) -> bool:
    return driver in SUPPORTED_DRIVERS


def build_connection_url(
    driver: str, host: str, port: str | int, database: str | None = None
) -> str:
    """
    拼接 JDBC 连接 URL

    格式为 ``jdbc:{scheme}://{host}:{port}/{database}``，数据库名缺省时
    URL 以 "/" 结尾。

    Args:
        driver: 驱动标识
        host: 数据库主机
        port: 数据库端口，按原样输出
        database: 数据库名，可为空

    Example:
        >>> build_connection_url("postgres-jdbc", "h2", "5432")
        'jdbc:postgresql://h2:5432/'
    """
    scheme = URL_SCHEME_MAP.get(driver, DEFAULT_URL_SCHEME)
    return f"jdbc:{scheme}://{host}:{port}/{database or ''}"


def expand_home(path: str | None) -> str | None:
    """展开 SSH 私钥路径中的 "~/" 前缀"""
    return PathHelper.expand_home(path)
