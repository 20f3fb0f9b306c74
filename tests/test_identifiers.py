"""
连接标识与 URL 推导测试
"""

import re
from pathlib import Path
from unittest.mock import patch

import pytest

from dbeaver_config_tool.core.identifiers import (
    build_connection_url,
    derive_id,
    expand_home,
    is_supported_driver,
    resolve_provider,
    slugify,
)

SLUG_PATTERN = re.compile(r"^([a-z0-9]+(-[a-z0-9]+)*)?$")


class TestSlugify:
    """slugify测试类"""

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("My DB", "my-db"),
            ("  Prod -- Reporting  ", "prod-reporting"),
            ("already-slugged", "already-slugged"),
            ("数据库 1", "1"),
            ("UPPER_case.Name", "upper-case-name"),
            ("---", ""),
            ("", ""),
        ],
    )
    def test_slugify(self, name, expected):
        """测试常见名称的 slug"""
        assert slugify(name) == expected

    @pytest.mark.parametrize(
        "name",
        ["My DB", "-a--b-", "!!x!!", "Ünïcödé Name", "a\tb\nc", "___", "中文名称", "x" * 200],
    )
    def test_slug_alphabet(self, name):
        """测试 slug 只包含小写字母数字和单个连字符，且首尾无连字符"""
        slug = slugify(name)
        assert SLUG_PATTERN.match(slug)
        assert "--" not in slug
        assert not slug.startswith("-")
        assert not slug.endswith("-")


class TestDeriveId:
    """derive_id测试类"""

    def test_derive_id(self):
        """测试连接 ID 格式"""
        assert derive_id("mysql8", "My DB") == "mysql8-my-db"
        assert derive_id("postgres-jdbc", "Other") == "postgres-jdbc-other"

    def test_deterministic(self):
        """测试多次调用结果一致"""
        ids = {derive_id("mariaDB", "Staging (EU)") for _ in range(10)}
        assert ids == {"mariaDB-staging-eu"}

    def test_empty_name(self):
        """测试空名称只保留驱动前缀"""
        assert derive_id("mysql8", "") == "mysql8-"


class TestProviderAndUrl:
    """provider 和 URL 推导测试类"""

    def test_resolve_provider(self):
        """测试 provider 映射及未知驱动回退"""
        assert resolve_provider("postgres-jdbc") == "postgresql"
        assert resolve_provider("mysql8") == "mysql"
        assert resolve_provider("mariaDB") == "mysql"
        assert resolve_provider("oracle") == "mysql"
        assert resolve_provider("") == "mysql"

    @pytest.mark.parametrize(
        "driver, expected",
        [
            ("postgres-jdbc", "jdbc:postgresql://db:5432/app"),
            ("mariaDB", "jdbc:mariadb://db:5432/app"),
            ("mysql8", "jdbc:mysql://db:5432/app"),
            ("oracle", "jdbc:mysql://db:5432/app"),
        ],
    )
    def test_build_connection_url(self, driver, expected):
        """测试各驱动的 URL scheme"""
        assert build_connection_url(driver, "db", "5432", "app") == expected

    def test_url_without_database(self):
        """测试数据库名缺省时 URL 以斜杠结尾"""
        assert build_connection_url("postgres-jdbc", "h2", "5432") == "jdbc:postgresql://h2:5432/"
        assert build_connection_url("mysql8", "h", 3306, "") == "jdbc:mysql://h:3306/"

    def test_supported_drivers(self):
        """测试支持的驱动列表"""
        assert is_supported_driver("mysql8")
        assert is_supported_driver("postgres-jdbc")
        assert is_supported_driver("mariaDB")
        assert not is_supported_driver("mariadb")
        assert not is_supported_driver("oracle")


class TestExpandHome:
    """主目录展开测试类"""

    def test_expand_home_prefix(self):
        """测试 ~/ 前缀被替换为主目录"""
        with patch("dbeaver_config_tool.utils.path_utils.Path.home") as mock_home:
            mock_home.return_value = Path("/home/test")
            assert expand_home("~/.ssh/id_ed25519") == str(Path("/home/test/.ssh/id_ed25519"))

    def test_other_paths_unchanged(self):
        """测试其他路径原样返回"""
        assert expand_home("/etc/ssh/key") == "/etc/ssh/key"
        assert expand_home("~other/key") == "~other/key"
        assert expand_home("relative/~/key") == "relative/~/key"
        assert expand_home("") == ""
        assert expand_home(None) is None
