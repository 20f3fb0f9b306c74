"""
运行配置测试
"""

from pathlib import Path

import pytest

from dbeaver_config_tool.core.config import (
    ENV_CONNECTIONS,
    ENV_OUTPUT_DIR,
    SetupSettings,
    load_settings_file,
    read_connections_file,
    resolve_settings,
)
from dbeaver_config_tool.core.exceptions import ConfigError


class TestSetupSettings:
    """SetupSettings测试类"""

    def test_from_env(self):
        """测试从环境变量读取"""
        settings = SetupSettings.from_env(
            {ENV_CONNECTIONS: "[]", ENV_OUTPUT_DIR: "/tmp/dbeaver"}
        )

        assert settings.connections_json == "[]"
        assert settings.output_dir == Path("/tmp/dbeaver")
        assert settings.backup is False
        assert settings.log_level == "INFO"

    @pytest.mark.parametrize(
        "environ, missing",
        [
            ({}, "DBEAVER_CONNECTIONS, DBEAVER_DIR"),
            ({ENV_CONNECTIONS: "[]"}, "DBEAVER_DIR"),
            ({ENV_CONNECTIONS: "", ENV_OUTPUT_DIR: "/tmp"}, "DBEAVER_CONNECTIONS"),
        ],
    )
    def test_from_env_missing(self, environ, missing):
        """测试缺少环境变量"""
        with pytest.raises(ConfigError) as exc_info:
            SetupSettings.from_env(environ)
        assert exc_info.value.config_key == missing

    def test_from_toml(self, tmp_path):
        """测试从 TOML 文件读取，相对路径以文件目录为基准"""
        (tmp_path / "conns.json").write_text('[{"name": "a"}]', encoding="utf-8")
        settings_file = tmp_path / "setup.toml"
        settings_file.write_text(
            '[setup]\nconnections_file = "conns.json"\noutput_dir = "out"\n'
            'backup = true\nlog_level = "debug"\n',
            encoding="utf-8",
        )

        settings = SetupSettings.from_toml(settings_file)

        assert settings.connections_json == '[{"name": "a"}]'
        assert settings.output_dir == tmp_path / "out"
        assert settings.backup is True
        assert settings.log_level == "DEBUG"

    def test_from_toml_missing_fields(self, tmp_path):
        """测试 TOML 文件缺少必需字段"""
        settings_file = tmp_path / "setup.toml"
        settings_file.write_text('[setup]\nconnections = "[]"\n', encoding="utf-8")

        with pytest.raises(ConfigError) as exc_info:
            SetupSettings.from_toml(settings_file)
        assert exc_info.value.config_file == str(settings_file)


class TestLoadSettingsFile:
    """load_settings_file测试类"""

    def test_inline_connections(self, tmp_path):
        """测试内联连接描述和绝对路径"""
        settings_file = tmp_path / "setup.toml"
        output_dir = tmp_path / "abs"
        settings_file.write_text(
            f"[setup]\nconnections = '[]'\noutput_dir = '{output_dir.as_posix()}'\n",
            encoding="utf-8",
        )

        values = load_settings_file(settings_file)

        assert values == {"connections_json": "[]", "output_dir": Path(output_dir.as_posix())}

    def test_missing_section(self, tmp_path):
        """测试没有 [setup] 表时返回空配置"""
        settings_file = tmp_path / "setup.toml"
        settings_file.write_text('title = "x"\n', encoding="utf-8")

        assert load_settings_file(settings_file) == {}

    def test_invalid_toml(self, tmp_path):
        """测试 TOML 格式错误"""
        settings_file = tmp_path / "setup.toml"
        settings_file.write_text("[setup\n", encoding="utf-8")

        with pytest.raises(ConfigError):
            load_settings_file(settings_file)

    def test_nonexistent_file(self, tmp_path):
        """测试设置文件不存在"""
        with pytest.raises(ConfigError):
            load_settings_file(tmp_path / "missing.toml")

    @pytest.mark.parametrize(
        "body, key",
        [
            ("backup = 'yes'", "backup"),
            ("log_level = 'LOUD'", "log_level"),
            ("output_dir = 1", "output_dir"),
        ],
    )
    def test_invalid_values(self, tmp_path, body, key):
        """测试字段类型或取值错误"""
        settings_file = tmp_path / "setup.toml"
        settings_file.write_text(f"[setup]\n{body}\n", encoding="utf-8")

        with pytest.raises(ConfigError) as exc_info:
            load_settings_file(settings_file)
        assert exc_info.value.config_key == key

    def test_missing_connections_file(self, tmp_path):
        """测试引用的连接描述文件不存在"""
        settings_file = tmp_path / "setup.toml"
        settings_file.write_text('[setup]\nconnections_file = "nope.json"\n', encoding="utf-8")

        with pytest.raises(ConfigError) as exc_info:
            load_settings_file(settings_file)
        assert exc_info.value.error_code == "CONFIG_004"


class TestResolveSettings:
    """resolve_settings测试类"""

    def test_environment_only(self):
        """测试只使用环境变量"""
        settings = resolve_settings(environ={ENV_CONNECTIONS: "[]", ENV_OUTPUT_DIR: "/env"})

        assert settings.output_dir == Path("/env")

    def test_precedence(self, tmp_path):
        """测试优先级：参数 > 设置文件 > 环境变量"""
        settings_file = tmp_path / "setup.toml"
        settings_file.write_text(
            "[setup]\nconnections = '[1]'\noutput_dir = '/from-file'\n", encoding="utf-8"
        )
        environ = {ENV_CONNECTIONS: "[0]", ENV_OUTPUT_DIR: "/from-env"}

        from_file = resolve_settings(config_file=settings_file, environ=environ)
        assert from_file.connections_json == "[1]"
        assert from_file.output_dir == Path("/from-file")

        from_args = resolve_settings(
            connections_json="[2]",
            output_dir="/from-args",
            config_file=settings_file,
            backup=True,
            log_level="warning",
            environ=environ,
        )
        assert from_args.connections_json == "[2]"
        assert from_args.output_dir == Path("/from-args")
        assert from_args.backup is True
        assert from_args.log_level == "WARNING"

    def test_missing_everything(self):
        """测试所有来源都缺少输入"""
        with pytest.raises(ConfigError) as exc_info:
            resolve_settings(environ={})
        assert "DBEAVER_CONNECTIONS" in exc_info.value.message


def test_read_connections_file(tmp_path):
    """测试读取连接描述文件"""
    path = tmp_path / "conns.json"
    path.write_text('[{"name": "数据库"}]', encoding="utf-8")

    assert read_connections_file(path) == '[{"name": "数据库"}]'
