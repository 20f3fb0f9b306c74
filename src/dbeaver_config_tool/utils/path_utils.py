# SPDX-FileCopyrightText: 2025-present wangquanqing <wangquanqing1636@sina.com>
#
# SPDX-License-Identifier: MIT
"""
跨平台路径处理工具模块

提供跨平台的路径处理功能，包括配置目录获取、用户主目录解析、
"~/" 简写展开和目录创建等工具方法。支持 Windows、macOS 和 Linux 系统。
"""

import os
import platform
from pathlib import Path

# 用户主目录简写前缀
HOME_SHORTHAND = "~/"


class PathHelper:
    """
    路径辅助类 - 提供跨平台的路径处理功能

    所有方法均为静态方法，无需实例化即可使用。

    Example:
        >>> log_dir = PathHelper.get_user_config_dir("dbeaver_config_tool") / "logs"
        >>> key_path = PathHelper.expand_home("~/.ssh/id_ed25519")
    """

    @staticmethod
    def get_user_config_dir(app_name: str = "dbeaver_config_tool") -> Path:
        """
        获取用户配置目录路径

        根据操作系统类型获取标准的用户配置目录，并创建应用特定的子目录。
        当标准目录创建失败时回退到当前工作目录下的隐藏目录。

        Args:
            app_name (str): 应用名称，默认为"dbeaver_config_tool"

        Returns:
            Path: 配置目录的Path对象

        Raises:
            ValueError: 当应用名称为空或不是字符串时
            OSError: 当无法创建目录时（仅在回退方案也失败时）

        Note:
            - Windows: %APPDATA%\\{app_name}
            - macOS: ~/Library/Application Support/{app_name}
            - Linux: ~/.config/{app_name}
        """
        if not app_name or not isinstance(app_name, str):
            raise ValueError("应用名称不能为空且必须是字符串")

        system = platform.system().lower()

        try:
            if system == "windows":
                base_dir = Path(os.environ.get("APPDATA", Path.home()))
            elif system == "darwin":  # macOS
                base_dir = Path.home() / "Library" / "Application Support"
            else:  # Linux和其他Unix系统
                base_dir = Path.home() / ".config"

            config_dir = base_dir / app_name
            config_dir.mkdir(parents=True, exist_ok=True)

            return config_dir

        except OSError as e:
            fallback_dir = Path.cwd() / f".{app_name}"
            try:
                fallback_dir.mkdir(exist_ok=True)
                return fallback_dir
            except OSError:
                raise OSError(f"无法创建配置目录: {str(e)}")

    @staticmethod
    def get_user_home_dir() -> Path:
        """
        获取用户主目录路径

        Returns:
            Path: 用户主目录的Path对象
        """
        return Path.home()

    @staticmethod
    def expand_home(path: str | None) -> str | None:
        """
        展开以 "~/" 开头的路径

        只处理 "~/" 前缀，"~user/" 形式和其他路径原样返回。
        空值原样返回，由调用方决定默认值。

        Args:
            path (str | None): 可能包含主目录简写的路径

        Returns:
            str | None: 展开后的路径字符串

        Example:
            >>> PathHelper.expand_home("~/.ssh/id_rsa")
            '/home/username/.ssh/id_rsa'
            >>> PathHelper.expand_home("/etc/ssh/key")
            '/etc/ssh/key'
        """
        if not path or not path.startswith(HOME_SHORTHAND):
            return path
        return str(PathHelper.get_user_home_dir() / path[len(HOME_SHORTHAND) :])

    @staticmethod
    def ensure_dir_exists(dir_path: str | Path) -> bool:
        """
        确保目录存在，如果不存在则递归创建

        Args:
            dir_path (str | Path): 需要确保存在的目录路径

        Returns:
            bool: 目录是否存在或是否成功创建；路径存在但不是目录时返回 False

        Raises:
            OSError: 当目录创建失败时（权限不足等）
        """
        if not dir_path:
            return False

        dir_path_obj = Path(dir_path) if isinstance(dir_path, str) else dir_path

        try:
            if dir_path_obj.exists():
                return dir_path_obj.is_dir()

            dir_path_obj.mkdir(parents=True, exist_ok=True)
            return True

        except OSError as e:
            raise OSError(f"无法创建目录 '{dir_path}': {str(e)}")
