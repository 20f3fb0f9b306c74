# SPDX-FileCopyrightText: 2025-present wangquanqing <wangquanqing1636@sina.com>
#
# SPDX-License-Identifier: MIT
"""
DBeaver Config Tool CLI 工具
============================

提供命令行界面，根据连接描述生成 DBeaver 配置文件。

功能特性:
- generate: 写入 data-sources.json 和加密的 credentials-config.json
- preview: 只打印 data-sources.json 内容，不写文件
- 连接描述可来自环境变量、命令行参数、JSON 文件或 TOML 设置文件

使用示例:
    DBEAVER_CONNECTIONS='[{"name":"My DB","driver":"mysql8",...}]' \\
    DBEAVER_DIR=/path/to/.dbeaver \\
    dbeaver-config-tool

    dbeaver-config-tool generate --connections-file conns.json --output-dir ~/.dbeaver --backup
    dbeaver-config-tool preview --connections-file conns.json
"""

import argparse
import sys
from typing import List, Optional

from .core.config import SetupSettings, read_connections_file, resolve_settings
from .core.exceptions import DBeaverSetupError
from .core.mapper import build_documents
from .core.models import ConnectionDescriptor, parse_connections
from .core.writer import ConfigWriter, render_data_sources
from .utils.logging_utils import (
    APP_LOGGER_NAME,
    VALID_LOG_LEVELS,
    get_logger,
    set_log_level,
    setup_logging,
)

logger = get_logger(__name__)


class DBeaverSetupCLI:
    """
    DBeaver Config Tool 命令行接口主类

    每个子命令对应一个方法，失败时打印错误并以状态码 1 退出。
    """

    def generate(self, args: argparse.Namespace) -> None:
        """
        生成并写入两份 DBeaver 配置文件

        Args:
            args (argparse.Namespace): 命令行参数

        Raises:
            SystemExit: 如果输入缺失或生成失败则退出程序
        """
        try:
            settings = self._resolve_settings(args)
            descriptors = parse_connections(settings.connections_json)
            result = build_documents(descriptors)
            files = ConfigWriter(settings.output_dir, backup=settings.backup).write(result)
        except DBeaverSetupError as e:
            logger.error(f"生成配置失败: {e}")
            print(f"❌ 生成配置失败: {e.message}", file=sys.stderr)
            sys.exit(1)

        for backup_path in files.backups:
            print(f"📋 已备份: {backup_path}")
        self._print_report(descriptors)

    def preview(self, args: argparse.Namespace) -> None:
        """
        打印 data-sources.json 内容，不加密也不写文件

        Raises:
            SystemExit: 如果输入缺失或无效则退出程序
        """
        try:
            connections_json = self._read_connections_arg(args)
            if connections_json is None:
                connections_json = resolve_settings(
                    config_file=args.config, output_dir=".", log_level=args.log_level
                ).connections_json
            result = build_documents(parse_connections(connections_json))
        except DBeaverSetupError as e:
            logger.error(f"预览配置失败: {e}")
            print(f"❌ 预览配置失败: {e.message}", file=sys.stderr)
            sys.exit(1)

        print(render_data_sources(result.data_sources))

    def _resolve_settings(self, args: argparse.Namespace) -> SetupSettings:
        settings = resolve_settings(
            connections_json=self._read_connections_arg(args),
            output_dir=args.output_dir,
            config_file=args.config,
            backup=True if args.backup else None,
            log_level=args.log_level,
        )
        set_log_level(APP_LOGGER_NAME, settings.log_level)
        return settings

    def _read_connections_arg(self, args: argparse.Namespace) -> Optional[str]:
        if args.connections is not None:
            return args.connections
        if args.connections_file is not None:
            return read_connections_file(args.connections_file)
        return None

    def _print_report(self, descriptors: List[ConnectionDescriptor]) -> None:
        """打印配置的连接数量和每个连接的名称（含 SSH 目标主机）"""
        print(f"✅ 已配置 {len(descriptors)} 个连接")
        for descriptor in descriptors:
            suffix = f" (SSH → {descriptor.ssh.host})" if descriptor.ssh else ""
            print(f"    - {descriptor.name}{suffix}")


def create_argument_parser(cli_instance: DBeaverSetupCLI) -> argparse.ArgumentParser:
    """
    创建并配置命令行参数解析器

    Args:
        cli_instance (DBeaverSetupCLI): CLI实例，用于绑定命令处理函数

    Returns:
        argparse.ArgumentParser: 配置好的参数解析器
    """
    parser = argparse.ArgumentParser(
        prog="dbeaver-config-tool",
        description="DBeaver Config Tool - 生成 DBeaver 连接和加密凭据配置",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
示例:
  DBEAVER_CONNECTIONS='[...]' DBEAVER_DIR=~/.dbeaver dbeaver-config-tool
  dbeaver-config-tool generate --connections-file conns.json --output-dir ~/.dbeaver
  dbeaver-config-tool preview --connections-file conns.json
        """,
    )
    common = argparse.ArgumentParser(add_help=False)
    _setup_common_arguments(common)

    subparsers = parser.add_subparsers(title="可用命令", dest="command")

    generate_parser = subparsers.add_parser(
        "generate", help="生成配置文件（默认命令）", parents=[common]
    )
    generate_parser.add_argument(
        "-o", "--output-dir", help="DBeaver 配置目录 (默认: $DBEAVER_DIR)"
    )
    generate_parser.add_argument(
        "-b", "--backup", action="store_true", help="覆盖前备份已有配置文件"
    )
    generate_parser.set_defaults(func=cli_instance.generate)

    preview_parser = subparsers.add_parser(
        "preview", help="打印 data-sources.json，不写文件", parents=[common]
    )
    preview_parser.set_defaults(func=cli_instance.preview)

    return parser


def _setup_common_arguments(parser: argparse.ArgumentParser) -> None:
    """
    设置各命令共用的参数

    Args:
        parser (argparse.ArgumentParser): 参数解析器实例
    """
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "-c", "--connections", help="连接描述 JSON 数组 (默认: $DBEAVER_CONNECTIONS)"
    )
    source.add_argument("-f", "--connections-file", help="连接描述 JSON 文件路径")
    parser.add_argument("--config", help="TOML 设置文件路径")
    parser.add_argument(
        "-l",
        "--log-level",
        type=str.upper,
        choices=VALID_LOG_LEVELS,
        help="日志级别 (默认: INFO)",
    )
    parser.add_argument("--log-dir", help="日志目录 (默认: 用户配置目录下的 logs)")
    parser.add_argument("-v", "--verbose", action="store_true", help="在控制台输出日志")


def main(argv: Optional[List[str]] = None) -> None:
    """DBeaver Config Tool CLI 主入口函数"""
    cli = DBeaverSetupCLI()
    parser = create_argument_parser(cli)

    argv = sys.argv[1:] if argv is None else argv
    # 无参数时按环境变量生成配置
    args = parser.parse_args(argv or ["generate"])

    if not hasattr(args, "func"):
        parser.print_help()
        sys.exit(0)

    try:
        setup_logging(
            level=args.log_level or "INFO",
            log_to_console=args.verbose,
            log_dir=args.log_dir,
        )
    except OSError as e:
        print(f"❌ 初始化日志失败: {e}", file=sys.stderr)
        sys.exit(1)

    args.func(args)


if __name__ == "__main__":
    main()
