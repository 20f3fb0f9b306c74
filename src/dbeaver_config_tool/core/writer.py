# SPDX-FileCopyrightText: 2025-present wangquanqing <wangquanqing1636@sina.com>
#
# SPDX-License-Identifier: MIT
"""
配置文件写入模块

把映射结果写入 DBeaver 配置目录：

- data-sources.json: UTF-8 JSON，4 空格缩进
- credentials-config.json: IV || AES-192-CBC 密文

先写 data-sources.json 再加密写入凭据文件。两次写入之间没有事务保证，
加密失败时 data-sources.json 可能已经落盘。
"""

import json
import shutil
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List

from ..utils.logging_utils import get_logger
from ..utils.path_utils import PathHelper
from .crypto import CredentialEncryptor
from .exceptions import FileSystemError
from .mapper import MappingResult

logger = get_logger(__name__)

DATA_SOURCES_FILE = "data-sources.json"
CREDENTIALS_FILE = "credentials-config.json"


def render_data_sources(document: Dict[str, Any]) -> str:
    """序列化连接注册表，相同输入得到逐字节相同的文本"""
    return json.dumps(document, indent=4, ensure_ascii=False)


@dataclass
class WrittenFiles:
    """
    写入结果

    Attributes:
        data_sources: data-sources.json 路径
        credentials: credentials-config.json 路径
        backups: 本次生成的备份文件路径
    """

    data_sources: Path
    credentials: Path
    backups: List[Path]


class ConfigWriter:
    """
    DBeaver 配置写入器

    Attributes:
        output_dir (Path): 输出目录，不存在时自动创建
        backup (bool): 覆盖已有文件前是否先备份
        encryptor (CredentialEncryptor): 凭据加密器

    Example:
        >>> writer = ConfigWriter("~/.local/share/DBeaverData/workspace6/General/.dbeaver")
        >>> files = writer.write(build_documents(descriptors))
    """

    def __init__(
        self,
        output_dir: str | Path,
        backup: bool = False,
        encryptor: CredentialEncryptor | None = None,
    ) -> None:
        self.output_dir = Path(output_dir)
        self.backup = backup
        self.encryptor = encryptor or CredentialEncryptor()

    def write(self, result: MappingResult) -> WrittenFiles:
        """
        写入两份配置文件

        Args:
            result: 映射结果

        Returns:
            WrittenFiles: 写入的文件路径和备份路径

        Raises:
            FileSystemError: 当目录创建、备份或文件写入失败时
            CryptoError: 当凭据加密失败时
        """
        self._ensure_output_dir()
        backups: List[Path] = []

        data_sources_path = self.output_dir / DATA_SOURCES_FILE
        self._backup_if_needed(data_sources_path, backups)
        self._write_bytes(
            data_sources_path, render_data_sources(result.data_sources).encode("utf-8")
        )

        payload = self.encryptor.encrypt_credentials(result.credentials)
        credentials_path = self.output_dir / CREDENTIALS_FILE
        self._backup_if_needed(credentials_path, backups)
        self._write_bytes(credentials_path, payload)

        logger.info(f"DBeaver 配置已写入: {self.output_dir}")
        return WrittenFiles(
            data_sources=data_sources_path,
            credentials=credentials_path,
            backups=backups,
        )

    def _ensure_output_dir(self) -> None:
        try:
            created = PathHelper.ensure_dir_exists(self.output_dir)
        except OSError as e:
            logger.error(f"创建输出目录失败: {str(e)}")
            raise FileSystemError(
                f"输出目录创建失败: {str(e)}",
                "FS_001",
                file_path=str(self.output_dir),
                operation="mkdir",
            ) from e

        if not created:
            raise FileSystemError(
                f"输出路径不是目录: {self.output_dir}",
                "FS_001",
                file_path=str(self.output_dir),
                operation="mkdir",
            )

    def _backup_if_needed(self, path: Path, backups: List[Path]) -> None:
        """
        备份已存在的目标文件

        备份文件名格式: <file>.backup.<YYYYmmdd_HHMMSS>
        """
        if not self.backup or not path.exists():
            return

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        backup_path = path.with_name(f"{path.name}.backup.{timestamp}")
        try:
            shutil.copy2(path, backup_path)
        except OSError as e:
            logger.error(f"备份文件失败 {path}: {str(e)}")
            raise FileSystemError(
                f"文件备份失败: {str(e)}",
                "FS_003",
                file_path=str(path),
                operation="backup",
            ) from e

        backups.append(backup_path)
        logger.info(f"已备份: {backup_path}")

    def _write_bytes(self, path: Path, data: bytes) -> None:
        try:
            with open(path, "wb") as f:
                f.write(data)
        except OSError as e:
            logger.error(f"写入文件失败 {path}: {str(e)}")
            raise FileSystemError(
                f"文件写入失败: {str(e)}",
                "FS_002",
                file_path=str(path),
                operation="write",
            ) from e

        logger.debug(f"文件已写入: {path} ({len(data)} 字节)")
