# SPDX-FileCopyrightText: 2025-present wangquanqing <wangquanqing1636@sina.com>
#
# SPDX-License-Identifier: MIT
"""
凭据加密模块

使用 cryptography 的 AES-192-CBC 加密凭据注册表，生成 DBeaver 可直接读取的
credentials-config.json 内容。

特性：
- 固定的 192 位密钥，与 DBeaver 自身凭据存储使用的公开密钥一致
- 每次加密使用 secrets 模块生成新的 16 字节初始化向量
- PKCS#7 填充
- 输出布局: IV (16 字节) || 密文，无认证标签，无长度前缀

Security Note:
    该密钥来自 DBeaver 开源代码，是公开的互操作常量而非机密。
    修改或轮换密钥会导致 DBeaver 无法读取生成的文件。
"""

import json
import secrets
from typing import Any, Dict

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from ..utils.logging_utils import get_logger
from .exceptions import CryptoError

logger = get_logger(__name__)

# DBeaver 凭据存储密钥（SecuredPasswordEncryptor）
DBEAVER_CREDENTIALS_KEY = bytes.fromhex(
    "babb4a9f774ab853c96c2d653dfe544a0b87c80ef1505c10"
)

ALGORITHM_NAME = "AES-192-CBC"


class CredentialEncryptor:
    """
    凭据加密器

    Attributes:
        IV_LENGTH (int): 初始化向量长度（16字节，等于 AES 块大小）
        key (bytes): 24 字节 AES 密钥

    Example:
        >>> encryptor = CredentialEncryptor()
        >>> payload = encryptor.encrypt_credentials({"mysql8-my-db": {...}})
        >>> iv, ciphertext = payload[:16], payload[16:]
    """

    IV_LENGTH = 16

    def __init__(self, key: bytes = DBEAVER_CREDENTIALS_KEY) -> None:
        self.key = key

    def _generate_iv(self) -> bytes:
        """生成密码学安全的随机初始化向量，每次调用都不同"""
        return secrets.token_bytes(self.IV_LENGTH)

    @staticmethod
    def serialize(credentials: Dict[str, Any]) -> str:
        """
        把凭据注册表序列化为紧凑 JSON 文本

        Raises:
            CryptoError: 当凭据中包含无法序列化的值时
        """
        try:
            return json.dumps(credentials, ensure_ascii=False, separators=(",", ":"))
        except (TypeError, ValueError) as e:
            logger.error(f"凭据序列化失败: {str(e)}")
            raise CryptoError(
                f"凭据序列化失败: {str(e)}", "CRYPTO_001", operation="serialize"
            ) from e

    def encrypt(self, plaintext: str) -> bytes:
        """
        加密字符串数据

        Args:
            plaintext: UTF-8 明文

        Returns:
            bytes: IV || 密文

        Raises:
            CryptoError: 当加密过程失败时（如密钥长度不正确）
        """
        try:
            iv = self._generate_iv()
            padder = padding.PKCS7(algorithms.AES.block_size).padder()
            padded = padder.update(plaintext.encode("utf-8")) + padder.finalize()

            encryptor = Cipher(algorithms.AES(self.key), modes.CBC(iv)).encryptor()
            ciphertext = encryptor.update(padded) + encryptor.finalize()

            logger.debug(f"凭据加密完成，密文长度: {len(ciphertext)}")
            return iv + ciphertext

        except Exception as e:
            logger.error(f"凭据加密失败: {str(e)}")
            raise CryptoError(
                f"凭据加密失败: {str(e)}",
                "CRYPTO_002",
                operation="encrypt",
                algorithm=ALGORITHM_NAME,
            ) from e

    def encrypt_credentials(self, credentials: Dict[str, Any]) -> bytes:
        """序列化并加密凭据注册表，返回 credentials-config.json 的完整内容"""
        return self.encrypt(self.serialize(credentials))

    def __repr__(self) -> str:
        return f"<CredentialEncryptor algorithm={ALGORITHM_NAME}, iv_length={self.IV_LENGTH}>"
