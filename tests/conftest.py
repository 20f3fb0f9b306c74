"""
测试公共夹具
"""

import json
import logging

import pytest
from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from dbeaver_config_tool.core.crypto import DBEAVER_CREDENTIALS_KEY
from dbeaver_config_tool.utils.logging_utils import APP_LOGGER_NAME

SCENARIO_CONNECTIONS = [
    {
        "name": "My DB",
        "driver": "mysql8",
        "host": "h",
        "port": "3306",
        "database": "d",
        "user": "u",
        "password": "p",
    },
    {
        "name": "Other",
        "driver": "postgres-jdbc",
        "host": "h2",
        "port": "5432",
        "user": "u2",
        "password": "p2",
        "ssh": {"host": "sshhost", "port": 22, "user": "sshuser"},
    },
]


def decrypt_credentials(payload: bytes) -> str:
    """按 DBeaver 的方式解密 credentials-config.json：前 16 字节为 IV"""
    iv, ciphertext = payload[:16], payload[16:]
    decryptor = Cipher(algorithms.AES(DBEAVER_CREDENTIALS_KEY), modes.CBC(iv)).decryptor()
    padded = decryptor.update(ciphertext) + decryptor.finalize()
    unpadder = padding.PKCS7(algorithms.AES.block_size).unpadder()
    return (unpadder.update(padded) + unpadder.finalize()).decode("utf-8")


@pytest.fixture
def scenario_json() -> str:
    return json.dumps(SCENARIO_CONNECTIONS)


@pytest.fixture(autouse=True)
def reset_app_logger():
    """每个测试结束后关闭应用logger上的handler，避免文件句柄泄漏"""
    yield
    logger = logging.getLogger(APP_LOGGER_NAME)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
