# SPDX-FileCopyrightText: 2025-present wangquanqing <wangquanqing1636@sina.com>
#
# SPDX-License-Identifier: MIT
"""
DBeaver 配置生成工具自定义异常模块

提供项目专用的异常类层次结构，用于区分输入解析、配置读取、加密和文件写入
等不同阶段的错误。所有异常均为致命错误，由命令行入口统一捕获并转换为退出码。

异常类层次结构：
DBeaverSetupError
├── ConfigError (运行配置相关异常)
├── ValidationError (连接描述输入验证异常)
├── CryptoError (凭据加密相关异常)
└── FileSystemError (输出文件写入异常)
"""

from typing import Any, Dict


class DBeaverSetupError(Exception):
    """
    DBeaver 配置生成工具基础异常类

    所有自定义异常的基类，提供统一的异常处理接口。
    支持错误代码、详细信息和字典格式转换。

    Attributes:
        message (str): 异常描述信息
        error_code (str | None): 错误代码，用于错误分类和识别
        details (Dict[str, Any]): 详细的错误信息字典

    Example:
        >>> try:
        ...     raise DBeaverSetupError("测试异常", "TEST_001", {"key": "value"})
        ... except DBeaverSetupError as e:
        ...     print(e.to_dict())
        {'error_type': 'DBeaverSetupError', 'message': '测试异常',
         'error_code': 'TEST_001', 'details': {'key': 'value'}}
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: Dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}

    def __str__(self) -> str:
        """
        返回异常的字符串表示

        Example:
            >>> str(DBeaverSetupError("输入无效", "INPUT_001"))
            'DBeaverSetupError: 输入无效 (错误代码: INPUT_001)'
        """
        base_str = f"{self.__class__.__name__}: {self.message}"
        if self.error_code:
            base_str += f" (错误代码: {self.error_code})"
        return base_str

    def to_dict(self) -> Dict[str, Any]:
        """将异常信息转换为字典格式，便于序列化和日志记录"""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "details": self.details,
        }


class ConfigError(DBeaverSetupError):
    """
    运行配置相关异常

    处理环境变量缺失、TOML 设置文件读取或解析失败等错误。

    Attributes:
        config_file (str | None): 相关的设置文件路径
        config_key (str | None): 相关的配置键或环境变量名称

    Example:
        >>> raise ConfigError(
        ...     "缺少必需的环境变量",
        ...     "CONFIG_001",
        ...     config_key="DBEAVER_DIR",
        ... )
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        config_file: str | None = None,
        config_key: str | None = None,
        details: Dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, error_code, details)
        self.config_file = config_file
        self.config_key = config_key

        if config_file:
            self.details["config_file"] = config_file
        if config_key:
            self.details["config_key"] = config_key


class ValidationError(DBeaverSetupError):
    """
    连接描述输入验证异常

    输入文本不是合法 JSON、顶层不是数组、数组元素不是对象，或 name / driver /
    port 的类型无效时抛出。字段缺失不会触发此异常。

    Attributes:
        field_name (str | None): 验证失败的字段名
        expected_type (str | None): 期望的数据类型
        index (int | None): 出错元素在输入数组中的位置
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        field_name: str | None = None,
        expected_type: str | None = None,
        index: int | None = None,
        details: Dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, error_code, details)
        self.field_name = field_name
        self.expected_type = expected_type
        self.index = index

        if field_name:
            self.details["field_name"] = field_name
        if expected_type:
            self.details["expected_type"] = expected_type
        if index is not None:
            self.details["index"] = index
        # 注意：不记录实际值，避免密码等敏感信息进入日志


class CryptoError(DBeaverSetupError):
    """
    凭据加密相关异常

    加密原语不可用或加密过程失败时抛出，属于不可恢复的致命错误。

    Attributes:
        operation (str | None): 加密操作类型（serialize/encrypt 等）
        algorithm (str | None): 使用的加密算法名称
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        operation: str | None = None,
        algorithm: str | None = None,
        details: Dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, error_code, details)
        self.operation = operation
        self.algorithm = algorithm

        if operation:
            self.details["operation"] = operation
        if algorithm:
            self.details["algorithm"] = algorithm


class FileSystemError(DBeaverSetupError):
    """
    文件系统操作异常

    处理输出目录创建、配置文件写入和备份过程中出现的错误。

    Attributes:
        file_path (str | None): 相关的文件路径
        operation (str | None): 文件操作类型（mkdir/write/backup 等）

    Example:
        >>> raise FileSystemError(
        ...     "文件写入失败",
        ...     "FS_002",
        ...     file_path="/path/to/data-sources.json",
        ...     operation="write"
        ... )
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        file_path: str | None = None,
        operation: str | None = None,
        details: Dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, error_code, details)
        self.file_path = file_path
        self.operation = operation

        if file_path:
            self.details["file_path"] = file_path
        if operation:
            self.details["operation"] = operation
