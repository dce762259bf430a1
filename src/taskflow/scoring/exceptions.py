"""Scoring 异常体系

空输入永远不是错误；只有无法构成合法实体的输入才抛出异常。
"""


class ScoringError(Exception):
    """Scoring 包基础异常"""

    def __init__(self, message: str, recoverable: bool = False) -> None:
        """
        Args:
            message: 错误描述
            recoverable: 调用方修正输入后是否可重试
        """
        super().__init__(message)
        self.recoverable = recoverable


class InvalidInputError(ScoringError, ValueError):
    """输入数据无法校验为合法实体（未知枚举值、缺失字段、违反不变量等）

    数据完整性由调用方负责，引擎不做静默修正。
    """

    def __init__(self, message: str, errors: list | None = None) -> None:
        """
        Args:
            message: 错误描述
            errors: Pydantic 校验错误明细（如有）
        """
        super().__init__(message, recoverable=True)
        self.errors = errors or []


class SnapshotError(ScoringError):
    """快照文件无法读取或不是合法 JSON"""

    def __init__(self, path: str, original_error: Exception) -> None:
        """
        Args:
            path: 快照文件路径
            original_error: 原始异常
        """
        super().__init__(f"无法读取快照文件: {path} -- {original_error}")
        self.path = path
        self.original_error = original_error
