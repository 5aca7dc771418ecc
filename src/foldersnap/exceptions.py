#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
FolderSnap 异常定义

所有异常均继承自 FolderSnapError，便于统一捕获。
每个异常类携带一个 ErrorKind，供顶层操作转换为结构化结果。
"""

from enum import Enum
from typing import List


class ErrorKind(Enum):
    """错误类别"""
    INVALID_SOURCE = "InvalidSource"   # 源目录不存在或不是目录
    NOT_FOUND = "NotFound"             # 快照文件/目录不存在
    INVALID_FORMAT = "InvalidFormat"   # 快照无法解析或结构缺失
    IO_ERROR = "IoError"               # 单个文件/目录读写失败


class FolderSnapError(Exception):
    """FolderSnap 基础异常"""
    kind: ErrorKind = ErrorKind.IO_ERROR


class InvalidSourceError(FolderSnapError):
    """
    源路径无效异常

    pack/stats 的输入不存在或不是目录时抛出。
    """
    kind = ErrorKind.INVALID_SOURCE


class SnapNotFoundError(FolderSnapError):
    """快照文件或目录不存在"""
    kind = ErrorKind.NOT_FOUND

    def __init__(self, path: str, what: str = "快照文件"):
        self.path = path
        super().__init__(f"{what}不存在: {path}")


class InvalidFormatError(FolderSnapError):
    """
    快照格式无效异常

    当 JSON 与旧版哨兵格式都无法解析，或缺少 metadata/structure 时抛出。
    """
    kind = ErrorKind.INVALID_FORMAT

    def __init__(self, message: str, expected: str = None, actual: str = None):
        self.expected = expected
        self.actual = actual
        if expected and actual:
            message = f"{message}: 期望 {expected}, 实际 {actual}"
        super().__init__(message)


class UnknownFormatError(InvalidFormatError):
    """
    未知格式版本异常

    当请求或遇到未注册的格式版本时抛出。
    """
    def __init__(self, version: str, supported_versions: List[str]):
        self.version = version
        self.supported_versions = supported_versions
        super().__init__(
            f"不支持的格式版本 {version!r}, "
            f"支持的版本: {supported_versions}"
        )


class SnapIOError(FolderSnapError):
    """读写失败 (包装底层 OSError)"""
    kind = ErrorKind.IO_ERROR
