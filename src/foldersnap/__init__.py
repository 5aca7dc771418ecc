#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
FolderSnap - 把目录树快照为可读、可移植的文本文件

支持 legacy / v2 (内嵌内容) / v3 (sidecar 内容目录) 三种格式。
"""

__version__ = "3.0.0"

# 异常类
from .exceptions import (
    ErrorKind,
    FolderSnapError,
    InvalidSourceError,
    SnapNotFoundError,
    InvalidFormatError,
    UnknownFormatError,
    SnapIOError,
)

# 数据结构
from .core import (
    ContentEncoding,
    DirectoryEntry,
    FileEntry,
    SnapMetadata,
    SnapData,
    FolderSnapOptions,
    FolderStats,
    SnapResult,
    ValidationResult,
    IgnoreFilter,
    walk_tree,
    FORMAT_LEGACY,
    FORMAT_V2,
    FORMAT_V3,
)

# 读写
from .archive import SnapWriter, SnapReader, load_archive

# 格式
from .formats import (
    SnapFormat,
    LegacyFormat,
    V2Format,
    V3Format,
    get_format,
    detect_format,
)

# 统计与转换
from .stats import get_folder_stats
from .converter import FormatConverter, upgrade

# 门面
from .snap import FolderSnap

__all__ = [
    # 版本
    "__version__",
    # 异常
    "ErrorKind",
    "FolderSnapError",
    "InvalidSourceError",
    "SnapNotFoundError",
    "InvalidFormatError",
    "UnknownFormatError",
    "SnapIOError",
    # 数据结构
    "ContentEncoding",
    "DirectoryEntry",
    "FileEntry",
    "SnapMetadata",
    "SnapData",
    "FolderSnapOptions",
    "FolderStats",
    "SnapResult",
    "ValidationResult",
    "FORMAT_LEGACY",
    "FORMAT_V2",
    "FORMAT_V3",
    # 遍历
    "IgnoreFilter",
    "walk_tree",
    # 读写
    "SnapWriter",
    "SnapReader",
    "load_archive",
    # 格式
    "SnapFormat",
    "LegacyFormat",
    "V2Format",
    "V3Format",
    "get_format",
    "detect_format",
    # 统计与转换
    "get_folder_stats",
    "FormatConverter",
    "upgrade",
    # 门面
    "FolderSnap",
]
