#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
FolderSnap 核心模块

提供数据结构定义、忽略规则、目录遍历和内容编解码。
"""

from .schema import (
    ContentEncoding, WalkItem, DirectoryEntry, FileEntry, SnapMetadata,
    SnapData, FolderSnapOptions, FolderStats, SnapResult, ValidationResult,
    FORMAT_LEGACY, FORMAT_V2, FORMAT_V3, V3_TYPE_TAG,
)
from .ignore import IgnoreFilter, DEFAULT_IGNORE_RULES
from .walker import walk_tree
from .codec import EncodedContent, read_content, is_binary, encode, encode_bytes, decode

__all__ = [
    # 数据结构
    "ContentEncoding",
    "WalkItem",
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
    "V3_TYPE_TAG",
    # 忽略规则与遍历
    "IgnoreFilter",
    "DEFAULT_IGNORE_RULES",
    "walk_tree",
    # 编解码
    "EncodedContent",
    "read_content",
    "is_binary",
    "encode",
    "encode_bytes",
    "decode",
]
