#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
FolderSnap 快照格式

提供 legacy / v2 / v3 三种磁盘表示的可插拔实现。
"""

from .base import SnapFormat, InlineFormat
from .legacy import LegacyFormat, extract_sentinel_block
from .v2 import V2Format
from .v3 import V3Format
from .registry import (
    FORMAT_REGISTRY,
    get_format,
    resolve_version,
    detect_format,
    supported_versions,
)

__all__ = [
    # 抽象基类
    "SnapFormat",
    "InlineFormat",
    # 内置格式
    "LegacyFormat",
    "V2Format",
    "V3Format",
    "extract_sentinel_block",
    # 注册表
    "FORMAT_REGISTRY",
    "get_format",
    "resolve_version",
    "detect_format",
    "supported_versions",
]
