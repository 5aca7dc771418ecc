#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
格式注册表

提供格式版本到实现的映射，以及读取时的格式识别:

    解析 JSON ── 成功 ── type == folder-snap-v3 ? ── 是 ── v3
       │                                     └── 否 ── 平铺 (legacy / v2)
       └── 失败 ── 提取哨兵块 ── 成功 ── 旧版平铺
                           └── 失败 ── InvalidFormatError
"""

import json
import logging
from typing import Any, Dict, List, Optional, Tuple, Type

from .base import SnapFormat
from .legacy import LegacyFormat, extract_sentinel_block
from .v2 import V2Format
from .v3 import V3Format
from ..core.schema import FORMAT_LEGACY, FORMAT_V2, FORMAT_V3, V3_TYPE_TAG
from ..exceptions import InvalidFormatError, UnknownFormatError


logger = logging.getLogger(__name__)


# 内置格式列表 (新增格式时只需在此添加)
_BUILTIN_FORMATS = [
    LegacyFormat,
    V2Format,
    V3Format,
]


def _build_format_registry() -> Dict[str, Type[SnapFormat]]:
    """从格式类自动构建 version -> 格式类映射"""
    registry = {}
    for format_cls in _BUILTIN_FORMATS:
        registry[format_cls().version] = format_cls
    return registry


# version -> 格式类 映射表
FORMAT_REGISTRY: Dict[str, Type[SnapFormat]] = _build_format_registry()

# 版本别名
_VERSION_ALIASES: Dict[str, str] = {
    'legacy': FORMAT_LEGACY,
    'v1': FORMAT_LEGACY,
    '1': FORMAT_LEGACY,
    'v2': FORMAT_V2,
    '2': FORMAT_V2,
    'v3': FORMAT_V3,
    '3': FORMAT_V3,
}


def supported_versions() -> List[str]:
    return list(FORMAT_REGISTRY)


def resolve_version(version: Optional[str]) -> str:
    """
    规范化格式版本字符串

    Args:
        version: 版本或别名，None 视为 legacy

    Raises:
        UnknownFormatError: 未注册的版本
    """
    if version is None:
        return FORMAT_LEGACY
    key = str(version).strip().lower()
    key = _VERSION_ALIASES.get(key, key)
    if key not in FORMAT_REGISTRY:
        raise UnknownFormatError(str(version), supported_versions())
    return key


def get_format(version: Optional[str]) -> SnapFormat:
    """根据版本获取格式实例"""
    return FORMAT_REGISTRY[resolve_version(version)]()


def detect_format(text: str) -> Tuple[SnapFormat, Dict[str, Any]]:
    """
    识别快照文本的格式

    Args:
        text: 快照文件全文

    Returns:
        (格式实例, 顶层文档)

    Raises:
        InvalidFormatError: JSON 与哨兵块均无法解析
    """
    try:
        document = json.loads(text)
    except ValueError:
        document = None

    if document is None:
        block = extract_sentinel_block(text)
        if block is None:
            raise InvalidFormatError("无效的快照格式: 既不是 JSON，也没有找到哨兵标记")
        try:
            document = json.loads(block)
        except ValueError as e:
            raise InvalidFormatError(f"无效的快照格式: 哨兵块内 JSON 解析失败: {e}") from e
        logger.debug("通过哨兵块识别为旧版快照")
        if not isinstance(document, dict):
            raise InvalidFormatError("快照结构无效，顶层不是对象")
        return LegacyFormat(), document

    if not isinstance(document, dict):
        raise InvalidFormatError("快照结构无效，顶层不是对象")

    if document.get('type') == V3_TYPE_TAG:
        logger.debug("识别为 v3 sidecar 快照")
        return V3Format(), document

    metadata = document.get('metadata')
    version = metadata.get('version') if isinstance(metadata, dict) else None
    if version == FORMAT_V2:
        return V2Format(), document
    # 平铺文档: 无版本或未知版本都按内嵌内容解析
    return LegacyFormat(), document
