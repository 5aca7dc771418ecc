#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
快照格式基类

定义各版本快照格式 (legacy / v2 / v3) 的序列化与解析接口。
"""

import json
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Tuple

from ..core.codec import decode
from ..core.schema import (
    ContentEncoding, DirectoryEntry, FileEntry, SnapData, SnapMetadata,
    TYPE_DIRECTORY, TYPE_FILE,
)
from ..exceptions import InvalidFormatError


class SnapFormat(ABC):
    """
    快照格式策略

    每个实现负责一种磁盘表示，内存中统一使用 SnapData。
    """

    @property
    @abstractmethod
    def version(self) -> str:
        """
        格式版本

        写入 metadata.version；旧版格式返回 "legacy" 且不写入该字段。
        """
        pass

    @property
    def display_name(self) -> str:
        """可读名称，默认返回类名"""
        return type(self).__name__

    @abstractmethod
    def write(self, snap: SnapData, output_path: str, encoding: str = 'utf-8') -> None:
        """
        将快照写入磁盘

        Args:
            snap: 快照 (文件条目携带原始字节)
            output_path: 输出文件路径 (父目录已存在)
            encoding: 文本编码

        Raises:
            OSError: 写入失败
        """
        pass

    @abstractmethod
    def read(
        self,
        document: Dict[str, Any],
        archive_path: str,
        encoding: str = 'utf-8',
        load_content: bool = True
    ) -> SnapData:
        """
        从已解析的顶层文档还原快照

        Args:
            document: 顶层 JSON 文档 (旧版为哨兵之间的 JSON)
            archive_path: 快照文件路径 (用于定位 sidecar)
            encoding: 文本编码
            load_content: False 时只解析结构，不读取/解码内容

        Raises:
            InvalidFormatError: 结构缺失
        """
        pass


def dump_json(data: Dict[str, Any]) -> str:
    """统一的 JSON 输出风格"""
    return json.dumps(data, ensure_ascii=False, indent=2)


def require_structure(document: Any) -> None:
    """校验文档包含 metadata 与 structure"""
    if (
        not isinstance(document, dict)
        or not isinstance(document.get('metadata'), dict)
        or not isinstance(document.get('structure'), list)
    ):
        raise InvalidFormatError("快照结构无效，缺少 metadata 或 structure")


def parse_metadata(data: Dict[str, Any]) -> SnapMetadata:
    """解析元数据，计数字段无法转换为整数时视为格式错误"""
    try:
        return SnapMetadata.from_dict(data)
    except (TypeError, ValueError) as e:
        raise InvalidFormatError(f"快照元数据无效: {e}") from e


def entry_fields(item: Any) -> Tuple[str, str, int]:
    """
    提取条目的 path / name / size

    name 缺失时取 path 的最后一段，size 缺失时为 0。

    Raises:
        InvalidFormatError: 条目不是对象、path 不是字符串或 size 不是整数
    """
    if not isinstance(item, dict) or not isinstance(item.get('path'), str):
        raise InvalidFormatError("快照条目缺少 path 字段或类型无效")

    path = item['path']
    name = item.get('name')
    if not isinstance(name, str) or not name:
        name = path.rsplit('/', 1)[-1]

    try:
        size = int(item.get('size') or 0)
    except (TypeError, ValueError) as e:
        raise InvalidFormatError(
            f"条目 {path} 的 size 无效", expected="整数", actual=repr(item.get('size'))
        ) from e
    return path, name, size


class InlineFormat(SnapFormat):
    """
    内容内嵌的单文件格式 (legacy 与 v2 的公共部分)

    文件条目直接携带 content，可选 encoding 标记。
    """

    def file_to_dict(self, entry: FileEntry) -> Dict[str, Any]:
        raise NotImplementedError

    def build_document(self, snap: SnapData) -> Dict[str, Any]:
        structure = []
        for entry in snap.structure:
            if isinstance(entry, DirectoryEntry):
                structure.append(entry.to_dict())
            else:
                structure.append(self.file_to_dict(entry))
        return {'metadata': snap.metadata.to_dict(), 'structure': structure}

    def read(
        self,
        document: Dict[str, Any],
        archive_path: str,
        encoding: str = 'utf-8',
        load_content: bool = True
    ) -> SnapData:
        require_structure(document)
        metadata = parse_metadata(document['metadata'])
        structure: List = []

        for item in document['structure']:
            path, name, size = entry_fields(item)
            if item.get('type') == TYPE_DIRECTORY:
                structure.append(DirectoryEntry(path=path, name=name))
                continue
            if item.get('type') != TYPE_FILE:
                continue

            content_encoding = ContentEncoding.parse(item.get('encoding'))
            entry = FileEntry(path=path, name=name, size=size, encoding=content_encoding)
            if load_content:
                content = item.get('content')
                if content is not None and not isinstance(content, str):
                    entry.missing_reason = f"内容类型无效: {type(content).__name__}"
                else:
                    try:
                        entry.data = decode(content, content_encoding)
                    except ValueError as e:
                        entry.missing_reason = f"内容解码失败: {e}"
            structure.append(entry)

        return SnapData(metadata=metadata, structure=structure)
