#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
v2 快照格式

单个 JSON 文件，文件条目内嵌 content 与 encoding 标记
(utf8 文本或 base64 二进制)。
"""

from typing import Any, Dict

from .base import InlineFormat, dump_json
from ..core.codec import encode
from ..core.schema import FileEntry, SnapData, FORMAT_V2


class V2Format(InlineFormat):
    """v2 内嵌内容 JSON 格式"""

    @property
    def version(self) -> str:
        return FORMAT_V2

    def file_to_dict(self, entry: FileEntry) -> Dict[str, Any]:
        return {
            'type': entry.type,
            'path': entry.path,
            'name': entry.name,
            'size': entry.size,
            'content': encode(entry.data or b'', entry.encoding),
            'encoding': entry.encoding.value,
        }

    def write(self, snap: SnapData, output_path: str, encoding: str = 'utf-8') -> None:
        with open(output_path, 'w', encoding=encoding) as f:
            f.write(dump_json(self.build_document(snap)))
