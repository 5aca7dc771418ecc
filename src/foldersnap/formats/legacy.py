#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
旧版快照格式

文本文件: 固定的 # 注释头，随后是包裹在哨兵行之间的 JSON 文档。
内容一律以 UTF-8 文本内嵌，不使用 base64。

    # Folder Snap Export
    # Generated: 2024-01-01T00:00:00.000Z
    # Source: my-project
    # Files: 2, Directories: 1

    <FOLDER_SNAP_START>
    {...}
    <FOLDER_SNAP_END>
"""

from typing import Any, Dict, Optional

from .base import InlineFormat, dump_json
from ..core.codec import encode
from ..core.schema import (
    ContentEncoding, FileEntry, SnapData,
    FORMAT_LEGACY, LEGACY_TITLE, SNAP_START, SNAP_END,
)


class LegacyFormat(InlineFormat):
    """旧版哨兵包裹格式"""

    @property
    def version(self) -> str:
        return FORMAT_LEGACY

    def file_to_dict(self, entry: FileEntry) -> Dict[str, Any]:
        return {
            'type': entry.type,
            'path': entry.path,
            'name': entry.name,
            'size': entry.size,
            'content': encode(entry.data or b'', ContentEncoding.TEXT),
        }

    def write(self, snap: SnapData, output_path: str, encoding: str = 'utf-8') -> None:
        meta = snap.metadata
        lines = [
            LEGACY_TITLE,
            f"# Generated: {meta.timestamp}",
            f"# Source: {meta.source_folder}",
            f"# Files: {meta.total_files}, Directories: {meta.total_directories}",
            "",
            SNAP_START,
            dump_json(self.build_document(snap)),
            SNAP_END,
            "",
        ]
        with open(output_path, 'w', encoding=encoding, newline='\n') as f:
            f.write("\n".join(lines))


def extract_sentinel_block(text: str) -> Optional[str]:
    """
    提取哨兵行之间的文本

    Returns:
        哨兵之间的内容，缺少任一哨兵时返回 None
    """
    start = text.find(SNAP_START)
    if start < 0:
        return None
    start += len(SNAP_START)

    end = text.find(SNAP_END, start)
    if end < 0:
        return None
    return text[start:end]
