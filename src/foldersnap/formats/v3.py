#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
v3 快照格式 (引用文件 + sidecar 目录)

输出路径只保存一个很小的引用对象:

    {"type": "folder-snap-v3", "snapDirectory": "project_snap", "metadata": {...}}

同级的 sidecar 目录保存完整清单与每个文件的原始字节:

    project_snap/
        metadata.json
        content/
            content_0_README.md.bin
            content_1_src_a.txt.bin
"""

import json
import logging
import os
import shutil
from typing import Any, Dict, List

from .base import (
    SnapFormat, dump_json, entry_fields, parse_metadata, require_structure,
)
from ..core.schema import (
    ContentEncoding, DirectoryEntry, FileEntry, SnapData,
    FORMAT_V3, V3_TYPE_TAG, V3_MANIFEST_NAME, V3_CONTENT_DIR,
    TYPE_DIRECTORY, TYPE_FILE,
)
from ..exceptions import InvalidFormatError
from ..utils import content_file_name, is_within, snap_directory_for


logger = logging.getLogger(__name__)


class V3Format(SnapFormat):
    """v3 sidecar 格式"""

    @property
    def version(self) -> str:
        return FORMAT_V3

    def write(self, snap: SnapData, output_path: str, encoding: str = 'utf-8') -> None:
        snap_dir = snap_directory_for(output_path)
        content_dir = os.path.join(snap_dir, V3_CONTENT_DIR)

        # 旧的 sidecar 目录整体删除重建，不与上次内容合并
        if os.path.exists(snap_dir):
            logger.debug("删除已存在的 sidecar 目录: %s", snap_dir)
            shutil.rmtree(snap_dir)
        os.makedirs(content_dir)

        structure: List[Dict[str, Any]] = []
        file_index = 0
        for entry in snap.structure:
            if isinstance(entry, DirectoryEntry):
                structure.append(entry.to_dict())
                continue

            content_file = entry.content_file or content_file_name(file_index, entry.path)
            file_index += 1
            with open(os.path.join(content_dir, content_file), 'wb') as f:
                f.write(entry.data or b'')

            structure.append({
                'type': entry.type,
                'path': entry.path,
                'name': entry.name,
                'size': entry.size,
                'encoding': entry.encoding.value,
                'contentFile': content_file,
            })

        metadata = snap.metadata.to_dict()
        manifest = {'metadata': metadata, 'structure': structure}
        with open(os.path.join(snap_dir, V3_MANIFEST_NAME), 'w', encoding=encoding) as f:
            f.write(dump_json(manifest))

        reference = {
            'type': V3_TYPE_TAG,
            'snapDirectory': os.path.basename(snap_dir),
            'metadata': metadata,
        }
        with open(output_path, 'w', encoding=encoding) as f:
            f.write(dump_json(reference))

    def read(
        self,
        document: Dict[str, Any],
        archive_path: str,
        encoding: str = 'utf-8',
        load_content: bool = True
    ) -> SnapData:
        snap_directory = document.get('snapDirectory')
        if not snap_directory or not isinstance(snap_directory, str):
            raise InvalidFormatError("v3 引用文件缺少 snapDirectory 或类型无效")

        # sidecar 目录相对于快照文件所在目录解析
        base_dir = os.path.dirname(os.path.abspath(archive_path))
        snap_dir = os.path.join(base_dir, snap_directory)
        if not os.path.isdir(snap_dir):
            raise InvalidFormatError(f"sidecar 目录不存在: {snap_dir}")

        manifest_path = os.path.join(snap_dir, V3_MANIFEST_NAME)
        if not os.path.isfile(manifest_path):
            raise InvalidFormatError(f"sidecar 清单不存在: {manifest_path}")

        with open(manifest_path, 'r', encoding=encoding) as f:
            try:
                manifest = json.load(f)
            except ValueError as e:
                raise InvalidFormatError(f"sidecar 清单不是有效的 JSON: {e}") from e

        require_structure(manifest)
        metadata = parse_metadata(manifest['metadata'])
        content_dir = os.path.join(snap_dir, V3_CONTENT_DIR)

        structure: List = []
        for item in manifest['structure']:
            path, name, size = entry_fields(item)
            if item.get('type') == TYPE_DIRECTORY:
                structure.append(DirectoryEntry(path=path, name=name))
                continue
            if item.get('type') != TYPE_FILE:
                continue

            content_file = item.get('contentFile')
            if content_file is not None and not isinstance(content_file, str):
                raise InvalidFormatError(
                    f"条目 {path} 的 contentFile 无效",
                    expected="字符串", actual=repr(content_file),
                )

            entry = FileEntry(
                path=path,
                name=name,
                size=size,
                encoding=ContentEncoding.parse(item.get('encoding')),
                content_file=content_file,
            )
            if load_content:
                self._load_content(entry, content_dir)
            structure.append(entry)

        return SnapData(metadata=metadata, structure=structure)

    @staticmethod
    def _load_content(entry: FileEntry, content_dir: str) -> None:
        """读取 sidecar 内容，缺失、越界或失败时标记为缺失 (不中止)"""
        if not entry.content_file:
            entry.data = b''
            return

        content_path = os.path.join(content_dir, entry.content_file)
        if os.path.isabs(entry.content_file) or not is_within(content_path, content_dir):
            logger.warning("sidecar 内容路径越出 content 目录: %s", entry.content_file)
            entry.missing_reason = f"sidecar 内容路径越界: {entry.content_file}"
            return

        if not os.path.isfile(content_path):
            entry.missing_reason = f"sidecar 内容文件不存在: {entry.content_file}"
            return

        try:
            with open(content_path, 'rb') as f:
                entry.data = f.read()
        except OSError as e:
            entry.missing_reason = f"无法读取 sidecar 内容文件 {entry.content_file}: {e}"
