#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
快照写入器

遍历源目录、读取文件内容，并按指定格式写出快照。
"""

import logging
import os
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from ..core.codec import read_content
from ..core.ignore import IgnoreFilter
from ..core.schema import (
    DirectoryEntry, FileEntry, FolderSnapOptions, SnapData, SnapMetadata,
    SnapResult, WalkItem, FORMAT_LEGACY,
)
from ..core.walker import walk_tree
from ..exceptions import FolderSnapError, InvalidSourceError, SnapIOError
from ..formats import get_format
from ..utils import content_file_name


logger = logging.getLogger(__name__)


def utc_timestamp() -> str:
    """当前 UTC 时间 (ISO 8601，毫秒精度，Z 结尾)"""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def ensure_parent_dir(path: str) -> None:
    """确保文件的父目录存在"""
    parent = os.path.dirname(os.path.abspath(path))
    if not os.path.isdir(parent):
        os.makedirs(parent, exist_ok=True)


class SnapWriter:
    """
    快照写入器

    每次 write() 都会为源目录重新加载忽略规则。
    """

    def __init__(self, options: Optional[FolderSnapOptions] = None):
        """
        初始化写入器

        Args:
            options: 配置 (默认使用 FolderSnapOptions())
        """
        self._options = options or FolderSnapOptions()

    @property
    def options(self) -> FolderSnapOptions:
        return self._options

    def write(
        self,
        folder_path: str,
        output_path: str,
        format_version: Optional[str] = None
    ) -> SnapResult:
        """
        将目录打包为快照

        不会向外抛出异常: 失败时返回 success=False 的 SnapResult。
        单个文件读取失败只记录警告，以空内容写入；无法获取信息的条目被跳过。

        Args:
            folder_path: 源目录
            output_path: 输出快照文件路径
            format_version: 格式版本 (默认取 options.format_version)

        Returns:
            SnapResult
        """
        try:
            snap_format = get_format(format_version or self._options.format_version)
            self._check_source(folder_path)

            ignore_filter = IgnoreFilter.load(
                folder_path,
                gitignore_file=self._options.gitignore_file,
                include_hidden=self._options.include_hidden,
                encoding=self._options.encoding,
            )
            skipped: List[Tuple[str, str]] = []
            items = walk_tree(folder_path, ignore_filter, skipped)

            metadata = SnapMetadata(
                timestamp=utc_timestamp(),
                source_folder=os.path.basename(os.path.abspath(folder_path)),
                total_files=sum(1 for item in items if not item.is_dir),
                total_directories=sum(1 for item in items if item.is_dir),
                version=None if snap_format.version == FORMAT_LEGACY else snap_format.version,
            )

            ensure_parent_dir(output_path)
            structure, warnings = self._attach_contents(folder_path, items)
            warnings = skipped + warnings
            snap_format.write(
                SnapData(metadata=metadata, structure=structure),
                output_path,
                self._options.encoding,
            )
        except FolderSnapError as e:
            logger.error("打包失败: %s", e)
            return SnapResult.failure(e)
        except OSError as e:
            logger.error("打包失败: %s", e)
            return SnapResult.failure(SnapIOError(str(e)))

        logger.info(
            "已打包到 %s (%d 个文件, %d 个目录, 格式 %s)",
            output_path, metadata.total_files, metadata.total_directories,
            metadata.format_version,
        )
        if warnings:
            logger.warning("%d 个条目被跳过或以空内容写入", len(warnings))

        return SnapResult(
            success=True,
            output_path=output_path,
            metadata=metadata,
            warnings=warnings,
        )

    @staticmethod
    def _check_source(folder_path: str) -> None:
        if not os.path.exists(folder_path):
            raise InvalidSourceError(f"源目录不存在: {folder_path}")
        if not os.path.isdir(folder_path):
            raise InvalidSourceError(f"源路径不是目录: {folder_path}")

    @staticmethod
    def _attach_contents(
        folder_path: str,
        items: List[WalkItem]
    ) -> Tuple[list, List[Tuple[str, str]]]:
        """
        按遍历顺序读取文件内容，生成最终条目

        content_index 决定 v3 sidecar 文件名。
        """
        structure = []
        warnings: List[Tuple[str, str]] = []

        for item in items:
            if item.is_dir:
                structure.append(DirectoryEntry(path=item.path, name=item.name))
                continue

            content = read_content(os.path.join(folder_path, *item.path.split('/')))
            if not content.ok:
                warnings.append((item.path, f"无法读取文件: {content.error}"))

            structure.append(FileEntry(
                path=item.path,
                name=item.name,
                size=item.size,
                encoding=content.encoding,
                data=content.data,
                content_file=content_file_name(item.content_index, item.path),
            ))

        return structure, warnings
