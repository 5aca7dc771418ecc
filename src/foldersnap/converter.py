#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
格式转换工具

在 legacy / v2 / v3 快照格式之间互转 (通常用于把旧快照升级到 v3)。
"""

import logging
import os
from dataclasses import replace
from typing import Optional

from .archive.reader import load_archive
from .archive.writer import ensure_parent_dir
from .core.codec import is_binary
from .core.schema import (
    ContentEncoding, FORMAT_LEGACY, FORMAT_V3, SnapData, SnapResult,
)
from .exceptions import FolderSnapError, SnapIOError
from .formats import get_format


logger = logging.getLogger(__name__)


def default_upgrade_path(archive_path: str) -> str:
    """
    升级输出的默认路径

    后缀替换为 ``.snap``；若与输入相同则使用 ``<name>.v3.snap``。

    Examples:
        >>> default_upgrade_path("backup/project.txt")
        'backup/project.snap'
        >>> default_upgrade_path("backup/project.snap")
        'backup/project.v3.snap'
    """
    root, _ = os.path.splitext(archive_path)
    candidate = root + '.snap'
    if os.path.abspath(candidate) == os.path.abspath(archive_path):
        candidate = root + '.v3.snap'
    return candidate


class FormatConverter:
    """
    快照格式互转
    """

    @staticmethod
    def convert(
        archive_path: str,
        output_path: Optional[str] = None,
        target_version: str = FORMAT_V3,
        encoding: str = 'utf-8'
    ) -> SnapResult:
        """
        将快照转换为目标格式

        元数据 (时间、来源、计数) 保持不变，仅更新 version。
        缺失的 sidecar 内容以空内容写出并记录警告。

        Args:
            archive_path: 源快照路径 (任意受支持格式)
            output_path: 输出路径 (默认见 default_upgrade_path)
            target_version: 目标格式版本
            encoding: 文本编码

        Returns:
            SnapResult
        """
        output_path = output_path or default_upgrade_path(archive_path)
        try:
            target = get_format(target_version)
            snap, source = load_archive(archive_path, encoding)

            warnings = [
                (entry.path, entry.missing_reason)
                for entry in snap.files
                if entry.data is None and entry.missing_reason
            ]
            for entry in snap.files:
                # 旧版快照不带编码标记，按内容重新判定
                if entry.data:
                    entry.encoding = (
                        ContentEncoding.BINARY if is_binary(entry.data)
                        else ContentEncoding.TEXT
                    )
            version = None if target.version == FORMAT_LEGACY else target.version
            metadata = replace(snap.metadata, version=version)

            ensure_parent_dir(output_path)
            target.write(
                SnapData(metadata=metadata, structure=snap.structure),
                output_path,
                encoding,
            )
        except FolderSnapError as e:
            logger.error("转换失败: %s", e)
            return SnapResult.failure(e)
        except OSError as e:
            logger.error("转换失败: %s", e)
            return SnapResult.failure(SnapIOError(str(e)))

        logger.info(
            "已将 %s (%s) 转换为 %s (%s)",
            archive_path, source.version, output_path, target.version,
        )
        return SnapResult(
            success=True,
            output_path=output_path,
            metadata=metadata,
            warnings=warnings,
        )


def upgrade(
    archive_path: str,
    output_path: Optional[str] = None,
    encoding: str = 'utf-8'
) -> SnapResult:
    """将快照升级到 v3 格式"""
    return FormatConverter.convert(archive_path, output_path, FORMAT_V3, encoding)
