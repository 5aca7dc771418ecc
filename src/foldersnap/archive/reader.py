#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
快照读取器

识别快照格式、解析结构，并按 "先目录、后文件" 的顺序还原到目标目录。
"""

import logging
import os
from typing import List, Optional, Tuple

from ..core.schema import (
    FolderSnapOptions, SnapData, SnapResult, ValidationResult,
)
from ..exceptions import FolderSnapError, SnapIOError, SnapNotFoundError
from ..formats import SnapFormat, detect_format
from ..utils import is_within, to_local_path


logger = logging.getLogger(__name__)


def load_archive(
    archive_path: str,
    encoding: str = 'utf-8',
    load_content: bool = True
) -> Tuple[SnapData, SnapFormat]:
    """
    读取并解析快照

    Args:
        archive_path: 快照文件路径
        encoding: 文本编码
        load_content: False 时只解析结构 (不读取 sidecar、不解码内容)

    Returns:
        (SnapData, 识别出的格式)

    Raises:
        SnapNotFoundError: 快照文件不存在
        InvalidFormatError: 无法识别或结构缺失
        OSError: 读取失败
    """
    if not os.path.isfile(archive_path):
        raise SnapNotFoundError(archive_path)

    with open(archive_path, 'r', encoding=encoding, errors='replace') as f:
        text = f.read()

    snap_format, document = detect_format(text)
    snap = snap_format.read(document, archive_path, encoding, load_content=load_content)
    return snap, snap_format


class SnapReader:
    """
    快照读取器

    单个文件/目录创建失败不会中止还原，只计入警告；
    只有整个快照的结构性问题才会导致失败。
    """

    def __init__(self, options: Optional[FolderSnapOptions] = None):
        self._options = options or FolderSnapOptions()

    @property
    def options(self) -> FolderSnapOptions:
        return self._options

    def read(self, archive_path: str, output_folder: str) -> SnapResult:
        """
        将快照还原到目录

        Args:
            archive_path: 快照文件路径
            output_folder: 还原目标目录 (不存在时自动创建)

        Returns:
            SnapResult，metadata 为快照原始元数据
        """
        try:
            snap, snap_format = load_archive(archive_path, self._options.encoding)
            logger.debug("快照格式: %s", snap_format.display_name)
            if not os.path.isdir(output_folder):
                os.makedirs(output_folder, exist_ok=True)
        except FolderSnapError as e:
            logger.error("还原失败: %s", e)
            return SnapResult.failure(e)
        except OSError as e:
            logger.error("还原失败: %s", e)
            return SnapResult.failure(SnapIOError(str(e)))

        warnings: List[Tuple[str, str]] = []
        restored_dirs = self._restore_directories(snap, output_folder, warnings)
        restored_files = self._restore_files(snap, output_folder, warnings)

        logger.info(
            "已还原到 %s (%d 个文件, %d 个目录)",
            output_folder, restored_files, restored_dirs,
        )
        if warnings:
            logger.warning("%d 个条目未能完整还原", len(warnings))
        logger.info("快照原始时间: %s", snap.metadata.timestamp)

        return SnapResult(
            success=True,
            output_folder=output_folder,
            metadata=snap.metadata,
            restored_files=restored_files,
            restored_directories=restored_dirs,
            warnings=warnings,
        )

    @staticmethod
    def _resolve(output_folder: str, snap_path: str) -> Optional[str]:
        """拼接目标路径，越出 output_folder 时返回 None"""
        target = to_local_path(output_folder, snap_path)
        if os.path.isabs(snap_path) or not is_within(target, output_folder):
            return None
        return target

    def _restore_directories(
        self,
        snap: SnapData,
        output_folder: str,
        warnings: List[Tuple[str, str]]
    ) -> int:
        """阶段 1: 按快照顺序创建全部目录"""
        count = 0
        for entry in snap.directories:
            target = self._resolve(output_folder, entry.path)
            if target is None:
                logger.warning("跳过越界目录: %s", entry.path)
                warnings.append((entry.path, "路径越出目标目录"))
                continue
            try:
                os.makedirs(target, exist_ok=True)
                count += 1
            except OSError as e:
                logger.warning("无法创建目录 %s: %s", entry.path, e)
                warnings.append((entry.path, f"无法创建目录: {e}"))
        return count

    def _restore_files(
        self,
        snap: SnapData,
        output_folder: str,
        warnings: List[Tuple[str, str]]
    ) -> int:
        """阶段 2: 写出全部文件 (缺失内容写为空文件)"""
        count = 0
        for entry in snap.files:
            target = self._resolve(output_folder, entry.path)
            if target is None:
                logger.warning("跳过越界文件: %s", entry.path)
                warnings.append((entry.path, "路径越出目标目录"))
                continue

            if entry.data is None and entry.missing_reason:
                logger.warning("%s，以空文件还原: %s", entry.missing_reason, entry.path)
                warnings.append((entry.path, entry.missing_reason))

            try:
                parent = os.path.dirname(target)
                if not os.path.isdir(parent):
                    os.makedirs(parent, exist_ok=True)
                with open(target, 'wb') as f:
                    f.write(entry.data or b'')
                count += 1
            except OSError as e:
                logger.warning("无法创建文件 %s: %s", entry.path, e)
                warnings.append((entry.path, f"无法创建文件: {e}"))
        return count

    def validate(self, archive_path: str) -> ValidationResult:
        """
        校验快照 (不还原)

        只解析格式与结构，不读取文件内容。

        Returns:
            ValidationResult
        """
        try:
            snap, _ = load_archive(
                archive_path, self._options.encoding, load_content=False
            )
        except FolderSnapError as e:
            return ValidationResult(valid=False, error=str(e), error_kind=e.kind)
        except OSError as e:
            error = SnapIOError(str(e))
            return ValidationResult(valid=False, error=str(error), error_kind=error.kind)

        return ValidationResult(
            valid=True,
            format_version=snap.metadata.format_version,
            metadata=snap.metadata,
        )
