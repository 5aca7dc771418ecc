#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
FolderSnap 门面

把配置与 pack / unpack / stats / validate / upgrade 操作绑定在一起。
"""

from dataclasses import replace
from typing import Optional

from .archive import SnapReader, SnapWriter
from .converter import FormatConverter
from .core.schema import (
    FolderSnapOptions, FolderStats, SnapResult, ValidationResult, FORMAT_V3,
)
from .stats import get_folder_stats


class FolderSnap:
    """
    目录快照

    Examples:
        >>> snap = FolderSnap(include_hidden=True)
        >>> result = snap.folder_to_text("./my-project", "./my-project.snap")
        >>> result.success
        True
    """

    def __init__(self, options: Optional[FolderSnapOptions] = None, **overrides):
        """
        Args:
            options: 配置对象
            **overrides: 覆盖 options 中的字段 (如 include_hidden=True)
        """
        options = options or FolderSnapOptions()
        self._options = replace(options, **overrides) if overrides else options

    @property
    def options(self) -> FolderSnapOptions:
        return self._options

    def folder_to_text(
        self,
        folder_path: str,
        output_path: str,
        format_version: Optional[str] = None
    ) -> SnapResult:
        """打包目录"""
        return SnapWriter(self._options).write(folder_path, output_path, format_version)

    def text_to_folder(self, snap_file_path: str, output_folder: str) -> SnapResult:
        """还原快照"""
        return SnapReader(self._options).read(snap_file_path, output_folder)

    def validate_snap_file(self, snap_file_path: str) -> ValidationResult:
        """校验快照 (不还原)"""
        return SnapReader(self._options).validate(snap_file_path)

    def get_folder_stats(self, folder_path: str) -> FolderStats:
        """统计目录"""
        return get_folder_stats(folder_path, self._options)

    def upgrade(
        self,
        snap_file_path: str,
        output_path: Optional[str] = None,
        target_version: str = FORMAT_V3
    ) -> SnapResult:
        """转换快照格式 (默认升级到 v3)"""
        return FormatConverter.convert(
            snap_file_path, output_path, target_version, self._options.encoding
        )
