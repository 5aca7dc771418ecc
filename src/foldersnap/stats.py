#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
目录统计

使用与打包完全相同的忽略规则和遍历逻辑统计文件数、目录数和总大小，
保证 stats 与随后的 pack 计数一致。
"""

import os
from typing import List, Optional, Tuple

from .core.ignore import IgnoreFilter
from .core.schema import FolderSnapOptions, FolderStats
from .core.walker import walk_tree
from .exceptions import InvalidSourceError, SnapIOError, SnapNotFoundError
from .utils import format_bytes


def get_folder_stats(
    folder_path: str,
    options: Optional[FolderSnapOptions] = None
) -> FolderStats:
    """
    统计目录

    Args:
        folder_path: 目录路径
        options: 配置 (忽略规则文件、隐藏文件策略等)

    Returns:
        FolderStats

    Raises:
        SnapNotFoundError: 目录不存在
        InvalidSourceError: 路径不是目录
        SnapIOError: 根目录无法列出
    """
    options = options or FolderSnapOptions()

    if not os.path.exists(folder_path):
        raise SnapNotFoundError(folder_path, what="目录")
    if not os.path.isdir(folder_path):
        raise InvalidSourceError(f"源路径不是目录: {folder_path}")

    ignore_filter = IgnoreFilter.load(
        folder_path,
        gitignore_file=options.gitignore_file,
        include_hidden=options.include_hidden,
        encoding=options.encoding,
    )
    warnings: List[Tuple[str, str]] = []
    try:
        items = walk_tree(folder_path, ignore_filter, warnings)
    except OSError as e:
        raise SnapIOError(f"无法遍历目录 {folder_path}: {e}") from e

    files = [item for item in items if not item.is_dir]
    total_size = sum(item.size for item in files)

    return FolderStats(
        files=len(files),
        directories=len(items) - len(files),
        total_size=total_size,
        total_size_formatted=format_bytes(total_size),
        warnings=warnings,
    )
