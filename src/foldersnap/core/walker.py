#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
目录树遍历

按目录列举顺序递归遍历目录，生成先序的 WalkItem 列表。
"""

import itertools
import logging
import os
from typing import Iterator, List, Optional, Tuple

from .ignore import IgnoreFilter
from .schema import WalkItem, TYPE_DIRECTORY, TYPE_FILE
from ..utils import normalize_path


logger = logging.getLogger(__name__)


def walk_tree(
    folder_path: str,
    ignore_filter: Optional[IgnoreFilter] = None,
    warnings: Optional[List[Tuple[str, str]]] = None
) -> List[WalkItem]:
    """
    遍历目录树

    子项顺序沿用 ``os.listdir`` 的返回顺序 (不排序)。
    目录条目总是排在其全部后代之前，被忽略的目录不会递归进入。
    文件条目按遍历顺序分配全局递增的 content_index。

    无法获取信息的条目 (如悬空符号链接) 和无法列出的子目录会被跳过，
    并以 (相对路径, 原因) 追加到 warnings。

    Args:
        folder_path: 遍历根目录
        ignore_filter: 忽略过滤器 (None 表示不过滤)
        warnings: 收集跳过条目的列表 (None 表示只记录日志)

    Returns:
        WalkItem 列表

    Raises:
        FileNotFoundError: 目录不存在
        NotADirectoryError: 路径不是目录
        OSError: 根目录无法列出
    """
    if not os.path.exists(folder_path):
        raise FileNotFoundError(f"目录不存在: {folder_path}")
    if not os.path.isdir(folder_path):
        raise NotADirectoryError(f"不是目录: {folder_path}")

    if warnings is None:
        warnings = []
    counter = itertools.count()
    names = os.listdir(folder_path)
    return list(_walk(folder_path, names, folder_path, ignore_filter, counter, warnings))


def _skip(warnings: List[Tuple[str, str]], relative_path: str, message: str) -> None:
    logger.warning("跳过 %s: %s", relative_path, message)
    warnings.append((relative_path, message))


def _walk(
    current: str,
    names: List[str],
    base: str,
    ignore_filter: Optional[IgnoreFilter],
    counter: 'itertools.count',
    warnings: List[Tuple[str, str]]
) -> Iterator[WalkItem]:
    for name in names:
        item_path = os.path.join(current, name)
        relative_path = normalize_path(os.path.relpath(item_path, base))
        is_dir = os.path.isdir(item_path)

        if ignore_filter and ignore_filter.should_ignore(relative_path, is_dir=is_dir):
            continue

        if is_dir:
            yield WalkItem(type=TYPE_DIRECTORY, path=relative_path, name=name)
            try:
                children = os.listdir(item_path)
            except OSError as e:
                _skip(warnings, relative_path, f"无法列出目录内容: {e}")
                continue
            yield from _walk(item_path, children, base, ignore_filter, counter, warnings)
            continue

        try:
            size = os.stat(item_path).st_size
        except OSError as e:
            _skip(warnings, relative_path, f"无法获取文件信息: {e}")
            continue

        yield WalkItem(
            type=TYPE_FILE,
            path=relative_path,
            name=name,
            size=size,
            content_index=next(counter)
        )
