#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
忽略规则过滤器

合并内置排除规则与源目录根下的规则文件 (默认 .gitignore)，
并按隐藏文件策略判断相对路径是否应被跳过。
规则匹配委托给 pathspec 的 gitignore 语义实现。
"""

import logging
import os
from typing import Iterable, List

import pathspec

from ..utils import normalize_path


logger = logging.getLogger(__name__)


# 内置排除规则
DEFAULT_IGNORE_RULES = [
    'node_modules/',
    'venv/',
    '.git/',
    '*.log',
    '.DS_Store',
    'Thumbs.db',
]


class IgnoreFilter:
    """
    忽略规则过滤器

    规则按添加顺序生效，后添加的规则可以用 ``!pattern`` 重新包含
    先前被排除的路径；以 ``/`` 结尾的规则只匹配目录。

    每次顶层操作 (pack/unpack/stats) 都应创建新的实例，
    避免不同目录之间的规则互相泄漏。
    """

    def __init__(self, include_hidden: bool = False):
        self._include_hidden = include_hidden
        self._rules: List[str] = []
        self._spec = pathspec.GitIgnoreSpec.from_lines([])

    @classmethod
    def load(
        cls,
        root_folder: str,
        gitignore_file: str = '.gitignore',
        include_hidden: bool = False,
        encoding: str = 'utf-8'
    ) -> 'IgnoreFilter':
        """
        为指定目录构建过滤器

        Args:
            root_folder: 被处理目录的根
            gitignore_file: 规则文件名 (相对 root_folder)
            include_hidden: 是否包含隐藏文件
            encoding: 规则文件编码

        Returns:
            已加载规则的 IgnoreFilter
        """
        ignore_filter = cls(include_hidden=include_hidden)
        ignore_filter.add_rules(DEFAULT_IGNORE_RULES)

        rule_path = os.path.join(root_folder, gitignore_file)
        if os.path.isfile(rule_path):
            with open(rule_path, 'r', encoding=encoding, errors='replace') as f:
                ignore_filter.add_rules(f.read().splitlines())
            logger.debug("已加载忽略规则文件: %s", rule_path)

        return ignore_filter

    def add_rules(self, lines: Iterable[str]) -> None:
        """追加规则 (空行与 # 注释由 pathspec 忽略)"""
        self._rules.extend(lines)
        self._spec = pathspec.GitIgnoreSpec.from_lines(self._rules)

    @property
    def rules(self) -> List[str]:
        """当前已合并的规则 (副本)"""
        return list(self._rules)

    def should_ignore(self, relative_path: str, is_dir: bool = False) -> bool:
        """
        判断相对路径是否应被忽略

        Args:
            relative_path: 相对于根目录的路径
            is_dir: 路径是否为目录 (目录专用规则只匹配目录)

        Returns:
            True 表示应跳过该路径 (目录则不再递归)
        """
        normalized = normalize_path(relative_path)
        if not normalized:
            return False

        name = normalized.rsplit('/', 1)[-1]
        if not self._include_hidden and name.startswith('.'):
            return True

        if is_dir:
            normalized += '/'
        return self._spec.match_file(normalized)
