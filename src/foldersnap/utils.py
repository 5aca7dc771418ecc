#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
FolderSnap 工具函数

提供路径处理、sidecar 文件命名和字节格式化等通用功能。
"""

import os
import re
from pathlib import Path


_UNSAFE_CHARS = re.compile(r'[^A-Za-z0-9._-]')

_SIZE_UNITS = ['Bytes', 'KB', 'MB', 'GB', 'TB']


def normalize_path(path: str) -> str:
    """
    路径规范化

    1. 反斜杠统一为正斜杠
    2. 合并连续斜杠
    3. 移除首尾斜杠

    快照内的相对路径统一以此形式存储。

    Examples:
        >>> normalize_path("src\\\\lib\\\\a.txt")
        'src/lib/a.txt'
        >>> normalize_path("/src//lib/")
        'src/lib'
    """
    path = path.replace("\\", "/")

    while "//" in path:
        path = path.replace("//", "/")

    return path.strip("/")


def to_local_path(base: str, snap_path: str) -> str:
    """将快照内路径拼接到本地基础目录下"""
    parts = [p for p in normalize_path(snap_path).split("/") if p]
    return os.path.join(base, *parts)


def is_within(path: str, root: str) -> bool:
    """判断 ``path`` 解析后是否位于 ``root`` 之下 (含 root 本身)"""
    try:
        Path(path).resolve().relative_to(Path(root).resolve())
        return True
    except ValueError:
        return False


def sanitize_name(relative_path: str) -> str:
    """
    将相对路径转换为安全的文件名片段

    ``[A-Za-z0-9._-]`` 以外的字符 (包括路径分隔符) 均替换为 ``_``。

    Examples:
        >>> sanitize_name("src/main file.py")
        'src_main_file.py'
    """
    return _UNSAFE_CHARS.sub('_', relative_path)


def content_file_name(index: int, relative_path: str) -> str:
    """
    v3 sidecar 内容文件名

    格式: ``content_<index>_<sanitized>.bin``，index 保证同名文件不冲突。
    """
    return f"content_{index}_{sanitize_name(relative_path)}.bin"


def snap_directory_for(output_path: str) -> str:
    """
    计算 v3 sidecar 目录路径

    去掉输出路径末尾的 ``.snap`` 后缀 (如有)，再追加 ``_snap``。

    Examples:
        >>> snap_directory_for("out/project.snap")
        'out/project_snap'
        >>> snap_directory_for("out/project.json")
        'out/project.json_snap'
    """
    base = output_path[:-len('.snap')] if output_path.endswith('.snap') else output_path
    return base + '_snap'


def format_bytes(size: int) -> str:
    """
    字节数格式化为可读字符串

    1024 进制，保留至多两位小数，末尾的 0 不显示。

    Examples:
        >>> format_bytes(0)
        '0 Bytes'
        >>> format_bytes(1536)
        '1.5 KB'
    """
    if size <= 0:
        return '0 Bytes'

    index = 0
    value = float(size)
    while value >= 1024 and index < len(_SIZE_UNITS) - 1:
        value /= 1024
        index += 1

    text = f"{value:.2f}".rstrip('0').rstrip('.')
    return f"{text} {_SIZE_UNITS[index]}"
