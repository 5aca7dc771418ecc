#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
FolderSnap 快照读写

提供快照的打包、还原和校验功能。
"""

from .writer import SnapWriter
from .reader import SnapReader, load_archive

__all__ = [
    "SnapWriter",
    "SnapReader",
    "load_archive",
]
