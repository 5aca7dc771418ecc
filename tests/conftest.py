#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
pytest 全局配置

提供共享 fixtures 和测试工具。
"""

import os
from pathlib import Path
from typing import Dict, Set, Tuple

import pytest


# ==================== 工具函数 ====================

def write_tree(root: Path, files: Dict[str, bytes]) -> None:
    """按 {相对路径: 内容} 创建文件 (自动创建父目录)"""
    for name, content in files.items():
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)


def read_tree(root: Path) -> Tuple[Dict[str, bytes], Set[str]]:
    """
    读取目录树

    Returns:
        ({相对路径: 内容}, {相对目录路径})
    """
    files = {}
    dirs = set()
    for current, dirnames, filenames in os.walk(root):
        rel_dir = os.path.relpath(current, root).replace(os.sep, "/")
        for d in dirnames:
            dirs.add(d if rel_dir == "." else f"{rel_dir}/{d}")
        for f in filenames:
            rel = f if rel_dir == "." else f"{rel_dir}/{f}"
            files[rel] = (Path(current) / f).read_bytes()
    return files, dirs


# ==================== 基础 Fixtures ====================

@pytest.fixture
def example_project(tmp_path) -> Path:
    """
    最小示例项目

    src/a.txt + README.md，以及应被忽略的 node_modules/ignored.js。
    """
    root = tmp_path / "example"
    write_tree(root, {
        "src/a.txt": b"hello",
        "README.md": b"# hi",
        "node_modules/ignored.js": b"ignored",
    })
    return root


@pytest.fixture
def sample_files(tmp_path) -> tuple:
    """
    创建测试文件集 (不含任何会被忽略的路径)

    Returns:
        (目录路径, 文件内容字典)
    """
    files = {
        "hero.txt": b"Hero data content",
        "config.json": b'{"name": "test", "value": 123}',
        "subdir/data.bin": b"\x00\x01\x02\x03\x04\x05\x06\x07",
        "subdir/nested/deep.txt": b"Deep nested file content",
        "subdir/nested/empty.txt": b"",
        "中文文件.txt": "这是中文内容测试".encode("utf-8"),
        "images/pixel.png": b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR" + bytes(range(256)),
    }

    root = tmp_path / "sample"
    write_tree(root, files)
    (root / "empty_dir").mkdir()

    return root, files


@pytest.fixture
def ignored_project(tmp_path) -> Path:
    """
    包含内置与自定义忽略规则的项目

    .gitignore 排除 dist/ 和 *.tmp，但用 !keep.log 重新包含 keep.log。
    """
    root = tmp_path / "ignored"
    write_tree(root, {
        ".gitignore": b"# build output\ndist/\n*.tmp\n!keep.log\n",
        ".env": b"SECRET=1",
        "app.py": b"print('hi')",
        "debug.log": b"noise",
        "keep.log": b"important",
        "scratch.tmp": b"tmp",
        "dist/bundle.js": b"bundle",
        "venv/lib/site.py": b"site",
        ".git/HEAD": b"ref: refs/heads/main",
        "lib/node_modules/dep/index.js": b"dep",
        "lib/util.py": b"def util(): pass",
        "Thumbs.db": b"thumbs",
        ".DS_Store": b"ds",
    })
    return root
