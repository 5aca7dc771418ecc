#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
目录统计测试
"""

import os

import pytest

from foldersnap import (
    FolderSnap, FolderSnapOptions, InvalidSourceError, SnapIOError, SnapNotFoundError,
    SnapWriter,
    get_folder_stats,
)
from foldersnap.exceptions import ErrorKind


class TestFolderStats:
    """get_folder_stats 测试"""

    def test_example_project(self, example_project):
        stats = get_folder_stats(str(example_project))

        assert stats.files == 2
        assert stats.directories == 1
        assert stats.total_size == 9
        assert stats.total_size_formatted == "9 Bytes"

    def test_idempotent(self, sample_files):
        src_dir, _ = sample_files
        assert get_folder_stats(str(src_dir)) == get_folder_stats(str(src_dir))

    def test_total_size(self, sample_files):
        src_dir, files = sample_files
        stats = get_folder_stats(str(src_dir))

        assert stats.files == len(files)
        assert stats.directories == 4
        assert stats.total_size == sum(len(v) for v in files.values())

    def test_empty_folder(self, tmp_path):
        stats = get_folder_stats(str(tmp_path))

        assert stats.files == 0
        assert stats.directories == 0
        assert stats.total_size_formatted == "0 Bytes"

    def test_respects_ignore_rules(self, ignored_project):
        stats = get_folder_stats(str(ignored_project))

        assert stats.files == 3
        assert stats.directories == 1

    def test_include_hidden(self, ignored_project):
        default = get_folder_stats(str(ignored_project))
        hidden = get_folder_stats(
            str(ignored_project), FolderSnapOptions(include_hidden=True)
        )
        # .gitignore 与 .env
        assert hidden.files == default.files + 2

    @pytest.mark.parametrize("version", ["legacy", "2.0", "3.0"])
    def test_agrees_with_pack(self, tmp_path, ignored_project, version):
        """统计结果与随后打包的计数一致"""
        stats = get_folder_stats(str(ignored_project))
        result = SnapWriter().write(str(ignored_project), str(tmp_path / "x.snap"), version)

        assert result.metadata.total_files == stats.files
        assert result.metadata.total_directories == stats.directories


class TestFolderStatsErrors:
    """错误处理测试"""

    def test_missing(self, tmp_path):
        with pytest.raises(SnapNotFoundError) as exc_info:
            get_folder_stats(str(tmp_path / "missing"))
        assert exc_info.value.kind is ErrorKind.NOT_FOUND

    def test_not_directory(self, tmp_path):
        path = tmp_path / "file.txt"
        path.write_text("x")

        with pytest.raises(InvalidSourceError) as exc_info:
            get_folder_stats(str(path))
        assert exc_info.value.kind is ErrorKind.INVALID_SOURCE


class TestFacade:
    """FolderSnap 门面的配置覆盖"""

    def test_overrides(self, ignored_project):
        snap = FolderSnap(include_hidden=True)

        assert snap.options.include_hidden
        assert snap.get_folder_stats(str(ignored_project)).files == 5

    def test_custom_ignore_file(self, example_project):
        (example_project / ".snapignore").write_text("README.md\n", encoding="utf-8")
        snap = FolderSnap(FolderSnapOptions(gitignore_file=".snapignore"))

        assert snap.get_folder_stats(str(example_project)).files == 1


class TestFolderStatsRecovery:
    """遍历中的单个条目失败"""

    def test_dangling_symlink(self, example_project):
        os.symlink(str(example_project / "gone"), str(example_project / "dead"))
        stats = get_folder_stats(str(example_project))

        assert stats.files == 2
        assert stats.total_size == 9
        assert [path for path, _ in stats.warnings] == ["dead"]

    def test_unlistable_root(self, tmp_path, monkeypatch):
        def listdir(path):
            raise PermissionError("denied")

        monkeypatch.setattr(os, "listdir", listdir)
        with pytest.raises(SnapIOError) as exc_info:
            get_folder_stats(str(tmp_path))
        assert exc_info.value.kind is ErrorKind.IO_ERROR
