#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
忽略规则测试

测试内置规则、自定义规则文件和隐藏文件策略。
"""

import pytest

from foldersnap.core.ignore import IgnoreFilter, DEFAULT_IGNORE_RULES


class TestDefaultRules:
    """内置规则测试"""

    @pytest.fixture
    def ignore_filter(self, tmp_path):
        return IgnoreFilter.load(str(tmp_path))

    def test_rules_loaded(self, ignore_filter):
        assert ignore_filter.rules == DEFAULT_IGNORE_RULES

    @pytest.mark.parametrize("path,is_dir", [
        ("node_modules", True),
        ("lib/node_modules", True),
        ("venv", True),
        ("app.log", False),
        ("logs/deep/app.log", False),
        ("Thumbs.db", False),
        ("sub/Thumbs.db", False),
    ])
    def test_ignored(self, ignore_filter, path, is_dir):
        assert ignore_filter.should_ignore(path, is_dir=is_dir)

    @pytest.mark.parametrize("path,is_dir", [
        ("src", True),
        ("src/main.py", False),
        ("README.md", False),
        # 目录专用规则不匹配同名文件
        ("venv", False),
        ("node_modules", False),
    ])
    def test_not_ignored(self, ignore_filter, path, is_dir):
        assert not ignore_filter.should_ignore(path, is_dir=is_dir)

    def test_empty_path(self, ignore_filter):
        assert not ignore_filter.should_ignore("")


class TestHiddenPolicy:
    """隐藏文件策略测试"""

    def test_hidden_excluded_by_default(self, tmp_path):
        ignore_filter = IgnoreFilter.load(str(tmp_path))
        assert ignore_filter.should_ignore(".env")
        assert ignore_filter.should_ignore("config/.secret")
        assert ignore_filter.should_ignore(".github", is_dir=True)

    def test_only_final_segment_checked(self, tmp_path):
        """只看最后一段是否以 . 开头"""
        ignore_filter = IgnoreFilter.load(str(tmp_path))
        assert not ignore_filter.should_ignore("a.b/c.txt")

    def test_include_hidden(self, tmp_path):
        ignore_filter = IgnoreFilter.load(str(tmp_path), include_hidden=True)
        assert not ignore_filter.should_ignore(".env")
        assert not ignore_filter.should_ignore(".github", is_dir=True)

    def test_include_hidden_still_applies_rules(self, tmp_path):
        """.git/ 与 .DS_Store 即使包含隐藏文件也会被规则排除"""
        ignore_filter = IgnoreFilter.load(str(tmp_path), include_hidden=True)
        assert ignore_filter.should_ignore(".git", is_dir=True)
        assert ignore_filter.should_ignore(".DS_Store")


class TestCustomRules:
    """自定义规则文件测试"""

    def test_gitignore_loaded(self, tmp_path):
        (tmp_path / ".gitignore").write_text("dist/\n*.tmp\n", encoding="utf-8")
        ignore_filter = IgnoreFilter.load(str(tmp_path))

        assert ignore_filter.should_ignore("dist", is_dir=True)
        assert ignore_filter.should_ignore("a/b/scratch.tmp")
        assert not ignore_filter.should_ignore("dist.txt")

    def test_negation_reincludes(self, tmp_path):
        """后面的 !pattern 可以重新包含内置规则排除的路径"""
        (tmp_path / ".gitignore").write_text("!keep.log\n", encoding="utf-8")
        ignore_filter = IgnoreFilter.load(str(tmp_path))

        assert not ignore_filter.should_ignore("keep.log")
        assert ignore_filter.should_ignore("other.log")

    def test_comments_and_blank_lines(self, tmp_path):
        (tmp_path / ".gitignore").write_text(
            "# comment\n\n*.bak\n", encoding="utf-8"
        )
        ignore_filter = IgnoreFilter.load(str(tmp_path))

        assert ignore_filter.should_ignore("x.bak")
        assert not ignore_filter.should_ignore("# comment")

    def test_custom_rule_file_name(self, tmp_path):
        (tmp_path / ".snapignore").write_text("secret.txt\n", encoding="utf-8")
        (tmp_path / ".gitignore").write_text("other.txt\n", encoding="utf-8")
        ignore_filter = IgnoreFilter.load(str(tmp_path), gitignore_file=".snapignore")

        assert ignore_filter.should_ignore("secret.txt")
        assert not ignore_filter.should_ignore("other.txt")

    def test_missing_rule_file(self, tmp_path):
        ignore_filter = IgnoreFilter.load(str(tmp_path), gitignore_file="nope")
        assert ignore_filter.rules == DEFAULT_IGNORE_RULES

    def test_fresh_instance_per_folder(self, tmp_path):
        """不同目录的规则互不泄漏"""
        first = tmp_path / "first"
        second = tmp_path / "second"
        first.mkdir()
        second.mkdir()
        (first / ".gitignore").write_text("only_first.txt\n", encoding="utf-8")

        assert IgnoreFilter.load(str(first)).should_ignore("only_first.txt")
        assert not IgnoreFilter.load(str(second)).should_ignore("only_first.txt")
