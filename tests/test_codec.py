#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
内容编解码测试

测试 NUL 字节启发式判定和 base64/UTF-8 编解码。
"""

import base64

import pytest

from foldersnap.core.codec import (
    is_binary, read_content, encode, encode_bytes, decode,
)
from foldersnap.core.schema import ContentEncoding


class TestBinaryDetection:
    """二进制判定测试"""

    @pytest.mark.parametrize("data,expected", [
        (b"", False),
        (b"plain text\n", False),
        ("中文".encode("utf-8"), False),
        (b"\x00", True),
        (b"text with a \x00 in the middle", True),
        (b"a" * 100000 + b"\x00", True),   # 整段扫描，不限前缀
        (b"\xff\xfe\xfd", False),          # 非 UTF-8 但无 NUL 仍按文本处理
    ])
    def test_is_binary(self, data, expected):
        assert is_binary(data) is expected


class TestReadContent:
    """read_content 测试"""

    def test_text_file(self, tmp_path):
        path = tmp_path / "a.txt"
        path.write_bytes(b"hello")

        content = read_content(str(path))
        assert content.ok
        assert content.data == b"hello"
        assert content.encoding is ContentEncoding.TEXT

    def test_binary_file(self, tmp_path):
        path = tmp_path / "a.bin"
        path.write_bytes(b"\x00\x01\x02")

        content = read_content(str(path))
        assert content.encoding is ContentEncoding.BINARY

    def test_read_failure(self, tmp_path):
        """读取失败返回空文本内容并记录错误"""
        content = read_content(str(tmp_path / "missing.txt"))

        assert not content.ok
        assert isinstance(content.error, OSError)
        assert content.data == b""
        assert content.encoding is ContentEncoding.TEXT


class TestEncodeDecode:
    """encode / decode 测试"""

    def test_text(self):
        payload, encoding = encode_bytes("你好, world".encode("utf-8"))
        assert encoding is ContentEncoding.TEXT
        assert payload == "你好, world"
        assert decode(payload, encoding) == "你好, world".encode("utf-8")

    def test_binary(self):
        data = bytes(range(256))
        payload, encoding = encode_bytes(data)

        assert encoding is ContentEncoding.BINARY
        assert payload == base64.b64encode(data).decode("ascii")
        assert decode(payload, encoding) == data

    def test_invalid_utf8_uses_text_path(self):
        """无 NUL 的非法 UTF-8 仍走文本路径，非法序列被替换"""
        payload, encoding = encode_bytes(b"ok\xff")
        assert encoding is ContentEncoding.TEXT
        assert payload == "ok\ufffd"

    def test_encode_forced_text(self):
        """旧版格式强制文本: NUL 作为普通字符保留"""
        assert encode(b"a\x00b", ContentEncoding.TEXT) == "a\x00b"

    @pytest.mark.parametrize("payload", [None, ""])
    def test_decode_empty(self, payload):
        assert decode(payload, ContentEncoding.TEXT) == b""
        assert decode(payload, ContentEncoding.BINARY) == b""

    def test_decode_invalid_base64(self):
        with pytest.raises(ValueError):
            decode("not base64!!", ContentEncoding.BINARY)

    @pytest.mark.parametrize("tag,expected", [
        ("utf8", ContentEncoding.TEXT),
        ("base64", ContentEncoding.BINARY),
        (None, ContentEncoding.TEXT),
        ("latin1", ContentEncoding.TEXT),
    ])
    def test_parse_tag(self, tag, expected):
        assert ContentEncoding.parse(tag) is expected
