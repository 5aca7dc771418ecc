#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
文件内容编解码

以 NUL 字节判断二进制: 内容中任意位置出现 0x00 即视为二进制并以 base64
表示，否则按 UTF-8 文本原样表示。该判断是启发式的，不保证准确。
"""

import base64
import logging
from dataclasses import dataclass, field
from typing import Optional, Tuple

from .schema import ContentEncoding


logger = logging.getLogger(__name__)


@dataclass
class EncodedContent:
    """
    读取结果

    error 非空表示读取失败，此时 data 为空、encoding 为文本。
    """
    data: bytes = field(default=b'', repr=False)
    encoding: ContentEncoding = ContentEncoding.TEXT
    error: Optional[OSError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def is_binary(data: bytes) -> bool:
    """整段内容中出现 NUL 字节即判定为二进制"""
    return b'\x00' in data


def read_content(file_path: str) -> EncodedContent:
    """
    读取文件并判定编码

    读取失败 (权限、竞争删除等) 不抛出异常，返回空内容并记录 error。

    Args:
        file_path: 本地文件路径

    Returns:
        EncodedContent
    """
    try:
        with open(file_path, 'rb') as f:
            data = f.read()
    except OSError as e:
        logger.warning("无法读取文件 %s: %s", file_path, e)
        return EncodedContent(error=e)

    encoding = ContentEncoding.BINARY if is_binary(data) else ContentEncoding.TEXT
    return EncodedContent(data=data, encoding=encoding)


def encode(data: bytes, encoding: ContentEncoding) -> str:
    """
    原始字节 → 序列化文本

    文本路径按 UTF-8 解码，非法序列以 U+FFFD 替换。
    """
    if encoding is ContentEncoding.BINARY:
        return base64.b64encode(data).decode('ascii')
    return data.decode('utf-8', errors='replace')


def encode_bytes(data: bytes) -> Tuple[str, ContentEncoding]:
    """按内容自动判定编码并序列化"""
    encoding = ContentEncoding.BINARY if is_binary(data) else ContentEncoding.TEXT
    return encode(data, encoding), encoding


def decode(payload: Optional[str], encoding: ContentEncoding) -> bytes:
    """
    序列化文本 → 原始字节

    Args:
        payload: 序列化内容 (None 或空串得到空字节)
        encoding: 内容编码

    Returns:
        原始字节

    Raises:
        ValueError: base64 内容无效
    """
    if not payload:
        return b''
    if encoding is ContentEncoding.BINARY:
        return base64.b64decode(payload, validate=True)
    return payload.encode('utf-8')
