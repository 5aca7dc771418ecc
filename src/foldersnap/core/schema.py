#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
FolderSnap 数据结构定义

定义遍历结果、快照条目、元数据和操作结果等核心数据结构。
快照在内存中统一以 SnapData 表示，各格式只负责序列化与解析。
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

from ..exceptions import ErrorKind


# ==================== 常量定义 ====================

# 格式版本
FORMAT_LEGACY = "legacy"
FORMAT_V2 = "2.0"
FORMAT_V3 = "3.0"

# v3 引用文件的类型标记
V3_TYPE_TAG = "folder-snap-v3"

# 旧版格式的哨兵行与文件头
SNAP_START = "<FOLDER_SNAP_START>"
SNAP_END = "<FOLDER_SNAP_END>"
LEGACY_TITLE = "# Folder Snap Export"

# v3 sidecar 目录内的固定名称
V3_MANIFEST_NAME = "metadata.json"
V3_CONTENT_DIR = "content"

# 条目类型
TYPE_FILE = "file"
TYPE_DIRECTORY = "directory"


class ContentEncoding(Enum):
    """文件内容编码 (值即为序列化时写出的标记)"""
    TEXT = "utf8"
    BINARY = "base64"

    @classmethod
    def parse(cls, value: Optional[str]) -> 'ContentEncoding':
        """解析编码标记，缺失或未知时按文本处理"""
        if value == cls.BINARY.value:
            return cls.BINARY
        return cls.TEXT


# ==================== 遍历结果 ====================

@dataclass(frozen=True)
class WalkItem:
    """
    遍历过程中的临时条目

    content_index 仅在构建阶段使用 (v3 用作 sidecar 文件序号)，
    不会写入快照。目录条目的 content_index 为 -1。
    """
    type: str
    path: str
    name: str
    size: int = 0
    content_index: int = -1

    @property
    def is_dir(self) -> bool:
        return self.type == TYPE_DIRECTORY


# ==================== 快照条目 ====================

@dataclass
class DirectoryEntry:
    """目录条目"""
    path: str
    name: str
    type: str = field(default=TYPE_DIRECTORY, init=False)

    def to_dict(self) -> Dict[str, Any]:
        return {'type': self.type, 'path': self.path, 'name': self.name}


@dataclass
class FileEntry:
    """
    文件条目

    size 始终是源文件的原始字节数，与编码后的表示无关。
    data 为原始字节；None 表示内容缺失 (如 v3 sidecar 文件丢失)，
    此时 missing_reason 说明原因，还原时写出空文件。
    """
    path: str
    name: str
    size: int = 0
    encoding: ContentEncoding = ContentEncoding.TEXT
    data: Optional[bytes] = field(default=None, repr=False)
    content_file: Optional[str] = None
    missing_reason: Optional[str] = None
    type: str = field(default=TYPE_FILE, init=False)


StructureEntry = Union[DirectoryEntry, FileEntry]


@dataclass
class SnapMetadata:
    """
    快照元数据

    version 为 None 表示旧版快照。
    """
    timestamp: str
    source_folder: str
    total_files: int = 0
    total_directories: int = 0
    version: Optional[str] = None

    @property
    def format_version(self) -> str:
        """可读的格式版本 (缺失时为 legacy)"""
        return self.version or FORMAT_LEGACY

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'timestamp': self.timestamp,
            'sourceFolder': self.source_folder,
            'totalFiles': self.total_files,
            'totalDirectories': self.total_directories,
        }
        if self.version:
            data['version'] = self.version
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SnapMetadata':
        """
        Raises:
            ValueError, TypeError: 计数字段不是整数
        """
        version = data.get('version')
        return cls(
            timestamp=str(data.get('timestamp') or ''),
            source_folder=str(data.get('sourceFolder') or ''),
            total_files=int(data.get('totalFiles', 0)),
            total_directories=int(data.get('totalDirectories', 0)),
            version=version if isinstance(version, str) else None,
        )


@dataclass
class SnapData:
    """
    完整快照

    structure 保持目录先序遍历顺序: 目录总是排在其后代之前。
    """
    metadata: SnapMetadata
    structure: List[StructureEntry] = field(default_factory=list)

    @property
    def directories(self) -> List[DirectoryEntry]:
        return [e for e in self.structure if isinstance(e, DirectoryEntry)]

    @property
    def files(self) -> List[FileEntry]:
        return [e for e in self.structure if isinstance(e, FileEntry)]


# ==================== 配置与结果 ====================

@dataclass
class FolderSnapOptions:
    """
    FolderSnap 配置

    每次顶层操作都会基于这些配置重新构建忽略规则。
    """
    encoding: str = 'utf-8'             # 规则文件与快照文本的编码
    gitignore_file: str = '.gitignore'  # 源目录根下的忽略规则文件
    include_hidden: bool = False        # 是否包含以 . 开头的文件/目录
    format_version: str = FORMAT_V3     # pack 默认输出格式


@dataclass
class FolderStats:
    """
    目录统计结果

    warnings 记录遍历时被跳过的条目 (相对路径, 原因)。
    """
    files: int = 0
    directories: int = 0
    total_size: int = 0
    total_size_formatted: str = '0 Bytes'
    warnings: List[Tuple[str, str]] = field(default_factory=list)


@dataclass
class SnapResult:
    """
    pack/unpack/upgrade 操作结果

    失败时 success 为 False 并携带 error 与 error_kind；
    单个条目的失败不会中止操作，而是记录在 warnings 中。
    """
    success: bool
    output_path: Optional[str] = None
    output_folder: Optional[str] = None
    metadata: Optional[SnapMetadata] = None
    error: Optional[str] = None
    error_kind: Optional[ErrorKind] = None
    restored_files: int = 0
    restored_directories: int = 0
    warnings: List[Tuple[str, str]] = field(default_factory=list)

    @property
    def warning_count(self) -> int:
        return len(self.warnings)

    @classmethod
    def failure(cls, error: Exception) -> 'SnapResult':
        kind = getattr(error, 'kind', ErrorKind.IO_ERROR)
        return cls(success=False, error=str(error), error_kind=kind)


@dataclass
class ValidationResult:
    """validate 操作结果"""
    valid: bool
    format_version: Optional[str] = None
    metadata: Optional[SnapMetadata] = None
    error: Optional[str] = None
    error_kind: Optional[ErrorKind] = None
