#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
命令行入口

    folder-snap pack <folder> [output]
    folder-snap unpack <snap-file> <output-folder>
    folder-snap stats <folder>
    folder-snap validate <snap-file>
    folder-snap upgrade <snap-file> [output]
"""

import argparse
import logging
import os
import sys
from typing import List, Optional, Tuple

from . import __version__
from .core.schema import FolderSnapOptions, FORMAT_V3
from .exceptions import FolderSnapError
from .formats import supported_versions
from .snap import FolderSnap


def _print_warnings(warnings: List[Tuple[str, str]]) -> None:
    if warnings:
        print(f"⚠️  {len(warnings)} 个条目存在警告:")
        for path, message in warnings:
            print(f"   {path}: {message}")


def cmd_pack(snap: FolderSnap, args: argparse.Namespace) -> int:
    output = args.output or f"{os.path.basename(os.path.abspath(args.folder))}.snap"
    result = snap.folder_to_text(args.folder, output)
    if not result.success:
        print(f"❌ 打包失败: {result.error}", file=sys.stderr)
        return 1

    meta = result.metadata
    print(f"✅ 已打包到: {result.output_path}")
    print(f"📁 共 {meta.total_files} 个文件, {meta.total_directories} 个目录 (格式 {meta.format_version})")
    _print_warnings(result.warnings)
    return 0


def cmd_unpack(snap: FolderSnap, args: argparse.Namespace) -> int:
    result = snap.text_to_folder(args.snap_file, args.output_folder)
    if not result.success:
        print(f"❌ 还原失败: {result.error}", file=sys.stderr)
        return 1

    print(f"✅ 已还原到: {result.output_folder}")
    print(f"📁 还原 {result.restored_files} 个文件, {result.restored_directories} 个目录")
    _print_warnings(result.warnings)
    print(f"📅 快照时间: {result.metadata.timestamp}")
    return 0


def cmd_stats(snap: FolderSnap, args: argparse.Namespace) -> int:
    try:
        stats = snap.get_folder_stats(args.folder)
    except FolderSnapError as e:
        print(f"❌ 统计失败: {e}", file=sys.stderr)
        return 1

    print("📊 目录统计:")
    print(f"   文件: {stats.files}")
    print(f"   目录: {stats.directories}")
    print(f"   总大小: {stats.total_size_formatted}")
    _print_warnings(stats.warnings)
    return 0


def cmd_validate(snap: FolderSnap, args: argparse.Namespace) -> int:
    result = snap.validate_snap_file(args.snap_file)
    if not result.valid:
        print(f"❌ 快照无效: {result.error}", file=sys.stderr)
        return 1

    meta = result.metadata
    print("✅ 快照有效")
    print(f"📁 来源: {meta.source_folder}")
    print(f"📅 创建: {meta.timestamp}")
    print(f"📊 文件: {meta.total_files}, 目录: {meta.total_directories}")
    print(f"🔢 版本: {result.format_version}")
    return 0


def cmd_upgrade(snap: FolderSnap, args: argparse.Namespace) -> int:
    result = snap.upgrade(args.snap_file, args.output, args.target)
    if not result.success:
        print(f"❌ 转换失败: {result.error}", file=sys.stderr)
        return 1

    print(f"✅ 已转换为 {result.metadata.format_version}: {result.output_path}")
    _print_warnings(result.warnings)
    return 0


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="folder-snap",
        description="把目录快照为可移植的文本文件，或从快照还原目录",
    )
    ap.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    ap.add_argument("-v", "--verbose", action="store_true", help="输出调试日志")
    ap.add_argument("--encoding", default="utf-8", help="规则文件与快照文本编码")

    sub = ap.add_subparsers(dest="cmd", required=True)

    p_pack = sub.add_parser("pack", help="打包目录")
    p_pack.add_argument("folder")
    p_pack.add_argument("output", nargs="?", help="输出文件 (默认 <目录名>.snap)")
    p_pack.add_argument(
        "--format", dest="format_version", default=FORMAT_V3,
        help=f"输出格式: {', '.join(supported_versions())} (或 v2/v3)",
    )
    p_pack.add_argument("--include-hidden", action="store_true", help="包含 . 开头的文件")
    p_pack.add_argument("--ignore-file", default=".gitignore", help="忽略规则文件名")
    p_pack.set_defaults(func=cmd_pack)

    p_unpack = sub.add_parser("unpack", help="还原快照")
    p_unpack.add_argument("snap_file")
    p_unpack.add_argument("output_folder")
    p_unpack.set_defaults(func=cmd_unpack)

    p_stats = sub.add_parser("stats", help="统计目录")
    p_stats.add_argument("folder")
    p_stats.add_argument("--include-hidden", action="store_true", help="包含 . 开头的文件")
    p_stats.add_argument("--ignore-file", default=".gitignore", help="忽略规则文件名")
    p_stats.set_defaults(func=cmd_stats)

    p_validate = sub.add_parser("validate", help="校验快照")
    p_validate.add_argument("snap_file")
    p_validate.set_defaults(func=cmd_validate)

    p_upgrade = sub.add_parser("upgrade", help="转换快照格式 (默认升级到 v3)")
    p_upgrade.add_argument("snap_file")
    p_upgrade.add_argument("output", nargs="?")
    p_upgrade.add_argument("--target", default=FORMAT_V3, help="目标格式版本")
    p_upgrade.set_defaults(func=cmd_upgrade)

    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    options = FolderSnapOptions(
        encoding=args.encoding,
        gitignore_file=getattr(args, "ignore_file", ".gitignore"),
        include_hidden=getattr(args, "include_hidden", False),
        format_version=getattr(args, "format_version", FORMAT_V3),
    )
    return args.func(FolderSnap(options), args)


if __name__ == "__main__":
    sys.exit(main())
