from __future__ import annotations

import argparse
import logging
import sys
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Sequence

from . import colors, tables
from .checking import audit
from .document import Document


def _package_version() -> str:
    try:
        return version("dxfcreator")
    except PackageNotFoundError:
        return "0.0.0"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="dxfcreator", description="Create and check paper-space DXF drawings.")
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_package_version()}",
    )
    subparsers = parser.add_subparsers(dest="command")

    demo_parser = subparsers.add_parser("demo", help="Write a sample drawing with two layouts and a block.")
    demo_parser.add_argument("output_path", help="Path to output DXF file.")
    demo_parser.add_argument(
        "--units",
        choices=sorted(colors.UNITS),
        default="millimeters",
        help="Drawing units written to $INSUNITS.",
    )
    demo_parser.add_argument("--verbose", action="store_true", help="Log debug messages.")

    audit_parser = subparsers.add_parser(
        "audit",
        help="Load a DXF file with ezdxf and report auditor findings.",
    )
    audit_parser.add_argument("path", help="Path to DXF file.")
    audit_parser.add_argument("--verbose", action="store_true", help="List every error and fix.")
    return parser


def demo_document(units: int = colors.MILLIMETERS) -> Document:
    """Sample drawing: two landscape pages, shapes on several layers and one block insert."""
    doc = Document(units)
    doc.add_layout("fullView")
    doc.add_layout("partialView")
    doc.select_layout("fullView")
    doc.set_text_style("STANDARD", "arial.ttf")
    doc.add_text((26, 46, 0), "DXF testing", 8)
    doc.set_layer("cyan", colors.CYAN)
    doc.add_line((25, 0, 0), (100, 0, 0), 0.5)
    doc.add_line((100, 0, 0), (100, 75, 0), 0.5)
    doc.add_line((75, 100, 0), (0, 100, 0), 0.5)
    doc.add_line((0, 100, 0), (0, 25, 0), 0.5)
    doc.set_layer("blue", colors.BLUE, tables.DASHDOT)
    doc.add_circle((0, 0, 0), 25)
    doc.set_layer("custom", colors.GREEN, tables.DASHED)
    doc.add_circle((100, 100, 0), 25, fill=colors.GREEN)
    doc.set_layer("red", colors.RED)
    doc.add_arc((0, 100, 0), 25, 0.0, 270.0)
    doc.set_layer("magenta", colors.MAGENTA)
    doc.add_arc((100, 0, 0), 25, 180.0, 90.0)
    doc.set_layer("black", colors.BLACK)
    for point in ((0, 0, 0), (0, 100, 0), (100, 100, 0), (100, 0, 0)):
        doc.add_point(point)
    doc.add_block("north", base=(0, 0, 0))
    doc.add_polyline([(0, 14, 0), (-5, -3, 0), (0, 0, 0), (5, -3, 0)], flag=1, fill=colors.BLACK)
    doc.add_mtext((0, -4, 0), "N", 6)
    doc.select_layout("partialView")
    doc.add_insert("north", (50, 50, 0))
    doc.select_layout("fullView")
    doc.add_insert("north", (120, 20, 0), scale=(0.5, 0.5, 0.5))
    return doc


def _run_demo(output_path: str, *, units: str = "millimeters") -> int:
    doc = demo_document(colors.UNITS[units])
    if not doc.save(output_path):
        print(f"error: {doc.error}", file=sys.stderr)
        return 2
    print(f"output: {output_path}")
    print(f"layouts: {', '.join(layout.name for layout in doc.layouts)}")
    print(f"blocks: {len(doc.blocks)}")
    return 0


def _run_audit(path: str, *, verbose: bool = False) -> int:
    file_path = Path(path)
    if not file_path.exists():
        print(f"error: file not found: {file_path}", file=sys.stderr)
        return 2

    try:
        result = audit(file_path)
    except Exception as exc:
        print(f"error: failed to audit DXF: {exc}", file=sys.stderr)
        return 2

    print(f"file: {result.source}")
    print(f"version: {result.dxf_version}")
    print(f"layouts: {', '.join(result.layouts)}")
    print(f"total_entities: {result.entity_count}")
    print(f"errors: {len(result.errors)}")
    print(f"fixes: {len(result.fixes)}")
    if verbose:
        for message in result.errors:
            print(f"error[{message}]")
        for message in result.fixes:
            print(f"fix[{message}]")
    return 1 if result.has_errors else 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if getattr(args, "verbose", False):
        logging.basicConfig(level=logging.DEBUG)

    if args.command == "demo":
        return _run_demo(args.output_path, units=args.units)
    if args.command == "audit":
        return _run_audit(args.path, verbose=bool(args.verbose))

    parser.print_help()
    return 0
