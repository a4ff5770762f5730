"""Command-line helper for PlaceNotes documents.

Usage:
  placenotes-doc check workspace.json
  placenotes-doc format workspace.json [--write]
  placenotes-doc export-png workspace.json --out workspace.png

``check`` exits 1 when the document would be rejected by the app's import.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from placenotes import document
from placenotes.launcher import configure_logging
from placenotes.model import Workspace


def _load(path: str) -> Workspace | None:
    try:
        return document.read_document(path)
    except OSError as exc:
        sys.stderr.write(f"Cannot read {path}: {exc}\n")
    except document.DocumentError as exc:
        sys.stderr.write(f"{path}: {exc}\n")
    return None


def _cmd_check(args: argparse.Namespace) -> int:
    workspace = _load(args.file)
    if workspace is None:
        return 1
    print(f"{args.file}: OK")
    print(f"  Notes: {len(workspace.notes)}")
    print(f"  Next id: {workspace.next_id}")
    print(f"  Camera: ({workspace.camera.x}, {workspace.camera.y})")
    print(f"  Mode: {workspace.mode.value}")
    return 0


def _cmd_format(args: argparse.Namespace) -> int:
    workspace = _load(args.file)
    if workspace is None:
        return 1
    if args.write:
        document.write_document(args.file, workspace)
        print(f"Rewrote {Path(args.file).expanduser().resolve()}")
    else:
        print(document.encode(workspace))
    return 0


def _cmd_export_png(args: argparse.Namespace) -> int:
    workspace = _load(args.file)
    if workspace is None:
        return 1

    from placenotes.render import export_png

    if not export_png(workspace, args.out, scale=args.scale):
        sys.stderr.write("Nothing to export: the workspace has no notes\n")
        return 1
    print(f"Wrote image: {Path(args.out).expanduser().resolve()}")
    return 0


def main(argv: list[str] | None = None) -> int:
    configure_logging()

    parser = argparse.ArgumentParser(prog="placenotes-doc")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_check = sub.add_parser("check", help="Validate a workspace document")
    p_check.add_argument("file", help="Path to a workspace .json document")
    p_check.set_defaults(func=_cmd_check)

    p_fmt = sub.add_parser("format", help="Print a document in canonical form")
    p_fmt.add_argument("file", help="Path to a workspace .json document")
    p_fmt.add_argument(
        "--write",
        action="store_true",
        help="Rewrite the file in place instead of printing",
    )
    p_fmt.set_defaults(func=_cmd_format)

    p_png = sub.add_parser("export-png", help="Render a document to PNG")
    p_png.add_argument("file", help="Path to a workspace .json document")
    p_png.add_argument("--out", required=True, help="Output .png path")
    p_png.add_argument("--scale", type=float, default=2.0, help="Pixel scale (default 2.0)")
    p_png.set_defaults(func=_cmd_export_png)

    args = parser.parse_args(argv)
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
