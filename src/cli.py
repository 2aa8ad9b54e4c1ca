"""Command-line interface for coderef."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import orjson

from parse.treesitter_outline import python_outline
from reference.assemble import EditorContext
from reference.copy import build_copy_content
from reference.range import Position, Selection
from settings.config import ConfigError, load_config
from utils import parse_location
from vcs.remote import resolve_remote

if TYPE_CHECKING:
    from collections.abc import Sequence

    from parse.outline import DocumentSymbol

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="coderef")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log git lookups and degraded results to stderr",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    copy_parser = subparsers.add_parser(
        "copy", help="Print a reference to a file location"
    )
    copy_parser.add_argument(
        "location",
        help="PATH, PATH:LINE or PATH:START-END (1-based lines)",
    )
    copy_parser.add_argument(
        "--workspace",
        default=None,
        help="Workspace folder (default: current directory if it contains PATH)",
    )
    copy_parser.add_argument(
        "--type",
        dest="reference_type",
        default=None,
        help="Reference type, overriding the configured one",
    )
    copy_parser.add_argument(
        "--no-link",
        action="store_true",
        help="Do not append a link to the hosted remote",
    )
    copy_parser.add_argument(
        "--no-relative-path",
        action="store_true",
        help="Use the bare file name instead of the workspace-relative path",
    )
    copy_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the resolved reference as JSON",
    )

    remote_parser = subparsers.add_parser(
        "remote", help="Show the resolved origin remote"
    )
    remote_parser.add_argument(
        "root",
        nargs="?",
        default=".",
        help="Repository directory (default: .)",
    )

    outline_parser = subparsers.add_parser(
        "outline", help="Show the symbol outline of a Python file"
    )
    outline_parser.add_argument("path", help="Python source file")

    return parser


def prompt_choice(choices: Sequence[str], placeholder: str) -> str | None:
    """Ask on stderr for one of ``choices``; EOF or a blank answer cancels."""
    sys.stderr.write(f"{placeholder}:\n")
    for index, choice in enumerate(choices, start=1):
        sys.stderr.write(f"  {index}) {choice}\n")
    sys.stderr.write("> ")
    sys.stderr.flush()

    try:
        answer = input().strip()
    except (EOFError, OSError):
        return None

    if not answer:
        return None
    if answer.isdigit() and 1 <= int(answer) <= len(choices):
        return choices[int(answer) - 1]
    return answer


def _first_non_blank_column(path: Path, line: int) -> int:
    try:
        with path.open(encoding="utf-8", errors="replace") as handle:
            for index, text in enumerate(handle):
                if index == line:
                    return len(text) - len(text.lstrip())
    except OSError:
        return 0
    return 0


def _resolve_workspace(file_path: Path, workspace: str | None) -> Path | None:
    if workspace is not None:
        return Path(workspace).expanduser().resolve()

    cwd = Path.cwd().resolve()
    if file_path.is_relative_to(cwd):
        return cwd
    return None


def _build_selection(file_path: Path, start: int | None, end: int | None) -> Selection:
    start_line = (start or 1) - 1
    active = Position(start_line, _first_non_blank_column(file_path, start_line))
    if end is None:
        return Selection.cursor(active)

    return Selection(
        start=Position(start_line),
        end=Position(end - 1),
        active=active,
        is_empty=False,
    )


def _handle_copy(args: argparse.Namespace) -> int:
    path_str, start, end = parse_location(args.location)
    if start is not None and (start < 1 or (end is not None and end < start)):
        sys.stderr.write(f"error: invalid line range in {args.location!r}\n")
        return 2

    file_path = Path(path_str).expanduser().resolve()
    if not file_path.is_file():
        sys.stderr.write(f"Failed to copy reference: no such file: {file_path}\n")
        return 2

    workspace = _resolve_workspace(file_path, args.workspace)

    try:
        config = load_config(workspace or file_path.parent)
    except ConfigError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2

    overrides: dict[str, object] = {}
    if args.reference_type is not None:
        overrides["cursor_reference_type"] = args.reference_type
        overrides["selection_reference_type"] = args.reference_type
    if args.no_link:
        overrides["link_source"] = False
    if args.no_relative_path:
        overrides["include_relative_path"] = False
    config = config.model_copy(update=overrides)

    context = EditorContext(
        file_path=file_path,
        selection=_build_selection(file_path, start, end),
        workspace_folder=workspace,
    )

    try:
        result = build_copy_content(context, config, chooser=prompt_choice)
    except (OSError, ValueError) as exc:
        sys.stderr.write(f"Failed to copy reference: {exc}\n")
        return 2

    if result.cancelled:
        return 0

    if args.json:
        reference = result.reference
        payload = {
            "reference": reference.model_dump(mode="json") if reference else None,
            "text": result.text,
        }
        sys.stdout.write(orjson.dumps(payload, option=orjson.OPT_SORT_KEYS).decode())
        sys.stdout.write("\n")
        return 0 if result.text else 1

    if not result.text:
        sys.stderr.write("No identifiable reference to copy\n")
        return 1

    sys.stdout.write(f"{result.text}\n")
    return 0


def _handle_remote(root: Path) -> int:
    remote = resolve_remote(root)
    opts = orjson.OPT_SORT_KEYS | orjson.OPT_INDENT_2
    sys.stdout.write(orjson.dumps(remote.model_dump(mode="json"), option=opts).decode())
    sys.stdout.write("\n")
    return 0


def _write_outline(symbols: list[DocumentSymbol], depth: int = 0) -> None:
    for symbol in symbols:
        indent = "  " * depth
        start = symbol.range.start.line + 1
        end = symbol.range.end.line + 1
        sys.stdout.write(f"{indent}{symbol.kind} {symbol.name} L{start}-L{end}\n")
        _write_outline(symbol.children, depth + 1)


def _handle_outline(path: Path) -> int:
    if not path.is_file():
        sys.stderr.write(f"error: not a file: {path}\n")
        return 2
    _write_outline(python_outline(path))
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )

    if args.command == "copy":
        return _handle_copy(args)

    if args.command == "remote":
        return _handle_remote(Path(args.root).expanduser().resolve())

    if args.command == "outline":
        return _handle_outline(Path(args.path).expanduser().resolve())

    raise AssertionError


if __name__ == "__main__":
    raise SystemExit(main())
