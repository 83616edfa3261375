"""
Command-line interface for extracting stories fragments from companion files.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List

import esprima

from emitter import EmitOptions, emit_fragment
from frontend import export_companion, find_companion
from transformer import ExportError


def _print_diagnostics(messages: List[str]) -> None:
    if not messages:
        return
    for message in messages:
        sys.stderr.write(message + "\n")


def _collect_diagnostics(source_name: str, fragment) -> List[str]:
    return [f"INFO {source_name}: {message}" for message in fragment.diagnostics]


def extract_command(args: argparse.Namespace) -> int:
    documentation_path = Path(args.documentation)
    stories_path = Path(args.stories).resolve() if args.stories else find_companion(documentation_path)
    if stories_path is not None and not stories_path.exists():
        sys.stderr.write(f"ERROR: Stories file not found: {stories_path}\n")
        return 1

    source_name = str(stories_path or documentation_path)
    try:
        fragment = export_companion(
            documentation_path,
            stories_path=stories_path,
            unit_import_path=args.component,
            cache_dir=args.cache_dir,
        )
    except esprima.Error as exc:
        sys.stderr.write(f"ERROR {source_name}: {exc}\n")
        return 1
    except ExportError as exc:
        sys.stderr.write(f"ERROR: Export failed: {exc}\n")
        return 1
    except OSError as exc:
        sys.stderr.write(f"ERROR: Failed to read {source_name}: {exc}\n")
        return 1

    emit_result = emit_fragment(fragment, EmitOptions(format=args.format))

    if args.out:
        output_path = Path(args.out)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(emit_result.source, encoding="utf-8")
    else:
        sys.stdout.write(emit_result.source)

    _print_diagnostics(_collect_diagnostics(source_name, fragment))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="story-export",
        description="Extract example snippets and their scope from companion stories files",
    )
    subparsers = parser.add_subparsers(dest="command")

    extract_parser = subparsers.add_parser(
        "extract", help="Build the stories fragment for one documentation page"
    )
    extract_parser.add_argument("documentation", help="Path to the documentation file (e.g. Pizza/Readme.md)")
    extract_parser.add_argument(
        "--stories",
        help="Companion stories file (defaults to <dir>/<Dir>.stories.{tsx,ts,jsx,js})",
    )
    extract_parser.add_argument(
        "--component",
        help="Import path of the documented unit (e.g. ./index.tsx)",
    )
    extract_parser.add_argument(
        "--out",
        help="Output file path (defaults to stdout)",
    )
    extract_parser.add_argument(
        "--format",
        choices=["js", "json"],
        default="js",
        help="Emit the JavaScript fragment or its JSON data.",
    )
    extract_parser.add_argument(
        "--cache-dir",
        help="Directory for cached parse artefacts.",
    )
    extract_parser.set_defaults(func=extract_command)

    return parser


def main(argv: List[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not hasattr(args, "func"):
        parser.print_help()
        return 1
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
