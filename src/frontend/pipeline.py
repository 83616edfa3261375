"""
Front-end integration utilities stitching together discovery, parsing and export.

`run_frontend` parses companion source (erasing TypeScript syntax first when the
file calls for it) and optionally persists the parse artefact. `export_companion`
is the whole page-level flow: locate the companion file next to a documentation
page, parse it, and build its stories fragment. A page without a companion file
gets an empty fragment.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Sequence, Union

from analyzer import resolve_current_unit
from parser import ParseResult, parse_module
from transformer import ExportOptions, StoriesFragment, export_stories

STORY_SUFFIXES = (".stories.tsx", ".stories.ts", ".stories.jsx", ".stories.js")


@dataclass(frozen=True)
class FrontEndResult:
    """Parser output for one companion file."""

    parse: ParseResult

    @property
    def program(self) -> Dict[str, Any]:
        return self.parse.ast

    @property
    def source(self) -> str:
        return self.parse.source


def run_frontend(
    source: str,
    *,
    source_name: str = "<input>",
    typescript: Optional[bool] = None,
    cache_dir: Optional[Union[str, Path]] = None,
) -> FrontEndResult:
    """
    Parse companion-file source text.

    Args:
        source: Raw companion source text.
        source_name: Identifier used in diagnostics; its suffix picks the dialect.
        typescript: Forwarded to the parser to force or disable type erasure.
        cache_dir: Optional directory to write parse artefacts (`None` disables).

    Raises:
        esprima.Error: If the source cannot be parsed.
    """
    parse_result = parse_module(source, source_name=source_name, typescript=typescript)

    if cache_dir is not None:
        _persist_parse(cache_dir, parse_result)

    return FrontEndResult(parse=parse_result)


def _persist_parse(cache_dir: Union[str, Path], parse_result: ParseResult) -> None:
    """Store the raw parse output to disk for reuse in subsequent runs."""
    path = Path(cache_dir)
    path.mkdir(parents=True, exist_ok=True)
    cache_file = path / f"{parse_result.source_hash}.json"
    cache_file.write_text(parse_result.to_json(), encoding="utf-8")


def find_companion(
    documentation_path: Union[str, Path],
    *,
    unit_name: Optional[str] = None,
    suffixes: Sequence[str] = STORY_SUFFIXES,
) -> Optional[Path]:
    """
    Locate `<dir>/<Unit>.stories.*` next to a documentation page.

    `unit_name` defaults to the name of the page's directory.
    """
    doc_path = Path(documentation_path)
    name = unit_name or resolve_current_unit(str(doc_path))
    if not name:
        return None
    for suffix in suffixes:
        candidate = doc_path.parent / f"{name}{suffix}"
        if candidate.is_file():
            return candidate
    return None


def load_companion(path: Optional[Union[str, Path]]) -> Optional[str]:
    """Read a companion file, or return None when there is none."""
    if path is None:
        return None
    companion = Path(path)
    if not companion.is_file():
        return None
    return companion.read_text(encoding="utf-8")


def export_companion(
    documentation_path: Union[str, Path],
    *,
    stories_path: Optional[Union[str, Path]] = None,
    unit_import_path: Optional[str] = None,
    cache_dir: Optional[Union[str, Path]] = None,
) -> StoriesFragment:
    """
    Build the stories fragment for a documentation page.

    Args:
        documentation_path: Path of the documentation file being compiled.
        stories_path: Explicit companion file; discovered by convention if None.
        unit_import_path: Import path of the documented unit.
        cache_dir: Forwarded to `run_frontend`.
    """
    companion = Path(stories_path) if stories_path else find_companion(documentation_path)
    source = load_companion(companion)
    options = ExportOptions(
        documentation_path=str(documentation_path),
        unit_import_path=unit_import_path,
        source_name=str(companion) if companion else "<input>",
    )
    if source is None:
        return export_stories(None, "", options)

    frontend_result = run_frontend(source, source_name=options.source_name, cache_dir=cache_dir)
    return export_stories(frontend_result.program, frontend_result.source, options)


__all__ = [
    "FrontEndResult",
    "STORY_SUFFIXES",
    "export_companion",
    "find_companion",
    "load_companion",
    "run_frontend",
]
