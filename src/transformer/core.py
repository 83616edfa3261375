"""
Assembly of the stories fragment for one documentation page.

`StoryExporter` ties the phases together: it catalogues the companion file's
top-level declarations, finds its examples, resolves each example's free
identifiers against the catalogue to render a minimal source snippet, and
aliases every import for the live scope. The result is a `StoriesFragment` the
host documentation compiler merges into its own output.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from analyzer import (
    DeclarationEntry,
    ExampleDefinition,
    UsageResult,
    analyze_usage,
    catalog_declarations,
    collect_examples,
    resolve_current_unit,
)
from emitter import Printer, render_example

from .scope import ScopeAlias, bind_scope


class ExportError(RuntimeError):
    """Raised when the host hands over a tree the exporter cannot work with."""

    def __init__(self, message: str, node: Optional[Dict[str, Any]] = None):
        loc = ""
        if node and isinstance(node, dict):
            loc_meta = node.get("loc") or {}
            start = loc_meta.get("start") or {}
            line = start.get("line")
            column = start.get("column")
            if line is not None and column is not None:
                loc = f" (line {line}, column {column})"
        super().__init__(f"{message}{loc}")
        self.node = node


@dataclass(frozen=True)
class ExportOptions:
    """Per-page configuration supplied by the documentation compiler."""

    documentation_path: str
    unit_import_path: Optional[str] = None
    source_name: str = "<input>"


@dataclass(frozen=True)
class StoriesFragment:
    statements: Tuple[str, ...] = ()
    named_examples: Dict[str, str] = field(default_factory=dict)
    stories_scope: Dict[str, str] = field(default_factory=dict)
    aliases: Tuple[ScopeAlias, ...] = ()
    usage: Tuple[UsageResult, ...] = ()
    diagnostics: Tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not (self.statements or self.named_examples or self.stories_scope)


class StoryExporter:
    """Builds the stories fragment for a parsed companion file."""

    def __init__(self, *, options: ExportOptions):
        self.options = options
        self.current_unit = resolve_current_unit(
            options.documentation_path, options.unit_import_path
        )
        self.diagnostics: List[str] = []

    def _format_location(self, node: Optional[Dict[str, Any]]) -> str:
        if not node or not isinstance(node, dict):
            return ""
        loc_meta = node.get("loc") or {}
        start = loc_meta.get("start") or {}
        line = start.get("line")
        column = start.get("column")
        if line is None or column is None:
            return ""
        return f" (line {line}, column {column})"

    def _note(self, message: str, node: Optional[Dict[str, Any]] = None) -> None:
        loc = self._format_location(node)
        self.diagnostics.append(f"{message}{loc}")

    def export(self, program: Dict[str, Any], source: str) -> StoriesFragment:
        if program.get("type") != "Program":
            raise ExportError("Expected Program node at the root.", program)

        catalog = catalog_declarations(program)
        scan = collect_examples(program)
        for skipped in scan.skipped:
            self._note(f"Skipping export '{skipped.name}': {skipped.reason}.", skipped.node)

        # Without examples there is nothing to show, so imports are not aliased either.
        if not scan.examples:
            return StoriesFragment(diagnostics=tuple(self.diagnostics))

        printer = Printer(source)
        named_examples: Dict[str, str] = {}
        usage: List[UsageResult] = []
        for example in scan.examples:
            result = self.analyze(example, catalog)
            usage.append(result)
            # Later examples with the same key replace earlier ones.
            named_examples[example.camel_key] = render_example(printer, result.rendered, example.body)

        binding = bind_scope(catalog)
        return StoriesFragment(
            statements=binding.statements,
            named_examples=named_examples,
            stories_scope=binding.scope,
            aliases=binding.aliases,
            usage=tuple(usage),
            diagnostics=tuple(self.diagnostics),
        )

    def analyze(self, example: ExampleDefinition, catalog: List[DeclarationEntry]) -> UsageResult:
        return analyze_usage(example, catalog, current_unit=self.current_unit)


def export_stories(
    program: Optional[Dict[str, Any]],
    source: str,
    options: ExportOptions,
) -> StoriesFragment:
    """
    Build the stories fragment for one companion file.

    Args:
        program: esprima `Program` node, or None when there is no companion file.
        source: The text the program's ranges index into.
        options: Documentation path and unit import path of the page.

    Returns:
        StoriesFragment with alias statements, rendered examples and scope map.
    """
    if program is None:
        return StoriesFragment()
    exporter = StoryExporter(options=options)
    return exporter.export(program, source)


__all__ = [
    "ExportError",
    "ExportOptions",
    "StoriesFragment",
    "StoryExporter",
    "export_stories",
]
