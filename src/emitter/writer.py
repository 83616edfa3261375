"""
Serialize a stories fragment to the JavaScript the documentation compiler merges.

The fragment text is one namespace import per companion-file import followed by
the `__namedExamples` and `__storiesScope` exports. A JSON rendering of the same
data is available for hosts that merge the fragment themselves.
"""

from __future__ import annotations

import io
import json
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Optional, Tuple

if TYPE_CHECKING:
    from transformer import StoriesFragment

NAMED_EXAMPLES = "__namedExamples"
STORIES_SCOPE = "__storiesScope"

_JS_ESCAPES = {
    "\\": "\\\\",
    "'": "\\'",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\b": "\\b",
    "\f": "\\f",
    "\v": "\\v",
    "\0": "\\x00",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


@dataclass(frozen=True)
class EmitOptions:
    format: str = "js"
    indent: str = "  "
    trailing_newline: bool = True


@dataclass(frozen=True)
class EmitResult:
    source: str
    statements: Tuple[str, ...]


def js_string(value: str) -> str:
    """Quote `value` as a single-quoted JavaScript string literal."""
    return "'" + "".join(_JS_ESCAPES.get(char, char) for char in value) + "'"


def namespace_import(alias_name: str, source_path: str) -> str:
    return f"import * as {alias_name} from {js_string(source_path)}"


def object_literal(entries: Iterable[Tuple[str, str]], indent: str = "  ") -> str:
    """Format `key: value` pairs (values already rendered) as an object literal."""
    lines = [f"{indent}{js_string(key)}: {value}" for key, value in entries]
    if not lines:
        return "{}"
    return "{\n" + ",\n".join(lines) + "\n}"


def _emit_js(fragment: "StoriesFragment", options: EmitOptions) -> Tuple[str, Tuple[str, ...]]:
    statements = tuple(fragment.statements)
    examples = object_literal(
        ((key, js_string(text)) for key, text in fragment.named_examples.items()),
        options.indent,
    )
    scope = object_literal(fragment.stories_scope.items(), options.indent)

    buffer = io.StringIO()
    for statement in statements:
        buffer.write(statement + "\n")
    buffer.write(f"export const {NAMED_EXAMPLES} = {examples};\n")
    buffer.write(f"export const {STORIES_SCOPE} = {scope};")
    return buffer.getvalue(), statements


def _emit_json(fragment: "StoriesFragment", options: EmitOptions) -> Tuple[str, Tuple[str, ...]]:
    statements = tuple(fragment.statements)
    payload = {
        "imports": [
            {"source": alias.source_path, "alias": alias.alias_name, "index": alias.index}
            for alias in fragment.aliases
        ],
        NAMED_EXAMPLES: dict(fragment.named_examples),
        STORIES_SCOPE: dict(fragment.stories_scope),
        "diagnostics": list(fragment.diagnostics),
    }
    return json.dumps(payload, ensure_ascii=False, indent=len(options.indent)), statements


def emit_fragment(fragment: "StoriesFragment", options: Optional[EmitOptions] = None) -> EmitResult:
    """
    Render the given stories fragment to source text.
    """
    options = options or EmitOptions()
    if options.format == "js":
        source, statements = _emit_js(fragment, options)
    elif options.format == "json":
        source, statements = _emit_json(fragment, options)
    else:
        raise ValueError(f"Unknown fragment format: {options.format}")

    if options.trailing_newline:
        source += "\n"
    return EmitResult(source=source, statements=statements)


def merge_fragment(module_source: str, fragment: "StoriesFragment", *, indent: str = "  ") -> str:
    """
    Place the fragment in front of an already compiled documentation module.

    The namespace imports must be bound before the two exports use them, and
    both must precede the module body that reads them.
    """
    rendered = emit_fragment(fragment, EmitOptions(format="js", indent=indent))
    if not module_source:
        return rendered.source
    return rendered.source + "\n" + module_source


__all__ = [
    "EmitOptions",
    "EmitResult",
    "NAMED_EXAMPLES",
    "STORIES_SCOPE",
    "emit_fragment",
    "js_string",
    "merge_fragment",
    "namespace_import",
    "object_literal",
]
