"""Printing of example snippets and serialisation of stories fragments."""

from .printer import PrintError, Printer
from .renderer import render_example
from .writer import (
    NAMED_EXAMPLES,
    STORIES_SCOPE,
    EmitOptions,
    EmitResult,
    emit_fragment,
    js_string,
    merge_fragment,
    namespace_import,
)

__all__ = [
    "EmitOptions",
    "EmitResult",
    "NAMED_EXAMPLES",
    "PrintError",
    "Printer",
    "STORIES_SCOPE",
    "emit_fragment",
    "js_string",
    "merge_fragment",
    "namespace_import",
    "render_example",
]
