"""Display source for a single example: its needed declarations, then its body."""

from __future__ import annotations

from typing import Any, Dict, Iterable

from analyzer import DeclarationEntry

from .printer import Printer


def render_example(
    printer: Printer,
    declarations: Iterable[DeclarationEntry],
    body: Dict[str, Any],
) -> str:
    """
    Render the example text shown on the documentation page.

    Declarations are printed one per line, each with a terminator, followed by a
    blank line and the body expression. Without declarations the result is the
    body text alone.
    """
    prelude = [printer.print_statement(entry.node, entry.keyword) for entry in declarations]
    body_text = printer.print(body)
    if not prelude:
        return body_text
    return "\n".join(prelude) + "\n\n" + body_text


__all__ = ["render_example"]
