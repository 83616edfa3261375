"""
Re-print esprima nodes as source text.

Nodes are printed from the text the parser actually saw, which for TypeScript
input is the type-erased text, so printing a node yields its JavaScript form
with the author's own formatting.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

TERMINATOR = ";"

# Declarations that end in a block and never take a terminator.
BLOCK_DECLARATIONS = {"FunctionDeclaration", "ClassDeclaration"}


class PrintError(ValueError):
    """Raised when a node carries no usable source range."""


@dataclass(frozen=True)
class Printer:
    source: str

    def print(self, node: Dict[str, Any]) -> str:
        """Return the exact source text covered by `node`."""
        span = node.get("range") if isinstance(node, dict) else None
        if not span or len(span) != 2:
            raise PrintError(f"Node {node.get('type') if isinstance(node, dict) else node!r} has no range.")
        start, end = span
        return self.source[start:end]

    def print_statement(self, node: Dict[str, Any], keyword: Optional[str] = None) -> str:
        """
        Print a statement, making sure it ends with a terminator.

        `keyword` (`const`, `let`, ...) turns a lone declarator into a statement.
        """
        text = self.print(node).rstrip()
        if keyword:
            text = f"{keyword} {text}"
        if node.get("type") in BLOCK_DECLARATIONS or text.endswith(TERMINATOR):
            return text
        return text + TERMINATOR


__all__ = ["PrintError", "Printer", "TERMINATOR"]
