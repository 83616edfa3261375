"""
Companion-file parsing built on top of the Python `esprima` port.

`parse_module` erases TypeScript-only syntax when asked to (see
`type_erasure`), then parses the remaining text as an ES module with JSX
enabled. The returned AST is the JSON-compatible ESTree form with `range` and
`loc` metadata; every `range` indexes into `ParseResult.source`, the text that
was actually parsed, so printers can slice node text back out of it.
"""

from __future__ import annotations

import hashlib
import json
from dataclasses import dataclass
from pathlib import PurePath
from typing import Any, Dict, Optional

import esprima

from .type_erasure import erase_types

TYPESCRIPT_SUFFIXES = {".ts": "typescript", ".tsx": "tsx", ".mts": "typescript", ".cts": "typescript"}


@dataclass(frozen=True)
class ParseResult:
    """Aggregate of the output AST plus metadata about the parse run."""

    ast: Dict[str, Any]
    source: str
    source_hash: str
    source_name: str
    dialect: Optional[str] = None

    def to_json(self) -> str:
        """Serialise the parse result to JSON for debugging or caching."""
        payload = {
            "ast": self.ast,
            "source": self.source,
            "source_hash": self.source_hash,
            "source_name": self.source_name,
            "dialect": self.dialect,
        }
        return json.dumps(payload, ensure_ascii=False, indent=2)


def _hash_source(source: str) -> str:
    """Create a deterministic hash for cache keying."""
    return hashlib.sha256(source.encode("utf-8")).hexdigest()


def detect_dialect(source_name: str) -> Optional[str]:
    """Return the tree-sitter grammar for a TypeScript file name, else None."""
    return TYPESCRIPT_SUFFIXES.get(PurePath(source_name).suffix.lower())


def parse_module(
    source: str,
    *,
    source_name: str = "<input>",
    typescript: Optional[bool] = None,
) -> ParseResult:
    """
    Parse companion-file source text into an esprima AST.

    Args:
        source: Raw JavaScript / TypeScript source code.
        source_name: Label used for diagnostics; its suffix selects the
            TypeScript grammar when `typescript` is left as None.
        typescript: Force (True) or disable (False) type erasure.

    Returns:
        ParseResult containing the AST and the text its ranges point into.

    Raises:
        esprima.Error: If the (type-erased) source is not a valid module.
    """
    dialect = detect_dialect(source_name)
    if typescript is True and dialect is None:
        dialect = "tsx"
    elif typescript is False:
        dialect = None

    text = erase_types(source, dialect=dialect) if dialect else source
    ast = esprima.parseModule(text, jsx=True, range=True, loc=True)
    raw_ast = ast.toDict() if hasattr(ast, "toDict") else ast

    return ParseResult(
        ast=raw_ast,
        source=text,
        source_hash=_hash_source(source),
        source_name=source_name,
        dialect=dialect,
    )


__all__ = ["ParseResult", "detect_dialect", "parse_module"]
