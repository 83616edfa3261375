"""
TypeScript type erasure on top of tree-sitter.

esprima only understands JavaScript, so TypeScript companion files are first
parsed with the tree-sitter TypeScript grammars and every type-only construct
is cut out of the text: annotations, `as` / `satisfies` suffixes, non-null
assertions, type arguments and parameters, interface / type alias / ambient
declarations and type-only imports or exports. Everything else is left byte for
byte, so the erased text keeps the author's formatting.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, NamedTuple

import tree_sitter_typescript as ts_typescript
from tree_sitter import Language, Node, Parser


class Span(NamedTuple):
    start: int
    end: int
    # Whole statements keep their line breaks so later line numbers hold.
    keep_lines: bool = False


_GRAMMARS = {
    "typescript": ts_typescript.language_typescript,
    "tsx": ts_typescript.language_tsx,
}
_LANGUAGES: Dict[str, Language] = {}

# Nodes that are dropped together with everything they contain.
ERASED_NODES = frozenset(
    {
        "type_annotation",
        "asserts_annotation",
        "type_predicate_annotation",
        "type_arguments",
        "type_parameters",
        "interface_declaration",
        "type_alias_declaration",
        "ambient_declaration",
        "function_signature",
        "implements_clause",
    }
)

STATEMENT_NODES = frozenset(
    {"interface_declaration", "type_alias_declaration", "ambient_declaration", "function_signature"}
)

# `<expression> as T`, `<expression> satisfies T`, `<expression>!`
SUFFIX_NODES = frozenset({"as_expression", "satisfies_expression", "non_null_expression"})

# Single-token markers that only mean something to the type checker.
MARKER_TOKENS = {"optional_parameter": "?", "variable_declarator": "!"}

TYPE_KEYWORDS = frozenset({"type", "typeof"})


def _language(dialect: str) -> Language:
    if dialect not in _LANGUAGES:
        try:
            factory = _GRAMMARS[dialect]
        except KeyError:
            raise ValueError(f"Unsupported TypeScript dialect: {dialect}") from None
        _LANGUAGES[dialect] = Language(factory())
    return _LANGUAGES[dialect]


def _first_code_child(node: Node) -> Node:
    for child in node.children:
        if child.type != "comment":
            return child
    return node


def _is_type_only_specifier(node: Node) -> bool:
    return (
        node.type in {"import_specifier", "export_specifier"}
        and bool(node.children)
        and node.children[0].type in TYPE_KEYWORDS
    )


def _only_type_specifiers(node: Node) -> bool:
    """True for `{ type A, type B }`; an empty `{}` is a real side-effect import."""
    specifiers = [child for child in node.children if child.type in {"import_specifier", "export_specifier"}]
    return bool(specifiers) and all(_is_type_only_specifier(child) for child in specifiers)


def _child_of_type(node: Node, node_type: str):
    return next((child for child in node.children if child.type == node_type), None)


def _is_type_only_statement(node: Node) -> bool:
    if node.type == "import_statement":
        if any(child.type in TYPE_KEYWORDS for child in node.children):
            return True
        clause = _child_of_type(node, "import_clause")
        if clause is None:
            return False
        parts = [child for child in clause.children if child.type != "comment"]
        return len(parts) == 1 and parts[0].type == "named_imports" and _only_type_specifiers(parts[0])
    if node.type == "export_statement":
        if any(child.type in TYPE_KEYWORDS for child in node.children):
            return True
        clause = _child_of_type(node, "export_clause")
        if clause is not None:
            return _only_type_specifiers(clause)
        declaration = node.child_by_field_name("declaration")
        return declaration is not None and declaration.type in STATEMENT_NODES
    return False


def _collect_specifier_spans(node: Node, spans: List[Span]) -> None:
    """Drop inline `type X` specifiers from `{ ... }` lists along with one comma."""
    children = node.children
    for index, child in enumerate(children):
        if not _is_type_only_specifier(child):
            continue
        start, end = child.start_byte, child.end_byte
        if index + 1 < len(children) and children[index + 1].type == ",":
            end = children[index + 1].end_byte
            if index + 2 < len(children):
                end = children[index + 2].start_byte
        elif index > 0 and children[index - 1].type == ",":
            start = children[index - 1].start_byte
        spans.append(Span(start, end))


def _collect_spans(node: Node, spans: List[Span]) -> None:
    if _is_type_only_statement(node):
        spans.append(Span(node.start_byte, node.end_byte, keep_lines=True))
        return
    if node.type in ERASED_NODES:
        spans.append(Span(node.start_byte, node.end_byte, keep_lines=node.type in STATEMENT_NODES))
        return

    if node.type in SUFFIX_NODES:
        expression = _first_code_child(node)
        spans.append(Span(expression.end_byte, node.end_byte))
        _collect_spans(expression, spans)
        return

    if node.type in {"named_imports", "export_clause"}:
        _collect_specifier_spans(node, spans)

    marker = MARKER_TOKENS.get(node.type)
    for child in node.children:
        if marker is not None and child.type == marker:
            spans.append(Span(child.start_byte, child.end_byte))
            continue
        if _is_type_only_specifier(child):
            continue
        _collect_spans(child, spans)


def _splice(data: bytes, spans: Iterable[Span]) -> bytes:
    pieces: List[bytes] = []
    cursor = 0
    for span in sorted(spans):
        if span.end <= cursor:
            continue
        start = max(span.start, cursor)
        pieces.append(data[cursor:start])
        if span.keep_lines:
            pieces.append(b"\n" * data[start : span.end].count(b"\n"))
        cursor = span.end
    pieces.append(data[cursor:])
    return b"".join(pieces)


def find_type_spans(source: str, *, dialect: str = "tsx") -> List[Span]:
    """Return the sorted byte spans of `source` holding type-only syntax."""
    parser = Parser(_language(dialect))
    tree = parser.parse(source.encode("utf-8"))
    spans: List[Span] = []
    _collect_spans(tree.root_node, spans)
    return sorted(spans)


def erase_types(source: str, *, dialect: str = "tsx") -> str:
    """
    Strip TypeScript-only syntax from `source`, returning plain JavaScript text.

    Args:
        source: TypeScript (or TSX) source text.
        dialect: `"typescript"` or `"tsx"`; selects the tree-sitter grammar.

    Raises:
        ValueError: If `dialect` names an unknown grammar.
    """
    spans = find_type_spans(source, dialect=dialect)
    if not spans:
        return source
    return _splice(source.encode("utf-8"), spans).decode("utf-8")


__all__ = ["Span", "erase_types", "find_type_spans"]
