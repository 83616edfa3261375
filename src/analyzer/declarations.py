"""
Catalogue of the top-level declarations of a companion file.

Each import and each top-level binding becomes one `DeclarationEntry` holding
every name it introduces. Entries keep source order; that order drives both the
rendered prelude of each example and the positional scope aliases.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import PurePath
from typing import Any, Dict, FrozenSet, Iterator, List, Optional

from .examples import declares_examples, is_example_declarator


class DeclarationKind(str, Enum):
    IMPORT = "import"
    BINDING = "binding"


BINDING_STATEMENTS = {"VariableDeclaration", "FunctionDeclaration", "ClassDeclaration"}


@dataclass(frozen=True)
class DeclarationEntry:
    """A top-level import or binding and the names it brings into scope."""

    kind: DeclarationKind
    bound_names: FrozenSet[str]
    node: Dict[str, Any]
    order_index: int
    source_path: Optional[str] = None
    # Set when `node` is a lone declarator split out of an example statement.
    keyword: Optional[str] = None

    @property
    def is_import(self) -> bool:
        return self.kind is DeclarationKind.IMPORT


def pattern_names(node: Any) -> Iterator[str]:
    """Yield every identifier bound by a declaration pattern."""
    if not isinstance(node, dict):
        return
    node_type = node.get("type")
    if node_type == "Identifier":
        yield node["name"]
    elif node_type == "ObjectPattern":
        for prop in node.get("properties", []):
            if prop.get("type") == "RestElement":
                yield from pattern_names(prop.get("argument"))
            else:
                yield from pattern_names(prop.get("value"))
    elif node_type == "ArrayPattern":
        for element in node.get("elements", []):
            yield from pattern_names(element)
    elif node_type == "AssignmentPattern":
        yield from pattern_names(node.get("left"))
    elif node_type == "RestElement":
        yield from pattern_names(node.get("argument"))


def declared_names(statement: Dict[str, Any]) -> FrozenSet[str]:
    """Names introduced by a variable, function or class declaration."""
    if statement.get("type") == "VariableDeclaration":
        names: List[str] = []
        for declarator in statement.get("declarations", []):
            names.extend(pattern_names(declarator.get("id")))
        return frozenset(names)
    identifier = statement.get("id")
    if isinstance(identifier, dict) and identifier.get("type") == "Identifier":
        return frozenset([identifier["name"]])
    return frozenset()


def _import_names(statement: Dict[str, Any]) -> FrozenSet[str]:
    # Default, named (post-rename) and namespace specifiers all bind `local`.
    return frozenset(
        specifier["local"]["name"]
        for specifier in statement.get("specifiers", [])
        if isinstance(specifier.get("local"), dict)
    )


def catalog_declarations(program: Dict[str, Any]) -> List[DeclarationEntry]:
    """
    Classify the top-level statements of a companion file.

    Imports become Import entries; variable, function and class declarations
    (exported or not) become Binding entries. In an exported const that declares
    examples, only the other declarators are catalogued, one entry each, printed
    with the statement's keyword. Nested scopes are never inspected.
    """
    entries: List[DeclarationEntry] = []

    for statement in program.get("body", []):
        statement_type = statement.get("type")
        if statement_type == "ImportDeclaration":
            entries.append(
                DeclarationEntry(
                    kind=DeclarationKind.IMPORT,
                    bound_names=_import_names(statement),
                    node=statement,
                    order_index=len(entries),
                    source_path=(statement.get("source") or {}).get("value"),
                )
            )
            continue

        declaration = statement
        if statement_type == "ExportNamedDeclaration":
            if declares_examples(statement):
                declaration = statement["declaration"]
                for declarator in declaration.get("declarations", []):
                    if is_example_declarator(declarator):
                        continue
                    entries.append(
                        DeclarationEntry(
                            kind=DeclarationKind.BINDING,
                            bound_names=frozenset(pattern_names(declarator.get("id"))),
                            node=declarator,
                            order_index=len(entries),
                            keyword=declaration.get("kind"),
                        )
                    )
                continue
            declaration = statement.get("declaration") or {}

        if declaration.get("type") in BINDING_STATEMENTS:
            entries.append(
                DeclarationEntry(
                    kind=DeclarationKind.BINDING,
                    bound_names=declared_names(declaration),
                    node=declaration,
                    order_index=len(entries),
                )
            )

    return entries


def resolve_current_unit(
    documentation_path: str, unit_import_path: Optional[str] = None
) -> Optional[str]:
    """
    Name of the unit being documented: the documentation file's directory name.

    `/Pizza/Readme.md` -> `Pizza`. Without a directory component the unit import
    path is used instead (`./Pizza.tsx` -> `Pizza`, `./Pizza/index.tsx` ->
    `Pizza`).
    """
    name = PurePath(documentation_path).parent.name
    if name:
        return name
    if unit_import_path:
        unit_path = PurePath(unit_import_path)
        name = unit_path.parent.name if unit_path.stem == "index" else unit_path.stem
        if name and name not in {".", ".."}:
            return name
    return None


__all__ = [
    "DeclarationEntry",
    "DeclarationKind",
    "catalog_declarations",
    "declared_names",
    "pattern_names",
    "resolve_current_unit",
]
