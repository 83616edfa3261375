"""
Free-identifier analysis for example bodies.

The analyzer walks an esprima-compatible expression, keeps an explicit stack of
name sets for the parameters and declarations of every nested function, catch
clause and class expression it enters, and records each identifier reference
that is not bound by one of those local scopes. Matching against the catalogue
is by whole name only; a local binding that shadows a top-level name is treated
as local wherever the stack holds it.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Set, Tuple

from .declarations import DeclarationEntry, declared_names, pattern_names
from .examples import ExampleDefinition

FUNCTION_NODES = {"FunctionDeclaration", "FunctionExpression", "ArrowFunctionExpression"}
DECLARATION_NODES = {"VariableDeclaration", "FunctionDeclaration", "ClassDeclaration"}
HOST_TAG = re.compile(r"[a-z]")


@dataclass(frozen=True)
class UsageResult:
    """Declarations an example touches, and the subset echoed in its source."""

    example: ExampleDefinition
    references: FrozenSet[str]
    needed: Tuple[DeclarationEntry, ...]
    rendered: Tuple[DeclarationEntry, ...]

    @property
    def implicit(self) -> Tuple[DeclarationEntry, ...]:
        """Needed entries left out of the rendered source (self imports)."""
        return tuple(entry for entry in self.needed if entry not in self.rendered)


def _hoisted_names(node: Any) -> Set[str]:
    """Names declared anywhere in a function body, not crossing nested functions."""
    names: Set[str] = set()
    stack = [node]
    while stack:
        current = stack.pop()
        if isinstance(current, list):
            stack.extend(current)
            continue
        if not isinstance(current, dict):
            continue
        node_type = current.get("type")
        if node_type in DECLARATION_NODES:
            names |= declared_names(current)
        if node_type in FUNCTION_NODES or node_type in {"ClassDeclaration", "ClassExpression"}:
            # Only the declared name leaks out; the inside gets its own scope.
            continue
        for key, value in current.items():
            if key in {"loc", "range"}:
                continue
            stack.append(value)
    return names


class _FreeIdentifierCollector:
    def __init__(self) -> None:
        self._scopes: List[Set[str]] = []
        self.references: Set[str] = set()

    def collect(self, body: Dict[str, Any], params: Iterable[Dict[str, Any]]) -> FrozenSet[str]:
        params = list(params)
        outer: Set[str] = set()
        for param in params:
            outer.update(pattern_names(param))
        self._scopes.append(outer)
        try:
            for param in params:
                self._visit_pattern(param)
            self._visit(body)
        finally:
            self._scopes.pop()
        return frozenset(self.references)

    # ------------------------------------------------------------------ helpers

    def _is_local(self, name: str) -> bool:
        return any(name in scope for scope in reversed(self._scopes))

    def _reference(self, name: Optional[str]) -> None:
        if name and not self._is_local(name):
            self.references.add(name)

    def _visit(self, node: Any) -> None:
        if node is None:
            return
        if isinstance(node, list):
            for element in node:
                self._visit(element)
            return
        if not isinstance(node, dict):
            return

        handler = getattr(self, f"_visit_{node.get('type')}", None)
        if handler:
            handler(node)
        else:
            self._generic_visit(node)

    def _generic_visit(self, node: Dict[str, Any]) -> None:
        for key, value in node.items():
            if key in {"loc", "range"}:
                continue
            self._visit(value)

    def _visit_pattern(self, node: Any) -> None:
        """Visit the expressions inside a binding pattern (defaults, computed keys)."""
        if not isinstance(node, dict):
            return
        node_type = node.get("type")
        if node_type == "Identifier":
            return
        if node_type == "ObjectPattern":
            for prop in node.get("properties", []):
                if prop.get("type") == "RestElement":
                    self._visit_pattern(prop.get("argument"))
                    continue
                if prop.get("computed"):
                    self._visit(prop.get("key"))
                self._visit_pattern(prop.get("value"))
        elif node_type == "ArrayPattern":
            for element in node.get("elements", []):
                self._visit_pattern(element)
        elif node_type == "AssignmentPattern":
            self._visit_pattern(node.get("left"))
            self._visit(node.get("right"))
        elif node_type == "RestElement":
            self._visit_pattern(node.get("argument"))
        else:
            # Assignment targets such as `obj.prop` in `[obj.prop] = list`.
            self._visit(node)

    def _enter_function(self, node: Dict[str, Any], extra: Iterable[str] = ()) -> None:
        scope = set(extra)
        for param in node.get("params", []):
            scope.update(pattern_names(param))
        body = node.get("body")
        if isinstance(body, dict) and body.get("type") == "BlockStatement":
            scope |= _hoisted_names(body)

        self._scopes.append(scope)
        try:
            for param in node.get("params", []):
                self._visit_pattern(param)
            self._visit(body)
        finally:
            self._scopes.pop()

    # ----------------------------------------------------------------- visitors

    def _visit_Identifier(self, node: Dict[str, Any]) -> None:
        self._reference(node.get("name"))

    def _visit_MemberExpression(self, node: Dict[str, Any]) -> None:
        self._visit(node.get("object"))
        if node.get("computed"):
            self._visit(node.get("property"))

    def _visit_Property(self, node: Dict[str, Any]) -> None:
        if node.get("computed"):
            self._visit(node.get("key"))
        self._visit(node.get("value"))

    def _visit_MethodDefinition(self, node: Dict[str, Any]) -> None:
        if node.get("computed"):
            self._visit(node.get("key"))
        self._visit(node.get("value"))

    def _visit_ArrowFunctionExpression(self, node: Dict[str, Any]) -> None:
        self._enter_function(node)

    def _visit_FunctionExpression(self, node: Dict[str, Any]) -> None:
        # Named function expressions bind the name within the inner scope.
        self._enter_function(node, extra=pattern_names(node.get("id")))

    def _visit_FunctionDeclaration(self, node: Dict[str, Any]) -> None:
        # The declared name was hoisted into the enclosing scope.
        self._enter_function(node)

    def _visit_ClassExpression(self, node: Dict[str, Any]) -> None:
        self._scopes.append(set(pattern_names(node.get("id"))))
        try:
            self._visit(node.get("superClass"))
            self._visit(node.get("body"))
        finally:
            self._scopes.pop()

    def _visit_ClassDeclaration(self, node: Dict[str, Any]) -> None:
        self._visit(node.get("superClass"))
        self._visit(node.get("body"))

    def _visit_VariableDeclarator(self, node: Dict[str, Any]) -> None:
        self._visit_pattern(node.get("id"))
        self._visit(node.get("init"))

    def _visit_AssignmentExpression(self, node: Dict[str, Any]) -> None:
        # Assigning to a name, or destructuring into names, still uses it.
        for name in pattern_names(node.get("left")):
            self._reference(name)
        self._visit_pattern(node.get("left"))
        self._visit(node.get("right"))

    def _visit_CatchClause(self, node: Dict[str, Any]) -> None:
        self._scopes.append(set(pattern_names(node.get("param"))))
        try:
            self._visit_pattern(node.get("param"))
            self._visit(node.get("body"))
        finally:
            self._scopes.pop()

    def _visit_LabeledStatement(self, node: Dict[str, Any]) -> None:
        self._visit(node.get("body"))

    def _visit_BreakStatement(self, node: Dict[str, Any]) -> None:
        return

    def _visit_ContinueStatement(self, node: Dict[str, Any]) -> None:
        return

    def _visit_MetaProperty(self, node: Dict[str, Any]) -> None:
        return

    # --------------------------------------------------------------------- JSX

    def _visit_JSXIdentifier(self, node: Dict[str, Any]) -> None:
        # Tags starting with a-z are host elements (`<div>`), not bindings.
        name = node.get("name") or ""
        if not HOST_TAG.match(name):
            self._reference(name)

    def _visit_JSXMemberExpression(self, node: Dict[str, Any]) -> None:
        root = node.get("object") or {}
        while root.get("type") == "JSXMemberExpression":
            root = root.get("object") or {}
        if root.get("type") == "JSXIdentifier":
            self._reference(root.get("name"))

    def _visit_JSXNamespacedName(self, node: Dict[str, Any]) -> None:
        return

    def _visit_JSXOpeningElement(self, node: Dict[str, Any]) -> None:
        self._visit(node.get("name"))
        self._visit(node.get("attributes", []))

    def _visit_JSXClosingElement(self, node: Dict[str, Any]) -> None:
        return

    def _visit_JSXAttribute(self, node: Dict[str, Any]) -> None:
        self._visit(node.get("value"))


def free_identifiers(body: Dict[str, Any], *, params: Iterable[Dict[str, Any]] = ()) -> FrozenSet[str]:
    """
    Collect the identifiers an example body references from outside itself.

    Args:
        body: The example's body expression.
        params: The example's own parameters; they shadow top-level names.
    """
    return _FreeIdentifierCollector().collect(body, params)


def analyze_usage(
    example: ExampleDefinition,
    catalog: Iterable[DeclarationEntry],
    *,
    current_unit: Optional[str] = None,
) -> UsageResult:
    """
    Resolve an example's free identifiers against the declaration catalogue.

    An entry is needed when any of its bound names is referenced. An import whose
    only referenced name is the current unit stays needed but is not rendered;
    local bindings are always rendered since nothing else supplies them.
    """
    references = free_identifiers(example.body, params=example.params)
    needed: List[DeclarationEntry] = []
    rendered: List[DeclarationEntry] = []

    for entry in sorted(catalog, key=lambda item: item.order_index):
        used = entry.bound_names & references
        if not used:
            continue
        needed.append(entry)
        if current_unit is not None and entry.is_import and used == {current_unit}:
            continue
        rendered.append(entry)

    return UsageResult(
        example=example,
        references=references,
        needed=tuple(needed),
        rendered=tuple(rendered),
    )


__all__ = ["UsageResult", "analyze_usage", "free_identifiers"]
