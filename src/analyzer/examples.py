"""
Discovery of example definitions ("stories") in a companion file.

Only `export const Name = (...) => <expression>` qualifies. Other exported
declarations are not examples; exported consts initialised with a function
that is not expression-bodied are reported as skipped so callers can surface
a diagnostic.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

FUNCTION_TYPES = {"ArrowFunctionExpression", "FunctionExpression"}


def camel_key(name: str) -> str:
    """Lower-case the first character only; `PascalCase` -> `pascalCase`."""
    return name[:1].lower() + name[1:]


@dataclass(frozen=True)
class ExampleDefinition:
    exported_name: str
    body: Dict[str, Any]
    params: Tuple[Dict[str, Any], ...]
    node: Dict[str, Any]

    @property
    def camel_key(self) -> str:
        return camel_key(self.exported_name)


@dataclass(frozen=True)
class SkippedExport:
    """An exported function-valued const that is not a usable example."""

    name: str
    reason: str
    node: Dict[str, Any]


@dataclass(frozen=True)
class ExampleScan:
    examples: List[ExampleDefinition]
    skipped: List[SkippedExport]


def _exported_const(statement: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    if statement.get("type") != "ExportNamedDeclaration":
        return None
    declaration = statement.get("declaration")
    if not isinstance(declaration, dict):
        return None
    if declaration.get("type") != "VariableDeclaration" or declaration.get("kind") != "const":
        return None
    return declaration


def is_example_declarator(declarator: Dict[str, Any]) -> bool:
    """True for `Name = (...) => expression` declarators."""
    identifier = declarator.get("id") or {}
    init = declarator.get("init") or {}
    return (
        identifier.get("type") == "Identifier"
        and init.get("type") == "ArrowFunctionExpression"
        and (init.get("body") or {}).get("type") != "BlockStatement"
    )


def declares_examples(statement: Dict[str, Any]) -> bool:
    declaration = _exported_const(statement)
    if declaration is None:
        return False
    return any(is_example_declarator(d) for d in declaration.get("declarations", []))


def _skip_reason(init: Dict[str, Any]) -> Optional[str]:
    if init.get("type") not in FUNCTION_TYPES:
        return None
    if init.get("type") == "FunctionExpression":
        return "example must be an arrow function"
    return "example must have an expression body"


def collect_examples(program: Dict[str, Any]) -> ExampleScan:
    """
    Find every exported, expression-bodied arrow function in declaration order.

    Args:
        program: esprima `Program` node of the companion file.

    Returns:
        ExampleScan with the examples and any skipped function-valued exports.
    """
    examples: List[ExampleDefinition] = []
    skipped: List[SkippedExport] = []

    for statement in program.get("body", []):
        declaration = _exported_const(statement)
        if declaration is None:
            continue
        for declarator in declaration.get("declarations", []):
            identifier = declarator.get("id") or {}
            init = declarator.get("init") or {}
            if is_example_declarator(declarator):
                examples.append(
                    ExampleDefinition(
                        exported_name=identifier["name"],
                        body=init["body"],
                        params=tuple(init.get("params", [])),
                        node=declarator,
                    )
                )
                continue
            reason = _skip_reason(init)
            if reason and identifier.get("type") == "Identifier":
                skipped.append(SkippedExport(name=identifier["name"], reason=reason, node=declarator))

    return ExampleScan(examples=examples, skipped=skipped)


__all__ = [
    "ExampleDefinition",
    "ExampleScan",
    "SkippedExport",
    "camel_key",
    "collect_examples",
    "declares_examples",
    "is_example_declarator",
]
