"""Positional namespace aliases for every import of a companion file."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple

from analyzer import DeclarationEntry
from emitter import namespace_import

ALIAS_PREFIX = "__story_import_"


@dataclass(frozen=True)
class ScopeAlias:
    source_path: str
    alias_name: str
    index: int


@dataclass(frozen=True)
class ScopeBinding:
    aliases: Tuple[ScopeAlias, ...]
    statements: Tuple[str, ...]
    scope: Dict[str, str]


def bind_scope(catalog: Iterable[DeclarationEntry]) -> ScopeBinding:
    """
    Alias every import in source order, whether or not an example uses it.

    Each import gets its own `import * as __story_import_N` statement; in the
    source-path map a later import of the same path replaces the earlier alias.
    """
    aliases: List[ScopeAlias] = []
    scope: Dict[str, str] = {}

    for entry in sorted(catalog, key=lambda item: item.order_index):
        if not entry.is_import or entry.source_path is None:
            continue
        alias = ScopeAlias(
            source_path=entry.source_path,
            alias_name=f"{ALIAS_PREFIX}{len(aliases)}",
            index=len(aliases),
        )
        aliases.append(alias)
        scope[alias.source_path] = alias.alias_name

    statements = tuple(namespace_import(alias.alias_name, alias.source_path) for alias in aliases)
    return ScopeBinding(aliases=tuple(aliases), statements=statements, scope=scope)


__all__ = ["ALIAS_PREFIX", "ScopeAlias", "ScopeBinding", "bind_scope"]
