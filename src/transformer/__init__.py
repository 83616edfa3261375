"""Companion file to stories fragment transformation."""

from .core import (
    ExportError,
    ExportOptions,
    StoriesFragment,
    StoryExporter,
    export_stories,
)
from .scope import ALIAS_PREFIX, ScopeAlias, ScopeBinding, bind_scope

__all__ = [
    "ALIAS_PREFIX",
    "ExportError",
    "ExportOptions",
    "ScopeAlias",
    "ScopeBinding",
    "StoriesFragment",
    "StoryExporter",
    "bind_scope",
    "export_stories",
]
