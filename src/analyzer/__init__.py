"""Declaration, example and usage analysis for companion example files."""

from .declarations import (
    DeclarationEntry,
    DeclarationKind,
    catalog_declarations,
    declared_names,
    pattern_names,
    resolve_current_unit,
)
from .examples import (
    ExampleDefinition,
    ExampleScan,
    SkippedExport,
    camel_key,
    collect_examples,
)
from .usage import UsageResult, analyze_usage, free_identifiers

__all__ = [
    "DeclarationEntry",
    "DeclarationKind",
    "ExampleDefinition",
    "ExampleScan",
    "SkippedExport",
    "UsageResult",
    "analyze_usage",
    "camel_key",
    "catalog_declarations",
    "collect_examples",
    "declared_names",
    "free_identifiers",
    "pattern_names",
    "resolve_current_unit",
]
