"""Interfaces for parsing companion example files."""

from .module_parser import ParseResult, detect_dialect, parse_module
from .type_erasure import erase_types, find_type_spans

__all__ = ["ParseResult", "detect_dialect", "erase_types", "find_type_spans", "parse_module"]
