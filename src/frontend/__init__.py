"""Front-end pipeline glue for discovery, parsing and export."""

from .pipeline import (
    STORY_SUFFIXES,
    FrontEndResult,
    export_companion,
    find_companion,
    load_companion,
    run_frontend,
)

__all__ = [
    "FrontEndResult",
    "STORY_SUFFIXES",
    "export_companion",
    "find_companion",
    "load_companion",
    "run_frontend",
]
