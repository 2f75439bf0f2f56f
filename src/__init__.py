"""
gqldocs - GraphQL schema documentation generator

Introspects a GraphQL schema, splits inline @directive annotations out of its
descriptions, and renders the result through user-supplied HTML templates.
"""

__version__ = "1.0.0"

from .lib import (
    find_balanced_region,
    split_directives,
    MismatchedBracketsError,
    InvalidSymbolsError,
    Renderer,
    LOG,
    state_connectToLogger,
)

__all__ = [
    "find_balanced_region",
    "split_directives",
    "MismatchedBracketsError",
    "InvalidSymbolsError",
    "Renderer",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
