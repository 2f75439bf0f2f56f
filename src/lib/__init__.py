"""
gqldocs - GraphQL schema documentation generator

Library layer: bracket matching, directive splitting, introspection,
description annotation and template rendering.
"""

__version__ = "1.0.0"

from .log import LOG, WARN, state_connectToLogger
from .brackets import find_balanced_region, MismatchedBracketsError, InvalidSymbolsError
from .directives import split_directives
from .introspection import (
    IntrospectionClient,
    IntrospectionError,
    schema_parse,
    schemaFile_load,
    typeRef_format,
)
from .annotator import SchemaAnnotator, AnnotationError, schema_annotate
from .renderer import Renderer, RenderError

__all__ = [
    "LOG",
    "WARN",
    "state_connectToLogger",
    "find_balanced_region",
    "MismatchedBracketsError",
    "InvalidSymbolsError",
    "split_directives",
    "IntrospectionClient",
    "IntrospectionError",
    "schema_parse",
    "schemaFile_load",
    "typeRef_format",
    "SchemaAnnotator",
    "AnnotationError",
    "schema_annotate",
    "Renderer",
    "RenderError",
    "__version__",
]
