"""
Models package for gqldocs

Contains data structures and type definitions for the documentation pipeline.
"""

from .state import ProgramState, pipeline
from .schema import SchemaData
from .annotations import Annotation, SplitResult, BracketSpan

__all__ = [
    "ProgramState",
    "pipeline",
    "SchemaData",
    "Annotation",
    "SplitResult",
    "BracketSpan",
]
