"""
Annotation-specific data models

Type-safe structures returned by the bracket finder and the directive splitter.
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class BracketSpan:
    """
    Result of locating a balanced region in text

    Returned by find_balanced_region() when an open symbol is found at or
    after the search offset and a matching close symbol balances it.

    Attributes:
        start: Index of the first open symbol at/after the search offset
        end: Index of the close symbol that balances it

    Example:
        For text "(a(b)c)" searched from 0:
        BracketSpan(start=0, end=6)
    """
    start: int
    end: int

    def inner(self, text: str, open_symbol: str = "(") -> str:
        """Text strictly between the open and close symbols"""
        return text[self.start + len(open_symbol):self.end]


@dataclass
class Annotation:
    """
    One directive annotation found in a description

    Attributes:
        name: Annotation name without the leading @ (e.g., "deprecated")
        argument_text: Verbatim text between the argument list's outer
                       parentheses, or None when the marker had no "("

    Example:
        For '@deprecated(reason: "old")':
        Annotation(name="deprecated", argument_text='reason: "old"')
    """
    name: str
    argument_text: Optional[str] = None


@dataclass
class SplitResult:
    """
    Result of splitting a description into prose and annotations

    Attributes:
        description: Input text with every annotation marker (and argument
                     list) removed; all other text preserved verbatim
        annotations: Annotations in left-to-right order of appearance

    Example:
        Input: "@internal some text"
        Result: SplitResult(
            description="some text",
            annotations=[Annotation(name="internal")]
        )
    """
    description: str
    annotations: List[Annotation] = field(default_factory=list)
