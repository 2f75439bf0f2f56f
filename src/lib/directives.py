"""
Directive splitter for GraphQL descriptions

Separates free-form description prose from embedded directive-like
annotations such as ``@deprecated(reason: "use X instead")`` or ``@internal``.

A marker is an ``@`` that is not preceded by a word character in the
unprocessed text, followed by a name (``\\w+``) and optionally a single
``(`` or a single space. Markers ending in ``(`` carry an argument list whose
extent is found with find_balanced_region(), so nested parentheses stay
intact inside the argument text.

Segmentation is purely lexical: names and arguments are not validated.

Example:
    >>> result = split_directives('Deprecated. @deprecated(reason: "old") Use new field.')
    >>> result.description
    'Deprecated.  Use new field.'
    >>> result.annotations
    [Annotation(name='deprecated', argument_text='reason: "old"')]
"""

import re
from typing import List, Optional

from ..models.annotations import Annotation, SplitResult
from .brackets import find_balanced_region
from .log import LOG


MARKER_PATTERN = re.compile(r'@(\w+)([( ])?')
WORD_PATTERN = re.compile(r'\w')


def marker_find(text: str, cursor: int) -> Optional[re.Match]:
    """
    Find the next annotation marker at or after cursor

    The cursor is treated as the start of the remaining text: a word
    character just before it never disqualifies a marker sitting at it.
    Elsewhere an ``@`` glued to a preceding word character (``user@host``)
    is ordinary text.

    Args:
        text: Full description text
        cursor: Index where the unprocessed text begins

    Returns:
        Match with group(1) = name and group(2) = "(", " " or None;
        None if no marker remains
    """
    for match in MARKER_PATTERN.finditer(text, cursor):
        at = match.start()
        if at == cursor or not WORD_PATTERN.match(text, at - 1):
            return match
    return None


def split_directives(description: str) -> SplitResult:
    """
    Split a description into clean prose and ordered annotations

    Walks a single forward cursor over the input. Text between markers is
    collected verbatim; each marker (and its parenthesized argument list,
    if any) is dropped from the prose and recorded as an Annotation.

    Args:
        description: Raw description text from a schema element

    Returns:
        SplitResult with the cleaned description and the annotations in
        order of appearance

    Raises:
        MismatchedBracketsError: If an annotation's argument list is never
                                 closed (propagated from find_balanced_region)

    Example:
        Input: "@internal some text"
        Output: SplitResult(description="some text",
                            annotations=[Annotation(name="internal")])
    """
    prose: List[str] = []
    annotations: List[Annotation] = []
    cursor = 0

    while cursor < len(description):
        match = marker_find(description, cursor)
        if not match:
            break

        prose.append(description[cursor:match.start()])
        name = match.group(1)

        if match.group(2) == '(':
            paren_pos = match.end() - 1
            span = find_balanced_region(description, '(', ')', paren_pos)
            if span is not None:
                annotations.append(
                    Annotation(name=name, argument_text=span.inner(description))
                )
                LOG(f"@{name} with arguments at {match.start()}..{span.end}", level=3)
                cursor = span.end + 1
                continue

        annotations.append(Annotation(name=name))
        LOG(f"@{name} at {match.start()}", level=3)
        cursor = match.end()

    prose.append(description[cursor:])

    return SplitResult(description=''.join(prose), annotations=annotations)
