"""
Balanced-region finder

Locates the first balanced region of open/close symbols in a text, counting
nested occurrences of the same symbol pair.

The scan keeps two lookahead cursors: the next unconsumed open symbol and
the next unconsumed close symbol. Whichever comes first drives the next
transition. An open deepens the region; a close shallows it. The region is
finalized the moment the depth returns to zero, so sibling groups later in
the text are never swallowed:

    "(a(b)c) (d)"  ->  BracketSpan(start=0, end=6)

Example:
    >>> find_balanced_region("()()", "(", ")")
    BracketSpan(start=0, end=1)
    >>> find_balanced_region("()()", "(", ")", 2)
    BracketSpan(start=2, end=3)
"""

from typing import Optional

from ..models.annotations import BracketSpan
from .log import LOG


class InvalidSymbolsError(ValueError):
    """Raised when the open and close symbols are empty or identical"""
    pass


class MismatchedBracketsError(SyntaxError):
    """
    Raised when an opened region never balances within the text

    Attributes:
        text: Text that was scanned
        start: Index of the open symbol that began the unbalanced region,
               or None when not known
        depth: Open count still outstanding when the scan gave up
    """

    def __init__(self, message: str, text: str = "", start: Optional[int] = None, depth: int = 0):
        super().__init__(message)
        self.text = text
        self.start = start
        self.depth = depth


def symbols_check(open_symbol: str, close_symbol: str) -> None:
    """
    Validate an open/close symbol pair

    Raises:
        InvalidSymbolsError: If either symbol is empty or both are equal
    """
    if not open_symbol or not close_symbol:
        raise InvalidSymbolsError("Open and close symbols must be non-empty")
    if open_symbol == close_symbol:
        raise InvalidSymbolsError(
            f"Open and close symbols must differ (both are {open_symbol!r})"
        )


def symbol_findNext(text: str, symbol: str, cursor: int) -> Optional[int]:
    """Index of the next occurrence of symbol at/after cursor, or None"""
    index = text.find(symbol, cursor)
    return index if index >= 0 else None


def find_balanced_region(
    text: str, open_symbol: str, close_symbol: str, from_offset: int = 0
) -> Optional[BracketSpan]:
    """
    Find the first balanced open/close region at or after from_offset

    Args:
        text: Text to scan
        open_symbol: Token that opens a region (e.g., "(")
        close_symbol: Token that closes a region (e.g., ")")
        from_offset: Index at which the search for the first open begins

    Returns:
        BracketSpan covering the open symbol through its balancing close,
        or None when no open symbol occurs at/after from_offset (or the
        offset is out of range)

    Raises:
        InvalidSymbolsError: If the symbols are empty or identical
        MismatchedBracketsError: If the region that begins is never closed

    Example:
        For text "(a(b)c)": BracketSpan(start=0, end=6), not the inner "(b)"

        Depth tracking: (1 a (2 b )1 c )0
    """
    symbols_check(open_symbol, close_symbol)

    if from_offset < 0 or from_offset >= len(text):
        return None

    start = symbol_findNext(text, open_symbol, from_offset)
    if start is None:
        return None

    depth = 1
    cursor = start + len(open_symbol)
    next_open = symbol_findNext(text, open_symbol, cursor)
    next_close = symbol_findNext(text, close_symbol, cursor)

    while True:
        if next_close is None:
            raise MismatchedBracketsError(
                f"Unmatched {open_symbol!r} at position {start}: "
                f"{depth} {open_symbol!r} still open at end of text",
                text=text,
                start=start,
                depth=depth,
            )

        # On a tie one symbol is a prefix of the other; the longer token wins
        open_first = next_open is not None and (
            next_open < next_close
            or (next_open == next_close and len(open_symbol) > len(close_symbol))
        )

        if open_first:
            depth += 1
            cursor = next_open + len(open_symbol)
            LOG(f"open {open_symbol!r} at {next_open}, depth {depth}", level=3)
        else:
            depth -= 1
            cursor = next_close + len(close_symbol)
            LOG(f"close {close_symbol!r} at {next_close}, depth {depth}", level=3)
            if depth == 0:
                return BracketSpan(start=start, end=next_close)

        # Refresh whichever lookahead the cursor has consumed or passed
        if next_open is not None and next_open < cursor:
            next_open = symbol_findNext(text, open_symbol, cursor)
        if next_close < cursor:
            next_close = symbol_findNext(text, close_symbol, cursor)
