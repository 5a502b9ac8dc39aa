"""Comment and string aware nesting-depth tracking."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from rasimode.core.logging import get_logger
from rasimode.indent.syntax import DEFAULT_SYNTAX, LexicalSyntax

logger = get_logger(__name__)


class InvalidOffsetError(ValueError):
    """Raised when an offset lies outside ``0 <= offset <= len(text)``."""

    def __init__(self, offset: int, length: int) -> None:
        super().__init__(f"offset {offset} outside buffer of length {length}")
        self.offset = offset
        self.length = length


class LexState(Enum):
    CODE = "code"
    LINE_COMMENT = "line-comment"
    BLOCK_COMMENT = "block-comment"
    STRING = "string"


@dataclass(frozen=True)
class ScopeInfo:
    """Nesting information at a buffer offset."""

    depth: int
    scope_start: Optional[int]
    state: LexState = LexState.CODE
    openers: Tuple[int, ...] = ()


def check_offset(text: str, offset: int) -> None:
    if offset < 0 or offset > len(text):
        raise InvalidOffsetError(offset, len(text))


def compute_scope(text: str, offset: int, syntax: LexicalSyntax = DEFAULT_SYNTAX) -> ScopeInfo:
    """Return the depth and innermost scope opener at ``offset``.

    The buffer is scanned from the start up to (excluding) ``offset``. Only
    delimiters in code count; comments and string literals are skipped.
    Multi-character tokens must lie entirely before ``offset`` to be
    recognised, so the result depends on ``text[:offset]`` alone.

    Unmatched closers are ignored rather than driving the depth negative,
    which keeps partially typed documents usable.
    """

    check_offset(text, offset)

    stack: List[int] = []
    state = LexState.CODE
    quote = ""
    unmatched = 0
    line_comment = syntax.line_comment
    block_start = syntax.block_comment_start
    block_end = syntax.block_comment_end

    i = 0
    while i < offset:
        ch = text[i]
        if state is LexState.CODE:
            if line_comment and text.startswith(line_comment, i, offset):
                state = LexState.LINE_COMMENT
                i += len(line_comment)
                continue
            if block_start and text.startswith(block_start, i, offset):
                state = LexState.BLOCK_COMMENT
                i += len(block_start)
                continue
            if ch in syntax.string_quotes:
                state = LexState.STRING
                quote = ch
            elif ch in syntax.openers:
                stack.append(i)
            elif ch in syntax.closers:
                if stack:
                    stack.pop()
                else:
                    unmatched += 1
        elif state is LexState.LINE_COMMENT:
            if ch == "\n":
                state = LexState.CODE
        elif state is LexState.BLOCK_COMMENT:
            if text.startswith(block_end, i, offset):
                state = LexState.CODE
                i += len(block_end)
                continue
        else:
            if ch == syntax.escape and not text.startswith("\n", i + 1, offset):
                i += 2
                continue
            # Strings never span lines.
            if ch == quote or ch == "\n":
                state = LexState.CODE
        i += 1

    if unmatched:
        logger.debug("Ignored %d unmatched closing delimiter(s) before offset %d", unmatched, offset)

    return ScopeInfo(
        depth=len(stack),
        scope_start=stack[-1] if stack else None,
        state=state,
        openers=tuple(stack),
    )


__all__ = [
    "InvalidOffsetError",
    "LexState",
    "ScopeInfo",
    "check_offset",
    "compute_scope",
]
