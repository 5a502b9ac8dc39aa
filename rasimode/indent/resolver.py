"""Indentation rules for RASI theme files."""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Tuple

from rasimode.core.logging import get_logger
from rasimode.indent.scope import check_offset, compute_scope
from rasimode.indent.syntax import CONTINUATION_MARKER, DEFAULT_SYNTAX, LexicalSyntax

logger = get_logger(__name__)

CLOSING_RE = re.compile(r"\s*[})]")
CONTINUATION_RE = re.compile(r"\s*" + re.escape(CONTINUATION_MARKER))
CONTINUATION_TAIL_RE = re.compile(re.escape(CONTINUATION_MARKER) + r"\s*\Z")

# Number of extra indent levels given to continuation lines of a ``:=`` value.
CONTINUATION_LEVELS = 2


@dataclass(frozen=True)
class LineContext:
    """A line of the buffer split around its leading whitespace."""

    text: str
    line_start: int
    indent_end: int
    line_end: int

    @property
    def content(self) -> str:
        return self.text[self.indent_end : self.line_end]

    @property
    def preceding(self) -> str:
        return self.text[: self.line_start]

    @property
    def is_blank(self) -> bool:
        return self.indent_end == self.line_end


@dataclass(frozen=True)
class IndentEdit:
    """Replacement of a line's leading whitespace."""

    start: int
    end: int
    replacement: str

    @property
    def delta(self) -> int:
        return len(self.replacement) - (self.end - self.start)

    def apply(self, text: str) -> str:
        return text[: self.start] + self.replacement + text[self.end :]

    def map_cursor(self, pos: int) -> int:
        """Translate a cursor position from before the edit to after it."""

        if pos < self.start:
            return pos
        if pos < self.end:
            # Inside the old indentation: land on the first content character.
            return self.start + len(self.replacement)
        return pos + self.delta


@dataclass(frozen=True)
class IndentResult:
    text: str
    cursor: Optional[int]
    column: Optional[int]


def line_start_of(text: str, offset: int) -> int:
    """Return the offset of the start of the line containing ``offset``."""

    check_offset(text, offset)
    return text.rfind("\n", 0, offset) + 1


def line_context(text: str, line_start: int) -> LineContext:
    line_start = line_start_of(text, line_start)
    line_end = text.find("\n", line_start)
    if line_end == -1:
        line_end = len(text)
    if line_end > line_start and text[line_end - 1] == "\r":
        line_end -= 1
    indent_end = line_start
    while indent_end < line_end and text[indent_end] in " \t":
        indent_end += 1
    return LineContext(text, line_start, indent_end, line_end)


def _check_unit(indent_unit: int) -> None:
    if indent_unit <= 0:
        raise ValueError(f"indent unit must be positive, got {indent_unit}")


def _follows_marker(text: str, pos: int) -> bool:
    end = pos
    while end > 0 and text[end - 1].isspace():
        end -= 1
    return text.endswith(CONTINUATION_MARKER, 0, end)


def _continuation_parens(text: str, openers: Tuple[int, ...]) -> int:
    """Count the openers that are the ``(`` of a ``:=`` value.

    Such a paren carries the continuation indent instead of a level of its own.
    """

    return sum(1 for pos in openers if text[pos] == "(" and _follows_marker(text, pos))


def compute_indent(
    text: str,
    line_start: int,
    indent_unit: int,
    syntax: LexicalSyntax = DEFAULT_SYNTAX,
) -> Optional[int]:
    """Return the target indentation column of a line, or ``None``.

    ``None`` means the line sits at the top level and is left as written.
    """

    _check_unit(indent_unit)
    ctx = line_context(text, line_start)
    scope = compute_scope(text, ctx.indent_end, syntax)
    if scope.depth == 0:
        return None

    content = ctx.content
    if CLOSING_RE.match(content):
        # Align with the line holding the opener being closed.
        enclosing = scope.openers[:-1]
        target = (len(enclosing) + _continuation_parens(text, enclosing)) * indent_unit
    else:
        base = (scope.depth + _continuation_parens(text, scope.openers)) * indent_unit
        if CONTINUATION_RE.match(content):
            target = base + CONTINUATION_LEVELS * indent_unit
        elif CONTINUATION_TAIL_RE.search(text, 0, ctx.line_start):
            # Raw look-back: a marker inside a comment still counts.
            target = base + CONTINUATION_LEVELS * indent_unit
        else:
            target = base

    logger.debug(
        "Line at %d: depth=%d scope_start=%s target=%d",
        ctx.line_start,
        scope.depth,
        scope.scope_start,
        target,
    )
    return target


def indent_edit(text: str, line_start: int, target: Optional[int]) -> Optional[IndentEdit]:
    """Describe the edit that indents a line to ``target`` spaces.

    Returns ``None`` when ``target`` is ``None`` or the line already carries
    exactly that indentation.
    """

    ctx = line_context(text, line_start)
    if target is None:
        return None
    replacement = " " * target
    if text[ctx.line_start : ctx.indent_end] == replacement:
        return None
    return IndentEdit(ctx.line_start, ctx.indent_end, replacement)


def apply_indent(text: str, line_start: int, target: Optional[int]) -> str:
    edit = indent_edit(text, line_start, target)
    return edit.apply(text) if edit else text


def indent_line(
    text: str,
    line_start: int,
    indent_unit: int,
    cursor: Optional[int] = None,
    syntax: LexicalSyntax = DEFAULT_SYNTAX,
) -> IndentResult:
    """Indent one line and carry the cursor along with its content."""

    if cursor is not None:
        check_offset(text, cursor)
    column = compute_indent(text, line_start, indent_unit, syntax)
    if column is None:
        return IndentResult(text, cursor, column)
    ctx = line_context(text, line_start)
    # Mapped even when the whitespace is already right, so the cursor
    # always ends up on the first content character.
    edit = IndentEdit(ctx.line_start, ctx.indent_end, " " * column)
    new_cursor = edit.map_cursor(cursor) if cursor is not None else None
    return IndentResult(edit.apply(text), new_cursor, column)


def reindent_region(
    text: str,
    indent_unit: int,
    start: int = 0,
    end: Optional[int] = None,
    syntax: LexicalSyntax = DEFAULT_SYNTAX,
) -> str:
    """Re-indent every non-blank line starting within ``[start, end]``.

    Lines are processed top to bottom against the already re-indented text.
    Blank lines are skipped so no trailing whitespace is introduced.
    """

    _check_unit(indent_unit)
    stop = len(text) if end is None else end
    check_offset(text, stop)
    pos = line_start_of(text, start)
    changed = 0

    while pos <= stop:
        ctx = line_context(text, pos)
        if not ctx.is_blank:
            edit = indent_edit(text, pos, compute_indent(text, pos, indent_unit, syntax))
            if edit is not None:
                text = edit.apply(text)
                stop += edit.delta
                changed += 1
        newline = text.find("\n", pos)
        if newline == -1:
            break
        pos = newline + 1

    logger.debug("Re-indented %d line(s)", changed)
    return text


__all__ = [
    "IndentEdit",
    "IndentResult",
    "LineContext",
    "apply_indent",
    "compute_indent",
    "indent_edit",
    "indent_line",
    "line_context",
    "line_start_of",
    "reindent_region",
]
