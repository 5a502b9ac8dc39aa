"""Indentation engine for RASI theme files.

Modules:
- syntax: comment, string and delimiter descriptors
- scope: comment/string aware nesting-depth tracker
- resolver: line indentation rules and whitespace edits
"""

from rasimode.indent.resolver import (
    IndentEdit,
    IndentResult,
    LineContext,
    apply_indent,
    compute_indent,
    indent_edit,
    indent_line,
    line_context,
    line_start_of,
    reindent_region,
)
from rasimode.indent.scope import InvalidOffsetError, LexState, ScopeInfo, compute_scope
from rasimode.indent.syntax import CONTINUATION_MARKER, DEFAULT_SYNTAX, LexicalSyntax

__all__ = [
    "CONTINUATION_MARKER",
    "DEFAULT_SYNTAX",
    "IndentEdit",
    "IndentResult",
    "InvalidOffsetError",
    "LexState",
    "LexicalSyntax",
    "LineContext",
    "ScopeInfo",
    "apply_indent",
    "compute_indent",
    "compute_scope",
    "indent_edit",
    "indent_line",
    "line_context",
    "line_start_of",
    "reindent_region",
]
