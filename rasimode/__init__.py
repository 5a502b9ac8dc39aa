"""Indentation support for rofi's RASI theme format."""

from rasimode.indent import (
    DEFAULT_SYNTAX,
    InvalidOffsetError,
    LexicalSyntax,
    ScopeInfo,
    apply_indent,
    compute_indent,
    compute_scope,
    indent_line,
    reindent_region,
)

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_SYNTAX",
    "InvalidOffsetError",
    "LexicalSyntax",
    "ScopeInfo",
    "apply_indent",
    "compute_indent",
    "compute_scope",
    "indent_line",
    "reindent_region",
]
