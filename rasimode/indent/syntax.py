"""Lexical descriptors for the RASI theme language."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class LexicalSyntax:
    """Comment, string and delimiter syntax used by the scope tracker.

    Passed explicitly into every engine call so the engine never reads
    ambient editor state.
    """

    line_comment: str = "//"
    block_comment_start: str = "/*"
    block_comment_end: str = "*/"
    string_quotes: str = "\"'"
    escape: str = "\\"
    openers: str = "{("
    closers: str = "})"

    @classmethod
    def from_settings(cls, settings: dict) -> "LexicalSyntax":
        """Build descriptors from the ``syntax`` section of the settings."""

        block = settings.get("block_comment") or (cls.block_comment_start, cls.block_comment_end)
        start, end = block
        return cls(
            line_comment=settings.get("line_comment", cls.line_comment),
            block_comment_start=start,
            block_comment_end=end,
            string_quotes=settings.get("string_quotes", cls.string_quotes),
        )


DEFAULT_SYNTAX = LexicalSyntax()

CONTINUATION_MARKER = ":="


__all__ = ["LexicalSyntax", "DEFAULT_SYNTAX", "CONTINUATION_MARKER"]
