"""Applies RASI indentation to a Qt plain text editor."""
from __future__ import annotations

from typing import Optional

from PySide6.QtGui import QTextBlock, QTextCursor
from PySide6.QtWidgets import QPlainTextEdit

from rasimode.core.config import ConfigManager, DEFAULT_INDENT_UNIT
from rasimode.core.logging import get_logger
from rasimode.indent import compute_indent, line_context
from rasimode.indent.resolver import IndentEdit
from rasimode.indent.syntax import LexicalSyntax


def to_qt_position(text: str, index: int) -> int:
    """Convert a ``str`` index into a Qt (UTF-16 code unit) position."""

    return len(text[:index].encode("utf-16-le")) // 2


def from_qt_position(text: str, position: int) -> int:
    """Convert a Qt (UTF-16 code unit) position into a ``str`` index."""

    units = 0
    for index, char in enumerate(text):
        if units >= position:
            return index
        units += 2 if ord(char) > 0xFFFF else 1
    return len(text)


class RasiIndenter:
    """Re-indents lines of a ``QPlainTextEdit`` holding a RASI document.

    Every call reads the whole document afresh; no state is kept between
    edits besides the settings. Qt positions are converted to ``str``
    indices before they reach the engine and back before edits are applied.
    """

    def __init__(
        self,
        editor: QPlainTextEdit,
        config: ConfigManager | None = None,
        syntax: LexicalSyntax | None = None,
    ) -> None:
        self.editor = editor
        self.config = config
        self.syntax = syntax or (config.lexical_syntax() if config else LexicalSyntax())
        self.logger = get_logger(__name__)

    def indent_unit(self) -> int:
        return self.config.indent_unit() if self.config else DEFAULT_INDENT_UNIT

    def indent_block(self, block: QTextBlock) -> Optional[int]:
        """Indent ``block`` in place and return the column chosen (``None`` = untouched).

        The text cursor keeps its place in the line content; a cursor inside
        the leading whitespace lands on the first content character.
        """

        text = self.editor.toPlainText()
        column, edit = self._edit_for(text, block)
        if edit is None:
            return column

        position = from_qt_position(text, self.editor.textCursor().position())
        self._replace(text, edit)
        updated = self.editor.toPlainText()
        moved = self.editor.textCursor()
        moved.setPosition(to_qt_position(updated, edit.map_cursor(position)))
        self.editor.setTextCursor(moved)
        return column

    def indent_current_line(self) -> Optional[int]:
        return self.indent_block(self.editor.textCursor().block())

    def indent_selection(self) -> None:
        """Indent every non-blank line touched by the selection as one undo step."""

        cursor = self.editor.textCursor()
        document = self.editor.document()
        first = document.findBlock(cursor.selectionStart()).blockNumber()
        last = document.findBlock(cursor.selectionEnd()).blockNumber()

        text = self.editor.toPlainText()
        anchor = from_qt_position(text, cursor.anchor())
        position = from_qt_position(text, cursor.position())

        cursor.beginEditBlock()
        for number in range(first, last + 1):
            block = document.findBlockByNumber(number)
            if not block.text().strip():
                continue
            text = self.editor.toPlainText()
            _, edit = self._edit_for(text, block)
            if edit is None:
                continue
            self._replace(text, edit)
            anchor = self._track(edit, anchor)
            position = self._track(edit, position)
        cursor.endEditBlock()

        text = self.editor.toPlainText()
        restored = QTextCursor(document)
        restored.setPosition(to_qt_position(text, anchor))
        restored.setPosition(to_qt_position(text, position), QTextCursor.MoveMode.KeepAnchor)
        self.editor.setTextCursor(restored)

    def newline_and_indent(self) -> Optional[int]:
        cursor = self.editor.textCursor()
        cursor.beginEditBlock()
        cursor.insertText("\n")
        self.editor.setTextCursor(cursor)
        column = self.indent_block(cursor.block())
        cursor.endEditBlock()
        return column

    def _edit_for(self, text: str, block: QTextBlock) -> tuple[Optional[int], Optional[IndentEdit]]:
        line_start = from_qt_position(text, block.position())
        column = compute_indent(text, line_start, self.indent_unit(), self.syntax)
        if column is None:
            return None, None
        ctx = line_context(text, line_start)
        # Kept even when the whitespace is already right: the cursor still
        # moves out of the indentation, as in ``indent_line``.
        return column, IndentEdit(ctx.line_start, ctx.indent_end, " " * column)

    @staticmethod
    def _track(edit: IndentEdit, pos: int) -> int:
        # Selection ends at the line start stay there instead of jumping
        # past the new indentation.
        return pos if pos <= edit.start else edit.map_cursor(pos)

    def _replace(self, text: str, edit: IndentEdit) -> None:
        if text[edit.start : edit.end] == edit.replacement:
            return
        cursor = QTextCursor(self.editor.document())
        cursor.setPosition(to_qt_position(text, edit.start))
        cursor.setPosition(to_qt_position(text, edit.end), QTextCursor.MoveMode.KeepAnchor)
        cursor.insertText(edit.replacement)
        self.logger.debug("Replaced indentation at %d with %d column(s)", edit.start, len(edit.replacement))
