from __future__ import annotations

import pytest

pytest.importorskip("PySide6.QtWidgets")

from PySide6.QtGui import QTextCursor
from PySide6.QtWidgets import QPlainTextEdit

from rasimode.editor.indenter import RasiIndenter


@pytest.fixture
def editor(qt_app) -> QPlainTextEdit:
    return QPlainTextEdit()


def _place_cursor(editor: QPlainTextEdit, position: int, anchor: int | None = None) -> None:
    cursor = editor.textCursor()
    if anchor is not None:
        cursor.setPosition(anchor)
        cursor.setPosition(position, QTextCursor.MoveMode.KeepAnchor)
    else:
        cursor.setPosition(position)
    editor.setTextCursor(cursor)


def test_indent_current_line_moves_cursor_with_content(editor: QPlainTextEdit) -> None:
    editor.setPlainText("a {\nb: 1;\n}")
    _place_cursor(editor, 6)  # after "b:"

    assert RasiIndenter(editor).indent_current_line() == 4
    assert editor.toPlainText() == "a {\n    b: 1;\n}"
    assert editor.textCursor().position() == 10


def test_top_level_line_is_untouched(editor: QPlainTextEdit) -> None:
    editor.setPlainText("   a {\n}")
    _place_cursor(editor, 1)

    assert RasiIndenter(editor).indent_current_line() is None
    assert editor.toPlainText() == "   a {\n}"
    assert editor.textCursor().position() == 1


def test_indent_selection_reindents_touched_lines(editor: QPlainTextEdit) -> None:
    editor.setPlainText("a {\nb {\nc: 1;\n\n}\n}")
    _place_cursor(editor, len(editor.toPlainText()), anchor=0)

    RasiIndenter(editor).indent_selection()

    assert editor.toPlainText() == "a {\n    b {\n        c: 1;\n\n    }\n}"
    cursor = editor.textCursor()
    assert cursor.anchor() == 0
    assert cursor.position() == len(editor.toPlainText())


def test_newline_and_indent(editor: QPlainTextEdit) -> None:
    editor.setPlainText("a {\n    c :=\n}")
    _place_cursor(editor, len("a {\n    c :="))

    assert RasiIndenter(editor).newline_and_indent() == 12
    assert editor.toPlainText() == "a {\n    c :=\n            \n}"
    assert editor.textCursor().position() == len("a {\n    c :=\n            ")


def test_uses_configured_indent_unit(editor: QPlainTextEdit, isolated_config) -> None:
    manager = isolated_config.ConfigManager()
    manager.set("indent", {"unit": 2})
    editor.setPlainText("a {\nb: 1;\n}")
    _place_cursor(editor, 4)

    assert RasiIndenter(editor, config=manager).indent_current_line() == 2
    assert editor.toPlainText() == "a {\n  b: 1;\n}"


def test_lines_after_astral_characters(editor: QPlainTextEdit) -> None:
    editor.setPlainText('a {\nicon: "\U000f0001\U000f0002";\nb: 1;\n}')
    block = editor.document().findBlockByNumber(2)
    _place_cursor(editor, block.position() + 1)  # after "b"

    assert RasiIndenter(editor).indent_current_line() == 4
    assert editor.toPlainText() == 'a {\nicon: "\U000f0001\U000f0002";\n    b: 1;\n}'
    assert editor.textCursor().blockNumber() == 2
    assert editor.textCursor().positionInBlock() == 5


def test_selection_survives_reindent(editor: QPlainTextEdit) -> None:
    editor.setPlainText("a {\nb: 1;\nc: 2;\n}")
    start = editor.document().findBlockByNumber(1).position()
    end = editor.document().findBlockByNumber(2).position() + 2
    _place_cursor(editor, end, anchor=start)

    RasiIndenter(editor).indent_selection()

    cursor = editor.textCursor()
    assert editor.toPlainText() == "a {\n    b: 1;\n    c: 2;\n}"
    assert cursor.hasSelection()
    assert cursor.anchor() == start
    assert cursor.selectedText() == "    b: 1;\u2029    c:"
