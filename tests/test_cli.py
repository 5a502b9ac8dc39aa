from __future__ import annotations

from pathlib import Path

import pytest

from rasimode.main import EXIT_CHANGED, EXIT_ERROR, EXIT_OK, main

THEME = "* {\nbg: #000;\n}\nwindow {\n  children: [ mainbox ];\n}\n"
INDENTED = "* {\n    bg: #000;\n}\nwindow {\n    children: [ mainbox ];\n}\n"


@pytest.fixture
def theme(tmp_path: Path, isolated_config) -> Path:
    path = tmp_path / "theme.rasi"
    path.write_text(THEME, encoding="utf-8")
    return path


def test_prints_reindented_text(theme: Path, capsys) -> None:
    assert main([str(theme)]) == EXIT_OK
    assert capsys.readouterr().out == INDENTED
    assert theme.read_text(encoding="utf-8") == THEME


def test_in_place_rewrites_file(theme: Path) -> None:
    assert main(["--in-place", str(theme)]) == EXIT_OK
    assert theme.read_text(encoding="utf-8") == INDENTED


def test_check_reports_files_needing_changes(theme: Path, tmp_path: Path, capsys) -> None:
    clean = tmp_path / "clean.rasi"
    clean.write_text(INDENTED, encoding="utf-8")

    assert main(["--check", str(clean)]) == EXIT_OK
    assert main(["--check", str(theme), str(clean)]) == EXIT_CHANGED
    out = capsys.readouterr().out
    assert f"would re-indent {theme}" in out
    assert str(clean) not in out


def test_indent_unit_option(theme: Path, capsys) -> None:
    assert main(["--indent-unit", "2", str(theme)]) == EXIT_OK
    assert "\n  bg: #000;\n" in capsys.readouterr().out


def test_settings_file_sets_indent_unit(theme: Path, tmp_path: Path, capsys) -> None:
    settings = tmp_path / "settings.yaml"
    settings.write_text("indent:\n  unit: 3\n", encoding="utf-8")

    assert main(["--settings", str(settings), str(theme)]) == EXIT_OK
    assert "\n   bg: #000;\n" in capsys.readouterr().out


def test_missing_file_is_reported(theme: Path, tmp_path: Path, capsys) -> None:
    assert main([str(tmp_path / "nope.rasi"), str(theme)]) == EXIT_ERROR
    assert capsys.readouterr().out == INDENTED


def test_rejects_non_positive_indent_unit(theme: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["--indent-unit", "0", str(theme)])
    assert excinfo.value.code == 2


def test_in_place_keeps_crlf_line_endings(tmp_path: Path, isolated_config) -> None:
    path = tmp_path / "windows.rasi"
    path.write_bytes(b"a {\r\nb: 1;\r\n}\r\n")

    assert main(["--in-place", str(path)]) == EXIT_OK
    assert path.read_bytes() == b"a {\r\n    b: 1;\r\n}\r\n"
    assert main(["--check", str(path)]) == EXIT_OK
