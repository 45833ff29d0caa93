"""Tests for the command line entry point."""

from pathlib import Path

import pytest

from todomark.__main__ import main


@pytest.fixture
def source_file(tmp_path: Path) -> Path:
    path = tmp_path / "main.py"
    path.write_text("TODO = 1\nx = 1  # FIXME: rename\n", encoding="utf-8")
    return path


class TestMain:
    """python -m todomark FILE..."""

    def test_reports_comment_keywords(self, source_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main([str(source_file)]) == 0
        out = capsys.readouterr().out.splitlines()
        assert out == [f"{source_file}:2:10: FIXME  x = 1  # FIXME: rename"]

    def test_punctuation(self, source_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["--punctuation", ":", str(source_file)]) == 0
        assert ": FIXME:  " in capsys.readouterr().out

    def test_all_includes_code(self, source_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["--all", str(source_file)]) == 0
        out = capsys.readouterr().out.splitlines()
        assert len(out) == 2
        assert out[0].startswith(f"{source_file}:1:1: TODO")

    def test_custom_keywords(self, source_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["--keyword", "HACK=red", str(source_file)]) == 1
        assert capsys.readouterr().out == ""

    def test_invalid_keyword(self, source_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["--keyword", "(", str(source_file)]) == 2
        assert "todomark:" in capsys.readouterr().err

    def test_missing_file(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main([str(tmp_path / "missing.py")]) == 2
        assert "missing.py" in capsys.readouterr().err

    def test_prose_file(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        path = tmp_path / "notes.txt"
        path.write_text("NOTE this is prose\n", encoding="utf-8")
        assert main([str(path)]) == 0
        assert f"{path}:1:1: NOTE" in capsys.readouterr().out
