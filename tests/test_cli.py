# tests/test_cli.py

from __future__ import annotations

from typer.testing import CliRunner

from gedcom_matcher.cli import app
from gedcom_matcher.cli.commands.merge import stats_table
from gedcom_matcher.utils import mock_file_path

runner = CliRunner()


def test_merge_command_writes_output_file(tmp_path):
    out = tmp_path / "merged.ged"

    result = runner.invoke(
        app,
        [str(mock_file_path("old_1.ged")), str(mock_file_path("new_1.ged")), "--out", str(out)],
    )

    assert result.exit_code == 0, result.output
    assert out.read_bytes() == mock_file_path("expected_1.ged").read_bytes()


def test_merge_command_honours_wrap_width(tmp_path):
    old = tmp_path / "old.ged"
    new = tmp_path / "new.ged"
    out = tmp_path / "merged.ged"
    old.write_text("0 HEAD\n0 @I1@ INDI\n1 NAME A /A/\n0 TRLR\n", encoding="utf-8")
    new.write_text("0 HEAD\n0 @N1@ NOTE " + "y" * 100 + "\n0 TRLR\n", encoding="utf-8")

    result = runner.invoke(app, [str(old), str(new), "--out", str(out), "--wrap", "40"])

    assert result.exit_code == 0, result.output
    lines = out.read_text(encoding="utf-8").splitlines()
    assert all(len(line) <= 40 for line in lines)
    assert any(line.startswith("1 CONC ") for line in lines)


def test_missing_argument_file_is_a_usage_error(tmp_path):
    result = runner.invoke(app, [str(tmp_path / "missing.ged"), str(mock_file_path("new_1.ged"))])

    assert result.exit_code == 2


def test_malformed_file_exits_with_one(tmp_path):
    broken = tmp_path / "broken.ged"
    broken.write_text("0 HEAD\n1 @I1@\n", encoding="utf-8")

    result = runner.invoke(
        app,
        [str(mock_file_path("old_1.ged")), str(broken), "--out", str(tmp_path / "out.ged")],
    )

    assert result.exit_code == 1


def test_stats_table_has_a_row_per_pass():
    table = stats_table({"notes": {"found": 2, "not_found": 1}, "rewrite": {"ids": 5}})

    assert table.row_count == 2
    assert [c.header for c in table.columns] == ["Pass", "Found", "Not Found", "Ambiguous", "Other"]


def test_non_ascii_level_exits_with_one(tmp_path):
    broken = tmp_path / "broken.ged"
    broken.write_text("0 HEAD\n\u00b9 CHAR UTF-8\n0 TRLR\n", encoding="utf-8")

    result = runner.invoke(
        app,
        [str(mock_file_path("old_1.ged")), str(broken), "--out", str(tmp_path / "out.ged")],
    )

    assert result.exit_code == 1
