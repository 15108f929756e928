from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

from conftest import RecordingRenderer
from tabledeck.cli import main as cli_main
from tabledeck.cli.__main__ import EXIT_FATAL, EXIT_RENDER_FAILURE, EXIT_SUCCESS

"""Exit code contract: 0 success, 1 fatal (config / input / validation), 2 render failure."""


def test_exit_code_values():
    assert (EXIT_SUCCESS, EXIT_FATAL, EXIT_RENDER_FAILURE) == (0, 1, 2)


def test_exit_code_success(temp_workdir: Path, write_config, write_csv, capsys):
    with patch("tabledeck.cli.__main__.PptxDeckRenderer", return_value=RecordingRenderer()):
        code = cli_main([str(write_csv)])
    assert code == 0
    assert "SUMMARY files=1" in capsys.readouterr().out


def test_exit_code_fatal_config(temp_workdir: Path, write_csv, capsys):
    (temp_workdir / "config" / "export.yml").write_text("unknown: 1\n", encoding="utf-8")
    code = cli_main([str(write_csv)])
    assert code == 1
    assert "ERROR config:" in capsys.readouterr().out


def test_exit_code_fatal_missing_data_file(temp_workdir: Path, write_config, capsys):
    code = cli_main([str(temp_workdir / "data" / "missing.csv")])
    assert code == 1
    assert "ERROR load: cannot read missing.csv" in capsys.readouterr().out


def test_exit_code_fatal_validation(temp_workdir: Path, write_config, write_csv, capsys):
    write_config.write_text("preview_page_count: 1\n", encoding="utf-8")
    code = cli_main([str(write_csv), "--exclude", "name,region,amount", "--preview"])
    assert code == 1
    assert "ERROR export:" in capsys.readouterr().out


def test_exit_code_render_failure(temp_workdir: Path, write_config, write_csv, capsys):
    with patch(
        "tabledeck.cli.__main__.PptxDeckRenderer",
        return_value=RecordingRenderer(fail_on=1, exc=OSError("read-only file system")),
    ):
        code = cli_main([str(write_csv)])
    out = capsys.readouterr().out
    assert code == 2
    assert "ERROR render:" in out
    assert "read-only file system" in out
