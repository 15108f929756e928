from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

from tabledeck.cli import main as cli_main
from tabledeck.errors import RenderError
from tabledeck.render.pptx_renderer import PptxDeckRenderer

"""End-to-end: the second of three files fails to render.

- Part 1 stays on disk (no rollback) and is reported as partial output
- Part 3 is never attempted
- Exit code 2, no SUMMARY line, one error log record for partition 2
"""


class FailingSecondPart(PptxDeckRenderer):
    def render(self, job, output_dir):
        if job.part_number == 2:
            raise RenderError("simulated write failure")
        return super().render(job, output_dir)


def test_partial_failure_keeps_earlier_files(temp_workdir: Path, capsys):
    lines = ["id,label"] + [f"{i},row {i}" for i in range(120)]
    data = temp_workdir / "data" / "rows.csv"
    data.write_text("\n".join(lines), encoding="utf-8")
    (temp_workdir / "config" / "export.yml").write_text(
        "file_prefix: rows\nrows_per_page: 1\nmax_file_size_mb: 1\n", encoding="utf-8"
    )

    with patch("tabledeck.cli.__main__.PptxDeckRenderer", FailingSecondPart):
        code = cli_main([str(data), "--output-dir", "out"])
    out = capsys.readouterr().out

    assert code == 2
    assert "ERROR render: simulated write failure" in out
    assert "WARN partial output left on disk: " in out
    assert "rows-part-1.pptx" in out
    assert "SUMMARY" not in out

    out_dir = temp_workdir / "out"
    assert (out_dir / "rows-part-1.pptx").exists()
    assert not (out_dir / "rows-part-2.pptx").exists()
    assert not (out_dir / "rows-part-3.pptx").exists()

    (log_file,) = (temp_workdir / "logs").glob("errors-*.log")
    (record,) = [json.loads(line) for line in log_file.read_text(encoding="utf-8").splitlines()]
    assert record["partition"] == 2
    assert record["error_type"] == "RENDER_ERROR"
    assert record["message"] == "simulated write failure"
