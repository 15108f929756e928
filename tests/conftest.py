# Shared pytest fixtures
from __future__ import annotations

import logging
import tempfile
from pathlib import Path

import pytest

from tabledeck.logging.init import LOGGER_NAME, reset_logging
from tabledeck.render.slides import RenderJob


@pytest.fixture(autouse=True)
def clean_logging():
    reset_logging()
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    logger.propagate = True
    reset_logging()


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "out").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture()
def sample_csv_text() -> str:
    return "name,region,amount\nAlice,North,10\nBob,South,20\nCarol,East,30\n"


@pytest.fixture()
def sample_json_text() -> str:
    return '[{"name": "Alice", "region": "North", "amount": 10}, {"name": "Bob", "region": "South", "amount": 20}]'


@pytest.fixture()
def sample_config_yaml() -> str:
    return """title: Regional Sales
file_prefix: sales
rows_per_page: 2
preview_page_count: 1
header_fill: "#112233"
body_text: "445566"
include_notes: true
split_export: true
max_file_size_mb: 5
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "export.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def write_csv(temp_workdir: Path, sample_csv_text: str) -> Path:
    path = temp_workdir / "data" / "sales.csv"
    path.write_text(sample_csv_text, encoding="utf-8")
    return path


class RecordingRenderer:
    """Deck renderer double: remembers each job and writes an empty file per call."""

    def __init__(self, fail_on: int | None = None, exc: Exception | None = None) -> None:
        self.jobs: list[RenderJob] = []
        self.fail_on = fail_on
        self.exc = exc or RuntimeError("disk full")

    def render(self, job: RenderJob, output_dir: Path) -> Path:
        if self.fail_on is not None and job.part_number == self.fail_on:
            raise self.exc
        self.jobs.append(job)
        output_dir.mkdir(parents=True, exist_ok=True)
        path = output_dir / job.file_name
        path.write_bytes(b"")
        return path


@pytest.fixture()
def recording_renderer() -> RecordingRenderer:
    return RecordingRenderer()


def make_rows(count: int, columns: tuple[str, ...] = ("id", "value")) -> list[dict[str, str]]:
    return [{c: f"{c}{i}" for c in columns} for i in range(count)]
