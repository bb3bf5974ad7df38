# Shared pytest fixtures
from __future__ import annotations
import tempfile
from pathlib import Path
import pytest

from schematab.logging.init import reset_logging


@pytest.fixture(autouse=True)
def _clean_state(monkeypatch):
    # .env 読み込みで環境変数が漏れないよう、一度 set してから del (teardown で確実に消える)
    monkeypatch.setenv("SCHEMATAB_SCHEMA", "")
    monkeypatch.delenv("SCHEMATAB_SCHEMA")
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """delimiter: ","
strict_columns: true
strict_headers: true
columns:
  - id: name
    required: true
  - id: age
    header: Age
    type: integer
    default: 0
  - city
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "table.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def people_csv(temp_workdir: Path) -> Path:
    f = temp_workdir / "data" / "people.csv"
    f.write_text("name,Age,city\nAlice,30,Oslo\nBob,41,Lima\n", encoding="utf-8")
    return f


@pytest.fixture()
def bad_header_csv(temp_workdir: Path) -> Path:
    f = temp_workdir / "data" / "bad.csv"
    f.write_text("name,Years,city\nAlice,30,Oslo\n", encoding="utf-8")
    return f
