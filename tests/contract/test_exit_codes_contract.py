from __future__ import annotations

from pathlib import Path

from schematab.cli import main as cli_main
from schematab.cli.__main__ import EXIT_FATAL, EXIT_SUCCESS, EXIT_TABLE_ERROR

"""Exit code contract tests: 0 success / 1 fatal / 2 table error."""


def test_exit_code_values():
    assert (EXIT_SUCCESS, EXIT_FATAL, EXIT_TABLE_ERROR) == (0, 1, 2)


def test_exit_code_fatal_startup(temp_workdir: Path, capsys):
    # config/table.yml 無し → exit 1
    assert cli_main(["check", "whatever.csv"]) == EXIT_FATAL
    assert "ERROR config:" in capsys.readouterr().out


def test_exit_code_all_success(write_config, people_csv: Path):
    assert cli_main(["check", str(people_csv)]) == EXIT_SUCCESS


def test_exit_code_all_failed(write_config, bad_header_csv: Path):
    assert cli_main(["check", str(bad_header_csv)]) == EXIT_TABLE_ERROR


def test_exit_code_blank_required_text_is_accepted(write_config, temp_workdir: Path, capsys):
    f = temp_workdir / "data" / "noname.csv"
    f.write_text("name,Age,city\nAlice,1,Oslo\n\"\",2,Lima\nCarl,3,Rome\n", encoding="utf-8")
    # 空文字は None ではないため required 違反にはならない
    assert cli_main(["check", str(f)]) == EXIT_SUCCESS
    assert "rows=3" in capsys.readouterr().out


def test_exit_code_required_field_missing(write_config, temp_workdir: Path, capsys):
    f = temp_workdir / "data" / "short.csv"
    # index 1 の行は name 列ごと欠落 (strict_headers=false の定義)
    (temp_workdir / "config" / "table.yml").write_text(
        "strict_headers: false\ncolumns:\n  - id: name\n    required: true\n  - city\n",
        encoding="utf-8",
    )
    f.write_text("city\nOslo\nLima\nRome\n", encoding="utf-8")
    assert cli_main(["check", str(f)]) == EXIT_TABLE_ERROR
    assert "REQUIRED_FIELD" in capsys.readouterr().out
