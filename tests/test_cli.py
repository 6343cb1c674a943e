"""CLI tests for the run and season commands."""

from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from inseason.cli import app


runner = CliRunner()

HEADER = "id,observed_on,user_login,quality_grade,url,taxon_id,scientific_name,common_name,iconic_taxon_name\n"


def _write_task(tmp_path: Path, name: str = "site", rows: str | None = None) -> Path:
    (tmp_path / f"{name}.csv").write_text(
        HEADER
        + (
            rows
            or """1,2022-05-01,alice,research,,100,Parus major,,Aves
2,2023-05-01,bob,research,,200,Turdus merula,,Aves
"""
        ),
        encoding="utf-8",
    )
    config_path = tmp_path / f"{name}.toml"
    config_path.write_text(f'source = "{name}.csv"\nmodern_window = 1\n', encoding="utf-8")
    return config_path


def test_run_prints_report(tmp_path: Path) -> None:
    result = runner.invoke(app, ["run", str(_write_task(tmp_path)), "--format", "json"])
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["summary"]["taxa"] == 2


def test_run_several_configs_in_parallel(tmp_path: Path) -> None:
    configs = [str(_write_task(tmp_path, name)) for name in ("north", "south")]
    result = runner.invoke(app, ["run", *configs, "--jobs", "2"])
    assert result.exit_code == 0
    assert "# north" in result.stdout
    assert "# south" in result.stdout


def test_run_reports_data_error(tmp_path: Path) -> None:
    config_path = _write_task(tmp_path, rows="1,not-a-date,alice,research,,100,Parus major,,Aves\n")
    result = runner.invoke(app, ["run", str(config_path)])
    assert result.exit_code == 2
    assert "invalid date" in result.output


def test_run_reports_config_error(tmp_path: Path) -> None:
    good = _write_task(tmp_path)
    bad = tmp_path / "bad.toml"
    bad.write_text("modern_window = 0\n", encoding="utf-8")
    result = runner.invoke(app, ["run", str(good), str(bad)])
    assert result.exit_code == 5
    assert "bad.toml" in result.output


def test_run_rejects_unknown_format(tmp_path: Path) -> None:
    result = runner.invoke(app, ["run", str(_write_task(tmp_path)), "--format", "pdf"])
    assert result.exit_code == 3


def test_season_command() -> None:
    result = runner.invoke(app, ["season", "2023-03-01", "--first-month", "9", "--last-month", "8"])
    assert result.exit_code == 0
    assert result.stdout.strip() == "2022-2023"

    result = runner.invoke(app, ["season", "2023-03-01"])
    assert result.stdout.strip() == "2023"

    result = runner.invoke(app, ["season", "03/01/2023"])
    assert result.exit_code == 3


def test_default_modern_window_with_few_seasons_explains_fix(tmp_path: Path) -> None:
    (tmp_path / "young.csv").write_text(
        HEADER
        + """1,2022-05-01,alice,research,,100,Parus major,,Aves
2,2023-05-01,bob,research,,200,Turdus merula,,Aves
""",
        encoding="utf-8",
    )
    config_path = tmp_path / "young.toml"
    config_path.write_text('source = "young.csv"\n', encoding="utf-8")

    result = runner.invoke(app, ["run", str(config_path)])
    assert result.exit_code == 2
    assert "modern window of 3 season(s)" in result.output
    assert "set modern_window to at most 1" in result.output
