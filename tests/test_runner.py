"""Tests for running several tasks on a worker pool."""

from __future__ import annotations

import json
import threading
import time
from pathlib import Path

from inseason.core import InsufficientSeasons
from inseason.engine import ConsoleSink, run_tasks
from inseason.engine import runner as runner_module
from inseason.exceptions import ConfigError
from inseason.records import RecordFormatError


HEADER = "id,observed_on,user_login,quality_grade,url,taxon_id,scientific_name,common_name,iconic_taxon_name\n"


def _task(tmp_path: Path, name: str, body: str, *, output: str | None = None) -> Path:
    source = tmp_path / f"{name}.csv"
    source.write_text(HEADER + body, encoding="utf-8")
    lines = [f'source = "{source.name}"', "modern_window = 1", 'format = "json"']
    if output:
        lines.append(f'output = "{output}"')
    config_path = tmp_path / f"{name}.toml"
    config_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return config_path


ROWS = """1,2022-05-01,alice,research,,100,Parus major,,Aves
2,2023-05-01,alice,research,,200,Turdus merula,,Aves
"""


class SlowEcho:
    """Records writes and detects overlapping calls."""

    def __init__(self) -> None:
        self.writes: list[str] = []
        self.active = 0
        self.overlapped = False
        self._guard = threading.Lock()

    def __call__(self, text: str) -> None:
        with self._guard:
            self.active += 1
            if self.active > 1:
                self.overlapped = True
        time.sleep(0.01)
        self.writes.append(text)
        with self._guard:
            self.active -= 1


def test_parallel_tasks_write_whole_reports(tmp_path: Path) -> None:
    configs = [_task(tmp_path, f"site{index}", ROWS) for index in range(4)]
    echo = SlowEcho()
    outcomes = run_tasks(configs, console=ConsoleSink(echo), jobs=4)

    assert [outcome.config_path for outcome in outcomes] == configs
    assert all(outcome.ok for outcome in outcomes)
    assert not echo.overlapped
    assert len(echo.writes) == 4
    titles = sorted(json.loads(text)["title"] for text in echo.writes)
    assert titles == ["site0", "site1", "site2", "site3"]


def test_failure_does_not_block_siblings(tmp_path: Path) -> None:
    good = _task(tmp_path, "good", ROWS, output="out/good.json")
    one_season = _task(tmp_path, "short", "1,2022-05-01,alice,research,,100,Parus major,,Aves\n")
    bad_config = tmp_path / "bad.toml"
    bad_config.write_text("top_count = -1\n", encoding="utf-8")
    missing_source = tmp_path / "missing.toml"
    missing_source.write_text('source = "nowhere.csv"\n', encoding="utf-8")

    echo = SlowEcho()
    outcomes = run_tasks(
        [good, one_season, bad_config, missing_source],
        console=ConsoleSink(echo),
        jobs=2,
    )

    assert outcomes[0].ok
    assert outcomes[0].destination == tmp_path / "out" / "good.json"
    assert json.loads(outcomes[0].destination.read_text(encoding="utf-8"))["summary"]["taxa"] == 2
    assert isinstance(outcomes[1].error, InsufficientSeasons)
    assert isinstance(outcomes[2].error, ConfigError)
    assert isinstance(outcomes[3].error, RecordFormatError)
    assert echo.writes == []


def test_sequential_run_matches_parallel(tmp_path: Path) -> None:
    configs = [_task(tmp_path, "a", ROWS), _task(tmp_path, "b", ROWS)]
    sequential = SlowEcho()
    parallel = SlowEcho()
    run_tasks(configs, console=ConsoleSink(sequential), jobs=1)
    run_tasks(configs, console=ConsoleSink(parallel), jobs=2)
    assert sorted(sequential.writes) == sorted(parallel.writes)


def test_undecodable_export_does_not_block_siblings(tmp_path: Path) -> None:
    good = _task(tmp_path, "good", ROWS)
    latin = tmp_path / "latin.csv"
    latin.write_text(
        HEADER + "1,2023-05-01,alice,research,,41638,Ursus arctos,Braunbär,Mammalia\n",
        encoding="latin-1",
    )
    bad = tmp_path / "latin.toml"
    bad.write_text('source = "latin.csv"\nmodern_window = 1\n', encoding="utf-8")

    echo = SlowEcho()
    outcomes = run_tasks([good, bad], console=ConsoleSink(echo), jobs=2)

    assert outcomes[0].ok
    assert isinstance(outcomes[1].error, RecordFormatError)
    assert len(echo.writes) == 1


def test_unexpected_error_is_captured_per_task(tmp_path: Path, monkeypatch) -> None:
    good = _task(tmp_path, "good", ROWS)
    broken = _task(tmp_path, "broken", ROWS)
    real_run_task = runner_module.run_task

    def flaky_run_task(config_path: Path):
        if config_path.stem == "broken":
            raise RuntimeError("boom")
        return real_run_task(config_path)

    monkeypatch.setattr(runner_module, "run_task", flaky_run_task)
    echo = SlowEcho()
    outcomes = run_tasks([broken, good], console=ConsoleSink(echo), jobs=2)

    assert isinstance(outcomes[0].error, RuntimeError)
    assert outcomes[1].ok
    assert len(echo.writes) == 1
