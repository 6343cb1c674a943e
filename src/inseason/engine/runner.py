"""Run several task configurations on a worker pool."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence

from ..exceptions import InseasonError
from ..renderers import render_report
from .report import TaskReport, run_task


logger = logging.getLogger(__name__)


class OutputError(InseasonError):
    """Raised when a rendered report cannot be written."""

    def __init__(self, path: Path, message: str):
        self.path = Path(path)
        super().__init__(f"{self.path}: {message}")


class ConsoleSink:
    """Serialises whole-task writes to one shared console stream."""

    def __init__(self, echo: Callable[[str], None]):
        self._echo = echo
        self._lock = threading.Lock()

    def write(self, text: str) -> None:
        with self._lock:
            self._echo(text)


@dataclass
class TaskOutcome:
    config_path: Path
    report: Optional[TaskReport] = None
    destination: Optional[Path] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def run_tasks(
    config_paths: Sequence[Path],
    *,
    console: ConsoleSink,
    jobs: int = 1,
    fmt: Optional[str] = None,
) -> List[TaskOutcome]:
    """Run every config and return outcomes in the order the paths were given.

    Each task builds and owns its collections. A failing task is logged and
    reported in its outcome; the other tasks still run.
    """

    paths = [Path(path) for path in config_paths]
    if jobs < 1:
        raise ValueError(f"jobs must be at least 1, got {jobs}")

    if jobs == 1 or len(paths) <= 1:
        return [execute_task(path, console=console, fmt=fmt) for path in paths]

    outcomes: Dict[int, TaskOutcome] = {}
    with ThreadPoolExecutor(max_workers=jobs) as executor:
        futures = {
            executor.submit(execute_task, path, console=console, fmt=fmt): index
            for index, path in enumerate(paths)
        }
        for future in as_completed(futures):
            outcomes[futures[future]] = future.result()
    return [outcomes[index] for index in range(len(paths))]


def execute_task(
    config_path: Path,
    *,
    console: ConsoleSink,
    fmt: Optional[str] = None,
) -> TaskOutcome:
    outcome = TaskOutcome(config_path=Path(config_path))
    try:
        report = run_task(outcome.config_path)
        outcome.report = report
        text = render_report(report, fmt or report.config.format)
        outcome.destination = _write(text, report.config.output, console)
    except InseasonError as exc:
        logger.error("task %s failed: %s", outcome.config_path, exc)
        outcome.error = exc
        return outcome
    except Exception as exc:
        logger.exception("task %s failed unexpectedly", outcome.config_path)
        outcome.error = exc
        return outcome

    logger.info("task %s finished", outcome.config_path)
    return outcome


def _write(text: str, destination: Optional[Path], console: ConsoleSink) -> Optional[Path]:
    if destination is None:
        console.write(text)
        return None
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise OutputError(destination, f"failed to write report: {exc}") from exc
    return destination
