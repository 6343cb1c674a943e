"""Report building and task orchestration."""

from .report import (
    Comparison,
    RecordSet,
    TaskReport,
    build_record_set,
    build_report,
    run_task,
)
from .runner import ConsoleSink, OutputError, TaskOutcome, execute_task, run_tasks

__all__ = [
    "Comparison",
    "ConsoleSink",
    "OutputError",
    "RecordSet",
    "TaskOutcome",
    "TaskReport",
    "build_record_set",
    "build_report",
    "execute_task",
    "run_task",
    "run_tasks",
]
