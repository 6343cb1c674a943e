"""Public configuration API."""

from .loader import load_task_config
from .models import ComparisonSet, OutputFormat, PeriodConfig, TaskConfig

__all__ = [
    "ComparisonSet",
    "OutputFormat",
    "PeriodConfig",
    "TaskConfig",
    "load_task_config",
]
