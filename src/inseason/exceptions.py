"""Custom exception hierarchy for inseason."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence


class InseasonError(Exception):
    """Base error for the inseason package; the task runner reports these per task."""


class ConfigError(InseasonError):
    """Raised when a task configuration cannot be read or validated.

    ``problems`` lists one ``field: reason`` entry per invalid setting.
    """

    def __init__(self, path: Path, message: str, problems: Sequence[str] = ()):
        self.path = Path(path)
        self.message = message
        self.problems = list(problems)
        super().__init__(f"{self.path.name}: {message}")
