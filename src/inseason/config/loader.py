"""Reading task configuration files."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List

try:  # Python 3.11+
    import tomllib
except ModuleNotFoundError:  # pragma: no cover
    import tomli as tomllib  # type: ignore

from pydantic import ValidationError

from ..exceptions import ConfigError
from .models import TaskConfig


def load_task_config(path: Path) -> TaskConfig:
    """Load the task configuration at *path* with paths resolved against it."""

    path = Path(path)
    data = _read_toml(path)
    try:
        config = TaskConfig.model_validate(data)
    except ValidationError as exc:
        problems = describe_problems(exc)
        raise ConfigError(path, "; ".join(problems), problems) from exc
    return config.resolve(path)


def describe_problems(error: ValidationError) -> List[str]:
    """One ``dotted.field[index]: reason`` line per pydantic error."""

    problems = []
    for err in error.errors(include_context=False):
        field = _dotted(err.get("loc", ()))
        reason = err.get("msg", "invalid value")
        problems.append(f"{field}: {reason}" if field else reason)
    return problems


def _read_toml(path: Path) -> Dict[str, Any]:
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise ConfigError(path, "file not found") from exc
    except (tomllib.TOMLDecodeError, UnicodeDecodeError, OSError) as exc:
        raise ConfigError(path, f"failed to read TOML: {exc}") from exc


def _dotted(loc: tuple[Any, ...]) -> str:
    text = ""
    for part in loc:
        if isinstance(part, int):
            text += f"[{part}]"
        else:
            text += f".{part}" if text else str(part)
    return text
