"""Pydantic models describing task configuration files."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field, model_validator


OutputFormat = Literal["markdown", "html", "json"]


class PeriodConfig(BaseModel):
    first_month: int = Field(default=1, ge=1, le=12)
    last_month: int = Field(default=12, ge=1, le=12)


class ComparisonSet(BaseModel):
    name: str
    source: Path

    @model_validator(mode="after")
    def ensure_name(self) -> "ComparisonSet":
        if not self.name.strip():
            raise ValueError("name must not be empty")
        return self


class TaskConfig(BaseModel):
    title: Optional[str] = None
    source: Path
    period: PeriodConfig = Field(default_factory=PeriodConfig)
    top_count: int = Field(default=10, ge=0)
    top_min_taxa: int = Field(default=10, ge=0)
    modern_window: int = Field(default=3, ge=1)
    comparison_sets: List[ComparisonSet] = Field(default_factory=list)
    output: Optional[Path] = None
    format: OutputFormat = "markdown"

    @model_validator(mode="after")
    def ensure_unique_comparisons(self) -> "TaskConfig":
        seen: Dict[str, ComparisonSet] = {}
        for idx, entry in enumerate(self.comparison_sets):
            if entry.name in seen:
                raise ValueError(
                    f"comparison_sets[{idx}].name duplicates comparison set {entry.name}"
                )
            seen[entry.name] = entry
        return self

    def resolve(self, config_path: Path) -> "TaskConfig":
        """Return a copy with relative paths anchored at *config_path*'s directory."""

        config_path = Path(config_path)
        base = config_path.parent

        def anchor(path: Path) -> Path:
            return path if path.is_absolute() else base / path

        return self.model_copy(
            update={
                "title": self.title or config_path.stem,
                "source": anchor(self.source),
                "output": anchor(self.output) if self.output is not None else None,
                "comparison_sets": [
                    entry.model_copy(update={"source": anchor(entry.source)})
                    for entry in self.comparison_sets
                ],
            }
        )
