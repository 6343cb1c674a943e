"""Season classification for observation dates."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date


def classify_season(when: date, first_month: int = 1, last_month: int = 12) -> str:
    """Return the season label for *when*.

    A period that fits inside one calendar year is labelled by the year
    (``"2023"``). A period spanning the new year is labelled by both years
    (``"2022-2023"``), starting in the year whose ``first_month`` opened it.
    Years are zero-padded so lexicographic order is chronological.
    """

    _check_month("first_month", first_month)
    _check_month("last_month", last_month)
    if first_month <= last_month:
        return f"{when.year:04d}"
    start = when.year if when.month >= first_month else when.year - 1
    return f"{start:04d}-{start + 1:04d}"


def _check_month(name: str, value: int) -> None:
    if not 1 <= value <= 12:
        raise ValueError(f"{name} must be between 1 and 12, got {value}")


@dataclass(frozen=True)
class SeasonPeriod:
    first_month: int = 1
    last_month: int = 12

    def __post_init__(self) -> None:
        _check_month("first_month", self.first_month)
        _check_month("last_month", self.last_month)

    @property
    def spans_new_year(self) -> bool:
        return self.first_month > self.last_month

    def classify(self, when: date) -> str:
        return classify_season(when, self.first_month, self.last_month)
