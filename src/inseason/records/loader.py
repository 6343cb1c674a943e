"""Normalization of iNaturalist CSV exports into observation rows."""

from __future__ import annotations

import csv
import logging
from datetime import date
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from .exceptions import MalformedDate, RecordDataError, RecordFormatError
from .models import ObservationRow


logger = logging.getLogger(__name__)


REQUIRED_COLUMNS = [
    "id",
    "observed_on",
    "quality_grade",
    "taxon_id",
    "scientific_name",
    "user_login",
]

# Grades whose rows must carry a usable taxon.
IDENTIFIED_GRADES = {"research", "needs_id"}


def load_observations(path: Path) -> List[ObservationRow]:
    """Load and normalize observation rows from the CSV export at *path*."""

    path = Path(path)
    if not path.is_file():
        raise RecordFormatError(path=path, message="observation export not found")

    rows: List[ObservationRow] = []
    row_number = 1
    try:
        with path.open("r", newline="", encoding="utf-8-sig") as fh:
            reader = csv.DictReader(fh)
            if reader.fieldnames is None:
                raise RecordFormatError(path=path, message="missing header row")
            _validate_required_columns(path, reader.fieldnames)
            for raw in reader:
                row_number += 1  # row numbers include header
                rows.append(_normalize_row(path=path, row_number=row_number, raw=raw))
    except UnicodeDecodeError as exc:
        raise RecordFormatError(
            path=path,
            row=row_number + 1,
            message=f"not UTF-8 encoded ({exc.reason} at byte {exc.start})",
        ) from exc
    except csv.Error as exc:
        raise RecordFormatError(path=path, row=row_number + 1, message=f"malformed CSV ({exc})") from exc

    logger.info("loaded %d observation rows from %s", len(rows), path)
    return rows


def normalize_grade(value: Optional[str]) -> str:
    """Lower-case a quality grade, spelling ``needs-id`` as ``needs_id``."""

    return (value or "").strip().lower().replace("-", "_")


def parse_observed_on(value: str) -> date:
    """Parse an ``observed_on`` value, accepting a trailing time part."""

    text = value.strip()
    if " " in text:
        text = text.split(" ", 1)[0]
    elif "T" in text:
        text = text.split("T", 1)[0]
    return date.fromisoformat(text)


def _validate_required_columns(path: Path, columns: Iterable[str]) -> None:
    missing = [column for column in REQUIRED_COLUMNS if column not in columns]
    if missing:
        raise RecordFormatError(
            path=path,
            message=f"missing required columns: {', '.join(missing)}",
        )


def _normalize_row(path: Path, row_number: int, raw: Dict[str, str]) -> ObservationRow:
    def require(field: str) -> str:
        value = (raw.get(field) or "").strip()
        if value == "":
            raise RecordDataError(path=path, row=row_number, column=field, message="value required")
        return value

    def optional(field: str) -> str:
        return (raw.get(field) or "").strip()

    external_id = require("id")
    date_value = require("observed_on")
    try:
        observed_date = parse_observed_on(date_value)
    except ValueError as exc:
        raise MalformedDate(path=path, row=row_number, value=date_value) from exc

    grade = normalize_grade(optional("quality_grade"))
    taxon_id = _parse_taxon_id(path, row_number, optional("taxon_id"), grade)
    scientific_name = optional("scientific_name")
    if grade in IDENTIFIED_GRADES and scientific_name == "":
        raise RecordDataError(
            path=path,
            row=row_number,
            column="scientific_name",
            message="value required",
        )

    return ObservationRow(
        row_number=row_number,
        external_id=external_id,
        observed_date=observed_date,
        quality_grade=grade,
        observer_login=optional("user_login"),
        taxon_id=taxon_id,
        scientific_name=scientific_name,
        common_name=optional("common_name") or None,
        iconic_taxon_group=optional("iconic_taxon_name"),
        external_url=optional("url"),
        raw={key: (value or "") for key, value in raw.items() if key is not None},
    )


def _parse_taxon_id(path: Path, row: int, value: str, grade: str) -> Optional[int]:
    if value == "":
        if grade in IDENTIFIED_GRADES:
            raise RecordDataError(path=path, row=row, column="taxon_id", message="value required")
        return None
    try:
        return int(value)
    except ValueError as exc:
        if grade not in IDENTIFIED_GRADES:
            return None
        raise RecordDataError(
            path=path,
            row=row,
            column="taxon_id",
            message=f"invalid integer '{value}'",
        ) from exc
