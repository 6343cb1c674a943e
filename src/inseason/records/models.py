"""Data models for observation record sets."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Optional


@dataclass
class ObservationRow:
    row_number: int
    external_id: str
    observed_date: date
    quality_grade: str
    observer_login: str
    taxon_id: Optional[int]
    scientific_name: str
    common_name: Optional[str] = None
    iconic_taxon_group: str = ""
    external_url: str = ""
    raw: Dict[str, str] = field(default_factory=dict)
