"""Observation value records and taxonomic display order."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional

from ..records.loader import normalize_grade
from ..records.models import ObservationRow
from .season import SeasonPeriod


class QualityGrade(str, Enum):
    RESEARCH = "research"
    NEEDS_ID = "needs_id"
    OTHER = "other"

    @classmethod
    def parse(cls, value: str) -> "QualityGrade":
        normalized = normalize_grade(value)
        if normalized == cls.RESEARCH.value:
            return cls.RESEARCH
        if normalized == cls.NEEDS_ID.value:
            return cls.NEEDS_ID
        return cls.OTHER


class IconicGroup(str, Enum):
    """Known iconic taxon groups, declared in display order."""

    AVES = "Aves"
    AMPHIBIA = "Amphibia"
    REPTILIA = "Reptilia"
    MAMMALIA = "Mammalia"
    ACTINOPTERYGII = "Actinopterygii"
    MOLLUSCA = "Mollusca"
    ARACHNIDA = "Arachnida"
    INSECTA = "Insecta"
    PLANTAE = "Plantae"
    FUNGI = "Fungi"
    PROTOZOA = "Protozoa"
    UNKNOWN = "Unknown"


_GROUP_RANKS = {group.value.lower(): rank for rank, group in enumerate(IconicGroup)}

# Groups outside the table (Chromista, Animalia, ...) sort after every known group.
OTHER_GROUP_RANK = len(_GROUP_RANKS)


def iconic_rank(name: Optional[str]) -> int:
    key = (name or "").strip().lower() or IconicGroup.UNKNOWN.value.lower()
    return _GROUP_RANKS.get(key, OTHER_GROUP_RANK)


@dataclass(frozen=True, eq=False)
class Observation:
    """One sighting of one taxon.

    Identity is the source record id: two observations with the same
    ``external_id`` are the same sighting regardless of their other fields.
    """

    external_id: str
    taxon_id: int
    scientific_name: str
    observer_login: str
    observed_date: date
    quality_grade: QualityGrade
    season: str
    common_name: Optional[str] = None
    iconic_taxon_group: str = ""
    external_url: str = ""

    @classmethod
    def from_row(cls, row: ObservationRow, period: SeasonPeriod) -> "Observation":
        if row.taxon_id is None:
            raise ValueError(f"row {row.row_number} has no taxon id")
        return cls(
            external_id=row.external_id,
            taxon_id=row.taxon_id,
            scientific_name=row.scientific_name,
            observer_login=row.observer_login,
            observed_date=row.observed_date,
            quality_grade=QualityGrade.parse(row.quality_grade),
            season=period.classify(row.observed_date),
            common_name=row.common_name,
            iconic_taxon_group=row.iconic_taxon_group,
            external_url=row.external_url,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Observation):
            return NotImplemented
        return self.external_id == other.external_id

    def __hash__(self) -> int:
        return hash(self.external_id)
