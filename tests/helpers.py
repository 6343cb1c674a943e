"""Shared builders for core tests."""

from __future__ import annotations

from datetime import date
from typing import Optional

from inseason.core import Observation, QualityGrade, classify_season


def make_observation(
    external_id: str,
    taxon_id: int,
    *,
    name: Optional[str] = None,
    observer: str = "alice",
    when: date = date(2023, 5, 1),
    common_name: Optional[str] = None,
    group: str = "Aves",
    grade: QualityGrade = QualityGrade.RESEARCH,
) -> Observation:
    return Observation(
        external_id=external_id,
        taxon_id=taxon_id,
        scientific_name=name if name is not None else f"Taxon {taxon_id}",
        observer_login=observer,
        observed_date=when,
        quality_grade=grade,
        season=classify_season(when),
        common_name=common_name,
        iconic_taxon_group=group,
        external_url=f"https://www.inaturalist.org/observations/{external_id}",
    )
