"""Build comparative season reports for one task configuration."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from ..config import TaskConfig, load_task_config
from ..core import (
    Observation,
    ObserverCollection,
    ObserverRank,
    QualityGrade,
    SeasonedCollection,
    SeasonPeriod,
    SeasonSummary,
    Taxon,
    TaxonCollection,
)
from ..records import ObservationRow, load_observations


logger = logging.getLogger(__name__)


@dataclass
class RecordSet:
    """Collections built from one observation export."""

    name: str
    seasons: SeasonedCollection = field(default_factory=SeasonedCollection)
    needs_id: TaxonCollection = field(default_factory=TaxonCollection)
    observers: ObserverCollection = field(default_factory=ObserverCollection)
    row_count: int = 0
    ignored_count: int = 0
    duplicate_count: int = 0

    @property
    def taxa(self) -> TaxonCollection:
        return self.seasons.union()


@dataclass
class Comparison:
    name: str
    unique: TaxonCollection
    wanted: TaxonCollection
    common: TaxonCollection

    @classmethod
    def between(cls, primary: RecordSet, other: RecordSet) -> "Comparison":
        ours = primary.taxa
        theirs = other.taxa
        return cls(
            name=other.name,
            unique=ours.difference(theirs),
            wanted=theirs.difference(ours),
            common=ours.intersection(theirs),
        )


@dataclass
class TaskReport:
    title: str
    config_path: Optional[Path]
    config: TaskConfig
    primary: RecordSet
    history: List[SeasonSummary]
    news: TaxonCollection
    lost: TaxonCollection
    singletons: TaxonCollection
    needs_id_only: TaxonCollection
    top_observers: List[ObserverRank]
    comparisons: List[Comparison] = field(default_factory=list)

    @property
    def last_season(self) -> Optional[str]:
        return self.primary.seasons.last_season

    def as_dict(self) -> dict:
        taxa = self.primary.taxa
        return {
            "title": self.title,
            "config_path": str(self.config_path) if self.config_path else None,
            "summary": {
                "rows": self.primary.row_count,
                "ignored_rows": self.primary.ignored_count,
                "duplicate_rows": self.primary.duplicate_count,
                "taxa": taxa.taxon_count,
                "observations": taxa.observation_count,
                "seasons": len(self.primary.seasons),
                "last_season": self.last_season,
            },
            "history": [
                {
                    "season": entry.season,
                    "observations": entry.observation_count,
                    "taxa": entry.taxon_count,
                    "new": entry.new_count,
                }
                for entry in self.history
            ],
            "news": _taxa_payload(self.news),
            "lost": {
                "modern_window": self.config.modern_window,
                "taxa": _taxa_payload(self.lost),
            },
            "singletons": _taxa_payload(self.singletons),
            "needs_id_only": _taxa_payload(self.needs_id_only),
            "top_observers": [
                {
                    "login": rank.login,
                    "taxa": rank.taxon_count,
                    "observations": rank.observation_count,
                }
                for rank in self.top_observers
            ],
            "comparisons": [
                {
                    "name": comparison.name,
                    "unique": _taxa_payload(comparison.unique),
                    "wanted": _taxa_payload(comparison.wanted),
                    "common": len(comparison.common),
                }
                for comparison in self.comparisons
            ],
        }


def build_record_set(
    name: str,
    rows: Iterable[ObservationRow],
    period: SeasonPeriod,
) -> RecordSet:
    """Route rows into collections: research grade everywhere, needs-id aside.

    The first row for an ``external_id`` wins; later rows with the same id
    are counted as duplicates and skipped, whatever taxon they name.
    """

    record_set = RecordSet(name=name)
    seen_ids: set[str] = set()
    for row in rows:
        record_set.row_count += 1
        grade = QualityGrade.parse(row.quality_grade)
        if grade is QualityGrade.OTHER or row.taxon_id is None:
            record_set.ignored_count += 1
            continue
        if row.external_id in seen_ids:
            record_set.duplicate_count += 1
            logger.debug("%s: duplicate observation %s at row %d", name, row.external_id, row.row_number)
            continue
        seen_ids.add(row.external_id)

        observation = Observation.from_row(row, period)
        if grade is QualityGrade.RESEARCH:
            record_set.seasons.insert(observation)
            record_set.observers.insert(observation)
        else:
            record_set.needs_id.insert(observation)
    return record_set


def build_report(config: TaskConfig, config_path: Optional[Path] = None) -> TaskReport:
    """Compute every derived view for *config*. Paths must already be resolved."""

    period = SeasonPeriod(config.period.first_month, config.period.last_month)
    title = config.title or (config_path.stem if config_path else config.source.stem)

    primary = build_record_set(title, load_observations(config.source), period)
    logger.info(
        "%s: %d taxa over %d season(s)",
        title,
        primary.taxa.taxon_count,
        len(primary.seasons),
    )

    comparisons: List[Comparison] = []
    for entry in config.comparison_sets:
        other = build_record_set(entry.name, load_observations(entry.source), period)
        comparisons.append(Comparison.between(primary, other))

    return TaskReport(
        title=title,
        config_path=config_path,
        config=config,
        primary=primary,
        history=primary.seasons.history(),
        news=primary.seasons.news(),
        lost=primary.seasons.lost(config.modern_window),
        singletons=primary.seasons.singleton_taxa(),
        needs_id_only=primary.needs_id.difference(primary.taxa),
        top_observers=primary.observers.top(config.top_min_taxa, config.top_count),
        comparisons=comparisons,
    )


def run_task(config_path: Path) -> TaskReport:
    config_path = Path(config_path)
    config = load_task_config(config_path)
    return build_report(config, config_path)


def _taxa_payload(collection: TaxonCollection) -> List[Dict[str, object]]:
    return [_taxon_payload(taxon) for taxon in collection]


def _taxon_payload(taxon: Taxon) -> Dict[str, object]:
    first = taxon.first_observed
    last = taxon.last_observed
    return {
        "taxon_id": taxon.taxon_id,
        "scientific_name": taxon.scientific_name,
        "common_name": taxon.common_name,
        "iconic_taxon_group": taxon.iconic_taxon_group,
        "observations": taxon.observation_count,
        "first_observed": first.isoformat() if first else None,
        "last_observed": last.isoformat() if last else None,
    }
