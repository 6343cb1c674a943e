"""In-memory aggregation of observations by taxon, season and observer."""

from .collection import TaxonCollection
from .exceptions import CoreError, InsufficientSeasons, InvalidKey, TaxonMismatch
from .observation import (
    OTHER_GROUP_RANK,
    IconicGroup,
    Observation,
    QualityGrade,
    iconic_rank,
)
from .observers import ObserverCollection, ObserverRank
from .season import SeasonPeriod, classify_season
from .seasons import SeasonedCollection, SeasonSummary
from .taxon import Taxon, TaxonItem

__all__ = [
    "CoreError",
    "IconicGroup",
    "InsufficientSeasons",
    "InvalidKey",
    "OTHER_GROUP_RANK",
    "Observation",
    "ObserverCollection",
    "ObserverRank",
    "QualityGrade",
    "SeasonPeriod",
    "SeasonSummary",
    "SeasonedCollection",
    "Taxon",
    "TaxonCollection",
    "TaxonItem",
    "TaxonMismatch",
    "classify_season",
    "iconic_rank",
]
