"""Season-partitioned taxon collections and their temporal views."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from .collection import TaxonCollection
from .exceptions import InsufficientSeasons
from .observation import Observation


@dataclass(frozen=True)
class SeasonSummary:
    season: str
    observation_count: int
    taxon_count: int
    new_count: int


class SeasonedCollection:
    """Taxon collections keyed by season label.

    Season labels sort lexicographically in chronological order, so the last
    season is the greatest label. Derived views are cached until the next
    insert; callers receive copies, so changing a returned view leaves the
    cache intact.
    """

    def __init__(self, observations: Iterable[Observation] = ()):
        self._seasons: Dict[str, TaxonCollection] = {}
        self._cache: Dict[tuple, object] = {}
        for observation in observations:
            self.insert(observation)

    def insert(self, observation: Observation) -> None:
        bucket = self._seasons.get(observation.season)
        if bucket is None:
            bucket = TaxonCollection()
            self._seasons[observation.season] = bucket
        bucket.insert(observation)
        self._cache.clear()

    def seasons(self) -> List[str]:
        return sorted(self._seasons)

    @property
    def last_season(self) -> Optional[str]:
        return max(self._seasons) if self._seasons else None

    def union(self) -> TaxonCollection:
        return self._cached(("union",), lambda: _union(self._seasons.values()))

    def history(self) -> List[SeasonSummary]:
        """Per-season counts, with taxa not seen in any earlier season as new."""

        def compute() -> List[SeasonSummary]:
            summaries: List[SeasonSummary] = []
            seen = TaxonCollection()
            for label, bucket in self:
                new_taxa = bucket.difference(seen)
                summaries.append(
                    SeasonSummary(
                        season=label,
                        observation_count=bucket.observation_count,
                        taxon_count=bucket.taxon_count,
                        new_count=new_taxa.taxon_count,
                    )
                )
                seen.extend(new_taxa)
            return summaries

        return list(self._cached(("history",), compute))

    def news(self) -> TaxonCollection:
        """Taxa of the last season that no other season has."""

        def compute() -> TaxonCollection:
            last = self.last_season
            if last is None:
                return TaxonCollection()
            others = _union(bucket for label, bucket in self._seasons.items() if label != last)
            return self._seasons[last].difference(others)

        return self._cached(("news",), compute)

    def lost(self, modern_window: int) -> TaxonCollection:
        """Taxa seen in older seasons but not in the last *modern_window* seasons."""

        if modern_window < 1:
            raise ValueError(f"modern_window must be at least 1, got {modern_window}")
        labels = self.seasons()
        if modern_window >= len(labels):
            raise InsufficientSeasons(modern_window, len(labels))

        def compute() -> TaxonCollection:
            split = len(labels) - modern_window
            older = _union(self._seasons[label] for label in labels[:split])
            modern = _union(self._seasons[label] for label in labels[split:])
            return older.difference(modern)

        return self._cached(("lost", modern_window), compute)

    def singleton_taxa(self) -> TaxonCollection:
        """Taxa with exactly one observation across all seasons."""

        return self._cached(("ones",), lambda: self.union().with_observation_count(1))

    def __getitem__(self, season: str) -> TaxonCollection:
        return self._seasons[season]

    def __contains__(self, season: object) -> bool:
        return season in self._seasons

    def __iter__(self) -> Iterator[Tuple[str, TaxonCollection]]:
        for label in self.seasons():
            yield label, self._seasons[label]

    def __len__(self) -> int:
        return len(self._seasons)

    def _cached(self, key: tuple, compute):
        if key not in self._cache:
            self._cache[key] = compute()
        value = self._cache[key]
        if isinstance(value, TaxonCollection):
            return value.copy()
        return value


def _union(collections: Iterable[TaxonCollection]) -> TaxonCollection:
    result = TaxonCollection()
    for collection in collections:
        result.extend(collection)
    return result
