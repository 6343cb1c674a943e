"""Observer-partitioned taxon collections and contributor ranking."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List

from .collection import TaxonCollection
from .observation import Observation


@dataclass(frozen=True)
class ObserverRank:
    login: str
    taxon_count: int
    observation_count: int


class ObserverCollection:
    """Taxon collections keyed by observer login."""

    def __init__(self, observations: Iterable[Observation] = ()):
        self._observers: Dict[str, TaxonCollection] = {}
        for observation in observations:
            self.insert(observation)

    def insert(self, observation: Observation) -> None:
        bucket = self._observers.get(observation.observer_login)
        if bucket is None:
            bucket = TaxonCollection()
            self._observers[observation.observer_login] = bucket
        bucket.insert(observation)

    def top(self, min_taxon_count: int, limit: int) -> List[ObserverRank]:
        """Observers with at least *min_taxon_count* taxa, most taxa first.

        Ties on taxon count are broken by login so the ranking does not
        depend on insertion order.
        """

        if limit < 0:
            raise ValueError(f"limit must not be negative, got {limit}")
        ranks = [
            ObserverRank(
                login=login,
                taxon_count=bucket.taxon_count,
                observation_count=bucket.observation_count,
            )
            for login, bucket in self._observers.items()
            if bucket.taxon_count >= min_taxon_count
        ]
        ranks.sort(key=lambda rank: (-rank.taxon_count, rank.login))
        return ranks[:limit]

    def logins(self) -> List[str]:
        return sorted(self._observers)

    def __getitem__(self, login: str) -> TaxonCollection:
        return self._observers[login]

    def __contains__(self, login: object) -> bool:
        return login in self._observers

    def __iter__(self) -> Iterator[str]:
        return iter(self.logins())

    def __len__(self) -> int:
        return len(self._observers)
