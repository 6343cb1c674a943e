"""Per-taxon aggregation of observations."""

from __future__ import annotations

from datetime import date
from typing import Dict, FrozenSet, Iterable, List, Optional, Set, Union

from .exceptions import TaxonMismatch
from .observation import Observation, iconic_rank


class Taxon:
    """All observations sharing one ``taxon_id``.

    Names are fill-forward: the first non-empty value seen is kept and later
    merges only fill gaps. Observations are deduplicated by ``external_id``.
    """

    def __init__(
        self,
        taxon_id: int,
        scientific_name: str = "",
        common_name: Optional[str] = None,
        iconic_taxon_group: str = "",
        observations: Iterable[Observation] = (),
    ):
        self.taxon_id = taxon_id
        self.scientific_name = scientific_name
        self.common_name = common_name
        self.iconic_taxon_group = iconic_taxon_group
        self._observations: Dict[str, Observation] = {}
        self._ordered: Optional[List[Observation]] = None
        for observation in observations:
            self.add(observation)

    @classmethod
    def from_item(cls, item: "TaxonItem") -> "Taxon":
        if isinstance(item, Taxon):
            return item.copy()
        if isinstance(item, Observation):
            taxon = cls(item.taxon_id)
            taxon.add(item)
            return taxon
        raise TypeError(f"cannot build a taxon from {type(item).__name__}")

    def add(self, item: "TaxonItem") -> None:
        """Merge an observation or another taxon into this one."""

        if isinstance(item, Observation):
            self._check_id(item.taxon_id)
            self._fill(item.scientific_name, item.common_name, item.iconic_taxon_group)
            self._add_observation(item)
        elif isinstance(item, Taxon):
            self._check_id(item.taxon_id)
            self._fill(item.scientific_name, item.common_name, item.iconic_taxon_group)
            for observation in item._observations.values():
                self._add_observation(observation)
        else:
            raise TypeError(f"cannot merge {type(item).__name__} into a taxon")

    def copy(self) -> "Taxon":
        clone = Taxon(
            self.taxon_id,
            scientific_name=self.scientific_name,
            common_name=self.common_name,
            iconic_taxon_group=self.iconic_taxon_group,
        )
        clone._observations = dict(self._observations)
        return clone

    @property
    def observations(self) -> List[Observation]:
        if self._ordered is None:
            self._ordered = sorted(
                self._observations.values(),
                key=lambda obs: (obs.observed_date, obs.external_id),
            )
        return list(self._ordered)

    def observation_ids(self) -> FrozenSet[str]:
        return frozenset(self._observations)

    @property
    def observation_count(self) -> int:
        return len(self._observations)

    @property
    def first_observed(self) -> Optional[date]:
        ordered = self.observations
        return ordered[0].observed_date if ordered else None

    @property
    def last_observed(self) -> Optional[date]:
        ordered = self.observations
        return ordered[-1].observed_date if ordered else None

    @property
    def observers(self) -> Set[str]:
        return {obs.observer_login for obs in self._observations.values()}

    @property
    def display_name(self) -> str:
        if self.common_name:
            return f"{self.common_name} ({self.scientific_name})"
        return self.scientific_name

    def sort_key(self) -> tuple:
        return (self.scientific_name, iconic_rank(self.iconic_taxon_group), self.taxon_id)

    def __contains__(self, observation: object) -> bool:
        if not isinstance(observation, Observation):
            return False
        return observation.external_id in self._observations

    def __len__(self) -> int:
        return len(self._observations)

    def __repr__(self) -> str:
        return (
            f"Taxon(taxon_id={self.taxon_id}, scientific_name={self.scientific_name!r}, "
            f"observations={len(self._observations)})"
        )

    def _check_id(self, taxon_id: int) -> None:
        if taxon_id != self.taxon_id:
            raise TaxonMismatch(self.taxon_id, taxon_id)

    def _fill(self, scientific_name: str, common_name: Optional[str], group: str) -> None:
        if not self.scientific_name and scientific_name:
            self.scientific_name = scientific_name
        if not self.common_name and common_name:
            self.common_name = common_name
        if not self.iconic_taxon_group and group:
            self.iconic_taxon_group = group

    def _add_observation(self, observation: Observation) -> None:
        if observation.external_id in self._observations:
            return
        self._observations[observation.external_id] = observation
        self._ordered = None


TaxonItem = Union[Observation, Taxon]
