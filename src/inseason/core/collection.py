"""Taxon-keyed collections with merge and set-difference semantics."""

from __future__ import annotations

from typing import Callable, Dict, Iterable, Iterator, List, Optional, Set

from .exceptions import InvalidKey
from .observation import Observation
from .taxon import Taxon, TaxonItem


class TaxonCollection:
    """Mapping from ``taxon_id`` to :class:`Taxon`, one entry per taxon.

    Lookups accept a taxon id, an :class:`Observation` or a :class:`Taxon`.
    Iteration follows display order: scientific name, then iconic group rank.
    Derived collections (``merge``, ``difference`` ...) hold copies of the
    source taxa, so neither operand is mutated.
    """

    def __init__(self, items: Iterable[TaxonItem] = ()):
        self._taxa: Dict[int, Taxon] = {}
        self.extend(items)

    def insert(self, item: TaxonItem) -> Taxon:
        """Insert an observation or taxon, merging into an existing entry."""

        if isinstance(item, (Observation, Taxon)):
            taxon_id = item.taxon_id
        else:
            raise TypeError(f"cannot insert {type(item).__name__} into a taxon collection")

        existing = self._taxa.get(taxon_id)
        if existing is None:
            existing = Taxon.from_item(item)
            self._taxa[taxon_id] = existing
        else:
            existing.add(item)
        return existing

    def extend(self, items: Iterable[TaxonItem]) -> None:
        for item in items:
            self.insert(item)

    def merge(self, other: "TaxonCollection") -> "TaxonCollection":
        result = self.copy()
        for taxon in other._taxa.values():
            result.insert(taxon)
        return result

    def difference(self, other: "TaxonCollection") -> "TaxonCollection":
        """Taxa of this collection whose id is absent from *other*."""

        return self.filter(lambda taxon: taxon.taxon_id not in other._taxa)

    def intersection(self, other: "TaxonCollection") -> "TaxonCollection":
        """Taxa present in both collections, observations merged."""

        result = TaxonCollection()
        for taxon_id, taxon in self._taxa.items():
            match = other._taxa.get(taxon_id)
            if match is None:
                continue
            merged = result.insert(taxon)
            merged.add(match)
        return result

    def filter(self, predicate: Callable[[Taxon], bool]) -> "TaxonCollection":
        return TaxonCollection(taxon for taxon in self._taxa.values() if predicate(taxon))

    def with_observation_count(self, count: int) -> "TaxonCollection":
        return self.filter(lambda taxon: taxon.observation_count == count)

    def copy(self) -> "TaxonCollection":
        return TaxonCollection(self._taxa.values())

    def get(self, key: object, default: Optional[Taxon] = None) -> Optional[Taxon]:
        return self._taxa.get(_resolve_key(key), default)

    def taxon_ids(self) -> Set[int]:
        return set(self._taxa)

    @property
    def taxon_count(self) -> int:
        return len(self._taxa)

    @property
    def observation_count(self) -> int:
        return sum(taxon.observation_count for taxon in self._taxa.values())

    def sorted(self) -> List[Taxon]:
        return sorted(self._taxa.values(), key=Taxon.sort_key)

    def __getitem__(self, key: object) -> Taxon:
        return self._taxa[_resolve_key(key)]

    def __contains__(self, key: object) -> bool:
        return _resolve_key(key) in self._taxa

    def __iter__(self) -> Iterator[Taxon]:
        return iter(self.sorted())

    def __len__(self) -> int:
        return len(self._taxa)

    def __bool__(self) -> bool:
        return bool(self._taxa)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TaxonCollection):
            return NotImplemented
        if self._taxa.keys() != other._taxa.keys():
            return False
        return all(
            taxon.observation_ids() == other._taxa[taxon_id].observation_ids()
            for taxon_id, taxon in self._taxa.items()
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"TaxonCollection(taxa={self.taxon_count}, observations={self.observation_count})"


def _resolve_key(key: object) -> int:
    if isinstance(key, (Observation, Taxon)):
        return key.taxon_id
    if isinstance(key, int) and not isinstance(key, bool):
        return key
    raise InvalidKey(key)
