"""Tests for per-taxon aggregation."""

from __future__ import annotations

from datetime import date

import pytest

from inseason.core import Taxon, TaxonMismatch

from helpers import make_observation


def test_same_observation_twice_counts_once() -> None:
    taxon = Taxon(10)
    first = make_observation("obs-1", 10)
    taxon.add(first)
    taxon.add(make_observation("obs-1", 10, observer="someone-else"))
    assert taxon.observation_count == 1
    assert first in taxon


def test_names_fill_forward() -> None:
    taxon = Taxon.from_item(make_observation("1", 10, name="Parus major", common_name=None))
    taxon.add(make_observation("2", 10, name="Parus major", common_name="Great Tit"))
    taxon.add(make_observation("3", 10, name="Parus major", common_name="Kohlmeise"))
    taxon.add(make_observation("4", 10, name="", common_name=None, group=""))
    assert taxon.common_name == "Great Tit"
    assert taxon.scientific_name == "Parus major"
    assert taxon.iconic_taxon_group == "Aves"
    assert taxon.display_name == "Great Tit (Parus major)"


def test_mismatched_taxon_rejected() -> None:
    taxon = Taxon(10)
    with pytest.raises(TaxonMismatch):
        taxon.add(make_observation("1", 11))
    with pytest.raises(TaxonMismatch):
        taxon.add(Taxon(12))
    assert taxon.observation_count == 0


def test_observations_ordered_by_date() -> None:
    taxon = Taxon(10)
    taxon.add(make_observation("b", 10, when=date(2023, 6, 1)))
    taxon.add(make_observation("a", 10, when=date(2021, 1, 1)))
    taxon.add(make_observation("c", 10, when=date(2022, 3, 1), observer="bob"))
    assert [obs.external_id for obs in taxon.observations] == ["a", "c", "b"]
    assert taxon.first_observed == date(2021, 1, 1)
    assert taxon.last_observed == date(2023, 6, 1)
    assert taxon.observers == {"alice", "bob"}


def test_merge_taxa_dedups_and_copy_is_independent() -> None:
    left = Taxon(10, observations=[make_observation("1", 10), make_observation("2", 10)])
    right = Taxon(10, observations=[make_observation("2", 10), make_observation("3", 10)])
    clone = left.copy()
    left.add(right)
    assert left.observation_ids() == {"1", "2", "3"}
    assert clone.observation_ids() == {"1", "2"}


def test_unsupported_item_rejected() -> None:
    with pytest.raises(TypeError):
        Taxon(10).add("not an observation")  # type: ignore[arg-type]
