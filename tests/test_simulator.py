"""Tests for the synthetic record generator."""

from __future__ import annotations

from pathlib import Path

import pytest  # type: ignore

from pmflow.exceptions import SimulationError
from pmflow.simulate.simulator import load_name_corpus, simulate_records


def test_corpus_respects_threshold() -> None:
    names = load_name_corpus()
    assert "John" in names
    assert "Mary" in names
    # Below the 0.01 share in the bundled corpus
    assert "Albert" not in names
    assert len(names) == len(set(names))


def test_corpus_from_custom_file(tmp_path: Path) -> None:
    corpus = tmp_path / "names.csv"
    corpus.write_text("name,sex,prop\nAda,F,0.5\nAda,M,0.2\nBob,M,0.001\n", encoding="utf-8")
    assert load_name_corpus(str(corpus)) == ["Ada"]
    assert load_name_corpus(str(corpus), min_prop=0.0001) == ["Ada", "Bob"]


def test_same_seed_same_records() -> None:
    assert simulate_records(10, seed=853) == simulate_records(10, seed=853)


def test_seeds_do_not_interfere() -> None:
    first = simulate_records(10, seed=1)
    other = simulate_records(10, seed=2)
    again = simulate_records(10, seed=1)
    assert first == again
    assert first != other


def test_record_shape() -> None:
    records = simulate_records(10, seed=853)
    assert len(records) == 10
    assert len({r.name for r in records}) == 10
    for record in records:
        assert 1800 <= record.born <= 1950
        assert 60 <= record.age_at_death <= 100
        assert record.died == record.born + record.age_at_death
    assert [r.born for r in records] == sorted(r.born for r in records)


def test_custom_names_and_ranges() -> None:
    records = simulate_records(
        3, seed=7, names=["Ann", "Ben", "Cal"], born_range=(1900, 1900), lifespan_range=(70, 70)
    )
    assert sorted(r.name for r in records) == ["Ann", "Ben", "Cal"]
    assert all(r.born == 1900 and r.died == 1970 for r in records)


def test_too_many_names() -> None:
    with pytest.raises(SimulationError):
        simulate_records(4, names=["Ann", "Ben", "Cal"])


def test_zero_records() -> None:
    assert simulate_records(0, names=["Ann"]) == []


def test_negative_count() -> None:
    with pytest.raises(ValueError):
        simulate_records(-1, names=["Ann"])
