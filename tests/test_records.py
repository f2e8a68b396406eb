"""Tests for the record normalizer.

Covers year coercion, age at death, duplicate handling and the
isolation of malformed rows.
"""

from __future__ import annotations

import logging

import pytest  # type: ignore

from pmflow.exceptions import CoercionError, DuplicateConflict, ExtractionAmbiguity
from pmflow.normalize.extract_fields import extract_fields
from pmflow.normalize.records import (
    deduplicate,
    normalize_cells,
    normalize_records,
    to_record,
)
from pmflow.normalize.schema import ExtractedFields, PersonRecord


def test_end_to_end_alive() -> None:
    result = normalize_cells(["John Howard(b. 1939)Bennelong"])
    assert result.records == [PersonRecord(name="John Howard", born=1939)]
    record = result.records[0]
    assert record.died is None
    assert record.age_at_death is None
    assert record.is_alive


def test_end_to_end_deceased() -> None:
    result = normalize_cells(["John Gorton(1911–2002)Higgins"])
    record = result.records[0]
    assert record.name == "John Gorton"
    assert record.born == 1911
    assert record.died == 2002
    assert record.age_at_death == 91
    assert not record.is_alive


@pytest.mark.parametrize(
    "cell",
    [
        "Edmund Barton(1849–1920)MP for Hunter",
        "Harold Holt(1908–1967)MP for Higgins",
        "Joseph Cook(1860–1947)MP for Parramatta",
    ],
)
def test_age_matches_years(cell: str) -> None:
    record = to_record(extract_fields(cell))
    assert record.died - record.born == record.age_at_death


def test_zero_lifespan() -> None:
    record = to_record(ExtractedFields(name="Brief", date_range="1900–1900"))
    assert record.age_at_death == 0


def test_alive_marker_prefix_is_stripped() -> None:
    record = to_record(ExtractedFields(name="Marked", born_if_alive="b. 1939"))
    assert record.born == 1939
    assert record.died is None


def test_missing_dates_raise_ambiguity() -> None:
    with pytest.raises(ExtractionAmbiguity) as info:
        to_record(extract_fields("Unknown person(dates unknown)"))
    assert info.value.text == "Unknown person(dates unknown)"


def test_non_numeric_birth_is_coercion_error() -> None:
    with pytest.raises(CoercionError):
        to_record(ExtractedFields(name="Garbled", born_if_alive="19x9"))


def test_death_before_birth_is_coercion_error() -> None:
    with pytest.raises(CoercionError):
        to_record(ExtractedFields(name="Backwards", date_range="1950–1900"))


def test_non_numeric_death_is_absent() -> None:
    record = to_record(ExtractedFields(name="Half", date_range="1900–19xx"))
    assert record.born == 1900
    assert record.died is None
    assert record.age_at_death is None


def test_person_record_validation() -> None:
    with pytest.raises(CoercionError):
        PersonRecord(name="Short", born=999)
    with pytest.raises(CoercionError):
        PersonRecord(name="Text", born="1939")  # type: ignore[arg-type]
    assert PersonRecord(name="Ok", born=1911, died=2002).age_at_death == 91


def test_identical_cells_collapse() -> None:
    cell = "Alfred Deakin(1856–1919)MP for Ballarat"
    result = normalize_cells([cell, "John Howard(b. 1939)Bennelong", cell])
    assert [r.name for r in result.records] == ["Alfred Deakin", "John Howard"]
    assert result.conflicts == []


def test_conflicting_values_are_reported(caplog: pytest.LogCaptureFixture) -> None:
    cells = [
        "Alfred Deakin(1856–1919)MP for Ballarat",
        "Alfred Deakin(1856–1920)MP for Ballarat",
    ]
    with caplog.at_level(logging.WARNING, logger="pmflow.normalize.records"):
        result = normalize_cells(cells)
    assert len(result.records) == 2
    assert len(result.conflicts) == 1
    conflict = result.conflicts[0]
    assert isinstance(conflict, DuplicateConflict)
    assert conflict.name == "Alfred Deakin"
    assert {r.died for r in conflict.variants} == {1919, 1920}
    assert "Alfred Deakin" in caplog.text


def test_row_errors_are_isolated() -> None:
    cells = [
        "John Gorton(1911–2002)Higgins",
        "Unknown person(dates unknown)",
        "Backwards(1950–1900)Nowhere",
        "John Howard(b. 1939)Bennelong",
    ]
    result = normalize_cells(cells)
    assert [r.name for r in result.records] == ["John Gorton", "John Howard"]
    assert len(result.issues) == 2
    assert isinstance(result.issues[0].error, ExtractionAmbiguity)
    assert isinstance(result.issues[1].error, CoercionError)
    assert result.issues[1].text == "Backwards(1950–1900)Nowhere"


def test_both_formats_warns_and_uses_range(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="pmflow.normalize.records"):
        result = normalize_cells(["Odd Case(b. 1900, 1900–1950)Nowhere"])
    assert result.records[0].died == 1950
    assert "Both date formats" in caplog.text


def test_normalize_is_idempotent() -> None:
    cells = [
        "Edmund Barton(1849–1920)MP for Hunter",
        "Alfred Deakin(1856–1919)MP for Ballarat",
        "Alfred Deakin(1856–1919)MP for Ballarat",
        "John Howard(b. 1939)Bennelong",
    ]
    once = normalize_cells(cells).records
    twice = normalize_records([r.to_fields() for r in once]).records
    assert twice == once
    deduped, conflicts = deduplicate(once)
    assert deduped == once
    assert conflicts == []


def test_sort_by_born() -> None:
    cells = [
        "John Howard(b. 1939)Bennelong",
        "Edmund Barton(1849–1920)MP for Hunter",
        "John Gorton(1911–2002)Higgins",
    ]
    result = normalize_cells(cells, sort_by="born")
    assert [r.born for r in result.records] == [1849, 1911, 1939]
    result = normalize_cells(cells, sort_by="name")
    assert [r.name for r in result.records] == ["Edmund Barton", "John Gorton", "John Howard"]


def test_unknown_sort_key() -> None:
    with pytest.raises(ValueError):
        normalize_cells([], sort_by="died")
