"""
Record normalizer.

Turns `ExtractedFields` into typed `PersonRecord` instances.  The two
date formats are reconciled into a single schema, years are coerced
to integers, age at death is derived and duplicate rows are collapsed.

Row failures never abort the run: they are logged and collected as
`RowIssue` entries on the returned `NormalizeResult`.  Records sharing
a name but carrying different years are kept as they are and reported
as `DuplicateConflict` warnings.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Tuple

from ..exceptions import CoercionError, DuplicateConflict, ExtractionAmbiguity, RowError
from .extract_fields import ALIVE_RE, extract_all, matches_both
from .schema import EN_DASH, ExtractedFields, NormalizeResult, PersonRecord, RowIssue

logger = logging.getLogger(__name__)

SORT_KEYS = {
    "born": lambda r: r.born,
    "name": lambda r: r.name,
}


def _strip_alive_marker(text: str) -> str:
    match = ALIVE_RE.match(text.strip())
    return match.group(1) if match else text.strip()


def _to_int(text: Optional[str]) -> Optional[int]:
    if text is None:
        return None
    try:
        return int(text.strip())
    except ValueError:
        return None


def to_record(fields: ExtractedFields) -> PersonRecord:
    """Coerce one `ExtractedFields` into a `PersonRecord`.

    Raises:
        ExtractionAmbiguity: If neither date field is populated.
        CoercionError: If the birth year is not an integer or the
            resulting record is implausible.
    """
    label = fields.source or fields.name
    if fields.date_range is not None:
        birth, _, death = fields.date_range.partition(EN_DASH)
    elif fields.born_if_alive is not None:
        birth, death = _strip_alive_marker(fields.born_if_alive), None
    else:
        raise ExtractionAmbiguity(f"No date format recognised in {label!r}", label)
    born = _to_int(birth)
    if born is None:
        raise CoercionError(f"Birth year {birth!r} is not a number", label)
    died = _to_int(death)
    if death is not None and died is None:
        logger.debug("Treating unparseable death year %r as absent for %s", death, fields.name)
    try:
        return PersonRecord(name=fields.name, born=born, died=died)
    except CoercionError as exc:
        exc.text = label
        raise


def deduplicate(records: Iterable[PersonRecord]) -> Tuple[List[PersonRecord], List[DuplicateConflict]]:
    """Collapse exact duplicate records, keeping first‑seen order.

    Returns:
        ``(unique_records, conflicts)``.  A conflict is produced for
        every name that still maps to more than one record after exact
        duplicates are removed.
    """
    unique: List[PersonRecord] = []
    seen = set()
    by_name: Dict[str, List[PersonRecord]] = {}
    for record in records:
        if record in seen:
            logger.debug("Dropping duplicate row for %s", record.name)
            continue
        seen.add(record)
        unique.append(record)
        by_name.setdefault(record.name, []).append(record)
    conflicts: List[DuplicateConflict] = []
    for name, variants in by_name.items():
        if len(variants) > 1:
            conflict = DuplicateConflict(name, variants)
            logger.warning("%s", conflict)
            conflicts.append(conflict)
    return unique, conflicts


def normalize_records(
    items: Iterable[ExtractedFields], *, sort_by: Optional[str] = None
) -> NormalizeResult:
    """Normalize extracted fields into deduplicated records.

    Args:
        items: Extractor output, one entry per table row.
        sort_by: Optional ``"born"`` or ``"name"``.  Without it the
            records keep their first‑seen order.

    Returns:
        A `NormalizeResult` holding the records plus the rows that were
        dropped and any duplicate‑name conflicts.
    """
    if sort_by is not None and sort_by not in SORT_KEYS:
        raise ValueError(f"Unsupported sort key {sort_by!r}; expected one of {sorted(SORT_KEYS)}")
    result = NormalizeResult()
    parsed: List[PersonRecord] = []
    for fields in items:
        if fields.source and matches_both(fields.source):
            logger.warning("Both date formats in %r; using the birth–death range", fields.source)
        try:
            parsed.append(to_record(fields))
        except RowError as exc:
            logger.warning("Skipping row %r: %s", exc.text, exc)
            result.issues.append(RowIssue(text=exc.text, error=exc))
    result.records, result.conflicts = deduplicate(parsed)
    if sort_by is not None:
        result.records.sort(key=SORT_KEYS[sort_by])
    logger.info(
        "Normalized %d rows -> %d records (%d dropped, %d conflicts)",
        len(parsed) + len(result.issues),
        len(result.records),
        len(result.issues),
        len(result.conflicts),
    )
    return result


def normalize_cells(cells: Iterable[str], *, sort_by: Optional[str] = None) -> NormalizeResult:
    """Extract and normalize raw cell text in one step."""
    return normalize_records(extract_all(cells), sort_by=sort_by)
