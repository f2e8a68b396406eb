"""
Cell text to fields extractor.

Each row of the source table carries a single free‑text cell such as
``"John Gorton(1911–2002)Higgins"`` or ``"John Howard(b. 1939)Bennelong"``.
This module splits such a cell into the subject's name and the raw
date text.  Two mutually exclusive date formats are recognised:

* deceased – ``YYYY–YYYY``: exactly four digits either side of an
  en‑dash (U+2013).  A plain hyphen does not match.
* alive – ``b. YYYY``: a lowercase ``b``, a period, exactly one
  whitespace character and four digits.

When both patterns match, the deceased format wins.  When neither
matches, both date fields are left as ``None`` and the normalizer
decides what to do with the row.  Every function here is pure.
"""

from __future__ import annotations

import re
from typing import Iterable, List, Tuple

from .schema import EN_DASH, ExtractedFields

DEFAULT_HEADER = f"Name(Birth{EN_DASH}Death)Constituency"

DATE_RANGE_RE = re.compile(rf"(?<!\d)\d{{4}}{EN_DASH}\d{{4}}(?!\d)")
ALIVE_RE = re.compile(r"b\.\s(\d{4})")


def _collapse(text: str) -> str:
    return " ".join(text.split())


def split_name(cell: str) -> Tuple[str, str]:
    """Split ``cell`` at its first opening parenthesis.

    Returns:
        ``(name, remainder)`` where ``remainder`` is everything after
        the first ``(`` kept verbatim.  A cell without a parenthesis
        yields an empty remainder.
    """
    name, _, remainder = cell.partition("(")
    return name.strip(), remainder


def extract_fields(cell: str) -> ExtractedFields:
    """Extract name and date text from a single table cell.

    Args:
        cell: Raw cell text from the source table.

    Returns:
        An `ExtractedFields` with at most one of ``date_range`` and
        ``born_if_alive`` populated.
    """
    name, remainder = split_name(cell)
    range_match = DATE_RANGE_RE.search(remainder)
    alive_match = ALIVE_RE.search(remainder)
    if range_match:
        return ExtractedFields(name=name, date_range=range_match.group(0), source=cell)
    if alive_match:
        return ExtractedFields(name=name, born_if_alive=alive_match.group(1), source=cell)
    return ExtractedFields(name=name, source=cell)


def extract_all(cells: Iterable[str]) -> List[ExtractedFields]:
    return [extract_fields(cell) for cell in cells]


def matches_both(cell: str) -> bool:
    """True when ``cell`` carries both a date range and a ``b.`` marker."""
    _, remainder = split_name(cell)
    return bool(DATE_RANGE_RE.search(remainder) and ALIVE_RE.search(remainder))


def drop_header_rows(cells: Iterable[str], header_text: str = DEFAULT_HEADER) -> List[str]:
    """Remove cells equal to the table's own header text and blank cells.

    Wikipedia tables with multi‑row headers repeat the header literal
    inside the body, so it has to be filtered out explicitly before
    extraction.
    """
    header = _collapse(header_text)
    kept: List[str] = []
    for cell in cells:
        text = _collapse(cell)
        if not text or text == header:
            continue
        kept.append(cell)
    return kept
