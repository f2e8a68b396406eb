"""
Normalization subsystem for pmflow.

This package converts raw table cells into `ExtractedFields`, coerces
those into typed `PersonRecord` instances and writes them to CSV
files.  Extraction is rule‑based: the cell is split at its first
parenthesis and the remainder is searched for either a birth–death
range or a ``b. YYYY`` marker.

The record CSV format is defined by `RECORD_HEADERS` in `schema.py`.
"""

from .schema import ExtractedFields, NormalizeResult, PersonRecord, RawTable, RowIssue  # noqa: F401
from .extract_fields import drop_header_rows, extract_all, extract_fields  # noqa: F401
from .records import deduplicate, normalize_cells, normalize_records, to_record  # noqa: F401
from .write_csv import read_records_csv, write_records_csv  # noqa: F401
