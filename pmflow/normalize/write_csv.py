"""
CSV reader and writer for normalized records.

Records are written with the field order defined by `RECORD_HEADERS`.
Absent death years and ages are written as empty cells and read back
as ``None``.  If the file already exists, it will be overwritten.
Unicode is written in UTF‑8 encoding.
"""

from __future__ import annotations

import csv
import os
from typing import Iterable, List

from ..exceptions import CoercionError, RecordsFileError
from .schema import RECORD_HEADERS, PersonRecord


def write_records_csv(records: Iterable[PersonRecord], path: str) -> None:
    """Write records to a CSV file.

    Args:
        records: Iterable of `PersonRecord` objects.
        path: Destination path for the CSV.
    """
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(path, "w", newline="", encoding="utf-8") as csvfile:
        writer = csv.DictWriter(csvfile, fieldnames=RECORD_HEADERS)
        writer.writeheader()
        for record in records:
            writer.writerow(record.to_csv_row())


def read_records_csv(path: str) -> List[PersonRecord]:
    """Load records previously written by `write_records_csv`.

    ``age_at_death`` is recomputed from the years rather than read.

    Raises:
        RecordsFileError: If the file cannot be opened or a row does
            not hold valid years.
    """
    records: List[PersonRecord] = []
    try:
        with open(path, "r", encoding="utf-8") as f:
            reader = csv.DictReader(f)
            for line, row in enumerate(reader, start=2):
                died = row.get("died")
                try:
                    records.append(
                        PersonRecord(
                            name=row.get("name", ""),
                            born=int(row["born"]),
                            died=int(died) if died else None,
                        )
                    )
                except (KeyError, TypeError, ValueError, CoercionError) as exc:
                    raise RecordsFileError(f"{path}:{line}: invalid record: {exc}") from exc
    except (OSError, UnicodeDecodeError, csv.Error) as exc:
        raise RecordsFileError(f"Cannot read records file {path}: {exc}") from exc
    return records
