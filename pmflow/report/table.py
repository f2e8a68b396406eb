"""
Tabular preview of records.

Builds a pandas DataFrame from `PersonRecord` objects and renders it
as plain text with human‑readable column labels.  Missing years are
kept as ``<NA>`` in the frame and shown as blanks in the text output.
"""

from __future__ import annotations

from typing import Iterable, Optional

import pandas as pd

from ..normalize.schema import RECORD_HEADERS, PersonRecord

COLUMN_LABELS = {
    "name": "Prime Minister",
    "born": "Birth year",
    "died": "Death year",
    "age_at_death": "Age at death",
}


def records_to_frame(records: Iterable[PersonRecord]) -> pd.DataFrame:
    """Convert records into a DataFrame with nullable integer columns."""
    rows = [
        {"name": r.name, "born": r.born, "died": r.died, "age_at_death": r.age_at_death}
        for r in records
    ]
    df = pd.DataFrame(rows, columns=RECORD_HEADERS)
    for column in ("born", "died", "age_at_death"):
        df[column] = df[column].astype("Int64")
    return df


def format_table(records: Iterable[PersonRecord], limit: Optional[int] = None) -> str:
    """Render records as a labelled text table.

    Args:
        records: Records to show.
        limit: Show only the first ``limit`` rows.
    """
    df = records_to_frame(records)
    if limit is not None:
        df = df.head(limit)
    labelled = df.rename(columns=COLUMN_LABELS).astype(object)
    labelled = labelled.where(labelled.notna(), "")
    return labelled.to_string(index=False)
