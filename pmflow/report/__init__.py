"""
Reporting subsystem for pmflow.

* `table` – Labelled tabular preview of the records.
* `timeline` – Birth→death segment chart coloured by whether each
  subject is still alive.
"""

from .table import COLUMN_LABELS, format_table, records_to_frame  # noqa: F401
from .timeline import plot_timeline, timeline_frame  # noqa: F401
