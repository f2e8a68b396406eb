"""
Scrape → extract → normalize pipeline.

`run_pipeline` is the one‑shot batch run behind the ``pmflow run`` and
``pmflow normalize`` commands.  Setup failures (download, table or
column selection) propagate as `FetchError` and abort the run.
Malformed rows are reported through the returned `PipelineResult`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

import requests

from .collect.fetcher import load_table
from .config import Settings
from .exceptions import DuplicateConflict
from .normalize.extract_fields import drop_header_rows, extract_all
from .normalize.records import normalize_records
from .normalize.schema import PersonRecord, RowIssue

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    """Outcome of one pipeline run."""

    records: List[PersonRecord] = field(default_factory=list)
    issues: List[RowIssue] = field(default_factory=list)
    conflicts: List[DuplicateConflict] = field(default_factory=list)
    raw_rows: int = 0
    header_rows_dropped: int = 0


def run_pipeline(
    settings: Settings,
    *,
    session: Optional[requests.Session] = None,
    refresh: bool = False,
) -> PipelineResult:
    """Fetch the source table and turn its name column into records."""
    table = load_table(
        settings.url,
        settings.cache_path,
        settings.table_class,
        session=session,
        timeout=settings.timeout,
        refresh=refresh,
    )
    cells = table.column(settings.column_header)
    kept = drop_header_rows(cells, settings.column_header)
    fields = extract_all(kept)
    normalized = normalize_records(fields, sort_by=settings.sort_by)
    result = PipelineResult(
        records=normalized.records,
        issues=normalized.issues,
        conflicts=normalized.conflicts,
        raw_rows=len(cells),
        header_rows_dropped=len(cells) - len(kept),
    )
    if result.issues:
        logger.warning("%d malformed rows were dropped:", len(result.issues))
        for issue in result.issues:
            logger.warning("  %s", issue)
    logger.info(
        "Pipeline produced %d records from %d rows", len(result.records), result.raw_rows
    )
    return result
