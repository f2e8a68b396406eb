"""
Raw table fetcher.

This module downloads an article page once, writes the raw HTML to a
local cache file and parses the first table carrying a given CSS
class from that cached copy.  Repeated runs read the cache instead of
hitting the network, so results are reproducible.  Pass
``refresh=True`` to force a new download.

Failures to download the page or to locate the table raise
`FetchError`; there is no retry logic.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, Optional

import requests
from bs4 import BeautifulSoup

from ..exceptions import FetchError
from ..normalize.schema import RawTable

logger = logging.getLogger(__name__)

USER_AGENT = "pmflow/0.1 (+https://en.wikipedia.org/wiki/User-Agent_policy)"


def _cell_text(cell) -> str:
    return " ".join(cell.get_text().split())


def _span(cell, attr: str) -> int:
    try:
        return max(1, int(cell.get(attr, 1)))
    except (TypeError, ValueError):
        return 1


def _table_grid(table) -> List[List[str]]:
    """Flatten a table into rows of text, expanding rowspan and colspan."""
    grid: List[List[str]] = []
    carried = {}  # column -> (remaining rows, text)
    for tr in table.find_all("tr"):
        row: List[str] = []
        cells = tr.find_all(["th", "td"], recursive=False)
        col = 0
        for cell in cells:
            while col in carried:
                remaining, text = carried[col]
                row.append(text)
                if remaining > 1:
                    carried[col] = (remaining - 1, text)
                else:
                    del carried[col]
                col += 1
            text = _cell_text(cell)
            rowspan = _span(cell, "rowspan")
            for _ in range(_span(cell, "colspan")):
                row.append(text)
                if rowspan > 1:
                    carried[col] = (rowspan - 1, text)
                col += 1
        while col in carried:
            remaining, text = carried[col]
            row.append(text)
            if remaining > 1:
                carried[col] = (remaining - 1, text)
            else:
                del carried[col]
            col += 1
        if row:
            grid.append(row)
    return grid


def _download(http: requests.Session, url: str, timeout: float) -> str:
    try:
        response = http.get(url, headers={"User-Agent": USER_AGENT}, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as exc:
        raise FetchError(f"Failed to fetch {url}: {exc}") from exc
    return response.text


def fetch_page(
    url: str,
    cache_path: str,
    *,
    session: Optional[requests.Session] = None,
    timeout: float = 30,
    refresh: bool = False,
) -> Path:
    """Download ``url`` into ``cache_path`` unless it is already cached.

    Args:
        url: Article URL.
        cache_path: File the raw HTML is written to.
        session: Optional `requests.Session` to issue the request with.
        timeout: Request timeout in seconds.
        refresh: Download even when the cache file exists.

    Returns:
        Path to the cached HTML file.

    Raises:
        FetchError: If the request fails or returns an error status.
    """
    path = Path(cache_path)
    if path.exists() and not refresh:
        logger.info("Using cached page %s", path)
        return path
    logger.info("Fetching %s", url)
    if session is None:
        with requests.Session() as http:
            html = _download(http, url, timeout)
    else:
        html = _download(session, url, timeout)
    os.makedirs(path.parent, exist_ok=True)
    path.write_text(html, encoding="utf-8")
    logger.debug("Cached %s to %s", url, path)
    return path


def parse_table(html: str, table_class: str = "wikitable") -> RawTable:
    """Parse the first ``table.<table_class>`` element of ``html``.

    The first row becomes the header; the remaining rows are returned
    as text cells.

    Raises:
        FetchError: If no matching table exists or it has no rows.
    """
    soup = BeautifulSoup(html, "html.parser")
    table = soup.select_one(f"table.{table_class}")
    if table is None:
        raise FetchError(f"No table with class {table_class!r} found")
    grid = _table_grid(table)
    if not grid:
        raise FetchError(f"Table with class {table_class!r} has no rows")
    header, rows = grid[0], grid[1:]
    logger.debug("Parsed table with %d columns and %d rows", len(header), len(rows))
    return RawTable(header=header, rows=rows)


def load_table(
    url: str,
    cache_path: str,
    table_class: str = "wikitable",
    *,
    session: Optional[requests.Session] = None,
    timeout: float = 30,
    refresh: bool = False,
) -> RawTable:
    """Fetch once, then parse the table from the cached copy."""
    path = fetch_page(url, cache_path, session=session, timeout=timeout, refresh=refresh)
    try:
        html = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise FetchError(f"Could not read cached page {path}: {exc}") from exc
    return parse_table(html, table_class)
