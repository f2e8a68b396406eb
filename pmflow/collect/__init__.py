"""
Collection subsystem for pmflow.

The `collect` package wraps the scraping layer.  It provides
`load_table`, which downloads an article page once, stores the raw
HTML in a local cache file and parses the first matching table from
that stored copy.  Later runs reuse the cache, so they are
reproducible without re‑fetching.
"""

from .fetcher import fetch_page, load_table, parse_table  # noqa: F401
