"""
Pmflow package for the prime minister lifespan pipeline.

This package scrapes a single Wikipedia table, turns its free‑text
"Name(Birth–Death)Constituency" column into typed records and renders
a summary table and timeline chart.  Each submodule implements one
step of the pipeline.

The high‑level flow is:

1. **collect** – Fetch the article once, persist the raw HTML to a
   local cache file and parse the first ``wikitable`` from the cached
   copy into a `RawTable`.
2. **normalize** – Split each cell into name and date text
   (`ExtractedFields`), coerce the years to integers, compute age at
   death and collapse duplicate rows into `PersonRecord` instances.
   Rows that cannot be parsed are collected rather than aborting the
   run.
3. **simulate** – Generate synthetic records with the same schema for
   demos and tests.
4. **report** – Render a tabular preview and a birth→death timeline.
5. **cli** – Command line entry point wiring together the above
   components.
"""

__version__ = "0.1.0"
