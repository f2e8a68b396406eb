"""
Simulation subsystem for pmflow.

Generates synthetic `PersonRecord` lists for demos and tests.  It is
independent of the scraping pipeline and feeds the report step
directly.
"""

from .simulator import load_name_corpus, simulate_records  # noqa: F401
