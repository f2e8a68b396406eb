"""
Synthetic record generator.

Produces `PersonRecord` instances with the same schema as the scraped
data so the normalize and report steps can be exercised without a
network connection.  Names are drawn without replacement from a name
popularity corpus (only names whose share of births exceeds
``min_prop``), the birth year is drawn uniformly from ``born_range``
and the lifespan uniformly from ``lifespan_range``.  Both ranges are
inclusive.

Randomness comes from a `random.Random` instance seeded per call, so
the same seed always yields the same records and separate calls never
share state.
"""

from __future__ import annotations

import logging
import random
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import pandas as pd

from ..exceptions import SimulationError
from ..normalize.schema import PersonRecord

logger = logging.getLogger(__name__)

NAME_CORPUS_PATH = Path(__file__).parent / "data" / "names.csv"


def load_name_corpus(path: Optional[str] = None, min_prop: float = 0.01) -> List[str]:
    """Return distinct names whose popularity exceeds ``min_prop``.

    Args:
        path: CSV with ``name`` and ``prop`` columns.  Defaults to the
            corpus bundled with the package.
        min_prop: Exclusive lower bound on ``prop``.

    Returns:
        Names in corpus order with duplicates removed.
    """
    df = pd.read_csv(path or NAME_CORPUS_PATH)
    popular = df.loc[df["prop"] > min_prop, "name"].drop_duplicates()
    names = popular.tolist()
    logger.debug("Loaded %d names above prop %.4f", len(names), min_prop)
    return names


def simulate_records(
    n: int = 10,
    *,
    seed: int = 853,
    names: Optional[Sequence[str]] = None,
    born_range: Tuple[int, int] = (1800, 1950),
    lifespan_range: Tuple[int, int] = (60, 100),
    min_prop: float = 0.01,
) -> List[PersonRecord]:
    """Generate ``n`` synthetic records sorted by birth year.

    Args:
        n: Number of records to produce.
        seed: Seed for this call's random generator.
        names: Candidate names; defaults to `load_name_corpus`.
        born_range: Inclusive ``(low, high)`` birth years.
        lifespan_range: Inclusive ``(low, high)`` lifespans in years.
        min_prop: Popularity threshold used when loading the corpus.

    Raises:
        SimulationError: If ``n`` is negative or exceeds the number of
            available names.
    """
    pool = list(names) if names is not None else load_name_corpus(min_prop=min_prop)
    if n < 0:
        raise SimulationError(f"n must be non-negative, got {n}")
    if n > len(pool):
        raise SimulationError(f"Cannot sample {n} names without replacement from {len(pool)}")
    rng = random.Random(seed)
    chosen = rng.sample(pool, n)
    born = [rng.randint(*born_range) for _ in range(n)]
    lifespans = [rng.randint(*lifespan_range) for _ in range(n)]
    records = [
        PersonRecord(name=name, born=b, died=b + span)
        for name, b, span in zip(chosen, born, lifespans)
    ]
    records.sort(key=lambda r: r.born)
    logger.info("Simulated %d records with seed %d", len(records), seed)
    return records
