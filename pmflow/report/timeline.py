"""
Lifespan timeline chart.

Draws one horizontal segment per subject from birth year to death
year.  Living subjects have no death year, so their segment runs to a
current‑year stand‑in; that value only exists in the chart frame and
never touches the records.  Segments are coloured by whether the
subject is still alive.
"""

from __future__ import annotations

import logging
import os
from datetime import date
from pathlib import Path
from typing import Iterable, Optional

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import pandas as pd  # noqa: E402

from ..normalize.schema import PersonRecord  # noqa: E402
from .table import records_to_frame  # noqa: E402

logger = logging.getLogger(__name__)

# Set1 palette: red for living subjects, blue for the deceased.
ALIVE_COLORS = {True: "#E41A1C", False: "#377EB8"}
ALIVE_LABELS = {True: "Yes", False: "No"}


def timeline_frame(records: Iterable[PersonRecord], current_year: Optional[int] = None) -> pd.DataFrame:
    """Return chart data with ``still_alive`` and ``end`` columns added.

    Args:
        records: Records to plot.
        current_year: Year a living subject's segment ends at.
            Defaults to this year.
    """
    year = current_year or date.today().year
    df = records_to_frame(records)
    df["still_alive"] = df["died"].isna()
    df["end"] = df["died"].fillna(year).astype(int)
    return df


def plot_timeline(
    records: Iterable[PersonRecord],
    out_path: str,
    current_year: Optional[int] = None,
    title: Optional[str] = None,
) -> Path:
    """Write the timeline chart for ``records`` to ``out_path``.

    Subjects are drawn top to bottom in the order given.

    Returns:
        Path to the written image.
    """
    df = timeline_frame(records, current_year)
    height = max(3.0, 0.3 * len(df) + 1.5)
    fig, ax = plt.subplots(figsize=(8, height), dpi=100)
    try:
        positions = list(range(len(df)))[::-1]
        for alive in (False, True):
            mask = df["still_alive"] == alive
            if not mask.any():
                continue
            ys = [positions[i] for i in df.index[mask]]
            ax.hlines(
                ys,
                df.loc[mask, "born"].astype(int),
                df.loc[mask, "end"],
                colors=ALIVE_COLORS[alive],
                linewidth=2,
                label=ALIVE_LABELS[alive],
            )
        ax.set_yticks(positions)
        ax.set_yticklabels(df["name"].tolist())
        ax.set_xlabel("Year")
        ax.set_ylabel("Prime minister")
        if title:
            ax.set_title(title)
        ax.grid(axis="x", alpha=0.3)
        for side in ("top", "right"):
            ax.spines[side].set_visible(False)
        if len(df):
            ax.legend(
                title="PM is currently alive",
                loc="upper center",
                bbox_to_anchor=(0.5, -0.12),
                ncol=2,
                frameon=False,
            )
        fig.tight_layout()
        path = Path(out_path)
        os.makedirs(path.parent, exist_ok=True)
        fig.savefig(path, bbox_inches="tight")
    finally:
        plt.close(fig)
    logger.info("Wrote timeline for %d subjects to %s", len(df), path)
    return path
