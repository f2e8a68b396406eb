"""Tests for the table preview and the timeline chart."""

from __future__ import annotations

from pathlib import Path
from unittest import mock

from pmflow.normalize.schema import PersonRecord
from pmflow.report.table import COLUMN_LABELS, format_table, records_to_frame
from pmflow.report import timeline
from pmflow.report.timeline import plot_timeline, timeline_frame

RECORDS = [
    PersonRecord(name="Edmund Barton", born=1849, died=1920),
    PersonRecord(name="John Gorton", born=1911, died=2002),
    PersonRecord(name="John Howard", born=1939),
]


def test_records_to_frame() -> None:
    df = records_to_frame(RECORDS)
    assert list(df.columns) == ["name", "born", "died", "age_at_death"]
    assert str(df["died"].dtype) == "Int64"
    assert df.loc[1, "age_at_death"] == 91
    assert df["died"].isna().tolist() == [False, False, True]


def test_format_table_labels() -> None:
    text = format_table(RECORDS)
    for label in COLUMN_LABELS.values():
        assert label in text
    assert "John Gorton" in text
    assert "<NA>" not in text
    assert "nan" not in text.lower()


def test_format_table_limit() -> None:
    text = format_table(RECORDS, limit=1)
    assert "Edmund Barton" in text
    assert "John Howard" not in text


def test_timeline_frame_uses_current_year_for_living() -> None:
    df = timeline_frame(RECORDS, current_year=2023)
    assert df["still_alive"].tolist() == [False, False, True]
    assert df["end"].tolist() == [1920, 2002, 2023]
    # The stand-in year never leaks into the records.
    assert RECORDS[2].died is None
    assert df["died"].isna().tolist() == [False, False, True]


def test_plot_timeline_writes_image(tmp_path: Path) -> None:
    out = tmp_path / "charts" / "lifespans.png"
    path = plot_timeline(RECORDS, str(out), current_year=2023, title="Lifespans")
    assert path == out
    assert out.exists()
    assert out.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"


def test_plot_timeline_all_deceased(tmp_path: Path) -> None:
    out = tmp_path / "deceased.png"
    plot_timeline(RECORDS[:2], str(out))
    assert out.stat().st_size > 0


def test_plot_timeline_axis_labels(tmp_path: Path) -> None:
    with mock.patch.object(timeline.plt, "close") as close:
        plot_timeline(RECORDS, str(tmp_path / "labels.png"), current_year=2023)
    fig = close.call_args[0][0]
    ax = fig.axes[0]
    assert ax.get_xlabel() == "Year"
    assert ax.get_ylabel() == "Prime minister"
    assert sorted(t.get_text() for t in ax.get_yticklabels()) == ["Edmund Barton", "John Gorton", "John Howard"]
    timeline.plt.close(fig)
