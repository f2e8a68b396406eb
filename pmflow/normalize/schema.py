# normalize/schema.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from ..exceptions import CoercionError, DuplicateConflict, FetchError

EN_DASH = "–"

RECORD_HEADERS = ["name", "born", "died", "age_at_death"]


@dataclass
class RawTable:
    """Header plus text cells of one HTML table."""

    header: List[str]
    rows: List[List[str]] = field(default_factory=list)

    def column(self, header_text: str) -> List[str]:
        """Return the cells under ``header_text``.

        Raises:
            FetchError: If no header cell matches.
        """
        try:
            index = self.header.index(header_text)
        except ValueError:
            raise FetchError(
                f"Column {header_text!r} not found in table header {self.header!r}"
            ) from None
        return [row[index] for row in self.rows if index < len(row)]


@dataclass(frozen=True)
class ExtractedFields:
    name: str
    date_range: Optional[str] = None      # 'YYYY–YYYY' when deceased
    born_if_alive: Optional[str] = None   # 'YYYY' when alive
    source: str = ""                      # cell text the fields came from

    @property
    def is_deceased(self) -> bool:
        return self.date_range is not None

    @property
    def is_alive(self) -> bool:
        return self.date_range is None and self.born_if_alive is not None

    @property
    def is_complete(self) -> bool:
        return (self.date_range is None) != (self.born_if_alive is None)


@dataclass(frozen=True)
class PersonRecord:
    name: str
    born: int
    died: Optional[int] = None
    age_at_death: Optional[int] = field(init=False, default=None)

    def __post_init__(self) -> None:
        if isinstance(self.born, bool) or not isinstance(self.born, int):
            raise CoercionError(f"Birth year must be an integer, got {self.born!r}", self.name)
        if not 1000 <= self.born <= 9999:
            raise CoercionError(f"Birth year {self.born} is not a 4-digit year", self.name)
        if self.died is not None:
            if isinstance(self.died, bool) or not isinstance(self.died, int):
                raise CoercionError(f"Death year must be an integer, got {self.died!r}", self.name)
            if self.died < self.born:
                raise CoercionError(
                    f"Death year {self.died} precedes birth year {self.born}", self.name
                )
            object.__setattr__(self, "age_at_death", self.died - self.born)

    @property
    def is_alive(self) -> bool:
        return self.died is None

    def to_fields(self) -> ExtractedFields:
        """Render the record back into extractor output form."""
        if self.died is None:
            return ExtractedFields(name=self.name, born_if_alive=str(self.born))
        return ExtractedFields(
            name=self.name, date_range=f"{self.born}{EN_DASH}{self.died}"
        )

    def to_csv_row(self) -> dict:
        return {
            "name": self.name,
            "born": self.born,
            "died": "" if self.died is None else self.died,
            "age_at_death": "" if self.age_at_death is None else self.age_at_death,
        }


@dataclass
class RowIssue:
    """A row that was dropped during normalization."""

    text: str
    error: Exception

    def __str__(self) -> str:
        return f"{self.text!r}: {self.error}"


@dataclass
class NormalizeResult:
    records: List[PersonRecord] = field(default_factory=list)
    issues: List[RowIssue] = field(default_factory=list)
    conflicts: List[DuplicateConflict] = field(default_factory=list)
