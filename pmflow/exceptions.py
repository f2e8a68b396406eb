"""
Exception classes for the pmflow pipeline.

Setup failures (configuration, fetching the page, locating the table)
abort the whole run.  Row failures (`ExtractionAmbiguity`,
`CoercionError`) are isolated per row and collected by the normalizer.
`DuplicateConflict` is never raised by the pipeline; instances are
logged and returned so callers can inspect them.
"""


class PmflowError(Exception):
    """Base exception for all pipeline errors."""
    pass


class ConfigurationError(PmflowError):
    """Raised when a settings file is missing or malformed."""
    pass


class FetchError(PmflowError):
    """Raised when the page cannot be retrieved or the table is missing."""
    pass


class RowError(PmflowError):
    """Base class for errors confined to a single table row."""

    def __init__(self, message: str, text: str = ""):
        super().__init__(message)
        self.text = text


class ExtractionAmbiguity(RowError):
    """Raised when a cell matches neither date format."""
    pass


class CoercionError(RowError):
    """Raised when a required year cannot be turned into a valid integer."""
    pass


class DuplicateConflict(PmflowError):
    """A name that appears with differing parsed values."""

    def __init__(self, name: str, variants):
        self.name = name
        self.variants = list(variants)
        described = "; ".join(
            f"born={r.born} died={r.died}" for r in self.variants
        )
        super().__init__(f"Conflicting records for {name!r}: {described}")


class SimulationError(PmflowError, ValueError):
    """Raised when the simulator is asked for an impossible sample."""
    pass


class RecordsFileError(PmflowError):
    """Raised when a records CSV is missing or cannot be parsed."""
    pass
