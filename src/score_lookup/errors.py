"""Exception types for Score Lookup."""


class ScoreLookupError(Exception):
    """Base class for Score Lookup errors."""


class OracleUnavailableError(ScoreLookupError):
    """Raised when the text-generation oracle has no credentials configured."""
