"""AdPulse — Load-time Error Taxonomy.

Everything that can go wrong while retrieving a sheet surfaces as a
``SheetDataError``. Analyzer functions never raise; they default instead.
"""


class SheetDataError(Exception):
    """Base for whole-payload failures while loading the dashboard data."""

    def __init__(self, message: str, sheet: str = ""):
        self.sheet = sheet
        super().__init__(message)


class FetchError(SheetDataError):
    """Transport failure or non-2xx response from the sheet source."""

    def __init__(self, message: str, sheet: str = "", status_code: int = 0):
        self.status_code = status_code
        super().__init__(message, sheet)


class FormatError(SheetDataError):
    """Response body is missing its envelope or table structure."""


class UpstreamError(SheetDataError):
    """The source answered, but reported an error status."""

    def __init__(self, detail: str, sheet: str = ""):
        self.detail = detail
        super().__init__(f"Sheet error: {detail}", sheet)


class ParseError(ValueError):
    """A single cell could not be decoded. Never escapes the parser."""
