"""
Structured errors for fetching, configuring and parsing the releases list.

Fetch, configuration and parse failures are separate domains. Within the parse
domain, a missing release table is fatal for the whole run while every other
error is scoped to a single table row.
"""
from typing import Any, Dict, Optional


class ReleasesError(Exception):
    """Base class for all releases list errors"""

    def __init__(self, message: str, *, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}


class FetchError(ReleasesError):
    """Raised when the releases page cannot be retrieved"""

    def __init__(self, url: str, message: str, status_code: Optional[int] = None):
        detail = f"Failed to fetch {url}: {message}"
        if status_code is not None:
            detail = f"Failed to fetch {url} (HTTP {status_code}): {message}"
        super().__init__(detail, context={'url': url, 'status_code': status_code})
        self.url = url
        self.status_code = status_code


class ConfigError(ReleasesError):
    """Raised when settings cannot be loaded or hold invalid values"""


class ReleaseParseError(ReleasesError):
    """Base class for parse failures"""


class StructuralAnchorMissingError(ReleaseParseError):
    """Raised when the release table anchor is not present in the document."""

    def __init__(self, selector: str):
        super().__init__(
            f"Release table not found using selector {selector!r}; "
            f"the page layout may have changed",
            context={'selector': selector},
        )
        self.selector = selector


class ReleaseFieldError(ReleaseParseError):
    """
    A row-scoped parse failure.

    Attributes:
        row: 0-based index of the row within the release table (None when the
            failing text was parsed outside of a row)
        field: Name of the cell or field that failed
        raw: The offending raw text
    """

    reason = "malformed field"

    def __init__(self, field: str, raw: Optional[str], row: Optional[int] = None,
                 detail: Optional[str] = None):
        self.field = field
        self.raw = raw
        self.row = row
        self.detail = detail
        super().__init__(self._format(), context={'row': row, 'field': field, 'raw': raw})

    def _format(self) -> str:
        location = f"row {self.row}" if self.row is not None else "input"
        message = f"{location}: {self.reason} in {self.field} ({self.raw!r})"
        if self.detail:
            message += f": {self.detail}"
        return message

    def at_row(self, row: int) -> 'ReleaseFieldError':
        """Attach the row index and refresh the message."""
        self.row = row
        self.context['row'] = row
        self.message = self._format()
        self.args = (self.message,)
        return self


class CellMissingError(ReleaseFieldError):
    """Raised when a row lacks one of the expected cells"""

    reason = "missing cell"

    def __init__(self, column: str, row: Optional[int] = None, raw: Optional[str] = None):
        super().__init__(column, raw, row=row)
        self.column = column


class NameFieldMalformedError(ReleaseFieldError):
    """Raised when the name cell has no pipe separator or an empty side"""

    reason = "malformed release name"


class VersionTitleMalformedError(ReleaseFieldError):
    """Raised when the version title does not have the `<x.y.z> <Channel> <n>` shape"""

    reason = "malformed version title"


class UnknownChannelError(ReleaseFieldError):
    """Raised when the channel token is not one of the known channels"""

    reason = "unknown channel"

    def __init__(self, text: str, row: Optional[int] = None):
        super().__init__('channel', text, row=row)
        self.text = text


class DateMalformedError(ReleaseFieldError):
    """Raised when the date cell is not in `Month DD, YYYY` format"""

    reason = "malformed date"
