"""
Releases list page extraction.

Locates release rows through a single table anchor and decomposes each row
into a Release record.
"""

from .releases_list import ReleasesListParser, ReleasesParseResult, parse_releases
from .selectors import DEFAULT_SELECTORS, RELEASES_TABLE_SELECTOR, ReleaseSelectors

__all__ = [
    'ReleasesListParser',
    'ReleasesParseResult',
    'parse_releases',
    'DEFAULT_SELECTORS',
    'RELEASES_TABLE_SELECTOR',
    'ReleaseSelectors'
]
