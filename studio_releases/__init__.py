"""
Android Studio releases list parser.

Extracts typed release records from the Android Studio releases list page.
"""

__version__ = "0.1.0"

from .models import Channel, Release
from .crawler.releases_list import ReleasesListParser, ReleasesParseResult, parse_releases

__all__ = [
    'Channel',
    'Release',
    'ReleasesListParser',
    'ReleasesParseResult',
    'parse_releases',
    '__version__'
]
