"""
Main extraction orchestrator.

Runs the releases pipeline once:
1. Fetch the releases list page (unless HTML is supplied)
2. Locate release rows via the table anchor
3. Decompose each row into a Release
"""

import logging
from typing import Optional

import httpx

from studio_releases.core.config import Settings, get_settings
from studio_releases.core.net import fetch_releases
from studio_releases.crawler.releases_list import ReleasesListParser, ReleasesParseResult
from studio_releases.crawler.selectors import DEFAULT_SELECTORS

logger = logging.getLogger(__name__)


class Extractor:
    """Fetches and parses the releases list using one set of settings."""

    def __init__(self, settings: Optional[Settings] = None,
                 transport: Optional[httpx.BaseTransport] = None):
        self.settings = settings or get_settings()
        self.transport = transport

        # Pattern table is built once per extractor and shared by every row
        self.selectors = DEFAULT_SELECTORS.with_table(self.settings.table_selector)
        self.parser = ReleasesListParser(
            self.selectors,
            skip_malformed=self.settings.skip_malformed
        )

    def extract(self, html: Optional[str] = None) -> ReleasesParseResult:
        """
        Extract releases.

        Args:
            html: Page HTML; fetched from the configured URL when omitted

        Raises:
            FetchError: If the page could not be retrieved
            ReleaseParseError: If the page could not be parsed
        """
        if html is None:
            html = fetch_releases(self.settings, transport=self.transport)
        else:
            logger.debug(f"Using supplied HTML ({len(html)} chars)")

        return self.parser.parse(html)
