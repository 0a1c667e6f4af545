"""
Android Studio releases list extraction.

The releases page groups builds into one table per year, e.g.:

    | Release Name                | Channel | Release Date    | Version                          | IntelliJ IDEA Version |
    | Ladybug | 2024.2.1 Canary 7 | Canary  | August 15, 2024 | 2024.2.1.3                       | 2024.2                |
    |                             |         |                 | AI-242.20224.300.2421.12232258   | 242.20224.300         |

Only the most recent table is parsed. Each body row becomes one Release.
"""
import logging
from typing import Iterator, List, Optional

from bs4 import BeautifulSoup

from studio_releases.core.errors import (
    CellMissingError,
    ReleaseFieldError,
    StructuralAnchorMissingError,
)
from studio_releases.core.field_extractors import (
    clean_cell_text,
    decompose_version_title,
    parse_release_date,
    split_release_name,
    strip_build_prefix,
)
from studio_releases.models import Release
from .selectors import DEFAULT_SELECTORS, ReleaseSelectors

logger = logging.getLogger(__name__)


class ReleasesParseResult:
    """Releases extracted from one document, in document order"""

    def __init__(
        self,
        releases: List[Release],
        skipped: Optional[List[ReleaseFieldError]] = None
    ):
        self.releases = releases
        self.skipped = skipped or []

    def is_success(self) -> bool:
        """True when no rows were skipped"""
        return not self.skipped

    def __len__(self) -> int:
        return len(self.releases)

    def __iter__(self) -> Iterator[Release]:
        return iter(self.releases)

    def __repr__(self):
        return f"ReleasesParseResult(releases={len(self.releases)}, skipped={len(self.skipped)})"


class ReleasesListParser:
    """
    Extracts releases from the Android Studio releases list page.

    Rows are located through a single table anchor and then decomposed cell by
    cell. By default the first malformed row aborts the whole parse; with
    skip_malformed the row is reported in the result and parsing continues.
    """

    def __init__(
        self,
        selectors: ReleaseSelectors = DEFAULT_SELECTORS,
        skip_malformed: bool = False
    ):
        """
        Initialize parser.

        Args:
            selectors: Pattern table used to locate the table, rows and cells
            skip_malformed: Skip and report malformed rows instead of failing
        """
        self.selectors = selectors
        self.skip_malformed = skip_malformed

    def get_soup(self, html: str) -> BeautifulSoup:
        """Helper to create BeautifulSoup instance"""
        return BeautifulSoup(html, 'lxml')

    def parse(self, html: str) -> ReleasesParseResult:
        """
        Parse releases from the page HTML.

        Raises:
            StructuralAnchorMissingError: If the release table is not present
            ReleaseFieldError: On the first malformed row, unless skip_malformed is set
        """
        soup = self.get_soup(html)
        rows = self.locate_rows(soup)

        releases = []
        skipped = []
        for index, row in enumerate(rows):
            try:
                releases.append(self.parse_row(row, index))
            except ReleaseFieldError as e:
                if not self.skip_malformed:
                    logger.error(f"[releases_list] {e}")
                    raise
                logger.warning(f"[releases_list] Skipping {e}")
                skipped.append(e)

        logger.info(
            f"[releases_list] Parsed {len(releases)} releases from {len(rows)} rows"
            + (f" ({len(skipped)} skipped)" if skipped else "")
        )
        return ReleasesParseResult(releases=releases, skipped=skipped)

    def locate_rows(self, soup: BeautifulSoup) -> List:
        """
        Find the release rows of the most recent release table.

        An empty list means the table exists but lists no releases.

        Raises:
            StructuralAnchorMissingError: If the table anchor matches nothing
        """
        tables = soup.select(self.selectors.table)
        if not tables:
            raise StructuralAnchorMissingError(self.selectors.table)
        if len(tables) > 1:
            logger.warning(
                f"[releases_list] {len(tables)} tables match {self.selectors.table!r}, using the first"
            )

        rows = tables[0].select(self.selectors.rows)
        logger.debug(f"[releases_list] Found {len(rows)} rows using selector: {self.selectors.rows}")
        return rows

    def parse_row(self, row, index: int = 0) -> Release:
        """
        Decompose one table row into a Release.

        Args:
            row: BeautifulSoup table row element
            index: 0-based row position, used in error messages

        Raises:
            ReleaseFieldError: On the first cell or field that fails to parse
        """
        try:
            # Kept verbatim apart from the ends; the version title is retained as published
            release_name = self._cell_text(row, self.selectors.release_name, 'name', collapse=False)
            date_text = self._cell_text(row, self.selectors.date, 'date')
            version_number = self._cell_text(row, self.selectors.version_number, 'version')
            build_text = self._cell_text(row, self.selectors.build_version, 'build')

            # e.g. Ladybug | 2024.2.1 Canary 7
            codename, version_title = split_release_name(release_name)
            channel, channel_version = decompose_version_title(version_title)
            release_date = parse_release_date(date_text)
        except ReleaseFieldError as e:
            raise e.at_row(index)

        return Release(
            date=release_date,
            codename=codename,
            version_title=version_title,
            channel=channel,
            channel_version=channel_version,
            version_number=version_number,
            build_version=strip_build_prefix(build_text),
        )

    def _cell_text(self, row, selector: str, column: str, collapse: bool = True) -> str:
        cell = row.select_one(selector)
        text = clean_cell_text(cell, collapse=collapse)
        if not text:
            raise CellMissingError(column, raw='' if cell is not None else None)
        return text


def parse_releases(
    html: str,
    selectors: ReleaseSelectors = DEFAULT_SELECTORS,
    skip_malformed: bool = False
) -> List[Release]:
    """Parse the releases list page into Release records, in document order."""
    return ReleasesListParser(selectors, skip_malformed=skip_malformed).parse(html).releases
