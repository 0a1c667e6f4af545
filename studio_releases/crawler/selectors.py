"""
CSS selectors for the Android Studio releases list page.

The selectors are grouped into an immutable ReleaseSelectors value that is
built once and handed to the parser.
"""
from dataclasses import dataclass, replace
from typing import Optional

# The 2024 release table, the first table on the page holding values of interest.
# WARN: slaxfo_* IDs are assigned by the site generator and are likely re-numbered
# on site regen. Update this one value when the page layout changes.
RELEASES_TABLE_SELECTOR = 'table#slaxfo_21.table__content'


@dataclass(frozen=True)
class ReleaseSelectors:
    """Pattern table for locating release rows and their cells"""

    # Release table container
    table: str = RELEASES_TABLE_SELECTOR

    # Release rows, relative to the table. lxml does not insert a missing <tbody>,
    # so data rows sitting directly under the table are matched too.
    rows: str = ':scope > tbody > tr, :scope > tr:has(> td)'

    # Cells, relative to a row (nth-child column index)
    release_name: str = 'td:nth-child(1)'
    date: str = 'td:nth-child(3)'
    version_number: str = 'td:nth-child(4) > p:nth-of-type(1)'
    build_version: str = 'td:nth-child(4) > p:nth-of-type(2)'

    def with_table(self, table: Optional[str]) -> 'ReleaseSelectors':
        """Return a copy using a different table anchor (None keeps the current one)."""
        if not table or table == self.table:
            return self
        return replace(self, table=table)


DEFAULT_SELECTORS = ReleaseSelectors()
