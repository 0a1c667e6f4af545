"""
Field extraction utilities for release table rows.

Decomposes the text of individual cells into typed values. Each helper raises a
row-scoped ReleaseFieldError naming the offending text; callers attach the row
index.
"""

import re
import calendar
import logging
from typing import Optional, Tuple
from datetime import datetime, date

from studio_releases.core.errors import (
    DateMalformedError,
    NameFieldMalformedError,
    VersionTitleMalformedError,
)
from studio_releases.models.channel import Channel

logger = logging.getLogger(__name__)

NAME_SEPARATOR = '|'

RELEASE_DATE_FORMAT = '%B %d, %Y'

# e.g. 2024.2.1 Canary 7 (ASCII digits only)
VERSION_TITLE_PATTERN = re.compile(
    r'^(?P<version>\d+\.\d+\.\d+)\s+(?P<channel>\w+)(?:\s+(?P<channel_version>\d+))?\s*$',
    re.ASCII
)

# Product code in front of the build number, e.g. AI-242.20224.300.2421.12232258
BUILD_PREFIX_PATTERN = re.compile(r'^[A-Z]+-')

MAX_CHANNEL_VERSION = 255

_WHITESPACE = re.compile(r'\s+')


def clean_cell_text(cell, collapse: bool = True) -> str:
    """
    Get the text of a table cell.

    With collapse, whitespace runs become single spaces; otherwise only the
    ends are trimmed and the text is kept verbatim.
    """
    if cell is None:
        return ''
    if not collapse:
        return cell.get_text().strip()
    return _WHITESPACE.sub(' ', cell.get_text(' ')).strip()


def split_release_name(release_name: str) -> Tuple[str, str]:
    """
    Split the compound name cell on its first pipe.

    Args:
        release_name: Name cell text (e.g. "Koala Feature Drop | 2024.1.2 RC 1")

    Returns:
        Tuple of (codename, version_title), both trimmed

    Raises:
        NameFieldMalformedError: If there is no pipe or either side is empty
    """
    codename, separator, version_title = release_name.partition(NAME_SEPARATOR)
    if not separator:
        raise NameFieldMalformedError('name', release_name, detail="no '|' separator")

    codename = codename.strip()
    version_title = version_title.strip()
    if not codename:
        raise NameFieldMalformedError('name', release_name, detail="empty codename")
    if not version_title:
        raise NameFieldMalformedError('name', release_name, detail="empty version title")

    logger.debug(f"[fields] codename={codename!r} version_title={version_title!r}")
    return codename, version_title


def decompose_version_title(version_title: str) -> Tuple[Channel, int]:
    """
    Extract the channel and channel version from a version title.

    The leading dotted version is matched but not returned; the version cell
    carries the full four-part number.

    Args:
        version_title: e.g. "2024.2.1 Canary 7"

    Returns:
        Tuple of (channel, channel_version)

    Raises:
        VersionTitleMalformedError: If the title does not match or lacks a channel version
        UnknownChannelError: If the channel token is not a known channel
    """
    match = VERSION_TITLE_PATTERN.match(version_title)
    if not match:
        raise VersionTitleMalformedError(
            'version_title', version_title,
            detail="expected '<major>.<minor>.<patch> <Channel> <number>'"
        )

    channel = Channel.parse(match.group('channel'))

    channel_version = parse_channel_version(match.group('channel_version'), version_title)

    logger.debug(f"[fields] channel={channel} channel_version={channel_version}")
    return channel, channel_version


def parse_channel_version(text: Optional[str], version_title: str) -> int:
    """Parse the per-channel build counter, which must fit in 8 bits."""
    if not text:
        raise VersionTitleMalformedError('channel_version', version_title,
                                         detail="missing channel version")
    value = int(text)
    if value > MAX_CHANNEL_VERSION:
        raise VersionTitleMalformedError('channel_version', version_title,
                                         detail=f"channel version {value} out of range")
    return value


def parse_release_date(text: str) -> date:
    """
    Parse a release date such as "August 15, 2024".

    Raises:
        DateMalformedError: If text does not use the full month name format
    """
    try:
        parsed = datetime.strptime(text, RELEASE_DATE_FORMAT).date()
    except ValueError as e:
        raise DateMalformedError('date', text, detail=str(e)) from e

    # strptime matches month names case-insensitively
    month = calendar.month_name[parsed.month]
    if not text.startswith(f"{month} "):
        raise DateMalformedError('date', text, detail=f"expected month name {month!r}")
    return parsed


def strip_build_prefix(build: str) -> str:
    """Remove the product code from a build identifier (AI-242.1 -> 242.1)."""
    return BUILD_PREFIX_PATTERN.sub('', build, count=1)
