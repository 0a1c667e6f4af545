"""
Unit tests for releases list extraction using an HTML fixture.
"""

import datetime
from pathlib import Path

import pytest

from studio_releases import parse_releases
from studio_releases.core.errors import (
    CellMissingError,
    DateMalformedError,
    NameFieldMalformedError,
    StructuralAnchorMissingError,
    UnknownChannelError,
    VersionTitleMalformedError,
)
from studio_releases.crawler import (
    DEFAULT_SELECTORS,
    RELEASES_TABLE_SELECTOR,
    ReleasesListParser,
)
from studio_releases.models import Channel

FIXTURES_DIR = Path(__file__).parent / 'fixtures'


def make_row(name="Ladybug | 2024.2.1 Canary 7", date="August 15, 2024",
             version="2024.2.1.3", build="AI-242.20224.300.2421.12232258"):
    """Build a release row in the layout of the releases page."""
    return f"""
    <tr class="table__tr">
      <td class="table__td"><p class="article__p child">{name}</p></td>
      <td class="table__td"><figure class="article__figure child"></figure></td>
      <td class="table__td"><p class="article__p child">{date}</p></td>
      <td class="table__td">
        <p class="article__p child"><span class="control">{version}</span></p>
        <p class="article__p child">{build}</p>
      </td>
      <td class="table__td"><p class="article__p child">242.20224.300</p></td>
    </tr>
    """


def make_page(*rows, table_id="slaxfo_21"):
    return f"""
    <html><body>
      <table class="table__content table__content--wide" id="{table_id}">
        <thead class="table__thead"><tr><th>Release Name</th></tr></thead>
        <tbody class="table__tbody">{''.join(rows)}</tbody>
      </table>
    </body></html>
    """


@pytest.fixture
def releases_html():
    return (FIXTURES_DIR / 'releases_list.html').read_text(encoding='utf-8')


class TestParseReleases:
    """End-to-end extraction from the releases page."""

    def test_fixture_page(self, releases_html):
        releases = parse_releases(releases_html)

        assert len(releases) == 2
        ladybug = releases[0]
        assert ladybug.codename == "Ladybug"
        assert ladybug.version_title == "2024.2.1 Canary 7"
        assert ladybug.channel == Channel.CANARY
        assert ladybug.channel_version == 7
        assert ladybug.date == datetime.date(2024, 8, 15)
        assert ladybug.version_number == "2024.2.1.3"
        assert ladybug.build_version == "242.20224.300.2421.12232258"

    def test_codename_with_spaces(self, releases_html):
        koala = parse_releases(releases_html)[1]
        assert koala.codename == "Koala Feature Drop"
        assert koala.channel == Channel.RC
        assert koala.channel_version == 1
        assert koala.date == datetime.date(2024, 8, 8)

    def test_version_title_is_verbatim(self):
        """Inner spacing of the name cell is kept; only the ends are trimmed."""
        release = parse_releases(make_page(make_row(name="Koala   Feature Drop |  2024.1.2   RC 1")))[0]
        assert release.codename == "Koala   Feature Drop"
        assert release.version_title == "2024.1.2   RC 1"
        assert release.channel == Channel.RC
        assert release.channel_version == 1

    def test_only_most_recent_table(self, releases_html):
        """Rows from older year tables are not extracted."""
        codenames = [release.codename for release in parse_releases(releases_html)]
        assert "Iguana" not in codenames

    def test_document_order(self):
        html = make_page(
            make_row(name="Ladybug | 2024.2.1 Canary 8"),
            make_row(name="Ladybug | 2024.2.1 Canary 7"),
            make_row(name="Koala | 2024.1.1 Patch 1"),
        )
        releases = parse_releases(html)
        assert [r.version_title for r in releases] == [
            "2024.2.1 Canary 8", "2024.2.1 Canary 7", "2024.1.1 Patch 1"
        ]

    def test_single_row_document(self):
        releases = parse_releases(make_page(make_row()))
        assert len(releases) == 1
        assert releases[0].to_dict() == {
            "date": "2024-08-15",
            "codename": "Ladybug",
            "version_title": "2024.2.1 Canary 7",
            "channel": "Canary",
            "channel_version": 7,
            "version_number": "2024.2.1.3",
            "build_version": "242.20224.300.2421.12232258",
        }


class TestRowLocator:
    """Test locating release rows."""

    def test_missing_anchor_is_fatal(self):
        html = make_page(make_row(), table_id="slaxfo_99")
        with pytest.raises(StructuralAnchorMissingError) as exc_info:
            parse_releases(html)
        assert exc_info.value.selector == RELEASES_TABLE_SELECTOR

    def test_missing_anchor_is_fatal_in_skip_mode(self):
        with pytest.raises(StructuralAnchorMissingError):
            parse_releases("<html><body><p>No tables</p></body></html>", skip_malformed=True)

    def test_empty_table_is_not_an_error(self):
        assert parse_releases(make_page()) == []

    def test_header_rows_are_not_releases(self, releases_html):
        parser = ReleasesListParser()
        rows = parser.locate_rows(parser.get_soup(releases_html))
        assert len(rows) == 2

    def test_table_without_tbody(self):
        """lxml keeps rows directly under the table when the markup has no tbody."""
        html = f"""
        <html><body>
          <table class="table__content" id="slaxfo_21">
            <tr><th>Release Name</th><th>Channel</th></tr>
            {make_row()}
            {make_row(name="Koala | 2024.1.1 Patch 1")}
          </table>
        </body></html>
        """
        releases = parse_releases(html)
        assert [r.version_title for r in releases] == ["2024.2.1 Canary 7", "2024.1.1 Patch 1"]

    def test_custom_anchor(self):
        selectors = DEFAULT_SELECTORS.with_table("table#slaxfo_99.table__content")
        releases = parse_releases(make_page(make_row(), table_id="slaxfo_99"), selectors=selectors)
        assert len(releases) == 1

    def test_with_table_keeps_default(self):
        assert DEFAULT_SELECTORS.with_table(None) is DEFAULT_SELECTORS
        assert DEFAULT_SELECTORS.with_table(RELEASES_TABLE_SELECTOR) is DEFAULT_SELECTORS


class TestRowFailures:
    """Test strict and skip handling of malformed rows."""

    def test_unknown_channel(self):
        html = make_page(make_row(name="Koala | 2024.1.2 Nightly 3"))
        with pytest.raises(UnknownChannelError) as exc_info:
            parse_releases(html)
        assert exc_info.value.text == "Nightly"
        assert exc_info.value.row == 0
        assert "Nightly" in str(exc_info.value)

    def test_first_bad_row_aborts_parse(self):
        html = make_page(
            make_row(),
            make_row(name="Ladybug 2024.2.1 Canary 8"),
            make_row(date="2024-08-15"),
        )
        with pytest.raises(NameFieldMalformedError) as exc_info:
            parse_releases(html)
        assert exc_info.value.row == 1
        assert "row 1" in str(exc_info.value)

    def test_missing_channel_version(self):
        html = make_page(make_row(name="Ladybug | 2024.2.1 Canary"))
        with pytest.raises(VersionTitleMalformedError):
            parse_releases(html)

    def test_bad_date(self):
        html = make_page(make_row(date="15 August 2024"))
        with pytest.raises(DateMalformedError) as exc_info:
            parse_releases(html)
        assert exc_info.value.raw == "15 August 2024"

    def test_missing_build_cell(self):
        row = make_row().replace('<p class="article__p child">AI-242.20224.300.2421.12232258</p>', '')
        with pytest.raises(CellMissingError) as exc_info:
            parse_releases(make_page(row))
        assert exc_info.value.column == 'build'
        assert exc_info.value.row == 0

    def test_short_row(self):
        row = '<tr><td><p>Ladybug | 2024.2.1 Canary 7</p></td></tr>'
        with pytest.raises(CellMissingError) as exc_info:
            parse_releases(make_page(row))
        assert exc_info.value.column == 'date'

    def test_skip_mode_reports_bad_rows(self):
        html = make_page(
            make_row(),
            make_row(name="Koala | 2024.1.2 Nightly 3"),
            make_row(name="Koala | 2024.1.2 RC 1"),
        )
        result = ReleasesListParser(skip_malformed=True).parse(html)

        assert len(result) == 2
        assert [r.channel for r in result] == [Channel.CANARY, Channel.RC]
        assert not result.is_success()
        assert len(result.skipped) == 1
        assert isinstance(result.skipped[0], UnknownChannelError)
        assert result.skipped[0].row == 1

    def test_strict_result_has_no_skipped_rows(self, releases_html):
        result = ReleasesListParser().parse(releases_html)
        assert result.is_success()
        assert result.skipped == []
