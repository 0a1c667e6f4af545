"""
Command line interface for Android Studio release updates.
"""
import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from studio_releases import __version__
from studio_releases.core.config import ANDROID_STUDIO_RELEASES_LIST, Settings
from studio_releases.core.errors import ConfigError, FetchError, ReleaseParseError
from studio_releases.pipeline.extractor import Extractor

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_PARSE_ERROR = 1
EXIT_FETCH_ERROR = 3
EXIT_CONFIG_ERROR = 4


def build_parser() -> argparse.ArgumentParser:
    """Parses command line arguments."""
    parser = argparse.ArgumentParser(
        prog="android-studio-releases",
        description="CLI for Android Studio app updates",
        epilog=(
            "This tool parses the content of the Android Studio Releases List page: "
            f"{ANDROID_STUDIO_RELEASES_LIST}"
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--url", help="Releases list page to fetch")
    source.add_argument("--file", type=Path, help="Parse a saved copy of the page instead of fetching it")
    parser.add_argument(
        "--format",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)"
    )
    parser.add_argument(
        "--skip-malformed",
        action="store_true",
        default=None,
        help="Report and skip malformed rows instead of failing"
    )
    parser.add_argument("--config", help="YAML settings file")
    parser.add_argument("--log-level", help="Logging level (default: INFO)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Executable entry point."""
    args = build_parser().parse_args(argv)

    try:
        settings = Settings.load(args.config)
        overrides = settings.to_dict()
        if args.url:
            overrides['releases_url'] = args.url
        if args.skip_malformed is not None:
            overrides['skip_malformed'] = args.skip_malformed
        if args.log_level:
            overrides['log_level'] = args.log_level
        settings = Settings(**overrides)
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    html = None
    if args.file:
        try:
            html = args.file.read_text(encoding='utf-8')
        except OSError as e:
            print(f"Cannot read {args.file}: {e}", file=sys.stderr)
            return EXIT_FETCH_ERROR

    try:
        result = Extractor(settings).extract(html)
    except FetchError as e:
        print(f"Fetch failed: {e}", file=sys.stderr)
        return EXIT_FETCH_ERROR
    except ReleaseParseError as e:
        print(f"Parse failed: {e}", file=sys.stderr)
        return EXIT_PARSE_ERROR

    if args.format == "json":
        print(json.dumps([release.to_dict() for release in result], indent=2))
    else:
        for release in result:
            print(release)

    for error in result.skipped:
        print(f"Skipped {error}", file=sys.stderr)

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
