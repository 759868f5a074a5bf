"""Command-line entry point for the HowLongToBeat scraper.

This module provides:
- Command-line argument parsing
- Logging and configuration setup
- Mapping of scraper errors to exit codes
"""

import argparse
import sys
from pathlib import Path

import structlog

from hltb_scraper.models import CATEGORY_NAMES, STAT_NAMES, GameRecord, ScraperConfig
from hltb_scraper.services.config import VALID_LOG_LEVELS, ConfigurationService
from hltb_scraper.services.errors import (
    ConfigurationError,
    EmptyQueryError,
    NoResultsFoundError,
    ParseError,
    ScraperError,
    TransportError,
    format_user_message,
)
from hltb_scraper.services.game_scraper import get_by_id, search_by_name
from hltb_scraper.services.logging import setup_logging

log = structlog.stdlib.get_logger()

VERSION = "0.1.0"

EXIT_OK = 0
EXIT_NO_RESULTS = 1
EXIT_USAGE = 2
EXIT_TRANSPORT = 3
EXIT_PARSE = 4

CATEGORY_LABELS = {
    "main_story": "Main Story",
    "main_extra": "Main + Extra",
    "completionist": "Completionist",
    "all_styles": "All Styles",
}


class ParsedArgs:
    """Type-safe container for parsed command-line arguments."""

    def __init__(
        self,
        title: str,
        as_json: bool,
        by_id: bool,
        timeout: float | None,
        config: Path | None,
        log_level: str | None,
        log_dir: Path | None,
    ) -> None:
        self.title: str = title
        self.as_json: bool = as_json
        self.by_id: bool = by_id
        self.timeout: float | None = timeout
        self.config: Path | None = config
        self.log_level: str | None = log_level
        self.log_dir: Path | None = log_dir


def parse_arguments(argv: list[str] | None = None) -> ParsedArgs:
    """Parse command-line arguments.

    Returns:
        Parsed arguments container
    """
    parser = argparse.ArgumentParser(
        prog="hltb-search",
        description="Look up HowLongToBeat playtime estimates for a game",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  hltb-search "Cyberpunk 2077"          Print playtimes for the best match
  hltb-search "Metal Gear" --json       Print the record as JSON
  hltb-search 2127 --id                 Look a game up by its site id
        """
    )

    _ = parser.add_argument("title", help="Game title (or site id with --id)")

    _ = parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {VERSION}"
    )

    _ = parser.add_argument(
        "--json",
        dest="as_json",
        action="store_true",
        help="Print the record as JSON"
    )

    _ = parser.add_argument(
        "--id",
        dest="by_id",
        action="store_true",
        help="Treat TITLE as a site identifier and fetch the game page"
    )

    _ = parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Request timeout in seconds (default: no timeout)"
    )

    _ = parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a JSON configuration file"
    )

    _ = parser.add_argument(
        "--log-level",
        choices=list(VALID_LOG_LEVELS),
        default=None,
        help="Set the logging level (default: WARNING)"
    )

    _ = parser.add_argument(
        "--log-dir",
        type=Path,
        default=None,
        help="Directory for log files (default: console only)"
    )

    ns = parser.parse_args(argv)

    return ParsedArgs(
        title=ns.title,
        as_json=bool(ns.as_json),
        by_id=bool(ns.by_id),
        timeout=ns.timeout,
        config=ns.config,
        log_level=ns.log_level,
        log_dir=ns.log_dir,
    )


def format_duration(seconds: float | None) -> str:
    """Render seconds as hours and minutes, or "--" when absent."""
    if seconds is None:
        return "--"
    minutes = int(round(seconds / 60))
    hours, minutes = divmod(minutes, 60)
    if hours and minutes:
        return f"{hours}h {minutes}m"
    if hours:
        return f"{hours}h"
    return f"{minutes}m"


def format_record(record: GameRecord) -> str:
    """Render a record as a small text table."""
    lines = [f"{record.title} (id {record.id})", ""]
    header = f"{'':<15}" + "".join(f"{name.capitalize():>10}" for name in STAT_NAMES)
    lines.append(header)
    for category in CATEGORY_NAMES:
        stats = getattr(record, category)
        row = f"{CATEGORY_LABELS[category]:<15}"
        row += "".join(f"{format_duration(getattr(stats, name)):>10}" for name in STAT_NAMES)
        lines.append(row)
    return "\n".join(lines)


def build_config(args: ParsedArgs) -> ScraperConfig:
    """Merge the config file (if any) with command-line overrides.

    Raises:
        ConfigurationError: If the resulting configuration is invalid
    """
    service = ConfigurationService(config_path=args.config)
    config = service.load_config()
    data = service.config_to_dict(config)
    if args.timeout is not None:
        data["timeout"] = args.timeout
    if args.log_level is not None:
        data["log_level"] = args.log_level
    return service.require_valid(service.dict_to_config(data))


def run(args: ParsedArgs) -> int:
    """Run one lookup and print the result.

    Returns:
        Exit code
    """
    try:
        config = build_config(args)
    except ConfigurationError as e:
        print(format_user_message(e), file=sys.stderr)
        return EXIT_USAGE

    _ = setup_logging(log_level=config.log_level, log_dir=args.log_dir)

    try:
        if args.by_id:
            if not args.title.strip().isdecimal():
                print(f"Not a game id: {args.title!r}", file=sys.stderr)
                return EXIT_USAGE
            record = get_by_id(int(args.title.strip()), config)
        else:
            record = search_by_name(args.title, config)

    except EmptyQueryError as e:
        print(format_user_message(e), file=sys.stderr)
        return EXIT_USAGE
    except ValueError as e:
        print(str(e), file=sys.stderr)
        return EXIT_USAGE
    except NoResultsFoundError as e:
        print(format_user_message(e), file=sys.stderr)
        return EXIT_NO_RESULTS
    except TransportError as e:
        log.error("Lookup failed", error=e.message, details=e.technical_details)
        print(format_user_message(e), file=sys.stderr)
        return EXIT_TRANSPORT
    except ParseError as e:
        log.error("Response not understood", error=e.message, details=e.technical_details)
        print(format_user_message(e), file=sys.stderr)
        return EXIT_PARSE
    except ScraperError as e:
        print(format_user_message(e), file=sys.stderr)
        return EXIT_USAGE

    print(record.to_json(indent=2) if args.as_json else format_record(record))
    return EXIT_OK


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the command-line tool."""
    args = parse_arguments(argv)

    try:
        exit_code = run(args)
    except KeyboardInterrupt:
        exit_code = 130  # Standard exit code for SIGINT

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
