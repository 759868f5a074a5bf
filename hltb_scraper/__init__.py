"""Playtime estimates from HowLongToBeat.

Example:
    from hltb_scraper import search_by_name

    record = search_by_name("Cyberpunk 2077")
    print(record.main_story.average)  # seconds, or None
"""

from .models import GameRecord, PlaytimeStats, RawResponse, ScraperConfig, SearchRequest
from .services import (
    ConfigurationError,
    EmptyQueryError,
    GameScraperService,
    HttpStatusError,
    HttpTransport,
    MalformedEntryError,
    NetworkError,
    NoResultsFoundError,
    ParseError,
    RequestTimeoutError,
    ScraperError,
    Transport,
    TransportError,
    build_game_page_request,
    build_search_request,
    get_by_id,
    parse,
    parse_duration,
    parse_game_page,
    search_by_name,
)

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "EmptyQueryError",
    "GameRecord",
    "GameScraperService",
    "HttpStatusError",
    "HttpTransport",
    "MalformedEntryError",
    "NetworkError",
    "NoResultsFoundError",
    "ParseError",
    "PlaytimeStats",
    "RawResponse",
    "RequestTimeoutError",
    "ScraperConfig",
    "ScraperError",
    "SearchRequest",
    "Transport",
    "TransportError",
    "build_game_page_request",
    "build_search_request",
    "get_by_id",
    "parse",
    "parse_duration",
    "parse_game_page",
    "search_by_name",
]
