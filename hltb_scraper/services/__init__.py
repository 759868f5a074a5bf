"""Service layer: request building, transport, parsing and their wiring."""

from .config import ConfigurationService, ValidationResult
from .errors import (
    ConfigurationError,
    EmptyQueryError,
    ErrorCategory,
    HttpStatusError,
    MalformedEntryError,
    NetworkError,
    NoResultsFoundError,
    ParseError,
    RequestTimeoutError,
    ScraperError,
    TransportError,
    UserFriendlyError,
    format_user_message,
)
from .game_scraper import GameScraperService, get_by_id, search_by_name
from .http_client import HttpTransport, Transport
from .query_builder import build_game_page_request, build_search_request
from .result_parser import parse, parse_duration, parse_game_page

__all__ = [
    "ConfigurationError",
    "ConfigurationService",
    "EmptyQueryError",
    "ErrorCategory",
    "GameScraperService",
    "HttpStatusError",
    "HttpTransport",
    "MalformedEntryError",
    "NetworkError",
    "NoResultsFoundError",
    "ParseError",
    "RequestTimeoutError",
    "ScraperError",
    "Transport",
    "TransportError",
    "UserFriendlyError",
    "ValidationResult",
    "build_game_page_request",
    "build_search_request",
    "format_user_message",
    "get_by_id",
    "parse",
    "parse_duration",
    "parse_game_page",
    "search_by_name",
]
