"""Data models for the HowLongToBeat scraper."""

from .config import DEFAULT_BASE_URL, DEFAULT_USER_AGENT, ScraperConfig
from .game import CATEGORY_NAMES, STAT_NAMES, GameRecord, PlaytimeStats
from .request import RawResponse, SearchRequest

__all__ = [
    "CATEGORY_NAMES",
    "DEFAULT_BASE_URL",
    "DEFAULT_USER_AGENT",
    "GameRecord",
    "PlaytimeStats",
    "RawResponse",
    "ScraperConfig",
    "SearchRequest",
    "STAT_NAMES",
]
