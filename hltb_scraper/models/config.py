"""Configuration data models."""

from dataclasses import dataclass

DEFAULT_BASE_URL = "https://howlongtobeat.com"
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
)


@dataclass(frozen=True)
class ScraperConfig:
    """Scraper configuration settings."""
    base_url: str = DEFAULT_BASE_URL
    user_agent: str = DEFAULT_USER_AGENT
    timeout: float | None = None  # None = wait indefinitely
    log_level: str = "WARNING"
