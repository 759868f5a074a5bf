"""Game search service composing query builder, transport and parser."""

import structlog

from ..models import GameRecord, ScraperConfig
from .http_client import HttpTransport, Transport
from .query_builder import build_game_page_request, build_search_request
from .result_parser import parse, parse_game_page

log = structlog.stdlib.get_logger()


class GameScraperService:
    """Service for looking up HowLongToBeat playtimes.

    Holds no state between calls beyond its collaborators, so a single
    instance may be shared by concurrent callers as long as its transport
    allows it.
    """

    def __init__(self, transport: Transport, config: ScraperConfig | None = None) -> None:
        """Initialize the game scraper service.

        Args:
            transport: Transport used to execute requests
            config: Scraper configuration (defaults when omitted)
        """
        self.transport: Transport = transport
        self.config: ScraperConfig = config or ScraperConfig()

    def search_by_name(self, title: str) -> GameRecord:
        """Search for a game and return its best match.

        Raises:
            EmptyQueryError: If the title is blank; no request is made
            TransportError: If the request fails
            NoResultsFoundError: If nothing matched
            ParseError: If the response could not be understood
        """
        request = build_search_request(
            title,
            base_url=self.config.base_url,
            user_agent=self.config.user_agent,
        )
        query = title.strip()
        log.debug("Searching for game", query=query)

        response = self.transport.execute(request)
        record = parse(response.text, query)

        log.debug("Game found", query=query, game_id=record.id, title=record.title)
        return record

    def get_by_id(self, game_id: int) -> GameRecord:
        """Fetch a game's detail page by its site identifier.

        Raises:
            ValueError: If game_id is not a positive integer
            TransportError: If the request fails
            ParseError: If the page could not be understood
        """
        request = build_game_page_request(
            game_id,
            base_url=self.config.base_url,
            user_agent=self.config.user_agent,
        )
        log.debug("Fetching game page", game_id=game_id)

        response = self.transport.execute(request)
        return parse_game_page(response.text, game_id)


def search_by_name(title: str, config: ScraperConfig | None = None) -> GameRecord:
    """Search for a game by name using a short-lived HTTP transport.

    Args:
        title: Game title to search for
        config: Optional configuration (timeout, base URL, user agent)

    Returns:
        The best-matching GameRecord
    """
    config = config or ScraperConfig()
    # Validate before opening a connection pool
    build_search_request(title, base_url=config.base_url, user_agent=config.user_agent)

    with HttpTransport(timeout=config.timeout) as transport:
        return GameScraperService(transport, config).search_by_name(title)


def get_by_id(game_id: int, config: ScraperConfig | None = None) -> GameRecord:
    """Fetch a game by its site identifier using a short-lived HTTP transport."""
    config = config or ScraperConfig()
    build_game_page_request(game_id, base_url=config.base_url, user_agent=config.user_agent)

    with HttpTransport(timeout=config.timeout) as transport:
        return GameScraperService(transport, config).get_by_id(game_id)
