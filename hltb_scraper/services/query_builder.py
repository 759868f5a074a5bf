"""Builds HTTP request descriptors for the HowLongToBeat site."""

from urllib.parse import quote

import structlog

from ..models import DEFAULT_BASE_URL, DEFAULT_USER_AGENT, SearchRequest
from .errors import EmptyQueryError

log = structlog.stdlib.get_logger()


def _default_headers(base_url: str, user_agent: str) -> dict[str, str]:
    return {
        "User-Agent": user_agent,
        "Accept": "text/html,application/xhtml+xml,application/json;q=0.9,*/*;q=0.8",
        "Referer": f"{base_url}/",
    }


def build_search_request(
    title: str,
    base_url: str = DEFAULT_BASE_URL,
    user_agent: str = DEFAULT_USER_AGENT,
) -> SearchRequest:
    """Build the search request for a game title.

    The title is trimmed and percent-encoded with every reserved character
    escaped, so quotes, ampersands, slashes and unicode survive intact.

    Args:
        title: Display title of the game
        base_url: Site root, without trailing slash
        user_agent: User-Agent header to send

    Returns:
        GET request descriptor for the search page

    Raises:
        EmptyQueryError: If the title is empty after trimming
    """
    query = title.strip() if isinstance(title, str) else ""
    if not query:
        raise EmptyQueryError(title if isinstance(title, str) else repr(title))

    base_url = base_url.rstrip("/")
    url = f"{base_url}/?q={quote(query, safe='')}"
    log.debug("Search request built", query=query, url=url)

    return SearchRequest(
        method="GET",
        url=url,
        headers=_default_headers(base_url, user_agent),
    )


def build_game_page_request(
    game_id: int,
    base_url: str = DEFAULT_BASE_URL,
    user_agent: str = DEFAULT_USER_AGENT,
) -> SearchRequest:
    """Build the request for a game's detail page.

    Raises:
        ValueError: If game_id is not a positive integer
    """
    if isinstance(game_id, bool) or not isinstance(game_id, int) or game_id <= 0:
        raise ValueError(f"game_id must be a positive integer, got {game_id!r}")

    base_url = base_url.rstrip("/")
    return SearchRequest(
        method="GET",
        url=f"{base_url}/game/{game_id}",
        headers=_default_headers(base_url, user_agent),
    )
