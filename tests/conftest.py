"""
Shared fixtures: captured-style response bodies for the parser and the
services built on top of it. No test in this suite touches the network.
"""

import json
from collections.abc import Callable, Iterator
from typing import Any

import pytest
from structlog.testing import capture_logs

CYBERPUNK_ENTRY: dict[str, Any] = {
    "game_id": 2127,
    "game_name": "Cyberpunk 2077",
    "game_type": "game",
    "comp_main": 94860,
    "comp_main_med": 90000,
    "comp_main_l": 64800,
    "comp_main_h": 151200,
    "comp_main_count": 3120,
    "comp_plus": 216000,
    "comp_plus_med": 205200,
    "comp_plus_l": 144000,
    "comp_plus_h": 324000,
    "comp_plus_count": 2710,
    "comp_100": 371160,
    "comp_100_count": 830,
    "comp_all": 192240,
    "comp_all_count": 6660,
    "profile_platform": "PC, PlayStation 4, PlayStation 5, Xbox One, Xbox Series X/S",
    "release_world": 2020,
}

PHANTOM_LIBERTY_ENTRY: dict[str, Any] = {
    "game_id": 138591,
    "game_name": "Cyberpunk 2077: Phantom Liberty",
    "comp_main": 75600,
    "comp_main_count": 400,
}


@pytest.fixture(autouse=True)
def captured_logs() -> Iterator[list[dict[str, Any]]]:
    """Keep structlog output off stdout and expose the emitted events."""
    with capture_logs() as logs:
        yield logs


def _search_payload(entries: list[dict[str, Any]]) -> dict[str, Any]:
    return {
        "color": "blue",
        "title": "",
        "category": "games",
        "count": len(entries),
        "pageCurrent": 1,
        "pageTotal": 1,
        "pageSize": 20,
        "data": entries,
        "userData": [],
        "displayModifier": None,
    }


@pytest.fixture
def make_search_json() -> Callable[[list[dict[str, Any]]], str]:
    """Factory for a JSON search backend body holding the given entries."""
    def factory(entries: list[dict[str, Any]]) -> str:
        return json.dumps(_search_payload(entries))
    return factory


@pytest.fixture
def cyberpunk_json_body(make_search_json: Callable[[list[dict[str, Any]]], str]) -> str:
    return make_search_json([CYBERPUNK_ENTRY, PHANTOM_LIBERTY_ENTRY])


@pytest.fixture
def cyberpunk_next_data_html() -> str:
    """Search page with its results embedded as Next.js page data."""
    next_data = {
        "props": {
            "pageProps": {
                "searchResults": _search_payload([CYBERPUNK_ENTRY, PHANTOM_LIBERTY_ENTRY]),
            }
        },
        "page": "/",
        "query": {"q": "Cyberpunk 2077"},
    }
    return f"""
    <html>
        <head><title>HowLongToBeat</title></head>
        <body>
            <div id="__next"></div>
            <script id="__NEXT_DATA__" type="application/json">{json.dumps(next_data)}</script>
        </body>
    </html>
    """


def create_game_card_html(game_id: int, title: str, times: list[tuple[str, str]]) -> str:
    """Create one search result card with label/value time tidbits."""
    tidbits = "".join(
        f'<div class="GameCard_search_list_tidbit__0r_OP text_white shadow_text">{label}</div>'
        f'<div class="GameCard_search_list_tidbit__0r_OP center time_100">{value}</div>'
        for label, value in times
    )
    return f"""
    <li class="back_darkish GameCard_search_list__IuMbi">
        <div class="GameCard_search_list_image__ZKfyS">
            <a aria-label="{title}" title="{title}" href="/game/{game_id}"><img alt="{title}" src="/games/{game_id}.jpg"/></a>
        </div>
        <div class="GameCard_search_list_details__yZ6Wd">
            <h2><a class="text_white" title="{title}" href="/game/{game_id}">{title}</a></h2>
            <div class="GameCard_search_list_details_block__XdeKK">
                <div>{tidbits}</div>
            </div>
        </div>
    </li>
    """


def create_search_page_html(cards: list[str], query: str = "") -> str:
    """Create a search results page wrapping the given cards."""
    return f"""
    <html>
        <body>
            <div id="search-results-header">
                <h3>We Found {len(cards)} Games for "{query}"</h3>
                <ul>{"".join(cards)}</ul>
            </div>
        </body>
    </html>
    """


@pytest.fixture
def cyberpunk_search_html() -> str:
    cards = [
        create_game_card_html(
            2127,
            "Cyberpunk 2077",
            [("Main Story", "26h 21m"), ("Main + Extra", "60 Hours"), ("Completionist", "103&#189; Hours")],
        ),
        create_game_card_html(
            138591,
            "Cyberpunk 2077: Phantom Liberty",
            [("Main Story", "21 Hours")],
        ),
    ]
    return create_search_page_html(cards, "Cyberpunk 2077")


@pytest.fixture
def empty_search_html() -> str:
    return create_search_page_html([], "zzzz not a game")


@pytest.fixture
def metal_gear_game_page_html() -> str:
    """Game detail page with the full time table."""
    return """
    <html>
        <body>
            <div id="__next">
                <main>
                    <div class="GameHeader_profile_header__q_PID shadow_text">Metal Gear</div>
                    <div class="content_75_static">
                        <table class="GameTimeTable_game_main_table__7uN3H">
                            <thead>
                                <tr><td>Single-Player</td><td>Polled</td><td>Average</td><td>Median</td><td>Rushed</td><td>Leisure</td></tr>
                            </thead>
                            <tbody>
                                <tr><td>Main Story</td><td>412</td><td>4h 8m</td><td>4h</td><td>2h 45m</td><td>7h 12m</td></tr>
                                <tr><td>Main + Extras</td><td>96</td><td>5h</td><td>4h 55m</td><td>3h 34m</td><td>7h 31m</td></tr>
                                <tr><td>Completionist</td><td>71</td><td>5h 25m</td><td>5h</td><td>4h 5m</td><td>10h 36m</td></tr>
                                <tr><td>All PlayStyles</td><td>579</td><td>4h 31m</td><td>4h</td><td>2h 51m</td><td>10h 7m</td></tr>
                            </tbody>
                        </table>
                    </div>
                </main>
            </div>
        </body>
    </html>
    """


@pytest.fixture
def make_game_card() -> Callable[[int, str, list[tuple[str, str]]], str]:
    return create_game_card_html


@pytest.fixture
def make_search_page() -> Callable[..., str]:
    return create_search_page_html
