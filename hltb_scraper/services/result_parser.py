"""Extracts the best-matching game from a raw site response.

The site is not a versioned API. Three shapes are understood, tried in
order:

1. A JSON body (``{"data": [...]}``) as returned by the search backend.
2. JSON embedded in the HTML page (``<script id="__NEXT_DATA__">``).
3. Plain HTML markup: search result cards or a game detail page.

Only the first entry of the listing is used; the site's own ranking is
trusted as the definition of "best match".
"""

import json
import math
import re
from decimal import Decimal, InvalidOperation
from typing import Any

import structlog
from bs4 import BeautifulSoup, Tag

from ..models import CATEGORY_NAMES, GameRecord, PlaytimeStats
from .errors import MalformedEntryError, NoResultsFoundError, ParseError

log = structlog.stdlib.get_logger()

_UNIT_SECONDS: dict[str, Decimal] = {
    "h": Decimal(3600),
    "m": Decimal(60),
    "s": Decimal(1),
}

_FRACTIONS: dict[str, Decimal] = {
    "½": Decimal("0.5"),
    "¼": Decimal("0.25"),
    "¾": Decimal("0.75"),
}

_TIME_TOKEN = re.compile(
    r"(?P<whole>\d+(?:\.\d+)?)?\s*(?P<frac>[½¼¾])?\s*"
    r"(?P<unit>hours?|hrs?|h|minutes?|mins?|m|seconds?|secs?|s)(?![a-z])",
    re.IGNORECASE,
)

_BARE_NUMBER = re.compile(r"\d+(?:\.\d+)?")

_GAME_LINK = re.compile(r"(?:^|/)game/(\d+)(?:[/?#]|$)")

# Field prefixes used by the site's JSON payloads
_JSON_CATEGORY_PREFIXES: dict[str, str] = {
    "main_story": "comp_main",
    "main_extra": "comp_plus",
    "completionist": "comp_100",
    "all_styles": "comp_all",
}

# Statistic name -> suffixes to try, in order
_JSON_STAT_SUFFIXES: dict[str, tuple[str, ...]] = {
    "average": ("_avg", ""),
    "median": ("_med",),
    "rushed": ("_l",),
    "leisure": ("_h",),
}

_CATEGORY_LABELS: dict[str, str] = {
    "mainstory": "main_story",
    "main+extra": "main_extra",
    "main+extras": "main_extra",
    "main+sides": "main_extra",
    "completionist": "completionist",
    "allstyles": "all_styles",
    "allplaystyles": "all_styles",
}

_NO_RESULTS_TEXT = re.compile(r"no results for", re.IGNORECASE)

_LEAF_TAGS = ["div", "span", "li", "h4", "h5", "td"]


def parse_duration(text: str | None) -> float | None:
    """Convert a textual time expression to seconds.

    Understands hour/minute/second units in their usual spellings
    ("94 Hours", "88.9h", "45 Mins", "26h 21m"), the vulgar fractions
    ½ ¼ ¾ as a fraction of the unit ("94½ Hours") and bare numbers, which
    are taken to be seconds already.

    Returns:
        Seconds as a float, or None when the text is not a time expression
    """
    if text is None:
        return None

    cleaned = text.replace("\xa0", " ").strip()
    if not cleaned:
        return None

    if _BARE_NUMBER.fullmatch(cleaned):
        return _finite_seconds(Decimal(cleaned))

    total = Decimal(0)
    position = 0
    matched = False
    for match in _TIME_TOKEN.finditer(cleaned):
        # Anything between tokens other than whitespace makes the expression unreadable
        if cleaned[position:match.start()].strip():
            return None
        whole, frac = match.group("whole"), match.group("frac")
        if whole is None and frac is None:
            return None

        try:
            magnitude = Decimal(whole) if whole else Decimal(0)
        except InvalidOperation:
            return None
        if frac:
            magnitude += _FRACTIONS[frac]

        total += magnitude * _UNIT_SECONDS[match.group("unit")[0].lower()]
        position = match.end()
        matched = True

    if not matched or cleaned[position:].strip():
        return None
    return _finite_seconds(total)


def _finite_seconds(value: Decimal) -> float | None:
    # Magnitudes beyond float range are not a playtime
    seconds = float(value)
    return seconds if math.isfinite(seconds) else None


def parse(raw_body: str, query_title: str) -> GameRecord:
    """Parse a search response into the best-matching game record.

    Args:
        raw_body: Raw response body from the search page or backend
        query_title: Title that was searched for (diagnostics only)

    Returns:
        The first-ranked entry as a GameRecord

    Raises:
        NoResultsFoundError: If the listing is present but empty
        MalformedEntryError: If the first entry lacks an identifier or title
        ParseError: If no listing can be found in the body
    """
    if not raw_body or not raw_body.strip():
        raise ParseError("Response body is empty", query_title=query_title)

    entries = _find_json_entries(raw_body)
    if entries is not None:
        log.debug("JSON results found", query=query_title, entries=len(entries))
        if not entries:
            raise NoResultsFoundError(query_title)
        return _record_from_json(entries[0], query_title)

    soup = BeautifulSoup(raw_body, "html.parser")

    entries = _find_embedded_entries(soup)
    if entries:
        log.debug("Embedded JSON results found", query=query_title, entries=len(entries))
        return _record_from_json(entries[0], query_title)

    # An empty embedded listing only counts once the markup has no cards either
    cards, has_container = _find_html_entries(soup)
    log.debug("HTML results found", query=query_title, entries=len(cards), container=has_container)
    if cards:
        return _record_from_html(cards[0], query_title)
    if entries is not None or has_container or _NO_RESULTS_TEXT.search(soup.get_text(" ")):
        raise NoResultsFoundError(query_title)

    raise ParseError("No search results listing found in response", query_title=query_title)


def parse_game_page(raw_body: str, game_id: int) -> GameRecord:
    """Parse a game detail page.

    Embedded JSON is only used when it holds an entry for game_id; other
    entries (related games, DLC) are never returned in its place. The
    markup fallback takes game_id as the identifier.

    Raises:
        MalformedEntryError: If the page has no readable title
        ParseError: If the page does not look like a game page
    """
    label = f"game/{game_id}"
    if not raw_body or not raw_body.strip():
        raise ParseError("Response body is empty", query_title=label)

    entries = _find_json_entries(raw_body)
    soup: BeautifulSoup | None = None
    if entries is None:
        soup = BeautifulSoup(raw_body, "html.parser")
        entries = _find_embedded_entries(soup)

    if entries:
        entry = next((e for e in entries if _to_int(e.get("game_id")) == game_id), None)
        if entry is not None:
            return _record_from_json(entry, label)
        log.debug("No embedded entry for requested game", game_id=game_id, entries=len(entries))

    if soup is None:
        raise ParseError("Game page JSON has no entry for the requested game", query_title=label)

    header = soup.select_one('[class*="GameHeader_profile_header"]')
    table = soup.select_one('table[class*="GameTimeTable"]')
    if header is None and table is None:
        raise ParseError("No game details found in response", query_title=label)

    title = header.get_text(" ", strip=True) if header is not None else ""
    if not title:
        raise MalformedEntryError("Game page has no title", query_title=label, field_name="title")

    log.debug("Game page parsed", game_id=game_id, title=title)
    return GameRecord(id=game_id, title=title, **_categories_from_html(soup))


def _to_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdecimal():
        return int(value.strip())
    return None


def _load_json(text: str) -> Any:
    try:
        return json.loads(text)
    except ValueError:
        return None


def _find_game_list(node: Any) -> list[dict[str, Any]] | None:
    """Depth-first search for the first list of objects carrying a game_id."""
    if isinstance(node, list):
        if node and all(isinstance(item, dict) for item in node) and any("game_id" in item for item in node):
            return node
        for item in node:
            found = _find_game_list(item)
            if found is not None:
                return found
    elif isinstance(node, dict):
        for value in node.values():
            found = _find_game_list(value)
            if found is not None:
                return found
    return None


def _has_empty_listing(node: Any, top_level: bool = True) -> bool:
    """True if the payload holds an empty ``data`` results array.

    Below the top level only a search listing qualifies, i.e. one that also
    reports a result ``count``.
    """
    if isinstance(node, dict):
        if node.get("data") == [] and (top_level or "count" in node):
            return True
        return any(_has_empty_listing(value, top_level=False) for value in node.values())
    if isinstance(node, list):
        return any(_has_empty_listing(item, top_level=False) for item in node)
    return False


def _entries_from_payload(payload: Any) -> list[dict[str, Any]] | None:
    found = _find_game_list(payload)
    if found is not None:
        return found
    if _has_empty_listing(payload):
        return []
    return None


def _find_json_entries(raw_body: str) -> list[dict[str, Any]] | None:
    stripped = raw_body.lstrip()
    if not stripped.startswith(("{", "[")):
        return None
    payload = _load_json(stripped)
    if payload is None:
        return None
    return _entries_from_payload(payload)


def _find_embedded_entries(soup: BeautifulSoup) -> list[dict[str, Any]] | None:
    scripts = soup.find_all("script", attrs={"id": "__NEXT_DATA__"})
    scripts += [s for s in soup.find_all("script", attrs={"type": "application/json"}) if s not in scripts]
    for script in scripts:
        payload = _load_json(script.string or "")
        if payload is None:
            continue
        entries = _entries_from_payload(payload)
        if entries is not None:
            return entries
    return None


def _json_seconds(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value) if math.isfinite(value) and value >= 0 else None
    if isinstance(value, str):
        return parse_duration(value)
    return None


def _record_from_json(entry: dict[str, Any], query_title: str) -> GameRecord:
    game_id = _to_int(entry.get("game_id"))
    if game_id is None:
        raise MalformedEntryError("Result entry has no usable game_id", query_title=query_title, field_name="game_id")

    title = entry.get("game_name")
    if not isinstance(title, str) or not title.strip():
        raise MalformedEntryError("Result entry has no game_name", query_title=query_title, field_name="game_name")

    categories: dict[str, PlaytimeStats] = {}
    for category, prefix in _JSON_CATEGORY_PREFIXES.items():
        count = entry.get(f"{prefix}_count")
        if count is not None and _to_int(count) == 0:
            log.debug("Category has no submissions", game_id=game_id, category=category)
            categories[category] = PlaytimeStats()
            continue

        stats: dict[str, float | None] = {}
        for stat, suffixes in _JSON_STAT_SUFFIXES.items():
            stats[stat] = None
            for suffix in suffixes:
                key = prefix + suffix
                if key in entry:
                    stats[stat] = _json_seconds(entry[key])
                    break
        categories[category] = PlaytimeStats(**stats)

    return GameRecord(id=game_id, title=title.strip(), **categories)


def _find_html_entries(soup: BeautifulSoup) -> tuple[list[Tag], bool]:
    """Find result cards. Returns (cards, whether a results container exists)."""
    header = soup.select_one("#search-results-header")
    if header is not None:
        listing = header.find("ul")
        if listing is not None:
            items = listing.find_all("li", recursive=False)
            return [item for item in items if _entry_game_link(item) is not None or item.get_text(strip=True)], True

    cards = soup.select('li[class*="GameCard"]')
    return cards, False


def _entry_game_link(entry: Tag) -> tuple[int, Tag] | None:
    for link in entry.find_all("a", href=True):
        href = link["href"]
        if isinstance(href, list):
            href = href[0]
        match = _GAME_LINK.search(href)
        if match:
            return int(match.group(1)), link
    return None


def _entry_title(entry: Tag, game_id: int) -> str:
    links = []
    for link in entry.find_all("a", href=True):
        match = _GAME_LINK.search(str(link["href"]))
        if match and int(match.group(1)) == game_id:
            links.append(link)
    # Heading links carry the display title; image links only carry a title attribute
    for link in links:
        if link.find_parent(["h2", "h3"]) is not None:
            text = link.get_text(" ", strip=True)
            if text:
                return text
    for link in links:
        text = link.get_text(" ", strip=True)
        if text:
            return text
    for link in links:
        attr = link.get("title")
        if isinstance(attr, str) and attr.strip():
            return attr.strip()
    return ""


def _record_from_html(entry: Tag, query_title: str) -> GameRecord:
    found = _entry_game_link(entry)
    if found is None:
        raise MalformedEntryError("Result entry has no game link", query_title=query_title, field_name="id")
    game_id, _ = found

    title = _entry_title(entry, game_id)
    if not title:
        raise MalformedEntryError("Result entry has no title", query_title=query_title, field_name="title")

    return GameRecord(id=game_id, title=title, **_categories_from_html(entry))


def _category_for_label(label: str) -> str | None:
    normalized = re.sub(r"[^a-z0-9+]", "", label.lower())
    return _CATEGORY_LABELS.get(normalized)


def _categories_from_html(root: Tag) -> dict[str, PlaytimeStats]:
    categories = _categories_from_table(root)
    if not categories:
        categories = _categories_from_tidbits(root)
    return {name: categories.get(name, PlaytimeStats()) for name in CATEGORY_NAMES}


def _categories_from_table(root: Tag) -> dict[str, PlaytimeStats]:
    """Read time table rows: label, polled, average, median, rushed, leisure."""
    categories: dict[str, PlaytimeStats] = {}
    for row in root.select("table tr"):
        cells = row.find_all(["td", "th"])
        if not cells:
            continue
        category = _category_for_label(cells[0].get_text(" ", strip=True))
        if category is None or category in categories:
            continue

        values = [parse_duration(cell.get_text(" ", strip=True)) for cell in cells[2:6]]
        values += [None] * (4 - len(values))
        categories[category] = PlaytimeStats(*values)
    return categories


def _categories_from_tidbits(root: Tag) -> dict[str, PlaytimeStats]:
    """Read label/value pairs from a card; these only carry the average."""
    texts = [
        element.get_text(" ", strip=True)
        for element in root.find_all(_LEAF_TAGS)
        if element.find(_LEAF_TAGS) is None
    ]
    categories: dict[str, PlaytimeStats] = {}
    for index, text in enumerate(texts[:-1]):
        category = _category_for_label(text)
        if category is None or category in categories:
            continue
        categories[category] = PlaytimeStats(average=parse_duration(texts[index + 1]))
    return categories
