"""Game-related data models."""

import json
import math
from dataclasses import dataclass, field
from typing import Any

STAT_NAMES: tuple[str, ...] = ("average", "median", "rushed", "leisure")
CATEGORY_NAMES: tuple[str, ...] = ("main_story", "main_extra", "completionist", "all_styles")


def _coerce_seconds(name: str, value: Any) -> float | None:
    """Validate a single statistic value (seconds or None)."""
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{name} must be a number of seconds or None, got {value!r}")
    seconds = float(value)
    if math.isnan(seconds) or math.isinf(seconds):
        raise ValueError(f"{name} must be finite, got {value!r}")
    if seconds < 0:
        raise ValueError(f"{name} must be non-negative, got {value!r}")
    return seconds


@dataclass(frozen=True)
class PlaytimeStats:
    """Playtime statistics for one category, in seconds.

    Every statistic is optional on its own. None means the site reported no
    data; it is never the same thing as 0.0.
    """
    average: float | None = None
    median: float | None = None
    rushed: float | None = None  # Fastest quarter of submissions
    leisure: float | None = None  # Slowest quarter of submissions

    def __post_init__(self) -> None:
        for name in STAT_NAMES:
            object.__setattr__(self, name, _coerce_seconds(name, getattr(self, name)))

    @property
    def is_empty(self) -> bool:
        """True when the category carries no statistic at all."""
        return all(getattr(self, name) is None for name in STAT_NAMES)

    def to_dict(self) -> dict[str, float | None]:
        return {name: getattr(self, name) for name in STAT_NAMES}

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "PlaytimeStats":
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ValueError(f"Playtime statistics must be an object, got {type(data).__name__}")
        return cls(**{name: data.get(name) for name in STAT_NAMES})


@dataclass(frozen=True)
class GameRecord:
    """Core game record: identity plus the four playtime categories."""
    id: int
    title: str
    main_story: PlaytimeStats = field(default_factory=PlaytimeStats)
    main_extra: PlaytimeStats = field(default_factory=PlaytimeStats)
    completionist: PlaytimeStats = field(default_factory=PlaytimeStats)
    all_styles: PlaytimeStats = field(default_factory=PlaytimeStats)

    def to_dict(self) -> dict[str, Any]:
        """Convert the record to a JSON-compatible dictionary."""
        data: dict[str, Any] = {"id": self.id, "title": self.title}
        for name in CATEGORY_NAMES:
            data[name] = getattr(self, name).to_dict()
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GameRecord":
        """Build a record from a dictionary produced by to_dict.

        A missing category reads as a category with no statistics.

        Raises:
            ValueError: If the identity fields are missing or mistyped
        """
        if not isinstance(data, dict):
            raise ValueError(f"Game record must be an object, got {type(data).__name__}")

        game_id = data.get("id")
        if isinstance(game_id, bool) or not isinstance(game_id, int):
            raise ValueError(f"Game record id must be an integer, got {game_id!r}")

        title = data.get("title")
        if not isinstance(title, str):
            raise ValueError(f"Game record title must be a string, got {title!r}")

        categories = {name: PlaytimeStats.from_dict(data.get(name)) for name in CATEGORY_NAMES}
        return cls(id=game_id, title=title, **categories)

    def to_json(self, indent: int | None = None) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    @classmethod
    def from_json(cls, text: str) -> "GameRecord":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid game record JSON: {e}") from e
        return cls.from_dict(data)
