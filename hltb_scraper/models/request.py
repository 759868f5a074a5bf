"""Request and response descriptors passed between the pipeline stages."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class SearchRequest:
    """Fully-formed HTTP request descriptor."""
    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes | None = None


@dataclass(frozen=True)
class RawResponse:
    """Raw response body as returned by the transport."""
    status_code: int
    text: str
    url: str = ""
