"""Error types for the HowLongToBeat scraper.

Every failure surfaces as a subclass of ScraperError so callers can tell
invalid input, transient network trouble, a legitimate empty search and
site-format drift apart:

- EmptyQueryError: the title was empty after trimming
- NetworkError / RequestTimeoutError: transient, the caller may retry
- HttpStatusError: the site answered with a non-success status
- NoResultsFoundError: the search matched nothing
- ParseError / MalformedEntryError: the response no longer looks like the site
"""

from dataclasses import dataclass, field
from enum import Enum


class ErrorCategory(Enum):
    """Categories of errors for classification and handling."""
    VALIDATION = "validation"
    NETWORK = "network"
    NOT_FOUND = "not_found"
    PARSING = "parsing"
    CONFIGURATION = "configuration"


@dataclass(frozen=True)
class UserFriendlyError:
    """User-friendly error representation with suggested actions."""
    message: str
    category: ErrorCategory
    suggested_actions: list[str] = field(default_factory=list)
    technical_details: str | None = None
    recoverable: bool = False


class ScraperError(Exception):
    """Base exception class for scraper errors."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory,
        suggested_actions: list[str] | None = None,
        technical_details: str | None = None,
        recoverable: bool = False,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.category = category
        self.suggested_actions = suggested_actions or []
        self.technical_details = technical_details
        self.recoverable = recoverable

    def to_user_friendly(self) -> UserFriendlyError:
        """Convert to user-friendly error representation."""
        return UserFriendlyError(
            message=self.message,
            category=self.category,
            suggested_actions=list(self.suggested_actions),
            technical_details=self.technical_details,
            recoverable=self.recoverable,
        )


class EmptyQueryError(ScraperError):
    """The search title was empty or whitespace only."""

    def __init__(self, title: str = "") -> None:
        super().__init__(
            message="A game title is required to search.",
            category=ErrorCategory.VALIDATION,
            suggested_actions=["Provide a non-empty game title"],
            technical_details=f"Title: {title!r}",
            recoverable=False,
        )
        self.title = title


class TransportError(ScraperError):
    """Base class for failures while talking to the site."""

    def __init__(
        self,
        message: str,
        url: str | None = None,
        original_error: Exception | None = None,
        suggested_actions: list[str] | None = None,
        recoverable: bool = True,
        status_code: int | None = None,
    ) -> None:
        technical_details = None
        if original_error:
            technical_details = f"{type(original_error).__name__}: {original_error}"
        if url:
            technical_details = f"URL: {url}" + (f"\n{technical_details}" if technical_details else "")
        if status_code:
            technical_details = f"Status: {status_code}" + (f"\n{technical_details}" if technical_details else "")

        super().__init__(
            message=message,
            category=ErrorCategory.NETWORK,
            suggested_actions=suggested_actions,
            technical_details=technical_details,
            recoverable=recoverable,
        )
        self.url = url
        self.original_error = original_error


class NetworkError(TransportError):
    """Connection-level failure (DNS, refused connection, TLS, protocol)."""

    def __init__(
        self,
        message: str = "Unable to reach the site. Please check your internet connection.",
        url: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(
            message=message,
            url=url,
            original_error=original_error,
            suggested_actions=[
                "Check your internet connection",
                "Try again in a few moments",
            ],
            recoverable=True,
        )


class RequestTimeoutError(TransportError):
    """The site did not answer within the configured timeout."""

    def __init__(
        self,
        url: str | None = None,
        timeout: float | None = None,
        original_error: Exception | None = None,
    ) -> None:
        message = "The request timed out. The site may be slow or unavailable."
        if timeout is not None:
            message = f"The request timed out after {timeout:g} seconds."
        super().__init__(
            message=message,
            url=url,
            original_error=original_error,
            suggested_actions=[
                "Try again in a few moments",
                "Increase the timeout",
            ],
            recoverable=True,
        )
        self.timeout = timeout


class HttpStatusError(TransportError):
    """The site answered with a non-success HTTP status."""

    def __init__(
        self,
        status_code: int,
        url: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        if status_code == 429:
            suggested_actions = ["Wait a few minutes before retrying"]
        elif status_code == 404:
            suggested_actions = ["The requested page may no longer exist"]
        elif status_code >= 500:
            suggested_actions = ["The site is experiencing issues", "Try again later"]
        else:
            suggested_actions = ["The site rejected the request"]

        super().__init__(
            message=get_http_error_message(status_code),
            url=url,
            original_error=original_error,
            suggested_actions=suggested_actions,
            recoverable=status_code == 429 or status_code >= 500,
            status_code=status_code,
        )
        self.status_code = status_code


class NoResultsFoundError(ScraperError):
    """The search legitimately matched no game."""

    def __init__(self, query_title: str) -> None:
        super().__init__(
            message=f"No game found matching {query_title!r}.",
            category=ErrorCategory.NOT_FOUND,
            suggested_actions=[
                "Check the spelling of the title",
                "Try a shorter or more general title",
            ],
            technical_details=f"Query: {query_title!r}",
            recoverable=False,
        )
        self.query_title = query_title


class ParseError(ScraperError):
    """The response does not match the expected site structure."""

    def __init__(
        self,
        message: str,
        query_title: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        technical_details = None
        if query_title is not None:
            technical_details = f"Query: {query_title!r}"
        if original_error:
            technical_details = (technical_details or "") + f"\nError: {type(original_error).__name__}: {original_error}"

        super().__init__(
            message=message,
            category=ErrorCategory.PARSING,
            suggested_actions=[
                "The site's page structure may have changed",
                "Check for a newer release of this library",
            ],
            technical_details=technical_details,
            recoverable=False,
        )
        self.query_title = query_title
        self.original_error = original_error


class MalformedEntryError(ParseError):
    """A result entry was found but its identity could not be extracted."""

    def __init__(self, message: str, query_title: str | None = None, field_name: str | None = None) -> None:
        super().__init__(message=message, query_title=query_title)
        self.field_name = field_name
        if field_name:
            self.technical_details = (self.technical_details or "") + f"\nField: {field_name}"


class ConfigurationError(ScraperError):
    """Exception for configuration-related errors."""

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        super().__init__(
            message=message,
            category=ErrorCategory.CONFIGURATION,
            suggested_actions=[
                "Check the configuration settings",
                "Remove the setting to fall back to its default",
            ],
            technical_details="\n".join(errors) if errors else None,
            recoverable=False,
        )
        self.errors = errors or []


def get_http_error_message(status_code: int) -> str:
    """Get a user-friendly message for HTTP status codes."""
    messages = {
        400: "The request was invalid.",
        403: "Access denied. The site refused the request.",
        404: "The requested page was not found.",
        408: "The request timed out. Please try again.",
        429: "Too many requests. Please wait before trying again.",
        500: "The site encountered an error. Please try again later.",
        502: "The site is temporarily unavailable. Please try again later.",
        503: "The site is temporarily unavailable. Please try again later.",
        504: "The site took too long to respond. Please try again.",
    }
    return messages.get(status_code, f"HTTP error {status_code} occurred.")


def format_user_message(error: ScraperError | UserFriendlyError, include_suggestions: bool = True) -> str:
    """Create a formatted user message from an error.

    Args:
        error: The scraper error or its user-friendly form
        include_suggestions: Whether to include suggested actions

    Returns:
        Formatted message string
    """
    friendly = error.to_user_friendly() if isinstance(error, ScraperError) else error
    parts = [friendly.message]

    if include_suggestions and friendly.suggested_actions:
        parts.append("\nSuggested actions:")
        for action in friendly.suggested_actions[:3]:
            parts.append(f"  • {action}")

    return "\n".join(parts)
