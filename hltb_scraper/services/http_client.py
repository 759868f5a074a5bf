"""HTTP transport service: the only component that touches the network."""

from typing import Any, Protocol

import httpx
import structlog

from ..models import RawResponse, SearchRequest
from .errors import HttpStatusError, NetworkError, RequestTimeoutError

log = structlog.stdlib.get_logger()


class Transport(Protocol):
    """Executes a request descriptor and returns the raw response."""

    def execute(self, request: SearchRequest) -> RawResponse:
        ...


class HttpTransport:
    """httpx-backed transport.

    One call to execute() is exactly one outbound request. There are no
    retries, no caching and no rate limiting; those belong to the caller.
    """

    def __init__(
        self,
        timeout: float | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        """Initialize the transport.

        Args:
            timeout: Request timeout in seconds (None waits indefinitely)
            client: Existing httpx client to use; the caller keeps ownership of it
        """
        self.timeout = timeout
        self._owns_client = client is None
        self._client = client or httpx.Client(
            timeout=httpx.Timeout(timeout),
            follow_redirects=True,
        )

        log.debug(
            "HTTP transport initialized",
            timeout=timeout,
            owns_client=self._owns_client,
        )

    def execute(self, request: SearchRequest) -> RawResponse:
        """Send the request and return the response body.

        Raises:
            RequestTimeoutError: If the site does not answer in time
            NetworkError: On any other connection-level failure
            HttpStatusError: If the response status is not 2xx
        """
        log.debug("Making HTTP request", method=request.method, url=request.url)

        try:
            response = self._client.request(
                request.method,
                request.url,
                headers=request.headers,
                content=request.body,
            )
            response.raise_for_status()

        except httpx.TimeoutException as e:
            log.debug("HTTP request timed out", url=request.url, error=str(e))
            raise RequestTimeoutError(url=request.url, timeout=self.timeout, original_error=e) from e

        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            log.debug("HTTP request returned error status", url=request.url, status_code=status_code)
            raise HttpStatusError(status_code, url=request.url, original_error=e) from e

        except httpx.RequestError as e:
            log.debug(
                "HTTP request failed",
                url=request.url,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise NetworkError(url=request.url, original_error=e) from e

        log.debug(
            "HTTP request successful",
            url=request.url,
            status_code=response.status_code,
            content_length=len(response.content),
        )
        return RawResponse(
            status_code=response.status_code,
            text=response.text,
            url=str(response.url),
        )

    def close(self) -> None:
        """Close the underlying client if this transport created it."""
        if self._owns_client:
            self._client.close()
            log.debug("HTTP transport closed")

    def __enter__(self) -> "HttpTransport":
        return self

    def __exit__(self, exc_type: type[BaseException] | None, exc_val: BaseException | None, exc_tb: Any) -> None:
        self.close()
