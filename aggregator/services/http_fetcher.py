# aggregator/services/http_fetcher.py
"""
HTTP transport for news API requests.

One GET per call with a timeout and a flat-interval retry on transient
failures. Returns the status code and parsed JSON body, or raises a
FetchError subclass. No business logic lives here.
"""

import logging
from dataclasses import dataclass
from typing import Any, Mapping

import httpx

from aggregator.errors import InvalidResponseError, NetworkError
from aggregator.services.resilience import with_sync_retry

logger = logging.getLogger(__name__)

# 429 and 5xx are worth another attempt; other 4xx will fail the same way again
RETRYABLE_STATUS_CODES = frozenset({429, 500, 502, 503, 504})


class RetryableStatusError(Exception):
    """Internal signal that a response status should be retried."""

    def __init__(self, response: httpx.Response):
        super().__init__(f"HTTP {response.status_code}")
        self.response = response


@dataclass
class FetchResult:
    """Successful transport outcome."""

    status_code: int
    body: Any
    url: str


class HttpFetcher:
    """
    Thin wrapper over httpx.Client for news API calls.

    Defaults: 30s timeout, 3 attempts, 100ms flat delay between attempts.
    """

    DEFAULT_TIMEOUT = 30.0
    DEFAULT_MAX_ATTEMPTS = 3
    DEFAULT_RETRY_DELAY = 0.1
    USER_AGENT = "NewsAggregator/1.0 (+ingestion)"

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        retry_delay: float = DEFAULT_RETRY_DELAY,
    ):
        self.timeout = timeout
        self.max_attempts = max_attempts
        self.retry_delay = retry_delay
        self.client = httpx.Client(
            timeout=timeout,
            follow_redirects=True,
            headers={
                "Accept": "application/json",
                "User-Agent": self.USER_AGENT,
            },
        )
        self._get = with_sync_retry(
            max_attempts=max_attempts,
            min_wait=retry_delay,
            max_wait=retry_delay,
            backoff=1.0,
            retry_exceptions=(httpx.TransportError, RetryableStatusError),
        )(self._get_once)

    @classmethod
    def from_settings(cls, settings) -> "HttpFetcher":
        return cls(
            timeout=settings.HTTP_TIMEOUT_SECONDS,
            max_attempts=settings.HTTP_RETRY_ATTEMPTS,
            retry_delay=settings.HTTP_RETRY_DELAY_MS / 1000,
        )

    def _get_once(self, url: str, params: Mapping[str, Any]) -> httpx.Response:
        response = self.client.get(url, params=dict(params))
        if response.status_code in RETRYABLE_STATUS_CODES:
            raise RetryableStatusError(response)
        return response

    def get_json(self, url: str, params: Mapping[str, Any] | None = None) -> FetchResult:
        """
        GET url with query params and parse the JSON body.

        Raises:
            NetworkError: timeout/connection failure on every attempt
            InvalidResponseError: non-2xx status, non-JSON body, or empty body
        """
        try:
            response = self._get(url, params or {})
        except httpx.TransportError as e:
            raise NetworkError(f"Request to {url} failed: {e}") from e
        except RetryableStatusError as e:
            raise InvalidResponseError(
                f"HTTP {e.response.status_code} from {url}",
                status_code=e.response.status_code,
            ) from e

        logger.debug(
            f"API response {response.status_code} from {url}",
            extra={"event": "http_response", "url": url, "status_code": response.status_code},
        )

        if not response.is_success:
            raise InvalidResponseError(
                f"HTTP {response.status_code} from {url}",
                status_code=response.status_code,
            )

        try:
            body = response.json()
        except ValueError as e:
            raise InvalidResponseError(
                f"Non-JSON body from {url}",
                status_code=response.status_code,
            ) from e

        if not body:
            raise InvalidResponseError(
                f"Empty body from {url}",
                status_code=response.status_code,
            )

        return FetchResult(status_code=response.status_code, body=body, url=url)

    def close(self) -> None:
        """Close the HTTP client."""
        self.client.close()

    def __enter__(self) -> "HttpFetcher":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
