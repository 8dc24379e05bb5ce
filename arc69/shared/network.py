"""HTTP transport for algod and indexer with timeout handling and retry logic."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import requests
from requests.exceptions import ConnectionError, HTTPError, Timeout

from arc69.shared.logging import get_logger

logger = get_logger(__name__)


class NetworkErrorType(Enum):
    TIMEOUT = "timeout"
    CONNECTION_ERROR = "connection_error"
    HTTP_ERROR = "http_error"
    UNKNOWN = "unknown"


@dataclass
class NetworkError(Exception):
    error_type: NetworkErrorType
    message: str
    original_error: Exception | None = None
    status_code: int | None = None
    response_text: str | None = None

    def __str__(self) -> str:
        return self.message


@dataclass
class TimeoutConfig:
    connect_timeout: float = 5.0
    read_timeout: float = 15.0

    @property
    def request_timeout(self) -> tuple[float, float]:
        return (self.connect_timeout, self.read_timeout)


@dataclass
class RetryConfig:
    """Exponential backoff: ``base_delay * 2**attempt``, capped at ``max_delay``."""

    max_retries: int = 3
    base_delay: float = 1.0
    max_delay: float = 30.0
    retryable_status_codes: frozenset[int] = field(
        default_factory=lambda: frozenset({408, 429, 500, 502, 503, 504})
    )

    def delay_for(self, attempt: int) -> float:
        return min(self.base_delay * 2**attempt, self.max_delay)


_ERROR_TYPES: list[tuple[type[Exception], NetworkErrorType]] = [
    (Timeout, NetworkErrorType.TIMEOUT),
    (ConnectionError, NetworkErrorType.CONNECTION_ERROR),
    (HTTPError, NetworkErrorType.HTTP_ERROR),
]


def classify_error(error: Exception) -> NetworkErrorType:
    for exc_type, error_type in _ERROR_TYPES:
        if isinstance(error, exc_type):
            return error_type
    return NetworkErrorType.UNKNOWN


def _status_code(error: Exception) -> int | None:
    return getattr(getattr(error, "response", None), "status_code", None)


def should_retry(error: Exception, retry_config: RetryConfig) -> bool:
    error_type = classify_error(error)
    if error_type in (NetworkErrorType.TIMEOUT, NetworkErrorType.CONNECTION_ERROR):
        return True
    if error_type == NetworkErrorType.HTTP_ERROR:
        return _status_code(error) in retry_config.retryable_status_codes
    return False


def _error_detail(response: Any) -> str | None:
    # algod and indexer report failures as {"message": "..."}
    if response is None:
        return None
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return getattr(response, "text", None)


def create_network_error(
    error: Exception, base_url: str, context: str = ""
) -> NetworkError:
    error_type = classify_error(error)
    prefix = f"{context}: " if context else ""
    status_code = None
    detail = None

    if error_type == NetworkErrorType.TIMEOUT:
        message = f"{prefix}Request to {base_url} timed out"
    elif error_type == NetworkErrorType.CONNECTION_ERROR:
        message = (
            f"{prefix}Cannot connect to {base_url}. "
            "Check the node URL and your network connection."
        )
    elif error_type == NetworkErrorType.HTTP_ERROR:
        status_code = _status_code(error)
        detail = _error_detail(getattr(error, "response", None))
        message = f"{prefix}HTTP error {status_code}: {detail or 'no details'}"
    else:
        message = f"{prefix}Network error: {error}"

    return NetworkError(
        error_type=error_type,
        message=message,
        original_error=error,
        status_code=status_code,
        response_text=detail,
    )


def _decode_body(response: requests.Response) -> dict[str, Any]:
    if not response.content:
        return {}
    try:
        return response.json()
    except ValueError:
        return {"message": response.text}


class NetworkClient:
    """JSON-over-HTTP client bound to one node.

    ``headers`` (usually the API token) go with every request. With
    ``retry=True`` timeouts, connection failures and retryable status codes are
    retried with backoff. With ``retry=False``, or for any other failure, the
    first error is raised as :class:`NetworkError`.
    """

    def __init__(
        self,
        base_url: str,
        headers: dict[str, str] | None = None,
        timeout_config: TimeoutConfig | None = None,
        retry_config: RetryConfig | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.headers = dict(headers or {})
        self.timeout_config = timeout_config or TimeoutConfig()
        self.retry_config = retry_config or RetryConfig()

    def request(
        self,
        method: str,
        endpoint: str,
        context: str = "",
        retry: bool = True,
        **kwargs: Any,
    ) -> dict[str, Any]:
        url = f"{self.base_url}{endpoint}"
        kwargs.setdefault("timeout", self.timeout_config.request_timeout)
        kwargs["headers"] = {**self.headers, **kwargs.get("headers", {})}
        attempts = self.retry_config.max_retries + 1 if retry else 1
        attempt = 0

        while True:
            try:
                response = requests.request(method, url, **kwargs)
                response.raise_for_status()
                return _decode_body(response)
            except Exception as e:
                attempt += 1
                if attempt >= attempts or not should_retry(e, self.retry_config):
                    raise create_network_error(e, self.base_url, context) from e

                delay = self.retry_config.delay_for(attempt - 1)
                logger.warning(
                    "%s %s failed (attempt %d/%d), retrying in %.1fs: %s",
                    method,
                    endpoint,
                    attempt,
                    attempts,
                    delay,
                    e,
                )
                time.sleep(delay)

    def get(self, endpoint: str, context: str = "", **kwargs: Any) -> dict[str, Any]:
        return self.request("GET", endpoint, context, **kwargs)

    def post(self, endpoint: str, context: str = "", **kwargs: Any) -> dict[str, Any]:
        return self.request("POST", endpoint, context, **kwargs)
