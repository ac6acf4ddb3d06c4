"""Shared HTTP plumbing for the transcription and generation providers."""

from collections.abc import Callable
import time
from typing import Any

import requests

from lyric_grader.errors import ProviderError, ProviderNotConfiguredError

# Called with (attempt, delay_seconds, error) before each retry
RetryCallback = Callable[[int, float, ProviderError], None]


class ProviderClient:
    """Bearer-authenticated JSON client with retry and exponential backoff.

    Client errors (4xx) are raised immediately. Anything else, including
    connection failures, is retried up to ``max_retries`` attempts with the
    delay doubling after each one. Non-idempotent requests are narrower:
    see request_json().
    """

    #: Used in "not configured" messages, e.g. "Suno API"
    provider_name = "Provider API"

    def __init__(
        self,
        api_key: str | None,
        base_url: str,
        timeout: float = 60.0,
        max_retries: int = 3,
        retry_delay: float = 1.0,
        session: requests.Session | None = None,
        sleep: Callable[[float], None] = time.sleep,
        on_retry: RetryCallback | None = None,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_retries = max(1, max_retries)
        self.retry_delay = retry_delay
        self.session = session or requests.Session()
        self.sleep = sleep
        self.on_retry = on_retry

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def require_configured(self) -> None:
        if not self.is_configured:
            raise ProviderNotConfiguredError(
                f"{self.provider_name} not configured. Please add your API key."
            )

    def _headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.api_key}"}

    def _send(self, method: str, path: str, error_prefix: str, **kwargs: Any) -> requests.Response:
        """Issue a single request and turn failures into ProviderError."""
        url = f"{self.base_url}/{path.lstrip('/')}"
        try:
            response = self.session.request(
                method,
                url,
                headers=self._headers(),
                timeout=self.timeout,
                **kwargs,
            )
        except requests.ConnectTimeout as e:
            raise ProviderError(f"{error_prefix}: {e}", request_sent=False) from e
        except requests.RequestException as e:
            raise ProviderError(f"{error_prefix}: {e}") from e

        if not response.ok:
            raise ProviderError(
                f"{error_prefix}: {_error_detail(response)}",
                status_code=response.status_code,
            )
        return response

    def request_json(
        self,
        method: str,
        path: str,
        error_prefix: str,
        *,
        idempotent: bool = True,
        **kwargs: Any,
    ) -> dict[str, Any]:
        """Send a request with retries and return the decoded JSON body.

        Requests that are not idempotent, such as paid job submissions, are
        only retried when the connection could not be opened, so a job the
        provider already accepted is never submitted twice.

        Raises:
            ProviderNotConfiguredError: If no API key is set.
            ProviderError: On a 4xx response, or once retries are exhausted.
        """
        self.require_configured()

        delay = self.retry_delay
        for attempt in range(1, self.max_retries + 1):
            try:
                response = self._send(method, path, error_prefix, **kwargs)
                try:
                    return response.json()
                except ValueError as e:
                    raise ProviderError(f"{error_prefix}: invalid JSON response") from e
            except ProviderError as e:
                retryable = not e.is_client_error and (idempotent or not e.request_sent)
                if not retryable or attempt == self.max_retries:
                    raise
                if self.on_retry is not None:
                    self.on_retry(attempt, delay, e)
                self.sleep(delay)
                delay *= 2

        # max_retries is at least 1, so the loop always returns or raises
        raise AssertionError("unreachable")


def _error_detail(response: requests.Response) -> str:
    """Best message available from an error response."""
    try:
        payload = response.json()
    except ValueError:
        payload = None

    if isinstance(payload, dict):
        error = payload.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        if isinstance(error, str) and error:
            return error
        if payload.get("message"):
            return str(payload["message"])

    return response.reason or f"HTTP {response.status_code}"
