"""
Tasks API Client - Low-level HTTP client for the task store REST API.

This handles the raw HTTP communication with the store.
The TasksApiAdapter uses this to implement the RemoteTaskServicePort.

Every endpoint under ``/api/tasks`` answers with an envelope::

    {"success": true, "message": "...", "data": ...}

Error responses carry a human-readable ``message`` that is surfaced to the
user verbatim.
"""

import logging
import random
import time
from typing import Any

import requests
from requests.adapters import HTTPAdapter

from todosync.core.exceptions import (
    NetworkError,
    RateLimitError,
    RemoteError,
    ResourceNotFoundError,
    TransientError,
)


RETRYABLE_STATUS_CODES = frozenset({429, 500, 502, 503, 504})


def calculate_delay(
    attempt: int,
    initial_delay: float = 1.0,
    max_delay: float = 60.0,
    backoff_factor: float = 2.0,
    jitter: float = 0.1,
    retry_after: int | None = None,
) -> float:
    """
    Calculate the delay before the next retry.

    Uses the server's Retry-After value when present, otherwise exponential
    backoff capped at max_delay. A random jitter of +/- ``jitter`` (fraction)
    is applied in both cases.
    """
    if retry_after is not None:
        base = float(retry_after)
    else:
        base = min(initial_delay * (backoff_factor**attempt), max_delay)

    spread = base * jitter
    return max(0.0, base + random.uniform(-spread, spread))


def get_retry_after(response: requests.Response) -> int | None:
    """Parse the Retry-After header (seconds) from a response."""
    value = response.headers.get("Retry-After") if response.headers else None
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def extract_message(response: requests.Response) -> str | None:
    """Get the ``message`` field of an error payload, if there is one."""
    try:
        payload = response.json()
    except ValueError:
        return None
    if isinstance(payload, dict):
        message = payload.get("message")
        if isinstance(message, str) and message.strip():
            return message
    return None


class TasksApiClient:
    """
    Low-level task store REST API client.

    Handles request/response, retries and error handling.

    Features:
    - Automatic retry with exponential backoff for transient failures
    - Retry-After support for rate limiting
    - Connection pooling for performance
    - Typed exceptions carrying the store's error message
    """

    # Default retry configuration
    DEFAULT_MAX_RETRIES = 3
    DEFAULT_INITIAL_DELAY = 1.0
    DEFAULT_MAX_DELAY = 60.0
    DEFAULT_BACKOFF_FACTOR = 2.0
    DEFAULT_JITTER = 0.1

    # Connection pool settings
    DEFAULT_POOL_CONNECTIONS = 10
    DEFAULT_POOL_MAXSIZE = 10
    DEFAULT_TIMEOUT = 30.0

    def __init__(
        self,
        url: str,
        max_retries: int = DEFAULT_MAX_RETRIES,
        initial_delay: float = DEFAULT_INITIAL_DELAY,
        max_delay: float = DEFAULT_MAX_DELAY,
        backoff_factor: float = DEFAULT_BACKOFF_FACTOR,
        jitter: float = DEFAULT_JITTER,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        """
        Initialize the client.

        Args:
            url: Store base URL (e.g., http://localhost:8080)
            max_retries: Maximum retry attempts for transient failures
            initial_delay: Initial retry delay in seconds
            max_delay: Maximum retry delay in seconds
            backoff_factor: Multiplier for exponential backoff
            jitter: Random jitter factor (0.1 = 10%)
            timeout: Request timeout in seconds
        """
        self.base_url = url.rstrip("/")
        self.api_url = f"{self.base_url}/api"
        self.timeout = timeout
        self.logger = logging.getLogger("TasksApiClient")

        # Retry configuration
        self.max_retries = max_retries
        self.initial_delay = initial_delay
        self.max_delay = max_delay
        self.backoff_factor = backoff_factor
        self.jitter = jitter

        self.headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
        }

        # Configure session with connection pooling
        self._session = requests.Session()
        self._session.headers.update(self.headers)

        adapter = HTTPAdapter(
            pool_connections=self.DEFAULT_POOL_CONNECTIONS,
            pool_maxsize=self.DEFAULT_POOL_MAXSIZE,
        )
        self._session.mount("https://", adapter)
        self._session.mount("http://", adapter)

    # -------------------------------------------------------------------------
    # Core Request Methods
    # -------------------------------------------------------------------------

    def request(
        self,
        method: str,
        endpoint: str,
        **kwargs: Any,
    ) -> Any:
        """
        Make a request to the store API with retry.

        POST is only replayed when the request never reached the store
        (connect timeout or 429); a 5xx or read timeout is raised at once.

        Args:
            method: HTTP method
            endpoint: API endpoint (e.g., 'tasks' or 'tasks/7/complete')
            **kwargs: Additional arguments for requests

        Returns:
            Decoded JSON body ({} for an empty body)

        Raises:
            NetworkError: If the store could not be reached
            RemoteError: On non-success responses
        """
        if endpoint.startswith("http"):
            url = endpoint
        else:
            url = f"{self.api_url}/{endpoint.lstrip('/')}"

        last_exception: Exception | None = None
        # A POST may already have been stored when the response is lost.
        replay_safe = method.upper() != "POST"

        for attempt in range(self.max_retries + 1):
            can_retry = attempt < self.max_retries
            try:
                if "timeout" not in kwargs:
                    kwargs["timeout"] = self.timeout

                response = self._session.request(method, url, **kwargs)

                if response.status_code in RETRYABLE_STATUS_CODES:
                    retry_after = get_retry_after(response)

                    if can_retry and (replay_safe or response.status_code == 429):
                        delay = calculate_delay(
                            attempt,
                            initial_delay=self.initial_delay,
                            max_delay=self.max_delay,
                            backoff_factor=self.backoff_factor,
                            jitter=self.jitter,
                            retry_after=retry_after,
                        )
                        self.logger.warning(
                            f"Retryable error {response.status_code} on {method} {endpoint}, "
                            f"attempt {attempt + 1}/{self.max_retries + 1}, "
                            f"retrying in {delay:.2f}s"
                        )
                        time.sleep(delay)
                        continue

                    server_message = extract_message(response)
                    if response.status_code == 429:
                        raise RateLimitError(
                            f"Task store rate limit exceeded for {endpoint}",
                            retry_after=retry_after,
                            server_message=server_message,
                            endpoint=endpoint,
                        )
                    raise TransientError(
                        f"Task store error {response.status_code} for {endpoint}",
                        status_code=response.status_code,
                        server_message=server_message,
                        endpoint=endpoint,
                    )

                return self._handle_response(response, endpoint)

            except (requests.exceptions.ConnectionError, requests.exceptions.Timeout) as e:
                last_exception = e
                kind = "Timeout" if isinstance(e, requests.exceptions.Timeout) else "Connection error"
                unsent = isinstance(e, requests.exceptions.ConnectTimeout)
                if can_retry and (replay_safe or unsent):
                    delay = calculate_delay(
                        attempt,
                        initial_delay=self.initial_delay,
                        max_delay=self.max_delay,
                        backoff_factor=self.backoff_factor,
                        jitter=self.jitter,
                    )
                    self.logger.warning(f"{kind} on {method} {endpoint}, retrying in {delay:.2f}s")
                    time.sleep(delay)
                    continue
                raise NetworkError(f"{kind} on {method} {endpoint}", endpoint=endpoint, cause=e)

            except requests.exceptions.RequestException as e:
                raise NetworkError(
                    f"Request failed on {method} {endpoint}: {e}", endpoint=endpoint, cause=e
                ) from e

        raise NetworkError(
            f"Request failed after {self.max_retries + 1} attempts",
            endpoint=endpoint,
            cause=last_exception,
        )

    def get(self, endpoint: str, **kwargs: Any) -> Any:
        """Perform a GET request."""
        return self.request("GET", endpoint, **kwargs)

    def post(self, endpoint: str, json: dict[str, Any] | None = None, **kwargs: Any) -> Any:
        """Perform a POST request."""
        return self.request("POST", endpoint, json=json, **kwargs)

    def put(self, endpoint: str, json: dict[str, Any] | None = None, **kwargs: Any) -> Any:
        """Perform a PUT request."""
        return self.request("PUT", endpoint, json=json, **kwargs)

    def delete(self, endpoint: str, **kwargs: Any) -> Any:
        """Perform a DELETE request."""
        return self.request("DELETE", endpoint, **kwargs)

    # -------------------------------------------------------------------------
    # Response Handling
    # -------------------------------------------------------------------------

    def _handle_response(self, response: requests.Response, endpoint: str) -> Any:
        """Handle API response and convert errors to typed exceptions."""
        if response.ok:
            if response.text:
                try:
                    return response.json()
                except ValueError:
                    return {}
            return {}

        status = response.status_code
        server_message = extract_message(response)

        if status == 404:
            raise ResourceNotFoundError(
                server_message or f"Not found: {endpoint}",
                status_code=status,
                server_message=server_message,
                endpoint=endpoint,
            )

        error_body = response.text[:500] if response.text else ""
        raise RemoteError(
            server_message or f"Task store error {status}: {error_body}",
            status_code=status,
            server_message=server_message,
            endpoint=endpoint,
        )

    @staticmethod
    def _unwrap(result: Any) -> Any:
        """Return the ``data`` member of an envelope, or the body itself."""
        if isinstance(result, dict) and "data" in result:
            return result["data"]
        return result

    # -------------------------------------------------------------------------
    # Tasks API
    # -------------------------------------------------------------------------

    def list_recent_tasks(self) -> list[dict[str, Any]]:
        """Get the most recent incomplete tasks (newest first)."""
        data = self._unwrap(self.get("tasks"))
        if not isinstance(data, list):
            raise RemoteError(f"Malformed task list from store: {data!r}", endpoint="tasks")
        return data

    def get_task(self, task_id: int | str) -> dict[str, Any]:
        """Get a single task by id."""
        data = self._unwrap(self.get(f"tasks/{task_id}"))
        return data if isinstance(data, dict) else {}

    def create_task(self, title: str, description: str = "") -> dict[str, Any]:
        """
        Create a new task.

        Args:
            title: Task title
            description: Task description (may be empty)
        """
        data = self._unwrap(self.post("tasks", json={"title": title, "description": description}))
        return data if isinstance(data, dict) else {}

    def complete_task(self, task_id: int | str) -> dict[str, Any]:
        """Mark a task as completed and return the updated record."""
        data = self._unwrap(self.put(f"tasks/{task_id}/complete"))
        return data if isinstance(data, dict) else {}

    def delete_task(self, task_id: int | str) -> dict[str, Any]:
        """Delete a task and return the confirmation envelope."""
        result = self.delete(f"tasks/{task_id}")
        return result if isinstance(result, dict) else {}

    def health(self) -> dict[str, Any]:
        """Get the store's health report (``{"status": "UP", ...}``)."""
        result = self.get("health")
        return result if isinstance(result, dict) else {}

    def test_connection(self) -> bool:
        """Test if the store is reachable and healthy."""
        try:
            return str(self.health().get("status", "")).upper() == "UP"
        except (NetworkError, RemoteError) as e:
            self.logger.debug(f"Health check failed: {e}")
            return False

    # -------------------------------------------------------------------------
    # Resource Cleanup
    # -------------------------------------------------------------------------

    def close(self) -> None:
        """Close the client and release connection pool resources."""
        self._session.close()
        self.logger.debug("Closed HTTP session")

    def __enter__(self) -> "TasksApiClient":
        """Context manager entry."""
        return self

    def __exit__(
        self,
        exc_type: type | None,
        exc_val: Exception | None,
        exc_tb: Any,
    ) -> None:
        """Context manager exit."""
        self.close()
