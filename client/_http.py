"""Internal HTTP handling for the generation client.

Wraps ``httpx.AsyncClient`` and maps transport failures and error responses
onto the client exception hierarchy. Requests are made exactly once: there is
no retry and no cancellation.

This is an internal module and should not be imported directly by users.
"""

from typing import Any

import httpx

from client.exceptions import APIError, ConnectionError, ResponseFormatError, TimeoutError


def _parse_error_response(response: httpx.Response) -> tuple[str, str | None]:
    """Parse an error response to extract message and type.

    Understands the messages-API error envelope
    (``{"type": "error", "error": {"type": ..., "message": ...}}``) and
    FastAPI-style ``{"detail": ...}`` bodies. Falls back to the raw text.

    Args:
        response: The HTTP response to parse.

    Returns:
        A tuple of (message, error_type).
    """
    try:
        body = response.json()
    except ValueError:
        text = response.text.strip()
        if text:
            return text, None
        return f"HTTP {response.status_code} error", None

    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict):
            return error.get("message", str(error)), error.get("type")
        if isinstance(error, str):
            return error, body.get("type")

        detail = body.get("detail")
        if isinstance(detail, str):
            return detail, body.get("type")

        if "message" in body:
            return body["message"], body.get("type")

    return str(body), None


def _raise_for_status(response: httpx.Response) -> None:
    """Raise APIError for non-success responses.

    Args:
        response: The HTTP response to check.

    Raises:
        APIError: For any 4xx/5xx response.
    """
    if response.is_success:
        return

    message, error_type = _parse_error_response(response)

    try:
        response_body = response.json()
    except ValueError:
        response_body = response.text

    raise APIError(
        message=message,
        status_code=response.status_code,
        error_type=error_type,
        response_body=response_body,
    )


class AsyncHTTPClient:
    """Asynchronous HTTP client for the generation service.

    Attributes:
        base_url: The base URL for all requests.
        timeout: Request timeout in seconds.
        headers: Headers sent with every request.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        headers: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the async HTTP client.

        Args:
            base_url: The base URL for all requests.
            timeout: Request timeout in seconds.
            headers: Headers sent with every request.
            transport: Custom transport (e.g., MockTransport for testing).
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.headers = dict(headers or {})

        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            headers=self.headers,
            transport=transport,
        )

    async def close(self) -> None:
        """Close the HTTP client and release resources."""
        await self._client.aclose()

    async def __aenter__(self) -> "AsyncHTTPClient":
        """Enter async context manager."""
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Exit async context manager and close client."""
        await self.close()

    async def post(self, path: str, json: dict[str, Any] | None = None) -> Any:
        """Make a POST request and return the parsed JSON response.

        Args:
            path: The URL path (appended to base_url).
            json: JSON body to send.

        Returns:
            The parsed JSON response body, or None for empty responses.

        Raises:
            ConnectionError: If the connection fails.
            TimeoutError: If the request times out.
            APIError: If the service returns an error response.
            ResponseFormatError: If a successful response is not valid JSON.
        """
        url = f"{self.base_url}{path}"

        try:
            response = await self._client.post(path, json=json)
        except httpx.TimeoutException as e:
            raise TimeoutError(
                message=f"Request to {url} timed out",
                timeout=self.timeout,
                url=url,
            ) from e
        except httpx.TransportError as e:
            raise ConnectionError(
                message=f"Failed to connect to {url}",
                url=url,
                cause=e,
            ) from e

        _raise_for_status(response)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise ResponseFormatError(
                "Response body is not valid JSON", response_body=response.text
            ) from e
