"""Exception hierarchy for the generation client.

Exception Hierarchy:
    GenerationTransportError (base)
    ├── ConnectionError - Network/connection failures
    ├── TimeoutError - Request timeout
    ├── APIError - Service returned an error response
    └── ResponseFormatError - Successful response without usable text

Callers normally catch the base class: any failure of the generation request
is recovered locally by substituting a canned response.

Example:
    Falling back on any transport failure::

        try:
            text = await client.generate(prompt, model)
        except GenerationTransportError as e:
            text = fallback_response(str(e))
"""

from typing import Any


class GenerationTransportError(Exception):
    """Base exception for all generation request failures.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
        """
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation of the error."""
        return self.message


class ConnectionError(GenerationTransportError):
    """Failed to connect to the generation service.

    Attributes:
        message: Human-readable error description.
        url: The URL that failed to connect.
        cause: The underlying exception that caused the connection failure.
    """

    def __init__(
        self,
        message: str,
        url: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.url = url
        self.cause = cause
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including URL if available."""
        if self.url:
            return f"{self.message} (url: {self.url})"
        return self.message


class TimeoutError(GenerationTransportError):
    """Request timed out.

    Attributes:
        message: Human-readable error description.
        timeout: The timeout value in seconds.
        url: The URL that timed out.
    """

    def __init__(
        self,
        message: str,
        timeout: float | None = None,
        url: str | None = None,
    ) -> None:
        self.timeout = timeout
        self.url = url
        super().__init__(message)


class APIError(GenerationTransportError):
    """The generation service returned an error response.

    Attributes:
        message: Human-readable error description.
        status_code: HTTP status code of the response.
        error_type: Error type reported by the service, if any.
        response_body: Raw response body for debugging.
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        error_type: str | None = None,
        response_body: Any = None,
    ) -> None:
        self.status_code = status_code
        self.error_type = error_type
        self.response_body = response_body
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including the status code."""
        return f"[{self.status_code}] {self.message}"


class ResponseFormatError(GenerationTransportError):
    """The response succeeded but carried no assistant text.

    Attributes:
        message: Human-readable error description.
        response_body: Raw response body for debugging.
    """

    def __init__(self, message: str, response_body: Any = None) -> None:
        self.response_body = response_body
        super().__init__(message)
