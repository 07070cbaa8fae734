"""Client for the external generation service.

Sends a single user message to a messages-style endpoint and returns the first
text block of the reply. The prompt tells the model how to format files so the
extractor can pick them up.
"""

import logging
from typing import Any

import httpx

from client._http import AsyncHTTPClient
from client.exceptions import ResponseFormatError
from config import Settings
from models.catalog import ModelDescriptor

logger = logging.getLogger(__name__)

MESSAGES_PATH = "/v1/messages"
API_VERSION = "2023-06-01"

PROMPT_TEMPLATE = """You are a helpful coding assistant using the {model_name} model. The user has access to a Linux terminal simulator.

If you create code files, format them like this:
FILENAME: example.py
```python
print("Hello World")
```

User request: {prompt}"""


def build_prompt(prompt: str, model: ModelDescriptor) -> str:
    """Wrap the user's request in the file-formatting instructions."""
    return PROMPT_TEMPLATE.format(model_name=model.name, prompt=prompt)


def _extract_text(body: Any) -> str:
    """Return the first text block of a messages-API response.

    Raises:
        ResponseFormatError: If the body has no text content.
    """
    if not isinstance(body, dict):
        raise ResponseFormatError("Response body is not an object", response_body=body)
    content = body.get("content")
    if not isinstance(content, list) or not content:
        raise ResponseFormatError("Response has no content blocks", response_body=body)
    first = content[0]
    text = first.get("text") if isinstance(first, dict) else None
    if not isinstance(text, str) or not text.strip():
        raise ResponseFormatError("First content block has no text", response_body=body)
    return text


class GenerationClient:
    """Async client for the generation service.

    Example:
        async with GenerationClient.from_settings(settings) as client:
            text = await client.generate("write fizzbuzz", model)

    Attributes:
        upstream_model: Model identifier sent to the service.
        max_tokens: Token budget per response.
    """

    def __init__(
        self,
        base_url: str,
        upstream_model: str,
        max_tokens: int = 2000,
        api_key: str | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Base URL of the generation service.
            upstream_model: Model identifier sent to the service.
            max_tokens: Token budget per response.
            api_key: Optional API key.
            timeout: Request timeout in seconds.
            transport: Custom transport (e.g., MockTransport for testing).
        """
        headers = {"content-type": "application/json", "anthropic-version": API_VERSION}
        if api_key:
            headers["x-api-key"] = api_key
        self.upstream_model = upstream_model
        self.max_tokens = max_tokens
        self._http = AsyncHTTPClient(
            base_url=base_url,
            timeout=timeout,
            headers=headers,
            transport=transport,
        )

    @classmethod
    def from_settings(
        cls, settings: Settings, transport: httpx.AsyncBaseTransport | None = None
    ) -> "GenerationClient":
        """Create a client from application settings."""
        return cls(
            base_url=settings.generation_base_url,
            upstream_model=settings.generation_model,
            max_tokens=settings.generation_max_tokens,
            api_key=settings.generation_api_key,
            timeout=settings.generation_timeout,
            transport=transport,
        )

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._http.close()

    async def __aenter__(self) -> "GenerationClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def generate(self, prompt: str, model: ModelDescriptor) -> str:
        """Request assistant text for ``prompt``.

        Args:
            prompt: The user's request.
            model: The model the user selected.

        Returns:
            The assistant's reply text.

        Raises:
            GenerationTransportError: If the request fails or the reply has
                no text.
        """
        payload = {
            "model": self.upstream_model,
            "max_tokens": self.max_tokens,
            "messages": [{"role": "user", "content": build_prompt(prompt, model)}],
        }
        logger.info("Requesting generation with %s", model.name)
        body = await self._http.post(MESSAGES_PATH, json=payload)
        return _extract_text(body)
