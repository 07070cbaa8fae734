"""Client for the external generation service.

Example:
    Requesting generated text::

        from client import GenerationClient, GenerationTransportError

        async with GenerationClient(base_url="https://api.anthropic.com",
                                    upstream_model="claude-sonnet-4-20250514") as client:
            try:
                text = await client.generate("write fizzbuzz", model)
            except GenerationTransportError as e:
                print(f"Generation failed: {e}")
"""

from client.exceptions import (
    APIError,
    ConnectionError,
    GenerationTransportError,
    ResponseFormatError,
    TimeoutError,
)
from client.generation import GenerationClient, build_prompt

__all__ = [
    "GenerationClient",
    "build_prompt",
    "GenerationTransportError",
    "ConnectionError",
    "TimeoutError",
    "APIError",
    "ResponseFormatError",
]
