"""Unit tests for GenerationClient."""

import json

import httpx
import pytest

from client.exceptions import APIError, ConnectionError, ResponseFormatError
from client.generation import API_VERSION, MESSAGES_PATH, GenerationClient, build_prompt
from config import Settings
from models.catalog import MODEL_CATALOG

MODEL = MODEL_CATALOG[0]


def reply(text: str) -> dict:
    """Build a messages-API reply with one text block."""
    return {
        "id": "msg_1",
        "type": "message",
        "role": "assistant",
        "content": [{"type": "text", "text": text}],
    }


def make_client(handler, **kwargs) -> GenerationClient:
    kwargs.setdefault("upstream_model", "test-model")
    return GenerationClient(
        base_url="http://generation.test",
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


class TestBuildPrompt:
    def test_includes_model_name_and_request(self):
        prompt = build_prompt("write fizzbuzz", MODEL)

        assert f"using the {MODEL.name} model" in prompt
        assert prompt.endswith("User request: write fizzbuzz")

    def test_describes_file_format(self):
        prompt = build_prompt("x", MODEL)

        assert "FILENAME: example.py\n```python\n" in prompt


class TestGenerationClientRequest:
    async def test_posts_single_user_message(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content)
            seen["headers"] = request.headers
            return httpx.Response(200, json=reply("done"))

        async with make_client(handler, max_tokens=123, api_key="secret") as client:
            text = await client.generate("write hello", MODEL)

        assert text == "done"
        assert seen["path"] == MESSAGES_PATH
        assert seen["body"]["model"] == "test-model"
        assert seen["body"]["max_tokens"] == 123
        assert seen["body"]["messages"] == [
            {"role": "user", "content": build_prompt("write hello", MODEL)}
        ]
        assert seen["headers"]["x-api-key"] == "secret"
        assert seen["headers"]["anthropic-version"] == API_VERSION

    async def test_no_api_key_header_without_key(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["headers"] = request.headers
            return httpx.Response(200, json=reply("ok"))

        async with make_client(handler) as client:
            await client.generate("x", MODEL)

        assert "x-api-key" not in seen["headers"]

    async def test_returns_first_text_block(self):
        body = reply("first")
        body["content"].append({"type": "text", "text": "second"})

        async with make_client(lambda request: httpx.Response(200, json=body)) as client:
            assert await client.generate("x", MODEL) == "first"

    def test_from_settings(self):
        settings = Settings(
            generation_base_url="http://generation.test/",
            generation_model="custom-model",
            generation_max_tokens=10,
        )

        client = GenerationClient.from_settings(settings)

        assert client.upstream_model == "custom-model"
        assert client.max_tokens == 10


class TestGenerationClientErrors:
    async def test_error_response_raises_api_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                401,
                json={"type": "error", "error": {"type": "authentication_error", "message": "invalid x-api-key"}},
            )

        async with make_client(handler) as client:
            with pytest.raises(APIError) as exc_info:
                await client.generate("x", MODEL)

        assert exc_info.value.error_type == "authentication_error"
        assert str(exc_info.value) == "[401] invalid x-api-key"

    async def test_connection_failure(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Connection refused")

        async with make_client(handler) as client:
            with pytest.raises(ConnectionError):
                await client.generate("x", MODEL)

    async def test_non_json_success_raises_format_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>gateway</html>")

        async with make_client(handler) as client:
            with pytest.raises(ResponseFormatError) as exc_info:
                await client.generate("x", MODEL)

        assert exc_info.value.response_body == "<html>gateway</html>"

    @pytest.mark.parametrize(
        "body",
        [
            {"content": []},
            {"content": [{"type": "tool_use", "id": "t1"}]},
            {"content": [{"type": "text", "text": "   "}]},
            {"unexpected": True},
            ["not", "an", "object"],
        ],
    )
    async def test_unusable_body_raises_format_error(self, body):
        async with make_client(lambda request: httpx.Response(200, json=body)) as client:
            with pytest.raises(ResponseFormatError):
                await client.generate("x", MODEL)
