"""
Chat-Completions Backend Tests

The upstream API is simulated with httpx.MockTransport; no network.
"""

import json

import httpx
import pytest

from inference import ChatCompletionsBackend, NO_RESPONSE_TEXT, StubCompletionBackend


API_URL = "http://completion.test/v1/chat/completions"


def make_backend(handler):
    return ChatCompletionsBackend(
        api_url=API_URL,
        api_key="secret-key",
        model_name="deepseek-chat",
        timeout_s=5.0,
        transport=httpx.MockTransport(handler),
    )


def choices_body(*contents):
    return {"choices": [{"message": {"role": "assistant", "content": c}} for c in contents]}


class TestRequest:
    """Wire format of the outbound request."""

    @pytest.mark.asyncio
    async def test_request_payload_and_headers(self):
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["method"] = request.method
            captured["url"] = str(request.url)
            captured["auth"] = request.headers.get("Authorization")
            captured["content_type"] = request.headers.get("Content-Type")
            captured["body"] = json.loads(request.content)
            return httpx.Response(200, json=choices_body("4"))

        backend = make_backend(handler)
        await backend.complete("You are helpful.", "What is 2+2?")

        assert captured["method"] == "POST"
        assert captured["url"] == API_URL
        assert captured["auth"] == "Bearer secret-key"
        assert captured["content_type"] == "application/json"
        assert captured["body"] == {
            "model": "deepseek-chat",
            "messages": [
                {"role": "system", "content": "You are helpful."},
                {"role": "user", "content": "What is 2+2?"},
            ],
            "stream": False,
        }


class TestResponseParsing:
    """Mapping upstream responses to CompletionResponse."""

    @pytest.mark.asyncio
    async def test_success_returns_first_choice_verbatim(self):
        backend = make_backend(
            lambda request: httpx.Response(200, json=choices_body("  2+2 = 4\n", "ignored"))
        )

        response = await backend.complete("sys", "q")

        assert response.status == "success"
        assert response.ok
        assert response.output == "  2+2 = 4\n"
        assert response.metadata["status_code"] == 200

    @pytest.mark.asyncio
    async def test_long_output_not_truncated(self):
        long_text = "答" * 20000
        backend = make_backend(lambda request: httpx.Response(200, json=choices_body(long_text)))

        response = await backend.complete("sys", "q")

        assert response.output == long_text

    @pytest.mark.asyncio
    async def test_zero_choices_returns_sentinel(self):
        backend = make_backend(lambda request: httpx.Response(200, json={"choices": []}))

        response = await backend.complete("sys", "q")

        assert response.status == "empty_result"
        assert response.ok
        assert response.output == NO_RESPONSE_TEXT

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [{}, {"choices": None}, {"id": "cmpl-1", "object": "chat.completion"}])
    async def test_success_without_choices_returns_sentinel(self, body):
        backend = make_backend(lambda request: httpx.Response(200, json=body))

        response = await backend.complete("sys", "q")

        assert response.status == "empty_result"
        assert response.output == NO_RESPONSE_TEXT

    @pytest.mark.asyncio
    async def test_non_object_body_is_invalid(self):
        backend = make_backend(lambda request: httpx.Response(200, json=["not", "an", "object"]))

        response = await backend.complete("sys", "q")

        assert response.status == "upstream_unavailable"
        assert response.error_type == "invalid_body"

    @pytest.mark.asyncio
    async def test_unparseable_body(self):
        backend = make_backend(lambda request: httpx.Response(502, text="<html>Bad Gateway</html>"))

        response = await backend.complete("sys", "q")

        assert response.status == "upstream_unavailable"
        assert not response.ok
        assert response.error_type == "invalid_body"

    @pytest.mark.asyncio
    async def test_error_envelope_on_non_2xx(self):
        backend = make_backend(
            lambda request: httpx.Response(401, json={"error": {"message": "Invalid API key"}})
        )

        response = await backend.complete("sys", "q")

        assert response.status == "upstream_unavailable"
        assert response.error_type == "http_status"
        assert response.metadata["status_code"] == 401

    @pytest.mark.asyncio
    async def test_malformed_choice(self):
        backend = make_backend(lambda request: httpx.Response(200, json={"choices": [{"text": "x"}]}))

        response = await backend.complete("sys", "q")

        assert response.status == "upstream_unavailable"
        assert response.error_type == "invalid_body"


class TestTransportFailures:
    """Network problems never raise."""

    @pytest.mark.asyncio
    async def test_connection_refused(self):
        def handler(request):
            raise httpx.ConnectError("Connection refused", request=request)

        response = await make_backend(handler).complete("sys", "q")

        assert response.status == "upstream_unavailable"
        assert response.error_type == "transport"
        assert "Connection refused" in response.metadata["error"]

    @pytest.mark.asyncio
    async def test_timeout(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        response = await make_backend(handler).complete("sys", "q")

        assert response.status == "upstream_unavailable"
        assert response.error_type == "timeout"


class TestStubBackend:
    """Deterministic stub used by CI."""

    @pytest.mark.asyncio
    async def test_stub_echoes_query(self):
        backend = StubCompletionBackend()
        response = await backend.complete("sys", "hello")

        assert response.status == "success"
        assert response.output == "Stub answer: hello"
        assert backend.calls == [("sys", "hello")]

    @pytest.mark.asyncio
    async def test_stub_failure_and_empty(self):
        backend = StubCompletionBackend()

        failed = await backend.complete("sys", StubCompletionBackend.FAIL_QUERY)
        empty = await backend.complete("sys", StubCompletionBackend.EMPTY_QUERY)

        assert failed.status == "upstream_unavailable"
        assert empty.status == "empty_result"
        assert empty.output == NO_RESPONSE_TEXT
