"""
OpenAI-compatible chat-completions backend (DeepSeek and friends).

One POST per query, no retries. Upstream failures are reported through
CompletionResponse.status so the caller can degrade them to text.
"""

import json
import logging
from typing import Optional

import httpx

from .base import CompletionBackend
from .types import CompletionResponse

logger = logging.getLogger(__name__)

# Returned verbatim when the upstream answers with zero choices
NO_RESPONSE_TEXT = "⚠️ 暂无可用回答。"


class ChatCompletionsBackend(CompletionBackend):
    """
    Backend for any endpoint speaking the chat-completions wire format.

    Request:  {model, messages: [system, user], stream: false}
    Response: {choices: [{message: {content: str}}]}
    """

    def __init__(
        self,
        api_url: str,
        api_key: str,
        model_name: str,
        timeout_s: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the backend.

        Args:
            api_url:    Full URL of the chat-completions endpoint
            api_key:    Bearer token sent in the Authorization header
            model_name: Model identifier (e.g. "deepseek-chat")
            timeout_s:  Timeout applied to the whole request
            transport:  Optional httpx transport (tests inject a MockTransport)
        """
        self.api_url = api_url
        self.api_key = api_key
        self.model_name = model_name
        self.timeout_s = timeout_s
        self._transport = transport

    def build_payload(self, prompt: str, query: str) -> dict:
        return {
            "model": self.model_name,
            "messages": [
                {"role": "system", "content": prompt},
                {"role": "user", "content": query},
            ],
            "stream": False,
        }

    async def complete(self, prompt: str, query: str) -> CompletionResponse:
        """
        Run one chat completion.

        Flow:
          1. POST the payload with bearer authorization
          2. Decode the JSON body
          3. Return the first choice's content verbatim, the sentinel text
             when there are no choices, or upstream_unavailable otherwise

        Returns:
            CompletionResponse (never raises for upstream failures)
        """
        base_metadata = {"backend": "chat_completions", "model": self.model_name}
        payload = self.build_payload(prompt, query)
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        logger.debug(f"Completion request: {json.dumps(payload, ensure_ascii=False)}")

        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.post(
                    self.api_url,
                    json=payload,
                    headers=headers,
                    timeout=self.timeout_s,
                )
        except httpx.TimeoutException as e:
            logger.error(f"Completion request timed out: {e}")
            return CompletionResponse(
                status="upstream_unavailable",
                error_type="timeout",
                metadata={**base_metadata, "error": str(e)},
            )
        except httpx.RequestError as e:
            logger.error(f"Completion request failed: {e}")
            return CompletionResponse(
                status="upstream_unavailable",
                error_type="transport",
                metadata={**base_metadata, "error": str(e)},
            )

        metadata = {**base_metadata, "status_code": response.status_code}
        logger.debug(f"Completion response ({response.status_code}): {response.text}")

        try:
            data = response.json()
        except ValueError:
            logger.error(
                "Completion API returned a non-JSON body",
                extra={"status_code": response.status_code},
            )
            return CompletionResponse(
                status="upstream_unavailable",
                error_type="invalid_body",
                metadata=metadata,
            )

        choices = data.get("choices") if isinstance(data, dict) else None

        # A 2xx object without choices decodes the same as zero choices
        if choices is None and isinstance(data, dict) and response.is_success:
            choices = []

        if not isinstance(choices, list):
            # Error envelopes ({"error": {...}}) land here too
            error_type = "invalid_body" if response.is_success else "http_status"
            logger.error(
                f"Completion API returned no choices list: {response.status_code}",
                extra={"status_code": response.status_code, "error_body": response.text},
            )
            return CompletionResponse(
                status="upstream_unavailable",
                error_type=error_type,
                metadata=metadata,
            )

        if not choices:
            logger.warning("Completion API returned zero choices")
            return CompletionResponse(
                status="empty_result",
                output=NO_RESPONSE_TEXT,
                metadata=metadata,
            )

        try:
            output = choices[0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            return CompletionResponse(
                status="upstream_unavailable",
                error_type="invalid_body",
                metadata=metadata,
            )

        if not isinstance(output, str):
            return CompletionResponse(
                status="upstream_unavailable",
                error_type="invalid_body",
                metadata=metadata,
            )

        return CompletionResponse(status="success", output=output, metadata=metadata)
