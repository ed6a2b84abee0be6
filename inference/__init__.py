"""
Completion boundary layer.

This package provides a clean abstraction for chat-completion calls,
keeping the bridge agnostic of the upstream provider.

Supported backends:
- StubCompletionBackend: Deterministic fake backend (default for CI/tests)
- ChatCompletionsBackend: OpenAI-compatible HTTP endpoint (DeepSeek, etc.)

Example usage:
    from inference import StubCompletionBackend

    backend = StubCompletionBackend()
    response = await backend.complete("You are helpful.", "Hello!")
"""

from .types import CompletionResponse, CompletionStatus
from .base import CompletionBackend
from .chat_completions import ChatCompletionsBackend, NO_RESPONSE_TEXT
from .stub import StubCompletionBackend

__all__ = [
    "CompletionResponse",
    "CompletionStatus",
    "CompletionBackend",
    "ChatCompletionsBackend",
    "NO_RESPONSE_TEXT",
    "StubCompletionBackend",
]
