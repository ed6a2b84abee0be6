from .base import CompletionBackend
from .types import CompletionResponse
from .chat_completions import NO_RESPONSE_TEXT


class StubCompletionBackend(CompletionBackend):
    """
    Deterministic fake completion backend for testing and CI.

    Echoes the query back so tests can tell answers for different
    senders apart. A few reserved queries simulate upstream behaviour.
    """

    FAIL_QUERY = "__fail__"
    EMPTY_QUERY = "__empty__"

    def __init__(self):
        self.calls = []

    async def complete(self, prompt: str, query: str) -> CompletionResponse:
        """
        Generate a deterministic response based on the query.

        Args:
            prompt: System prompt (recorded, otherwise ignored)
            query: User query

        Returns:
            CompletionResponse with deterministic output
        """
        self.calls.append((prompt, query))

        if query == self.FAIL_QUERY:
            return CompletionResponse(
                status="upstream_unavailable",
                error_type="transport",
                metadata={"backend": "stub"},
            )

        if query == self.EMPTY_QUERY:
            return CompletionResponse(
                status="empty_result",
                output=NO_RESPONSE_TEXT,
                metadata={"backend": "stub"},
            )

        return CompletionResponse(
            status="success",
            output=f"Stub answer: {query}",
            metadata={"backend": "stub"},
        )
