from abc import ABC, abstractmethod
from .types import CompletionResponse


class CompletionBackend(ABC):
    """
    Abstract completion boundary.
    The dispatcher depends ONLY on this interface.

    Implementations never raise for upstream failures; they report them
    through CompletionResponse.status.
    """

    @abstractmethod
    async def complete(self, prompt: str, query: str) -> CompletionResponse:
        """Run one completion with a system prompt and the user's query."""
        raise NotImplementedError
