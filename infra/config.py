"""
Infrastructure configuration system.

Environment-based backend selection with sensible defaults.
Every knob of the bridge lives here so tests can build one explicitly.
"""

import logging
import os
from typing import List, Literal
from dataclasses import dataclass

from bridge import (
    AsyncDispatcher,
    InMemoryPendingResultStore,
    NoEviction,
    PendingResultStore,
    ReplyPolicy,
    TTLEviction,
)
from bridge.messages import DEFAULT_CONTINUE_KEYWORD
from inference import CompletionBackend, StubCompletionBackend, ChatCompletionsBackend


logger = logging.getLogger(__name__)

CompletionBackendType = Literal["stub", "openai"]


@dataclass
class InfraConfig:
    """Infrastructure configuration from environment."""

    # WeChat
    wechat_token: str

    # Completion
    completion_backend: CompletionBackendType
    completion_api_url: str
    completion_api_key: str
    completion_model: str
    completion_prompt: str
    completion_timeout_s: float

    # Reply policy
    reply_wait_s: float
    continue_keyword: str

    # Pending store
    pending_ttl_s: float

    @classmethod
    def from_env(cls) -> "InfraConfig":
        """
        Load configuration from environment variables.

        Defaults target DeepSeek's OpenAI-compatible endpoint, a 3 second
        reply window and no eviction of pending answers.
        """
        return cls(
            wechat_token=os.getenv("WECHAT_TOKEN", ""),

            completion_backend=os.getenv("COMPLETION_BACKEND", "openai"),  # type: ignore
            completion_api_url=os.getenv("COMPLETION_API_URL", "https://api.deepseek.com/chat/completions"),
            completion_api_key=os.getenv("COMPLETION_API_KEY", ""),
            completion_model=os.getenv("COMPLETION_MODEL", "deepseek-chat"),
            completion_prompt=os.getenv("COMPLETION_PROMPT", "You are a helpful assistant."),
            completion_timeout_s=float(os.getenv("COMPLETION_TIMEOUT_S", "60")),

            reply_wait_s=float(os.getenv("REPLY_WAIT_S", "3")),
            continue_keyword=os.getenv("CONTINUE_KEYWORD", DEFAULT_CONTINUE_KEYWORD),

            pending_ttl_s=float(os.getenv("PENDING_TTL_S", "0")),
        )

    def missing(self) -> List[str]:
        """Names of required settings that are empty."""
        required = {"WECHAT_TOKEN": self.wechat_token}
        if self.completion_backend != "stub":
            required["COMPLETION_API_URL"] = self.completion_api_url
            required["COMPLETION_API_KEY"] = self.completion_api_key
        return [key for key, value in required.items() if not value]

    def validate(self) -> bool:
        """
        Validate that required configuration is set.

        Missing settings are logged, never fatal: the handshake fails closed
        and completion calls degrade to the failure message.
        """
        missing = self.missing()

        if missing:
            logger.warning(f"⚠️  Missing required environment variables: {', '.join(missing)}")
            logger.warning("   Please set them in .env file")
            return False

        return True

    def create_completion_backend(self) -> CompletionBackend:
        """Create completion backend instance based on configuration."""
        if self.completion_backend == "stub":
            return StubCompletionBackend()
        return ChatCompletionsBackend(
            api_url=self.completion_api_url,
            api_key=self.completion_api_key,
            model_name=self.completion_model,
            timeout_s=self.completion_timeout_s,
        )

    def create_pending_store(self) -> PendingResultStore:
        """Create the pending-result store; TTL eviction only when configured."""
        if self.pending_ttl_s > 0:
            return InMemoryPendingResultStore(eviction=TTLEviction(self.pending_ttl_s))
        return InMemoryPendingResultStore(eviction=NoEviction())

    def create_dispatcher(
        self,
        backend: CompletionBackend,
        store: PendingResultStore,
    ) -> AsyncDispatcher:
        return AsyncDispatcher(backend, store, system_prompt=self.completion_prompt)

    def create_reply_policy(
        self,
        store: PendingResultStore,
        dispatcher: AsyncDispatcher,
    ) -> ReplyPolicy:
        return ReplyPolicy(
            store,
            dispatcher,
            wait_seconds=self.reply_wait_s,
            continue_keyword=self.continue_keyword,
        )


def get_config() -> InfraConfig:
    """Get infrastructure configuration from the environment."""
    return InfraConfig.from_env()
