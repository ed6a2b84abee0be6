"""
Infrastructure initialization and bootstrap.

Builds the store, completion backend, dispatcher and reply policy from
configuration. One instance is owned by the FastAPI app; tests build
their own.
"""

from typing import Optional

from bridge import AsyncDispatcher, PendingResultStore, ReplyPolicy
from inference import CompletionBackend

from .config import InfraConfig, get_config


class InfraBootstrap:
    """
    Bootstrap the bridge components from configuration.

    Any component can be passed in to override the configured one.
    """

    def __init__(
        self,
        config: Optional[InfraConfig] = None,
        backend: Optional[CompletionBackend] = None,
        store: Optional[PendingResultStore] = None,
    ):
        """Initialize bootstrap with configuration."""
        self.config = config or get_config()
        # Explicit None checks: an empty store is falsy
        self.backend = backend if backend is not None else self.config.create_completion_backend()
        self.store = store if store is not None else self.config.create_pending_store()
        self.dispatcher = self.config.create_dispatcher(self.backend, self.store)
        self.reply_policy = self.config.create_reply_policy(self.store, self.dispatcher)

    @property
    def wechat_token(self) -> str:
        return self.config.wechat_token

    def get_reply_policy(self) -> ReplyPolicy:
        return self.reply_policy

    def get_dispatcher(self) -> AsyncDispatcher:
        return self.dispatcher

    def get_store(self) -> PendingResultStore:
        return self.store

    def __repr__(self) -> str:
        """String representation showing configured backends."""
        return (
            f"InfraBootstrap(completion={self.config.completion_backend}, "
            f"model={self.config.completion_model}, "
            f"wait={self.config.reply_wait_s}s, "
            f"ttl={self.config.pending_ttl_s or 'disabled'})"
        )


def bootstrap_infrastructure(config: Optional[InfraConfig] = None) -> InfraBootstrap:
    """
    Bootstrap all bridge components.

    Args:
        config: Optional custom configuration

    Returns:
        InfraBootstrap instance with all components initialized
    """
    return InfraBootstrap(config)
