"""
Bridge module exports.

Request/response decoupling: pending-result store, async dispatcher,
and the reply policy that ties them together.
"""

from bridge.pending_store import (
    PendingEntry,
    PendingResultStore,
    InMemoryPendingResultStore,
    EvictionPolicy,
    NoEviction,
    TTLEviction,
)
from bridge.dispatcher import AsyncDispatcher
from bridge.reply_policy import ReplyPolicy
from bridge import messages

__all__ = [
    "PendingEntry",
    "PendingResultStore",
    "InMemoryPendingResultStore",
    "EvictionPolicy",
    "NoEviction",
    "TTLEviction",
    "AsyncDispatcher",
    "ReplyPolicy",
    "messages",
]
