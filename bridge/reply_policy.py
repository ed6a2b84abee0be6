"""
Synchronous reply policy.

Decides the single text reply for every inbound message:

  event/subscribe      → greeting
  event/other          → acknowledgement
  text == keyword      → pending answer (removed) or "nothing pending"
  text                 → dispatch, bounded wait, placeholder
  anything else        → unsupported

The bounded wait never looks at the store: a question is always answered
with the placeholder, even if the real answer arrived during the wait.
"""

import asyncio
import logging

from . import messages
from .dispatcher import AsyncDispatcher
from .pending_store import PendingResultStore

logger = logging.getLogger(__name__)


class ReplyPolicy:
    """Maps (sender, kind, text) to the reply text."""

    def __init__(
        self,
        store: PendingResultStore,
        dispatcher: AsyncDispatcher,
        wait_seconds: float = 3.0,
        continue_keyword: str = messages.DEFAULT_CONTINUE_KEYWORD,
    ):
        self.store = store
        self.dispatcher = dispatcher
        self.wait_seconds = wait_seconds
        self.continue_keyword = continue_keyword.strip()

    async def reply(
        self,
        sender_id: str,
        msg_type: str,
        content: str = "",
        event: str = "",
    ) -> str:
        """
        Compute the reply for one inbound message.

        Args:
            sender_id: Opaque sender identity
            msg_type: Platform message kind ("text", "event", "image", ...)
            content: Message text (text messages only)
            event: Event name (event messages only)

        Returns:
            Reply text; never raises for upstream problems
        """
        if msg_type == "event":
            if event == "subscribe":
                logger.info(f"New subscriber {sender_id}")
                return messages.SUBSCRIBE_GREETING
            return messages.EVENT_ACKNOWLEDGED

        if msg_type == "text":
            if content.strip() == self.continue_keyword:
                return self._collect(sender_id)
            return await self._ask(sender_id, content)

        logger.info(f"Unsupported message type '{msg_type}' from {sender_id}")
        return messages.UNSUPPORTED_CONTENT

    def _collect(self, sender_id: str) -> str:
        answer = self.store.load_and_clear(sender_id)
        if answer is None:
            logger.info(f"Nothing pending for {sender_id}")
            return messages.NOTHING_PENDING
        logger.info(f"Delivered pending answer to {sender_id}")
        return answer

    async def _ask(self, sender_id: str, content: str) -> str:
        self.dispatcher.dispatch(sender_id, content)
        # Give fast answers a head start before the platform deadline
        await asyncio.sleep(self.wait_seconds)
        return messages.PROCESSING_PLACEHOLDER
