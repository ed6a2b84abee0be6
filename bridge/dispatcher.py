"""
Async dispatcher.

Fire-and-forget: each query becomes one background task that asks the
completion backend and always lands exactly one string in the pending
store, whatever happens upstream. Nothing raises past the task.
"""

import asyncio
import logging
from typing import Optional, Set

from inference import CompletionBackend

from .messages import PROCESSING_FAILED
from .pending_store import PendingResultStore

logger = logging.getLogger(__name__)


class AsyncDispatcher:
    """
    Spawns completion tasks and records their results.

    Tasks are not cancellable. The dispatcher holds a strong reference to
    each running task until it finishes.
    """

    def __init__(
        self,
        backend: CompletionBackend,
        store: PendingResultStore,
        system_prompt: str,
        failure_message: str = PROCESSING_FAILED,
    ):
        self.backend = backend
        self.store = store
        self.system_prompt = system_prompt
        self.failure_message = failure_message
        self._tasks: Set[asyncio.Task] = set()

    @property
    def in_flight(self) -> int:
        """Number of tasks still running."""
        return len(self._tasks)

    def dispatch(self, sender_id: str, query_text: str) -> None:
        """
        Start fetching an answer for sender_id in the background.

        Must be called from a running event loop. Returns immediately.
        """
        task = asyncio.get_running_loop().create_task(
            self._fetch_and_store(sender_id, query_text),
            name=f"completion:{sender_id}",
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        logger.info(
            f"Dispatched completion for {sender_id}",
            extra={"sender_id": sender_id, "in_flight": len(self._tasks)},
        )

    async def _fetch_and_store(self, sender_id: str, query_text: str) -> None:
        try:
            response = await self.backend.complete(self.system_prompt, query_text)
            if response.ok and response.output is not None:
                text = response.output
            else:
                logger.error(
                    f"Completion failed for {sender_id}: {response.error_type}",
                    extra={"sender_id": sender_id, "metadata": response.metadata},
                )
                text = self.failure_message
        except Exception as e:
            logger.error(f"Completion task crashed for {sender_id}: {e}", exc_info=True)
            text = self.failure_message

        self.store.store(sender_id, text)
        logger.info(
            f"Stored answer for {sender_id}",
            extra={"sender_id": sender_id, "output_length": len(text)},
        )

    async def drain(self, timeout: Optional[float] = None) -> bool:
        """
        Wait for the tasks running right now to finish.

        Args:
            timeout: Seconds to wait at most; None waits indefinitely

        Returns:
            True if every task finished, False on timeout
        """
        if not self._tasks:
            return True
        done, pending = await asyncio.wait(set(self._tasks), timeout=timeout)
        if pending:
            logger.warning(f"{len(pending)} completion task(s) still running after drain")
        return not pending
