"""Drive a long-running video operation to completion."""

from __future__ import annotations

import asyncio
from enum import Enum
from typing import Optional

from osrs_oracle.domain.errors import OperationCancelled, OperationTimeout
from osrs_oracle.domain.models import MediaOperation, OperationStatus
from osrs_oracle.llm.envelope import decode_operation
from osrs_oracle.llm.gemini_client import GeminiClient
from osrs_oracle.logging import get_logger

logger = get_logger(__name__)

DEFAULT_INTERVAL_S = 5.0


class PollerState(str, Enum):
    SUBMITTED = "submitted"
    POLLING = "polling"
    COMPLETE = "complete"
    FAILED = "failed"


class VideoOperationPoller:
    """Polls one operation at a time, strictly sequentially.

    ``max_polls`` and ``deadline_s`` bound the loop; setting ``cancel_event``
    stops it at the next suspension point. A finished operation without a
    video ends in ``FAILED`` and is returned, not raised.
    """

    def __init__(
        self,
        client: GeminiClient,
        *,
        interval_s: float = DEFAULT_INTERVAL_S,
        max_polls: Optional[int] = None,
        deadline_s: Optional[float] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ):
        self.client = client
        self.interval_s = interval_s
        self.max_polls = max_polls
        self.deadline_s = deadline_s
        self.cancel_event = cancel_event
        self.state = PollerState.SUBMITTED
        self.polls = 0

    def _cancelled(self) -> bool:
        return self.cancel_event is not None and self.cancel_event.is_set()

    def _fail_with(self, exc_type, message: str):
        self.state = PollerState.FAILED
        logger.warning("Video operation abandoned", extra={"reason": message, "polls": self.polls})
        return exc_type(message)

    async def _wait(self) -> None:
        if self.cancel_event is None:
            await asyncio.sleep(self.interval_s)
            return
        try:
            await asyncio.wait_for(self.cancel_event.wait(), timeout=self.interval_s)
        except asyncio.TimeoutError:
            return

    async def run(self, operation: MediaOperation) -> MediaOperation:
        self.state = PollerState.POLLING
        loop = asyncio.get_running_loop()
        started = loop.time()
        try:
            while not operation.finished:
                if self._cancelled():
                    raise self._fail_with(OperationCancelled, "Video generation was cancelled")
                if self.max_polls is not None and self.polls >= self.max_polls:
                    raise self._fail_with(OperationTimeout, f"Video generation still running after {self.polls} polls")
                if self.deadline_s is not None and loop.time() - started >= self.deadline_s:
                    raise self._fail_with(OperationTimeout, f"Video generation exceeded {self.deadline_s:.0f}s")

                await self._wait()
                if self._cancelled():
                    raise self._fail_with(OperationCancelled, "Video generation was cancelled")

                self.polls += 1
                handle = operation.handle
                operation = decode_operation(await self.client.get_operation(handle))
                operation.handle = operation.handle or handle
                logger.debug("Polled video operation", extra={"poll": self.polls, "status": operation.status.value})
        except asyncio.CancelledError:
            self.state = PollerState.FAILED
            raise

        if operation.status is OperationStatus.DONE:
            self.state = PollerState.COMPLETE
        else:
            self.state = PollerState.FAILED
            logger.warning("Video operation failed", extra={"handle": operation.handle, "error": operation.error})
        return operation


__all__ = ["VideoOperationPoller", "PollerState", "DEFAULT_INTERVAL_S"]
