"""Delivery queues.

Observers registered with a queue have their deliveries submitted to it
instead of running on the posting thread.
"""

from __future__ import annotations

import asyncio
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, Self

import structlog

from typed_notification.config.settings import get_settings
from typed_notification.core.exceptions import ConfigurationError

logger = structlog.get_logger(__name__)


class ThreadPoolDeliveryQueue:
    """Runs deliveries on a thread pool.

    With ``max_workers=1`` deliveries run one at a time in submission order.
    """

    def __init__(
        self,
        max_workers: int | None = None,
        *,
        thread_name_prefix: str = "typed-notification",
    ) -> None:
        workers = max_workers if max_workers is not None else get_settings().delivery_workers
        if workers < 1:
            raise ConfigurationError(
                "Delivery queue needs at least one worker",
                details={"max_workers": workers},
            )
        self._executor = ThreadPoolExecutor(
            max_workers=workers,
            thread_name_prefix=thread_name_prefix,
        )

    def submit(self, fn: Callable[[], None]) -> None:
        future = self._executor.submit(fn)
        future.add_done_callback(self._log_failure)

    def shutdown(self, wait: bool = True) -> None:
        """Stop accepting deliveries; with *wait*, finish the queued ones first."""
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown(wait=True)

    @staticmethod
    def _log_failure(future: Future[None]) -> None:
        if future.cancelled():
            return
        exc = future.exception()
        if exc is not None:
            logger.error("typed_notification_delivery_failed", exc_info=exc)


class AsyncioDeliveryQueue:
    """Runs deliveries on an asyncio event loop.

    Safe to post from any thread; exceptions raised by observers go to the
    loop's exception handler.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop) -> None:
        self._loop = loop

    def submit(self, fn: Callable[[], None]) -> None:
        self._loop.call_soon_threadsafe(fn)
