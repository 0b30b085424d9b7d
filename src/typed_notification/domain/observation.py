"""Lifetime-bound observations.

A :class:`NotificationObservation` owns one subscription. The subscription
is removed when the observation is released, which happens on the first of:
an explicit :meth:`~NotificationObservation.release`, leaving a ``with``
block, or the observation being garbage collected. Keep a reference to it for
as long as you want to receive notifications.

:class:`NotificationObservationBag` ties several observations to the
lifetime of one owner.
"""

from __future__ import annotations

import sys
import threading
from typing import Callable, Self

import structlog

logger = structlog.get_logger(__name__)


class NotificationObservation:
    """Runs a release action exactly once."""

    def __init__(self, release_action: Callable[[], None]) -> None:
        self._lock = threading.Lock()
        self._release_action: Callable[[], None] | None = release_action

    @property
    def is_released(self) -> bool:
        return self._release_action is None

    def release(self) -> None:
        """Run the release action. Later calls do nothing."""
        with self._lock:
            action, self._release_action = self._release_action, None
        if action is not None:
            action()

    def store_in(self, bag: NotificationObservationBag) -> Self:
        """Add this observation to *bag* and return it."""
        bag.add(self)
        return self

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.release()

    def __del__(self) -> None:
        # __init__ may not have run to completion; at interpreter exit the
        # broadcast center is being torn down too
        if hasattr(self, "_lock") and not sys.is_finalizing():
            self.release()


class NotificationObservationBag:
    """Thread-safe collection of observations released together."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._observations: list[NotificationObservation] = []

    def add(self, observation: NotificationObservation) -> None:
        with self._lock:
            self._observations.append(observation)

    def empty(self) -> None:
        """Release every observation currently in the bag and clear it.

        Observations are released after the lock is dropped, so a release
        action may add to or empty this same bag. Every observation is released
        even if an earlier release action raises; the first error is re-raised
        once the drain is complete.
        """
        with self._lock:
            drained, self._observations = self._observations, []
        first_error: Exception | None = None
        for observation in drained:
            try:
                observation.release()
            except Exception as exc:
                logger.exception("notification_observation_release_failed")
                if first_error is None:
                    first_error = exc
        if first_error is not None:
            raise first_error

    def __len__(self) -> int:
        with self._lock:
            return len(self._observations)

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.empty()

    def __del__(self) -> None:
        if hasattr(self, "_lock") and not sys.is_finalizing():
            self.empty()
