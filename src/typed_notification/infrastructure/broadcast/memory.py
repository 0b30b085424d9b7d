"""In-memory broadcast center.

Name-keyed publish/subscribe for envelopes. Handlers without a delivery
queue are called synchronously on the posting thread in registration order;
handlers with a queue are submitted to it. Implements ``BroadcastCenter``
port.
"""

from __future__ import annotations

import itertools
import threading
from collections import defaultdict
from dataclasses import dataclass, field
from functools import partial
from typing import Any, Callable

import structlog

from typed_notification.domain.envelope import Envelope
from typed_notification.domain.ports import DeliveryQueue, Subscription

logger = structlog.get_logger(__name__)


@dataclass
class _Subscriber:
    subscription: Subscription
    sender: Any
    queue: DeliveryQueue | None
    handler: Callable[[Envelope], None]
    active: bool = field(default=True)

    def matches(self, envelope: Envelope) -> bool:
        return self.sender is None or self.sender is envelope.sender

    def deliver(self, envelope: Envelope) -> None:
        # Removed while the delivery was queued or while an earlier handler ran
        if self.active:
            self.handler(envelope)


class InMemoryBroadcastCenter:
    """Thread-safe in-process broadcast center."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._subscribers: dict[str, list[_Subscriber]] = defaultdict(list)
        self._ids = itertools.count(1)

    def subscribe(
        self,
        name: str,
        sender: Any,
        queue: DeliveryQueue | None,
        handler: Callable[[Envelope], None],
    ) -> Subscription:
        """Register *handler* for envelopes named *name*.

        A non-``None`` *sender* restricts delivery to envelopes whose sender is
        that exact object.
        """
        with self._lock:
            subscription = Subscription(id=next(self._ids), name=name)
            self._subscribers[name].append(
                _Subscriber(subscription=subscription, sender=sender, queue=queue, handler=handler)
            )
        logger.debug("broadcast_subscriber_added", name=name, subscription_id=subscription.id)
        return subscription

    def unsubscribe(self, subscription: Subscription) -> None:
        """Remove the subscriber behind *subscription*. Unknown tokens are ignored."""
        with self._lock:
            subscribers = self._subscribers.get(subscription.name)
            if not subscribers:
                return
            for index, subscriber in enumerate(subscribers):
                if subscriber.subscription == subscription:
                    subscriber.active = False
                    del subscribers[index]
                    break
            else:
                return
            if not subscribers:
                del self._subscribers[subscription.name]
        logger.debug(
            "broadcast_subscriber_removed",
            name=subscription.name,
            subscription_id=subscription.id,
        )

    def post_envelope(self, envelope: Envelope) -> None:
        """Dispatch *envelope* to every subscriber matching its name and sender."""
        with self._lock:
            subscribers = list(self._subscribers.get(envelope.name, ()))

        for subscriber in subscribers:
            if not subscriber.matches(envelope):
                continue
            if subscriber.queue is None:
                subscriber.deliver(envelope)
            else:
                subscriber.queue.submit(partial(subscriber.deliver, envelope))

    def subscriber_count(self, name: str | None = None) -> int:
        """Number of live subscribers, for one name or overall."""
        with self._lock:
            if name is not None:
                return len(self._subscribers.get(name, ()))
            return sum(len(subscribers) for subscribers in self._subscribers.values())
