"""Typed notification center.

Translates typed ``post`` / ``add_observer`` calls into the untyped calls of
a :class:`~typed_notification.domain.ports.BroadcastCenter` and back. The API
mimics a block-based notification center: observe a notification *type*
rather than a name, and receive an instance of that type rather than a
generic notification object.
"""

from __future__ import annotations

import inspect
import weakref
from typing import Any, Callable, TypeVar

import structlog

from typed_notification.core.exceptions import PayloadMismatchError
from typed_notification.domain.envelope import Envelope, recover_payload, wrap
from typed_notification.domain.notification import TypedNotification
from typed_notification.domain.observation import (
    NotificationObservation,
    NotificationObservationBag,
)
from typed_notification.domain.ports import BroadcastCenter, DeliveryQueue

logger = structlog.get_logger(__name__)

N = TypeVar("N", bound=TypedNotification[Any])


def _callback_ref(callback: Callable[[N], None]) -> Callable[[], Callable[[N], None] | None]:
    """Reference *callback* without keeping a bound method's owner alive."""
    if inspect.ismethod(callback):
        try:
            return weakref.WeakMethod(callback)
        except TypeError:
            # owner does not support weak references
            pass
    return lambda: callback


class TypedCenter:
    """Posts and observes typed notifications over a broadcast center."""

    def __init__(self, broadcast: BroadcastCenter) -> None:
        self._broadcast = broadcast

    @property
    def broadcast(self) -> BroadcastCenter:
        return self._broadcast

    def post(self, notification: TypedNotification[Any]) -> None:
        """Post *notification* to every matching observer.

        Observers registered without a queue run before this returns.
        """
        self._broadcast.post_envelope(wrap(notification))

    def add_observer(
        self,
        notification_type: type[N],
        callback: Callable[[N], None],
        *,
        sender: Any = None,
        queue: DeliveryQueue | None = None,
    ) -> NotificationObservation:
        """Register *callback* for notifications of *notification_type*.

        Args:
            notification_type: The type of notification to observe.
            callback: Called with each matching notification instance.
            sender: Only deliver notifications whose ``object`` is this exact
                object. ``None`` delivers notifications from any sender.
            queue: Queue to run *callback* on. ``None`` runs it synchronously
                on the posting thread.

        Returns:
            A NotificationObservation that removes the observer when released
            or garbage collected, so keep a reference to it. A bound method
            callback does not keep its object alive; once the object is
            collected the observer is removed.
        """
        name = notification_type.notification_name()
        callback_ref = _callback_ref(callback)
        broadcast = self._broadcast

        def deliver(envelope: Envelope) -> None:
            try:
                notification = recover_payload(envelope, notification_type)
            except PayloadMismatchError as exc:
                logger.warning(
                    "typed_notification_payload_mismatch",
                    name=exc.name,
                    expected=exc.expected.__qualname__,
                    actual=exc.actual.__qualname__,
                )
                return
            target = callback_ref()
            if target is None:
                broadcast.unsubscribe(subscription)
                return
            target(notification)

        subscription = broadcast.subscribe(name, sender, queue, deliver)
        logger.debug(
            "typed_notification_observer_added",
            name=name,
            subscription_id=subscription.id,
            filtered=sender is not None,
            queued=queue is not None,
        )
        return NotificationObservation(lambda: broadcast.unsubscribe(subscription))

    def observer(
        self,
        notification_type: type[N],
        *,
        bag: NotificationObservationBag,
        sender: Any = None,
        queue: DeliveryQueue | None = None,
    ) -> Callable[[Callable[[N], None]], Callable[[N], None]]:
        """Decorator form of :meth:`add_observer`.

        The observation is stored in *bag*, so the observer lives until the
        bag is emptied::

            @center.observer(DataStoreDidSave, bag=self.observations)
            def on_save(note: DataStoreDidSave) -> None:
                ...
        """

        def decorator(fn: Callable[[N], None]) -> Callable[[N], None]:
            self.add_observer(notification_type, fn, sender=sender, queue=queue).store_in(bag)
            return fn

        return decorator
