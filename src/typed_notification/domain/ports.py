"""Port definitions.

The typed center only talks to the broadcast mechanism and to delivery
queues through these Protocols, so any name-keyed pub/sub facility can sit
underneath it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Protocol, TypeVar, runtime_checkable

from typed_notification.domain.envelope import Envelope
from typed_notification.domain.notification import TypedNotification

if TYPE_CHECKING:
    from typed_notification.domain.observation import NotificationObservation

N = TypeVar("N", bound=TypedNotification[Any])


@dataclass(frozen=True, slots=True)
class Subscription:
    """Opaque subscription token returned by a broadcast center."""

    id: int
    name: str


@runtime_checkable
class DeliveryQueue(Protocol):
    """Runs delivery callables somewhere other than the posting call stack."""

    def submit(self, fn: Callable[[], None]) -> None: ...


@runtime_checkable
class BroadcastCenter(Protocol):
    """Untyped, name-keyed publish/subscribe facility."""

    def post_envelope(self, envelope: Envelope) -> None: ...
    def subscribe(
        self,
        name: str,
        sender: Any,
        queue: DeliveryQueue | None,
        handler: Callable[[Envelope], None],
    ) -> Subscription: ...
    def unsubscribe(self, subscription: Subscription) -> None: ...


@runtime_checkable
class TypedNotificationCenter(Protocol):
    """Posts and observes :class:`TypedNotification` values."""

    def post(self, notification: TypedNotification[Any]) -> None: ...
    def add_observer(
        self,
        notification_type: type[N],
        callback: Callable[[N], None],
        *,
        sender: Any = None,
        queue: DeliveryQueue | None = None,
    ) -> NotificationObservation: ...
