"""Type-safe notifications over a name-keyed broadcast center.

Declare a notification::

    @dataclass(frozen=True)
    class PriceChanged(TypedNotification[Ticker]):
        object: Ticker
        price: float

Observe it, keeping the returned observation alive::

    center = get_default_center()
    observation = center.add_observer(PriceChanged, on_price, sender=ticker)

And post it::

    center.post(PriceChanged(object=ticker, price=9.5))
"""

from typed_notification.application.center import TypedCenter
from typed_notification.container import CenterFactory, create_center, get_default_center
from typed_notification.core.exceptions import (
    ConfigurationError,
    InvalidNotificationError,
    PayloadMismatchError,
    TypedNotificationError,
)
from typed_notification.domain.envelope import Envelope
from typed_notification.domain.notification import Namespaced, TypedNotification
from typed_notification.domain.observation import (
    NotificationObservation,
    NotificationObservationBag,
)
from typed_notification.domain.ports import (
    BroadcastCenter,
    DeliveryQueue,
    Subscription,
    TypedNotificationCenter,
)
from typed_notification.infrastructure.broadcast.memory import InMemoryBroadcastCenter
from typed_notification.infrastructure.queues import AsyncioDeliveryQueue, ThreadPoolDeliveryQueue

__all__ = [
    "AsyncioDeliveryQueue",
    "BroadcastCenter",
    "CenterFactory",
    "ConfigurationError",
    "DeliveryQueue",
    "Envelope",
    "InMemoryBroadcastCenter",
    "InvalidNotificationError",
    "Namespaced",
    "NotificationObservation",
    "NotificationObservationBag",
    "PayloadMismatchError",
    "Subscription",
    "ThreadPoolDeliveryQueue",
    "TypedCenter",
    "TypedNotification",
    "TypedNotificationCenter",
    "TypedNotificationError",
    "create_center",
    "get_default_center",
]
