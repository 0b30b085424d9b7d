"""Domain layer: notification contract, envelopes, observations and ports."""

from typed_notification.domain.envelope import Envelope, recover_payload, wrap
from typed_notification.domain.notification import (
    Namespaced,
    TypedNotification,
    default_notification_name,
)
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

__all__ = [
    "BroadcastCenter",
    "DeliveryQueue",
    "Envelope",
    "Namespaced",
    "NotificationObservation",
    "NotificationObservationBag",
    "Subscription",
    "TypedNotification",
    "TypedNotificationCenter",
    "default_notification_name",
    "recover_payload",
    "wrap",
]
