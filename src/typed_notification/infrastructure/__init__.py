"""Infrastructure adapters: broadcast centers and delivery queues."""

from typed_notification.infrastructure.broadcast.memory import InMemoryBroadcastCenter
from typed_notification.infrastructure.queues import (
    AsyncioDeliveryQueue,
    ThreadPoolDeliveryQueue,
)

__all__ = ["AsyncioDeliveryQueue", "InMemoryBroadcastCenter", "ThreadPoolDeliveryQueue"]
