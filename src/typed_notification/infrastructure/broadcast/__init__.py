"""Broadcast center implementations."""

from typed_notification.infrastructure.broadcast.memory import InMemoryBroadcastCenter

__all__ = ["InMemoryBroadcastCenter"]
