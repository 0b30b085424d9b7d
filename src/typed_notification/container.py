"""Process-wide default center.

Code that needs "the" notification center should take a
``TypedNotificationCenter`` argument and default it from
:meth:`CenterFactory.get_center`, so tests can inject their own.
"""

from __future__ import annotations

from typed_notification.application.center import TypedCenter
from typed_notification.domain.ports import BroadcastCenter
from typed_notification.infrastructure.broadcast.memory import InMemoryBroadcastCenter


def create_center(broadcast: BroadcastCenter | None = None) -> TypedCenter:
    """Build a typed center, over a fresh in-memory broadcast center by default."""
    return TypedCenter(broadcast if broadcast is not None else InMemoryBroadcastCenter())


class CenterFactory:
    __center: TypedCenter = create_center()

    @staticmethod
    def set_center(center: TypedCenter) -> None:
        CenterFactory.__center = center

    @staticmethod
    def get_center() -> TypedCenter:
        return CenterFactory.__center

    @staticmethod
    def reset() -> None:
        CenterFactory.__center = create_center()


def get_default_center() -> TypedCenter:
    """Return the process-wide default center."""
    return CenterFactory.get_center()
