"""Untyped envelopes.

An :class:`Envelope` is what actually travels through the broadcast
mechanism: the notification name, the sender used for filtering and the
original typed notification as an opaque payload. This is the one place the
notification's type is erased; :func:`recover_payload` reverses it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TypeVar

from typed_notification.core.exceptions import InvalidNotificationError, PayloadMismatchError
from typed_notification.domain.notification import TypedNotification

N = TypeVar("N", bound=TypedNotification[Any])


@dataclass(frozen=True, eq=False)
class Envelope:
    """A name-tagged, untyped notification."""

    name: str
    sender: Any
    payload: Any


def wrap(notification: TypedNotification[Any]) -> Envelope:
    """Pack *notification* into an envelope keyed by its type's name."""
    if not isinstance(notification, TypedNotification):
        raise InvalidNotificationError(
            f"{type(notification).__qualname__} is not a TypedNotification",
            details={"type": type(notification).__qualname__},
        )
    try:
        sender = notification.object
    except AttributeError:
        raise InvalidNotificationError(
            f"{type(notification).__qualname__} has no 'object' attribute",
            details={"type": type(notification).__qualname__},
        ) from None

    return Envelope(
        name=type(notification).notification_name(),
        sender=sender,
        payload=notification,
    )


def recover_payload(envelope: Envelope, expected: type[N]) -> N:
    """Return the typed notification stored in *envelope*.

    Raises:
        PayloadMismatchError: The payload is not an instance of *expected*.
    """
    payload = envelope.payload
    if not isinstance(payload, expected):
        raise PayloadMismatchError(envelope.name, expected, type(payload))
    return payload
