"""Core building blocks shared across typed-notification."""

from typed_notification.core.exceptions import (
    ConfigurationError,
    InvalidNotificationError,
    PayloadMismatchError,
    TypedNotificationError,
)

__all__ = [
    "TypedNotificationError",
    "ConfigurationError",
    "InvalidNotificationError",
    "PayloadMismatchError",
]
