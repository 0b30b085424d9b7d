"""Custom exceptions for typed-notification."""


class TypedNotificationError(Exception):
    """Base exception for all typed-notification errors."""

    def __init__(self, message: str, details: dict | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(TypedNotificationError):
    """Raised when there's a configuration problem."""

    pass


class InvalidNotificationError(TypedNotificationError):
    """Raised when a value does not satisfy the notification contract."""

    pass


class PayloadMismatchError(TypedNotificationError):
    """Raised when an envelope's payload is not of the expected type."""

    def __init__(self, name: str, expected: type, actual: type) -> None:
        super().__init__(
            f"Payload of notification {name!r} is {actual.__qualname__}, "
            f"expected {expected.__qualname__}",
            details={"name": name, "expected": expected.__qualname__, "actual": actual.__qualname__},
        )
        self.name = name
        self.expected = expected
        self.actual = actual
