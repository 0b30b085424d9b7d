"""Application layer: the typed notification center."""

from typed_notification.application.center import TypedCenter

__all__ = ["TypedCenter"]
