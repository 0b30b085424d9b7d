"""Configuration module for typed-notification."""

from typed_notification.config.logging import configure_logging, get_logger
from typed_notification.config.settings import Settings, get_settings

__all__ = ["Settings", "configure_logging", "get_logger", "get_settings"]
