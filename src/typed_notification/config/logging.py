"""structlog setup.

The library itself only ever calls ``structlog.get_logger``; applications
that want the bundled pipeline call :func:`configure_logging` once at start-up.
"""

from __future__ import annotations

import structlog

from typed_notification.config.settings import Settings, get_settings


def configure_logging(settings: Settings | None = None) -> None:
    """Install a structlog pipeline honouring *settings* (level and renderer)."""
    settings = settings or get_settings()

    renderer: structlog.typing.Processor
    if settings.log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(settings.log_level_number),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None) -> structlog.typing.FilteringBoundLogger:
    """Return a structlog logger bound to *name*."""
    return structlog.get_logger(name)
