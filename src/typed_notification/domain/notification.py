"""The typed notification contract.

A notification is a class deriving from :class:`TypedNotification`, usually a
frozen dataclass. It declares the type of the ``object`` attached to it (the
sender) and carries any extra data as ordinary fields, replacing a
string-keyed ``userInfo`` style dictionary::

    @dataclass(frozen=True)
    class DataStoreDidSave(TypedNotification["DataStore"]):
        object: DataStore
        saved_count: int

Every notification type has an identifying name used as the dispatch key by
the underlying broadcast mechanism. The default name is derived from the
class (see :func:`default_notification_name`). A type picks its own name with
the ``name`` class keyword::

    class DataStoreDidSave(TypedNotification["DataStore"], name="XYZDataStoreDidSave"):
        ...
"""

from __future__ import annotations

from typing import Any, ClassVar, Generic, Protocol, TypeVar, runtime_checkable

from typed_notification.config.settings import Settings, get_settings
from typed_notification.core.exceptions import ConfigurationError

SenderT = TypeVar("SenderT")

_NAME_ATTR = "_typed_notification_name"


@runtime_checkable
class Namespaced(Protocol):
    """Capability supplying a namespace for default notification names."""

    namespace: ClassVar[str]


def default_notification_name(cls: type, settings: Settings | None = None) -> str:
    """Derive the notification name of *cls* from its identity.

    Namespaced types produce ``"<namespace>.<qualname>"``. Other types use the
    configured prefix, optionally followed by the defining module:
    ``"TN.<module>.<qualname>"``.
    """
    if isinstance(cls, Namespaced):
        return f"{cls.namespace}.{cls.__qualname__}"

    settings = settings or get_settings()
    parts = [settings.name_prefix]
    if settings.qualify_with_module:
        parts.append(cls.__module__)
    parts.append(cls.__qualname__)
    return ".".join(part for part in parts if part)


class TypedNotification(Generic[SenderT]):
    """Base class for notifications posted through a typed center.

    Subclasses must provide an ``object`` attribute holding the sender. Observers
    can filter on it by identity.
    """

    object: SenderT

    def __init_subclass__(cls, name: str | None = None, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if name is not None:
            if not isinstance(name, str) or not name.strip():
                raise ConfigurationError(
                    f"Notification name for {cls.__qualname__} must be a non-empty string",
                    details={"type": cls.__qualname__, "name": name},
                )
            setattr(cls, _NAME_ATTR, name)
        namespace = cls.__dict__.get("namespace")
        if namespace is not None and (not isinstance(namespace, str) or not namespace):
            raise ConfigurationError(
                f"Namespace for {cls.__qualname__} must be a non-empty string",
                details={"type": cls.__qualname__, "namespace": namespace},
            )

    @classmethod
    def notification_name(cls) -> str:
        """The name identifying this notification type.

        Computed once per class and cached, so it stays stable for the life of
        the process.
        """
        cached = cls.__dict__.get(_NAME_ATTR)
        if cached is None:
            cached = default_notification_name(cls)
            setattr(cls, _NAME_ATTR, cached)
        return cached
