from __future__ import annotations

from typing import Any

from optionstore.core.store import OptionStore


class OptionOverlayMixin:
    """Expose an embedded :class:`OptionStore` as attributes of the host object.

    The host keeps its store in ``_options``. Attribute lookups that miss on the
    host fall through to the store; assignments to public names the host does not
    define itself are forwarded to the store. Both only happen while the store's
    overlay is enabled.

    Attributes assigned before ``_options`` exists, or already present on the
    instance, stay on the host.

    Example:
        >>> class Settings(OptionOverlayMixin):
        ...     def __init__(self):
        ...         self._options = OptionStore("settings")
        ...         self._options.overlay_enabled = True
        >>> s = Settings()
        >>> s.timeout = 30
        >>> s.timeout
        30
    """

    _options: OptionStore

    @property
    def options(self) -> OptionStore:
        return self._options

    def __getattr__(self, name: str) -> Any:
        # Only reached when normal lookup failed
        if name.startswith("_"):
            raise AttributeError(name)
        store = self.__dict__.get("_options")
        if store is not None and store.overlay_has(name):
            return store.overlay_get(name)
        raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")

    def __setattr__(self, name: str, value: Any) -> None:
        store = self.__dict__.get("_options")
        if (
            store is None
            or not store.overlay_enabled
            or name.startswith("_")
            or name in self.__dict__
            or hasattr(type(self), name)
        ):
            object.__setattr__(self, name, value)
            return
        store.overlay_set(name, value)
