"""Layered resource manager — ordered pack stack with reload notification."""

from __future__ import annotations

import threading
from typing import Iterable

from loguru import logger

from langkit.errors import ResourceNotFoundError
from langkit.models.identifier import Identifier
from langkit.resources.base import ReloadListener, Resource, ResourceManager, ResourcePack


class LayeredResourceManager(ResourceManager):
    """
    Resource manager over an ordered list of packs.

    Packs are kept in load order: index 0 has the lowest precedence, the
    last pack overrides everything before it.

    Usage::

        rm = LayeredResourceManager([default_pack, user_pack])
        rm.register_reload_listener(i18n)   # listener runs once immediately
        rm.reload_packs([default_pack, other_pack])
    """

    def __init__(self, packs: Iterable[ResourcePack] | None = None) -> None:
        self._packs: list[ResourcePack] = list(packs or [])
        self._listeners: list[ReloadListener] = []
        self._lock = threading.Lock()

    # ── Read-only access ──

    @property
    def packs(self) -> list[ResourcePack]:
        return list(self._packs)

    @property
    def resource_domains(self) -> list[str]:
        domains: set[str] = set()
        for pack in self._packs:
            domains |= pack.resource_domains()
        return sorted(domains)

    # ── Lookup ──

    def get_resource(self, identifier: Identifier) -> Resource:
        for pack in reversed(self._packs):
            if pack.has_resource(identifier):
                return pack.get_resource(identifier)
        raise ResourceNotFoundError(identifier)

    def get_all_resources(self, identifier: Identifier) -> list[Resource]:
        found = [p.get_resource(identifier) for p in self._packs if p.has_resource(identifier)]
        if not found:
            raise ResourceNotFoundError(identifier)
        return found

    # ── Reload ──

    def register_reload_listener(self, listener: ReloadListener) -> None:
        self._listeners.append(listener)
        listener.on_resource_reload(self)

    def reload_packs(self, packs: Iterable[ResourcePack]) -> None:
        """Replace the pack stack and notify every listener."""
        with self._lock:
            self._packs = list(packs)
            logger.info(f"Reloading resource packs: {', '.join(p.name for p in self._packs)}")
        self.notify_reload()

    def notify_reload(self) -> None:
        for listener in list(self._listeners):
            try:
                listener.on_resource_reload(self)
            except Exception as e:
                logger.error(f"Reload listener {type(listener).__name__} failed: {e}")
