"""Fallback resolver — keys missing from the live table, looked up in one fixed file."""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

from loguru import logger

from langkit.i18n.fixer import fix_format
from langkit.i18n.lang_file import iter_lines, split_entry
from langkit.models.identifier import DEFAULT_NAMESPACE, Identifier

if TYPE_CHECKING:
    from langkit.i18n.table import TranslationTable
    from langkit.resources.base import ResourceManager

FALLBACK_RESOURCE = Identifier(DEFAULT_NAMESPACE, "lang/fallback.lang")


class FallbackResolver:
    """
    Secondary lookup for text whose key the loaded languages do not define,
    e.g. keys sent by a newer peer.

    Hits are cached for the life of the process and survive reloads.
    Misses are not cached, so every miss scans the fallback file again.
    """

    def __init__(
        self,
        resource_manager: ResourceManager,
        table: TranslationTable,
        resource: Identifier = FALLBACK_RESOURCE,
    ) -> None:
        self._resource_manager = resource_manager
        self._table = table
        self._resource = resource
        self._cache: dict[str, str] = {}
        self._cache_lock = threading.Lock()

    def resolve(self, key: str) -> str:
        """
        Translate *key* from the live table, then the cache, then the file.

        The file match is a raw prefix match on each line, so a key that is a
        prefix of an earlier key matches that line.  A missing or unreadable
        fallback file raises ``OSError``.
        """
        value = self._table.get(key)
        if value is not None:
            return value
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        resource = self._resource_manager.get_resource(self._resource)
        with resource.open() as stream:
            for line in iter_lines(stream):
                if not line.startswith(key):
                    continue
                entry = split_entry(line)
                if entry is None:
                    continue
                value = fix_format(entry[1])
                with self._cache_lock:
                    value = self._cache.setdefault(key, value)
                logger.debug(f"Resolved '{key}' from fallback {self._resource}")
                return value
        return key

    @property
    def cached_keys(self) -> list[str]:
        return list(self._cache)
