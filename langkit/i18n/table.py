"""Translation table — the live key → string map for the active languages."""

from __future__ import annotations

import threading
from types import MappingProxyType
from typing import TYPE_CHECKING, Iterable, Mapping

from loguru import logger

from langkit.i18n.fixer import fix_format
from langkit.i18n.lang_file import iter_lines, lang_path, parse_line
from langkit.i18n.unicode import is_unicode
from langkit.models.identifier import Identifier

if TYPE_CHECKING:
    from langkit.resources.base import Resource, ResourceManager


class TranslationTable:
    """
    Translation map rebuilt wholesale on every reload.

    ``rebuild()`` fills a fresh dict and swaps it in when complete, so
    readers see either the previous table or the new one, never a partial
    fill.  Only one rebuild runs at a time.
    """

    def __init__(self) -> None:
        self._entries: Mapping[str, str] = MappingProxyType({})
        self._unicode = False
        self._lock = threading.Lock()

    # ── Rebuild ──

    def rebuild(self, resource_manager: ResourceManager, languages: Iterable[str]) -> None:
        """
        Load ``lang/<code>.lang`` from every domain for each language in order.

        Later languages, domains and packs override earlier ones key by key.
        """
        languages = list(languages)
        with self._lock:
            entries: dict[str, str] = {}
            domains = resource_manager.resource_domains
            for code in languages:
                path = lang_path(code)
                for domain in domains:
                    identifier = Identifier(domain, path)
                    try:
                        resources = resource_manager.get_all_resources(identifier)
                    except OSError:
                        logger.debug(f"No language file {identifier}")
                        continue
                    for resource in resources:
                        self._load_resource(resource, entries)

            unicode = is_unicode(entries.values())
            self._entries = MappingProxyType(entries)
            self._unicode = unicode
        logger.info(
            f"Loaded {len(entries)} translation(s) for {', '.join(languages)}"
            f"{' (unicode)' if unicode else ''}"
        )

    @staticmethod
    def _load_resource(resource: Resource, entries: dict[str, str]) -> None:
        try:
            with resource.open() as stream:
                for line in iter_lines(stream):
                    parsed = parse_line(line)
                    if parsed is None:
                        continue
                    key, value = parsed
                    entries[key] = fix_format(value)
        except OSError as e:
            logger.warning(
                f"Skipping unreadable language file {resource.identifier} "
                f"in '{resource.pack_name}': {e}"
            )

    # ── Lookup ──

    def lookup(self, key: str) -> str:
        return self._entries.get(key, key)

    def get(self, key: str) -> str | None:
        return self._entries.get(key)

    def contains(self, key: str) -> bool:
        return key in self._entries

    @property
    def entries(self) -> Mapping[str, str]:
        """Read-only view of the current table."""
        return self._entries

    @property
    def is_unicode(self) -> bool:
        return self._unicode

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)
