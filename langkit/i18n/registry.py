"""Language registry — locales declared by resource pack metadata."""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Iterable

from loguru import logger

from langkit.errors import LangkitError
from langkit.models.locale import LanguageMetadata, Locale
from langkit.resources.metadata import LANGUAGE_SECTION

if TYPE_CHECKING:
    from langkit.resources.base import ResourcePack
    from langkit.resources.metadata import MetadataSerializer

DEFAULT_LANGUAGE = "en_US"

# Guaranteed entry when no pack declares the default language.
BUILTIN_DEFAULT = Locale(DEFAULT_LANGUAGE, "English", "US", False)


class LanguageRegistry:
    """
    Known locales keyed by code.

    Repopulation is first-wins across sources: the earliest source that
    declares a code owns its descriptor.  The default locale is always
    present.
    """

    def __init__(self) -> None:
        self._by_code: dict[str, Locale] = {DEFAULT_LANGUAGE: BUILTIN_DEFAULT}
        self._lock = threading.Lock()

    def register_from_metadata(
        self, sources: Iterable[tuple[str, LanguageMetadata | None]]
    ) -> None:
        """
        Replace all entries with the locales declared by *sources*.

        Concurrent repopulations run one at a time; readers keep the previous
        mapping until the new one is swapped in.
        """
        with self._lock:
            by_code: dict[str, Locale] = {}
            for source_name, metadata in sources:
                if metadata is None:
                    continue
                for locale in metadata.languages:
                    if locale.code in by_code:
                        logger.debug(f"Ignoring duplicate language '{locale.code}' from '{source_name}'")
                        continue
                    by_code[locale.code] = locale
            by_code.setdefault(DEFAULT_LANGUAGE, BUILTIN_DEFAULT)
            self._by_code = by_code
        logger.debug(f"Registered {len(by_code)} language(s)")

    def register_from_packs(
        self, serializer: MetadataSerializer, packs: Iterable[ResourcePack]
    ) -> None:
        """Read each pack's ``language`` section; broken packs are logged and skipped."""
        sources: list[tuple[str, LanguageMetadata | None]] = []
        for pack in packs:
            try:
                sources.append((pack.name, pack.get_pack_metadata(serializer, LANGUAGE_SECTION)))
            except (LangkitError, ValueError, OSError) as e:
                logger.warning(f"Unable to parse metadata section of resource pack '{pack.name}': {e}")
        self.register_from_metadata(sources)

    # ── Queries ──

    def get(self, code: str) -> Locale | None:
        return self._by_code.get(code)

    def resolve(self, code: str) -> Locale:
        """The locale for *code*, or the default locale if it is unregistered."""
        by_code = self._by_code
        return by_code.get(code) or by_code[DEFAULT_LANGUAGE]

    def list_locales(self) -> list[Locale]:
        return sorted(self._by_code.values())

    def __contains__(self, code: object) -> bool:
        return code in self._by_code

    def __len__(self) -> int:
        return len(self._by_code)
