"""I18n service — active language, reload integration and translation entry points."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable, Sequence

from loguru import logger

from langkit.errors import FormatError, NotInitializedError
from langkit.i18n.fallback import FallbackResolver
from langkit.i18n.formatter import format_args
from langkit.i18n.registry import DEFAULT_LANGUAGE, LanguageRegistry
from langkit.i18n.table import TranslationTable
from langkit.models.locale import Locale
from langkit.resources.base import ReloadListener

if TYPE_CHECKING:
    from langkit.resources.base import ResourceManager, ResourcePack
    from langkit.resources.metadata import MetadataSerializer


class I18n(ReloadListener):
    """
    Owns every piece of translation state for one process: the language
    registry, the translation table, the fallback cache and the active
    language code.

    Usage::

        i18n = I18n()
        i18n.parse_language_meta(serializer, resource_manager.packs)
        i18n.init(resource_manager, "fr_FR")   # subscribes and loads
        i18n.translate("menu.quit")
        i18n.format("chat.joined", "Alice")
    """

    DEFAULT_LANGUAGE = DEFAULT_LANGUAGE

    def __init__(self) -> None:
        self.registry = LanguageRegistry()
        self.table = TranslationTable()
        self.current_language_code = DEFAULT_LANGUAGE
        self._resource_manager: ResourceManager | None = None
        self._fallback: FallbackResolver | None = None

    # ── Lifecycle ──

    def init(self, resource_manager: ResourceManager, language: str) -> None:
        """Attach to *resource_manager*, select *language* and subscribe to reloads."""
        self._resource_manager = resource_manager
        self._fallback = FallbackResolver(resource_manager, self.table)
        self.current_language_code = language
        resource_manager.register_reload_listener(self)

    def on_resource_reload(self, resource_manager: ResourceManager) -> None:
        languages = [DEFAULT_LANGUAGE]
        if self.current_language_code != DEFAULT_LANGUAGE:
            languages.append(self.current_language_code)
        self.table.rebuild(resource_manager, languages)

    def parse_language_meta(
        self, serializer: MetadataSerializer, packs: Iterable[ResourcePack]
    ) -> None:
        self.registry.register_from_packs(serializer, packs)

    def set_language(self, code: str) -> None:
        """Switch the active language; reloads the table once initialised."""
        if code == self.current_language_code:
            return
        if code not in self.registry:
            logger.warning(f"Language '{code}' is not declared by any resource pack")
        self.current_language_code = code
        if self._resource_manager is not None:
            self.on_resource_reload(self._resource_manager)

    # ── Language state ──

    @property
    def current_locale(self) -> Locale:
        return self.registry.resolve(self.current_language_code)

    @property
    def is_bidirectional(self) -> bool:
        return self.current_locale.bidirectional

    @property
    def is_unicode(self) -> bool:
        return self.table.is_unicode

    def languages(self) -> list[Locale]:
        return self.registry.list_locales()

    # ── Translation ──

    def translate(self, key: str) -> str:
        return self.table.lookup(key)

    def has_key(self, key: str) -> bool:
        return self.table.contains(key)

    def translate_with_fallback(self, key: str) -> str:
        """
        Translate text whose key may be unknown to the loaded languages.

        Raises ``OSError`` if the fallback file itself is missing.
        """
        if self._fallback is None:
            raise NotInitializedError("I18n.init() must be called before fallback lookups")
        return self._fallback.resolve(key)

    def format(self, key: str, *args: Any) -> str:
        """Translate *key* and substitute *args*; never raises on a bad template."""
        return self._format(self.translate(key), args)

    def format_with_fallback(self, key: str, *args: Any) -> str:
        return self._format(self.translate_with_fallback(key), args)

    @staticmethod
    def _format(template: str, args: Sequence[Any]) -> str:
        try:
            return format_args(template, args)
        except FormatError as e:
            logger.warning(f"Format error in '{template}': {e}")
            return f"Format error: {template}"


def tr(i18n: I18n, key: str, *args: Any) -> str:
    """Shorthand: plain translation without args, formatted translation with them."""
    if args:
        return i18n.format(key, *args)
    return i18n.translate(key)
