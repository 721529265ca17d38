"""Translation core: registry, table, fallback resolver and the I18n service."""

from langkit.i18n.fixer import fix_format
from langkit.i18n.registry import DEFAULT_LANGUAGE, LanguageRegistry
from langkit.i18n.service import I18n, tr
from langkit.i18n.table import TranslationTable

__all__ = ["DEFAULT_LANGUAGE", "I18n", "LanguageRegistry", "TranslationTable", "fix_format", "tr"]
