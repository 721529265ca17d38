"""Pack metadata parsing — ``pack.json`` sections to typed objects."""

from __future__ import annotations

import json
from typing import Any, Callable

from langkit.errors import MetadataError
from langkit.models.locale import LanguageMetadata, Locale

SectionParser = Callable[[Any], Any]

LANGUAGE_SECTION = "language"


def parse_language_section(data: Any) -> LanguageMetadata:
    """
    Parse the ``language`` section::

        {"en_US": {"name": "English", "region": "US", "bidirectional": false}}
    """
    if not isinstance(data, dict):
        raise MetadataError("Invalid language section: expected an object")
    languages: list[Locale] = []
    for code, entry in data.items():
        if not code:
            raise MetadataError("Invalid language->'code': empty string")
        if not isinstance(entry, dict):
            raise MetadataError(f"Invalid language->'{code}': expected an object")
        name = entry.get("name")
        region = entry.get("region", "")
        bidirectional = entry.get("bidirectional", False)
        if not isinstance(name, str) or not name:
            raise MetadataError(f"Invalid language->'{code}'->'name': expected a non-empty string")
        if not isinstance(region, str):
            raise MetadataError(f"Invalid language->'{code}'->'region': expected a string")
        if not isinstance(bidirectional, bool):
            raise MetadataError(f"Invalid language->'{code}'->'bidirectional': expected a boolean")
        languages.append(Locale(code, name, region, bidirectional))
    return LanguageMetadata(tuple(languages))


class MetadataSerializer:
    """
    Section-parser registry for pack metadata.

    The ``language`` section is registered by default; callers may add more::

        serializer = MetadataSerializer()
        serializer.register_section("credits", parse_credits)
        serializer.parse(raw_bytes, "language")   # → LanguageMetadata | None
    """

    def __init__(self) -> None:
        self._parsers: dict[str, SectionParser] = {}
        self.register_section(LANGUAGE_SECTION, parse_language_section)

    def register_section(self, section: str, parser: SectionParser) -> None:
        self._parsers[section] = parser

    def parse(self, raw: bytes | str, section: str) -> Any:
        """Parse *section* out of raw ``pack.json`` content; ``None`` if absent."""
        parser = self._parsers.get(section)
        if parser is None:
            raise MetadataError(f"No parser registered for metadata section '{section}'")
        try:
            data = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise MetadataError(f"Invalid pack metadata: {e}") from e
        if not isinstance(data, dict):
            raise MetadataError("Invalid pack metadata: expected a JSON object")
        if section not in data:
            return None
        return parser(data[section])
