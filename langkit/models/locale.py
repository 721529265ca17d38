"""Locale descriptor and per-pack language metadata models."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, order=True)
class Locale:
    """A language declared by a resource pack. Ordered by ``code`` only."""

    code: str
    name: str = field(compare=False)
    region: str = field(default="", compare=False)
    bidirectional: bool = field(default=False, compare=False)

    @property
    def display_name(self) -> str:
        return f"{self.name} ({self.region})" if self.region else self.name

    def __str__(self) -> str:
        return self.display_name


@dataclass(frozen=True)
class LanguageMetadata:
    """Parsed ``language`` section of a pack's ``pack.json``."""

    languages: tuple[Locale, ...] = ()
