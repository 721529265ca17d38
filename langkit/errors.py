"""Exceptions raised by langkit."""

from __future__ import annotations


class LangkitError(Exception):
    """Base class for all langkit errors."""


class ResourceNotFoundError(LangkitError, FileNotFoundError):
    """No pack in the stack provides the requested resource."""

    def __init__(self, identifier: object) -> None:
        super().__init__(f"Resource not found: {identifier}")
        self.identifier = identifier


class MetadataError(LangkitError, ValueError):
    """A pack's metadata file or one of its sections is malformed."""


class FormatError(LangkitError, ValueError):
    """A translation template does not match the supplied arguments."""


class NotInitializedError(LangkitError, RuntimeError):
    """The i18n service was used before ``init()`` gave it a resource manager."""
