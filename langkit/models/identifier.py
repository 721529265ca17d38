"""Resource identifier model — ``namespace:path`` addresses inside a pack."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_NAMESPACE = "langkit"


@dataclass(frozen=True, order=True)
class Identifier:
    """Address of a resource: ``assets/<namespace>/<path>`` within each pack."""

    namespace: str
    path: str

    @classmethod
    def parse(cls, value: str) -> Identifier:
        """Parse ``"ns:path"``; a bare ``"path"`` uses the default namespace."""
        namespace, sep, path = value.partition(":")
        if not sep:
            return cls(DEFAULT_NAMESPACE, value)
        return cls(namespace or DEFAULT_NAMESPACE, path)

    def __str__(self) -> str:
        return f"{self.namespace}:{self.path}"
