"""Resource system contracts — packs, the layered manager and reload listeners.

ResourcePack      → one layered content source (folder, zip archive …)
ResourceManager   → stack of packs queried by identifier
ReloadListener    → notified whenever the pack stack changes
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, BinaryIO, Callable

if TYPE_CHECKING:
    from langkit.models.identifier import Identifier
    from langkit.resources.metadata import MetadataSerializer

PACK_METADATA_FILE = "pack.json"


@dataclass(frozen=True)
class Resource:
    """A single resource found in one pack. ``open()`` yields a fresh byte stream."""

    identifier: Identifier
    pack_name: str
    opener: Callable[[], BinaryIO]

    def open(self) -> BinaryIO:
        return self.opener()


# ═══════════════════════════════════════════════════════════════════════════════
#  ResourcePack
# ═══════════════════════════════════════════════════════════════════════════════

class ResourcePack(ABC):
    """
    Abstract base for resource packs.

    Layout inside every pack::

        pack.json                          ← metadata, one JSON object per section
        assets/<namespace>/<path>          ← resources addressed by Identifier
    """

    # ── Required interface ──

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable pack name, used in logs."""
        ...

    @abstractmethod
    def resource_domains(self) -> set[str]:
        """Namespaces present under ``assets/``."""
        ...

    @abstractmethod
    def has_resource(self, identifier: Identifier) -> bool:
        ...

    @abstractmethod
    def open_resource(self, identifier: Identifier) -> BinaryIO:
        """Open a resource for reading; raises ``ResourceNotFoundError`` if absent."""
        ...

    @abstractmethod
    def read_pack_metadata(self) -> bytes | None:
        """Raw ``pack.json`` contents, or ``None`` when the pack has none."""
        ...

    # ── Helpers ──

    def get_pack_metadata(self, serializer: MetadataSerializer, section: str) -> Any:
        """Parse one metadata section; ``None`` if the pack has no metadata or section."""
        raw = self.read_pack_metadata()
        if raw is None:
            return None
        return serializer.parse(raw, section)

    def get_resource(self, identifier: Identifier) -> Resource:
        return Resource(identifier, self.name, lambda: self.open_resource(identifier))

    @staticmethod
    def asset_path(identifier: Identifier) -> str:
        return f"assets/{identifier.namespace}/{identifier.path}"


# ═══════════════════════════════════════════════════════════════════════════════
#  ResourceManager / ReloadListener
# ═══════════════════════════════════════════════════════════════════════════════

class ReloadListener(ABC):
    """Receives a callback each time the resource manager's pack stack changes."""

    @abstractmethod
    def on_resource_reload(self, resource_manager: ResourceManager) -> None:
        ...


class ResourceManager(ABC):
    """Read access to a stack of resource packs."""

    @property
    @abstractmethod
    def resource_domains(self) -> list[str]:
        """Every namespace known to any pack, in stable order."""
        ...

    @abstractmethod
    def get_resource(self, identifier: Identifier) -> Resource:
        """Highest-precedence match; raises ``ResourceNotFoundError`` if none."""
        ...

    @abstractmethod
    def get_all_resources(self, identifier: Identifier) -> list[Resource]:
        """Every match in load order (lowest precedence first); raises if none."""
        ...

    @abstractmethod
    def register_reload_listener(self, listener: ReloadListener) -> None:
        ...
