"""Resource pack system: packs, the layered manager and metadata parsing."""

from langkit.resources.base import ReloadListener, Resource, ResourceManager, ResourcePack
from langkit.resources.manager import LayeredResourceManager
from langkit.resources.metadata import MetadataSerializer
from langkit.resources.packs import FolderResourcePack, ZipResourcePack, open_pack

__all__ = [
    "FolderResourcePack",
    "LayeredResourceManager",
    "MetadataSerializer",
    "ReloadListener",
    "Resource",
    "ResourceManager",
    "ResourcePack",
    "ZipResourcePack",
    "open_pack",
]
