"""Concrete resource packs — plain directories and zip archives."""

from __future__ import annotations

import io
import zipfile
import zlib
from pathlib import Path
from typing import BinaryIO

from loguru import logger

from langkit.errors import ResourceNotFoundError
from langkit.models.identifier import Identifier
from langkit.resources.base import PACK_METADATA_FILE, ResourcePack


class FolderResourcePack(ResourcePack):
    """Resource pack backed by a directory on disk."""

    def __init__(self, root: Path, name: str | None = None) -> None:
        self._root = root
        self._name = name or root.name

    @property
    def name(self) -> str:
        return self._name

    @property
    def root(self) -> Path:
        return self._root

    def resource_domains(self) -> set[str]:
        assets = self._root / "assets"
        if not assets.is_dir():
            return set()
        return {p.name for p in assets.iterdir() if p.is_dir()}

    def _file(self, identifier: Identifier) -> Path:
        return self._root / self.asset_path(identifier)

    def has_resource(self, identifier: Identifier) -> bool:
        return self._file(identifier).is_file()

    def open_resource(self, identifier: Identifier) -> BinaryIO:
        path = self._file(identifier)
        if not path.is_file():
            raise ResourceNotFoundError(identifier)
        return open(path, "rb")

    def read_pack_metadata(self) -> bytes | None:
        path = self._root / PACK_METADATA_FILE
        if not path.is_file():
            return None
        return path.read_bytes()

    def __repr__(self) -> str:
        return f"FolderResourcePack({self._root!s})"


class ZipResourcePack(ResourcePack):
    """
    Resource pack backed by a zip archive.

    The archive is reopened for each read so no file handle outlives a call.
    """

    def __init__(self, archive: Path, name: str | None = None) -> None:
        self._archive = archive
        self._name = name or archive.stem
        self._members: set[str] | None = None

    @property
    def name(self) -> str:
        return self._name

    def _names(self) -> set[str]:
        if self._members is None:
            try:
                with zipfile.ZipFile(self._archive) as zf:
                    self._members = {n for n in zf.namelist() if not n.endswith("/")}
            except (zipfile.BadZipFile, OSError) as e:
                logger.warning(f"Cannot read resource pack archive '{self._archive}': {e}")
                self._members = set()
        return self._members

    def resource_domains(self) -> set[str]:
        domains: set[str] = set()
        for member in self._names():
            parts = member.split("/")
            if len(parts) > 2 and parts[0] == "assets" and parts[1]:
                domains.add(parts[1])
        return domains

    def has_resource(self, identifier: Identifier) -> bool:
        return self.asset_path(identifier) in self._names()

    def _read(self, member: str) -> bytes:
        try:
            with zipfile.ZipFile(self._archive) as zf:
                return zf.read(member)
        except (zipfile.BadZipFile, zlib.error, EOFError) as e:
            raise OSError(f"Corrupt resource pack archive '{self._archive}': {e}") from e

    def open_resource(self, identifier: Identifier) -> BinaryIO:
        member = self.asset_path(identifier)
        if member not in self._names():
            raise ResourceNotFoundError(identifier)
        return io.BytesIO(self._read(member))

    def read_pack_metadata(self) -> bytes | None:
        if PACK_METADATA_FILE not in self._names():
            return None
        return self._read(PACK_METADATA_FILE)

    def __repr__(self) -> str:
        return f"ZipResourcePack({self._archive!s})"


def open_pack(path: str | Path) -> ResourcePack:
    """Build the right pack type for a directory or ``.zip`` archive."""
    p = Path(path)
    if p.is_dir():
        return FolderResourcePack(p)
    if p.is_file() and p.suffix.lower() == ".zip":
        return ZipResourcePack(p)
    raise ResourceNotFoundError(p)
