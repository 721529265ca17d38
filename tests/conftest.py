"""Shared fixtures: folder packs, corrupted zip packs and loguru capture."""

from __future__ import annotations

import json
import struct
import zipfile
from pathlib import Path
from typing import Any, Callable

import pytest
from loguru import logger

from langkit.resources.packs import FolderResourcePack

PackFactory = Callable[..., FolderResourcePack]


@pytest.fixture
def make_pack(tmp_path: Path) -> PackFactory:
    """
    Build a folder pack under *tmp_path*::

        make_pack("base", {"langkit/lang/en_US.lang": "greet=Hello"}, metadata={...})

    *metadata* may be a dict (written as JSON) or a raw string.
    """

    def _make(
        name: str,
        files: dict[str, str | bytes] | None = None,
        metadata: dict[str, Any] | str | None = None,
    ) -> FolderResourcePack:
        root = tmp_path / "packs" / name
        root.mkdir(parents=True, exist_ok=True)
        for rel, content in (files or {}).items():
            path = root / "assets" / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                path.write_bytes(content)
            else:
                path.write_text(content, encoding="utf-8")
        if metadata is not None:
            raw = metadata if isinstance(metadata, str) else json.dumps(metadata)
            (root / "pack.json").write_text(raw, encoding="utf-8")
        return FolderResourcePack(root)

    return _make


@pytest.fixture
def corrupt_zip(tmp_path: Path) -> Callable[..., Path]:
    """
    Build a deflated zip pack and scramble the compressed bytes of one member::

        corrupt_zip("bad", {"assets/langkit/lang/en_US.lang": "..."}, broken="assets/...")
    """

    def _make(name: str, members: dict[str, str], broken: str) -> Path:
        archive = tmp_path / f"{name}.zip"
        with zipfile.ZipFile(archive, "w", zipfile.ZIP_DEFLATED) as zf:
            for member, content in members.items():
                zf.writestr(member, content)
        with zipfile.ZipFile(archive) as zf:
            info = zf.getinfo(broken)
        data = bytearray(archive.read_bytes())
        header = info.header_offset
        name_len, extra_len = struct.unpack("<HH", data[header + 26 : header + 30])
        start = header + 30 + name_len + extra_len
        for i in range(start, start + min(8, info.compress_size)):
            data[i] ^= 0xFF
        archive.write_bytes(bytes(data))
        return archive

    return _make


@pytest.fixture
def log_messages():
    """Collect loguru messages emitted during a test."""
    messages: list[str] = []
    handler_id = logger.add(lambda m: messages.append(m.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)
