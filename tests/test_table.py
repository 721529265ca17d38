"""Tests for the translation table."""

from __future__ import annotations

import io
import threading
from unittest.mock import MagicMock

import pytest

from langkit.errors import ResourceNotFoundError
from langkit.i18n.table import TranslationTable
from langkit.models.identifier import Identifier
from langkit.resources.base import Resource
from langkit.resources.manager import LayeredResourceManager
from langkit.resources.packs import ZipResourcePack


@pytest.fixture
def table() -> TranslationTable:
    return TranslationTable()


class TestTranslationTable:
    def test_lookup_applies_fixer(self, table: TranslationTable, make_pack) -> None:
        pack = make_pack("base", {"langkit/lang/en_US.lang": "score=Score: %d\nratio=%1$.2f%%\n"})
        table.rebuild(LayeredResourceManager([pack]), ["en_US"])
        assert table.lookup("score") == "Score: %s"
        assert table.lookup("ratio") == "%1$s%%"

    def test_missing_key_returns_key(self, table: TranslationTable) -> None:
        assert table.lookup("no.such.key") == "no.such.key"
        assert table.contains("no.such.key") is False

    def test_line_parsing(self, table: TranslationTable, make_pack) -> None:
        content = "# comment=ignored\n\nmalformed line\nurl=a=b=c\nempty=\n"
        pack = make_pack("base", {"langkit/lang/en_US.lang": content})
        table.rebuild(LayeredResourceManager([pack]), ["en_US"])
        assert table.lookup("url") == "a=b=c"
        assert table.contains("empty") and table.lookup("empty") == ""
        assert not table.contains("# comment")
        assert not table.contains("malformed line")
        assert len(table) == 2

    def test_later_language_wins(self, table: TranslationTable, make_pack) -> None:
        pack = make_pack(
            "base",
            {
                "langkit/lang/en_US.lang": "greet=Hello\nonly.en=English only",
                "langkit/lang/fr_FR.lang": "greet=Bonjour",
            },
        )
        table.rebuild(LayeredResourceManager([pack]), ["en_US", "fr_FR"])
        assert table.lookup("greet") == "Bonjour"
        assert table.lookup("only.en") == "English only"

    def test_later_pack_wins(self, table: TranslationTable, make_pack) -> None:
        low = make_pack("low", {"langkit/lang/en_US.lang": "greet=Hello\nbye=Bye"})
        high = make_pack("high", {"langkit/lang/en_US.lang": "greet=Howdy"})
        table.rebuild(LayeredResourceManager([low, high]), ["en_US"])
        assert table.lookup("greet") == "Howdy"
        assert table.lookup("bye") == "Bye"

    def test_domains_merged(self, table: TranslationTable, make_pack) -> None:
        pack = make_pack(
            "base",
            {
                "langkit/lang/en_US.lang": "core.key=Core",
                "addon/lang/en_US.lang": "addon.key=Addon",
                "textures/misc/readme.txt": "not a language file",
            },
        )
        table.rebuild(LayeredResourceManager([pack]), ["en_US"])
        assert table.lookup("core.key") == "Core"
        assert table.lookup("addon.key") == "Addon"

    def test_missing_language_file_skipped(self, table: TranslationTable, make_pack) -> None:
        pack = make_pack("base", {"langkit/lang/en_US.lang": "greet=Hello"})
        table.rebuild(LayeredResourceManager([pack]), ["en_US", "de_DE"])
        assert table.lookup("greet") == "Hello"

    def test_rebuild_clears_previous_keys(self, table: TranslationTable, make_pack) -> None:
        old = make_pack("old", {"langkit/lang/en_US.lang": "stale=Stale\ngreet=Hello"})
        new = make_pack("new", {"langkit/lang/en_US.lang": "greet=Hi"})
        table.rebuild(LayeredResourceManager([old]), ["en_US"])
        assert table.contains("stale")
        table.rebuild(LayeredResourceManager([new]), ["en_US"])
        assert table.contains("stale") is False
        assert table.lookup("greet") == "Hi"

    def test_rebuild_swaps_new_mapping(self, table: TranslationTable, make_pack) -> None:
        old = make_pack("old", {"langkit/lang/en_US.lang": "stale=Stale"})
        table.rebuild(LayeredResourceManager([old]), ["en_US"])
        before = table.entries
        table.rebuild(LayeredResourceManager([]), ["en_US"])
        assert before["stale"] == "Stale"
        assert len(table.entries) == 0

    def test_unicode_flag_recomputed(self, table: TranslationTable, make_pack) -> None:
        pack = make_pack(
            "base",
            {
                "langkit/lang/en_US.lang": "a=plain text",
                "langkit/lang/ja_JP.lang": "b=日本語のテキスト",
            },
        )
        rm = LayeredResourceManager([pack])
        table.rebuild(rm, ["ja_JP"])
        assert table.is_unicode is True
        table.rebuild(rm, ["en_US"])
        assert table.is_unicode is False

    def test_line_endings_and_bad_bytes(self, table: TranslationTable, make_pack) -> None:
        pack = make_pack("base", {"langkit/lang/en_US.lang": b"a=1\r\nb=caf\xff\r\n"})
        table.rebuild(LayeredResourceManager([pack]), ["en_US"])
        assert table.lookup("a") == "1"
        assert table.lookup("b") == "caf\ufffd"

    def test_unreadable_resource_skipped(self, table: TranslationTable) -> None:
        identifier = Identifier("langkit", "lang/en_US.lang")

        def _broken():
            raise OSError("disk on fire")

        def _all_resources(ident: Identifier) -> list[Resource]:
            if ident.namespace != "langkit":
                raise ResourceNotFoundError(ident)
            return [
                Resource(identifier, "broken", _broken),
                Resource(identifier, "good", lambda: io.BytesIO(b"greet=Hello")),
            ]

        rm = MagicMock()
        rm.resource_domains = ["langkit", "other"]
        rm.get_all_resources.side_effect = _all_resources
        table.rebuild(rm, ["en_US"])
        assert table.lookup("greet") == "Hello"
        assert rm.get_all_resources.call_count == 2

    def test_corrupt_zip_member_skipped(
        self, table: TranslationTable, make_pack, corrupt_zip, log_messages: list[str]
    ) -> None:
        good = make_pack("good", {"langkit/lang/en_US.lang": "greet=Hello"})
        lines = "".join(f"line.{i}=Some translated text number {i}\n" for i in range(60))
        archive = corrupt_zip(
            "scrambled",
            {"assets/langkit/lang/en_US.lang": "greet=Hallo\n" + lines},
            broken="assets/langkit/lang/en_US.lang",
        )
        table.rebuild(LayeredResourceManager([good, ZipResourcePack(archive)]), ["en_US"])
        assert table.lookup("greet") == "Hello"
        assert any("scrambled" in m for m in log_messages)


def _static_manager(resources: list[Resource]) -> MagicMock:
    rm = MagicMock()
    rm.resource_domains = ["langkit"]
    rm.get_all_resources.return_value = resources
    return rm


class TestTranslationTableConcurrency:
    def test_readers_only_see_complete_tables(self, table: TranslationTable, make_pack) -> None:
        first_keys = {f"first.{i}" for i in range(200)}
        second_keys = {f"second.{i}" for i in range(200)}
        first = LayeredResourceManager(
            [make_pack("first", {"langkit/lang/en_US.lang": "\n".join(f"{k}=A" for k in first_keys)})]
        )
        second = LayeredResourceManager(
            [make_pack("second", {"langkit/lang/en_US.lang": "\n".join(f"{k}=B" for k in second_keys)})]
        )
        table.rebuild(first, ["en_US"])

        stop = threading.Event()
        seen = [0]
        partial: list[int] = []

        def read() -> None:
            while not stop.is_set():
                snapshot = set(table.entries)
                seen[0] += 1
                if snapshot != first_keys and snapshot != second_keys:
                    partial.append(len(snapshot))

        def rebuild() -> None:
            for i in range(40):
                table.rebuild(second if i % 2 == 0 else first, ["en_US"])

        readers = [threading.Thread(target=read, daemon=True) for _ in range(3)]
        for reader in readers:
            reader.start()
        writer = threading.Thread(target=rebuild, daemon=True)
        writer.start()
        writer.join(timeout=30)
        stop.set()
        for reader in readers:
            reader.join(timeout=5)

        assert not writer.is_alive()
        assert seen[0] > 0
        assert partial == []

    def test_second_rebuild_waits_for_first(self, table: TranslationTable) -> None:
        identifier = Identifier("langkit", "lang/en_US.lang")
        started = threading.Event()
        release = threading.Event()

        def slow_open() -> io.BytesIO:
            started.set()
            release.wait(timeout=5)
            return io.BytesIO(b"greet=Slow")

        slow = _static_manager([Resource(identifier, "slow", slow_open)])
        fast = _static_manager([Resource(identifier, "fast", lambda: io.BytesIO(b"greet=Fast"))])

        first = threading.Thread(target=table.rebuild, args=(slow, ["en_US"]), daemon=True)
        second = threading.Thread(target=table.rebuild, args=(fast, ["en_US"]), daemon=True)
        first.start()
        assert started.wait(timeout=5)
        second.start()
        second.join(timeout=0.2)
        assert second.is_alive()
        assert fast.get_all_resources.call_count == 0

        release.set()
        first.join(timeout=5)
        second.join(timeout=5)
        assert table.lookup("greet") == "Fast"
