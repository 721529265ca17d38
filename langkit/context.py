"""Application context — service container wiring config, resources and i18n."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from loguru import logger

from langkit.config import Config, get_config
from langkit.i18n.service import I18n
from langkit.logger import setup_logger
from langkit.resources.base import ResourcePack
from langkit.resources.manager import LayeredResourceManager
from langkit.resources.metadata import MetadataSerializer
from langkit.resources.packs import FolderResourcePack, open_pack

DEFAULT_PACK_DIR = Path(__file__).parent / "default_pack"


@dataclass
class I18nContext:
    """
    Central service container.

    Built once per process by ``create_context()`` and handed to whatever
    needs translations, instead of module-level globals.
    """

    config: Config
    resource_manager: LayeredResourceManager
    metadata_serializer: MetadataSerializer
    i18n: I18n

    def reload_packs(self, packs: list[ResourcePack]) -> None:
        """Swap in a new pack stack: re-read language metadata, then reload."""
        self.i18n.parse_language_meta(self.metadata_serializer, packs)
        self.resource_manager.reload_packs(packs)

    def set_language(self, code: str) -> None:
        """Change and persist the active language."""
        self.config.language = code
        self.i18n.set_language(code)


def default_pack() -> FolderResourcePack:
    return FolderResourcePack(DEFAULT_PACK_DIR, name="default")


def load_packs(config: Config) -> list[ResourcePack]:
    """Built-in pack first, then every configured pack that can be opened."""
    packs: list[ResourcePack] = [default_pack()]
    for path in config.resource_packs:
        try:
            packs.append(open_pack(path))
        except OSError as e:
            logger.warning(f"Skipping resource pack '{path}': {e}")
    return packs


def create_context(config: Config | None = None, configure_logging: bool = True) -> I18nContext:
    """Wire all services and return an I18nContext."""
    config = config or get_config()

    # Logger
    if configure_logging:
        setup_logger(config.data_dir / "logs", level=config.log_level)

    # Resources
    packs = load_packs(config)
    serializer = MetadataSerializer()
    resource_manager = LayeredResourceManager(packs)

    # Translations
    i18n = I18n()
    i18n.parse_language_meta(serializer, packs)
    i18n.init(resource_manager, config.language)

    return I18nContext(
        config=config,
        resource_manager=resource_manager,
        metadata_serializer=serializer,
        i18n=i18n,
    )
