"""langkit — runtime translations loaded from layered resource packs."""

from langkit.i18n.service import I18n, tr

__all__ = ["I18n", "tr"]
