"""Localized unit labels and plural rules for long-form output."""

import json
import logging
import re
from pathlib import Path
from typing import Dict, Optional, Union

from babel import Locale, UnknownLocaleError
from babel.units import format_unit

from .cache import BoundedCache
from .config import LOCALES_DIR
from .units import LONG_NAMES

logger = logging.getLogger("durparse.localization")

UnitLabels = Dict[str, str]
LocaleTable = Dict[str, UnitLabels]

DEFAULT_UNITS: LocaleTable = {
    unit: {"one": name, "other": f"{name}s"} for unit, name in LONG_NAMES.items()
}

_LOCALE_ID = re.compile(r"^[A-Za-z]{2,3}(?:[_-][A-Za-z0-9]{2,8})*$")


class Localization:
    """Resolve unit labels and CLDR plural categories per locale.

    Label tables are JSON files named ``<locale>.json`` under
    ``locales_path``; keys missing from a file fall back to the default
    table. Plural categories come from Babel. Unknown or malformed locales
    quietly resolve to ``default_locale`` after a warning.
    """

    def __init__(
        self,
        locales_path: Union[str, Path] = LOCALES_DIR,
        default_locale: str = "en",
        max_cache_size: Optional[int] = 100,
    ) -> None:
        self.locales_path = Path(locales_path).resolve()
        self.default_locale = default_locale
        self._tables: BoundedCache[str, LocaleTable] = BoundedCache(max_cache_size)
        self._locales: BoundedCache[str, Locale] = BoundedCache(max_cache_size)
        self._default_table = self._merge(self._read_table(default_locale) or {})

    def units(self, locale: Optional[str] = None) -> LocaleTable:
        locale = locale or self.default_locale
        cached = self._tables.get(locale)
        if cached is not None:
            return cached
        table = self._default_table
        for candidate in _candidates(locale):
            if candidate == self.default_locale:
                break
            loaded = self._read_table(candidate)
            if loaded is not None:
                table = self._merge(loaded)
                break
        else:
            logger.warning(
                "[locale] no unit table for %r, using %r", locale, self.default_locale
            )
        self._tables.set(locale, table)
        return table

    def locale(self, locale: Optional[str] = None) -> Locale:
        locale = locale or self.default_locale
        cached = self._locales.get(locale)
        if cached is not None:
            return cached
        try:
            resolved = Locale.parse(locale.replace("-", "_"))
        except (UnknownLocaleError, ValueError, TypeError) as exc:
            logger.warning(
                "[locale] plural rules unavailable for %r (%s), using %r",
                locale,
                exc,
                self.default_locale,
            )
            resolved = Locale.parse(self.default_locale)
        self._locales.set(locale, resolved)
        return resolved

    def plural_category(self, value: float, locale: Optional[str] = None) -> str:
        value = abs(value)
        # 1.0 must count as 1, not as a number with a visible fraction
        if isinstance(value, float) and value.is_integer():
            value = int(value)
        return self.locale(locale).plural_form(value)

    def label(self, unit: str, value: float, locale: Optional[str] = None) -> str:
        labels = self.units(locale)[unit]
        category = self.plural_category(value, locale)
        return labels.get(category) or labels["other"]

    def format_unit(self, value: float, unit: str, locale: Optional[str] = None) -> str:
        """Render ``value`` with Babel's CLDR unit patterns, e.g. ``3 hours``."""
        return format_unit(
            value,
            f"duration-{LONG_NAMES[unit]}",
            length="long",
            locale=self.locale(locale),
        )

    def _read_table(self, locale: str) -> Optional[LocaleTable]:
        if not _LOCALE_ID.match(locale):
            logger.warning("[locale] rejected locale identifier %r", locale)
            return None
        path = (self.locales_path / f"{locale}.json").resolve()
        if path.parent != self.locales_path or not path.is_file():
            return None
        try:
            with open(path, encoding="utf-8") as fh:
                data = json.load(fh)
            units = data["units"]
            if not isinstance(units, dict):
                raise TypeError("'units' must be an object")
        except (OSError, ValueError, KeyError, TypeError) as exc:
            logger.warning("[locale] failed to load %s: %s", path, exc)
            return None
        return units

    @staticmethod
    def _merge(loaded: LocaleTable) -> LocaleTable:
        merged = {unit: dict(labels) for unit, labels in DEFAULT_UNITS.items()}
        for unit, labels in loaded.items():
            if unit in merged and isinstance(labels, dict) and labels.get("other"):
                merged[unit] = {k: str(v) for k, v in labels.items()}
        return merged


def _candidates(locale: str):
    """Yield ``fr_CA`` then ``fr`` for ``fr-CA``."""
    normalized = locale.replace("-", "_")
    yield normalized
    language = normalized.split("_", 1)[0]
    if language != normalized:
        yield language
