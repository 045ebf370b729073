import json
import logging

import pytest

from durparse.localization import DEFAULT_UNITS, Localization


@pytest.fixture
def localization():
    return Localization()


def test_plural_categories(localization):
    assert localization.plural_category(1) == "one"
    assert localization.plural_category(1.0) == "one"
    assert localization.plural_category(-1) == "one"
    assert localization.plural_category(2) == "other"
    assert localization.plural_category(1.5) == "other"
    assert localization.plural_category(5, "ru") == "many"
    assert localization.plural_category(3, "ru") == "few"


def test_labels_use_plural_forms(localization):
    assert localization.label("h", 1) == "hour"
    assert localization.label("h", 0) == "hours"
    assert localization.label("mo", 3, "fr") == "mois"
    assert localization.label("y", 2, "de") == "Jahre"


def test_default_table_is_english(localization):
    assert localization.units() == DEFAULT_UNITS
    assert localization.units("en_GB") == DEFAULT_UNITS


def test_rejects_path_like_locales(localization, caplog):
    with caplog.at_level(logging.WARNING, logger="durparse.localization"):
        assert localization.units("../../etc/passwd") == DEFAULT_UNITS
    assert "rejected" in caplog.text


def test_custom_locale_directory_merges_with_defaults(tmp_path):
    (tmp_path / "es.json").write_text(
        json.dumps({"locale": "es", "units": {"h": {"one": "hora", "other": "horas"}}}),
        encoding="utf-8",
    )
    (tmp_path / "it.json").write_text("{not json", encoding="utf-8")
    localization = Localization(tmp_path)
    assert localization.label("h", 2, "es") == "horas"
    assert localization.label("d", 2, "es") == "days"
    assert localization.label("h", 2, "it") == "hours"


def test_default_locale_can_be_changed():
    localization = Localization(default_locale="de")
    assert localization.label("w", 1) == "Woche"
    assert localization.label("w", 1, "zz") == "Woche"


def test_format_unit_uses_cldr_patterns(localization):
    assert localization.format_unit(3, "h") == "3 hours"
    assert localization.format_unit(1, "d") == "1 day"
