import logging

import pytest

from durparse.parser import DurationParser
from durparse.units import TIME_MULTIPLIERS


@pytest.fixture
def parser():
    return DurationParser()


def test_single_unit_short_form(parser):
    assert parser.format(3_600_000) == "1h"
    assert parser.format(60_000) == "1m"
    assert parser.format(500) == "500ms"
    assert parser.format(1500) == "2s"
    assert parser.format(1500, precision=1) == "1.5s"
    assert parser.format(129_600_000) == "2d"
    assert parser.format(129_600_000, precision=2) == "1.5d"
    assert parser.format(-3_600_000) == "-1h"
    assert parser.format(2_629_785_600) == "1mo"


def test_single_unit_long_form(parser):
    assert parser.format(3_600_000, long=True) == "1 hour"
    assert parser.format(7_200_000, long=True) == "2 hours"
    assert parser.format(-3_600_000, long=True) == "-1 hour"
    assert parser.format(129_600_000, long=True, precision=1) == "1.5 days"
    assert parser.format(1000, long=True) == "1 second"


def test_zero_and_sub_millisecond_values(parser):
    assert parser.format(0) == "0ms"
    assert parser.format(0, long=True) == "0 milliseconds"
    assert parser.format(0.5) == "0.5ms"


def test_format_rejects_non_finite(parser):
    for bad in [float("inf"), float("-inf"), float("nan"), "1h", None, True]:
        with pytest.raises(ValueError):
            parser.format(bad)


@pytest.mark.parametrize("unit,factor", list(TIME_MULTIPLIERS.items()))
def test_format_then_parse_round_trip(parser, unit, factor):
    text = parser.format(factor)
    assert text == f"1{unit}"
    assert parser.parse(text, ambiguous_unit="minutes") == factor


def test_compound_breakdown(parser):
    assert parser.format(93_784_005, compound=True) == "1d, 2h, 3m, 4s, 5ms"
    assert parser.format(93_784_005, compound=True, separator=" ") == "1d 2h 3m 4s 5ms"
    assert (
        parser.format(93_784_005, compound=True, long=True)
        == "1 day, 2 hours, 3 minutes, 4 seconds, 5 milliseconds"
    )
    assert parser.format(86_405_000, compound=True) == "1d, 5s"
    assert parser.format(-5_400_000, compound=True) == "-1h, 30m"
    assert parser.format(0, compound=True) == "0ms"
    assert parser.format(31_557_600_000 + 2_629_785_600, compound=True) == "1y, 1mo"


def test_compound_respects_preferred_units(parser):
    assert (
        parser.format(93_784_005, compound=True, preferred_units=["h", "m"])
        == "26h, 3m"
    )
    assert parser.format(90_000, compound=True, preferred_units=["h"]) == "0h"
    assert (
        parser.format(5_400_000, compound=True, preferred_units=["m", "h"], long=True)
        == "1 hour, 30 minutes"
    )


def test_single_unit_respects_preferred_units(parser):
    assert parser.format(172_800_000, preferred_units=["h"]) == "48h"
    assert parser.format(172_800_000, preferred_units=["h", "w"]) == "48h"
    with pytest.raises(ValueError):
        parser.format(1000, preferred_units=["fortnight"])


def test_invalid_format_options(parser):
    with pytest.raises(ValueError):
        parser.format(1000, precision=-1)
    with pytest.raises(TypeError):
        parser.format(1000, precision=1.5)
    with pytest.raises(TypeError):
        parser.format(1000, verbose=True)


def test_localized_long_form(parser):
    assert parser.format(3_600_000, long=True, locale="fr") == "1 heure"
    assert parser.format(7_200_000, long=True, locale="fr") == "2 heures"
    assert parser.format(7_200_000, long=True, locale="ru") == "2 часа"
    assert parser.format(18_000_000, long=True, locale="ru") == "5 часов"
    assert parser.format(75_600_000, long=True, locale="ru") == "21 час"
    assert (
        parser.format(90_000_000, compound=True, long=True, locale="de")
        == "1 Tag, 1 Stunde"
    )
    assert parser.format(7_200_000, long=True, locale="fr-CA") == "2 heures"


def test_unknown_locale_falls_back_to_default(parser, caplog):
    with caplog.at_level(logging.WARNING, logger="durparse.localization"):
        assert parser.format(7_200_000, long=True, locale="xx") == "2 hours"
    assert any("xx" in record.getMessage() for record in caplog.records)


def test_intl_unit_patterns(parser):
    assert parser.format(7_200_000, long=True, use_intl=True) == "2 hours"
    assert parser.format(3_600_000, long=True, use_intl=True) == "1 hour"
    assert parser.format(7_200_000, long=True, use_intl=True, locale="fr") == "2 heures"
    assert parser.format(7_200_000, use_intl=True) == "2h"


def test_options_mapping_accepts_camel_case(parser):
    assert parser.format(5_400_000, {"compound": True, "preferredUnits": ["m"]}) == "90m"
    assert parser.format(7_200_000, {"long": True, "useIntl": True}) == "2 hours"
