import os
from datetime import timedelta

import pytest

from durparse import durations
from durparse.errors import DurationParseError, ErrorCode


@pytest.fixture(autouse=True)
def fresh_default_parser(monkeypatch):
    for name in list(os.environ):
        if name.startswith("DURPARSE_"):
            monkeypatch.delenv(name)
    monkeypatch.setattr(durations, "_default_parser", None)


def test_parse_duration_returns_timedelta():
    assert durations.parse_duration("5min") == timedelta(minutes=5)
    assert durations.parse_duration("1h 30min") == timedelta(hours=1, minutes=30)
    assert durations.parse_duration("10") == timedelta(milliseconds=10)
    assert durations.parse_duration("5m", ambiguous_unit="minutes") == timedelta(minutes=5)


def test_parse_duration_errors_are_value_errors():
    with pytest.raises(ValueError):
        durations.parse_duration("not-a-duration")
    with pytest.raises(DurationParseError) as excinfo:
        durations.parse_duration("   ")
    assert excinfo.value.code == ErrorCode.EMPTY_INPUT


def test_ms_parses_and_formats():
    assert durations.ms("2 days") == 172_800_000
    assert durations.ms("5m", ambiguous_unit="months") == 5 * 2_629_785_600
    assert durations.ms(90_000, long=True) == "2 minutes"
    assert durations.ms(5_400_000, compound=True, ambiguous_unit="minutes") == "1h, 30m"


def test_default_parser_is_shared(monkeypatch):
    first = durations.default_parser()
    assert durations.default_parser() is first


def test_default_parser_reads_environment(monkeypatch):
    monkeypatch.setenv("DURPARSE_AMBIGUOUS_UNIT", "minutes")
    assert durations.ms("5m") == 300_000


def test_parse_duration_rejects_values_beyond_timedelta():
    assert durations.ms("1e300") == 1e300
    with pytest.raises(DurationParseError) as excinfo:
        durations.parse_duration("1e300")
    assert excinfo.value.code == ErrorCode.VALUE_TOO_LARGE
    assert excinfo.value.input == "1e300"


def test_shortcuts_reject_repeated_units_unless_merged():
    with pytest.raises(DurationParseError) as excinfo:
        durations.ms("1h 2h")
    assert excinfo.value.code == ErrorCode.DUPLICATE_UNIT
    assert durations.ms("1h 2h", merge_duplicates=True) == 10_800_000
    delta = durations.parse_duration(
        "1h -15min", allow_negative=True, strict_negative_position=False
    )
    assert delta == timedelta(minutes=45)
