import pytest

from durparse import cli


def test_parse_args_parse_mode():
    args = cli.parse_args(
        ["parse", "1h 30min", "--detailed", "--json", "--ambiguous", "minutes"]
    )
    assert args.command == "parse"
    assert args.value == "1h 30min"
    assert args.detailed and args.json
    assert args.ambiguous_unit == "minutes"
    assert args.allow_negative is False
    assert args.max_length is None
    assert args.merge_duplicates is False
    assert args.strict_negative_position is True

    args = cli.parse_args(["parse", "--merge-duplicates", "--lenient-sign", "1h 2h"])
    assert args.merge_duplicates is True
    assert args.strict_negative_position is False

    args = cli.parse_args(["parse", "--allow-negative", "--max-length", "20", "--", "-5min"])
    assert args.value == "-5min"
    assert args.allow_negative is True
    assert args.max_length == 20


def test_parse_args_format_mode():
    args = cli.parse_args(
        [
            "format",
            "5400000",
            "--long",
            "--compound",
            "--unit",
            "h",
            "--unit",
            "m",
            "--locale",
            "fr",
            "--intl",
            "--separator",
            " ",
        ]
    )
    assert args.ms == 5_400_000.0
    assert args.long and args.compound and args.use_intl
    assert args.preferred_units == ["h", "m"]
    assert args.locale == "fr"
    assert args.separator == " "
    assert args.precision == 0

    with pytest.raises(SystemExit):
        cli.parse_args(["format", "1000", "--unit", "fortnight"])


def test_parse_args_other_commands():
    args = cli.parse_args(["suggest", "hors", "-n", "3"])
    assert args.command == "suggest"
    assert args.limit == 3

    args = cli.parse_args(["validate", "1h", "2d"])
    assert args.values == ["1h", "2d"]

    args = cli.parse_args(["expires", "15min", "--seconds"])
    assert args.seconds is True

    args = cli.parse_args(["-v", "serve", "--port", "9000"])
    assert args.verbose is True
    assert args.port == 9000
    assert args.host == "0.0.0.0"

    assert cli.parse_args(["units"]).command == "units"


def test_command_is_required():
    with pytest.raises(SystemExit):
        cli.parse_args([])
