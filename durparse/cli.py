import argparse
from typing import List, Optional

from .config import AMBIGUOUS_POLICIES
from .units import TIME_MULTIPLIERS


def add_parse_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--ambiguous",
        dest="ambiguous_unit",
        choices=AMBIGUOUS_POLICIES,
        help="How to read a bare 'm' (default: strict, from DURPARSE_AMBIGUOUS_UNIT)",
    )
    parser.add_argument(
        "--allow-negative", action="store_true", help="Accept negative durations"
    )
    parser.add_argument(
        "--max-length", type=int, help="Reject inputs longer than this many characters"
    )
    parser.add_argument(
        "--merge-duplicates",
        action="store_true",
        help="Sum repeated units instead of rejecting them",
    )
    parser.add_argument(
        "--lenient-sign",
        dest="strict_negative_position",
        action="store_false",
        help="Allow a sign on any component, not only the first",
    )


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="durparse", description="Parse and format human-readable durations"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log debug output to stderr"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    parse = subparsers.add_parser("parse", help="Convert a duration to milliseconds")
    parse.add_argument("value", help="Duration expression, e.g. '1h 30min'")
    parse.add_argument(
        "--detailed", action="store_true", help="Print each parsed component"
    )
    parse.add_argument("--json", action="store_true", help="Emit JSON output")
    add_parse_arguments(parse)

    fmt = subparsers.add_parser("format", help="Render milliseconds as a duration")
    fmt.add_argument("ms", type=float, help="Milliseconds to format")
    fmt.add_argument("--long", action="store_true", help="Use unit names ('3 hours')")
    fmt.add_argument(
        "--precision", type=int, default=0, help="Decimal places (default: 0)"
    )
    fmt.add_argument(
        "--compound", action="store_true", help="Break into several units"
    )
    fmt.add_argument(
        "--unit",
        dest="preferred_units",
        action="append",
        choices=list(TIME_MULTIPLIERS),
        help="Restrict output to this unit (repeatable)",
    )
    fmt.add_argument("--locale", help="Locale for long unit names (e.g. fr, ru)")
    fmt.add_argument(
        "--intl", dest="use_intl", action="store_true", help="Use CLDR unit patterns"
    )
    fmt.add_argument("--separator", default=", ", help="Separator between units")

    suggest = subparsers.add_parser("suggest", help="Suggest units for a misspelling")
    suggest.add_argument("token", help="Unit token to correct, e.g. 'hors'")
    suggest.add_argument(
        "-n", "--limit", type=int, help="Maximum number of suggestions"
    )

    subparsers.add_parser("units", help="List every recognised unit alias")

    validate = subparsers.add_parser("validate", help="Check whether values parse")
    validate.add_argument("values", nargs="+", help="Duration expressions")
    add_parse_arguments(validate)

    expires = subparsers.add_parser("expires", help="Show when a duration expires")
    expires.add_argument("value", help="Duration expression")
    expires.add_argument(
        "--seconds", action="store_true", help="Print seconds until expiry instead"
    )
    add_parse_arguments(expires)

    serve = subparsers.add_parser("serve", help="Run the durparse web API")
    serve.add_argument("--host", default="0.0.0.0", help="Host interface for the API")
    serve.add_argument(
        "--port", type=int, default=8000, help="Port to bind the HTTP server"
    )

    return parser


def parse_args(argv: Optional[List[str]]):
    parser = create_parser()
    return parser.parse_args(argv)
