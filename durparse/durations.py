"""Module-level shortcuts over a shared :class:`DurationParser`."""

from datetime import timedelta
from typing import Any, Optional, Union

from .config import ParserConfig
from .parser import DurationParser, Number, as_timedelta

_default_parser: Optional[DurationParser] = None

_PARSE_FIELDS = {
    "ambiguous_unit",
    "max_length",
    "allow_negative",
    "merge_duplicates",
    "strict_negative_position",
}


def default_parser() -> DurationParser:
    """Return the process-wide parser, built from ``DURPARSE_*`` settings."""
    global _default_parser
    if _default_parser is None:
        _default_parser = DurationParser(ParserConfig.from_env())
    return _default_parser


def ms(value: Union[str, Number], **options: Any) -> Union[Number, str]:
    """Parse strings to milliseconds and format numbers back to strings.

    >>> ms("2 days")
    172800000
    >>> ms(90000, long=True)
    '2 minutes'
    """
    parser = default_parser()
    if isinstance(value, str):
        parse_options = {k: v for k, v in options.items() if k in _PARSE_FIELDS}
        return parser.parse(value, **parse_options)
    format_options = {k: v for k, v in options.items() if k not in _PARSE_FIELDS}
    return parser.format(value, **format_options)


def parse_duration(expr: str, **options: Any) -> timedelta:
    """Convert a duration expression into a :class:`~datetime.timedelta`.

    Parameters
    ----------
    expr:
        Duration expression such as ``"5min"``, ``"1h 30min"`` or ``"1.5d"``.
        A bare number is read as milliseconds.
    **options:
        Parse options (``ambiguous_unit``, ``allow_negative``, ...).

    Returns
    -------
    datetime.timedelta
        A timedelta representing the supplied duration.

    Raises
    ------
    durparse.errors.DurationParseError
        A :class:`ValueError` subclass, raised if the expression is empty or
        cannot be parsed.
    """

    return as_timedelta(default_parser().parse(expr, **options), expr)
