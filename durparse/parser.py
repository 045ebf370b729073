"""Duration parsing and formatting."""

import logging
import math
import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Any, Dict, List, Optional, Tuple, Union

from .config import ParserConfig
from .errors import DurationParseError, ErrorCode
from .localization import Localization
from .options import FormatOptions, ParseOptions
from .suggestions import SuggestionEngine
from .units import AMBIGUOUS_UNIT, TIME_MULTIPLIERS, UNIT_ALIASES, units_descending

logger = logging.getLogger("durparse.parser")

Number = Union[int, float]

MAX_SAFE_INTEGER = 2**53 - 1

FORMAT_EXAMPLES = ["1h", "30min", "1.5d", "2 hours", "1h 30min"]

_PURE_NUMBER = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:e[+-]?[0-9]+)?", re.I)
_COMPONENT = re.compile(r"([+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+))\s*([A-Za-z]+)", re.ASCII)
_SEPARATOR = re.compile(r"\s*,?\s*")


@dataclass(frozen=True)
class ParseResult:
    duration: Number
    unit: str
    milliseconds: Number

    def to_dict(self) -> Dict[str, Any]:
        return {
            "duration": self.duration,
            "unit": self.unit,
            "milliseconds": self.milliseconds,
        }


@dataclass(frozen=True)
class DetailedParseResult:
    total_milliseconds: Number
    data: List[ParseResult] = field(default_factory=list)
    dominant_unit: Optional[ParseResult] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalMilliseconds": self.total_milliseconds,
            "dominantUnit": self.dominant_unit.to_dict() if self.dominant_unit else None,
            "data": [item.to_dict() for item in self.data],
        }


def _as_number(value: float) -> Number:
    """Collapse integral floats so ``3600000.0`` reads as ``3600000``."""
    if isinstance(value, float) and value.is_integer() and abs(value) <= MAX_SAFE_INTEGER:
        return int(value)
    return value


def as_timedelta(milliseconds: Number, raw: Any) -> timedelta:
    """Convert parsed milliseconds, rejecting values timedelta cannot hold."""
    try:
        return timedelta(milliseconds=milliseconds)
    except OverflowError as exc:
        raise DurationParseError(
            "Duration exceeds the supported range", raw, ErrorCode.VALUE_TOO_LARGE
        ) from exc


def _number_text(value: Number) -> str:
    value = _as_number(value)
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _round_half_up(value: float, precision: int) -> float:
    with localcontext() as ctx:
        ctx.prec = 400 + precision
        quantum = Decimal(1).scaleb(-precision)
        return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


class DurationParser:
    """Convert human durations to milliseconds and back.

    A parser owns its suggestion engine and localization provider; build
    one per process (or per request, to keep caches apart) and share it.

    >>> parser = DurationParser()
    >>> parser.parse("1.5d")
    129600000
    >>> parser.format(7200000, long=True)
    '2 hours'
    """

    def __init__(
        self,
        config: Optional[ParserConfig] = None,
        suggestion_engine: Optional[SuggestionEngine] = None,
        localization: Optional[Localization] = None,
    ) -> None:
        self.config = config or ParserConfig()
        self.suggestions = suggestion_engine or SuggestionEngine(
            max_cache_size=self.config.max_cache_size
        )
        self.localization = localization or Localization(
            self.config.locales_path, self.config.default_locale
        )
        self.parse_defaults = ParseOptions(
            ambiguous_unit=self.config.ambiguous_unit,
            max_length=self.config.max_input_length,
        )
        self.format_defaults = FormatOptions(locale=self.config.default_locale)

    # -- parsing ---------------------------------------------------------

    def parse(
        self,
        value: Union[str, Number],
        options: Union[ParseOptions, Dict[str, Any], None] = None,
        **overrides: Any,
    ) -> Number:
        """Parse ``value`` into milliseconds.

        Numbers are taken to be milliseconds already. Strings hold either a
        bare number (milliseconds) or one or more ``<number><unit>``
        components such as ``"1h 30min"``. Raises
        :class:`~durparse.errors.DurationParseError` on any failure.
        """
        opts = self.parse_defaults.resolve(options, **overrides)
        return self._parse(value, opts).total_milliseconds

    def parse_detailed(
        self,
        value: Union[str, Number],
        options: Union[ParseOptions, Dict[str, Any], None] = None,
        **overrides: Any,
    ) -> DetailedParseResult:
        opts = self.parse_defaults.resolve(options, **overrides)
        return self._parse(value, opts)

    def is_valid(
        self,
        value: Any,
        options: Union[ParseOptions, Dict[str, Any], None] = None,
        **overrides: Any,
    ) -> bool:
        try:
            self.parse(value, options, **overrides)
        except (ValueError, TypeError):
            return False
        return True

    def get_expires_at(
        self,
        value: Union[str, Number],
        options: Union[ParseOptions, Dict[str, Any], None] = None,
        now: Optional[datetime] = None,
        **overrides: Any,
    ) -> datetime:
        milliseconds = self.parse(value, options, **overrides)
        start = now or datetime.now(timezone.utc)
        try:
            return start + as_timedelta(milliseconds, value)
        except OverflowError as exc:
            raise DurationParseError(
                "Expiry falls outside the supported date range",
                value,
                ErrorCode.VALUE_TOO_LARGE,
            ) from exc

    def get_expires_in(
        self,
        value: Union[str, Number],
        options: Union[ParseOptions, Dict[str, Any], None] = None,
        **overrides: Any,
    ) -> int:
        """Whole seconds until expiry, the form token lifetimes expect."""
        return math.floor(self.parse(value, options, **overrides) / 1000)

    def get_suggestions(self, token: str, max_suggestions: Optional[int] = None) -> List[str]:
        if max_suggestions is None:
            max_suggestions = self.config.max_suggestions
        return self.suggestions.get_suggestions(token, max_suggestions)

    def get_supported_units(self) -> List[str]:
        return sorted(UNIT_ALIASES)

    def _parse(self, value: Any, opts: ParseOptions) -> DetailedParseResult:
        if isinstance(value, bool):
            raise DurationParseError(
                "Input must be a string or a number", value, ErrorCode.INVALID_TYPE
            )
        if isinstance(value, (int, float)):
            number = self._check_number(value, value, opts)
            return self._detailed([ParseResult(number, "ms", number)])
        if not isinstance(value, str):
            raise DurationParseError(
                f"Input must be a string or a number, got {type(value).__name__}",
                value,
                ErrorCode.INVALID_TYPE,
            )
        if not value:
            raise DurationParseError("Input must not be empty", value, ErrorCode.EMPTY_INPUT)
        if len(value) > opts.max_length:
            raise DurationParseError(
                f"Input exceeds maximum length of {opts.max_length}",
                value,
                ErrorCode.INPUT_TOO_LONG,
            )

        trimmed = value.strip()
        if not trimmed:
            raise DurationParseError("Input must not be empty", value, ErrorCode.EMPTY_INPUT)

        if _PURE_NUMBER.fullmatch(trimmed):
            number = self._check_number(float(trimmed), value, opts)
            number = _as_number(number)
            return self._detailed([ParseResult(number, "ms", number)])

        components = _split_components(trimmed)
        if components is None:
            logger.debug("[parse] invalid format: %r", value)
            raise DurationParseError(
                "Invalid duration format",
                value,
                ErrorCode.INVALID_FORMAT,
                suggestions=FORMAT_EXAMPLES,
            )

        results: List[ParseResult] = []
        seen_units = set()
        for index, (number_text, token) in enumerate(components):
            number = self._check_number(float(number_text), value, opts)
            if number < 0 and index > 0 and opts.strict_negative_position:
                raise DurationParseError(
                    "Negative values are only allowed on the first component",
                    value,
                    ErrorCode.INVALID_NEGATIVE_POSITION,
                )
            unit = self._normalize_unit(token, value, opts)
            if unit in seen_units and not opts.merge_duplicates:
                raise DurationParseError(
                    f'Duplicate unit "{token}" in compound duration',
                    value,
                    ErrorCode.DUPLICATE_UNIT,
                    token=token,
                )
            seen_units.add(unit)
            results.append(
                ParseResult(
                    _as_number(number),
                    unit,
                    _as_number(number * TIME_MULTIPLIERS[unit]),
                )
            )

        detailed = self._detailed(results)
        total = detailed.total_milliseconds
        if not math.isfinite(total) or abs(total) > MAX_SAFE_INTEGER:
            raise DurationParseError(
                "Value exceeds safe integer limit", value, ErrorCode.VALUE_TOO_LARGE
            )
        return detailed

    @staticmethod
    def _check_number(number: Number, raw: Any, opts: ParseOptions) -> Number:
        if not math.isfinite(number):
            raise DurationParseError("Invalid number", raw, ErrorCode.INVALID_NUMBER)
        if number < 0 and not opts.allow_negative:
            raise DurationParseError(
                "Negative values are not allowed", raw, ErrorCode.NEGATIVE_NOT_ALLOWED
            )
        return number

    def _normalize_unit(self, token: str, raw: str, opts: ParseOptions) -> str:
        alias = token.lower()
        if alias == AMBIGUOUS_UNIT:
            if opts.ambiguous_unit == "strict":
                raise DurationParseError(
                    'Ambiguous unit "m": use "min" for minutes or "mo" for months',
                    raw,
                    ErrorCode.AMBIGUOUS_UNIT,
                    suggestions=["min", "mo"],
                    token=token,
                )
            return "m" if opts.ambiguous_unit == "minutes" else "mo"

        unit = UNIT_ALIASES.get(alias)
        if unit is None:
            suggestions = self.get_suggestions(alias)
            logger.debug("[parse] unknown unit %r, suggesting %s", token, suggestions)
            raise DurationParseError(
                f'Unknown unit "{token}"',
                raw,
                ErrorCode.UNKNOWN_UNIT,
                suggestions=suggestions,
                token=token,
            )
        return unit

    @staticmethod
    def _detailed(results: List[ParseResult]) -> DetailedParseResult:
        total = _as_number(sum(item.milliseconds for item in results))
        dominant = None
        for item in results:
            if dominant is None or abs(item.milliseconds) > abs(dominant.milliseconds):
                dominant = item
        return DetailedParseResult(total, results, dominant)

    # -- formatting ------------------------------------------------------

    def format(
        self,
        ms: Number,
        options: Union[FormatOptions, Dict[str, Any], None] = None,
        **overrides: Any,
    ) -> str:
        """Render milliseconds as ``"3h"``, ``"3 hours"`` or, with
        ``compound=True``, ``"1d, 2h, 30m"``."""
        opts = self.format_defaults.resolve(options, **overrides)
        if isinstance(ms, bool) or not isinstance(ms, (int, float)) or not math.isfinite(ms):
            raise ValueError(f"Value must be a finite number, got {ms!r}")

        allowed = self._allowed_units(opts)
        if opts.compound:
            return self._format_compound(ms, allowed, opts)

        magnitude = abs(ms)
        sign = "-" if ms < 0 else ""
        for unit, factor in allowed:
            if magnitude >= factor:
                value = _round_half_up(magnitude / factor, opts.precision)
                return sign + self._render(value, unit, opts)
        return sign + self._render(magnitude, "ms", opts)

    def _format_compound(
        self, ms: Number, allowed: List[Tuple[str, int]], opts: FormatOptions
    ) -> str:
        smallest, smallest_factor = allowed[-1]
        remaining = (
            _round_half_up(abs(ms) / smallest_factor, opts.precision) * smallest_factor
        )

        parts = []
        for unit, factor in allowed[:-1]:
            count = math.floor(remaining / factor)
            if count > 0:
                parts.append(self._render(count, unit, opts))
                remaining -= count * factor
        last = _round_half_up(max(remaining, 0) / smallest_factor, opts.precision)
        if last > 0:
            parts.append(self._render(last, smallest, opts))

        if not parts:
            return self._render(0, smallest, opts)
        sign = "-" if ms < 0 else ""
        return sign + opts.separator.join(parts)

    def _render(self, value: Number, unit: str, opts: FormatOptions) -> str:
        if not opts.long:
            return f"{_number_text(value)}{unit}"
        if opts.use_intl:
            return self.localization.format_unit(_as_number(value), unit, opts.locale)
        label = self.localization.label(unit, value, opts.locale)
        return f"{_number_text(value)} {label}"

    @staticmethod
    def _allowed_units(opts: FormatOptions) -> List[Tuple[str, int]]:
        ordered = units_descending()
        if not opts.preferred_units:
            return ordered
        preferred = set(opts.preferred_units)
        return [(unit, factor) for unit, factor in ordered if unit in preferred]


def _split_components(text: str) -> Optional[List[Tuple[str, str]]]:
    """Split ``"1h, 30 min"`` into ``[("1", "h"), ("30", "min")]``.

    Components may be separated by whitespace, a comma, or nothing at all.
    Returns ``None`` when any part of ``text`` is not a component.
    """
    components = []
    position = 0
    while position < len(text):
        if components:
            position = _SEPARATOR.match(text, position).end()
        match = _COMPONENT.match(text, position)
        if match is None:
            return None
        components.append((match.group(1), match.group(2)))
        position = match.end()
    return components
