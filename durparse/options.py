"""Option structures for parsing and formatting.

Every call resolves its options once: start from the parser's defaults,
apply an optional :class:`ParseOptions`/:class:`FormatOptions` instance or
mapping, then keyword overrides. Mappings may use camelCase keys
(``ambiguousUnit``) as sent by JSON clients.
"""

from dataclasses import dataclass, fields, replace
from typing import Any, Mapping, Optional, Sequence, Tuple, TypeVar, Union

from .config import AMBIGUOUS_POLICIES
from .units import TIME_MULTIPLIERS

O = TypeVar("O", "ParseOptions", "FormatOptions")

_CAMEL_KEYS = {
    "ambiguousUnit": "ambiguous_unit",
    "maxLength": "max_length",
    "allowNegative": "allow_negative",
    "mergeDuplicates": "merge_duplicates",
    "strictNegativePosition": "strict_negative_position",
    "preferredUnits": "preferred_units",
    "useIntl": "use_intl",
}


def _resolve(base: O, options: Union[O, Mapping[str, Any], None], overrides: Mapping[str, Any]) -> O:
    changes = {}
    if isinstance(options, type(base)):
        changes.update({f.name: getattr(options, f.name) for f in fields(options)})
    elif isinstance(options, Mapping):
        changes.update(options)
    elif options is not None:
        raise TypeError(
            f"options must be {type(base).__name__}, a mapping or None, "
            f"got {type(options).__name__}"
        )
    changes.update(overrides)

    known = {f.name for f in fields(base)}
    normalized = {}
    for key, value in changes.items():
        name = _CAMEL_KEYS.get(key, key)
        if name not in known:
            raise TypeError(f"Unknown {type(base).__name__} field: {key!r}")
        normalized[name] = value
    return replace(base, **normalized)


@dataclass(frozen=True)
class ParseOptions:
    ambiguous_unit: str = "strict"
    max_length: int = 100
    allow_negative: bool = False
    merge_duplicates: bool = False
    strict_negative_position: bool = True

    def __post_init__(self) -> None:
        if self.ambiguous_unit not in AMBIGUOUS_POLICIES:
            raise ValueError(
                f"ambiguous_unit must be one of {AMBIGUOUS_POLICIES}, "
                f"got {self.ambiguous_unit!r}"
            )
        if isinstance(self.max_length, bool) or not isinstance(self.max_length, int):
            raise TypeError(f"max_length must be an int, got {self.max_length!r}")

    def resolve(
        self, options: Union["ParseOptions", Mapping[str, Any], None] = None, **overrides: Any
    ) -> "ParseOptions":
        return _resolve(self, options, overrides)


@dataclass(frozen=True)
class FormatOptions:
    long: bool = False
    precision: int = 0
    compound: bool = False
    preferred_units: Optional[Tuple[str, ...]] = None
    locale: Optional[str] = None
    use_intl: bool = False
    separator: str = ", "

    def __post_init__(self) -> None:
        if isinstance(self.precision, bool) or not isinstance(self.precision, int):
            raise TypeError(f"precision must be an int, got {self.precision!r}")
        if self.precision < 0:
            raise ValueError(f"precision must be >= 0, got {self.precision}")
        if self.preferred_units is not None:
            units: Sequence[str] = (
                (self.preferred_units,)
                if isinstance(self.preferred_units, str)
                else tuple(self.preferred_units)
            )
            unknown = [unit for unit in units if unit not in TIME_MULTIPLIERS]
            if unknown:
                raise ValueError(
                    f"Unknown preferred units {unknown}; "
                    f"valid units: {list(TIME_MULTIPLIERS)}"
                )
            object.__setattr__(self, "preferred_units", tuple(units) or None)

    def resolve(
        self, options: Union["FormatOptions", Mapping[str, Any], None] = None, **overrides: Any
    ) -> "FormatOptions":
        return _resolve(self, options, overrides)
