"""Environment-driven defaults for the parser and its caches."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

LOCALES_DIR = Path(__file__).with_name("locales")

AMBIGUOUS_POLICIES = ("strict", "minutes", "months")

ENV_PREFIX = "DURPARSE_"


@dataclass(frozen=True)
class ParserConfig:
    max_input_length: int = 100
    max_cache_size: Optional[int] = 1000
    max_suggestions: int = 5
    default_locale: str = "en"
    locales_path: Path = field(default=LOCALES_DIR)
    ambiguous_unit: str = "strict"

    def __post_init__(self) -> None:
        if self.max_input_length <= 0:
            raise ValueError(
                f"max_input_length must be positive, got {self.max_input_length}"
            )
        if self.max_suggestions < 0:
            raise ValueError(
                f"max_suggestions must be >= 0, got {self.max_suggestions}"
            )
        if self.ambiguous_unit not in AMBIGUOUS_POLICIES:
            raise ValueError(
                f"ambiguous_unit must be one of {AMBIGUOUS_POLICIES}, "
                f"got {self.ambiguous_unit!r}"
            )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ParserConfig":
        """Build a config from ``DURPARSE_*`` variables.

        Unset variables keep their defaults. ``DURPARSE_MAX_CACHE_SIZE`` may
        be ``none`` for an unbounded cache.
        """
        env = os.environ if environ is None else environ
        defaults = cls()

        def _int(name: str, default: Optional[int]) -> Optional[int]:
            raw = env.get(ENV_PREFIX + name)
            if raw is None or raw.strip() == "":
                return default
            if raw.strip().lower() == "none":
                return None
            try:
                return int(raw)
            except ValueError:
                raise ValueError(
                    f"{ENV_PREFIX}{name} must be an integer, got {raw!r}"
                ) from None

        max_input_length = _int("MAX_INPUT_LENGTH", defaults.max_input_length)
        max_suggestions = _int("MAX_SUGGESTIONS", defaults.max_suggestions)
        if max_input_length is None or max_suggestions is None:
            raise ValueError(
                f"{ENV_PREFIX}MAX_INPUT_LENGTH and {ENV_PREFIX}MAX_SUGGESTIONS "
                "cannot be 'none'"
            )
        locales_path = env.get(ENV_PREFIX + "LOCALES_PATH")
        return cls(
            max_input_length=max_input_length,
            max_cache_size=_int("MAX_CACHE_SIZE", defaults.max_cache_size),
            max_suggestions=max_suggestions,
            default_locale=env.get(ENV_PREFIX + "DEFAULT_LOCALE")
            or defaults.default_locale,
            locales_path=Path(locales_path) if locales_path else defaults.locales_path,
            ambiguous_unit=(
                env.get(ENV_PREFIX + "AMBIGUOUS_UNIT") or defaults.ambiguous_unit
            ).lower(),
        )
