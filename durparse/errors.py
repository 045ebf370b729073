"""Structured failures raised by the duration parser."""

from enum import Enum
from typing import Any, Dict, Iterable, List, Optional


class ErrorCode(str, Enum):
    EMPTY_INPUT = "EMPTY_INPUT"
    INVALID_TYPE = "INVALID_TYPE"
    INPUT_TOO_LONG = "INPUT_TOO_LONG"
    INVALID_FORMAT = "INVALID_FORMAT"
    INVALID_NUMBER = "INVALID_NUMBER"
    NEGATIVE_NOT_ALLOWED = "NEGATIVE_NOT_ALLOWED"
    INVALID_NEGATIVE_POSITION = "INVALID_NEGATIVE_POSITION"
    AMBIGUOUS_UNIT = "AMBIGUOUS_UNIT"
    UNKNOWN_UNIT = "UNKNOWN_UNIT"
    DUPLICATE_UNIT = "DUPLICATE_UNIT"
    VALUE_TOO_LARGE = "VALUE_TOO_LARGE"

    def __str__(self) -> str:
        return self.value


class DurationParseError(ValueError):
    """A duration could not be parsed.

    Attributes
    ----------
    input:
        The value handed to the parser, rendered as a string.
    code:
        :class:`ErrorCode` describing the failure; compares equal to its
        plain string name.
    suggestions:
        Ordered alternatives the caller may offer back to the user. For an
        unknown unit these are the closest aliases, for a format error a
        few well-formed examples.
    token:
        The unit token that failed to resolve, when there is one.
    """

    def __init__(
        self,
        message: str,
        input: Any,
        code: ErrorCode,
        suggestions: Optional[Iterable[str]] = None,
        token: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.input = input if isinstance(input, str) else repr(input)
        self.code = ErrorCode(code)
        self.suggestions: List[str] = list(suggestions or [])
        self.token = token

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "message": self.message,
            "input": self.input,
            "code": self.code.value,
        }
        if self.suggestions:
            payload["suggestions"] = list(self.suggestions)
        if self.token is not None:
            payload["token"] = self.token
        return payload

    def __repr__(self) -> str:
        return (
            f"DurationParseError(code={self.code.value!r}, input={self.input!r}, "
            f"suggestions={self.suggestions!r})"
        )
