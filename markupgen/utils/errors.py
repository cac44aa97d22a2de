"""Error codes, problem records and exceptions for the converter."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Mapping, MutableMapping, Optional, Sequence


class ErrorCode(str, Enum):
    """Stable codes attached to conversion problems and exceptions."""

    INVALID_CONFIG = "INVALID_CONFIG"
    SOURCE_UNAVAILABLE = "SOURCE_UNAVAILABLE"
    EXTENSION_INERT = "EXTENSION_INERT"
    FRAGMENT_PARSE_FAILED = "FRAGMENT_PARSE_FAILED"
    UNKNOWN_POSITION = "UNKNOWN_POSITION"
    UNKNOWN_EXTENSION = "UNKNOWN_EXTENSION"
    MISSING_TAGS = "MISSING_TAGS"


@dataclass(frozen=True)
class ErrorTemplate:
    """Default severity, message, and recovery hints for an error code."""

    fatal: bool
    message: str
    recovery: Sequence[str] = ()


_TEMPLATES: Mapping[ErrorCode, ErrorTemplate] = {
    ErrorCode.INVALID_CONFIG: ErrorTemplate(
        fatal=True,
        message="Configuration failed validation.",
        recovery=("Check option names and allowed values.",),
    ),
    ErrorCode.SOURCE_UNAVAILABLE: ErrorTemplate(
        fatal=True,
        message="API description could not be loaded.",
        recovery=("Check the path or URL and that the document is JSON or YAML.",),
    ),
    ErrorCode.EXTENSION_INERT: ErrorTemplate(
        fatal=False,
        message="Extension disabled: no content path could be derived.",
        recovery=("Configure an explicit content path for the extension.",),
    ),
    ErrorCode.FRAGMENT_PARSE_FAILED: ErrorTemplate(
        fatal=False,
        message="Markup fragment could not be parsed and was skipped.",
        recovery=("Fix the fragment markup or remove the file.",),
    ),
    ErrorCode.UNKNOWN_POSITION: ErrorTemplate(
        fatal=True,
        message="Extension invoked at a position outside its kind.",
    ),
    ErrorCode.UNKNOWN_EXTENSION: ErrorTemplate(
        fatal=True,
        message="Extension name is not registered.",
        recovery=("Use one of the names listed by the error message.",),
    ),
    ErrorCode.MISSING_TAGS: ErrorTemplate(
        fatal=True,
        message="Operation has no tags while grouping paths by tags.",
        recovery=("Tag every operation or group paths as-is.",),
    ),
}


def _resolve_template(code: ErrorCode) -> ErrorTemplate:
    try:
        return _TEMPLATES[code]
    except KeyError:  # pragma: no cover
        raise ValueError(f"No error template registered for {code!s}") from None


def make_error(
    code: ErrorCode,
    message: Optional[str] = None,
    *,
    source: Optional[str] = None,
    recovery: Optional[Iterable[str]] = None,
) -> Dict[str, object]:
    """Create a JSON-serialisable problem record."""

    template = _resolve_template(code)
    resolved_recovery: List[str] = list(recovery) if recovery is not None else list(
        template.recovery
    )
    payload: MutableMapping[str, object] = {
        "code": code.value,
        "fatal": template.fatal,
        "message": message if message is not None else template.message,
        "recovery": resolved_recovery,
    }
    if source is not None:
        payload["source"] = source
    return dict(payload)


class MarkupgenError(RuntimeError):
    """Base class for errors that abort a conversion."""

    code: ErrorCode = ErrorCode.SOURCE_UNAVAILABLE

    def to_dict(self) -> Dict[str, object]:
        return make_error(self.code, str(self))


class ConfigError(MarkupgenError):
    """Raised when configuration fails schema validation."""

    code = ErrorCode.INVALID_CONFIG

    def __init__(self, messages: Sequence[str]):
        super().__init__("Invalid configuration: " + "; ".join(messages))
        self.messages = list(messages)


class SourceLoadError(MarkupgenError):
    """Raised when the API description cannot be read or decoded."""

    code = ErrorCode.SOURCE_UNAVAILABLE


class UnknownPositionError(MarkupgenError):
    """Raised when an extension receives a position its kind does not declare."""

    code = ErrorCode.UNKNOWN_POSITION

    def __init__(self, extension: str, position: object):
        super().__init__(f"Unknown position '{position}' for extension {extension}")
        self.extension = extension
        self.position = position


class ConversionError(MarkupgenError):
    """Raised when the API description cannot be turned into documents."""

    def __init__(self, code: ErrorCode, message: str):
        super().__init__(message)
        self.code = code


class FragmentParseError(ValueError):
    """Raised by a dialect parser when fragment markup is malformed."""


__all__ = [
    "ConfigError",
    "ConversionError",
    "ErrorCode",
    "ErrorTemplate",
    "FragmentParseError",
    "MarkupgenError",
    "SourceLoadError",
    "UnknownPositionError",
    "make_error",
]
