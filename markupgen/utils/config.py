"""Runtime configuration helpers for conversions."""
from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import Any, Final, Mapping, Optional, Tuple

from ..markup import MarkupLanguage
from .errors import ConfigError
from .validators import validate_payload

CONFIG_SCHEMA: Final[str] = "config.v1.json"


def _parse_bool(value: str | None, *, default: bool = False) -> bool:
    if value is None:
        return default
    value = value.strip().lower()
    return value in {"1", "true", "yes", "on"}


def _parse_float(value: str | None, *, default: float) -> float:
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _parse_list(value: str | None) -> Tuple[str, ...]:
    if not value:
        return ()
    return tuple(item.strip() for item in value.split(",") if item.strip())


def _env_bool(name: str, *, default: bool = False) -> bool:
    return _parse_bool(os.getenv(name), default=default)


def _env_float(name: str, *, default: float) -> float:
    return _parse_float(os.getenv(name), default=default)


def _env_str(name: str, *, default: str) -> str:
    value = os.getenv(name, "").strip().lower()
    return value or default


MARKUP_LANGUAGE: Final[str] = _env_str("MARKUPGEN_MARKUP_LANGUAGE", default="asciidoc")
PATHS_GROUP_BY: Final[str] = _env_str("MARKUPGEN_PATHS_GROUP_BY", default="as_is")
OUTPUT_LANGUAGE: Final[str] = _env_str("MARKUPGEN_OUTPUT_LANGUAGE", default="en")
SEPARATED_DEFINITIONS: Final[bool] = _env_bool("MARKUPGEN_SEPARATED_DEFINITIONS", default=False)
SEPARATED_OPERATIONS: Final[bool] = _env_bool("MARKUPGEN_SEPARATED_OPERATIONS", default=False)
HTTP_TIMEOUT: Final[float] = _env_float("MARKUPGEN_HTTP_TIMEOUT", default=10.0)
ENABLED_EXTENSIONS: Final[Tuple[str, ...]] = _parse_list(os.getenv("MARKUPGEN_EXTENSIONS"))


class GroupBy(str, Enum):
    AS_IS = "as_is"
    TAGS = "tags"


class Language(str, Enum):
    EN = "en"
    RU = "ru"


@dataclass(frozen=True, slots=True)
class ExtensionSpec:
    """An extension requested by name, optionally with an explicit content path."""

    name: str
    content_path: Optional[Path] = None


@dataclass(frozen=True, slots=True)
class MarkupConfig:
    """Effective options for one conversion."""

    markup_language: MarkupLanguage = MarkupLanguage.ASCIIDOC
    paths_group_by: GroupBy = GroupBy.AS_IS
    output_language: Language = Language.EN
    separated_definitions: bool = False
    separated_operations: bool = False
    definitions_ordered: bool = True
    extensions: Tuple[ExtensionSpec, ...] = field(default_factory=tuple)

    @classmethod
    def from_env(cls) -> "MarkupConfig":
        """Build a configuration from ``MARKUPGEN_*`` defaults."""

        return cls.from_mapping(
            {
                "markup_language": MARKUP_LANGUAGE,
                "paths_group_by": PATHS_GROUP_BY,
                "output_language": OUTPUT_LANGUAGE,
                "separated_definitions": SEPARATED_DEFINITIONS,
                "separated_operations": SEPARATED_OPERATIONS,
                "extensions": [{"name": name} for name in ENABLED_EXTENSIONS],
            }
        )

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "MarkupConfig":
        """Validate *payload* against the packaged schema and build a config."""

        valid, errors = validate_payload(CONFIG_SCHEMA, dict(payload))
        if not valid:
            raise ConfigError(errors)
        defaults = cls()
        extensions = tuple(
            ExtensionSpec(
                name=entry["name"],
                content_path=Path(entry["content_path"]).expanduser()
                if entry.get("content_path")
                else None,
            )
            for entry in payload.get("extensions", ())
        )
        return cls(
            markup_language=MarkupLanguage(
                payload.get("markup_language", defaults.markup_language.value)
            ),
            paths_group_by=GroupBy(payload.get("paths_group_by", defaults.paths_group_by.value)),
            output_language=Language(
                payload.get("output_language", defaults.output_language.value)
            ),
            separated_definitions=bool(
                payload.get("separated_definitions", defaults.separated_definitions)
            ),
            separated_operations=bool(
                payload.get("separated_operations", defaults.separated_operations)
            ),
            definitions_ordered=bool(
                payload.get("definitions_ordered", defaults.definitions_ordered)
            ),
            extensions=extensions,
        )

    def with_options(self, **changes: Any) -> "MarkupConfig":
        return replace(self, **changes)


__all__ = [
    "ENABLED_EXTENSIONS",
    "HTTP_TIMEOUT",
    "ExtensionSpec",
    "GroupBy",
    "Language",
    "MarkupConfig",
]
