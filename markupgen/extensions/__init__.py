"""Extension points, positions and the lazily loaded extension table."""
from __future__ import annotations

import abc
from dataclasses import dataclass
from enum import Enum
from importlib import import_module
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar, Dict, Mapping, Optional, Tuple

from ..utils.errors import ErrorCode, MarkupgenError, UnknownPositionError

if TYPE_CHECKING:  # pragma: no cover - import only used for typing
    from .context import GlobalContext, LocalContext


class Anchor(str, Enum):
    """Where, relative to a section, content is inserted."""

    BEFORE = "before"
    BEGIN = "begin"
    END = "end"
    AFTER = "after"


class SectionKind(str, Enum):
    OVERVIEW = "overview"
    DEFINITIONS = "definitions"
    DEFINITION = "definition"
    PATHS = "paths"
    OPERATION = "operation"
    SECURITY = "security"
    SECURITY_SCHEME = "security_scheme"

    @property
    def scope(self) -> str:
        return _SCOPES[self]

    @property
    def is_entity(self) -> bool:
        return self.scope != "DOC"


_SCOPES: Mapping[SectionKind, str] = {
    SectionKind.OVERVIEW: "DOC",
    SectionKind.DEFINITIONS: "DOC",
    SectionKind.PATHS: "DOC",
    SectionKind.SECURITY: "DOC",
    SectionKind.DEFINITION: "DEF",
    SectionKind.SECURITY_SCHEME: "DEF",
    SectionKind.OPERATION: "OP",
}


@dataclass(frozen=True, slots=True)
class Position:
    """An anchor attached to one kind of section, e.g. ``DOC_BEGIN`` of the overview."""

    section: SectionKind
    anchor: Anchor

    @property
    def name(self) -> str:
        return f"{self.section.scope}_{self.anchor.name}"

    @property
    def slug(self) -> str:
        """Position segment used in fragment filenames, e.g. ``doc-begin``."""

        return self.name.lower().replace("_", "-")

    @property
    def kind(self) -> "ExtensionKind":
        return ExtensionKind.for_section(self.section)

    def __str__(self) -> str:
        return self.name


class ExtensionKind(str, Enum):
    OVERVIEW = "overview"
    DEFINITIONS = "definitions"
    PATHS = "paths"
    SECURITY = "security"

    @property
    def sections(self) -> Tuple[SectionKind, ...]:
        return _KIND_SECTIONS[self]

    @property
    def positions(self) -> Tuple[Position, ...]:
        return tuple(
            Position(section, anchor) for section in self.sections for anchor in Anchor
        )

    def accepts(self, position: object) -> bool:
        return isinstance(position, Position) and position.section in self.sections

    @classmethod
    def for_section(cls, section: SectionKind) -> "ExtensionKind":
        for kind, sections in _KIND_SECTIONS.items():
            if section in sections:
                return kind
        raise ValueError(f"No extension kind owns section {section!s}")  # pragma: no cover


_KIND_SECTIONS: Mapping[ExtensionKind, Tuple[SectionKind, ...]] = {
    ExtensionKind.OVERVIEW: (SectionKind.OVERVIEW,),
    ExtensionKind.DEFINITIONS: (SectionKind.DEFINITIONS, SectionKind.DEFINITION),
    ExtensionKind.PATHS: (SectionKind.PATHS, SectionKind.OPERATION),
    ExtensionKind.SECURITY: (SectionKind.SECURITY, SectionKind.SECURITY_SCHEME),
}


class ContentExtension(abc.ABC):
    """Contract shared by every extension kind.

    ``on_update_global_context`` runs once before any document is assembled;
    ``apply`` runs at every position of the extension's kind and may only add
    nodes to the section reachable through the local context.
    """

    kind: ClassVar[ExtensionKind]

    def on_update_global_context(self, global_context: "GlobalContext") -> None:
        return None

    @abc.abstractmethod
    def apply(self, context: "LocalContext") -> None:
        ...

    def check_position(self, position: object) -> Position:
        if not self.kind.accepts(position):
            raise UnknownPositionError(type(self).__name__, position)
        return position  # type: ignore[return-value]


class OverviewContentExtension(ContentExtension):
    kind = ExtensionKind.OVERVIEW


class DefinitionsContentExtension(ContentExtension):
    kind = ExtensionKind.DEFINITIONS


class PathsContentExtension(ContentExtension):
    kind = ExtensionKind.PATHS


class SecurityContentExtension(ContentExtension):
    kind = ExtensionKind.SECURITY


# Extensions are registered via module paths to keep imports lazy.
_EXTENSIONS: Dict[str, str] = {
    "dynamic-overview": "markupgen.extensions.dynamic:DynamicOverviewContentExtension",
    "dynamic-definitions": "markupgen.extensions.dynamic:DynamicDefinitionsContentExtension",
    "dynamic-operations": "markupgen.extensions.dynamic:DynamicOperationsContentExtension",
    "dynamic-security": "markupgen.extensions.dynamic:DynamicSecurityContentExtension",
}


class UnknownExtensionError(MarkupgenError):
    code = ErrorCode.UNKNOWN_EXTENSION


def extension_names() -> Mapping[str, str]:
    """Return a mapping of extension names to their import paths."""

    return dict(_EXTENSIONS)


def load_extension(name: str, content_path: Optional[Path] = None) -> ContentExtension:
    """Instantiate a named extension without eager imports."""

    key = name.lower()
    try:
        module_spec = _EXTENSIONS[key]
    except KeyError as exc:
        available = ", ".join(sorted(_EXTENSIONS)) or "<none>"
        raise UnknownExtensionError(
            f"Unknown extension '{name}'. Available extensions: {available}."
        ) from exc
    module_name, attr = module_spec.split(":", 1)
    module = import_module(module_name)
    extension_cls = getattr(module, attr)
    return extension_cls(content_path)


__all__ = [
    "Anchor",
    "ContentExtension",
    "DefinitionsContentExtension",
    "ExtensionKind",
    "OverviewContentExtension",
    "PathsContentExtension",
    "Position",
    "SectionKind",
    "SecurityContentExtension",
    "UnknownExtensionError",
    "extension_names",
    "load_extension",
]
