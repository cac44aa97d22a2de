"""Shared state handed to extensions."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

from ..markup import MarkupLanguage
from ..markup.tree import Document, Section
from ..utils.config import MarkupConfig
from ..utils.io import parent_directory
from . import Position


@dataclass(frozen=True, slots=True)
class GlobalContext:
    """Read-only state for one conversion run."""

    config: MarkupConfig
    swagger: Mapping[str, Any]
    location: Optional[str] = None

    @property
    def markup_language(self) -> MarkupLanguage:
        return self.config.markup_language

    @property
    def base_directory(self) -> Optional[Path]:
        """Directory holding the API description when it was loaded from disk."""

        return parent_directory(self.location)


@dataclass(frozen=True, slots=True)
class LocalContext:
    """State for a single extension invocation at one position.

    ``container`` holds ``section`` once it has been added; BEFORE/AFTER
    content goes into the container, BEGIN/END content into the section.
    """

    global_context: GlobalContext
    position: Position
    section: Section
    container: Document | Section
    entity: Optional[str] = None


__all__ = ["GlobalContext", "LocalContext"]
