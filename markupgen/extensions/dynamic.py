"""Extensions merging markup fragments found on disk.

Fragments are named ``<prefix>-<position>-<suffix>.<ext>`` and looked up in
the extension's content path, e.g. for the overview:

- ``dynoview-doc-before-*`` : before the overview section, level offset 0
- ``dynoview-doc-begin-*`` : just after the overview title, level offset 1
- ``dynoview-doc-end-*`` : at the end of the overview section, level offset 1
- ``dynoview-doc-after-*`` : after the overview section, level offset 0

Per-entity positions (``def-*``, ``op-*``) read from a subdirectory named
after the normalised entity name. Only fragments written in the output
dialect are read. Fragments of one position are merged in
the ordinal order of their filenames.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar, List, Optional

from ..markup.parser import parse_fragment
from ..markup.tree import Node
from ..utils.errors import ErrorCode, FragmentParseError, make_error
from ..utils.io import normalize_name
from ..utils.logging import increment_counter, record_problem
from . import (
    Anchor,
    ContentExtension,
    DefinitionsContentExtension,
    OverviewContentExtension,
    PathsContentExtension,
    SecurityContentExtension,
)
from .context import GlobalContext, LocalContext
from .fragments import discover_fragments, heading_shift

logger = logging.getLogger("markupgen.extensions.dynamic")


@dataclass(slots=True)
class DynamicContentMerger:
    """Discovers, parses and splices the fragments of one local context."""

    context: LocalContext

    def merge(self, directory: Path, prefix: str, shift: int) -> int:
        """Merge every fragment for the context position; return how many were merged."""

        merged = 0
        dialect = self.context.global_context.markup_language
        fragments = discover_fragments(directory, prefix, self.context.position, dialects=(dialect,))
        for fragment in fragments:
            try:
                nodes = parse_fragment(fragment.read_text(), fragment.dialect, level_offset=shift)
            except (FragmentParseError, UnicodeDecodeError, OSError) as exc:
                logger.warning(
                    "Skipping markup fragment %s: %s",
                    fragment.name,
                    exc,
                    extra={"fragment": str(fragment.path), "position": fragment.position.name},
                )
                record_problem(
                    make_error(
                        ErrorCode.FRAGMENT_PARSE_FAILED,
                        f"Skipping markup fragment {fragment.name}: {exc}",
                        source=str(fragment.path),
                    )
                )
                increment_counter("fragments.skipped")
                continue
            self._splice(nodes)
            merged += 1
            increment_counter("fragments.merged")
        return merged

    def _splice(self, nodes: List[Node]) -> None:
        anchor = self.context.position.anchor
        if anchor is Anchor.BEGIN:
            self.context.section.insert_begin(nodes)
        elif anchor is Anchor.END:
            self.context.section.extend_end(nodes)
        else:
            self.context.container.children.extend(nodes)


class DynamicContentExtension(ContentExtension):
    """Base for extensions merging fragments from a content path.

    The content path is either given explicitly or derived once, during
    :meth:`on_update_global_context`, from the directory of a locally loaded
    API description. Without either the extension stays inert.
    """

    prefix: ClassVar[str]

    def __init__(self, content_path: Optional[Path | str] = None) -> None:
        self.content_path: Optional[Path] = Path(content_path) if content_path is not None else None
        self._initialised = content_path is not None

    def on_update_global_context(self, global_context: GlobalContext) -> None:
        if self._initialised:
            return
        self._initialised = True
        base = global_context.base_directory
        if base is None:
            logger.warning(
                "Disable > %s > Can't derive a default content path from location %s. "
                "Configure the content path explicitly.",
                type(self).__name__,
                global_context.location or "<in-memory>",
            )
            record_problem(
                make_error(
                    ErrorCode.EXTENSION_INERT,
                    f"{type(self).__name__} disabled: no content path",
                    source=global_context.location,
                )
            )
            return
        self.content_path = base

    def apply(self, context: LocalContext) -> None:
        position = self.check_position(context.position)
        if self.content_path is None:
            return
        directory = self.content_path
        if position.section.is_entity:
            if not context.entity:
                return
            directory = directory / normalize_name(context.entity)
        shift = heading_shift(position, context.section.level)
        DynamicContentMerger(context).merge(directory, self.prefix, shift)


class DynamicOverviewContentExtension(DynamicContentExtension, OverviewContentExtension):
    prefix = "dynoview"


class DynamicDefinitionsContentExtension(DynamicContentExtension, DefinitionsContentExtension):
    prefix = "dyndef"


class DynamicOperationsContentExtension(DynamicContentExtension, PathsContentExtension):
    prefix = "dynops"


class DynamicSecurityContentExtension(DynamicContentExtension, SecurityContentExtension):
    prefix = "dynsec"


__all__ = [
    "DynamicContentExtension",
    "DynamicContentMerger",
    "DynamicDefinitionsContentExtension",
    "DynamicOperationsContentExtension",
    "DynamicOverviewContentExtension",
    "DynamicSecurityContentExtension",
]
