"""Fragment discovery and heading level offsets."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List

from ..markup import MarkupLanguage, dialect_for_filename
from . import Anchor, Position

logger = logging.getLogger("markupgen.extensions.fragments")

_LEVEL_OFFSETS = {
    Anchor.BEFORE: 0,
    Anchor.AFTER: 0,
    Anchor.BEGIN: 1,
    Anchor.END: 1,
}


@dataclass(frozen=True, slots=True)
class Fragment:
    """A pre-authored markup file targeting one position."""

    path: Path
    position: Position
    dialect: MarkupLanguage

    @property
    def name(self) -> str:
        return self.path.name

    def read_text(self) -> str:
        return self.path.read_text(encoding="utf-8-sig")


def fragment_prefix(prefix: str, position: Position) -> str:
    """Return the filename prefix selecting fragments for *position*."""

    return f"{prefix}-{position.slug}-"


def discover_fragments(
    directory: Path,
    prefix: str,
    position: Position,
    dialects: Iterable[MarkupLanguage] = tuple(MarkupLanguage),
) -> List[Fragment]:
    """List fragments in *directory* for *prefix* and *position*, sorted by filename.

    A missing or unreadable directory yields an empty list: dynamic content
    is optional. Files whose extension belongs to no dialect are ignored.
    """

    dialects = tuple(dialects)
    wanted = fragment_prefix(prefix, position)
    try:
        with os.scandir(directory) as entries:
            candidates = [
                entry.name
                for entry in entries
                if entry.name.startswith(wanted) and entry.is_file()
            ]
    except OSError as exc:
        logger.debug(
            "fragments.directory_unavailable",
            extra={"directory": str(directory), "error": str(exc)},
        )
        return []

    fragments: List[Fragment] = []
    # Ordinal filename order; scandir order is unspecified.
    for name in sorted(candidates):
        dialect = dialect_for_filename(name, dialects)
        if dialect is None:
            logger.debug("fragments.unsupported_extension", extra={"fragment": name})
            continue
        fragments.append(Fragment(path=Path(directory) / name, position=position, dialect=dialect))
    logger.debug(
        "fragments.discovered",
        extra={"directory": str(directory), "prefix": wanted, "count": len(fragments)},
    )
    return fragments


def level_offset(position: Position) -> int:
    """Heading depth added to fragments at *position*: 0 outside a section, 1 inside it."""

    return _LEVEL_OFFSETS[position.anchor]


def heading_shift(position: Position, section_level: int) -> int:
    """Return the total shift for fragments merged around a section titled at *section_level*.

    Document sections are titled at level 1, so their fragments move by
    exactly :func:`level_offset`; deeper entity sections add their extra depth.
    """

    return level_offset(position) + max(section_level - 1, 0)


__all__ = [
    "Fragment",
    "discover_fragments",
    "fragment_prefix",
    "heading_shift",
    "level_offset",
]
