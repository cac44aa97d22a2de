"""Markup dialects supported for fragments and generated output."""
from __future__ import annotations

from enum import Enum
from typing import Dict, Iterable, Optional, Tuple


class MarkupLanguage(str, Enum):
    ASCIIDOC = "asciidoc"
    MARKDOWN = "markdown"

    @property
    def file_extensions(self) -> Tuple[str, ...]:
        return _EXTENSIONS[self]

    @property
    def default_extension(self) -> str:
        return _EXTENSIONS[self][0]

    @property
    def heading_marker(self) -> str:
        return "=" if self is MarkupLanguage.ASCIIDOC else "#"

    @property
    def max_level(self) -> int:
        # Six markers in both dialects; level 0 is the document title.
        return 5


_EXTENSIONS: Dict[MarkupLanguage, Tuple[str, ...]] = {
    MarkupLanguage.ASCIIDOC: (".adoc", ".asciidoc", ".asc"),
    MarkupLanguage.MARKDOWN: (".md", ".markdown"),
}


def dialect_for_filename(
    filename: str, dialects: Iterable[MarkupLanguage] = tuple(MarkupLanguage)
) -> Optional[MarkupLanguage]:
    """Return the dialect whose file extension ends *filename*, if any."""

    lowered = filename.lower()
    for dialect in dialects:
        for extension in dialect.file_extensions:
            if lowered.endswith(extension):
                return dialect
    return None


__all__ = ["MarkupLanguage", "dialect_for_filename"]
