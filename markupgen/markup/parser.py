"""Line-oriented parsers turning fragment markup into tree nodes."""
from __future__ import annotations

import re
from typing import Callable, Dict, List, Optional, Pattern

from ..utils.errors import FragmentParseError
from . import MarkupLanguage
from .tree import Heading, Listing, Node, Paragraph, iter_headings, shift_headings

_ASCIIDOC_HEADING: Pattern[str] = re.compile(r"^(=+)\s+(\S.*?)\s*$")
_ASCIIDOC_DELIMITER: Pattern[str] = re.compile(
    r"^(-{4,}|\.{4,}|={4,}|\*{4,}|_{4,}|\+{4,}|/{4,}|\|={3,})\s*$"
)
# Two-line section titles: the underline character gives the level.
_ASCIIDOC_UNDERLINE: Pattern[str] = re.compile(r"^([=\-~^+])\1+\s*$")
_ASCIIDOC_UNDERLINE_LEVELS: Dict[str, int] = {"=": 0, "-": 1, "~": 2, "^": 3, "+": 4}
_ASCIIDOC_NOT_A_TITLE: Pattern[str] = re.compile(r"^(\s|\[|\.|//|[*\-] |\d+\. )")

_MARKDOWN_HEADING: Pattern[str] = re.compile(r"^(#+)\s+(.*?)(?:\s+#+)?\s*$")
_MARKDOWN_FENCE: Pattern[str] = re.compile(r"^(`{3,}|~{3,})\s*([\w+-]*)")
_MARKDOWN_SETEXT: Pattern[str] = re.compile(r"^ {0,3}(=+|-+)\s*$")
_MARKDOWN_NOT_A_TITLE: Pattern[str] = re.compile(r"^\s*([*+\-] |\d+[.)] |>|\|)")


class _Accumulator:
    """Collects paragraph lines between headings and blocks."""

    def __init__(self) -> None:
        self.nodes: List[Node] = []
        self._paragraph: List[str] = []

    @property
    def pending(self) -> List[str]:
        return self._paragraph

    def text(self, line: str) -> None:
        if line.strip():
            self._paragraph.append(line)
        else:
            self.flush()

    def add(self, node: Node) -> None:
        self.flush()
        self.nodes.append(node)

    def take(self) -> List[str]:
        """Remove and return the pending paragraph lines."""

        lines, self._paragraph = self._paragraph, []
        return lines

    def flush(self) -> None:
        if self._paragraph:
            self.nodes.append(Paragraph(self.take()))


def _asciidoc_underlined_title(out: _Accumulator, line: str, underline: str) -> Optional[Heading]:
    """Return the heading for a two-line title, or ``None`` if *line* does not start one."""

    if out.pending or not line.strip() or _ASCIIDOC_NOT_A_TITLE.match(line):
        return None
    if _ASCIIDOC_DELIMITER.match(line) or _ASCIIDOC_HEADING.match(line):
        return None
    marker = _ASCIIDOC_UNDERLINE.match(underline)
    if marker is None or abs(len(underline.rstrip()) - len(line.rstrip())) > 1:
        return None
    return Heading(level=_ASCIIDOC_UNDERLINE_LEVELS[marker.group(1)], text=line.strip())


def _parse_asciidoc(lines: List[str]) -> List[Node]:
    out = _Accumulator()
    index = 0
    while index < len(lines):
        line = lines[index]
        if index + 1 < len(lines):
            title = _asciidoc_underlined_title(out, line, lines[index + 1])
            if title is not None:
                out.add(title)
                index += 2
                continue
        delimiter = _ASCIIDOC_DELIMITER.match(line)
        if delimiter:
            marker = delimiter.group(1)
            end = _find_closing(lines, index + 1, lambda candidate: candidate.rstrip() == marker)
            if end is None:
                raise FragmentParseError(
                    f"Unterminated delimited block '{marker}' opened at line {index + 1}"
                )
            out.add(Listing(lines[index + 1 : end], delimiter=marker))
            index = end + 1
            continue
        heading = _ASCIIDOC_HEADING.match(line)
        if heading:
            out.add(Heading(level=len(heading.group(1)) - 1, text=heading.group(2)))
        else:
            out.text(line)
        index += 1
    out.flush()
    return out.nodes


def _markdown_setext_title(out: _Accumulator, line: str) -> Optional[Heading]:
    underline = _MARKDOWN_SETEXT.match(line)
    if underline is None or not out.pending or _MARKDOWN_NOT_A_TITLE.match(out.pending[0]):
        return None
    text = " ".join(part.strip() for part in out.take())
    return Heading(level=0 if underline.group(1)[0] == "=" else 1, text=text)


def _parse_markdown(lines: List[str]) -> List[Node]:
    out = _Accumulator()
    index = 0
    while index < len(lines):
        line = lines[index]
        fence = _MARKDOWN_FENCE.match(line)
        if fence:
            marker = fence.group(1)
            end = _find_closing(
                lines,
                index + 1,
                lambda candidate: candidate.strip().startswith(marker)
                and not candidate.strip().strip(marker[0]),
            )
            if end is None:
                raise FragmentParseError(
                    f"Unterminated code fence '{marker}' opened at line {index + 1}"
                )
            out.add(
                Listing(lines[index + 1 : end], language=fence.group(2) or None, delimiter=marker)
            )
            index = end + 1
            continue
        title = _markdown_setext_title(out, line)
        heading = _MARKDOWN_HEADING.match(line)
        if title is not None:
            out.add(title)
        elif heading:
            out.add(Heading(level=len(heading.group(1)) - 1, text=heading.group(2)))
        else:
            out.text(line)
        index += 1
    out.flush()
    return out.nodes


def _find_closing(
    lines: List[str], start: int, matches: Callable[[str], bool]
) -> Optional[int]:
    for position in range(start, len(lines)):
        if matches(lines[position]):
            return position
    return None


_PARSERS: Dict[MarkupLanguage, Callable[[List[str]], List[Node]]] = {
    MarkupLanguage.ASCIIDOC: _parse_asciidoc,
    MarkupLanguage.MARKDOWN: _parse_markdown,
}


def parse_fragment(text: str, dialect: MarkupLanguage, *, level_offset: int = 0) -> List[Node]:
    """Parse *text* written in *dialect* and shift its headings by *level_offset*.

    Headings are recognised in both their one-line form (``=``/``#`` markers)
    and their underlined two-line form. Raises :class:`FragmentParseError`
    when a block is left open or when a shifted heading would exceed the
    deepest level the dialect can express.
    """

    nodes = _PARSERS[dialect](text.splitlines())
    shift_headings(nodes, level_offset)
    for heading in iter_headings(nodes):
        if heading.level > dialect.max_level:
            raise FragmentParseError(
                f"Level offset {level_offset} puts title '{heading.text}' at level "
                f"{heading.level} > max level {dialect.max_level}"
            )
    return nodes


__all__ = ["parse_fragment"]
