"""Render a document tree as AsciiDoc or Markdown text."""
from __future__ import annotations

from typing import Callable, Dict, Iterable, List, Sequence

from . import MarkupLanguage
from .tree import (
    BulletList,
    Document,
    Heading,
    Include,
    Listing,
    Node,
    Paragraph,
    Section,
    Table,
)


def _escape_cell(value: str) -> str:
    text = " ".join(str(value).split())
    return text.replace("|", "\\|")


def _heading(node: Heading, dialect: MarkupLanguage) -> List[str]:
    lines: List[str] = []
    if node.anchor and dialect is MarkupLanguage.ASCIIDOC:
        lines.append(f"[[{node.anchor}]]")
    lines.append(f"{dialect.heading_marker * (node.level + 1)} {node.text}")
    return lines


def _is_fence(delimiter: str) -> bool:
    return delimiter[0] in "`~"


def _listing(node: Listing, dialect: MarkupLanguage) -> List[str]:
    # A delimiter is only kept verbatim in the dialect it was written in.
    if node.delimiter and _is_fence(node.delimiter) == (dialect is MarkupLanguage.MARKDOWN):
        opening = node.delimiter + (node.language or "") if _is_fence(node.delimiter) else node.delimiter
        return [opening, *node.lines, node.delimiter]
    if dialect is MarkupLanguage.ASCIIDOC:
        header = [f"[source,{node.language}]"] if node.language else []
        return [*header, "----", *node.lines, "----"]
    return [f"```{node.language or ''}", *node.lines, "```"]


def _table(node: Table, dialect: MarkupLanguage) -> List[str]:
    lines: List[str] = []
    if dialect is MarkupLanguage.ASCIIDOC:
        if node.title:
            lines.append(f".{node.title}")
        lines.append(f'[options="header", cols="{",".join("1" for _ in node.header)}"]')
        lines.append("|===")
        lines.append("|" + "|".join(_escape_cell(cell) for cell in node.header))
        for row in node.rows:
            lines.append("|" + "|".join(_escape_cell(cell) for cell in row))
        lines.append("|===")
        return lines
    if node.title:
        lines.append(f"**{node.title}**")
        lines.append("")
    lines.append("|" + "|".join(_escape_cell(cell) for cell in node.header) + "|")
    lines.append("|" + "|".join("---" for _ in node.header) + "|")
    for row in node.rows:
        lines.append("|" + "|".join(_escape_cell(cell) for cell in row) + "|")
    return lines


def _include(node: Include, dialect: MarkupLanguage) -> List[str]:
    if dialect is MarkupLanguage.ASCIIDOC:
        return [f"include::{node.target}[]"]
    return [f"[{node.title}]({node.target})"]


def _blocks(nodes: Iterable[Node], dialect: MarkupLanguage) -> List[List[str]]:
    blocks: List[List[str]] = []
    for node in nodes:
        if isinstance(node, Section):
            blocks.append(_heading(node.heading, dialect))
            blocks.extend(_blocks(node.children, dialect))
        else:
            blocks.append(_RENDERERS[type(node)](node, dialect))
    return blocks


_RENDERERS: Dict[type, Callable[..., List[str]]] = {
    Heading: _heading,
    Paragraph: lambda node, dialect: list(node.lines),
    Listing: _listing,
    BulletList: lambda node, dialect: [f"* {item}" for item in node.items],
    Table: _table,
    Include: _include,
}


def render(document: Document | Sequence[Node], dialect: MarkupLanguage) -> str:
    """Return *document* as text, one blank line between blocks."""

    nodes = document.children if isinstance(document, Document) else document
    blocks = [block for block in _blocks(nodes, dialect) if block]
    text = "\n\n".join("\n".join(block) for block in blocks)
    return text + "\n" if text else ""


__all__ = ["render"]
