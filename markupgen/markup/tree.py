"""Dialect-independent document tree shared by builders, fragments and renderers."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple, Union


@dataclass(slots=True)
class Heading:
    level: int
    text: str
    anchor: Optional[str] = None


@dataclass(slots=True)
class Paragraph:
    """Inline markup kept verbatim, one entry per source line."""

    lines: List[str]


@dataclass(slots=True)
class Listing:
    """Delimited block whose content is never reinterpreted."""

    lines: List[str]
    language: Optional[str] = None
    delimiter: Optional[str] = None


@dataclass(slots=True)
class BulletList:
    items: List[str]


@dataclass(slots=True)
class Table:
    header: Tuple[str, ...]
    rows: List[Tuple[str, ...]]
    title: Optional[str] = None


@dataclass(slots=True)
class Include:
    """Reference to a separately written document, relative to the parent file."""

    target: str
    title: str


@dataclass(slots=True)
class Section:
    heading: Heading
    children: List["Node"] = field(default_factory=list)
    _begin_cursor: int = field(default=0, init=False, repr=False, compare=False)

    @property
    def level(self) -> int:
        return self.heading.level

    def add(self, node: "Node") -> "Node":
        self.children.append(node)
        return node

    def insert_begin(self, nodes: Sequence["Node"]) -> None:
        """Insert *nodes* right after the title, after earlier begin content."""

        position = self._begin_cursor
        self.children[position:position] = list(nodes)
        self._begin_cursor = position + len(nodes)

    def extend_end(self, nodes: Sequence["Node"]) -> None:
        self.children.extend(nodes)


@dataclass(slots=True)
class Document:
    children: List["Node"] = field(default_factory=list)

    def add(self, node: "Node") -> "Node":
        self.children.append(node)
        return node


Node = Union[Heading, Paragraph, Listing, BulletList, Table, Include, Section]


def iter_headings(nodes: Iterable[Node]) -> Iterator[Heading]:
    """Yield every heading in *nodes*, descending into sections."""

    for node in nodes:
        if isinstance(node, Heading):
            yield node
        elif isinstance(node, Section):
            yield node.heading
            yield from iter_headings(node.children)


def shift_headings(nodes: Iterable[Node], offset: int) -> None:
    """Add *offset* to the depth of every heading in *nodes*, in place."""

    if offset == 0:
        return
    for heading in iter_headings(nodes):
        heading.level += offset


__all__ = [
    "BulletList",
    "Document",
    "Heading",
    "Include",
    "Listing",
    "Node",
    "Paragraph",
    "Section",
    "Table",
    "iter_headings",
    "shift_headings",
]
