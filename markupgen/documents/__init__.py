"""Section builders and the anchor protocol they share."""
from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Dict, Iterator, Mapping, Optional

from ..extensions import Anchor, Position, SectionKind
from ..extensions.context import GlobalContext, LocalContext
from ..extensions.registry import ExtensionRegistry
from ..markup.tree import Document, Heading, Section
from ..utils.config import MarkupConfig
from .labels import labels_for


@dataclass(slots=True)
class DocumentContext:
    """Everything a section builder needs: model, config, labels and extensions."""

    global_context: GlobalContext
    registry: ExtensionRegistry
    files: Dict[str, Document] = field(default_factory=dict)

    @property
    def config(self) -> MarkupConfig:
        return self.global_context.config

    @property
    def swagger(self) -> Mapping[str, object]:
        return self.global_context.swagger

    @property
    def labels(self) -> Mapping[str, str]:
        return labels_for(self.config.output_language)

    def file_name(self, name: str) -> str:
        return name + self.config.markup_language.default_extension

    def apply(
        self,
        kind: SectionKind,
        anchor: Anchor,
        section: Section,
        container: Document | Section,
        entity: Optional[str] = None,
    ) -> None:
        context = LocalContext(
            global_context=self.global_context,
            position=Position(kind, anchor),
            section=section,
            container=container,
            entity=entity,
        )
        self.registry.apply(context)

    @contextmanager
    def section(
        self,
        kind: SectionKind,
        container: Document | Section,
        heading: Heading,
        *,
        entity: Optional[str] = None,
    ) -> Iterator[Section]:
        """Add a section to *container*, running extensions at its four anchors."""

        section = Section(heading)
        self.apply(kind, Anchor.BEFORE, section, container, entity)
        container.add(section)
        self.apply(kind, Anchor.BEGIN, section, container, entity)
        yield section
        self.apply(kind, Anchor.END, section, container, entity)
        self.apply(kind, Anchor.AFTER, section, container, entity)


__all__ = ["DocumentContext"]
