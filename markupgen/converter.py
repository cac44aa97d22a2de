"""Entry point tying loading, extensions, section builders and rendering together."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from .documents import DocumentContext
from .documents.definitions import build_definitions
from .documents.overview import build_overview
from .documents.paths import build_paths
from .documents.security import build_security
from .extensions.context import GlobalContext
from .extensions.registry import ExtensionRegistry
from .markup import renderer
from .markup.tree import Document
from .swagger.loader import LoadedSource, load_location, parse_text
from .utils.config import MarkupConfig
from .utils.logging import conversion_scope

logger = logging.getLogger("markupgen.converter")

SECTIONS: Tuple[Tuple[str, Callable[[DocumentContext], Document]], ...] = (
    ("overview", build_overview),
    ("paths", build_paths),
    ("definitions", build_definitions),
    ("security", build_security),
)


class Converter:
    """Convert one API description.

    Construction is the initialisation phase: the global context is created
    and every extension receives it exactly once. Rendering methods may be
    called any number of times afterwards.
    """

    def __init__(
        self,
        source: LoadedSource,
        *,
        config: Optional[MarkupConfig] = None,
        registry: Optional[ExtensionRegistry] = None,
    ) -> None:
        self.config = config if config is not None else MarkupConfig.from_env()
        self.registry = (
            registry if registry is not None else ExtensionRegistry.from_specs(self.config.extensions)
        )
        self.global_context = GlobalContext(
            config=self.config, swagger=source.document, location=source.location
        )
        self.problems: List[Dict[str, object]] = []
        with conversion_scope(
            "markupgen.initialise", extra={"location": source.location or "<in-memory>"}
        ) as scope:
            self.registry.on_update_global_context(self.global_context)
        self.problems.extend(scope.problems)

    @classmethod
    def from_location(cls, source: str | Path, **kwargs: Any) -> "Converter":
        return cls(load_location(source), **kwargs)

    @classmethod
    def from_string(cls, text: str, **kwargs: Any) -> "Converter":
        return cls(LoadedSource(document=parse_text(text)), **kwargs)

    @classmethod
    def from_mapping(cls, document: Mapping[str, Any], **kwargs: Any) -> "Converter":
        return cls(LoadedSource(document=document), **kwargs)

    def documents(self) -> Dict[str, Document]:
        """Build every document, keyed by path relative to the output folder, without extension."""

        ctx = DocumentContext(global_context=self.global_context, registry=self.registry)
        documents: Dict[str, Document] = {}
        with conversion_scope(
            "markupgen.convert", extra={"markup_language": self.config.markup_language.value}
        ) as scope:
            for name, builder in SECTIONS:
                documents[name] = builder(ctx)
            documents.update(ctx.files)
        self.problems.extend(scope.problems)
        return documents

    def render(self) -> Dict[str, str]:
        dialect = self.config.markup_language
        return {
            name + dialect.default_extension: renderer.render(document, dialect)
            for name, document in self.documents().items()
        }

    def as_string(self) -> str:
        """Return the four section documents concatenated."""

        rendered = self.render()
        extension = self.config.markup_language.default_extension
        return "\n".join(rendered[name + extension] for name, _ in SECTIONS)

    def into_folder(self, directory: str | Path) -> List[Path]:
        output = Path(directory)
        written: List[Path] = []
        for relative, text in self.render().items():
            target = output / relative
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(text, encoding="utf-8")
            written.append(target)
        logger.info("Wrote %d documents to %s", len(written), output)
        return written


__all__ = ["Converter", "SECTIONS"]
