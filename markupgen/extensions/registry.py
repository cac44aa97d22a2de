"""Ordered, kind-grouped collection of extensions."""
from __future__ import annotations

import logging
from typing import Dict, Iterable, Iterator, List, Tuple

from ..utils.config import ExtensionSpec
from ..utils.logging import increment_counter
from . import ContentExtension, ExtensionKind, load_extension
from .context import GlobalContext, LocalContext

logger = logging.getLogger("markupgen.extensions.registry")


class ExtensionRegistry:
    """Extensions grouped by kind, each group kept in registration order."""

    def __init__(self, extensions: Iterable[ContentExtension] = ()) -> None:
        self._ordered: List[ContentExtension] = []
        self._by_kind: Dict[ExtensionKind, List[ContentExtension]] = {
            kind: [] for kind in ExtensionKind
        }
        for extension in extensions:
            self.register(extension)

    @classmethod
    def from_specs(cls, specs: Iterable[ExtensionSpec]) -> "ExtensionRegistry":
        return cls(load_extension(spec.name, spec.content_path) for spec in specs)

    def register(self, extension: ContentExtension) -> "ExtensionRegistry":
        kind = getattr(extension, "kind", None)
        if not isinstance(kind, ExtensionKind):
            raise TypeError(f"{type(extension).__name__} does not declare an extension kind")
        self._ordered.append(extension)
        self._by_kind[kind].append(extension)
        logger.debug(
            "extension.registered",
            extra={"extension": type(extension).__name__, "kind": kind.value},
        )
        return self

    def extensions(self, kind: ExtensionKind) -> Tuple[ContentExtension, ...]:
        return tuple(self._by_kind[kind])

    def __iter__(self) -> Iterator[ContentExtension]:
        return iter(tuple(self._ordered))

    def __len__(self) -> int:
        return len(self._ordered)

    def on_update_global_context(self, global_context: GlobalContext) -> None:
        """Run the one-time initialisation hook of every extension."""

        for extension in self._ordered:
            extension.on_update_global_context(global_context)

    def apply(self, context: LocalContext) -> None:
        """Invoke every extension of the position's kind, in registration order."""

        for extension in self._by_kind[context.position.kind]:
            extension.apply(context)
            increment_counter("extensions.applied")


__all__ = ["ExtensionRegistry"]
