"""Definitions document: one section per schema with a property table."""
from __future__ import annotations

from typing import Any, List, Mapping, Tuple

from ..extensions import SectionKind
from ..markup.tree import Document, Heading, Include, Paragraph, Section, Table
from ..swagger import model
from ..utils.io import normalize_name
from . import DocumentContext


def _property_rows(
    schema: Mapping[str, Any],
    all_definitions: Mapping[str, Mapping[str, Any]],
    labels: Mapping[str, str],
) -> List[Tuple[str, ...]]:
    properties, required = model.flatten_properties(schema, all_definitions)
    rows: List[Tuple[str, ...]] = []
    for name, prop in properties.items():
        prop = prop if isinstance(prop, Mapping) else {}
        rows.append(
            (
                name,
                labels["required"] if name in required else labels["optional"],
                str(prop.get("description") or ""),
                model.type_name(prop),
                str(prop["default"]) if "default" in prop else "",
            )
        )
    return rows


def _definition(ctx: DocumentContext, section: Section, schema: Mapping[str, Any]) -> None:
    labels = ctx.labels
    if schema.get("description"):
        section.add(Paragraph(str(schema["description"]).splitlines()))
    rows = _property_rows(schema, model.definitions(ctx.swagger), labels)
    if rows:
        section.add(
            Table(
                header=(
                    labels["name"],
                    labels["required"],
                    labels["description"],
                    labels["schema"],
                    labels["default"],
                ),
                rows=rows,
            )
        )
    elif schema.get("type") or schema.get("$ref"):
        section.add(Paragraph([f"{labels['type']} : {model.type_name(schema)}"]))


def build_definitions(ctx: DocumentContext) -> Document:
    labels = ctx.labels
    definitions = model.definitions(ctx.swagger)
    names = sorted(definitions) if ctx.config.definitions_ordered else list(definitions)
    document = Document()

    with ctx.section(
        SectionKind.DEFINITIONS, document, Heading(1, labels["definitions"], anchor="_definitions")
    ) as root:
        for name in names:
            schema = definitions[name] if isinstance(definitions[name], Mapping) else {}
            container: Document | Section = root
            if ctx.config.separated_definitions:
                relative = f"definitions/{normalize_name(name)}"
                container = ctx.files.setdefault(relative, Document())
                root.add(Include(target=ctx.file_name(relative), title=name))
            with ctx.section(
                SectionKind.DEFINITION,
                container,
                Heading(root.level + 1, name, anchor=normalize_name(name)),
                entity=name,
            ) as section:
                _definition(ctx, section, schema)

    return document


__all__ = ["build_definitions"]
