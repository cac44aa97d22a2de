"""Paths document: operations listed as-is or grouped by tag."""
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Tuple

from ..extensions import SectionKind
from ..markup.tree import BulletList, Document, Heading, Include, Paragraph, Section, Table
from ..swagger import model
from ..utils.config import GroupBy
from ..utils.errors import ConversionError, ErrorCode
from ..utils.io import normalize_name
from . import DocumentContext


def _parameter_rows(operation: model.Operation, labels: Mapping[str, str]) -> List[Tuple[str, ...]]:
    rows: List[Tuple[str, ...]] = []
    for parameter in operation.spec.get("parameters") or ():
        if not isinstance(parameter, Mapping):
            continue
        if "$ref" in parameter:
            rows.append(("", model.ref_name(str(parameter["$ref"])), "", "", "", ""))
            continue
        schema = parameter.get("schema") or parameter
        rows.append(
            (
                str(parameter.get("in", "")).capitalize(),
                str(parameter.get("name", "")),
                str(parameter.get("description") or ""),
                "true" if parameter.get("required") else "false",
                model.type_name(schema),
                str(schema["default"]) if "default" in schema else "",
            )
        )
    body = operation.spec.get("requestBody")
    if isinstance(body, Mapping):
        for media in (body.get("content") or {}).values():
            schema = media.get("schema") if isinstance(media, Mapping) else None
            rows.append(
                (
                    labels["request_body"],
                    "body",
                    str(body.get("description") or ""),
                    "true" if body.get("required") else "false",
                    model.type_name(schema),
                    "",
                )
            )
            break
    return rows


def _response_rows(operation: model.Operation) -> List[Tuple[str, ...]]:
    rows: List[Tuple[str, ...]] = []
    responses = operation.spec.get("responses") or {}
    for status in sorted(responses, key=lambda code: (str(code) == "default", str(code))):
        response = responses[status] if isinstance(responses[status], Mapping) else {}
        schema = response.get("schema")
        if schema is None:
            for media in (response.get("content") or {}).values():
                if isinstance(media, Mapping) and media.get("schema"):
                    schema = media["schema"]
                    break
        rows.append(
            (
                str(status),
                str(response.get("description") or ""),
                model.type_name(schema) or "No Content",
            )
        )
    return rows


def _operation(ctx: DocumentContext, section: Section, operation: model.Operation) -> None:
    labels = ctx.labels
    level = section.level + 1
    section.add(Paragraph([f"`{operation.method.upper()} {operation.path}`"]))
    if operation.spec.get("description"):
        section.add(Heading(level, labels["description"]))
        section.add(Paragraph(str(operation.spec["description"]).splitlines()))

    parameters = _parameter_rows(operation, labels)
    if parameters:
        section.add(Heading(level, labels["parameters"]))
        section.add(
            Table(
                header=(
                    labels["type"],
                    labels["name"],
                    labels["description"],
                    labels["required"],
                    labels["schema"],
                    labels["default"],
                ),
                rows=parameters,
            )
        )

    responses = _response_rows(operation)
    if responses:
        section.add(Heading(level, labels["responses"]))
        section.add(
            Table(header=(labels["http_code"], labels["description"], labels["schema"]), rows=responses)
        )

    for key in ("consumes", "produces"):
        values = [str(value) for value in operation.spec.get(key) or ()]
        if values:
            section.add(Heading(level, labels[key]))
            section.add(BulletList([f"`{value}`" for value in values]))

    if operation.tags:
        section.add(Heading(level, labels["tags"]))
        section.add(BulletList(operation.tags))

    requirements = operation.spec.get("security") or ()
    schemes = [
        name
        for requirement in requirements
        if isinstance(requirement, Mapping)
        for name in requirement
    ]
    if schemes:
        section.add(Heading(level, labels["security"]))
        section.add(BulletList(schemes))


def _add_operation(ctx: DocumentContext, parent: Section, operation: model.Operation) -> None:
    container: Document | Section = parent
    if ctx.config.separated_operations:
        relative = f"operations/{normalize_name(operation.id)}"
        container = ctx.files.setdefault(relative, Document())
        parent.add(Include(target=ctx.file_name(relative), title=operation.title))
    with ctx.section(
        SectionKind.OPERATION,
        container,
        Heading(parent.level + 1, operation.title, anchor=normalize_name(operation.id)),
        entity=operation.id,
    ) as section:
        _operation(ctx, section, operation)


def group_by_tags(swagger: Mapping[str, Any]) -> Dict[str, List[model.Operation]]:
    """Return operations keyed by tag, declared tags first.

    Raises :class:`ConversionError` when an operation carries no tag.
    """

    groups: Dict[str, List[model.Operation]] = {
        str(tag["name"]): []
        for tag in swagger.get("tags") or ()
        if isinstance(tag, Mapping) and tag.get("name")
    }
    for operation in model.operations(swagger):
        if not operation.tags:
            raise ConversionError(
                ErrorCode.MISSING_TAGS,
                f"Can't group by tags: operation '{operation.id}' has no tags",
            )
        for tag in operation.tags:
            groups.setdefault(tag, []).append(operation)
    return {tag: operations for tag, operations in groups.items() if operations}


def build_paths(ctx: DocumentContext) -> Document:
    labels = ctx.labels
    swagger = ctx.swagger
    document = Document()
    if ctx.config.paths_group_by is GroupBy.TAGS:
        groups = group_by_tags(swagger)
    else:
        groups = {"": list(model.operations(swagger))}
    descriptions = {
        str(tag.get("name")): str(tag.get("description") or "")
        for tag in swagger.get("tags") or ()
        if isinstance(tag, Mapping)
    }

    with ctx.section(SectionKind.PATHS, document, Heading(1, labels["paths"], anchor="_paths")) as root:
        for tag, operations in groups.items():
            parent = root
            if tag:
                parent = Section(Heading(root.level + 1, tag, anchor=normalize_name(tag)))
                root.add(parent)
                if descriptions.get(tag):
                    parent.add(Paragraph(descriptions[tag].splitlines()))
            for operation in operations:
                _add_operation(ctx, parent, operation)

    return document


__all__ = ["build_paths", "group_by_tags"]
