"""Security document: one section per security scheme."""
from __future__ import annotations

from typing import Any, List, Mapping, Tuple

from ..extensions import SectionKind
from ..markup.tree import BulletList, Document, Heading, Paragraph, Section, Table
from ..swagger import model
from ..utils.io import normalize_name
from . import DocumentContext

_SCHEME_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("type", "type"),
    ("name", "name"),
    ("in", "in"),
    ("flow", "flow"),
    ("tokenUrl", "token_url"),
    ("authorizationUrl", "authorization_url"),
)


def _scopes(scheme: Mapping[str, Any]) -> Mapping[str, Any]:
    if isinstance(scheme.get("scopes"), Mapping):
        return scheme["scopes"]
    scopes: dict[str, Any] = {}
    for flow in (scheme.get("flows") or {}).values():
        if isinstance(flow, Mapping):
            scopes.update(flow.get("scopes") or {})
    return scopes


def _scheme(ctx: DocumentContext, section: Section, scheme: Mapping[str, Any]) -> None:
    labels = ctx.labels
    if scheme.get("description"):
        section.add(Paragraph(str(scheme["description"]).splitlines()))
    lines: List[str] = [
        f"{labels[label]} : {scheme[key]}" for key, label in _SCHEME_FIELDS if scheme.get(key)
    ]
    if lines:
        section.add(BulletList(lines))
    scopes = _scopes(scheme)
    if scopes:
        section.add(
            Table(
                header=(labels["name"], labels["description"]),
                rows=[(str(name), str(description)) for name, description in scopes.items()],
                title=labels["scopes"],
            )
        )


def build_security(ctx: DocumentContext) -> Document:
    labels = ctx.labels
    document = Document()

    with ctx.section(
        SectionKind.SECURITY, document, Heading(1, labels["security"], anchor="_securityscheme")
    ) as root:
        for name, scheme in model.security_schemes(ctx.swagger).items():
            with ctx.section(
                SectionKind.SECURITY_SCHEME,
                root,
                Heading(root.level + 1, name, anchor=normalize_name(name)),
                entity=name,
            ) as section:
                _scheme(ctx, section, scheme if isinstance(scheme, Mapping) else {})

    return document


__all__ = ["build_security"]
