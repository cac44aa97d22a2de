"""Overview document: API title, description, version, contact, URI scheme and tags."""
from __future__ import annotations

from typing import Any, List, Mapping

from ..extensions import SectionKind
from ..markup.tree import BulletList, Document, Heading, Paragraph, Section
from ..swagger import model
from . import DocumentContext


def _uri_scheme(swagger: Mapping[str, Any], labels: Mapping[str, str]) -> List[str]:
    items: List[str] = []
    if swagger.get("host"):
        items.append(f"{labels['host']} : {swagger['host']}")
    if swagger.get("basePath"):
        items.append(f"{labels['base_path']} : {swagger['basePath']}")
    if swagger.get("schemes"):
        items.append(f"{labels['schemes']} : {', '.join(str(s).upper() for s in swagger['schemes'])}")
    for server in swagger.get("servers") or ():
        if isinstance(server, Mapping) and server.get("url"):
            items.append(f"{labels['servers']} : {server['url']}")
    return items


def _subsection(section: Section, title: str, *content: Any) -> None:
    section.add(Heading(section.level + 1, title))
    for node in content:
        section.add(node)


def build_overview(ctx: DocumentContext) -> Document:
    swagger = ctx.swagger
    labels = ctx.labels
    info = model.info(swagger)
    document = Document()
    document.add(Heading(0, str(info.get("title") or labels["overview"])))

    with ctx.section(
        SectionKind.OVERVIEW, document, Heading(1, labels["overview"], anchor="_overview")
    ) as section:
        if info.get("description"):
            section.add(Paragraph(str(info["description"]).splitlines()))

        if info.get("version"):
            _subsection(
                section,
                labels["current_version"],
                Paragraph([f"{labels['version']} : {info['version']}"]),
            )

        contact = info.get("contact") or {}
        contact_lines = []
        if contact.get("name"):
            contact_lines.append(f"{labels['contact_name']} : {contact['name']}")
        if contact.get("email"):
            contact_lines.append(f"{labels['contact_email']} : {contact['email']}")
        if contact_lines:
            _subsection(section, labels["contact_information"], BulletList(contact_lines))

        license_info = info.get("license") or {}
        license_lines = []
        if license_info.get("name"):
            license_lines.append(f"{labels['license']} : {license_info['name']}")
        if license_info.get("url"):
            license_lines.append(f"{labels['license_url']} : {license_info['url']}")
        if info.get("termsOfService"):
            license_lines.append(f"{labels['terms_of_service']} : {info['termsOfService']}")
        if license_lines:
            _subsection(section, labels["license_information"], BulletList(license_lines))

        uri_scheme = _uri_scheme(swagger, labels)
        if uri_scheme:
            _subsection(section, labels["uri_scheme"], BulletList(uri_scheme))

        tags = [
            f"{tag['name']} : {tag['description']}" if tag.get("description") else str(tag["name"])
            for tag in swagger.get("tags") or ()
            if isinstance(tag, Mapping) and tag.get("name")
        ]
        if tags:
            _subsection(section, labels["tags"], BulletList(tags))

        for key in ("consumes", "produces"):
            values = [str(value) for value in swagger.get(key) or ()]
            if values:
                _subsection(section, labels[key], BulletList([f"`{value}`" for value in values]))

    return document


__all__ = ["build_overview"]
