"""End-to-end conversion tests over the petstore description."""
from __future__ import annotations

import json

import pytest

from markupgen.converter import Converter
from markupgen.markup import MarkupLanguage
from markupgen.utils.config import ExtensionSpec, GroupBy, Language, MarkupConfig
from markupgen.utils.errors import ConversionError, ErrorCode

ALL_DYNAMIC = (
    ExtensionSpec("dynamic-overview"),
    ExtensionSpec("dynamic-definitions"),
    ExtensionSpec("dynamic-operations"),
    ExtensionSpec("dynamic-security"),
)


def _read(path):
    return path.read_text(encoding="utf-8")


def test_into_folder_writes_four_documents(tmp_path, petstore_path):
    converter = Converter.from_location(petstore_path, config=MarkupConfig())
    written = converter.into_folder(tmp_path / "out")

    names = sorted(path.name for path in written)
    assert names == ["definitions.adoc", "overview.adoc", "paths.adoc", "security.adoc"]
    overview = _read(tmp_path / "out" / "overview.adoc")
    assert overview.startswith("= Petstore\n")
    assert "[[_overview]]\n== Overview" in overview
    assert "URI scheme" in overview
    assert "* Host : petstore.example.com" in overview
    paths = _read(tmp_path / "out" / "paths.adoc")
    assert "=== List pets" in paths
    assert "==== Parameters" in paths
    definitions = _read(tmp_path / "out" / "definitions.adoc")
    assert definitions.index("=== Category") < definitions.index("=== Order")
    assert definitions.index("=== Order") < definitions.index("=== Pet")
    assert "|name|Required|Name of the pet|string|" in definitions
    security = _read(tmp_path / "out" / "security.adoc")
    assert "=== petstore_auth" in security
    assert "|write:pets|modify pets in your account" in security


def test_markdown_output(tmp_path, petstore_path):
    config = MarkupConfig(markup_language=MarkupLanguage.MARKDOWN)
    Converter.from_location(petstore_path, config=config).into_folder(tmp_path)

    assert sorted(path.name for path in tmp_path.iterdir()) == [
        "definitions.md",
        "overview.md",
        "paths.md",
        "security.md",
    ]
    overview = _read(tmp_path / "overview.md")
    assert overview.startswith("# Petstore\n")
    assert "\n## Overview\n" in overview
    assert "[[" not in overview


def test_group_by_tags(petstore_path):
    config = MarkupConfig(paths_group_by=GroupBy.TAGS)
    rendered = Converter.from_location(petstore_path, config=config).render()
    paths = rendered["paths.adoc"]
    assert "=== pet" in paths
    assert "Everything about your pets" in paths
    assert paths.index("=== pet") < paths.index("==== List pets")
    assert paths.index("==== Add a pet") < paths.index("=== store")


def test_group_by_tags_requires_tags():
    swagger = {
        "swagger": "2.0",
        "info": {"title": "Untagged", "version": "1"},
        "paths": {"/ping": {"get": {"operationId": "ping", "responses": {}}}},
    }
    converter = Converter.from_mapping(swagger, config=MarkupConfig(paths_group_by=GroupBy.TAGS))
    with pytest.raises(ConversionError) as excinfo:
        converter.documents()
    assert excinfo.value.code is ErrorCode.MISSING_TAGS
    assert "ping" in str(excinfo.value)


def test_separated_definitions_and_operations(tmp_path, petstore_path):
    config = MarkupConfig(separated_definitions=True, separated_operations=True)
    Converter.from_location(petstore_path, config=config).into_folder(tmp_path)

    assert (tmp_path / "definitions" / "pet.adoc").is_file()
    assert (tmp_path / "operations" / "listpets.adoc").is_file()
    assert (tmp_path / "operations" / "getorderbyid.adoc").is_file()
    definitions = _read(tmp_path / "definitions.adoc")
    assert "include::definitions/pet.adoc[]" in definitions
    assert "=== Pet" not in definitions
    assert "=== Pet" in _read(tmp_path / "definitions" / "pet.adoc")
    assert "include::operations/listpets.adoc[]" in _read(tmp_path / "paths.adoc")


def test_russian_labels(petstore_path):
    config = MarkupConfig(output_language=Language.RU)
    rendered = Converter.from_location(petstore_path, config=config).render()
    assert "== Определения" in rendered["definitions.adoc"]
    assert "== Обзор" in rendered["overview.adoc"]


def test_uri_scheme_only_when_declared():
    swagger = {"swagger": "2.0", "info": {"title": "Bare", "version": "1"}, "paths": {}}
    overview = Converter.from_mapping(swagger, config=MarkupConfig()).render()["overview.adoc"]
    assert "URI scheme" not in overview


def test_from_string_accepts_json():
    text = json.dumps({"openapi": "3.0.0", "info": {"title": "Json API", "version": "2"}})
    output = Converter.from_string(text, config=MarkupConfig()).as_string()
    assert output.startswith("= Json API\n")
    assert "== Paths" in output
    assert "== Security" in output


def test_extension_content_merged_into_documents(petstore_copy):
    content = petstore_copy.parent
    (content / "dynoview-doc-before-banner.adoc").write_text("= Banner\n", encoding="utf-8")
    (content / "dynoview-doc-begin-intro.adoc").write_text(
        "Welcome to the petstore.\n", encoding="utf-8"
    )
    (content / "listpets").mkdir()
    (content / "listpets" / "dynops-op-end-notes.adoc").write_text(
        "= Notes\nPaging is cursor based.\n", encoding="utf-8"
    )
    (content / "pet").mkdir()
    (content / "pet" / "dyndef-def-begin-intro.adoc").write_text(
        "Pets are the heart of the store.\n", encoding="utf-8"
    )
    (content / "dynsec-doc-end-footer.adoc").write_text("Rotate keys yearly.\n", encoding="utf-8")

    converter = Converter.from_location(petstore_copy, config=MarkupConfig(extensions=ALL_DYNAMIC))
    rendered = converter.render()

    overview = rendered["overview.adoc"]
    assert overview.index("= Banner\n") < overview.index("== Overview")
    assert overview.index("== Overview") < overview.index("Welcome to the petstore.")
    assert overview.index("Welcome to the petstore.") < overview.index("A sample pet store.")

    paths = rendered["paths.adoc"]
    assert "=== Notes" in paths
    assert paths.index("=== List pets") < paths.index("Paging is cursor based.")
    assert paths.index("Paging is cursor based.") < paths.index("=== Add a pet")

    definitions = rendered["definitions.adoc"]
    intro = definitions.index("Pets are the heart of the store.")
    assert definitions.index("=== Pet") < intro < definitions.index("|id|", intro)

    assert rendered["security.adoc"].rstrip().endswith("Rotate keys yearly.")
    assert converter.problems == []


def test_inert_extensions_reported_for_in_memory_sources():
    swagger = {"swagger": "2.0", "info": {"title": "Memory", "version": "1"}, "paths": {}}
    converter = Converter.from_mapping(
        swagger, config=MarkupConfig(extensions=(ExtensionSpec("dynamic-overview"),))
    )
    assert [problem["code"] for problem in converter.problems] == ["EXTENSION_INERT"]
    assert converter.render()["overview.adoc"].startswith("= Memory\n")


def test_markdown_output_merges_markdown_fragments_only(petstore_copy):
    content = petstore_copy.parent
    (content / "dynoview-doc-begin-01.adoc").write_text(
        "== Usage\n----\ncurl x\n----\n", encoding="utf-8"
    )
    (content / "dynoview-doc-begin-02.md").write_text(
        "Usage\n-----\n\n```sh\ncurl https://petstore.example.com/v2/pets\n```\n",
        encoding="utf-8",
    )
    config = MarkupConfig(
        markup_language=MarkupLanguage.MARKDOWN, extensions=(ExtensionSpec("dynamic-overview"),)
    )

    overview = Converter.from_location(petstore_copy, config=config).render()["overview.md"]

    assert "----" not in overview
    assert "curl x" not in overview
    expected = "## Overview\n\n### Usage\n\n```sh\ncurl https://petstore.example.com/v2/pets\n```"
    assert expected in overview
