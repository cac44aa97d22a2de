"""Unit tests for the dynamic content extensions and fragment merging."""
from __future__ import annotations

import logging

from markupgen.extensions import Anchor, Position, SectionKind
from markupgen.extensions.context import GlobalContext, LocalContext
from markupgen.extensions.dynamic import (
    DynamicDefinitionsContentExtension,
    DynamicOverviewContentExtension,
)
from markupgen.extensions.registry import ExtensionRegistry
from markupgen.markup import MarkupLanguage
from markupgen.markup.renderer import render
from markupgen.markup.tree import Document, Heading, Paragraph, Section
from markupgen.utils.config import MarkupConfig
from markupgen.utils.logging import conversion_scope

DYNAMIC_LOGGER = "markupgen.extensions.dynamic"


def _global(location=None):
    return GlobalContext(config=MarkupConfig(), swagger={}, location=location)


def _local(global_context, section_kind, anchor, section, container, entity=None):
    return LocalContext(
        global_context=global_context,
        position=Position(section_kind, anchor),
        section=section,
        container=container,
        entity=entity,
    )


def _write(directory, name, text):
    directory.mkdir(parents=True, exist_ok=True)
    (directory / name).write_text(text, encoding="utf-8")


def test_begin_fragments_inserted_first_in_filename_order(tmp_path):
    _write(tmp_path, "dynoview-doc-begin-02-notes.adoc", "= Notes\nSecond fragment.\n")
    _write(tmp_path, "dynoview-doc-begin-01-intro.adoc", "= Intro\nFirst fragment.\n")
    document = Document()
    section = Section(Heading(1, "Overview"), [Paragraph(["Existing"])])
    document.add(section)

    extension = DynamicOverviewContentExtension(tmp_path)
    extension.apply(_local(_global(), SectionKind.OVERVIEW, Anchor.BEGIN, section, document))

    assert section.children == [
        Heading(1, "Intro"),
        Paragraph(["First fragment."]),
        Heading(1, "Notes"),
        Paragraph(["Second fragment."]),
        Paragraph(["Existing"]),
    ]


def test_successive_begin_merges_keep_order(tmp_path):
    first, second = tmp_path / "a", tmp_path / "b"
    _write(first, "dynoview-doc-begin-x.adoc", "From A")
    _write(second, "dynoview-doc-begin-x.adoc", "From B")
    document = Document()
    section = Section(Heading(1, "Overview"))
    document.add(section)
    context = _local(_global(), SectionKind.OVERVIEW, Anchor.BEGIN, section, document)

    registry = ExtensionRegistry(
        [DynamicOverviewContentExtension(first), DynamicOverviewContentExtension(second)]
    )
    registry.apply(context)
    section.add(Paragraph(["Body"]))

    assert section.children == [Paragraph(["From A"]), Paragraph(["From B"]), Paragraph(["Body"])]


def test_before_and_after_surround_section(tmp_path):
    _write(tmp_path, "dynoview-doc-before-banner.adoc", "= Before")
    _write(tmp_path, "dynoview-doc-after-footer.asciidoc", "After\n=====")
    _write(tmp_path, "dynoview-doc-end-closing.adoc", "== Closing")
    global_context = _global()
    extension = DynamicOverviewContentExtension(tmp_path)
    document = Document()
    section = Section(Heading(1, "Overview"))

    extension.apply(_local(global_context, SectionKind.OVERVIEW, Anchor.BEFORE, section, document))
    document.add(section)
    section.add(Paragraph(["Body"]))
    extension.apply(_local(global_context, SectionKind.OVERVIEW, Anchor.END, section, document))
    extension.apply(_local(global_context, SectionKind.OVERVIEW, Anchor.AFTER, section, document))

    assert document.children == [Heading(0, "Before"), section, Heading(0, "After")]
    assert section.children == [Paragraph(["Body"]), Heading(2, "Closing")]


def test_empty_directory_leaves_tree_unchanged(tmp_path):
    extension = DynamicOverviewContentExtension(tmp_path)
    document = Document()
    section = Section(Heading(1, "Overview"), [Paragraph(["Body"])])
    document.add(section)
    for anchor in Anchor:
        extension.apply(_local(_global(), SectionKind.OVERVIEW, anchor, section, document))
        extension.apply(_local(_global(), SectionKind.OVERVIEW, anchor, section, document))
    assert document.children == [section]
    assert section.children == [Paragraph(["Body"])]


def test_broken_fragment_skipped_with_one_warning(tmp_path, caplog):
    _write(tmp_path, "dynoview-doc-end-01-a.adoc", "first")
    _write(tmp_path, "dynoview-doc-end-02-b.adoc", "----\nnever closed")
    _write(tmp_path, "dynoview-doc-end-03-c.adoc", "third")
    _write(tmp_path, "dynoview-doc-end-04-d.adoc", "fourth")
    caplog.set_level(logging.WARNING, logger=DYNAMIC_LOGGER)
    document = Document()
    section = Section(Heading(1, "Overview"))
    document.add(section)

    with conversion_scope("test") as scope:
        DynamicOverviewContentExtension(tmp_path).apply(
            _local(_global(), SectionKind.OVERVIEW, Anchor.END, section, document)
        )

    assert section.children == [Paragraph(["first"]), Paragraph(["third"]), Paragraph(["fourth"])]
    warnings = [record for record in caplog.records if record.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert "dynoview-doc-end-02-b.adoc" in warnings[0].getMessage()
    assert scope.counters["fragments.merged"] == 3
    assert scope.counters["fragments.skipped"] == 1
    assert [problem["code"] for problem in scope.problems] == ["FRAGMENT_PARSE_FAILED"]
    assert scope.problems[0]["fatal"] is False


def test_remote_location_makes_extension_inert(tmp_path, monkeypatch, caplog):
    monkeypatch.chdir(tmp_path)
    _write(tmp_path, "dynoview-doc-begin-intro.adoc", "= Intro")
    caplog.set_level(logging.WARNING, logger=DYNAMIC_LOGGER)
    global_context = _global("https://example.com/api/swagger.json")
    extension = DynamicOverviewContentExtension()
    registry = ExtensionRegistry([extension])
    document = Document()
    section = Section(Heading(1, "Overview"))
    document.add(section)

    registry.on_update_global_context(global_context)
    registry.on_update_global_context(global_context)
    for anchor in Anchor:
        registry.apply(_local(global_context, SectionKind.OVERVIEW, anchor, section, document))

    assert extension.content_path is None
    assert document.children == [section]
    assert section.children == []
    warnings = [record for record in caplog.records if record.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert "https://example.com/api/swagger.json" in warnings[0].getMessage()


def test_content_path_derived_from_local_location(tmp_path):
    extension = DynamicOverviewContentExtension()
    extension.on_update_global_context(_global((tmp_path / "swagger.yaml").as_uri()))
    assert extension.content_path == tmp_path


def test_explicit_content_path_wins(tmp_path):
    extension = DynamicOverviewContentExtension(tmp_path / "fragments")
    extension.on_update_global_context(_global((tmp_path / "swagger.yaml").as_uri()))
    assert extension.content_path == tmp_path / "fragments"


def test_entity_fragments_read_from_entity_directory(tmp_path):
    _write(tmp_path / "pet", "dyndef-def-begin-intro.adoc", "= Pet notes")
    _write(tmp_path, "dyndef-def-begin-ignored.adoc", "= Not for entities")
    extension = DynamicDefinitionsContentExtension(tmp_path)
    root = Section(Heading(1, "Definitions"))
    section = Section(Heading(2, "Pet"))
    root.add(section)

    extension.apply(
        _local(_global(), SectionKind.DEFINITION, Anchor.BEGIN, section, root, entity="Pet")
    )
    extension.apply(_local(_global(), SectionKind.DEFINITION, Anchor.END, section, root))

    assert section.children == [Heading(2, "Pet notes")]


def test_only_output_dialect_fragments_merged(tmp_path):
    _write(tmp_path, "dynoview-doc-begin-01-usage.adoc", "== Usage\n----\ncurl x\n----")
    _write(tmp_path, "dynoview-doc-begin-02-notes.md", "Intro\n=====\n\nbody")
    markdown = GlobalContext(
        config=MarkupConfig(markup_language=MarkupLanguage.MARKDOWN), swagger={}
    )
    document = Document()
    section = Section(Heading(1, "Overview"))
    document.add(section)

    DynamicOverviewContentExtension(tmp_path).apply(
        _local(markdown, SectionKind.OVERVIEW, Anchor.BEGIN, section, document)
    )

    assert section.children == [Heading(1, "Intro"), Paragraph(["body"])]
    rendered = render(document, MarkupLanguage.MARKDOWN)
    assert rendered == "## Overview\n\n## Intro\n\nbody\n"
    assert "----" not in rendered


def test_underlined_asciidoc_title_merged_not_skipped(tmp_path, caplog):
    _write(tmp_path, "dynoview-doc-end-notes.adoc", "Intro\n=====\n\nbody")
    caplog.set_level(logging.WARNING, logger=DYNAMIC_LOGGER)
    document = Document()
    section = Section(Heading(1, "Overview"))
    document.add(section)

    DynamicOverviewContentExtension(tmp_path).apply(
        _local(_global(), SectionKind.OVERVIEW, Anchor.END, section, document)
    )

    assert section.children == [Heading(1, "Intro"), Paragraph(["body"])]
    assert not [record for record in caplog.records if record.levelno == logging.WARNING]
