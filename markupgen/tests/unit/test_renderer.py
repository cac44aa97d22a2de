"""Unit tests for rendering document trees."""
from __future__ import annotations

from markupgen.markup import MarkupLanguage
from markupgen.markup.renderer import render
from markupgen.markup.tree import (
    BulletList,
    Document,
    Heading,
    Include,
    Listing,
    Paragraph,
    Section,
    Table,
)


def _document():
    return Document(
        [
            Heading(0, "Title"),
            Section(
                Heading(1, "Section", anchor="_section"),
                [
                    Paragraph(["Some text"]),
                    BulletList(["one", "two"]),
                    Table(header=("Name", "Type"), rows=[("id", "a|b")]),
                ],
            ),
        ]
    )


def test_render_asciidoc():
    assert render(_document(), MarkupLanguage.ASCIIDOC) == (
        "= Title\n"
        "\n"
        "[[_section]]\n"
        "== Section\n"
        "\n"
        "Some text\n"
        "\n"
        "* one\n"
        "* two\n"
        "\n"
        '[options="header", cols="1,1"]\n'
        "|===\n"
        "|Name|Type\n"
        "|id|a\\|b\n"
        "|===\n"
    )


def test_render_markdown():
    assert render(_document(), MarkupLanguage.MARKDOWN) == (
        "# Title\n"
        "\n"
        "## Section\n"
        "\n"
        "Some text\n"
        "\n"
        "* one\n"
        "* two\n"
        "\n"
        "|Name|Type|\n"
        "|---|---|\n"
        "|id|a\\|b|\n"
    )


def test_listings_keep_delimiters_of_their_own_dialect():
    nodes = [
        Listing(["= raw"], delimiter="...."),
        Listing(["x: 1"], language="yaml"),
    ]
    assert render(nodes, MarkupLanguage.ASCIIDOC) == (
        "....\n= raw\n....\n\n[source,yaml]\n----\nx: 1\n----\n"
    )
    fenced = Listing(["print()"], language="python", delimiter="~~~~")
    assert render([fenced], MarkupLanguage.MARKDOWN) == "~~~~python\nprint()\n~~~~\n"


def test_listings_from_another_dialect_use_output_syntax():
    asciidoc_listing = Listing(["curl x"], delimiter="----")
    markdown_listing = Listing(["print()"], language="python", delimiter="```")

    markdown = render([Heading(1, "Usage"), asciidoc_listing], MarkupLanguage.MARKDOWN)
    assert markdown == "## Usage\n\n```\ncurl x\n```\n"
    assert "----" not in markdown

    asciidoc = render([markdown_listing], MarkupLanguage.ASCIIDOC)
    assert asciidoc == "[source,python]\n----\nprint()\n----\n"


def test_includes():
    include = Include(target="definitions/pet.adoc", title="Pet")
    assert render([include], MarkupLanguage.ASCIIDOC) == "include::definitions/pet.adoc[]\n"
    include = Include(target="definitions/pet.md", title="Pet")
    assert render([include], MarkupLanguage.MARKDOWN) == "[Pet](definitions/pet.md)\n"


def test_empty_document():
    assert render(Document(), MarkupLanguage.ASCIIDOC) == ""
