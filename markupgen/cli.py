"""Command line entry point for markupgen."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from .converter import Converter
from .extensions import extension_names
from .markup import MarkupLanguage
from .utils.config import ExtensionSpec, GroupBy, Language, MarkupConfig
from .utils.errors import MarkupgenError
from .utils.logging import configure_root

logger = logging.getLogger("markupgen.cli")


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser; unset options fall back to ``MARKUPGEN_*`` defaults."""
    parser = argparse.ArgumentParser(
        prog="markupgen",
        description="Convert an OpenAPI/Swagger description into AsciiDoc or Markdown",
    )
    parser.add_argument("source", help="Path or http(s) URL of the API description")
    parser.add_argument(
        "-o",
        "--output-dir",
        type=Path,
        default=None,
        help="Write one file per document into this directory (default: print to stdout)",
    )
    parser.add_argument(
        "--markup-language",
        choices=[language.value for language in MarkupLanguage],
        default=None,
    )
    parser.add_argument(
        "--group-by", choices=[group.value for group in GroupBy], default=None
    )
    parser.add_argument(
        "--output-language", choices=[language.value for language in Language], default=None
    )
    parser.add_argument("--separated-definitions", action="store_true", default=None)
    parser.add_argument("--separated-operations", action="store_true", default=None)
    parser.add_argument(
        "--extensions-dir",
        type=Path,
        default=None,
        help="Enable every dynamic content extension reading fragments from this directory",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser


def config_from_args(args: argparse.Namespace) -> MarkupConfig:
    config = MarkupConfig.from_env()
    changes = {}
    if args.markup_language:
        changes["markup_language"] = MarkupLanguage(args.markup_language)
    if args.group_by:
        changes["paths_group_by"] = GroupBy(args.group_by)
    if args.output_language:
        changes["output_language"] = Language(args.output_language)
    if args.separated_definitions:
        changes["separated_definitions"] = True
    if args.separated_operations:
        changes["separated_operations"] = True
    if args.extensions_dir is not None:
        directory = args.extensions_dir.expanduser()
        changes["extensions"] = tuple(
            ExtensionSpec(name=name, content_path=directory) for name in extension_names()
        )
    return config.with_options(**changes)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_root(logging.DEBUG if args.debug else logging.INFO)

    try:
        converter = Converter.from_location(args.source, config=config_from_args(args))
        if args.output_dir is None:
            sys.stdout.write(converter.as_string())
        else:
            written: List[Path] = converter.into_folder(args.output_dir)
            for path in written:
                logger.debug("Wrote %s", path)
    except MarkupgenError as exc:
        sys.stderr.write(json.dumps(exc.to_dict(), ensure_ascii=False) + "\n")
        return 1

    for problem in converter.problems:
        logger.warning("%s: %s", problem["code"], problem["message"])
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())


__all__ = ["build_parser", "config_from_args", "main"]
