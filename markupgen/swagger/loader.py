"""Load an OpenAPI/Swagger description from a path, URL or string."""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

import httpx
import yaml

from ..utils.config import HTTP_TIMEOUT
from ..utils.errors import SourceLoadError
from ..utils.io import as_location, is_remote, local_path

logger = logging.getLogger("markupgen.swagger.loader")


@dataclass(frozen=True, slots=True)
class LoadedSource:
    """A decoded API description and the location it was read from."""

    document: Mapping[str, Any]
    location: Optional[str] = None


def parse_text(text: str, *, source: str = "<string>") -> Mapping[str, Any]:
    """Decode JSON or YAML text into a mapping."""

    stripped = text.lstrip()
    try:
        if stripped.startswith("{"):
            document = json.loads(text)
        else:
            document = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise SourceLoadError(f"Cannot decode API description from {source}: {exc}") from exc
    if not isinstance(document, Mapping):
        raise SourceLoadError(f"API description from {source} is not an object")
    return document


def _fetch(location: str, *, client: Optional[httpx.Client] = None) -> str:
    owns_client = client is None
    client = client or httpx.Client(timeout=HTTP_TIMEOUT, follow_redirects=True)
    try:
        response = client.get(location)
        response.raise_for_status()
        return response.text
    except httpx.HTTPError as exc:
        raise SourceLoadError(f"Cannot fetch API description from {location}: {exc}") from exc
    finally:
        if owns_client:
            client.close()


def load_location(source: str | Path, *, client: Optional[httpx.Client] = None) -> LoadedSource:
    """Read the API description at *source* (path, ``file://`` or ``http(s)://``)."""

    location = as_location(source)
    if is_remote(location):
        logger.info("Fetching API description from %s", location)
        text = _fetch(location, client=client)
    else:
        path = local_path(location)
        if path is None:
            raise SourceLoadError(f"Unsupported location scheme: {location}")
        try:
            text = path.read_text(encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as exc:
            raise SourceLoadError(f"Cannot read API description {path}: {exc}") from exc
    return LoadedSource(document=parse_text(text, source=location), location=location)


__all__ = ["LoadedSource", "load_location", "parse_text"]
