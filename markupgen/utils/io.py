"""Filesystem and location helpers."""
from __future__ import annotations

import re
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse
from urllib.request import url2pathname

_UNSAFE_NAME = re.compile(r"[^0-9a-z_.-]+")


def normalize_name(name: str) -> str:
    """Return a lower-case, filesystem-safe version of an entity name."""

    return _UNSAFE_NAME.sub("_", name.strip().lower())


def as_location(source: str | Path) -> str:
    """Return *source* as a URI, turning plain paths into ``file://`` URIs."""

    if isinstance(source, Path):
        return source.expanduser().resolve().as_uri()
    parsed = urlparse(source)
    # Single letters are Windows drive prefixes, not schemes.
    if parsed.scheme and len(parsed.scheme) > 1:
        return source
    return Path(source).expanduser().resolve().as_uri()


def is_remote(location: str) -> bool:
    return urlparse(location).scheme in {"http", "https"}


def local_path(location: Optional[str]) -> Optional[Path]:
    """Return the filesystem path behind a ``file://`` location, else ``None``."""

    if not location:
        return None
    parsed = urlparse(location)
    if parsed.scheme != "file":
        return None
    return Path(url2pathname(parsed.path))


def parent_directory(location: Optional[str]) -> Optional[Path]:
    path = local_path(location)
    return path.parent if path is not None else None


__all__ = ["as_location", "is_remote", "local_path", "normalize_name", "parent_directory"]
