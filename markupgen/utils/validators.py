"""Validation of configuration payloads against packaged JSON schemas."""
from __future__ import annotations

import json
from functools import lru_cache
from importlib import resources
from typing import Any, List, Mapping, Tuple

from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError

SCHEMA_PACKAGE = "markupgen.schemas"


@lru_cache(maxsize=None)
def _validator(schema_name: str) -> Draft202012Validator:
    schema = json.loads(
        resources.files(SCHEMA_PACKAGE).joinpath(schema_name).read_text(encoding="utf-8")
    )
    Draft202012Validator.check_schema(schema)
    return Draft202012Validator(schema)


def _describe(error: ValidationError) -> str:
    pointer = "/".join(str(part) for part in error.absolute_path)
    return f"{pointer}: {error.message}" if pointer else error.message


def validate_payload(schema_name: str, payload: Mapping[str, Any]) -> Tuple[bool, List[str]]:
    """Return ``(valid, messages)``; messages are ordered by location in the payload."""

    errors = sorted(
        _validator(schema_name).iter_errors(payload),
        key=lambda error: [str(part) for part in error.absolute_path],
    )
    messages = [_describe(error) for error in errors]
    return not messages, messages


__all__ = ["SCHEMA_PACKAGE", "validate_payload"]
