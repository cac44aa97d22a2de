"""Read-only accessors over a decoded Swagger 2 / OpenAPI 3 mapping."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

HTTP_METHODS: Tuple[str, ...] = ("get", "put", "post", "delete", "options", "head", "patch", "trace")


@dataclass(frozen=True, slots=True)
class Operation:
    path: str
    method: str
    spec: Mapping[str, Any]

    @property
    def id(self) -> str:
        return str(self.spec.get("operationId") or f"{self.method} {self.path}")

    @property
    def title(self) -> str:
        return str(self.spec.get("summary") or f"{self.method.upper()} {self.path}")

    @property
    def tags(self) -> List[str]:
        return [str(tag) for tag in self.spec.get("tags") or ()]


def is_openapi3(swagger: Mapping[str, Any]) -> bool:
    return str(swagger.get("openapi", "")).startswith("3.")


def info(swagger: Mapping[str, Any]) -> Mapping[str, Any]:
    value = swagger.get("info")
    return value if isinstance(value, Mapping) else {}


def definitions(swagger: Mapping[str, Any]) -> Mapping[str, Mapping[str, Any]]:
    if is_openapi3(swagger):
        components = swagger.get("components") or {}
        return components.get("schemas") or {}
    return swagger.get("definitions") or {}


def security_schemes(swagger: Mapping[str, Any]) -> Mapping[str, Mapping[str, Any]]:
    if is_openapi3(swagger):
        components = swagger.get("components") or {}
        return components.get("securitySchemes") or {}
    return swagger.get("securityDefinitions") or {}


def operations(swagger: Mapping[str, Any]) -> Iterator[Operation]:
    """Yield operations in document order of paths, then HTTP method order."""

    for path, item in (swagger.get("paths") or {}).items():
        if not isinstance(item, Mapping):
            continue
        for method in HTTP_METHODS:
            spec = item.get(method)
            if isinstance(spec, Mapping):
                yield Operation(path=path, method=method, spec=spec)


def ref_name(ref: str) -> str:
    return ref.rsplit("/", 1)[-1]


def type_name(schema: Optional[Mapping[str, Any]]) -> str:
    """Return a short human readable type for *schema*."""

    if not schema:
        return ""
    if "$ref" in schema:
        return ref_name(str(schema["$ref"]))
    schema_type = schema.get("type")
    if isinstance(schema_type, list):
        schema_type = next((value for value in schema_type if value != "null"), "")
    if schema_type == "array":
        return f"< {type_name(schema.get('items'))} > array"
    if schema_type == "object" and isinstance(schema.get("additionalProperties"), Mapping):
        return f"< string, {type_name(schema['additionalProperties'])} > map"
    if "enum" in schema:
        return "enum (" + ", ".join(str(value) for value in schema["enum"]) + ")"
    if schema.get("format"):
        return f"{schema_type} ({schema['format']})"
    return str(schema_type or "object")


def flatten_properties(
    schema: Mapping[str, Any], all_definitions: Mapping[str, Mapping[str, Any]], depth: int = 0
) -> Tuple[Dict[str, Mapping[str, Any]], set[str]]:
    """Return (properties, required names), merging ``allOf`` parts and references."""

    properties: Dict[str, Mapping[str, Any]] = {}
    required: set[str] = set(schema.get("required") or ())
    if depth > 8:
        return properties, required
    for part in schema.get("allOf") or ():
        if not isinstance(part, Mapping):
            continue
        if "$ref" in part:
            part = all_definitions.get(ref_name(str(part["$ref"])), {})
        nested, nested_required = flatten_properties(part, all_definitions, depth + 1)
        properties.update(nested)
        required |= nested_required
    properties.update(schema.get("properties") or {})
    return properties, required


__all__ = [
    "HTTP_METHODS",
    "Operation",
    "definitions",
    "flatten_properties",
    "info",
    "is_openapi3",
    "operations",
    "ref_name",
    "security_schemes",
    "type_name",
]
