"""Map JSON Schema ``type``/``format`` pairs to semantic field types."""

from typing import Any

import inflection

INTEGER_FORMATS = ("int32", "int64")


def get_type(openapi_type: str | list[str] | None, fmt: str | None = None) -> str:
    """Resolve a schema type (or nullable type union) and format to a field type.

    A format always wins over the base type: ``int32``/``int64`` become
    ``integer``, anything else is camel-cased (``date-time`` -> ``dateTime``).
    """
    if isinstance(openapi_type, (list, tuple)):
        resolved = next((t for t in openapi_type if t != "null"), None)
        if resolved is None:
            resolved = openapi_type[0] if openapi_type else "string"
    else:
        resolved = openapi_type or "string"

    if fmt:
        if fmt in INTEGER_FORMATS:
            return "integer"
        return inflection.camelize(fmt.replace("-", "_"), False)

    return resolved


def get_array_type(schema: Any) -> str | None:
    """Return the element type of an array schema, None for anything else."""
    if schema is None or schema.get("type") != "array":
        return None
    items = schema.get("items")
    if isinstance(items, (list, tuple)):
        items = items[0] if items else None
    if not items:
        return "string"
    return get_type(items.get("type"), items.get("format"))
