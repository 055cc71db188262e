"""Build resources from dereferenced schemas and merge them."""

from typing import Any

from .base import Field, Resource, SchemaObject
from .typemap import get_array_type, get_type


def build_resource_from_schema(schema: Any, name: str, title: str, url: str) -> Resource:
    """Convert one dereferenced schema into a Resource skeleton.

    Every property becomes a Field. Write-only properties are left out of
    ``readable_fields`` and read-only ones out of ``writable_fields``.
    Duplicates across schemas are the caller's concern, see merge_resources.
    """
    record = SchemaObject.from_raw(schema)
    fields: list[Field] = []
    readable_fields: list[Field] = []
    writable_fields: list[Field] = []

    for field_name, raw_property in record.properties.items():
        prop = SchemaObject.from_raw(raw_property)
        field = Field(
            name=field_name,
            type=get_type(prop.type or "string", prop.format),
            array_type=get_array_type(raw_property),
            enum=_build_enum(prop.enum),
            required=field_name in record.required,
            nullable=prop.nullable,
            description=prop.description,
        )
        if not prop.write_only:
            readable_fields.append(field)
        if not prop.read_only:
            writable_fields.append(field)
        fields.append(field)

    return Resource(
        name=name,
        url=url,
        title=title,
        description=record.description,
        fields=fields,
        readable_fields=readable_fields,
        writable_fields=writable_fields,
    )


def _build_enum(values: list[Any] | None) -> list[Any] | None:
    if values is None:
        return None
    unique: list[Any] = []
    for value in values:
        if value not in unique:
            unique.append(value)
    return unique


def merge_resources(resource_a: Resource, resource_b: Resource) -> Resource:
    """Append to ``resource_a`` every field of ``resource_b`` it lacks by name.

    Each of the three field lists is merged on its own. Existing order is
    kept; ``resource_a`` is mutated and returned.
    """
    for attr in ("fields", "readable_fields", "writable_fields"):
        target: list[Field] = getattr(resource_a, attr)
        names = {f.name for f in target}
        for field in list(getattr(resource_b, attr)):
            if field.name not in names:
                target.append(field)
                names.add(field.name)
    return resource_a
