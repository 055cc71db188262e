"""Data models for the resource graph derived from a Swagger document.

The parser stages build these records once per run; the merge steps are
the only code that appends to them afterwards.
"""

from typing import Any

import pydantic
from pydantic import BaseModel, field_serializer


class Field(BaseModel):
    """One schema property of a resource."""

    name: str
    type: str  # string / integer / dateTime / object / array / ...
    array_type: str | None = None
    enum: list[Any] | None = None
    required: bool = False
    nullable: bool = False
    description: str = ""
    reference: "Resource | None" = pydantic.Field(default=None, repr=False)
    embedded: "Resource | None" = pydantic.Field(default=None, repr=False)
    max_cardinality: int | None = None

    @field_serializer("reference", "embedded")
    def _serialize_relation(self, value: "Resource | None") -> str | None:
        # Relations may form cycles, dump them by title only.
        return value.title if value is not None else None


class Operation(BaseModel):
    """One HTTP action exposed for a resource."""

    name: str
    type: str  # show / edit / delete / list / create
    method: str  # GET / PUT / PATCH / DELETE / POST
    deprecated: bool = False


class Parameter(BaseModel):
    """A list (query) parameter of a resource."""

    name: str
    type: str | None = None
    required: bool = False
    description: str = ""
    deprecated: bool = False


class Resource(BaseModel):
    """A logical API entity inferred from one or more path items."""

    name: str
    url: str
    title: str
    description: str = ""
    fields: list[Field] = []
    readable_fields: list[Field] = []
    writable_fields: list[Field] = []
    operations: list[Operation] = []
    parameters: list[Parameter] = []

    def get_field(self, name: str) -> Field | None:
        for field in self.fields:
            if field.name == name:
                return field
        return None


class Api(BaseModel):
    """The root of a parsed documentation."""

    entrypoint: str
    title: str = ""
    resources: list[Resource] = []

    def get_resource(self, title: str) -> Resource | None:
        for resource in self.resources:
            if resource.title == title:
                return resource
        return None


Field.model_rebuild()
Resource.model_rebuild()
Api.model_rebuild()


class SchemaObject(BaseModel):
    """Shallow view over one dereferenced JSON schema.

    Only the keys the builder reads are named; ``items`` and the
    ``properties`` values stay raw so circular schemas are never walked.
    """

    type: str | list[str] | None = None
    format: str | None = None
    description: str = ""
    enum: list[Any] | None = None
    nullable: bool = False
    read_only: bool = False
    write_only: bool = False
    items: Any = None
    properties: dict[str, Any] = {}
    required: list[str] = []

    @classmethod
    def from_raw(cls, raw: Any) -> "SchemaObject":
        """Build a record from a decoded (possibly proxied) schema mapping."""
        if raw is None:
            return cls()
        schema_type = raw.get("type")
        if isinstance(schema_type, (list, tuple)):
            schema_type = [str(t) for t in schema_type]
        enum = raw.get("enum")
        required = raw.get("required")
        properties = raw.get("properties") or {}
        nullable = bool(raw.get("nullable") or raw.get("x-nullable"))
        if isinstance(schema_type, list) and "null" in schema_type:
            nullable = True

        return cls(
            type=schema_type,
            format=raw.get("format"),
            description=raw.get("description") or "",
            enum=list(enum) if enum is not None else None,
            nullable=nullable,
            read_only=bool(raw.get("readOnly")),
            write_only=bool(raw.get("writeOnly")),
            items=raw.get("items"),
            properties={str(k): v for k, v in properties.items()},
            required=[str(r) for r in required] if isinstance(required, (list, tuple)) else [],
        )
