"""Infer relationships between resources from field names."""

import logging
import re

import inflection

from .base import Resource

logger = logging.getLogger(__name__)

ID_SUFFIX = re.compile(r"Ids?$")


def classify(noun: str) -> str:
    """Singular PascalCase form of a noun: ``parent_categories`` -> ``ParentCategory``."""
    return inflection.camelize(inflection.singularize(noun))


def related_title(field_name: str) -> str:
    """Title a field such as ``parentId`` or ``tag_ids`` would point at."""
    noun = ID_SUFFIX.sub("", inflection.camelize(field_name))
    if not noun:
        return ""
    return classify(noun)


def assign_resource_relationships(resources: list[Resource]) -> list[Resource]:
    """Turn fields named after another resource into relations.

    Object fields (or arrays of objects) embed the related resource, every
    other matching field references it. Array fields stay to-many.
    """
    # Titles must match exactly; the first resource with a title wins.
    by_title: dict[str, Resource] = {}
    for resource in resources:
        by_title.setdefault(resource.title, resource)

    for resource in resources:
        for field in _unique_fields(resource):
            title = related_title(field.name)
            related = by_title.get(title) if title else None
            if related is None:
                continue
            field.max_cardinality = None if field.type == "array" else 1
            if field.type == "object" or field.array_type == "object":
                field.embedded = related
                field.reference = None
            else:
                field.reference = related
                field.embedded = None
            logger.debug(
                "%s.%s -> %s (%s)",
                resource.title,
                field.name,
                related.title,
                "embedded" if field.embedded is not None else "reference",
            )
    return resources


def _unique_fields(resource: Resource):
    # Merged lists may hold a readable/writable twin of a field.
    seen: set[int] = set()
    for field in [*resource.fields, *resource.readable_fields, *resource.writable_fields]:
        if id(field) not in seen:
            seen.add(id(field))
            yield field
