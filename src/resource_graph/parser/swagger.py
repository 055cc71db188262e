"""Swagger 2.0 document to resource graph.

Walks the selected paths of a dereferenced document, gathers schema evidence
from the HTTP operations of each path, builds and merges candidate resources,
then links resources together by field name.
"""

import logging
from collections.abc import Callable, Iterable
from typing import Any
from urllib.parse import urlsplit, urlunsplit

import inflection

from resource_graph.config import DEFAULT_DOCUMENT_SUFFIXES
from resource_graph.errors import PathNotFoundError

from pydantic import BaseModel

from .base import Operation, Parameter, Resource
from .builder import build_resource_from_schema, merge_resources
from .detect import ensure_swagger_v2
from .paths import (
    base_name,
    find_collection_path,
    find_item_path,
    is_item_path,
    remove_trailing_slash,
    select_resource_paths,
)
from .refs import dereference
from .relations import assign_resource_relationships
from .typemap import get_type

logger = logging.getLogger(__name__)

PRIMITIVE_TYPES = ("string", "integer", "number", "boolean")
RESOURCE_METHODS = ("get", "put", "patch", "delete", "post")


class PathEvidence(BaseModel):
    """The path items and definitions one resource is inferred from."""

    title: str
    item: Any
    collection: Any = None
    definitions: Any = None
    # The path only exists as a collection (no item path).
    collection_only: bool = False

    @property
    def has_separate_collection(self) -> bool:
        return self.collection is not None and self.collection is not self.item

    @property
    def list_operation(self) -> Any:
        if self.has_separate_collection or self.collection_only:
            return self.collection.get("get")
        return None

    def has_methods(self) -> bool:
        path_items = [self.item] if self.collection is None else [self.item, self.collection]
        return any(p.get(m) for p in path_items for m in RESOURCE_METHODS)


def _response(operation: Any, code: str = "200") -> Any:
    responses = operation.get("responses") or {}
    response = responses.get(code)
    if response is None and code.isdigit():
        response = responses.get(int(code))
    return response


def _body_schema(operation: Any) -> Any:
    if not operation:
        return None
    for parameter in operation.get("parameters") or []:
        if parameter.get("in") == "body":
            return parameter.get("schema")
    return None


def _show_schema(evidence: PathEvidence) -> Any:
    operation = evidence.item.get("get")
    response = _response(operation) if operation else None
    schema = response.get("schema") if response else None
    if schema is not None:
        return schema
    return (evidence.definitions or {}).get(evidence.title)


def _edit_schema(evidence: PathEvidence) -> Any:
    return _body_schema(evidence.item.get("put") or evidence.item.get("patch"))


def _delete_schema(evidence: PathEvidence) -> Any:
    operation = evidence.item.get("delete")
    if not operation:
        return None
    schema = _body_schema(operation)
    if schema is not None:
        return schema
    response = _response(operation)
    if not response:
        return None
    if response.get("schema") is not None:
        return response.get("schema")
    if response.get("type") in PRIMITIVE_TYPES:
        return response
    return None


def _create_schema(evidence: PathEvidence) -> Any:
    operation = None
    if evidence.collection is not None:
        operation = evidence.collection.get("post")
    return _body_schema(operation or evidence.item.get("post"))


# Merge precedence follows this order.
SCHEMA_EXTRACTORS: dict[str, Callable[[PathEvidence], Any]] = {
    "show": _show_schema,
    "edit": _edit_schema,
    "delete": _delete_schema,
    "create": _create_schema,
}


def build_operation(method: str, operation_type: str, operation: Any) -> Operation:
    return Operation(
        name=operation.get("summary") or operation_type,
        type=operation_type,
        method=method.upper(),
        deprecated=bool(operation.get("deprecated")),
    )


def _build_operations(evidence: PathEvidence) -> list[Operation]:
    item = evidence.item
    if evidence.collection_only:
        planned: list[tuple[Any, str, str]] = [
            (item, "put", "edit"),
            (item, "patch", "edit"),
            (item, "get", "list"),
            (item, "post", "create"),
            (item, "delete", "delete"),
        ]
    else:
        planned = [
            (item, "get", "show"),
            (item, "put", "edit"),
            (item, "patch", "edit"),
            (item, "delete", "delete"),
        ]
    if evidence.has_separate_collection:
        collection = evidence.collection
        planned += [
            (collection, "get", "list"),
            (collection, "post", "create"),
            (collection, "delete", "delete"),
        ]
    elif not evidence.collection_only:
        planned.append((item, "post", "create"))

    operations = []
    for path_item, method, operation_type in planned:
        operation = path_item.get(method)
        if operation:
            operations.append(build_operation(method, operation_type, operation))
    return operations


def build_parameter(parameter: Any) -> Parameter:
    schema = parameter.get("schema")
    if schema and schema.get("type"):
        param_type = get_type(schema.get("type"))
    elif parameter.get("type"):
        param_type = get_type(parameter.get("type"), parameter.get("format"))
    else:
        param_type = None
    return Parameter(
        name=parameter.get("name", ""),
        type=param_type,
        required=bool(parameter.get("required")),
        description=parameter.get("description") or "",
        deprecated=bool(parameter.get("deprecated")),
    )


def _build_parameters(evidence: PathEvidence) -> list[Parameter]:
    list_operation = evidence.list_operation
    if not list_operation:
        return []
    return [build_parameter(p) for p in list_operation.get("parameters") or []]


def server_url(entrypoint_url: str, suffixes: Iterable[str] = DEFAULT_DOCUMENT_SUFFIXES) -> str:
    """Strip the documentation filename from the entry URL."""
    parts = urlsplit(entrypoint_url)
    path = parts.path
    for suffix in suffixes:
        suffix = "/" + suffix.lstrip("/")
        if path.endswith(suffix):
            path = path[: -len(suffix)]
            break
    return urlunsplit((parts.scheme, parts.netloc, path, "", ""))


def _resource_for_path(path: str, document: Any, all_paths: list[str], server: str) -> Resource | None:
    name = base_name(path)
    title = inflection.singularize(name)
    url = f"{remove_trailing_slash(server)}/{name}"

    doc_paths = document.get("paths") or {}
    if doc_paths.get(path) is None:
        raise PathNotFoundError(path)

    item_path = find_item_path(path, all_paths)
    collection_path = find_collection_path(name, item_path, all_paths)
    item = doc_paths.get(item_path) or doc_paths[path]
    evidence = PathEvidence(
        title=title,
        item=item,
        collection=doc_paths.get(collection_path) if collection_path else None,
        definitions=document.get("definitions"),
    )
    if not is_item_path(item_path):
        # No item path: the selected path is a bare collection.
        evidence.collection = item
        evidence.collection_only = True

    if not evidence.has_methods():
        logger.debug("Skipping %s: no resource methods", path)
        return None

    candidates: dict[str, Resource] = {}
    for kind, extract in SCHEMA_EXTRACTORS.items():
        schema = extract(evidence)
        if schema is not None:
            candidates[kind] = build_resource_from_schema(schema, name, title, url)

    if not candidates:
        logger.debug("Skipping %s: no usable schema", path)
        return None

    if "show" in candidates and "edit" in candidates:
        resource = merge_resources(candidates["show"], candidates["edit"])
    else:
        resource = None
        for candidate in candidates.values():
            resource = candidate if resource is None else merge_resources(resource, candidate)

    resource.operations = _build_operations(evidence)
    resource.parameters = _build_parameters(evidence)
    return resource


def _absorb(existing: Resource, resource: Resource) -> None:
    """Fold a resource found on another path into the one already collected."""
    merge_resources(existing, resource)
    known = {(o.type, o.method, o.name) for o in existing.operations}
    for operation in resource.operations:
        if (operation.type, operation.method, operation.name) not in known:
            existing.operations.append(operation)
            known.add((operation.type, operation.method, operation.name))
    names = {p.name for p in existing.parameters}
    for parameter in resource.parameters:
        if parameter.name not in names:
            existing.parameters.append(parameter)
            names.add(parameter.name)
    if not existing.description:
        existing.description = resource.description


def build_resources(
    document: dict,
    entrypoint_url: str,
    suffixes: Iterable[str] = DEFAULT_DOCUMENT_SUFFIXES,
) -> list[Resource]:
    """Derive the resources described by a decoded Swagger 2.0 document.

    ``entrypoint_url`` is both the $ref resolution scope and the base of
    every resource URL. Paths are processed in document order; resources
    sharing a title are merged into the first one seen.
    """
    ensure_swagger_v2(document)
    dereferenced = dereference(document, entrypoint_url)

    raw_paths = list((document.get("paths") or {}).keys())
    selected = select_resource_paths(raw_paths)
    server = server_url(entrypoint_url, suffixes)

    resources: dict[str, Resource] = {}
    for path in selected:
        resource = _resource_for_path(path, dereferenced, raw_paths, server)
        if resource is None:
            continue
        existing = resources.get(resource.title)
        if existing is None:
            resources[resource.title] = resource
        else:
            _absorb(existing, resource)

    logger.info("Built %d resources from %d of %d paths", len(resources), len(selected), len(raw_paths))
    return assign_resource_relationships(list(resources.values()))
