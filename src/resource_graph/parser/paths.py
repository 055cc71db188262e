"""Path selection and path-derived naming.

A Swagger document usually describes one resource with two path items, the
collection (``/users``) and the single item (``/users/{id}``). Resource
discovery is seeded with one representative path per resource.
"""

import re
from collections.abc import Iterable

import inflection

from resource_graph.errors import InvalidPathError

ITEM_SEGMENT = re.compile(r"/\{[^}]+\}/?$")


def remove_trailing_slash(path: str) -> str:
    if path.endswith("/"):
        return path[:-1]
    return path


def trim_item_segment(path: str) -> str:
    """Remove a single trailing ``/{param}`` segment, if any."""
    return ITEM_SEGMENT.sub("", path)


def is_item_path(path: str) -> bool:
    return ITEM_SEGMENT.search(path) is not None


def select_resource_paths(paths: Iterable[str]) -> list[str]:
    """Reduce a path table to one representative path per resource.

    Paths are compared on their trimmed form; the first path seen for a
    trimmed key is kept untrimmed and later paths with the same key are
    dropped.
    """
    seen: set[str] = set()
    selected: list[str] = []
    for path in paths:
        key = trim_item_segment(path)
        if key in seen:
            continue
        seen.add(key)
        selected.append(path)
    return selected


def base_name(path: str) -> str:
    """Derive the resource base name from a path.

    ``/users/{id}`` and ``/users`` both give ``users``.
    """
    segments = remove_trailing_slash(path).split("/")
    name = segments[-1]
    if "{" in name:
        name = segments[-2] if len(segments) > 1 else ""
    if not name:
        raise InvalidPathError(path)
    return name


def find_item_path(path: str, paths: Iterable[str]) -> str:
    """Return the item path describing the same resource as ``path``."""
    if is_item_path(path):
        return path
    collection = remove_trailing_slash(path)
    for candidate in paths:
        if candidate != path and is_item_path(candidate) and trim_item_segment(candidate) == collection:
            return candidate
    return path


def find_collection_path(name: str, item_path: str, paths: Iterable[str]) -> str | None:
    """Return the collection path of the resource called ``name``.

    The collection path ends with the plural form of the name. The one
    sharing a prefix with ``item_path`` is preferred over any other.
    """
    suffix = "/" + inflection.pluralize(name)
    trimmed = remove_trailing_slash(trim_item_segment(item_path))
    candidates = [p for p in paths if remove_trailing_slash(p).endswith(suffix)]
    for candidate in candidates:
        if remove_trailing_slash(candidate) == trimmed:
            return candidate
    return candidates[0] if candidates else None
