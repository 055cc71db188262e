"""Resolve every ``$ref`` of a Swagger document."""

import logging
from typing import Any

import jsonref

from resource_graph.errors import ReferenceResolutionError

logger = logging.getLogger(__name__)


def dereference(document: dict, scope: str) -> Any:
    """Return a copy of ``document`` with every ``$ref`` replaced.

    ``scope`` is the URL the document was loaded from; relative references
    to other documents are resolved against it. Circular references are
    kept as proxies, so the result must not be walked blindly.
    """
    try:
        return jsonref.replace_refs(document, base_uri=scope, proxies=True, lazy_load=False)
    except jsonref.JsonRefError as e:
        logger.debug("Failed to resolve %s in %s", e.reference, scope)
        raise ReferenceResolutionError(f"Unresolvable reference {e.reference!r}: {e.message}") from e
