"""Decode API documentation text and detect its format."""

import json
import re
from pathlib import Path
from typing import Any

import yaml

from resource_graph.errors import DocumentDecodeError, UnsupportedDocumentError


class JsonCompatibleLoader(yaml.SafeLoader):
    """SafeLoader limited to the scalars JSON can represent.

    YAML 1.1 reads ``on``, ``no``, ``12:30`` or ``2024-01-01`` as booleans,
    sexagesimal numbers and dates; here only the JSON literals are typed and
    everything else stays a string.
    """


_YAML_11_TAGS = {
    "tag:yaml.org,2002:bool",
    "tag:yaml.org,2002:int",
    "tag:yaml.org,2002:float",
    "tag:yaml.org,2002:timestamp",
}

JsonCompatibleLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag not in _YAML_11_TAGS]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
JsonCompatibleLoader.add_implicit_resolver(
    "tag:yaml.org,2002:bool", re.compile(r"^(?:true|false)$"), list("tf")
)
JsonCompatibleLoader.add_implicit_resolver(
    "tag:yaml.org,2002:int", re.compile(r"^-?(?:0|[1-9][0-9]*)$"), list("-0123456789")
)
JsonCompatibleLoader.add_implicit_resolver(
    "tag:yaml.org,2002:float",
    re.compile(r"^-?(?:0|[1-9][0-9]*)(?:\.[0-9]+(?:[eE][-+]?[0-9]+)?|[eE][-+]?[0-9]+)$"),
    list("-0123456789"),
)


def is_json(text: str) -> bool:
    stripped = text.lstrip()
    return stripped[:1] in ("{", "[")


def _stringify_keys(node: Any) -> Any:
    # YAML turns ``200:`` into an int key, JSON never does.
    if isinstance(node, dict):
        return {str(k): _stringify_keys(v) for k, v in node.items()}
    if isinstance(node, list):
        return [_stringify_keys(v) for v in node]
    return node


def parse_document_text(text: str) -> Any:
    """Decode a JSON or YAML document, picking the decoder from its first character."""
    if is_json(text):
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise DocumentDecodeError(f"Invalid JSON document: {e}") from e
    try:
        return _stringify_keys(yaml.load(text, Loader=JsonCompatibleLoader))
    except yaml.YAMLError as e:
        raise DocumentDecodeError(f"Invalid YAML document: {e}") from e


def document_format(doc: Any) -> str:
    """Return 'swagger', 'openapi3' or 'unknown' for a decoded document."""
    if not isinstance(doc, dict):
        return "unknown"
    if str(doc.get("swagger", "")).startswith("2"):
        return "swagger"
    if "openapi" in doc:
        return "openapi3"
    if isinstance(doc.get("paths"), dict):
        return "swagger"
    return "unknown"


def detect_format(file_path: Path) -> str:
    """Detect the format of an API documentation file.

    Returns: 'swagger', 'openapi3', or 'unknown'.
    """
    text = file_path.read_text(encoding="utf-8")
    try:
        return document_format(parse_document_text(text))
    except DocumentDecodeError:
        return "unknown"


def ensure_swagger_v2(doc: Any) -> None:
    """Reject documents that are not Swagger 2.0.

    Documents without any version marker are accepted as long as they have
    a path table.
    """
    fmt = document_format(doc)
    if fmt == "openapi3":
        raise UnsupportedDocumentError(f"OpenAPI {doc.get('openapi')} documents are not supported, only Swagger 2.0")
    if fmt == "unknown":
        raise UnsupportedDocumentError("Not a Swagger 2.0 document: no 'swagger' version and no 'paths'")
