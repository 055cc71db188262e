"""Load a Swagger document from a URL or a file and build its Api."""

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import requests
from pydantic import BaseModel

from resource_graph.config import DEFAULT_DOCUMENT_SUFFIXES, DEFAULT_TIMEOUT
from resource_graph.errors import DocumentDecodeError, SwaggerDocumentationError

from .base import Api
from .detect import parse_document_text
from .paths import remove_trailing_slash
from .swagger import build_resources

logger = logging.getLogger(__name__)


class ParsedSwaggerDocumentation(BaseModel):
    api: Api
    response: Any = None  # the decoded document
    status: int | None = None


def _build_api(doc: Any, entrypoint_url: str, suffixes: Iterable[str]) -> Api:
    resources = build_resources(doc, entrypoint_url, suffixes)
    info = doc.get("info") or {}
    return Api(entrypoint=entrypoint_url, title=info.get("title") or "", resources=resources)


def parse_swagger_documentation(
    entrypoint_url: str,
    timeout: float | None = None,
    suffixes: Iterable[str] = DEFAULT_DOCUMENT_SUFFIXES,
) -> ParsedSwaggerDocumentation:
    """Fetch the documentation at ``entrypoint_url`` and build its Api.

    Transport and decoding failures raise SwaggerDocumentationError with an
    empty Api; errors in the document structure propagate unchanged.
    """
    entrypoint_url = remove_trailing_slash(entrypoint_url)
    logger.info("Fetching %s", entrypoint_url)
    try:
        res = requests.get(entrypoint_url, timeout=timeout or DEFAULT_TIMEOUT)
    except requests.RequestException as e:
        raise SwaggerDocumentationError(
            f"Could not fetch {entrypoint_url}: {e}", api=Api(entrypoint=entrypoint_url)
        ) from e

    if not res.ok:
        raise SwaggerDocumentationError(
            f"{entrypoint_url} answered HTTP {res.status_code}",
            api=Api(entrypoint=entrypoint_url),
            response=res.text,
            status=res.status_code,
        )

    try:
        doc = parse_document_text(res.text)
    except DocumentDecodeError as e:
        raise SwaggerDocumentationError(
            str(e), api=Api(entrypoint=entrypoint_url), response=res.text, status=res.status_code
        ) from e

    api = _build_api(doc, entrypoint_url, suffixes)
    return ParsedSwaggerDocumentation(api=api, response=doc, status=res.status_code)


def load_swagger_documentation(
    file_path: Path,
    suffixes: Iterable[str] = DEFAULT_DOCUMENT_SUFFIXES,
) -> ParsedSwaggerDocumentation:
    """Build the Api of a local documentation file, addressed by its file URI."""
    entrypoint_url = file_path.resolve().as_uri()
    text = file_path.read_text(encoding="utf-8")
    try:
        doc = parse_document_text(text)
    except DocumentDecodeError as e:
        raise SwaggerDocumentationError(str(e), api=Api(entrypoint=entrypoint_url), response=text) from e

    api = _build_api(doc, entrypoint_url, suffixes)
    return ParsedSwaggerDocumentation(api=api, response=doc, status=200)
