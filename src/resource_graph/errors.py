"""Exceptions raised while turning a Swagger document into resources."""


class ResourceGraphError(Exception):
    """Base class for all resource-graph errors."""


class InvalidPathError(ResourceGraphError):
    """A selected path yields no resource base name."""

    def __init__(self, path: str):
        super().__init__(f"Invalid path: {path!r}")
        self.path = path


class PathNotFoundError(ResourceGraphError):
    """A selected path is missing from the dereferenced document."""

    def __init__(self, path: str):
        super().__init__(f"{path} couldn't be accessed in the dereferenced document")
        self.path = path


class ReferenceResolutionError(ResourceGraphError):
    """A $ref in the document could not be resolved."""


class DocumentDecodeError(ResourceGraphError):
    """The document text is neither valid JSON nor valid YAML."""


class UnsupportedDocumentError(ResourceGraphError):
    """The document is not a Swagger 2.0 document."""


class SwaggerDocumentationError(ResourceGraphError):
    """Fetching or decoding the documentation failed.

    Carries the partially constructed Api, the raw response and the HTTP
    status so callers can still report what was reached.
    """

    def __init__(self, message: str, api, response=None, status: int | None = None):
        super().__init__(message)
        self.api = api
        self.response = response
        self.status = status
