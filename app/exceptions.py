"""Error types raised by the post pipeline.

Routers translate them into HTTP responses; the static builder records them
per page and keeps going.
"""

from typing import Iterable, Optional


class BlogError(Exception):
    """Base class for every error the pipeline raises on purpose."""


class MalformedDocument(BlogError):
    """A CMS document is missing a required field or has the wrong shape."""

    def __init__(self, document_id: Optional[str], fields: Iterable[str] = ()):
        self.document_id = document_id
        self.fields = sorted(set(fields))
        detail = ", ".join(self.fields) or "unknown fields"
        super().__init__(f"Malformed document {document_id or '<no id>'}: {detail}")


class PostNotFound(BlogError):
    """No document matches the requested slug or id."""

    def __init__(self, slug: str):
        self.slug = slug
        super().__init__(f"Post not found: {slug}")


class GatewayUnavailable(BlogError):
    """The CMS could not be reached or answered with a server error."""


class InvalidTimestamp(BlogError):
    """A timestamp could not be parsed."""

    def __init__(self, value):
        self.value = value
        super().__init__(f"Invalid timestamp: {value!r}")
