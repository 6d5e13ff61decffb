"""Contentful Management API error types."""

from __future__ import annotations


class ContentfulError(Exception):
    """Raised for any failed call to the Contentful Management API."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        error_id: str | None = None,
        request_id: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.error_id = error_id
        self.request_id = request_id


class NotFoundError(ContentfulError):
    """The requested entity does not exist (HTTP 404)."""
