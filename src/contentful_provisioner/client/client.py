"""HTTP client for the Contentful Management API."""

from __future__ import annotations

import logging
from functools import cached_property
from typing import Any, TypeVar
from urllib.parse import quote

import requests
from pydantic import ValidationError

from contentful_provisioner import __version__
from contentful_provisioner.client.errors import ContentfulError, NotFoundError
from contentful_provisioner.client.models import APIKey, Entity, Space

logger = logging.getLogger(__name__)

EntityT = TypeVar("EntityT", bound=Entity)

DEFAULT_BASE_URL = "https://api.contentful.com"
DEFAULT_TIMEOUT = 30.0
CONTENT_TYPE = "application/vnd.contentful.management.v1+json"
VERSION_HEADER = "X-Contentful-Version"
ORGANIZATION_HEADER = "X-Contentful-Organization"


def _error_from_response(method: str, path: str, response: requests.Response) -> ContentfulError:
    try:
        body = response.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}

    error_id = (body.get("sys") or {}).get("id")
    message = body.get("message") or response.reason
    request_id = body.get("requestId")
    error_cls = NotFoundError if response.status_code == 404 else ContentfulError
    return error_cls(
        f"{method} {path} failed with {response.status_code} ({error_id}): {message}",
        status_code=response.status_code,
        error_id=error_id,
        request_id=request_id,
    )


def _segment(value: str) -> str:
    """Quote an id for use as a single URL path segment."""
    return quote(value, safe="")


def _parse_entity(
    model: type[EntityT], data: dict[str, Any] | None, method: str, path: str
) -> EntityT:
    """Validate a response body as *model*; an empty or malformed body is a remote error."""
    if data is None:
        raise ContentfulError(f"{method} {path} returned an empty body")
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise ContentfulError(
            f"{method} {path} returned an unexpected {model.__name__} body"
        ) from exc


def _version_header(entity: Entity) -> dict[str, str]:
    if entity.version is None:
        raise ContentfulError(f"Cannot update {type(entity).__name__} {entity.id} without a version")
    return {VERSION_HEADER: str(entity.version)}


class ContentfulClient:
    """Blocking client for the Contentful Management API.

    Examples:
        client = ContentfulClient("CFPAT-...", organization_id="0abc")
        space = client.spaces.get("cfexampleapi")
    """

    def __init__(
        self,
        access_token: str,
        *,
        organization_id: str | None = None,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        self.organization_id = organization_id
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = session if session is not None else requests.Session()
        self._session.headers.update(
            {
                "Authorization": f"Bearer {access_token}",
                "Content-Type": CONTENT_TYPE,
                "User-Agent": f"contentful-provisioner/{__version__}",
            }
        )

    @cached_property
    def spaces(self) -> SpacesAPI:
        return SpacesAPI(self)

    @cached_property
    def api_keys(self) -> APIKeysAPI:
        return APIKeysAPI(self)

    def request(
        self,
        method: str,
        path: str,
        *,
        json_data: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> dict[str, Any] | None:
        """Send a request and return the decoded JSON body (``None`` if empty).

        Raises:
            NotFoundError: On HTTP 404.
            ContentfulError: On any other HTTP error or transport failure.
        """
        url = f"{self._base_url}{path}"
        logger.debug("%s %s", method, url)
        try:
            response = self._session.request(
                method, url, json=json_data, headers=headers, timeout=self._timeout
            )
        except requests.RequestException as exc:
            raise ContentfulError(f"{method} {path} failed: {exc}") from exc

        if response.status_code >= 400:
            raise _error_from_response(method, path, response)
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise ContentfulError(
                f"{method} {path} returned a non-JSON body",
                status_code=response.status_code,
            ) from exc


class SpacesAPI:
    def __init__(self, client: ContentfulClient) -> None:
        self._client = client

    @staticmethod
    def _path(space_id: str) -> str:
        return f"/spaces/{_segment(space_id)}"

    def get(self, space_id: str) -> Space:
        path = self._path(space_id)
        return _parse_entity(Space, self._client.request("GET", path), "GET", path)

    def upsert(self, space: Space) -> Space:
        """Create the space when it has no id yet, otherwise replace it."""
        if space.id:
            method, path = "PUT", self._path(space.id)
            headers: dict[str, str] | None = _version_header(space)
        else:
            method, path = "POST", "/spaces"
            headers = None
            if self._client.organization_id:
                headers = {ORGANIZATION_HEADER: self._client.organization_id}
        data = self._client.request(method, path, json_data=space.payload(), headers=headers)
        return _parse_entity(Space, data, method, path)

    def delete(self, space: Space) -> None:
        self._client.request("DELETE", self._path(space.id))


class APIKeysAPI:
    """API keys are sub-resources of a space; every call is space-scoped."""

    def __init__(self, client: ContentfulClient) -> None:
        self._client = client

    @staticmethod
    def _path(space_id: str, api_key_id: str = "") -> str:
        path = f"/spaces/{_segment(space_id)}/api_keys"
        if api_key_id:
            path += f"/{_segment(api_key_id)}"
        return path

    def get(self, space_id: str, api_key_id: str) -> APIKey:
        path = self._path(space_id, api_key_id)
        return _parse_entity(APIKey, self._client.request("GET", path), "GET", path)

    def upsert(self, space_id: str, api_key: APIKey) -> APIKey:
        """Create the key when it has no id yet, otherwise replace it."""
        path = self._path(space_id, api_key.id)
        if api_key.id:
            method, headers = "PUT", _version_header(api_key)
        else:
            method, headers = "POST", None
        data = self._client.request(method, path, json_data=api_key.payload(), headers=headers)
        return _parse_entity(APIKey, data, method, path)

    def delete(self, space_id: str, api_key: APIKey) -> None:
        self._client.request("DELETE", self._path(space_id, api_key.id))
