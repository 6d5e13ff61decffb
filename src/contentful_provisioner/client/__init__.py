"""Contentful Management API client."""

from contentful_provisioner.client.client import (
    DEFAULT_BASE_URL,
    APIKeysAPI,
    ContentfulClient,
    SpacesAPI,
)
from contentful_provisioner.client.errors import ContentfulError, NotFoundError
from contentful_provisioner.client.models import APIKey, Entity, Link, Space, Sys

__all__ = [
    "DEFAULT_BASE_URL",
    "APIKey",
    "APIKeysAPI",
    "ContentfulClient",
    "ContentfulError",
    "Entity",
    "Link",
    "NotFoundError",
    "Space",
    "SpacesAPI",
    "Sys",
]
