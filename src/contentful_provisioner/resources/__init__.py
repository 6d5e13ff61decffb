"""Declarative models for Contentful resources."""

from contentful_provisioner.resources.api_key import ApiKeyResource
from contentful_provisioner.resources.base import Resource
from contentful_provisioner.resources.markers import Computed, Immutable
from contentful_provisioner.resources.space import SpaceResource

__all__ = ["ApiKeyResource", "Computed", "Immutable", "Resource", "SpaceResource"]
