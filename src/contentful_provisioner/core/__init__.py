"""Core infrastructure components for contentful-provisioner."""

from contentful_provisioner.core.provider import ContentfulProvider
from contentful_provisioner.core.state import ResourceInstance, State, StateError

__all__ = ["ContentfulProvider", "ResourceInstance", "State", "StateError"]
