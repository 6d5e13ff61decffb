"""Terraform-style provisioning for Contentful spaces and API keys."""

__version__ = "0.1.0"
