"""Manifest loading: requirements.yml into dependency references."""

from .requirements_file import ManifestError, load_requirements, parse_requirements  # noqa: F401

__all__ = ["ManifestError", "load_requirements", "parse_requirements"]
