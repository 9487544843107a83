"""Ansible Galaxy registry package.

- client.py: HTTP interactions with the Galaxy v1 role search API

Public API is preserved at registry.galaxy without shims.
"""

# Patch point exposed for tests (e.g., monkeypatch in tests)
from common.http_client import safe_get  # noqa: F401

# Public API re-exports
from .client import GalaxyClient  # noqa: F401

__all__ = [
    "GalaxyClient",
    # Patch point for tests
    "safe_get",
]
