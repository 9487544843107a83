"""Loader for Ansible ``requirements.yml`` manifests.

Two layouts are accepted: a top-level list of role entries (the legacy
format), or a mapping with a ``roles`` list next to an optional
``collections`` list. Collections are not looked up and are ignored.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional

import yaml

from versioning.models import DependencyReference

logger = logging.getLogger(__name__)


class ManifestError(Exception):
    """The manifest could not be read or does not have a known layout."""


def load_requirements(path: str) -> List[DependencyReference]:
    """Read the pinned roles from a requirements file.

    Args:
        path: Path to requirements.yml

    Returns:
        One DependencyReference per pinned role, in file order. Unpinned roles
        are skipped with a warning.

    Raises:
        ManifestError: If the file is missing, unreadable or not valid YAML.
    """
    try:
        with open(path, encoding="utf-8") as f:
            # BaseLoader keeps every scalar as written: "1.10" must not become 1.1
            data = yaml.load(f, Loader=yaml.BaseLoader)
    except FileNotFoundError as e:
        raise ManifestError(f"requirements file not found: {path}") from e
    except OSError as e:
        raise ManifestError(f"failed to read requirements file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ManifestError(f"failed to parse requirements file {path}: {e}") from e

    return parse_requirements(data, origin=path)


def parse_requirements(data: Any, origin: str = "<requirements>") -> List[DependencyReference]:
    """Turn an already-decoded manifest document into references."""
    if data is None:
        return []
    if isinstance(data, dict):
        roles = data.get("roles") or []
    elif isinstance(data, list):
        roles = data
    else:
        raise ManifestError(f"{origin}: expected a list of roles or a mapping with 'roles'")

    if not isinstance(roles, list):
        raise ManifestError(f"{origin}: 'roles' must be a list")

    refs: List[DependencyReference] = []
    for index, entry in enumerate(roles):
        ref = _parse_role(entry, origin, index)
        if ref is not None:
            refs.append(ref)
    return refs


def _parse_role(entry: Any, origin: str, index: int) -> Optional[DependencyReference]:
    if isinstance(entry, str):
        # "src[,version[,name]]"
        parts = [p.strip() for p in entry.split(",")]
        src = parts[0]
        version = parts[1] if len(parts) > 1 else None
        name = parts[2] if len(parts) > 2 and parts[2] else src
    elif isinstance(entry, dict):
        src = _as_text(entry.get("src"))
        version = _as_text(entry.get("version"))
        name = _as_text(entry.get("name")) or src
    else:
        raise ManifestError(f"{origin}: role #{index + 1} is neither a string nor a mapping")

    if not name:
        raise ManifestError(f"{origin}: role #{index + 1} has neither 'name' nor 'src'")
    if not version:
        logger.warning("Role %s has no pinned version, skipping.", name)
        return None

    return DependencyReference(name=name, declared_version=version, source_hint=src or None)


def _as_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value).strip()
