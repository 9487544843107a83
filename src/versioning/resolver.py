"""Role resolver: pick the matching Galaxy entry and decide drift.

The matching heuristic mirrors how Galaxy search behaves: a single hit is
trusted as-is, otherwise the first hit in the keyword's namespace wins.
The registry's version order is authoritative; the first listed version is
the latest and no semantic-version parsing is done here.
"""
from __future__ import annotations

import logging
from typing import Optional, Sequence

from common.logging_utils import extra_context, is_debug_enabled
from registry.errors import RegistryError
from versioning.models import CatalogEntry, DependencyReference, ResolutionResult

logger = logging.getLogger(__name__)


def expected_namespace(keyword: str) -> str:
    """Return the part of ``keyword`` before the first ".", or "" without one."""
    namespace, sep, _ = keyword.partition(".")
    return namespace if sep else ""


def select_entry(entries: Sequence[CatalogEntry], namespace: str) -> Optional[CatalogEntry]:
    """Pick the best match among search results.

    Args:
        entries: Search results in registry order.
        namespace: Namespace expected from the keyword.

    Returns:
        The only entry when exactly one was returned, else the first entry whose
        namespace equals ``namespace`` exactly; None when nothing matches.
    """
    if len(entries) == 1:
        return entries[0]
    for entry in entries:
        if entry.namespace == namespace:
            return entry
    return None


def latest_version(entry: CatalogEntry) -> Optional[str]:
    """First version in registry order, None for an empty list."""
    if not entry.versions:
        return None
    return entry.versions[0]


class RoleResolver:
    """Resolve dependency references against a registry client.

    ``client`` only needs a ``search(keyword) -> List[CatalogEntry]`` method
    raising ``RegistryError`` subclasses on failure.
    """

    def __init__(self, client):
        self.client = client

    def resolve(self, ref: DependencyReference) -> ResolutionResult:
        """Resolve one reference; registry failures become unresolved results."""
        keyword = ref.keyword
        namespace = expected_namespace(keyword)

        try:
            entries = self.client.search(keyword)
        except (RegistryError, ValueError) as exc:
            logger.debug(
                "Registry lookup failed",
                extra=extra_context(
                    event="resolve",
                    component="resolver",
                    outcome="lookup_failed",
                    keyword=keyword,
                    error=str(exc),
                )
            )
            return ResolutionResult.unresolved(ref, str(exc))

        entry = select_entry(entries, namespace)
        if entry is None:
            if not entries:
                reason = f"unable to find role in Ansible Galaxy: {keyword}"
            else:
                reason = (
                    f"unable to find role in Ansible Galaxy: {keyword} "
                    f"({len(entries)} results, none in namespace '{namespace}')"
                )
            return ResolutionResult.unresolved(ref, reason)

        latest = latest_version(entry)
        if not latest:
            return ResolutionResult.unresolved(
                ref, f"no versions published in Ansible Galaxy for role: {keyword}"
            )

        result = ResolutionResult.from_latest(ref, latest)
        if is_debug_enabled(logger):
            logger.debug(
                "Role resolved",
                extra=extra_context(
                    event="resolve",
                    component="resolver",
                    outcome=result.status.value,
                    keyword=keyword,
                    namespace=entry.namespace,
                    candidate_count=len(entries),
                    latest_version=latest,
                    declared_version=ref.declared_version,
                )
            )
        return result
