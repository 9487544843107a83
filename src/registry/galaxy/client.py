"""Ansible Galaxy registry client: search roles via the v1 search API."""
from __future__ import annotations

import json
import logging
import urllib.parse
from typing import Any, Dict, List

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled, Timer, safe_url
from registry.errors import ProtocolError
from versioning.models import CatalogEntry

import registry.galaxy as galaxy_pkg

logger = logging.getLogger(__name__)

HEADERS_JSON = {"User-Agent": Constants.USER_AGENT, "Accept": "application/json"}


class GalaxyClient:
    """Thin client over ``GET {base_url}/api/v1/search/roles/?keywords=...``.

    One outbound call per ``search`` (more only when ``retries`` is set, and
    only for transport failures). Nothing is cached.
    """

    def __init__(
        self,
        base_url: str = Constants.REGISTRY_URL_GALAXY,
        timeout: float = Constants.REQUEST_TIMEOUT,
        retries: int = 0,
    ):
        if not base_url:
            base_url = Constants.REGISTRY_URL_GALAXY
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.retries = max(0, int(retries))

    def search_url(self, keyword: str) -> str:
        """Build the search URL with ``keyword`` as the only filter."""
        query = urllib.parse.urlencode({"keywords": keyword})
        return f"{self.base_url}{Constants.GALAXY_SEARCH_PATH}?{query}"

    def search(self, keyword: str) -> List[CatalogEntry]:
        """Search Galaxy for roles matching ``keyword``.

        Args:
            keyword: Role name or source, e.g. "geerlingguy.docker".

        Returns:
            One CatalogEntry per search result, in the order Galaxy returned them.

        Raises:
            ValueError: If keyword is empty.
            NetworkError: If the request failed or timed out.
            ProtocolError: On a non-2xx status or a body of unexpected shape.
        """
        if not keyword:
            raise ValueError("search keyword must be non-empty")

        url = self.search_url(keyword)
        with Timer() as timer:
            res = galaxy_pkg.safe_get(
                url,
                context="galaxy",
                timeout=self.timeout,
                retries=self.retries,
                headers=HEADERS_JSON,
            )

        if not 200 <= res.status_code < 300:
            logger.warning(
                "HTTP non-2xx from Galaxy",
                extra=extra_context(
                    event="http_response",
                    outcome="handled_non_2xx",
                    status_code=res.status_code,
                    duration_ms=timer.duration_ms(),
                    target=safe_url(url),
                    package_manager="galaxy",
                )
            )
            raise ProtocolError(
                f"unexpected Ansible Galaxy response code: {res.status_code}",
                status_code=res.status_code,
            )

        try:
            payload = json.loads(res.text)
        except (json.JSONDecodeError, TypeError) as exc:
            raise ProtocolError(f"couldn't decode Ansible Galaxy response: {exc}") from exc

        entries = _parse_search_results(payload)
        if is_debug_enabled(logger):
            logger.debug(
                "Galaxy search parsed",
                extra=extra_context(
                    event="parse",
                    component="client",
                    action="search",
                    outcome="success",
                    count=len(entries),
                    keyword=keyword,
                    package_manager="galaxy",
                )
            )
        return entries


def _parse_search_results(payload: Any) -> List[CatalogEntry]:
    """Turn the search response document into catalog entries.

    ``count`` is informational; the ``results`` list is what gets parsed.
    """
    if not isinstance(payload, dict):
        raise ProtocolError("Ansible Galaxy response is not a JSON object")
    results = payload.get("results")
    if not isinstance(results, list):
        raise ProtocolError("Ansible Galaxy response has no 'results' list")
    return [_parse_result(item) for item in results]


def _parse_result(item: Any) -> CatalogEntry:
    """Decode one search result.

    Missing or null fields decode to empty values (``""`` namespace, no
    versions) so one sparse result does not spoil the whole search; fields of
    the wrong type are a protocol error.
    """
    if not isinstance(item, dict):
        raise ProtocolError("Ansible Galaxy result is not a JSON object")
    summary = _field(item, "summary_fields", dict, {})
    namespace = _field(summary, "namespace", dict, {})
    namespace_name = _field(namespace, "name", str, "")

    names = []
    for v in _field(summary, "versions", list, []):
        if not isinstance(v, dict):
            raise ProtocolError("Ansible Galaxy version is not a JSON object")
        names.append(_field(v, "name", str, ""))

    return CatalogEntry(namespace=namespace_name, versions=tuple(names))


def _field(obj: Dict[str, Any], key: str, kind: type, default: Any) -> Any:
    value = obj.get(key)
    if value is None:
        return default
    if not isinstance(value, kind):
        raise ProtocolError(f"Ansible Galaxy field '{key}' is not a {kind.__name__}")
    return value
