"""Shared HTTP helpers used by registry clients.

Encapsulates the request/timeout error handling so registry modules avoid
duplicating try/except blocks. Transport failures surface as
``registry.errors.NetworkError``; status-code handling is left to callers.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

import requests

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled, safe_url, Timer
from registry.errors import NetworkError

logger = logging.getLogger(__name__)


def safe_get(
    url: str,
    *,
    context: str,
    timeout: Optional[float] = None,
    retries: int = 0,
    **kwargs: Any,
) -> requests.Response:
    """Perform a GET request with consistent error handling and DEBUG traces.

    Args:
        url: Target URL.
        context: Human-readable source tag for logs (e.g., "galaxy").
        timeout: Per-attempt timeout in seconds. Defaults to Constants.REQUEST_TIMEOUT.
        retries: Extra attempts after a transport failure. Zero means a single call.
        **kwargs: Passed through to requests.get.

    Returns:
        requests.Response: The HTTP response object, whatever its status code.

    Raises:
        NetworkError: If every attempt timed out or failed to connect.
    """
    if timeout is None:
        timeout = Constants.REQUEST_TIMEOUT
    safe_target = safe_url(url)
    last_exception: Optional[str] = None

    for attempt in range(retries + 1):
        with Timer() as t:
            if is_debug_enabled(logger):
                logger.debug(
                    "HTTP request",
                    extra=extra_context(
                        event="http_request",
                        component="http_client",
                        action="GET",
                        target=safe_target,
                        context=context,
                        attempt=attempt + 1,
                    )
                )
            try:
                res = requests.get(url, timeout=timeout, **kwargs)
            except requests.Timeout:
                last_exception = f"{context} request timed out after {timeout} seconds"
                logger.debug(
                    "HTTP timeout",
                    extra=extra_context(
                        event="http_exception",
                        component="http_client",
                        action="GET",
                        outcome="timeout",
                        attempt=attempt + 1,
                        target=safe_target,
                    )
                )
                continue
            except requests.RequestException as exc:  # includes ConnectionError
                last_exception = f"{context} connection error: {exc}"
                logger.debug(
                    "HTTP request exception",
                    extra=extra_context(
                        event="http_exception",
                        component="http_client",
                        action="GET",
                        outcome="request_exception",
                        attempt=attempt + 1,
                        target=safe_target,
                    )
                )
                continue

            if is_debug_enabled(logger):
                logger.debug(
                    "HTTP response",
                    extra=extra_context(
                        event="http_response",
                        component="http_client",
                        action="GET",
                        status_code=res.status_code,
                        duration_ms=t.duration_ms(),
                        target=safe_target,
                        context=context,
                    )
                )
            return res

    raise NetworkError(last_exception or f"{context} request failed")
