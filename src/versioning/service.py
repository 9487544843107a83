"""Run the resolver over a whole manifest on a bounded thread pool."""
from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Dict, List, Sequence

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled, Timer
from versioning.models import DependencyReference, ResolutionResult
from versioning.resolver import RoleResolver

logger = logging.getLogger(__name__)

CANCELLED = "cancelled"


class VersionResolutionService:
    """Resolve many references independently.

    Results come back in input order. A worker that raises unexpectedly only
    affects its own dependency, and an interrupted run reports whatever is
    left as unresolved instead of failing.
    """

    def __init__(self, resolver: RoleResolver, max_workers: int = Constants.MAX_WORKERS):
        self.resolver = resolver
        self.max_workers = max(1, int(max_workers))

    def resolve_all(self, refs: Sequence[DependencyReference]) -> List[ResolutionResult]:
        if not refs:
            return []

        results: Dict[int, ResolutionResult] = {}
        with Timer() as timer:
            if self.max_workers == 1:
                self._resolve_sequential(refs, results)
            else:
                self._resolve_pooled(refs, results)

        if is_debug_enabled(logger):
            logger.debug(
                "Resolution finished",
                extra=extra_context(
                    event="function_exit",
                    component="service",
                    action="resolve_all",
                    count=len(refs),
                    workers=self.max_workers,
                    duration_ms=timer.duration_ms(),
                )
            )
        return [
            results.get(i) or ResolutionResult.unresolved(ref, CANCELLED)
            for i, ref in enumerate(refs)
        ]

    def _resolve_one(self, ref: DependencyReference) -> ResolutionResult:
        try:
            return self.resolver.resolve(ref)
        except Exception as exc:  # pylint: disable=broad-exception-caught
            logger.error("Unexpected failure resolving %s: %s", ref.name, exc)
            return ResolutionResult.unresolved(ref, f"unexpected error: {exc}")

    def _resolve_sequential(self, refs, results: Dict[int, ResolutionResult]) -> None:
        try:
            for i, ref in enumerate(refs):
                results[i] = self._resolve_one(ref)
        except KeyboardInterrupt:
            logger.warning("Interrupted; %d of %d roles left unchecked.", len(refs) - len(results), len(refs))

    def _resolve_pooled(self, refs, results: Dict[int, ResolutionResult]) -> None:
        executor = ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix="galaxy")
        futures: Dict[Future, int] = {}
        try:
            for i, ref in enumerate(refs):
                futures[executor.submit(self._resolve_one, ref)] = i
            for future, i in futures.items():
                results[i] = future.result()
        except KeyboardInterrupt:
            executor.shutdown(wait=False, cancel_futures=True)
            for future, i in futures.items():
                if i in results or not future.done() or future.cancelled():
                    continue
                if future.exception() is None:
                    results[i] = future.result()
            # requests cannot be aborted; running lookups end within their timeout
            logger.warning(
                "Interrupted; %d of %d roles left unchecked, waiting up to %ss for "
                "lookups already in flight.",
                len(refs) - len(results), len(refs), Constants.REQUEST_TIMEOUT,
            )
            return
        executor.shutdown(wait=True)
