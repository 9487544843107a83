"""Rendering of resolution results and exit-code policy."""

import json
import logging
import sys
from typing import Dict, List, Optional, Sequence

from constants import ExitCodes
from versioning.models import ResolutionResult, ResolutionStatus

logger = logging.getLogger(__name__)


def log_results(results: Sequence[ResolutionResult]) -> None:
    """Log one line per outdated or unresolved role, then a summary.

    Outdated roles are warnings; roles that could not be checked are errors
    so they never read as "checked and current".
    """
    for r in results:
        ref = r.reference
        if r.status == ResolutionStatus.OUTDATED:
            logger.warning(
                "Role %s is outdated: %s is available (declared %s).",
                ref.name, r.latest_version, ref.declared_version,
            )
        elif r.status == ResolutionStatus.UNRESOLVED:
            logger.error("Unable to check role %s: %s", ref.name, r.error or "unknown error")
        else:
            logger.debug("Role %s is up to date (%s).", ref.name, ref.declared_version)

    counts = summarize(results)
    logger.info(
        "Checked %d roles: %d up to date, %d outdated, %d unresolved.",
        len(results),
        counts[ResolutionStatus.UP_TO_DATE],
        counts[ResolutionStatus.OUTDATED],
        counts[ResolutionStatus.UNRESOLVED],
    )


def summarize(results: Sequence[ResolutionResult]) -> Dict[ResolutionStatus, int]:
    counts = {status: 0 for status in ResolutionStatus}
    for r in results:
        counts[r.status] += 1
    return counts


def to_records(results: Sequence[ResolutionResult]) -> List[dict]:
    return [
        {
            "name": r.reference.name,
            "source": r.reference.source_hint,
            "declared_version": r.reference.declared_version,
            "latest_version": r.latest_version,
            "status": r.status.value,
            "error": r.error,
        }
        for r in results
    ]


def export_json(results: Sequence[ResolutionResult], path: Optional[str] = None) -> None:
    """Write results as JSON to ``path``, or to stdout when no path is given.

    Args:
        results: Resolution results.
        path: Output file path.
    """
    data = to_records(results)
    if path is None:
        json.dump(data, sys.stdout, ensure_ascii=False, indent=4)
        sys.stdout.write("\n")
        return
    try:
        with open(path, "w", encoding="utf-8") as file:
            json.dump(data, file, ensure_ascii=False, indent=4)
        logger.info("JSON file has been successfully exported at: %s", path)
    except OSError as e:
        logger.error("JSON file couldn't be written to disk: %s", e)
        sys.exit(ExitCodes.FILE_ERROR.value)


def exit_code(results: Sequence[ResolutionResult], error_on_warnings: bool = False) -> ExitCodes:
    """Pick the process exit code.

    Any unresolved role wins over outdated ones; outdated roles only fail the
    run when ``error_on_warnings`` is set.
    """
    counts = summarize(results)
    if counts[ResolutionStatus.UNRESOLVED]:
        return ExitCodes.CONNECTION_ERROR
    if error_on_warnings and counts[ResolutionStatus.OUTDATED]:
        return ExitCodes.EXIT_WARNINGS
    return ExitCodes.SUCCESS
