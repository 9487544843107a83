"""ansible-requirements-lint - check pinned Ansible roles against Ansible Galaxy

    Returns:
        int: Exit code
"""
import logging
import sys

from constants import Constants, ExitCodes, OutputFormats
from common.logging_utils import configure_logging, extra_context, is_debug_enabled
from args import parse_args
from manifest import ManifestError, load_requirements
from registry.galaxy import GalaxyClient
from versioning.resolver import RoleResolver
from versioning.service import VersionResolutionService
import report

logger = logging.getLogger(__name__)


def _setup_logging(args) -> bool:
    """Configure logging based on CLI arguments.

    Returns False when the log file cannot be opened.
    """
    configure_logging(args.LOG_LEVEL, quiet=args.QUIET)
    if args.LOG_FILE:
        try:
            file_handler = logging.FileHandler(args.LOG_FILE)
        except OSError as e:
            logger.error("Log file couldn't be opened: %s, aborting", e)
            return False
        file_handler.setFormatter(logging.Formatter(Constants.LOG_FILE_FORMAT))
        logging.getLogger().addHandler(file_handler)
        logger.info("Logging to file: %s", args.LOG_FILE)
    return True


def _output_format(args) -> OutputFormats:
    if args.OUTPUT_FORMAT:
        return OutputFormats(args.OUTPUT_FORMAT)
    if args.OUTPUT:
        return OutputFormats.JSON
    return OutputFormats.TEXT


def run(args) -> ExitCodes:
    """Load the manifest, resolve every pinned role and report drift."""
    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(event="function_entry", component="cli", action="run")
        )

    try:
        refs = load_requirements(args.REQUIREMENTS_FILE)
    except ManifestError as e:
        logger.error("%s, aborting", e)
        return ExitCodes.FILE_ERROR

    if not refs:
        logger.warning("No pinned roles found in %s.", args.REQUIREMENTS_FILE)
        return ExitCodes.SUCCESS
    logger.info("Loaded %d pinned roles from %s.", len(refs), args.REQUIREMENTS_FILE)

    client = GalaxyClient(base_url=args.GALAXY_URL, retries=args.RETRIES)
    service = VersionResolutionService(RoleResolver(client), max_workers=args.WORKERS)
    results = service.resolve_all(refs)

    fmt = _output_format(args)
    if fmt == OutputFormats.JSON:
        if args.OUTPUT or not args.QUIET:
            report.export_json(results, args.OUTPUT)
    else:
        report.log_results(results)

    code = report.exit_code(results, error_on_warnings=args.ERROR_ON_WARNINGS)
    if is_debug_enabled(logger):
        logger.debug(
            "CLI finished",
            extra=extra_context(
                event="function_exit",
                component="cli",
                action="run",
                outcome=code.name.lower(),
            )
        )
    return code


def main(argv=None):
    """Main function of the program."""
    args = parse_args(argv)
    if not _setup_logging(args):
        sys.exit(ExitCodes.FILE_ERROR.value)
    sys.exit(run(args).value)


if __name__ == "__main__":
    main()
