"""Argument parsing functionality for ansible-requirements-lint."""

import argparse
import os

from constants import Constants


def _positive_int(value):
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value}")
    return number


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="ansible-requirements-lint",
        description=(
            "Check the Ansible roles pinned in requirements.yml for newer versions on Ansible Galaxy"
        ),
        add_help=True,
    )

    parser.add_argument("-r", "--requirements",
                        dest="REQUIREMENTS_FILE",
                        help=f"Path to the requirements file (default: {Constants.REQUIREMENTS_FILE})",
                        action="store", type=str,
                        default=Constants.REQUIREMENTS_FILE)
    parser.add_argument("--galaxy-url",
                        dest="GALAXY_URL",
                        help=(
                            "Base URL of the Ansible Galaxy server "
                            f"(default: ${Constants.ENV_GALAXY_URL} or {Constants.REGISTRY_URL_GALAXY})"
                        ),
                        action="store", type=str,
                        default=os.environ.get(Constants.ENV_GALAXY_URL) or Constants.REGISTRY_URL_GALAXY)
    parser.add_argument("-w", "--workers",
                        dest="WORKERS",
                        help=f"Number of concurrent Galaxy lookups (default: {Constants.MAX_WORKERS})",
                        action="store", type=_positive_int,
                        default=Constants.MAX_WORKERS)
    parser.add_argument("--retries",
                        dest="RETRIES",
                        help="Retry a lookup this many times after a network failure (default: 0)",
                        action="store", type=int,
                        choices=range(0, Constants.HTTP_RETRY_MAX + 1),
                        default=0)

    parser.add_argument("-o", "--output",
                        dest="OUTPUT",
                        help="Path to a JSON output file (implies --format json)",
                        action="store",
                        type=str)
    parser.add_argument("-f", "--format",
                        dest="OUTPUT_FORMAT",
                        help="Output format (text or json). Defaults to json with --output, text otherwise.",
                        action="store",
                        type=str.lower,
                        choices=Constants.OUTPUT_FORMATS)

    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str.upper,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        default='INFO')
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    parser.add_argument("--error-on-warnings",
                        dest="ERROR_ON_WARNINGS",
                        help="Exit with a non-zero status code if outdated roles are found.",
                        action="store_true")
    parser.add_argument("-q", "--quiet",
                        dest="QUIET",
                        help="Do not output to console.",
                        action="store_true")

    return parser.parse_args(argv)
