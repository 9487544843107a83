"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    CONNECTION_ERROR = 2
    EXIT_WARNINGS = 3


class OutputFormats(Enum):
    """Report formats supported by the program.

    Args:
        Enum (string): Report formats supported by the program.
    """

    TEXT = "text"
    JSON = "json"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    REGISTRY_URL_GALAXY = "https://galaxy.ansible.com"
    GALAXY_SEARCH_PATH = "/api/v1/search/roles/"
    USER_AGENT = "ansible-requirements-lint"
    REQUEST_TIMEOUT = 10  # Timeout in seconds for every registry request
    HTTP_RETRY_MAX = 3  # Upper bound for the optional --retries flag
    MAX_WORKERS = 4
    REQUIREMENTS_FILE = "requirements.yml"
    OUTPUT_FORMATS = [fmt.value for fmt in OutputFormats]
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    LOG_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
    ENV_LOG_LEVEL = "ARL_LOG_LEVEL"
    ENV_GALAXY_URL = "ARL_GALAXY_URL"
