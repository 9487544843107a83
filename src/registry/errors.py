"""Registry error taxonomy.

Both errors are contained by the resolver; a failing lookup degrades to an
unresolved result for that dependency only.
"""


class RegistryError(Exception):
    """Base class for registry lookup failures."""


class NetworkError(RegistryError):
    """The request could not be sent, the connection failed, or it timed out."""


class ProtocolError(RegistryError):
    """The registry answered with a non-2xx status or an undecodable body."""

    def __init__(self, message: str, status_code=None):
        super().__init__(message)
        self.status_code = status_code
