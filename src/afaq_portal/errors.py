"""Exceptions raised by the portal client."""

from typing import Optional


class PortalError(Exception):
    """Base class for every portal client failure."""

    pass


class PortalAPIError(PortalError):
    """Raised when the API answers with a non-2xx status.

    The message starts with the status code (``"401: Unauthorized"``), which
    is what unauthorized classification matches on.
    """

    def __init__(self, status: int, detail: str, path: Optional[str] = None):
        super().__init__(f"{status}: {detail}")
        self.status = status
        self.detail = detail
        self.path = path


class PortalNetworkError(PortalError):
    """Raised when a request never produced a response."""

    pass


class PortalSchemaError(PortalError):
    """Raised when a response payload does not have the expected shape."""

    pass


class ConfigError(PortalError):
    """Raised when required settings are missing."""

    pass
