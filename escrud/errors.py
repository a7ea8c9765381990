"""Exceptions raised by escrud.

Connectivity failures from the client (``opensearchpy.ConnectionError`` and
friends) are not wrapped; they reach the caller as raised by the client.
"""

from typing import Any


class EscrudError(Exception):
    """Base class for every error raised by this package."""


class BackendError(EscrudError):
    """The backend answered with an error status."""

    def __init__(self, status: Any, info: Any = None, message: str = "") -> None:
        self.status = status
        self.info = info
        detail = message or "backend reported an error"
        super().__init__(f"{detail} [status={status}]: {info!r}")


class MalformedResponseError(EscrudError):
    """The backend answered with a payload that cannot be parsed."""


class InvalidRequestError(EscrudError, ValueError):
    """Input rejected before any request was sent."""


class InvalidQueryError(InvalidRequestError):
    """A :class:`~escrud.query.Query` cannot be rendered."""


class InvalidScriptError(InvalidRequestError):
    """An update script cannot be generated from the given arguments."""
