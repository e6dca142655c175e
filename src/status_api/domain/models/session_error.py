"""Failure taxonomy for status queries."""
from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    """Stable categories a failed status query is reported under."""

    TIMEOUT = ("timeout", "Connection to server timed out")
    INVALID_DOMAIN = ("invalid_domain", "The domain name could not be resolved")
    CONNECTION_REFUSED = ("connection_refused", "Server refused the connection")
    OFFLINE = ("offline", "Server appears to be offline or unreachable")

    def __init__(self, code: str, message: str) -> None:
        self.code = code
        self.message = message


class SessionError(Exception):
    """Terminal outcome of a status query that did not produce a status."""

    def __init__(self, kind: ErrorKind) -> None:
        super().__init__(kind.message)
        self.kind = kind

    @property
    def code(self) -> str:
        return self.kind.code

    @property
    def message(self) -> str:
        return self.kind.message

    def to_dict(self) -> dict:
        """Return the JSON-ready failure body."""

        return {
            "success": False,
            "error": {"code": self.code, "message": self.message},
        }
