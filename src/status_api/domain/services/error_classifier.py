"""Map low-level connection failures onto the stable error taxonomy."""
from __future__ import annotations

import asyncio
import socket

from status_api.domain.models.session_error import ErrorKind, SessionError


def classify_error(error: BaseException) -> SessionError:
    """Return the :class:`SessionError` describing ``error``.

    Checks run in priority order: timeouts, name resolution failures (including
    host names that cannot be IDNA-encoded), refused connections, then
    everything else is reported as offline.
    """

    if isinstance(error, SessionError):
        return error

    session_error = SessionError(_classify_kind(error))
    session_error.__cause__ = error
    return session_error


def _classify_kind(error: BaseException) -> ErrorKind:
    if isinstance(error, (asyncio.TimeoutError, socket.timeout)):
        return ErrorKind.TIMEOUT
    if isinstance(error, (socket.gaierror, UnicodeError)):
        return ErrorKind.INVALID_DOMAIN
    if isinstance(error, ConnectionRefusedError):
        return ErrorKind.CONNECTION_REFUSED
    return ErrorKind.OFFLINE
