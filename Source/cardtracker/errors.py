"""Exception types raised by the cardtracker client.

All of them derive from ``RuntimeError`` so callers written against plain
runtime failures keep working.
"""

from __future__ import annotations

from typing import Optional


class CardTrackerError(RuntimeError):
    """Base class for every error raised by this package."""


class TransportError(CardTrackerError):
    """The request never produced an HTTP response (DNS, refused, timeout)."""


class HttpStatusError(CardTrackerError):
    """The backend answered with a non-2xx status.

    The message is fixed per operation; ``status_code`` is kept for logging
    and diagnostics only.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class FetchError(HttpStatusError):
    pass


class UpsertError(HttpStatusError):
    pass


class PatchError(HttpStatusError):
    pass


class DeleteError(HttpStatusError):
    pass


class AuthenticationError(HttpStatusError):
    pass


class SessionDecodeError(CardTrackerError):
    """A persisted session record could not be decoded."""


class NavigationError(CardTrackerError):
    """Redirects kept bouncing past the router's limit."""
