"""
Session store for the card tracker client.

Holds the signed-in identity, restores it from durable storage on creation,
and is the only source of Authorization headers for outbound requests.
Observers are told whenever the current session changes.
"""

from __future__ import annotations

import json
import logging
from typing import Dict, List, Optional

import requests

from . import config
from .api import decode_json, perform_request
from .errors import AuthenticationError, SessionDecodeError
from .models import Session
from .persistence import KeyValueStore, MemoryKeyValueStore
from .token import bearer, token_preview


logger = logging.getLogger(__name__)

LOGIN_FAILED = "Login failed"


class SessionObserver:
    """Interface for session change observers."""

    def on_session_changed(self, session: Optional[Session]) -> None:
        """Called after login, logout and restore."""
        pass


class SessionStore:
    """
    Process-wide handle to the current user.

    Pass one instance to every client that needs authorization; nothing in
    this package reaches for a global store.
    """

    def __init__(
        self,
        storage: Optional[KeyValueStore] = None,
        http: Optional[requests.Session] = None,
        base_url: Optional[str] = None,
        origin: Optional[str] = None,
        timeout: Optional[float] = None,
        storage_key: str = config.STORAGE_KEY,
    ):
        self.storage = storage if storage is not None else MemoryKeyValueStore()
        self.http = http or requests.Session()
        self.base_url = config.API_BASE if base_url is None else base_url
        self.origin = origin or config.ORIGIN
        self.timeout = timeout if timeout is not None else config.HTTP_TIMEOUT
        self.storage_key = storage_key
        self._session: Optional[Session] = None
        self._observers: List[SessionObserver] = []
        self.restore()

    @property
    def session(self) -> Optional[Session]:
        return self._session

    @property
    def is_authenticated(self) -> bool:
        return self._session is not None

    @property
    def has_token(self) -> bool:
        return self._session is not None and bool(self._session.token)

    def add_observer(self, observer: SessionObserver) -> None:
        self._observers.append(observer)

    def remove_observer(self, observer: SessionObserver) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def restore(self) -> None:
        """Load the persisted session, treating a bad record as logged out."""
        saved = self.storage.get(self.storage_key)
        if not saved:
            self._session = None
        else:
            try:
                self._session = Session.from_json(json.loads(saved))
                logger.debug("Restored session for %s", self._session.username)
            except (ValueError, RecursionError, SessionDecodeError) as e:
                logger.warning("Discarding unreadable stored session: %s", e)
                self._session = None
                self.storage.remove(self.storage_key)
        self._notify()

    def login(self, username: str, password: str) -> Session:
        url = config.absolute_url(config.api_url(config.LOGIN_PATH, self.base_url), self.origin)
        resp = perform_request(
            self.http,
            "post",
            url,
            error_cls=AuthenticationError,
            message=LOGIN_FAILED,
            headers={**config.DEFAULT_HEADERS, "Content-Type": "application/json"},
            json={"username": username, "password": password},
            timeout=self.timeout,
        )
        data = decode_json(resp, AuthenticationError, LOGIN_FAILED)
        try:
            session = Session.from_json(data)
        except SessionDecodeError as e:
            logger.warning("Login response was not a usable session: %s", e)
            raise AuthenticationError(LOGIN_FAILED, status_code=resp.status_code) from e
        self.storage.set(self.storage_key, json.dumps(session.to_json()))
        self._session = session
        logger.info("Logged in as %s (roles=%s, token=%s)", session.username, session.roles, token_preview(session.token))
        self._notify()
        return session

    def logout(self) -> None:
        """Forget the session locally; the backend is not contacted."""
        if self._session is not None:
            logger.info("Logged out %s", self._session.username)
        self._session = None
        self.storage.remove(self.storage_key)
        self._notify()

    def auth_headers(self) -> Dict[str, str]:
        if self._session is None or not self._session.token:
            return {}
        return {"Authorization": bearer(self._session.token)}

    def _notify(self) -> None:
        for observer in list(self._observers):
            try:
                observer.on_session_changed(self._session)
            except Exception:
                logger.exception("Session observer %r failed", observer)
