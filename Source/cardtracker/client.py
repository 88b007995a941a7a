from __future__ import annotations

from typing import Optional

import requests

from .cards import CardsClient
from .expansions import ExpansionsClient
from .offers import OffersClient
from .persistence import FileKeyValueStore, KeyValueStore
from .router import NavigationGuard, Router
from .session_manager import SessionStore


class CardTrackerAPI:
    """One HTTP session and one session store shared by every resource client."""

    def __init__(
        self,
        storage: Optional[KeyValueStore] = None,
        base_url: Optional[str] = None,
        origin: Optional[str] = None,
        timeout: Optional[float] = None,
        http: Optional[requests.Session] = None,
        require_token: bool = False,
    ):
        self.http = http or requests.Session()
        self.session = SessionStore(
            storage=storage if storage is not None else FileKeyValueStore(),
            http=self.http,
            base_url=base_url,
            origin=origin,
            timeout=timeout,
        )
        kwargs = dict(http=self.http, base_url=base_url, origin=origin, timeout=timeout)
        self.cards = CardsClient(self.session, **kwargs)
        self.expansions = ExpansionsClient(self.session, **kwargs)
        self.offers = OffersClient(self.session, **kwargs)
        self.router = Router(NavigationGuard(self.session, require_token=require_token))

    def login(self, username: str, password: str):
        return self.session.login(username, password)

    def logout(self) -> None:
        self.session.logout()
