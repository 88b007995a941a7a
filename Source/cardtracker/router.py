"""Route table and the login guard that runs before every navigation."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Union

from .errors import NavigationError
from .session_manager import SessionStore

logger = logging.getLogger(__name__)

LOGIN = "login"
HOME = "home"


@dataclass(frozen=True)
class Route:
    name: str
    path: str
    public: bool = False


@dataclass(frozen=True)
class Allow:
    route: Route


@dataclass(frozen=True)
class Redirect:
    to: str


Decision = Union[Allow, Redirect]

DEFAULT_ROUTES = (
    Route(LOGIN, "/login", public=True),
    Route(HOME, "/"),
)


class NavigationGuard:
    """Keeps anonymous users on the login page and signed-in users off it.

    With ``require_token`` a session restored without a bearer token counts
    as anonymous; by default any session counts.
    """

    def __init__(self, session_store: SessionStore, require_token: bool = False,
                 login_route: str = LOGIN, home_route: str = HOME):
        self.session_store = session_store
        self.require_token = require_token
        self.login_route = login_route
        self.home_route = home_route

    def _signed_in(self) -> bool:
        if self.require_token:
            return self.session_store.has_token
        return self.session_store.is_authenticated

    def before_each(self, to: Route) -> Decision:
        signed_in = self._signed_in()
        if not to.public and not signed_in:
            return Redirect(self.login_route)
        if to.name == self.login_route and signed_in:
            return Redirect(self.home_route)
        return Allow(to)


class Router:
    """Resolves targets and follows guard redirects.

    Each redirect is treated as a fresh navigation and guarded again.
    """

    def __init__(self, guard: NavigationGuard, routes: Iterable[Route] = DEFAULT_ROUTES, max_redirects: int = 5):
        self.guard = guard
        self.max_redirects = max_redirects
        self._by_name: Dict[str, Route] = {}
        self._by_path: Dict[str, Route] = {}
        for route in routes:
            self._by_name[route.name] = route
            self._by_path[route.path] = route

    def resolve(self, target: str) -> Route:
        route: Optional[Route] = self._by_name.get(target) or self._by_path.get(target)
        if route is None:
            raise KeyError(f"Unknown route: {target}")
        return route

    def navigate(self, target: str) -> Route:
        route = self.resolve(target)
        visited: List[str] = [route.name]
        for _ in range(self.max_redirects + 1):
            decision = self.guard.before_each(route)
            if isinstance(decision, Allow):
                return decision.route
            logger.debug("Navigation to %s redirected to %s", route.name, decision.to)
            route = self.resolve(decision.to)
            visited.append(route.name)
        raise NavigationError("Too many redirects: " + " -> ".join(visited))
