from __future__ import annotations

import json
from urllib.parse import parse_qs, urlparse
from typing import Any, List, Optional, Tuple

import requests

ORIGIN = "http://testserver"


def make_response(status: int = 200, body: Any = None, text: Optional[str] = None) -> requests.Response:
    resp = requests.Response()
    resp.status_code = status
    if text is not None:
        resp._content = text.encode("utf-8")
        resp.headers["Content-Type"] = "text/plain"
    elif body is not None:
        resp._content = json.dumps(body).encode("utf-8")
        resp.headers["Content-Type"] = "application/json"
    else:
        resp._content = b""
    resp.encoding = "utf-8"
    return resp


class FakeHTTP(requests.Session):
    """requests.Session that records prepared requests instead of sending them.

    Responses are queued per (METHOD, path) and served in order; a queued
    exception is raised instead of returned.
    """

    def __init__(self):
        super().__init__()
        self.sent: List[requests.PreparedRequest] = []
        self._routes: List[Tuple[str, str, Any]] = []

    def queue(self, method: str, path: str, response: Any) -> None:
        self._routes.append((method.upper(), path, response))

    def send(self, request, **kwargs):
        self.sent.append(request)
        path = urlparse(request.url).path
        for i, (method, route_path, response) in enumerate(self._routes):
            if method == request.method and route_path == path:
                del self._routes[i]
                if isinstance(response, Exception):
                    raise response
                response.request = request
                response.url = request.url
                return response
        return make_response(404, {"error": "not found"})

    @property
    def last(self) -> requests.PreparedRequest:
        return self.sent[-1]


def query(request: requests.PreparedRequest) -> dict:
    parsed = urlparse(request.url)
    return {k: v[0] if len(v) == 1 else v for k, v in parse_qs(parsed.query, keep_blank_values=True).items()}


def body(request: requests.PreparedRequest) -> Any:
    return json.loads(request.body)
