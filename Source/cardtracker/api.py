from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional, Type, TypeVar

import requests

from . import config
from .errors import HttpStatusError, TransportError

if TYPE_CHECKING:
    from .session_manager import SessionStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


def perform_request(
    http: requests.Session,
    method: str,
    url: str,
    *,
    error_cls: Type[HttpStatusError],
    message: str,
    headers: Optional[Dict[str, str]] = None,
    params: Optional[Dict[str, Any]] = None,
    json: Any = None,
    timeout: Optional[float] = None,
) -> requests.Response:
    """Issue one request and map any failure to ``error_cls(message)``.

    No retries: a refused connection or a non-2xx status fails immediately.
    """
    verb = method.upper()
    try:
        resp = http.request(
            verb,
            url,
            headers=headers,
            params=params,
            json=json,
            timeout=timeout if timeout is not None else config.HTTP_TIMEOUT,
        )
    except requests.RequestException as e:
        logger.warning("%s %s failed before a response: %s", verb, url, e)
        raise TransportError(message) from e
    logger.debug("%s %s -> %s", verb, url, resp.status_code)
    if not 200 <= resp.status_code < 300:
        body = (resp.text or "").strip()
        snippet = body[:200] + ("..." if len(body) > 200 else "")
        logger.warning("%s %s -> HTTP %s: %s", verb, url, resp.status_code, snippet)
        raise error_cls(message, status_code=resp.status_code)
    return resp


def decode_json(resp: requests.Response, error_cls: Type[HttpStatusError], message: str) -> Any:
    try:
        return resp.json()
    except ValueError:
        logger.warning("Invalid JSON response. Content-Type: %s", resp.headers.get("content-type"))
        raise error_cls(message, status_code=resp.status_code)


class ApiClient:
    """Base for the resource clients.

    Holds the shared HTTP session and the session store that supplies the
    Authorization header. Subclasses only describe URLs and payloads.
    """

    def __init__(
        self,
        session_store: "SessionStore",
        http: Optional[requests.Session] = None,
        base_url: Optional[str] = None,
        origin: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.session_store = session_store
        self.http = http or session_store.http
        self.base_url = config.API_BASE if base_url is None else base_url
        self.origin = origin or config.ORIGIN
        self.timeout = timeout if timeout is not None else config.HTTP_TIMEOUT

    def _url(self, path: str) -> str:
        return config.absolute_url(config.api_url(path, self.base_url), self.origin)

    def _headers(self, json_content: bool = False) -> Dict[str, str]:
        headers = dict(config.DEFAULT_HEADERS)
        if json_content:
            headers["Content-Type"] = "application/json"
        headers.update(self.session_store.auth_headers())
        return headers

    def _request(
        self,
        method: str,
        path: str,
        error_cls: Type[HttpStatusError],
        message: str,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
    ) -> requests.Response:
        return perform_request(
            self.http,
            method,
            self._url(path),
            error_cls=error_cls,
            message=message,
            headers=self._headers(json_content=json is not None),
            params=params,
            json=json,
            timeout=self.timeout,
        )

    def _get_list(
        self,
        path: str,
        decode: Callable[[Dict[str, Any]], T],
        error_cls: Type[HttpStatusError],
        message: str,
        params: Optional[Dict[str, Any]] = None,
    ) -> List[T]:
        resp = self._request("get", path, error_cls, message, params=params)
        data = decode_json(resp, error_cls, message)
        if not isinstance(data, list):
            logger.warning("Expected a JSON array from %s, got %s", path, type(data).__name__)
            raise error_cls(message, status_code=resp.status_code)
        try:
            return [decode(item) for item in data]
        except (ValueError, TypeError, AttributeError) as e:
            logger.warning("Malformed item in response from %s: %s", path, e)
            raise error_cls(message, status_code=resp.status_code) from e
