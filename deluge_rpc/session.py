"""
Authenticated HTTP session against a Deluge Web JSON-RPC endpoint.

DelugeSession owns the endpoint URL, the password, a requests.Session and the
cookie set returned by the daemon. Every remote call goes through invoke(),
which assigns the request id, posts the JSON envelope, carries cookies
forward and unwraps the response envelope. The password is sent once, in the
auth.login call made by the constructor; after that the session cookie
authenticates each request.

Cookies are not accumulated: the cookie set of each successful response
replaces the stored one in full. Calls from several threads are allowed.
Request ids are assigned under a lock, but requests are not serialized, so
when responses race the last one to complete decides the stored cookies.
"""

import threading
from http import cookiejar
from http.cookies import CookieError, SimpleCookie
from typing import Any, Dict, List, Optional

import requests

from .config import Config
from .exceptions import AuthenticationFailed, HTTPStatusError, ProtocolError, RemoteError, TransportError
from .logger import logger
from .protocol import Request, Response, decode_response, encode_request


DELUGE_URL = Config.DELUGE_URL
DELUGE_PASSWORD = Config.DELUGE_PASSWORD
DELUGE_TIMEOUT = Config.DELUGE_TIMEOUT


class _RejectAllPolicy(cookiejar.DefaultCookiePolicy):
    """Keeps requests.Session from storing response cookies in its own jar."""

    def set_ok(self, cookie, request):
        return False


def response_cookies(resp) -> Dict[str, str]:
    """
    Name to value for every Set-Cookie header of a response.

    Read from the raw headers, so cookies whose Domain does not match the
    request host are kept. Headers that do not parse are skipped.
    """
    cookies = {}
    for header in resp.raw.headers.getlist("Set-Cookie"):
        parsed = SimpleCookie()
        try:
            parsed.load(header)
        except CookieError as e:
            logger.warning(f"Skipping malformed Set-Cookie header: {e}")
            continue
        for name, morsel in parsed.items():
            cookies[name] = morsel.value
    return cookies


class DelugeSession:
    def __init__(
        self,
        url: str = DELUGE_URL,
        password: str = DELUGE_PASSWORD,
        timeout: Optional[float] = DELUGE_TIMEOUT
    ):
        self.url = url
        self.password = password
        self.timeout = timeout

        self.http = requests.Session()
        self.http.cookies.set_policy(_RejectAllPolicy())

        self._cookies: Dict[str, str] = {}
        self._cookies_lock = threading.Lock()
        self._id = 0
        self._id_lock = threading.Lock()

        try:
            self._auth_login()
        except Exception:
            self.http.close()
            raise

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    @property
    def cookies(self) -> Dict[str, str]:
        """Copy of the cookie set that will be sent with the next request."""
        with self._cookies_lock:
            return dict(self._cookies)

    @property
    def last_request_id(self) -> int:
        with self._id_lock:
            return self._id

    def close(self):
        self.http.close()

    def _next_id(self) -> int:
        with self._id_lock:
            self._id += 1
            return self._id

    def _auth_login(self):
        response = self.invoke("auth.login", [self.password])
        if response.result is not True:
            logger.error(f"Authentication failed at {self.url}")
            raise AuthenticationFailed(f"Authentication failed at {self.url}")
        logger.info(f"Authenticated with Deluge at {self.url}")

    def invoke(self, method: str, params: Optional[List[Any]] = None) -> Response:
        """
        Call a remote method and return its decoded response envelope.

        Args:
            method: Remote procedure name, e.g. "core.get_torrent_status"
            params: Positional arguments, in the order the procedure expects

        Returns:
            The Response; its result is not validated

        Raises:
            SerializationError: params cannot be encoded as JSON
            TransportError: the HTTP request failed
            HTTPStatusError: the daemon answered with a status other than 200
            ProtocolError: the body is not a response envelope
            RemoteError: the envelope carries a non-null error
        """
        req = Request(method=method, id=self._next_id(), params=list(params or []))
        body = encode_request(req)

        logger.debug(f"-> {req.method} (id {req.id})")
        try:
            resp = self.http.post(
                self.url,
                data=body,
                headers={"Content-Type": "application/json"},
                cookies=self.cookies,
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"{req.method} (id {req.id}) to {self.url} failed: {e}")
            raise TransportError(f"Request to {self.url} failed: {e}") from e

        if resp.status_code != 200:
            logger.error(f"{req.method} (id {req.id}) returned HTTP {resp.status_code}")
            raise HTTPStatusError(resp.status_code)

        with self._cookies_lock:
            self._cookies = response_cookies(resp)

        try:
            response = decode_response(resp.content)
        except ProtocolError as e:
            logger.error(f"{req.method} (id {req.id}): {e}")
            raise

        if not response.ok:
            logger.warning(f"{req.method} (id {req.id}) returned error: {response.error}")
            raise RemoteError(req.method, req.id, response.error)

        logger.debug(f"<- {req.method} (id {req.id})")
        return response

