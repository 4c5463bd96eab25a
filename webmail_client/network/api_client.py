"""
High-level REST API client wrapper.

This module provides a clean interface to the webmail JSON API, hiding
requests and mapping transport failures onto the client's error hierarchy.
Blocking HTTP calls run in a worker thread via asyncio.to_thread, so each
public method is a coroutine that suspends only while the request is in
flight.
"""
import asyncio
import logging
import threading
import urllib.parse
from typing import TYPE_CHECKING, Any, Iterable, List, Optional

import requests

from webmail_client import config
from webmail_client.models import MessageBody, MessageSummary, OutgoingMessage
from webmail_client.utils.errors import (
    ApiConnectionError,
    ApiResponseError,
    ApiStatusError,
    AuthenticationError,
)

if TYPE_CHECKING:
    from webmail_client.auth.session import Session


logger = logging.getLogger(__name__)


def _quote_path(segment: str) -> str:
    return urllib.parse.quote(segment, safe="")


class ApiClient:
    """
    REST client bound to one Session.

    Every request carries the session's Authorization header. Requests
    from concurrent operations share one requests.Session and are
    serialized at the transport.
    """

    def __init__(
        self,
        session: "Session",
        base_url: str = config.DEFAULT_BASE_URL,
        timeout: float = config.DEFAULT_REQUEST_TIMEOUT,
        http: Optional[requests.Session] = None,
    ):
        """
        Initialize the API client.

        Args:
            session: The logged-in session.
            base_url: API root, e.g. "http://localhost:9009".
            timeout: Transport timeout in seconds.
            http: Optional requests.Session to reuse (mainly for tests).
        """
        self.session = session
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.http = http or requests.Session()
        # requests.Session is not thread-safe; calls arrive from worker threads
        self._http_lock = threading.Lock()
        self.http.headers.update(session.headers)

    @classmethod
    def from_config(cls, session: "Session") -> "ApiClient":
        settings = config.get_settings()
        return cls(session, base_url=settings.base_url, timeout=settings.request_timeout)

    def close(self) -> None:
        self.http.close()

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def _request(self, method: str, path: str, **kwargs) -> requests.Response:
        url = self._url(path)
        try:
            with self._http_lock:
                response = self.http.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            logger.warning(f"{method} {path} failed: {e}")
            raise ApiConnectionError(f"Request to {path} failed: {e}") from e
        logger.debug(f"{method} {path} -> {response.status_code}")
        return response

    def _get_json(self, path: str) -> Any:
        response = self._request("GET", path)
        if response.status_code in (401, 403):
            raise AuthenticationError(
                f"Authentication rejected for {path}", response.status_code, path
            )
        if not response.ok:
            logger.warning(f"GET {path} returned status {response.status_code}")
            raise ApiStatusError(
                f"GET {path} returned status {response.status_code}", response.status_code, path
            )
        try:
            return response.json()
        except ValueError as e:
            raise ApiResponseError(f"GET {path} returned invalid JSON: {e}") from e

    async def get_account(self) -> dict:
        """Fetch the account's mailbox listing (GET /api/account)."""
        return await asyncio.to_thread(self._get_json, "/api/account")

    async def get_mailbox(self, name: str) -> dict:
        """
        Initial listing fetch for a mailbox.

        Returns:
            The raw payload: {"uids": [...], "messages": [...]}.
        """
        return await asyncio.to_thread(self._get_json, f"/api/mailbox/{_quote_path(name)}")

    async def get_messages(self, name: str, uids: Iterable[int]) -> List[MessageSummary]:
        """
        Batch summary fetch for the given UIDs, in response order.

        Raises:
            ApiResponseError: If the payload is not a list of message objects.
        """
        uid_list = ",".join(str(uid) for uid in uids)
        path = f"/api/mailbox/{_quote_path(name)}/messages/{uid_list}"
        data = await asyncio.to_thread(self._get_json, path)
        if not isinstance(data, list):
            raise ApiResponseError(f"GET {path} did not return a list")
        return [MessageSummary.from_dict(item) for item in data]

    async def get_message(self, name: str, uid: int) -> MessageBody:
        """Fetch one full message (GET /api/mailbox/{name}/message/{uid})."""
        path = f"/api/mailbox/{_quote_path(name)}/message/{uid}"
        data = await asyncio.to_thread(self._get_json, path)
        return MessageBody.from_dict(data)

    async def send(self, message: OutgoingMessage) -> bool:
        """
        Submit an outgoing message (POST /api/send).

        Returns:
            True if the server answered with an ok status. A non-ok status
            is a result, not an exception.

        Raises:
            ApiConnectionError: If the request never completed.
        """
        response = await asyncio.to_thread(
            self._request, "POST", "/api/send", json=message.to_dict()
        )
        if not response.ok:
            logger.warning(f"POST /api/send returned status {response.status_code}")
        return response.ok
