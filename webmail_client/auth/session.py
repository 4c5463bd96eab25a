"""
Session context and login.

A Session is produced once at login and never changes afterwards: the
identity shown in the UI and the Authorization header value attached to
every request. The header is an opaque capability token; it is never
refreshed or rotated and is never written to the log.
"""
import base64
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, List, Optional

from webmail_client.models import Mailbox
from webmail_client.utils.errors import ApiResponseError, WebmailError

if TYPE_CHECKING:
    from webmail_client.network.api_client import ApiClient


logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Session:
    """Authenticated identity plus the header used for every API call."""
    identity: str
    auth_header: str = field(repr=False)

    @classmethod
    def from_credentials(cls, email: str, password: str) -> "Session":
        """
        Build a session using HTTP Basic credentials.

        Args:
            email: The account's email address (also the session identity).
            password: The account password.
        """
        credentials = base64.b64encode(f"{email}:{password}".encode("utf-8")).decode("ascii")
        return cls(identity=email, auth_header=f"Basic {credentials}")

    @property
    def headers(self) -> dict:
        return {"Authorization": self.auth_header}


@dataclass(slots=True)
class AccountView:
    """What login hands to the application: the session, its mailboxes and
    the API client already bound to that session."""
    session: Session
    mailboxes: List[Mailbox]
    api_client: Optional["ApiClient"] = None


def parse_account(data: dict) -> List[Mailbox]:
    """
    Turn the /api/account payload into Mailbox objects, preserving order.

    Raises:
        ApiResponseError: If the payload has no mailbox list.
    """
    if not isinstance(data, dict) or not isinstance(data.get("mailboxes"), list):
        raise ApiResponseError("Account payload has no mailbox list")

    mailboxes = []
    for entry in data["mailboxes"]:
        name = entry.get("name") if isinstance(entry, dict) else None
        if not name:
            raise ApiResponseError(f"Mailbox entry has no name: {entry!r}")
        mailboxes.append(Mailbox(name=name))
    return mailboxes


async def login(
    email: str,
    password: str,
    client_factory: Optional[Callable[[Session], "ApiClient"]] = None,
) -> AccountView:
    """
    Log in and seed the mailbox set.

    Args:
        email: The account's email address.
        password: The account password.
        client_factory: Builds an API client for the new session. Defaults to
            ApiClient with the configured base URL and timeout.

    Returns:
        An AccountView with the session, the mailboxes in server order and
        the client that fetched them. The caller owns and closes the client.

    Raises:
        AuthenticationError: If the server rejects the credentials.
        ApiError: For any other transport or response failure.
    """
    session = Session.from_credentials(email, password)
    if client_factory is None:
        from webmail_client.network.api_client import ApiClient
        client_factory = ApiClient.from_config

    client = client_factory(session)
    try:
        data = await client.get_account()
        mailboxes = parse_account(data)
    except WebmailError:
        client.close()
        raise
    logger.info(f"Logged in as {email} ({len(mailboxes)} mailboxes)")
    return AccountView(session=session, mailboxes=mailboxes, api_client=client)
