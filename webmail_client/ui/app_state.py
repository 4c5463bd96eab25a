"""
Application state and UI actions.

The UI layer calls these actions and re-renders the AppState afterwards.
Each action goes through the shared ResourceGate, so a click on a busy
resource is dropped silently and the action reports False.
"""
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from webmail_client.auth.session import AccountView, Session
from webmail_client.core.compose import ComposeSession
from webmail_client.core.gate import ResourceGate
from webmail_client.core.reader import MessageReader
from webmail_client.core.sync_manager import SyncManager
from webmail_client.models import Mailbox, MessageBody
from webmail_client.network.api_client import ApiClient


logger = logging.getLogger(__name__)


@dataclass
class AppState:
    """Everything the renderer needs to draw the main view."""
    session: Session
    mailboxes: List[Mailbox]
    selected_mailbox: Optional[str] = None
    selected_uid: Optional[int] = None
    open_message: Optional[MessageBody] = None
    compose: Optional[ComposeSession] = None
    gate: ResourceGate = field(default_factory=ResourceGate)

    def get_mailbox(self, name: str) -> Mailbox:
        for mailbox in self.mailboxes:
            if mailbox.name == name:
                return mailbox
        raise KeyError(name)

    @property
    def current_mailbox(self) -> Optional[Mailbox]:
        if self.selected_mailbox is None:
            return None
        return self.get_mailbox(self.selected_mailbox)


class MailApp:
    """Controller wiring UI actions to the sync core."""

    def __init__(
        self,
        account: AccountView,
        api_client: ApiClient,
        page_size: Optional[int] = None,
    ):
        self.api_client = api_client
        self.state = AppState(session=account.session, mailboxes=account.mailboxes)
        self.sync_manager = SyncManager(api_client, gate=self.state.gate, page_size=page_size)
        self.reader = MessageReader(api_client, gate=self.state.gate)

    async def select_mailbox(self, name: str) -> bool:
        """
        Switch to a mailbox, loading its listing on first use.

        Returns:
            False if the mailbox was busy and the click was dropped.
        """
        mailbox = self.state.get_mailbox(name)
        view = await self.sync_manager.open_mailbox(mailbox)
        if view is None:
            return False
        self.state.selected_mailbox = name
        self.state.selected_uid = None
        self.state.open_message = None
        return True

    async def load_more(self) -> bool:
        """Fetch the next page of the selected mailbox."""
        mailbox = self.state.current_mailbox
        if mailbox is None or not mailbox.has_more:
            return False
        view = await self.sync_manager.load_more(mailbox)
        return view is not None

    async def open_message(self, uid: int) -> bool:
        """
        Show a message in the reading pane.

        Returns:
            False if the pane was busy, or if the user switched mailbox
            while the body was in flight (the late body is discarded).
        """
        mailbox = self.state.current_mailbox
        if mailbox is None:
            return False
        body = await self.reader.open_message(mailbox, uid)
        if body is None:
            return False
        if self.state.selected_mailbox != mailbox.name:
            logger.debug(f"Discarding body of {uid}: {mailbox.name} is no longer selected")
            return False
        self.state.selected_uid = uid
        self.state.open_message = body
        return True

    def new_message(self, to: str = "", subject: str = "") -> ComposeSession:
        """Open a compose session pre-filled with the logged-in identity."""
        self.state.compose = ComposeSession(
            self.api_client,
            from_address=self.state.session.identity,
            to=to,
            subject=subject,
            gate=self.state.gate,
        )
        return self.state.compose

    def close_compose(self) -> None:
        if self.state.compose is not None:
            self.state.compose.close()
            self.state.compose = None

    async def send_draft(self) -> bool:
        """
        Send the open draft; the compose session closes on success.

        Raises:
            ApiConnectionError: If the request never completed. The draft
                stays open.
        """
        compose = self.state.compose
        if compose is None:
            return False
        sent = await compose.send()
        if sent:
            self.state.compose = None
        return sent
