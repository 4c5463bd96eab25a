"""
Message reader: fetches full message bodies for the reading pane.
"""
import logging
from typing import Optional

from webmail_client.core.gate import MESSAGE_PANE, ResourceGate
from webmail_client.models import Mailbox, MessageBody
from webmail_client.network.api_client import ApiClient
from webmail_client.utils.errors import SyncError


logger = logging.getLogger(__name__)


class MessageReader:
    """Opens one message at a time; the pane gate rejects overlapping opens."""

    def __init__(self, api_client: ApiClient, gate: Optional[ResourceGate] = None):
        self.api_client = api_client
        self.gate = gate if gate is not None else ResourceGate()

    async def open_message(self, mailbox: Mailbox, uid: int) -> Optional[MessageBody]:
        """
        Fetch a message body and mark its summary seen.

        Returns:
            The body, or None if another message is still being fetched.

        Raises:
            SyncError: If uid is not among the mailbox's loaded messages.
            ApiError: If the fetch fails; the seen flag is left unchanged.
        """
        with self.gate.hold(MESSAGE_PANE) as acquired:
            if not acquired:
                return None
            return await self._fetch_internal(mailbox, uid)

    async def _fetch_internal(self, mailbox: Mailbox, uid: int) -> MessageBody:
        summary = mailbox.find_message(uid)
        if summary is None:
            raise SyncError(f"Message {uid} is not loaded in {mailbox.name}")

        body = await self.api_client.get_message(mailbox.name, uid)

        # Optimistic: not confirmed with the server until push updates exist
        summary.mark_seen()
        logger.debug(f"Opened message {uid} in {mailbox.name}")
        return body
