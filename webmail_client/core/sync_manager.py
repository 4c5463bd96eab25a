"""
Synchronization manager for the webmail client.

This module orchestrates the client-side mailbox cache: the initial
listing fetch when a mailbox is first opened, and incremental "load more"
batches driven by the pagination cursor.
"""
import logging
from dataclasses import dataclass
from typing import List, Optional

from webmail_client import config
from webmail_client.core import mailbox_cache
from webmail_client.core.gate import ResourceGate, mailbox_key
from webmail_client.models import Mailbox, MessageSummary
from webmail_client.network.api_client import ApiClient
from webmail_client.utils.errors import SyncError


logger = logging.getLogger(__name__)


@dataclass(slots=True)
class MailboxView:
    """What the message list renders after an open or load-more."""
    messages: List[MessageSummary]
    has_more: bool


class SyncManager:
    """
    Manages synchronization between the server and the mailbox cache.

    Each mailbox has its own gate entry, so at most one open/load-more is in
    flight per mailbox. A second request for a busy mailbox is dropped and
    the public methods return None for it.
    """

    def __init__(
        self,
        api_client: ApiClient,
        gate: Optional[ResourceGate] = None,
        page_size: Optional[int] = None,
    ):
        """
        Initialize the sync manager.

        Args:
            api_client: The API client bound to the logged-in session.
            gate: Gate shared with the rest of the application.
            page_size: Summaries per load-more batch. Defaults to config.PAGE_SIZE.
        """
        self.api_client = api_client
        self.gate = gate if gate is not None else ResourceGate()
        self.page_size = page_size if page_size is not None else config.get_settings().page_size
        if self.page_size < 1:
            raise ValueError(f"page_size must be positive, got {self.page_size}")

    async def open_mailbox(self, mailbox: Mailbox) -> Optional[MailboxView]:
        """
        Open a mailbox, fetching its listing the first time.

        Returns:
            The mailbox view, or None if the mailbox is busy.

        Raises:
            ApiError: If the listing fetch fails. The mailbox stays unloaded
                and its gate is released, so opening it again retries.
        """
        with self.gate.hold(mailbox_key(mailbox.name)) as acquired:
            if not acquired:
                return None
            return await self._open_internal(mailbox)

    async def load_more(self, mailbox: Mailbox) -> Optional[MailboxView]:
        """
        Fetch the next batch of summaries for an opened mailbox.

        Returns:
            The updated mailbox view, or None if the mailbox is busy.

        Raises:
            ApiError: If the batch fetch fails. Nothing is changed.
            SyncError: If the mailbox was never opened.
        """
        with self.gate.hold(mailbox_key(mailbox.name)) as acquired:
            if not acquired:
                return None
            return await self._load_more_internal(mailbox)

    async def _open_internal(self, mailbox: Mailbox) -> MailboxView:
        """Open implementation (caller holds the mailbox gate)."""
        if not mailbox.is_loaded:
            data = await self.api_client.get_mailbox(mailbox.name)
            uids, messages = mailbox_cache.parse_listing(data)
            mailbox_cache.populate(mailbox, uids, messages)
            logger.info(
                f"Opened {mailbox.name}: {len(mailbox.loaded_messages)} loaded, "
                f"{len(mailbox.pending_uids)} pending"
            )

        mailbox_cache.reconcile(mailbox)
        return self._view(mailbox)

    async def _load_more_internal(self, mailbox: Mailbox) -> MailboxView:
        """Load-more implementation (caller holds the mailbox gate)."""
        if not mailbox.is_loaded:
            raise SyncError(f"Mailbox {mailbox.name} has not been opened")

        batch = mailbox_cache.next_batch(mailbox, self.page_size)
        if not batch:
            return self._view(mailbox)

        messages = await self.api_client.get_messages(mailbox.name, batch)
        appended = mailbox_cache.apply_batch(mailbox, messages)
        if appended < len(batch):
            logger.warning(
                f"{mailbox.name}: requested {len(batch)} summaries, got {appended}"
            )
        logger.debug(
            f"Loaded {appended} summaries for {mailbox.name}, "
            f"{len(mailbox.pending_uids)} pending"
        )
        return self._view(mailbox)

    @staticmethod
    def _view(mailbox: Mailbox) -> MailboxView:
        return MailboxView(messages=list(mailbox.loaded_messages), has_more=mailbox.has_more)
