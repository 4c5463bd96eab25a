"""Shared fixtures: an in-memory stand-in for the REST API client."""

from __future__ import annotations

import asyncio
from typing import Dict, List, Optional

import pytest

from webmail_client.auth.session import Session
from webmail_client.models import MessageBody, MessageSummary


class FakeApiClient:
    """Async API double with failure injection and in-flight blocking.

    Set ``fail_with`` to an exception to make the next calls raise it, and
    ``block`` to an ``asyncio.Event`` to hold every call at the network
    boundary until the event is set.
    """

    def __init__(self) -> None:
        self.listings: Dict[str, dict] = {}
        self.calls: List[tuple] = []
        self.sent: List[dict] = []
        self.fail_with: Optional[Exception] = None
        self.block: Optional[asyncio.Event] = None
        self.send_ok = True
        self.closed = False

    async def _network(self, *call) -> None:
        self.calls.append(call)
        if self.block is not None:
            await self.block.wait()
        if self.fail_with is not None:
            raise self.fail_with

    async def get_account(self) -> dict:
        await self._network("account")
        return {"mailboxes": [{"name": name} for name in self.listings]}

    async def get_mailbox(self, name: str) -> dict:
        await self._network("mailbox", name)
        return self.listings[name]

    async def get_messages(self, name: str, uids) -> List[MessageSummary]:
        uids = list(uids)
        await self._network("messages", name, tuple(uids))
        return [MessageSummary(uid=uid, subject=f"Message {uid}") for uid in uids]

    async def get_message(self, name: str, uid: int) -> MessageBody:
        await self._network("message", name, uid)
        return MessageBody(from_address="alice@example.com", subject=f"Message {uid}", body="Hello")

    async def send(self, message) -> bool:
        await self._network("send", message.to)
        self.sent.append(message.to_dict())
        return self.send_ok

    def close(self) -> None:
        self.closed = True

    def count(self, kind: str) -> int:
        return sum(1 for call in self.calls if call[0] == kind)


async def let_requests_start() -> None:
    """Yield to the event loop so pending tasks reach their network call."""
    for _ in range(3):
        await asyncio.sleep(0)


def all_uids(mailbox) -> List[int]:
    return sorted(mailbox.pending_uids + [msg.uid for msg in mailbox.loaded_messages])


@pytest.fixture
def api():
    return FakeApiClient()


@pytest.fixture
def session():
    return Session.from_credentials("bob@example.com", "hunter2")
