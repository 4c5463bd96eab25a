"""
Compose/send session.

A ComposeSession holds one draft's four fields and submits it at most once
at a time. Its lifecycle is Open -> Sending -> (Closed | Open): a
successful send closes the session, anything else returns it to Open with
the fields intact so the user can edit and resend.
"""
import itertools
import logging
from dataclasses import fields as dataclass_fields
from enum import Enum
from typing import Optional

from webmail_client.core.gate import ResourceGate
from webmail_client.models import OutgoingMessage
from webmail_client.network.api_client import ApiClient


logger = logging.getLogger(__name__)

_draft_ids = itertools.count(1)


class DraftState(str, Enum):
    OPEN = "open"
    SENDING = "sending"
    CLOSED = "closed"


class ComposeSession:
    """A draft plus its guarded single-shot send action."""

    def __init__(
        self,
        api_client: ApiClient,
        from_address: str = "",
        to: str = "",
        subject: str = "",
        body: str = "",
        gate: Optional[ResourceGate] = None,
    ):
        self.api_client = api_client
        self.gate = gate if gate is not None else ResourceGate()
        self.draft = OutgoingMessage(from_address=from_address, to=to, subject=subject, body=body)
        self.state = DraftState.OPEN
        self.send_key = f"draft:{next(_draft_ids)}:send"

    @property
    def is_closed(self) -> bool:
        return self.state == DraftState.CLOSED

    def update(self, **fields) -> None:
        """
        Edit draft fields (from_address, to, subject, body).

        No validation is done here; malformed input is the server's concern.
        """
        if self.is_closed:
            raise RuntimeError("Draft is closed")
        for name, value in fields.items():
            if name not in {f.name for f in dataclass_fields(OutgoingMessage)}:
                raise AttributeError(f"Unknown draft field: {name}")
            setattr(self.draft, name, value)

    def close(self) -> None:
        """Discard the draft without sending."""
        self.state = DraftState.CLOSED

    async def send(self) -> bool:
        """
        Submit the draft.

        Returns:
            True if the server accepted it (the session is now closed).
            False if the server refused it, or a send is already in flight,
            or the session was closed; the fields are kept either way.

        Raises:
            ApiConnectionError: If the request never completed. The session
                is back in Open and can be resent.
        """
        if self.is_closed:
            return False

        with self.gate.hold(self.send_key) as acquired:
            if not acquired:
                return False

            self.state = DraftState.SENDING
            try:
                ok = await self.api_client.send(self.draft)
            finally:
                if self.state == DraftState.SENDING:
                    self.state = DraftState.OPEN

            if ok:
                self.state = DraftState.CLOSED
                logger.info(f"Sent message to {self.draft.to}")
            return ok
