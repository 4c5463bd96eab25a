"""
Core domain models for the webmail client.

This module contains pure domain models (dataclasses) without any network
or UI dependencies. These models represent the mailbox cache entities
and the payloads exchanged with the REST API.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set

from webmail_client.utils.errors import ApiResponseError


def _require_uid(data: Dict[str, Any]) -> int:
    """Pull the UID out of a JSON object, rejecting malformed payloads."""
    if not isinstance(data, dict) or "uid" not in data:
        raise ApiResponseError(f"Message payload has no uid: {data!r}")
    try:
        return int(data["uid"])
    except (TypeError, ValueError):
        raise ApiResponseError(f"Message payload has an invalid uid: {data['uid']!r}")


@dataclass(slots=True)
class MessageSummary:
    """A message header as shown in the message list."""
    uid: int
    subject: str = ""
    seen: bool = False
    from_address: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MessageSummary":
        """Build a summary from the API's JSON object."""
        uid = _require_uid(data)
        return cls(
            uid=uid,
            subject=data.get("subject") or "",
            seen=bool(data.get("seen", False)),
            from_address=data.get("from") or "",
        )

    def mark_seen(self) -> None:
        """Mark this message as seen (client-side only)."""
        self.seen = True


@dataclass(slots=True)
class MessageBody:
    """Full message content held by the reading pane."""
    from_address: str = ""
    subject: str = ""
    body: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MessageBody":
        if not isinstance(data, dict):
            raise ApiResponseError(f"Message body payload is not an object: {data!r}")
        return cls(
            from_address=data.get("from") or "",
            subject=data.get("subject") or "",
            body=data.get("body") or "",
        )


@dataclass(slots=True)
class Mailbox:
    """
    A mailbox and its client-side message cache.

    pending_uids is the pagination cursor: UIDs reported by the server that
    have not been fetched yet, in server order. loaded_messages holds the
    summaries already fetched, in fetch order.
    """
    name: str
    pending_uids: List[int] = field(default_factory=list)
    loaded_messages: List[MessageSummary] = field(default_factory=list)
    is_loaded: bool = False

    @property
    def display_name(self) -> str:
        """Name shown in the mailbox list ('INBOX' reads as 'Inbox')."""
        return "Inbox" if self.name == "INBOX" else self.name

    @property
    def has_more(self) -> bool:
        """True while there are UIDs left to fetch."""
        return bool(self.pending_uids)

    def loaded_uids(self) -> Set[int]:
        return {msg.uid for msg in self.loaded_messages}

    def find_message(self, uid: int) -> Optional[MessageSummary]:
        for msg in self.loaded_messages:
            if msg.uid == uid:
                return msg
        return None


@dataclass(slots=True)
class OutgoingMessage:
    """The four fields submitted to the send endpoint."""
    from_address: str = ""
    to: str = ""
    subject: str = ""
    body: str = ""

    def to_dict(self) -> Dict[str, str]:
        return {
            "from": self.from_address,
            "to": self.to,
            "subject": self.subject,
            "body": self.body,
        }
