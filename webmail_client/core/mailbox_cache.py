"""
Per-mailbox message summary cache.

These functions are the only code that mutates a Mailbox's pending_uids
and loaded_messages. Each one either applies its whole update or raises
before touching anything, so a failed fetch leaves the cache as it was.
"""
from typing import Any, Dict, List, Tuple

from webmail_client.models import Mailbox, MessageSummary
from webmail_client.utils.errors import ApiResponseError


def reconcile(mailbox: Mailbox) -> int:
    """
    Remove from pending_uids every UID already in loaded_messages.

    Idempotent: on an already-reconciled mailbox nothing changes.

    Returns:
        Number of UIDs removed from the cursor.
    """
    loaded = mailbox.loaded_uids()
    before = len(mailbox.pending_uids)
    mailbox.pending_uids = [uid for uid in mailbox.pending_uids if uid not in loaded]
    return before - len(mailbox.pending_uids)


def parse_listing(data: Dict[str, Any]) -> Tuple[List[int], List[MessageSummary]]:
    """
    Parse an initial listing payload ({"uids": [...], "messages": [...]}).

    Raises:
        ApiResponseError: If either field is missing or malformed.
    """
    if not isinstance(data, dict):
        raise ApiResponseError("Mailbox listing is not an object")
    uids = data.get("uids")
    messages = data.get("messages")
    # The server encodes an empty mailbox as empty lists, older builds as null
    if uids is None:
        uids = []
    if messages is None:
        messages = []
    if not isinstance(uids, list) or not isinstance(messages, list):
        raise ApiResponseError("Mailbox listing has malformed uids or messages")
    try:
        uid_list = [int(uid) for uid in uids]
    except (TypeError, ValueError):
        raise ApiResponseError("Mailbox listing contains a non-numeric uid")
    return uid_list, [MessageSummary.from_dict(item) for item in messages]


def populate(mailbox: Mailbox, uids: List[int], messages: List[MessageSummary]) -> None:
    """
    Seed the cache from an initial listing and mark the mailbox loaded.

    Summaries whose UID is already cached are skipped so a UID can never
    appear twice in loaded_messages.
    """
    known = mailbox.loaded_uids()
    fresh = []
    for msg in messages:
        if msg.uid not in known:
            known.add(msg.uid)
            fresh.append(msg)
    mailbox.pending_uids = list(uids)
    mailbox.loaded_messages = mailbox.loaded_messages + fresh
    mailbox.is_loaded = True
    reconcile(mailbox)


def next_batch(mailbox: Mailbox, page_size: int) -> List[int]:
    """The first page_size UIDs of the cursor, in order."""
    return mailbox.pending_uids[:page_size]


def apply_batch(mailbox: Mailbox, messages: List[MessageSummary]) -> int:
    """
    Append a fetched batch in response order and advance the cursor.

    Summaries for UIDs that are already loaded, or that the cursor never
    listed, are dropped. UIDs the server did not return stay pending.

    Returns:
        Number of summaries appended.
    """
    known = mailbox.loaded_uids()
    pending = set(mailbox.pending_uids)
    appended = []
    for msg in messages:
        if msg.uid in known or msg.uid not in pending:
            continue
        known.add(msg.uid)
        appended.append(msg)
    mailbox.loaded_messages.extend(appended)
    reconcile(mailbox)
    return len(appended)
