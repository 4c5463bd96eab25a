"""
Plain-text rendering of the application state.

render() is a pure function of AppState; it never mutates the state.
"""
from typing import List

from webmail_client.ui.app_state import AppState


def truncate_text(text: str, max_length: int = 50) -> str:
    """Truncate text to max length with ellipsis"""
    if len(text) <= max_length:
        return text
    return text[:max_length - 3] + "..."


def _render_mailboxes(state: AppState) -> List[str]:
    lines = ["Mailboxes:"]
    for mailbox in state.mailboxes:
        marker = ">" if mailbox.name == state.selected_mailbox else " "
        lines.append(f" {marker} {mailbox.display_name}")
    return lines


def _render_messages(state: AppState) -> List[str]:
    mailbox = state.current_mailbox
    if mailbox is None:
        return []
    lines = [f"Messages in {mailbox.display_name}:"]
    for msg in mailbox.loaded_messages:
        selected = ">" if msg.uid == state.selected_uid else " "
        unread = "*" if not msg.seen else " "
        lines.append(f" {selected}{unread} [{msg.uid}] {truncate_text(msg.subject or '(no subject)')}")
    if mailbox.has_more:
        lines.append(f"   Load more ({len(mailbox.pending_uids)} remaining)")
    return lines


def _render_reading_pane(state: AppState) -> List[str]:
    message = state.open_message
    if message is None:
        return []
    return [
        f"From: {message.from_address}",
        f"Subject: {message.subject}",
        "",
        message.body,
    ]


def render(state: AppState) -> str:
    """Render the mailbox list, message list and reading pane."""
    sections = [
        [f"Logged in as {state.session.identity}"],
        _render_mailboxes(state),
        _render_messages(state),
        _render_reading_pane(state),
    ]
    if state.compose is not None:
        draft = state.compose.draft
        sections.append([f"Composing: to={draft.to!r} subject={draft.subject!r} ({state.compose.state.value})"])
    return "\n\n".join("\n".join(lines) for lines in sections if lines)
