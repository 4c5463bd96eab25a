"""Tests for the UI action layer and the text renderer."""

import asyncio

import pytest

from conftest import let_requests_start
from webmail_client.auth.session import AccountView
from webmail_client.core.gate import MESSAGE_PANE, mailbox_key
from webmail_client.models import Mailbox
from webmail_client.ui.app_state import MailApp
from webmail_client.ui.render import render, truncate_text
from webmail_client.utils.errors import ApiConnectionError


@pytest.fixture
def app(api, session):
    api.listings["INBOX"] = {
        "uids": [3, 2, 1],
        "messages": [{"uid": 3, "subject": "Welcome", "seen": False}],
    }
    api.listings["Sent"] = {"uids": [], "messages": []}
    account = AccountView(session=session, mailboxes=[Mailbox(name="INBOX"), Mailbox(name="Sent")])
    return MailApp(account, api, page_size=25)


@pytest.mark.asyncio
async def test_select_and_page_through_inbox(app):
    assert await app.select_mailbox("INBOX")
    assert app.state.selected_mailbox == "INBOX"
    assert app.state.current_mailbox.pending_uids == [2, 1]

    assert await app.load_more()
    assert app.state.current_mailbox.pending_uids == []
    assert await app.load_more() is False


@pytest.mark.asyncio
async def test_open_message_fills_reading_pane(app):
    await app.select_mailbox("INBOX")
    assert await app.open_message(3)
    assert app.state.selected_uid == 3
    assert app.state.open_message.body == "Hello"
    assert app.state.current_mailbox.find_message(3).seen


@pytest.mark.asyncio
async def test_switching_mailbox_clears_reading_pane(app):
    await app.select_mailbox("INBOX")
    await app.open_message(3)
    await app.select_mailbox("Sent")
    assert app.state.open_message is None
    assert app.state.selected_uid is None


@pytest.mark.asyncio
async def test_busy_mailbox_click_is_dropped(app, api):
    api.block = asyncio.Event()
    first = asyncio.create_task(app.select_mailbox("INBOX"))
    await let_requests_start()

    assert await app.select_mailbox("INBOX") is False
    api.block.set()
    assert await first
    assert api.count("mailbox") == 1


@pytest.mark.asyncio
async def test_late_body_is_dropped_after_mailbox_switch(app, api):
    api.listings["Archive"] = {"uids": [3], "messages": [{"uid": 3, "subject": "archived"}]}
    await app.select_mailbox("INBOX")
    await app.select_mailbox("Archive")
    await app.select_mailbox("INBOX")

    api.block = asyncio.Event()
    pending_open = asyncio.create_task(app.open_message(3))
    await let_requests_start()

    assert await app.select_mailbox("Archive")
    api.block.set()
    assert await pending_open is False

    assert app.state.selected_mailbox == "Archive"
    assert app.state.open_message is None
    assert app.state.selected_uid is None
    assert not app.state.get_mailbox("Archive").find_message(3).seen
    assert "Subject: Message 3" not in render(app.state)


@pytest.mark.asyncio
async def test_failures_release_every_gate(app, api):
    api.fail_with = ApiConnectionError("down")
    with pytest.raises(ApiConnectionError):
        await app.select_mailbox("INBOX")

    api.fail_with = None
    await app.select_mailbox("INBOX")
    api.fail_with = ApiConnectionError("down")
    with pytest.raises(ApiConnectionError):
        await app.load_more()
    with pytest.raises(ApiConnectionError):
        await app.open_message(3)
    app.new_message(to="alice@example.com")
    compose = app.state.compose
    with pytest.raises(ApiConnectionError):
        await app.send_draft()

    gate = app.state.gate
    assert not gate.is_locked(mailbox_key("INBOX"))
    assert not gate.is_locked(MESSAGE_PANE)
    assert not gate.is_locked(compose.send_key)
    assert app.state.compose is compose


@pytest.mark.asyncio
async def test_compose_prefills_identity_and_closes_on_send(app, api):
    compose = app.new_message(to="alice@example.com", subject="Re: Welcome")
    assert compose.draft.from_address == "bob@example.com"

    assert await app.send_draft()
    assert app.state.compose is None
    assert api.sent[0]["subject"] == "Re: Welcome"


@pytest.mark.asyncio
async def test_rejected_send_keeps_compose_open(app, api):
    api.send_ok = False
    app.new_message(to="alice@example.com")
    assert await app.send_draft() is False
    assert app.state.compose is not None


def test_close_compose(app):
    app.new_message()
    app.close_compose()
    assert app.state.compose is None


@pytest.mark.asyncio
async def test_render_shows_state(app):
    await app.select_mailbox("INBOX")
    text = render(app.state)

    assert "Logged in as bob@example.com" in text
    assert " > Inbox" in text
    assert "*" in text and "[3] Welcome" in text
    assert "Load more (2 remaining)" in text

    await app.open_message(3)
    text = render(app.state)
    assert "Subject: Message 3" in text
    assert "From: alice@example.com" in text


def test_render_is_pure(app):
    before = (app.state.selected_mailbox, list(app.state.mailboxes))
    render(app.state)
    assert (app.state.selected_mailbox, list(app.state.mailboxes)) == before


def test_truncate_text():
    assert truncate_text("short") == "short"
    assert truncate_text("x" * 60, max_length=10) == "xxxxxxx..."
