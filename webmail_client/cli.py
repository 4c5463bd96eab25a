"""
Command-line front end: log in, open a mailbox, page through it and print
the rendered view.
"""
import argparse
import asyncio
import getpass
import sys

from webmail_client.auth.session import login
from webmail_client.config import get_settings, load_env
from webmail_client.network.api_client import ApiClient
from webmail_client.ui.app_state import MailApp
from webmail_client.ui.render import render
from webmail_client.utils.errors import WebmailError, human_friendly_message
from webmail_client.utils.logging_cfg import get_logger, setup_logging


logger = get_logger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="webmail-client", description="Webmail client")
    parser.add_argument("--email", required=True, help="account email address")
    parser.add_argument("--password", help="account password (prompted if omitted)")
    parser.add_argument("--mailbox", default="INBOX", help="mailbox to open (default: INBOX)")
    parser.add_argument("--load-more", type=int, default=1, metavar="N",
                        help="number of 'load more' rounds after opening (default: 1)")
    parser.add_argument("--debug", action="store_true", help="enable debug logging")
    return parser.parse_args(argv)


async def run(args: argparse.Namespace, password: str) -> str:
    """Log in, open a mailbox, page through it and return the rendered view."""
    settings = get_settings()
    account = await login(args.email, password, client_factory=ApiClient.from_config)
    api_client = account.api_client
    try:
        app = MailApp(account, api_client, page_size=settings.page_size)
        await app.select_mailbox(args.mailbox)
        for _ in range(args.load_more):
            if not await app.load_more():
                break
        return render(app.state)
    finally:
        api_client.close()


def main(argv=None) -> int:
    """Main function"""
    args = parse_args(argv)

    try:
        # Load environment variables before anything reads settings
        load_env()
    except WebmailError as e:
        print(human_friendly_message(e), file=sys.stderr)
        return 1

    setup_logging(debug=args.debug)

    password = args.password if args.password is not None else getpass.getpass("Password: ")

    try:
        output = asyncio.run(run(args, password))
    except (WebmailError, KeyError) as e:
        logger.error(f"Session failed: {e}")
        print(human_friendly_message(e), file=sys.stderr)
        return 1

    print(output)
    return 0
