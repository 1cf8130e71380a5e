"""Command-line front end for the Twitter API client.

Examples:
    twdash timeline --page 2
    twdash --format xml show 12345
    twdash update "Watching the dashboard"
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from .client import TwitterAPIClient
from .config import build_client, load_config
from .exceptions import TransportError, ValidationError
from .response import TwitterResponse

LOGGER = logging.getLogger("twdash")

EXIT_OK = 0
EXIT_HTTP_ERROR = 1
EXIT_VALIDATION_ERROR = 2
EXIT_TRANSPORT_ERROR = 3


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="twdash", description="Twitter dashboard API client")
    p.add_argument("--config", help="Path to a JSON config file to load defaults from", default=None)
    p.add_argument("--api-url", help="API base URL")
    p.add_argument("--username", help="Twitter username or email address")
    p.add_argument("--password", help="Twitter password")
    p.add_argument("--format", default="json", help="Response format (json, xml, rss, atom, none)")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    sub = p.add_subparsers(dest="command", required=True)

    timeline = sub.add_parser("timeline", help="Show a timeline (friends timeline by default)")
    which = timeline.add_mutually_exclusive_group()
    which.add_argument("--public", action="store_true", help="Public timeline (no auth)")
    which.add_argument("--user", action="store_true", help="Your own timeline")
    timeline.add_argument("--since", help="Only statuses created after this date (not with --public)")
    timeline.add_argument("--since-id", type=int, help="Only statuses newer than this id (--public only)")
    timeline.add_argument("--count", type=int, help="Number of statuses (user timeline only)")
    timeline.add_argument("--page", type=int)

    update = sub.add_parser("update", help="Post a status update")
    update.add_argument("text")

    show = sub.add_parser("show", help="Show a single status")
    show.add_argument("id", type=int)

    sub.add_parser("verify", help="Verify the configured credentials")

    messages = sub.add_parser("messages", help="List received direct messages")
    messages.add_argument("--sent", action="store_true", help="List sent messages instead")
    messages.add_argument("--page", type=int)

    send = sub.add_parser("send", help="Send a direct message")
    send.add_argument("user")
    send.add_argument("text")

    favorites = sub.add_parser("favorites", help="List favorite statuses")
    favorites.add_argument("--page", type=int)

    sub.add_parser("test", help="Check that the service answers")

    args = p.parse_args(argv)
    if args.command == "timeline":
        if args.public and args.since is not None:
            p.error("--since cannot be used with --public")
        if args.public and args.page is not None:
            p.error("--page cannot be used with --public")
        if args.since_id is not None and not args.public:
            p.error("--since-id requires --public")
        if args.count is not None and not args.user:
            p.error("--count requires --user")
    return args


def run_command(client: TwitterAPIClient, args: argparse.Namespace) -> TwitterResponse:
    """Dispatch a parsed command to the matching client operation"""
    fmt = args.format
    if args.command == "timeline":
        if args.public:
            return client.get_public_timeline(fmt, since_id=args.since_id)
        if args.user:
            return client.get_user_timeline(fmt, since=args.since, count=args.count, page=args.page)
        return client.get_friends_timeline(fmt, since=args.since, page=args.page)
    if args.command == "update":
        return client.update_status(args.text, fmt)
    if args.command == "show":
        return client.show_status(args.id, fmt)
    if args.command == "verify":
        return client.verify_credentials(fmt)
    if args.command == "messages":
        if args.sent:
            return client.get_sent_messages(fmt, page=args.page)
        return client.get_messages(fmt, page=args.page)
    if args.command == "send":
        return client.send_message(args.user, args.text, fmt)
    if args.command == "favorites":
        return client.get_favorites(fmt, page=args.page)
    if args.command == "test":
        return client.test(fmt)
    raise ValueError(f"Unknown command: {args.command}")


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    config = load_config(args.config, {
        'api_url': args.api_url,
        'username': args.username,
        'password': args.password,
        'log_level': 'DEBUG' if args.verbose else None,
    })
    logging.basicConfig(level=getattr(logging, config.log_level, logging.INFO),
                        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    client = build_client(config)
    try:
        response = run_command(client, args)
    except ValidationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR
    except TransportError as e:
        print(f"Connection error: {e}", file=sys.stderr)
        return EXIT_TRANSPORT_ERROR

    if response.is_error():
        print(f"HTTP {response.http_code}", file=sys.stderr)
        if response.get_data():
            print(response.get_data(), file=sys.stderr)
        return EXIT_HTTP_ERROR

    print(response.get_data())
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
