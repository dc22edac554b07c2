"""Command-line front-end for a Hoarder server.

Usage:
    hoarder-client list [--favourited | --not-favourited] [--archived | --not-archived]
                        [--cursor C] [--limit N] [--all] [--max N]
    hoarder-client search "query" [--cursor C] [--limit N]
    hoarder-client get BOOKMARK_ID
    hoarder-client favourite BOOKMARK_ID [--off]
    hoarder-client archive BOOKMARK_ID [--off]
    hoarder-client delete BOOKMARK_ID
    hoarder-client whoami
    hoarder-client log-path

Server URL and API key come from the config file or from
HOARDER_BASE_URL / HOARDER_API_KEY.
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

from . import commands
from .config import Config, load_config
from .logging_setup import setup_logging
from .store import CredentialStore


async def cmd_list(store: CredentialStore, args) -> dict:
    favourited, archived = args.favourited, args.archived
    if args.all:
        return await commands.fetch_all_bookmarks(
            store, favourited=favourited, archived=archived, max_items=args.max,
        )
    return await commands.fetch_bookmarks(
        store,
        favourited=favourited,
        archived=archived,
        cursor=args.cursor,
        limit=args.limit,
    )


async def cmd_search(store: CredentialStore, args) -> dict:
    return await commands.search_bookmarks(store, args.query, cursor=args.cursor, limit=args.limit)


async def cmd_get(store: CredentialStore, args) -> dict:
    return await commands.get_bookmark(store, args.bookmark_id)


async def cmd_favourite(store: CredentialStore, args) -> dict:
    return await commands.update_bookmark(store, args.bookmark_id, favourited=not args.off)


async def cmd_archive(store: CredentialStore, args) -> dict:
    return await commands.update_bookmark(store, args.bookmark_id, archived=not args.off)


async def cmd_delete(store: CredentialStore, args) -> dict:
    return await commands.delete_bookmark(store, args.bookmark_id)


async def cmd_whoami(store: CredentialStore, args) -> dict:
    return await commands.get_server_origin(store)


COMMANDS = {
    "list": cmd_list,
    "search": cmd_search,
    "get": cmd_get,
    "favourite": cmd_favourite,
    "archive": cmd_archive,
    "delete": cmd_delete,
    "whoami": cmd_whoami,
}


async def run_command(config: Config, args, store: CredentialStore | None = None) -> dict:
    """Configure a store from config, validate the key, then run one command."""
    if not config.server.url or not config.server.api_key:
        return {
            "status": "error",
            "error": "Server URL and API key must be set (config or HOARDER_BASE_URL / HOARDER_API_KEY)",
        }
    store = store or CredentialStore.from_config(config)

    result = await commands.set_server_origin(store, config.server.url)
    if result["status"] == "error":
        return result
    result = await commands.store_api_key(store, config.server.api_key)
    if result["status"] == "error":
        return result

    return await COMMANDS[args.command](store, args)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hoarder-client",
        description="Browse and manage bookmarks on a Hoarder server",
    )
    parser.add_argument("-c", "--config", help="Path to config file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose (DEBUG) logging")
    sub = parser.add_subparsers(dest="command", required=True)

    # list
    p_list = sub.add_parser("list", help="List bookmarks")
    fav = p_list.add_mutually_exclusive_group()
    fav.add_argument("--favourited", dest="favourited", action="store_true", default=None)
    fav.add_argument("--not-favourited", dest="favourited", action="store_false")
    arc = p_list.add_mutually_exclusive_group()
    arc.add_argument("--archived", dest="archived", action="store_true", default=None)
    arc.add_argument("--not-archived", dest="archived", action="store_false")
    p_list.set_defaults(favourited=None, archived=None)
    p_list.add_argument("--cursor", help="Continue from a previous page's next_cursor")
    p_list.add_argument("--limit", type=int, help="Page size")
    p_list.add_argument("--all", action="store_true", help="Follow cursors through every page")
    p_list.add_argument("--max", type=int, help="Stop after this many bookmarks (with --all)")

    # search
    p_search = sub.add_parser("search", help="Full-text search bookmarks")
    p_search.add_argument("query", help="Search query")
    p_search.add_argument("--cursor")
    p_search.add_argument("--limit", type=int)

    # get
    p_get = sub.add_parser("get", help="Get a single bookmark")
    p_get.add_argument("bookmark_id")

    # favourite / archive
    p_fav = sub.add_parser("favourite", help="Mark a bookmark as favourite")
    p_fav.add_argument("bookmark_id")
    p_fav.add_argument("--off", action="store_true", help="Remove the favourite flag")
    p_arc = sub.add_parser("archive", help="Archive a bookmark")
    p_arc.add_argument("bookmark_id")
    p_arc.add_argument("--off", action="store_true", help="Unarchive")

    # delete
    p_del = sub.add_parser("delete", help="Delete a bookmark")
    p_del.add_argument("bookmark_id")

    sub.add_parser("whoami", help="Validate the configured key and show the server")
    sub.add_parser("log-path", help="Show the current log file")

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    config = load_config(Path(args.config) if args.config else None)
    setup_logging(config, verbose=args.verbose)

    if args.command == "log-path":
        result = {"status": "ok", "log_path": commands.get_log_path()}
    else:
        result = asyncio.run(run_command(config, args))

    print(json.dumps(result, indent=2, ensure_ascii=False))
    if result.get("status") == "error":
        sys.exit(1)


if __name__ == "__main__":
    main()
