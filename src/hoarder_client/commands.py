"""Front-end commands over a CredentialStore.

Each command returns a JSON-ready dict: ``{"status": "ok", ...}`` on success,
``{"status": "error", "error": "<message>"}`` on any hoarder_client error.
Nothing here raises a HoarderError to the caller.
"""

import functools
import logging

from . import logging_setup
from .errors import HoarderError
from .models import QueryFilter
from .store import CredentialStore

logger = logging.getLogger("hoarder_client.commands")


def _error(e: Exception) -> dict:
    return {"status": "error", "error": str(e)}


def command(func):
    """Turn HoarderError and ValueError raised by a command into an error dict."""
    @functools.wraps(func)
    async def wrapper(*args, **kwargs) -> dict:
        try:
            return await func(*args, **kwargs)
        except (HoarderError, ValueError) as e:
            logger.error("%s failed: %s", func.__name__, e)
            return _error(e)
    return wrapper


@command
async def set_server_origin(store: CredentialStore, url: str) -> dict:
    logger.info("Setting base URL: %s", url)
    origin = store.set_origin(url)
    return {"status": "ok", "origin": origin}


@command
async def get_server_origin(store: CredentialStore) -> dict:
    return {"status": "ok", "origin": store.origin}


@command
async def store_api_key(store: CredentialStore, api_key: str) -> dict:
    await store.validate_and_store(api_key)
    return {"status": "ok"}


@command
async def get_api_key(store: CredentialStore) -> dict:
    return {"status": "ok", "api_key": store.get_credential()}


@command
async def fetch_bookmarks(
    store: CredentialStore,
    favourited: bool | None = None,
    archived: bool | None = None,
    cursor: str | None = None,
    limit: int | None = None,
) -> dict:
    page = await store.fetch_bookmarks(
        QueryFilter(favourited=favourited, archived=archived, cursor=cursor, limit=limit)
    )
    return {"status": "ok", **page.to_dict()}


@command
async def fetch_all_bookmarks(
    store: CredentialStore,
    favourited: bool | None = None,
    archived: bool | None = None,
    max_items: int | None = None,
) -> dict:
    bookmarks = await store.fetch_all_bookmarks(
        QueryFilter(favourited=favourited, archived=archived),
        max_items=max_items,
    )
    return {
        "status": "ok",
        "count": len(bookmarks),
        "bookmarks": [b.to_dict() for b in bookmarks],
    }


@command
async def search_bookmarks(
    store: CredentialStore,
    query: str,
    cursor: str | None = None,
    limit: int | None = None,
) -> dict:
    page = await store.search_bookmarks(query, cursor=cursor, limit=limit)
    return {"status": "ok", "query": query, **page.to_dict()}


@command
async def get_bookmark(store: CredentialStore, bookmark_id: str) -> dict:
    bookmark = await store.get_bookmark(bookmark_id)
    return {"status": "ok", "bookmark": bookmark.to_dict()}


@command
async def update_bookmark(
    store: CredentialStore,
    bookmark_id: str,
    favourited: bool | None = None,
    archived: bool | None = None,
    title: str | None = None,
) -> dict:
    bookmark = await store.update_bookmark(
        bookmark_id, favourited=favourited, archived=archived, title=title,
    )
    return {"status": "ok", "bookmark": bookmark.to_dict()}


@command
async def delete_bookmark(store: CredentialStore, bookmark_id: str) -> dict:
    await store.delete_bookmark(bookmark_id)
    return {"status": "ok", "deleted": bookmark_id}


def get_log_path() -> str | None:
    path = logging_setup.get_log_path()
    return str(path) if path else None
