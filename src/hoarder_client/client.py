"""Async httpx client for the Hoarder v1 REST API.

The client holds only the server origin and header strategy. The API key is
passed into every call and never kept on the instance.
"""

import logging
from collections.abc import AsyncIterator

import httpx

from .errors import ApiError, TransportError
from .models import Bookmark, BookmarkPage, QueryFilter

logger = logging.getLogger("hoarder_client.client")

API_VERSION = "v1"
REQUEST_TIMEOUT = 30.0

AUTH_BEARER = "bearer"        # Authorization: Bearer <key>
AUTH_API_KEY = "x-api-key"    # X-API-Key: <key>, older servers
AUTH_HEADERS = (AUTH_BEARER, AUTH_API_KEY)


def encode_query(query: dict | None) -> dict[str, str]:
    """Stringify query values for the wire, dropping any that are None.

    Booleans become "true"/"false" rather than Python's "True"/"False".
    """
    params: dict[str, str] = {}
    for key, value in (query or {}).items():
        if value is None:
            continue
        if isinstance(value, bool):
            params[key] = "true" if value else "false"
        else:
            params[key] = str(value)
    return params


def _decode(data, parse, what: str):
    try:
        return parse(data)
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        logger.error("Could not decode %s: %r", what, e)
        raise TransportError(f"error decoding response body: {what}: {e!r}") from e


class HoarderClient:
    """Thin httpx client bound to one server origin."""

    def __init__(
        self,
        origin: str,
        auth_header: str = AUTH_BEARER,
        timeout: float | None = REQUEST_TIMEOUT,
    ):
        if auth_header not in AUTH_HEADERS:
            raise ValueError(f"auth_header must be one of {AUTH_HEADERS}, got {auth_header!r}")
        self.origin = origin
        self.auth_header = auth_header
        self.timeout = timeout
        logger.debug("Created API client for %s", origin)

    def build_url(self, path: str) -> str:
        url = f"{self.origin}/{API_VERSION}{path}"
        logger.debug("Generated API URL: %s", url)
        return url

    def _headers(self, api_key: str) -> dict:
        if self.auth_header == AUTH_API_KEY:
            auth = {"X-API-Key": api_key}
        else:
            auth = {"Authorization": f"Bearer {api_key}"}
        return {**auth, "Accept": "application/json"}

    async def request(
        self,
        method: str,
        path: str,
        api_key: str,
        query: dict | None = None,
        body: dict | None = None,
    ):
        """Send one authenticated request and return the decoded JSON body.

        Returns None for a successful response with no content. Raises
        TransportError when the request cannot be completed or a success
        body is not JSON, and ApiError with the raw body on any non-2xx
        status. Nothing is retried.
        """
        url = self.build_url(path)
        try:
            headers = httpx.Headers(self._headers(api_key))
        except UnicodeEncodeError as e:
            logger.error("API key is not a valid header value: %s", e.reason)
            raise TransportError(f"invalid header value: {e.reason}") from e
        kwargs: dict = {"headers": headers}
        params = encode_query(query)
        if params:
            kwargs["params"] = params
            logger.debug("With query params: %s", params)
        if body is not None:
            kwargs["json"] = body

        logger.info("Making request to: %s %s", method, url)
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.request(method, url, **kwargs)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            detail = str(e) or type(e).__name__
            logger.error("Request failed: %s", detail)
            raise TransportError(detail) from e

        logger.info("Response status: %s", response.status_code)

        if not response.is_success:
            error_body = response.text
            logger.error("Request error: %s", error_body)
            raise ApiError(error_body, response.status_code)

        if response.status_code == 204 or not response.content:
            return None

        try:
            data = response.json()
        except ValueError as e:
            logger.error("Invalid JSON in response from %s: %s", url, e)
            raise TransportError(f"error decoding response body: {e}") from e
        logger.info("Request successful")
        return data

    # --- Bookmarks ---

    async def fetch_bookmarks(
        self, api_key: str, query_filter: QueryFilter | None = None,
    ) -> BookmarkPage:
        params = (query_filter or QueryFilter()).to_params()
        data = await self.request("GET", "/bookmarks", api_key, query=params)
        return _decode(data, BookmarkPage.from_dict, "bookmark page")

    async def iter_bookmarks(
        self,
        api_key: str,
        query_filter: QueryFilter | None = None,
        max_items: int | None = None,
    ) -> AsyncIterator[Bookmark]:
        """Yield bookmarks across pages, following next_cursor until exhausted.

        Stops early once max_items have been yielded, or if the server hands
        back a cursor it has already given.
        """
        if max_items is not None and max_items <= 0:
            return
        base = query_filter or QueryFilter()
        cursor = base.cursor
        visited = {cursor}
        seen = 0
        while True:
            page_filter = QueryFilter(
                favourited=base.favourited,
                archived=base.archived,
                cursor=cursor,
                limit=base.limit,
            )
            page = await self.fetch_bookmarks(api_key, page_filter)
            for bookmark in page.bookmarks:
                yield bookmark
                seen += 1
                if max_items is not None and seen >= max_items:
                    return
            if not page.next_cursor:
                return
            if page.next_cursor in visited:
                logger.warning("Server repeated cursor %r, stopping pagination", page.next_cursor)
                return
            cursor = page.next_cursor
            visited.add(cursor)

    async def search_bookmarks(
        self,
        api_key: str,
        query: str,
        cursor: str | None = None,
        limit: int | None = None,
    ) -> BookmarkPage:
        params = {"q": query, "cursor": cursor, "limit": limit}
        data = await self.request("GET", "/bookmarks/search", api_key, query=params)
        return _decode(data, BookmarkPage.from_dict, "search results")

    async def get_bookmark(self, api_key: str, bookmark_id: str) -> Bookmark:
        data = await self.request("GET", f"/bookmarks/{bookmark_id}", api_key)
        return _decode(data, Bookmark.from_dict, "bookmark")

    async def update_bookmark(
        self,
        api_key: str,
        bookmark_id: str,
        favourited: bool | None = None,
        archived: bool | None = None,
        title: str | None = None,
    ) -> Bookmark:
        body = {
            key: value
            for key, value in (
                ("favourited", favourited),
                ("archived", archived),
                ("title", title),
            )
            if value is not None
        }
        if not body:
            raise ValueError("Must provide at least one of favourited, archived, title")
        data = await self.request("PATCH", f"/bookmarks/{bookmark_id}", api_key, body=body)
        return _decode(data, Bookmark.from_dict, "bookmark")

    async def delete_bookmark(self, api_key: str, bookmark_id: str) -> None:
        await self.request("DELETE", f"/bookmarks/{bookmark_id}", api_key)
