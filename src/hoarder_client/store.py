"""In-memory credential store: which server we talk to, and with which key.

State is guarded by a single lock. The lock is held only to read or write
the origin/key pair, never across a network call: operations take a
snapshot, release the lock, then await the request.
"""

import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass

from .client import AUTH_BEARER, REQUEST_TIMEOUT, HoarderClient
from .config import Config
from .errors import NotFoundError, StorageError, UrlError
from .models import Bookmark, BookmarkPage, QueryFilter
from .urls import normalize_url

logger = logging.getLogger("hoarder_client.store")

LOCK_TIMEOUT = 5.0  # seconds to wait for the state lock before StorageError


@dataclass(frozen=True)
class Credential:
    """An API key together with the origin it was validated against."""
    api_key: str
    origin: str


@dataclass(frozen=True)
class ProbeResult:
    """Outcome of a successful key probe, ready to be committed."""
    credential: Credential
    page: BookmarkPage


class CredentialStore:
    """Single source of truth for the server origin and validated API key."""

    def __init__(
        self,
        auth_header: str = AUTH_BEARER,
        request_timeout: float | None = REQUEST_TIMEOUT,
        lock_timeout: float = LOCK_TIMEOUT,
    ):
        self.auth_header = auth_header
        self.request_timeout = request_timeout
        self.lock_timeout = lock_timeout
        self._lock = threading.Lock()
        self._origin: str | None = None
        self._credential: Credential | None = None

    @classmethod
    def from_config(cls, config: Config) -> "CredentialStore":
        return cls(
            auth_header=config.server.auth_header,
            request_timeout=config.server.request_timeout,
            lock_timeout=config.server.lock_timeout,
        )

    @contextmanager
    def _locked(self):
        if not self._lock.acquire(timeout=self.lock_timeout):
            logger.error("Timed out after %.1fs waiting for credential store lock", self.lock_timeout)
            raise StorageError()
        try:
            yield
        finally:
            self._lock.release()

    def _client(self, origin: str) -> HoarderClient:
        return HoarderClient(origin, auth_header=self.auth_header, timeout=self.request_timeout)

    @property
    def origin(self) -> str | None:
        with self._locked():
            return self._origin

    def set_origin(self, raw_url: str) -> str:
        """Normalize and store the server origin, replacing any previous one."""
        origin = normalize_url(raw_url)
        with self._locked():
            self._origin = origin
        logger.info("Stored server origin: %s", origin)
        return origin

    # --- Validate-then-store ---

    async def probe(self, api_key: str) -> ProbeResult:
        """Try the key with a one-item listing against the current origin.

        Raises the client error unchanged on failure. Stored state is not
        touched here; pass the result to commit().
        """
        with self._locked():
            origin = self._origin
        if not origin:
            raise UrlError("no server URL configured")

        logger.info("Validating API key with base URL: %s", origin)
        page = await self._client(origin).fetch_bookmarks(api_key, QueryFilter(limit=1))
        return ProbeResult(credential=Credential(api_key=api_key, origin=origin), page=page)

    def commit(self, result: ProbeResult) -> None:
        with self._locked():
            self._credential = result.credential
        logger.info("API key validated and stored for %s", result.credential.origin)

    async def validate_and_store(self, api_key: str) -> None:
        result = await self.probe(api_key)
        self.commit(result)

    def get_credential(self) -> str:
        with self._locked():
            credential = self._credential
        if credential is None:
            raise NotFoundError()
        return credential.api_key

    def _session(self) -> tuple[HoarderClient, str]:
        """Snapshot origin and key together for one authenticated call."""
        with self._locked():
            origin = self._origin
            credential = self._credential
        if credential is None:
            raise NotFoundError()
        if credential.origin != origin:
            logger.error(
                "Stored API key was validated for %s, current server is %s",
                credential.origin, origin,
            )
            raise NotFoundError(f"No API key found for {origin}")
        return self._client(origin), credential.api_key

    # --- Authenticated operations ---

    async def fetch_bookmarks(self, query_filter: QueryFilter | None = None) -> BookmarkPage:
        client, api_key = self._session()
        logger.info("Fetching bookmarks with base URL: %s", client.origin)
        return await client.fetch_bookmarks(api_key, query_filter)

    async def fetch_all_bookmarks(
        self,
        query_filter: QueryFilter | None = None,
        max_items: int | None = None,
    ) -> list[Bookmark]:
        client, api_key = self._session()
        return [
            bookmark
            async for bookmark in client.iter_bookmarks(api_key, query_filter, max_items=max_items)
        ]

    async def search_bookmarks(
        self, query: str, cursor: str | None = None, limit: int | None = None,
    ) -> BookmarkPage:
        client, api_key = self._session()
        return await client.search_bookmarks(api_key, query, cursor=cursor, limit=limit)

    async def get_bookmark(self, bookmark_id: str) -> Bookmark:
        client, api_key = self._session()
        return await client.get_bookmark(api_key, bookmark_id)

    async def update_bookmark(self, bookmark_id: str, **fields) -> Bookmark:
        client, api_key = self._session()
        return await client.update_bookmark(api_key, bookmark_id, **fields)

    async def delete_bookmark(self, bookmark_id: str) -> None:
        client, api_key = self._session()
        await client.delete_bookmark(api_key, bookmark_id)
