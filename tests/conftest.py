"""Shared test fixtures for hoarder_client tests."""

import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from hoarder_client import logging_setup
from hoarder_client.store import CredentialStore

ORIGIN = "https://hoarder.example.com"


def make_response(status_code: int = 200, json_data=None, text: str | None = None):
    """Build a stand-in for httpx.Response."""
    resp = MagicMock()
    resp.status_code = status_code
    resp.is_success = 200 <= status_code < 300
    if json_data is not None:
        resp.text = json.dumps(json_data)
        resp.json.return_value = json_data
    else:
        resp.text = text or ""
        resp.json.side_effect = json.JSONDecodeError("Expecting value", resp.text, 0)
    resp.content = resp.text.encode()
    return resp


def mock_httpx_client(*responses, side_effect=None):
    """Create a mock httpx.AsyncClient that works as an async context manager.

    Each call to ``request`` returns the next response in order.
    """
    mock_client = AsyncMock()
    mock_client.__aenter__ = AsyncMock(return_value=mock_client)
    mock_client.__aexit__ = AsyncMock(return_value=False)
    if side_effect is not None:
        mock_client.request = AsyncMock(side_effect=side_effect)
    elif len(responses) == 1:
        mock_client.request = AsyncMock(return_value=responses[0])
    else:
        mock_client.request = AsyncMock(side_effect=list(responses))
    return mock_client


def bookmark_json(bookmark_id: str = "bk_1", **overrides) -> dict:
    data = {
        "bookmark_id": bookmark_id,
        "url": f"https://example.com/{bookmark_id}",
        "title": f"Title {bookmark_id}",
        "favourited": False,
        "archived": False,
        "created_at": "2024-03-01T10:15:00.000Z",
    }
    data.update(overrides)
    return data


def page_json(*bookmarks, next_cursor=None) -> dict:
    return {"bookmarks": list(bookmarks), "next_cursor": next_cursor}


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    monkeypatch.delenv("HOARDER_BASE_URL", raising=False)
    monkeypatch.delenv("HOARDER_API_KEY", raising=False)


@pytest.fixture
def store():
    """A fresh, unconfigured credential store."""
    return CredentialStore(lock_timeout=0.5)


@pytest.fixture
def configured_store(store):
    """A store with the test origin set but no key validated."""
    store.set_origin(ORIGIN)
    return store


@pytest.fixture
def reset_logging():
    logging_setup.reset_logging()
    yield
    logging_setup.reset_logging()
