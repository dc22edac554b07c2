"""Bookmark data shapes exchanged with the Hoarder API."""

from dataclasses import asdict, dataclass, field


def _require(data: dict, key: str, kind):
    value = data[key]
    if not isinstance(value, kind):
        raise TypeError(f"{key!r} has type {type(value).__name__}")
    return value


@dataclass
class Bookmark:
    bookmark_id: str
    url: str
    title: str
    favourited: bool = False
    archived: bool = False
    created_at: str = ""  # passed through as sent by the server

    @classmethod
    def from_dict(cls, data: dict) -> "Bookmark":
        return cls(
            bookmark_id=_require(data, "bookmark_id", str),
            url=_require(data, "url", str),
            title=_require(data, "title", (str, type(None))) or "",
            favourited=_require(data, "favourited", bool),
            archived=_require(data, "archived", bool),
            created_at=_require(data, "created_at", str),
        )

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class BookmarkPage:
    """One page of bookmarks. ``next_cursor`` of None means no more pages."""
    bookmarks: list[Bookmark] = field(default_factory=list)
    next_cursor: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> "BookmarkPage":
        bookmarks = _require(data, "bookmarks", list)
        next_cursor = data.get("next_cursor")
        if next_cursor is not None and not isinstance(next_cursor, str):
            raise TypeError(f"'next_cursor' has type {type(next_cursor).__name__}")
        return cls(
            bookmarks=[Bookmark.from_dict(b) for b in bookmarks],
            next_cursor=next_cursor,
        )

    def to_dict(self) -> dict:
        return {
            "bookmarks": [b.to_dict() for b in self.bookmarks],
            "next_cursor": self.next_cursor,
        }


@dataclass
class QueryFilter:
    """Optional listing filters. Fields left as None are not sent."""
    favourited: bool | None = None
    archived: bool | None = None
    cursor: str | None = None
    limit: int | None = None

    def to_params(self) -> dict:
        params: dict = {}
        if self.favourited is not None:
            params["favourited"] = self.favourited
        if self.archived is not None:
            params["archived"] = self.archived
        if self.cursor is not None:
            params["cursor"] = self.cursor
        if self.limit is not None:
            params["limit"] = self.limit
        return params
