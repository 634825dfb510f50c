"""Domain entities of the feed service and their JSON representations."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Generic, TypeVar

T = TypeVar("T")

UserId = str
ArticleId = uuid.UUID
FeedSourceId = uuid.UUID
SummaryId = str

NIL_UUID = uuid.UUID(int=0)
ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)


class FeedType(str, Enum):
    """Syndication format of a feed source."""

    RSS = "rss"
    RDF = "rdf"
    ATOM = "atom"


DEFAULT_FEED_TYPE = FeedType.RSS


def _format_time(moment: datetime) -> str:
    """Format a timestamp as RFC 3339 with the shortest fractional part."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    text = moment.strftime("%Y-%m-%dT%H:%M:%S")
    if moment.microsecond:
        text += "." + f"{moment.microsecond:06d}".rstrip("0")
    offset = moment.utcoffset() or timedelta(0)
    if offset == timedelta(0):
        return text + "Z"
    sign = "-" if offset < timedelta(0) else "+"
    minutes = abs(int(offset.total_seconds())) // 60
    return f"{text}{sign}{minutes // 60:02d}:{minutes % 60:02d}"


def _feed_type_text(value: FeedType | str) -> str:
    return value.value if isinstance(value, FeedType) else str(value)


@dataclass
class Article:
    """A single article in a user's feed."""

    id: ArticleId = NIL_UUID
    source_id: FeedSourceId = NIL_UUID
    added_at: datetime = ZERO_TIME
    published_at: datetime = ZERO_TIME
    title: str = ""
    text: str = ""
    url: str = ""
    preview_url: str = ""
    starred: bool = False
    read: bool = False

    def to_json(self) -> dict[str, Any]:
        """Return the JSON object; empty strings and false flags are left out."""
        result: dict[str, Any] = {
            "id": str(self.id),
            "sourceId": str(self.source_id),
            "added_at": _format_time(self.added_at),
            "published_at": _format_time(self.published_at),
        }
        optional = {
            "title": self.title,
            "text": self.text,
            "url": self.url,
            "preview_url": self.preview_url,
            "starred": self.starred,
            "read": self.read,
        }
        result.update({key: value for key, value in optional.items() if value})
        return result


@dataclass
class Feed:
    """A user's articles together with the daily digest."""

    articles: list[Article] = field(default_factory=list)
    digest: str = ""

    def to_json(self) -> dict[str, Any]:
        """Return the JSON object; an empty article list or digest is left out."""
        result: dict[str, Any] = {}
        if self.articles:
            result["articles"] = [article.to_json() for article in self.articles]
        if self.digest:
            result["digest"] = self.digest
        return result


@dataclass
class FeedSource:
    """A feed subscribed to by a user."""

    id: FeedSourceId = NIL_UUID
    name: str = ""
    feed_url: str = ""
    type: FeedType | str = ""
    disabled: bool = False

    def to_json(self) -> dict[str, Any]:
        """Return the JSON object with every field present."""
        return {
            "id": str(self.id),
            "name": self.name,
            "feed_url": self.feed_url,
            "type": _feed_type_text(self.type),
            "disabled": self.disabled,
        }


@dataclass
class Summary:
    """A generated summary of an article."""

    id: SummaryId = ""
    generated_at: datetime = ZERO_TIME
    text: str = ""

    def to_json(self) -> dict[str, Any]:
        """Return the JSON object; an empty id or text is left out."""
        result: dict[str, Any] = {}
        if self.id:
            result["id"] = self.id
        result["generated_at"] = _format_time(self.generated_at)
        if self.text:
            result["text"] = self.text
        return result


@dataclass
class User:
    """A registered user, identified by a Telegram account."""

    id: uuid.UUID = NIL_UUID
    telegram_id: str = ""

    def to_json(self) -> dict[str, Any]:
        """Return the JSON object; an empty Telegram id is left out."""
        result: dict[str, Any] = {"id": str(self.id)}
        if self.telegram_id:
            result["telegram_id"] = self.telegram_id
        return result


@dataclass(frozen=True)
class Option(Generic[T]):
    """A value that may be absent, as used by partial updates."""

    _value: Any = None
    _has_value: bool = False

    def has_value(self) -> bool:
        return self._has_value

    def value(self) -> T:
        """Return the held value; raise ValueError when there is none."""
        if not self._has_value:
            raise ValueError("no value for option")
        return self._value


def empty_option() -> Option[Any]:
    """Return an option holding nothing."""
    return Option()


def option_from(value: T) -> Option[T]:
    """Return an option holding ``value``, whatever it is."""
    return Option(value, True)


def option_from_nilable(value: T | None) -> Option[T]:
    """Return an empty option for ``None``, otherwise one holding ``value``."""
    if value is None:
        return empty_option()
    return option_from(value)


@dataclass(frozen=True)
class ArticlePatch:
    """Partial update of a user's article flags."""

    starred: Option[bool] = field(default_factory=empty_option)
    read: Option[bool] = field(default_factory=empty_option)


@dataclass(frozen=True)
class FeedSourcePatch:
    """Partial update of a user's feed source settings."""

    name: Option[str] = field(default_factory=empty_option)
    disabled: Option[bool] = field(default_factory=empty_option)