"""Providers that fetch articles from Atom, RDF and RSS feeds."""

from __future__ import annotations

from telegafeed.abstractions import FetchProvider
from telegafeed.atom import get_link, get_preview_link, parse_atom
from telegafeed.entities import Article, FeedSource
from telegafeed.feedutil import FeedParseError, parse_feed_date
from telegafeed.httputil import HttpClient, HttpStatusError, UrllibHttpClient, fetch, now_utc
from telegafeed.provider_common import find_preview_url, xml_start_element
from telegafeed.rdf import parse_rdf
from telegafeed.rss import get_preview_url, parse_rss

ATOM_SPEC_URL = "www.w3.org/2005/Atom"
RDF_SPEC_URL = "www.w3.org/1999/02/22-rdf-syntax-ns"


class FeedFetchError(Exception):
    """Raised when a feed cannot be downloaded or parsed."""


def _has_xmlns(attributes: list[tuple[str, str]], spec_url: str) -> bool:
    return any(name == "xmlns" and spec_url in value for name, value in attributes)


def _download(client: HttpClient, feed_source: FeedSource, prefix: str) -> bytes:
    try:
        return fetch(client, "GET", feed_source.feed_url).body
    except (HttpStatusError, OSError, ValueError) as exc:
        raise FeedFetchError(f"{prefix}: {exc}") from exc


class AtomProvider(FetchProvider):
    def __init__(self, client: HttpClient | None = None) -> None:
        self.client = client or UrllibHttpClient(timeout=15.0)

    def check_type(self, data: bytes) -> bool:
        element = xml_start_element(data)
        return element.name == "feed" and _has_xmlns(element.attributes, ATOM_SPEC_URL)

    def fetch_articles(self, feed_source: FeedSource) -> list[Article]:
        body = _download(
            self.client, feed_source, f"failed to fetch articles from {feed_source.feed_url}"
        )
        try:
            feed = parse_atom(body)
        except FeedParseError as exc:
            raise FeedFetchError(f"failed to parse feed: {exc}") from exc
        return [
            Article(
                title=entry.title.strip(),
                text=entry.content.value.strip() if entry.content else "",
                url=get_link(entry.links),
                preview_url=get_preview_link(entry.links),
                added_at=now_utc(),
                published_at=parse_feed_date(entry.updated),
            )
            for entry in feed.entries
        ]


class RdfProvider(FetchProvider):
    def __init__(self, client: HttpClient | None = None) -> None:
        self.client = client or UrllibHttpClient(timeout=15.0)

    def check_type(self, data: bytes) -> bool:
        return _has_xmlns(xml_start_element(data).attributes, RDF_SPEC_URL)

    def fetch_articles(self, feed_source: FeedSource) -> list[Article]:
        body = _download(self.client, feed_source, "fetch articles failed")
        try:
            feed = parse_rdf(body)
        except FeedParseError as exc:
            raise FeedFetchError(f"failed to parse feed: {exc}") from exc
        return [
            Article(
                title=item.title.strip(),
                text=item.description.strip(),
                url=item.link,
                preview_url=find_preview_url(item.link, self.client),
                added_at=now_utc(),
                published_at=parse_feed_date(item.date),
            )
            for item in feed.items
        ]


class RssProvider(FetchProvider):
    def __init__(self, client: HttpClient | None = None) -> None:
        self.client = client or UrllibHttpClient(timeout=10.0)

    def check_type(self, data: bytes) -> bool:
        return xml_start_element(data).name == "rss"

    def fetch_articles(self, feed_source: FeedSource) -> list[Article]:
        body = _download(
            self.client, feed_source, f"failed to fetch articles from {feed_source.feed_url}, error"
        )
        try:
            feed = parse_rss(body)
        except FeedParseError as exc:
            raise FeedFetchError(f"failed to parse rss: {exc}") from exc
        return [
            Article(
                title=item.title.strip(),
                text=item.description.strip(),
                url=item.link,
                preview_url=get_preview_url(item.enclosures),
                added_at=now_utc(),
                published_at=parse_feed_date(item.pub_date),
            )
            for item in feed.channel.items
        ]