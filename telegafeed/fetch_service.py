"""Detects feed types and fetches articles from many sources at once."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from concurrent.futures import ThreadPoolExecutor

from telegafeed.abstractions import FetchProvider, FetchService
from telegafeed.entities import DEFAULT_FEED_TYPE, Article, FeedSource, FeedType
from telegafeed.feedutil import FeedParseError
from telegafeed.httputil import HttpClient, HttpStatusError, UrllibHttpClient, fetch

logger = logging.getLogger(__name__)


class DefaultFetchService(FetchService):
    """Fetch service backed by a mapping from feed type to provider."""

    def __init__(
        self,
        providers: Mapping[FeedType | str, FetchProvider],
        client: HttpClient | None = None,
    ) -> None:
        self.providers = dict(providers)
        self.client = client or UrllibHttpClient(timeout=10.0)

    def detect_type(self, feed_source: FeedSource) -> FeedType | str:
        """Return the type of the first provider that recognises the feed, else the default."""
        try:
            body = fetch(self.client, "GET", feed_source.feed_url).body
        except (HttpStatusError, OSError, ValueError):
            return DEFAULT_FEED_TYPE

        for feed_type, provider in self.providers.items():
            try:
                if provider.check_type(body):
                    return feed_type
            except (FeedParseError, ValueError):
                continue
        return DEFAULT_FEED_TYPE

    def fetch_articles(self, feed_sources: list[FeedSource]) -> list[Article]:
        """Fetch every source concurrently and return all their articles."""
        if not feed_sources:
            return []
        with ThreadPoolExecutor(max_workers=len(feed_sources)) as pool:
            batches = list(pool.map(self._fetch_source, feed_sources))
        return [article for batch in batches for article in batch]

    def _fetch_source(self, source: FeedSource) -> list[Article]:
        provider = self.providers[DEFAULT_FEED_TYPE]
        try:
            articles = provider.fetch_articles(source)
        except Exception as exc:  # a failing source must not stop the others
            logger.warning("Failed to fetch articles from %s, error: %s", source.feed_url, exc)
            return []
        for article in articles:
            article.source_id = source.id
        return articles