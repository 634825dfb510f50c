"""Service assembling user feeds and refreshing articles from sources."""

from __future__ import annotations

import logging
import uuid

from telegafeed.abstractions import (
    FeedRepository,
    FeedService,
    FeedSourceRepository,
    FetchService,
    LlmService,
    UsersRepository,
)
from telegafeed.entities import ArticleId, ArticlePatch, Feed, UserId

logger = logging.getLogger(__name__)


class DefaultFeedService(FeedService):
    """Feed service backed by repositories, the fetch service and the LLM service."""

    def __init__(
        self,
        llm_service: LlmService,
        fetch_service: FetchService,
        feed_repository: FeedRepository,
        feed_source_repository: FeedSourceRepository,
        users_repository: UsersRepository,
    ) -> None:
        self.llm_service = llm_service
        self.fetch_service = fetch_service
        self.feed_repository = feed_repository
        self.feed_source_repository = feed_source_repository
        self.users_repository = users_repository

    def get_feed(self, user_id: UserId) -> Feed:
        articles = self.feed_repository.get_feed_by_user(user_id)
        digest = self.llm_service.get_daily_digest(user_id)
        return Feed(articles=articles, digest=digest)

    def update_article(self, user_id: UserId, article_id: ArticleId, patch: ArticlePatch) -> None:
        self.feed_repository.update_article(user_id, article_id, patch)

    def update_feed(self) -> None:
        """Fetch all enabled sources and store each article under a fresh id."""
        sources = self.feed_source_repository.get_sources_for_feed_update()
        for article in self.fetch_service.fetch_articles(sources):
            article.id = uuid.uuid4()
            try:
                self.feed_repository.add_article_to_feed(article)
            except Exception as exc:  # one bad article must not stop the rest
                logger.warning("Error adding article to feed: %s", exc)