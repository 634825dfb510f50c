"""Service producing daily digests and article summaries."""

from __future__ import annotations

import logging

from telegafeed.abstractions import (
    DigestsRepository,
    FeedRepository,
    LlmProvider,
    LlmService,
    SummariesRepository,
)
from telegafeed.entities import ArticleId, Summary, UserId
from telegafeed.httputil import now_utc

logger = logging.getLogger(__name__)


class DefaultLlmService(LlmService):
    """Caches generated texts in the repositories."""

    def __init__(
        self,
        digests_repository: DigestsRepository,
        summaries_repository: SummariesRepository,
        feed_repository: FeedRepository,
        llm_provider: LlmProvider,
    ) -> None:
        self.digests_repository = digests_repository
        self.summaries_repository = summaries_repository
        self.feed_repository = feed_repository
        self.llm_provider = llm_provider

    def get_daily_digest(self, user_id: UserId) -> str:
        existing = self.digests_repository.find_latest_digest_for_today(user_id)
        if existing is not None:
            return existing
        return self.generate_daily_digest(user_id)

    def generate_daily_digest(self, user_id: UserId) -> str:
        articles = self.feed_repository.get_today_articles(user_id)
        digest = self.llm_provider.generate_digest(articles)
        try:
            self.digests_repository.add_digest(user_id, digest)
        except Exception as exc:  # storing is best effort
            logger.warning("Failed to save digest to db: %s", exc)
        return digest

    def get_article_summary(self, user_id: UserId, article_id: ArticleId) -> Summary:
        existing = self.summaries_repository.get_summary(article_id)
        if existing is not None:
            return existing

        article = self.feed_repository.get_article_by_id(user_id, article_id)
        text = self.llm_provider.generate_summary(article)
        summary = Summary(generated_at=now_utc(), text=text)
        try:
            self.summaries_repository.add_summary(article_id, summary)
        except Exception as exc:  # storing is best effort
            logger.warning("Failed to save summary to db: %s", exc)
        return summary