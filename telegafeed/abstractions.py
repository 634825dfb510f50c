"""Interfaces of the repositories, providers and services."""

from __future__ import annotations

from abc import ABC, abstractmethod

from telegafeed.entities import (
    Article,
    ArticleId,
    ArticlePatch,
    Feed,
    FeedSource,
    FeedSourceId,
    FeedSourcePatch,
    FeedType,
    Summary,
    User,
    UserId,
)


class FetchProvider(ABC):
    """Recognises and fetches one kind of feed."""

    @abstractmethod
    def check_type(self, data: bytes) -> bool:
        """Tell whether ``data`` is a document of this provider's format."""

    @abstractmethod
    def fetch_articles(self, feed_source: FeedSource) -> list[Article]:
        """Download the feed and return its articles."""


class LlmProvider(ABC):
    """Writes summaries of articles and digests of several articles."""

    @abstractmethod
    def generate_summary(self, article: Article) -> str:
        """Return a summary of one article."""

    @abstractmethod
    def generate_digest(self, articles: list[Article]) -> str:
        """Return a digest of several articles."""


class DigestsRepository(ABC):
    @abstractmethod
    def find_latest_digest_for_today(self, user_id: UserId) -> str | None:
        """Return today's digest for the user, or None if there is none."""

    @abstractmethod
    def add_digest(self, user_id: UserId, digest: str) -> None:
        """Store a digest for the user."""


class FeedRepository(ABC):
    @abstractmethod
    def add_article_to_feed(self, article: Article) -> None:
        """Store an article and add it to the feeds of its subscribers."""

    @abstractmethod
    def get_feed_by_user(self, user_id: UserId) -> list[Article]:
        """Return every article in the user's feed."""

    @abstractmethod
    def get_today_articles(self, user_id: UserId) -> list[Article]:
        """Return the articles added to the user's feed today."""

    @abstractmethod
    def get_article_by_id(self, user_id: UserId, article_id: ArticleId) -> Article:
        """Return one article of the user's feed."""

    @abstractmethod
    def update_article(
        self, user_id: UserId, article_id: ArticleId, patch: ArticlePatch
    ) -> Article | None:
        """Apply a patch to the user's flags of an article."""


class FeedSourceRepository(ABC):
    @abstractmethod
    def add_source(self, user_id: UserId, source: FeedSource) -> None:
        """Subscribe the user to a source."""

    @abstractmethod
    def get_sources(self, user_id: UserId) -> list[FeedSource]:
        """Return the user's sources."""

    @abstractmethod
    def get_source(self, user_id: UserId, source_id: FeedSourceId) -> FeedSource:
        """Return one of the user's sources."""

    @abstractmethod
    def get_sources_for_feed_update(self) -> list[FeedSource]:
        """Return every source that at least one user has enabled."""

    @abstractmethod
    def update_source(
        self, user_id: UserId, source_id: FeedSourceId, patch: FeedSourcePatch
    ) -> None:
        """Apply a patch to the user's settings of a source."""

    @abstractmethod
    def delete_source(self, user_id: UserId, source_id: FeedSourceId) -> None:
        """Unsubscribe the user from a source."""


class SummariesRepository(ABC):
    @abstractmethod
    def get_summary(self, article_id: ArticleId) -> Summary | None:
        """Return the stored summary of an article, or None."""

    @abstractmethod
    def add_summary(self, article_id: ArticleId, summary: Summary) -> None:
        """Store a summary of an article."""


class UsersRepository(ABC):
    @abstractmethod
    def get_user_by_telegram_id(self, telegram_id: str) -> User:
        """Return the user with the given Telegram id."""

    @abstractmethod
    def get_user_by_id(self, user_id: UserId) -> User | None:
        """Return the user with the given id, or None if there is none."""

    @abstractmethod
    def add_user(self, user: User) -> None:
        """Register a user."""


class FeedService(ABC):
    @abstractmethod
    def get_feed(self, user_id: UserId) -> Feed:
        """Return the user's articles and daily digest."""

    @abstractmethod
    def update_article(self, user_id: UserId, article_id: ArticleId, patch: ArticlePatch) -> None:
        """Apply a patch to the user's flags of an article."""

    @abstractmethod
    def update_feed(self) -> None:
        """Fetch every enabled source and store the new articles."""


class FeedSourcesService(FeedSourceRepository):
    """Service over feed sources, offering the repository's operations."""


class FetchService(ABC):
    @abstractmethod
    def detect_type(self, feed_source: FeedSource) -> FeedType | str:
        """Return the feed type of a source."""

    @abstractmethod
    def fetch_articles(self, feed_sources: list[FeedSource]) -> list[Article]:
        """Return the articles of all the given sources."""


class LlmService(ABC):
    @abstractmethod
    def get_daily_digest(self, user_id: UserId) -> str:
        """Return today's digest, generating it if needed."""

    @abstractmethod
    def generate_daily_digest(self, user_id: UserId) -> str:
        """Generate and store a digest of today's articles."""

    @abstractmethod
    def get_article_summary(self, user_id: UserId, article_id: ArticleId) -> Summary:
        """Return the summary of an article, generating it if needed."""