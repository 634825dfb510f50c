import uuid

import pytest

from telegafeed.abstractions import (
    FeedRepository,
    FeedSourceRepository,
    FetchService,
    LlmService,
    UsersRepository,
)
from telegafeed.entities import NIL_UUID, Article, ArticlePatch, FeedSource, Summary, option_from
from telegafeed.feed_service import DefaultFeedService

USER = str(uuid.uuid4())


class FakeLlm(LlmService):
    def get_daily_digest(self, user_id):
        return f"digest for {user_id}"

    def generate_daily_digest(self, user_id):
        return self.get_daily_digest(user_id)

    def get_article_summary(self, user_id, article_id):
        return Summary()


class FakeFetch(FetchService):
    def __init__(self, articles):
        self.articles = articles
        self.received = None

    def detect_type(self, feed_source):
        return "rss"

    def fetch_articles(self, feed_sources):
        self.received = feed_sources
        return self.articles


class MemoryFeed(FeedRepository):
    def __init__(self, rejected_titles=()):
        self.stored = []
        self.rejected_titles = set(rejected_titles)
        self.patches = []

    def add_article_to_feed(self, article):
        if article.title in self.rejected_titles:
            raise RuntimeError("rejected")
        self.stored.append(article)

    def get_feed_by_user(self, user_id):
        return list(self.stored)

    def get_today_articles(self, user_id):
        return list(self.stored)

    def get_article_by_id(self, user_id, article_id):
        return next(a for a in self.stored if a.id == article_id)

    def update_article(self, user_id, article_id, patch):
        self.patches.append((user_id, article_id, patch))
        return None


class FakeSources(FeedSourceRepository):
    def __init__(self, sources, failing=False):
        self.sources = sources
        self.failing = failing

    def add_source(self, user_id, source):
        self.sources.append(source)

    def get_sources(self, user_id):
        return list(self.sources)

    def get_source(self, user_id, source_id):
        return next(s for s in self.sources if s.id == source_id)

    def get_sources_for_feed_update(self):
        if self.failing:
            raise RuntimeError("db down")
        return list(self.sources)

    def update_source(self, user_id, source_id, patch):
        pass

    def delete_source(self, user_id, source_id):
        pass


class FakeUsers(UsersRepository):
    def get_user_by_telegram_id(self, telegram_id):
        raise LookupError(telegram_id)

    def get_user_by_id(self, user_id):
        return None

    def add_user(self, user):
        pass


def _service(feed, fetch=None, sources=None):
    return DefaultFeedService(
        FakeLlm(), fetch or FakeFetch([]), feed, sources or FakeSources([]), FakeUsers()
    )


def test_get_feed_combines_articles_and_digest():
    feed = MemoryFeed()
    article = Article(id=uuid.uuid4(), title="a")
    feed.stored.append(article)
    result = _service(feed).get_feed(USER)
    assert result.articles == [article]
    assert result.digest == f"digest for {USER}"


def test_update_article_forwards_patch():
    feed = MemoryFeed()
    article_id = uuid.uuid4()
    patch = ArticlePatch(starred=option_from(True))
    _service(feed).update_article(USER, article_id, patch)
    assert feed.patches == [(USER, article_id, patch)]


def test_update_feed_stores_articles_with_fresh_ids():
    source = FeedSource(id=uuid.uuid4(), feed_url="http://example.com/feed")
    articles = [Article(title="one"), Article(title="two")]
    fetch = FakeFetch(articles)
    feed = MemoryFeed()
    _service(feed, fetch, FakeSources([source])).update_feed()
    assert fetch.received == [source]
    assert [a.title for a in feed.stored] == ["one", "two"]
    ids = {a.id for a in feed.stored}
    assert len(ids) == 2
    assert NIL_UUID not in ids


def test_update_feed_continues_after_failed_insert():
    articles = [Article(title="bad"), Article(title="good")]
    feed = MemoryFeed(rejected_titles={"bad"})
    _service(feed, FakeFetch(articles)).update_feed()
    assert [a.title for a in feed.stored] == ["good"]


def test_update_feed_propagates_source_errors():
    feed = MemoryFeed()
    with pytest.raises(RuntimeError):
        _service(feed, sources=FakeSources([], failing=True)).update_feed()
    assert feed.stored == []