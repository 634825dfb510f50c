import uuid
from datetime import timedelta

import pytest

from telegafeed.abstractions import DigestsRepository, FeedRepository, SummariesRepository
from telegafeed.entities import Article, Summary
from telegafeed.llm_providers import EchoLlmProvider, StubLlmProvider
from telegafeed.llm_service import DefaultLlmService

USER = str(uuid.uuid4())


class MemoryDigests(DigestsRepository):
    def __init__(self, existing=None, failing=False):
        self.existing = existing
        self.failing = failing
        self.added = []

    def find_latest_digest_for_today(self, user_id):
        return self.existing

    def add_digest(self, user_id, digest):
        if self.failing:
            raise RuntimeError("db down")
        self.added.append((user_id, digest))


class MemorySummaries(SummariesRepository):
    def __init__(self, failing=False):
        self.summaries = {}
        self.failing = failing

    def get_summary(self, article_id):
        return self.summaries.get(article_id)

    def add_summary(self, article_id, summary):
        if self.failing:
            raise RuntimeError("db down")
        self.summaries[article_id] = summary


class MemoryFeed(FeedRepository):
    def __init__(self, articles=()):
        self.articles = {a.id: a for a in articles}
        self.today_calls = 0

    def add_article_to_feed(self, article):
        self.articles[article.id] = article

    def get_feed_by_user(self, user_id):
        return list(self.articles.values())

    def get_today_articles(self, user_id):
        self.today_calls += 1
        return list(self.articles.values())

    def get_article_by_id(self, user_id, article_id):
        try:
            return self.articles[article_id]
        except KeyError:
            raise LookupError("no such article") from None

    def update_article(self, user_id, article_id, patch):
        return None


def test_existing_digest_is_returned_without_generation():
    feed = MemoryFeed()
    digests = MemoryDigests(existing="stored digest")
    service = DefaultLlmService(digests, MemorySummaries(), feed, StubLlmProvider())
    assert service.get_daily_digest(USER) == "stored digest"
    assert feed.today_calls == 0
    assert digests.added == []


def test_missing_digest_is_generated_and_stored():
    digests = MemoryDigests()
    service = DefaultLlmService(digests, MemorySummaries(), MemoryFeed(), StubLlmProvider())
    assert service.get_daily_digest(USER) == "Test digest"
    assert digests.added == [(USER, "Test digest")]


def test_digest_returned_even_if_storing_fails():
    digests = MemoryDigests(failing=True)
    service = DefaultLlmService(digests, MemorySummaries(), MemoryFeed(), EchoLlmProvider())
    assert service.generate_daily_digest(USER) == "sample digest"


def test_summary_is_generated_and_cached():
    article = Article(id=uuid.uuid4(), text="abc")
    summaries = MemorySummaries()
    service = DefaultLlmService(MemoryDigests(), summaries, MemoryFeed([article]), EchoLlmProvider())
    summary = service.get_article_summary(USER, article.id)
    assert summary.text == "cba"
    assert summary.generated_at.utcoffset() == timedelta(0)
    assert summaries.summaries[article.id] is summary
    assert service.get_article_summary(USER, article.id) is summary


def test_existing_summary_is_returned():
    article_id = uuid.uuid4()
    summaries = MemorySummaries()
    stored = Summary(id="s1", text="kept")
    summaries.summaries[article_id] = stored
    service = DefaultLlmService(MemoryDigests(), summaries, MemoryFeed(), StubLlmProvider())
    assert service.get_article_summary(USER, article_id) is stored


def test_summary_returned_even_if_storing_fails():
    article = Article(id=uuid.uuid4(), text="xyz")
    service = DefaultLlmService(
        MemoryDigests(), MemorySummaries(failing=True), MemoryFeed([article]), StubLlmProvider()
    )
    assert service.get_article_summary(USER, article.id).text == "Test summary"


def test_summary_of_unknown_article_raises():
    service = DefaultLlmService(MemoryDigests(), MemorySummaries(), MemoryFeed(), StubLlmProvider())
    with pytest.raises(LookupError):
        service.get_article_summary(USER, uuid.uuid4())