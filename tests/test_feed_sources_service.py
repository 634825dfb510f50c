import uuid

import pytest

from telegafeed.abstractions import FeedSourceRepository, FetchService
from telegafeed.entities import FeedSource, FeedSourcePatch, FeedType, option_from
from telegafeed.feed_sources_service import DefaultFeedSourcesService

USER = str(uuid.uuid4())


class FakeFetchService(FetchService):
    def __init__(self, detected):
        self.detected = detected

    def detect_type(self, feed_source):
        return self.detected

    def fetch_articles(self, feed_sources):
        return []


class MemoryRepository(FeedSourceRepository):
    def __init__(self):
        self.sources = {}

    def add_source(self, user_id, source):
        source.id = uuid.uuid4()
        self.sources[(user_id, source.id)] = source

    def get_sources(self, user_id):
        return [s for (u, _), s in self.sources.items() if u == user_id]

    def get_source(self, user_id, source_id):
        try:
            return self.sources[(user_id, source_id)]
        except KeyError:
            raise LookupError("no such source") from None

    def get_sources_for_feed_update(self):
        return [s for s in self.sources.values() if not s.disabled]

    def update_source(self, user_id, source_id, patch):
        source = self.get_source(user_id, source_id)
        if patch.name.has_value():
            source.name = patch.name.value()
        if patch.disabled.has_value():
            source.disabled = patch.disabled.value()

    def delete_source(self, user_id, source_id):
        del self.sources[(user_id, source_id)]


@pytest.fixture
def repo():
    return MemoryRepository()


@pytest.fixture
def service(repo):
    return DefaultFeedSourcesService(FakeFetchService(FeedType.ATOM), repo)


def test_add_source_sets_detected_type(service, repo):
    source = FeedSource(name="News", feed_url="http://example.com/feed")
    service.add_source(USER, source)
    stored = service.get_sources(USER)
    assert stored == [source]
    assert stored[0].type == "atom"


def test_get_source_round_trip(service):
    source = FeedSource(name="News", feed_url="http://example.com/feed")
    service.add_source(USER, source)
    assert service.get_source(USER, source.id) is source


def test_get_source_missing_raises(service):
    with pytest.raises(LookupError):
        service.get_source(USER, uuid.uuid4())


def test_update_source_applies_patch(service):
    source = FeedSource(name="Old", feed_url="http://example.com/feed")
    service.add_source(USER, source)
    service.update_source(
        USER, source.id, FeedSourcePatch(name=option_from("New"), disabled=option_from(True))
    )
    updated = service.get_source(USER, source.id)
    assert updated.name == "New"
    assert updated.disabled is True
    assert service.get_sources_for_feed_update() == []


def test_delete_source_removes_it(service):
    source = FeedSource(name="News", feed_url="http://example.com/feed")
    service.add_source(USER, source)
    service.delete_source(USER, source.id)
    assert service.get_sources(USER) == []