"""Service managing a user's feed sources."""

from __future__ import annotations

from telegafeed.abstractions import FeedSourceRepository, FeedSourcesService, FetchService
from telegafeed.entities import FeedSource, FeedSourceId, FeedSourcePatch, UserId


class DefaultFeedSourcesService(FeedSourcesService):
    """Adds type detection on top of the feed source repository."""

    def __init__(
        self, fetch_service: FetchService, feed_source_repository: FeedSourceRepository
    ) -> None:
        self.fetch_service = fetch_service
        self.feed_source_repository = feed_source_repository

    def add_source(self, user_id: UserId, source: FeedSource) -> None:
        """Detect the source's feed type, then subscribe the user to it."""
        source.type = self.fetch_service.detect_type(source)
        self.feed_source_repository.add_source(user_id, source)

    def get_sources(self, user_id: UserId) -> list[FeedSource]:
        return self.feed_source_repository.get_sources(user_id)

    def get_source(self, user_id: UserId, source_id: FeedSourceId) -> FeedSource:
        return self.feed_source_repository.get_source(user_id, source_id)

    def get_sources_for_feed_update(self) -> list[FeedSource]:
        return self.feed_source_repository.get_sources_for_feed_update()

    def update_source(
        self, user_id: UserId, source_id: FeedSourceId, patch: FeedSourcePatch
    ) -> None:
        self.feed_source_repository.update_source(user_id, source_id, patch)

    def delete_source(self, user_id: UserId, source_id: FeedSourceId) -> None:
        self.feed_source_repository.delete_source(user_id, source_id)