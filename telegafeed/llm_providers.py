"""Summary and digest providers that work offline."""

from __future__ import annotations

from dataclasses import dataclass

from telegafeed.abstractions import LlmProvider
from telegafeed.entities import Article


@dataclass
class EchoLlmProvider(LlmProvider):
    """Summarises an article by reversing its text."""

    digest: str = "sample digest"

    def generate_summary(self, article: Article) -> str:
        return article.text[::-1]

    def generate_digest(self, articles: list[Article]) -> str:
        return self.digest


@dataclass
class StubLlmProvider(LlmProvider):
    """Returns fixed texts."""

    summary: str = "Test summary"
    digest: str = "Test digest"

    def generate_summary(self, article: Article) -> str:
        return self.summary

    def generate_digest(self, articles: list[Article]) -> str:
        return self.digest