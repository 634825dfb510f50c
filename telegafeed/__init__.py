"""Personal news feed backend: feed parsing, per-user sources, summaries and digests."""

__version__ = "0.1.0"