"""RSS 2.0 feed model and parser."""

from __future__ import annotations

from dataclasses import dataclass, field

from telegafeed.feedutil import FeedParseError, XmlSource, check_root, child_text, read_xml


@dataclass
class RssEnclosure:
    url: str = ""
    type: str = ""


@dataclass
class RssItem:
    title: str = ""
    link: str = ""
    description: str = ""
    pub_date: str = ""
    enclosures: list[RssEnclosure] = field(default_factory=list)


@dataclass
class RssChannel:
    items: list[RssItem] = field(default_factory=list)


@dataclass
class RssFeed:
    channel: RssChannel = field(default_factory=RssChannel)


def parse_rss(source: XmlSource) -> RssFeed:
    """Parse an RSS document."""
    try:
        root = read_xml(source)
        check_root(root, "rss")
    except FeedParseError as exc:
        raise type(exc)(f"error decoding RSS: {exc}") from exc
    channel = root.find("channel")
    if channel is None:
        return RssFeed()
    items = [
        RssItem(
            title=child_text(el, "title"),
            link=child_text(el, "link"),
            description=child_text(el, "description"),
            pub_date=child_text(el, "pubDate"),
            enclosures=[
                RssEnclosure(url=enc.get("url", ""), type=enc.get("type", ""))
                for enc in el.findall("enclosure")
            ],
        )
        for el in channel.findall("item")
    ]
    return RssFeed(channel=RssChannel(items=items))


def get_preview_url(enclosures: list[RssEnclosure]) -> str:
    """Return the first image enclosure, else the first enclosure, else an empty string."""
    image = next((enc.url for enc in enclosures if enc.type.startswith("image/")), None)
    if image is not None:
        return image
    return enclosures[0].url if enclosures else ""