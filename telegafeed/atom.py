"""Atom feed model and parser."""

from __future__ import annotations

from dataclasses import dataclass, field

from telegafeed.feedutil import FeedParseError, XmlSource, check_root, child_text, read_xml


@dataclass
class AtomLink:
    href: str = ""
    rel: str = ""
    type: str = ""


@dataclass
class AtomContent:
    type: str = ""
    value: str = ""


@dataclass
class AtomEntry:
    title: str = ""
    links: list[AtomLink] = field(default_factory=list)
    updated: str = ""
    content: AtomContent | None = None


@dataclass
class AtomFeed:
    title: str = ""
    entries: list[AtomEntry] = field(default_factory=list)


def parse_atom(source: XmlSource) -> AtomFeed:
    """Parse an Atom document."""
    try:
        root = read_xml(source)
        check_root(root, "feed")
    except FeedParseError as exc:
        raise type(exc)(f"error decoding Atom feed: {exc}") from exc
    entries = []
    for element in root.findall("entry"):
        content_el = element.find("content")
        content = None
        if content_el is not None:
            content = AtomContent(
                type=content_el.get("type", ""), value="".join(content_el.itertext())
            )
        entries.append(
            AtomEntry(
                title=child_text(element, "title"),
                links=[
                    AtomLink(href=ln.get("href", ""), rel=ln.get("rel", ""), type=ln.get("type", ""))
                    for ln in element.findall("link")
                ],
                updated=child_text(element, "updated"),
                content=content,
            )
        )
    return AtomFeed(title=child_text(root, "title"), entries=entries)


def get_link(links: list[AtomLink]) -> str:
    """Return the first alternate (or unqualified) link, or an empty string."""
    return next((ln.href for ln in links if ln.rel in ("alternate", "")), "")


def get_preview_link(links: list[AtomLink]) -> str:
    """Return the first enclosure link whose href starts with ``image/``."""
    return next(
        (ln.href for ln in links if ln.rel == "enclosure" and ln.href.startswith("image/")), ""
    )