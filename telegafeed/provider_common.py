"""Helpers shared by the feed providers."""

from __future__ import annotations

import urllib.parse
import xml.parsers.expat
from dataclasses import dataclass, field
from html.parser import HTMLParser

from telegafeed.feedutil import EmptyDocumentError, FeedParseError
from telegafeed.httputil import HttpClient


@dataclass
class StartElement:
    """The first element of an XML document: its local name and attributes."""

    name: str
    attributes: list[tuple[str, str]] = field(default_factory=list)


class _Found(Exception):
    def __init__(self, element: StartElement) -> None:
        super().__init__()
        self.element = element


def _local(name: str) -> str:
    return name.rsplit(":", 1)[-1]


def xml_start_element(data: bytes | str) -> StartElement:
    """Return the first start element of an XML document."""
    parser = xml.parsers.expat.ParserCreate()
    parser.ordered_attributes = True

    def on_start(name: str, attrs: list[str]) -> None:
        pairs = list(zip(attrs[::2], attrs[1::2]))
        raise _Found(StartElement(_local(name), [(_local(k), v) for k, v in pairs]))

    parser.StartElementHandler = on_start
    try:
        parser.Parse(data, True)
    except _Found as found:
        return found.element
    except xml.parsers.expat.ExpatError as exc:
        if exc.code == xml.parsers.expat.errors.codes[xml.parsers.expat.errors.XML_ERROR_NO_ELEMENTS]:
            raise EmptyDocumentError("EOF") from exc
        raise FeedParseError(str(exc)) from exc
    raise EmptyDocumentError("EOF")


class _OgImageFinder(HTMLParser):
    def __init__(self) -> None:
        super().__init__()
        self.found: str | None = None

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        if self.found is not None or tag != "meta":
            return
        values = {key: value or "" for key, value in attrs}
        content = values.get("content", "")
        if values.get("property", "").startswith("og:image") and content:
            self.found = content


def find_og_image(document: bytes | str) -> str:
    """Return the first Open Graph image URL of an HTML page; raise ValueError if absent."""
    if isinstance(document, bytes):
        try:
            document = document.decode("utf-8")
        except UnicodeDecodeError:
            document = document.decode("latin-1")
    finder = _OgImageFinder()
    finder.feed(document)
    finder.close()
    if finder.found is None:
        raise ValueError("could not find og image")
    return finder.found


def find_preview_url(article_url: str, client: HttpClient) -> str:
    """Find a preview image for an article page, falling back to the site's favicon."""
    try:
        parts = urllib.parse.urlsplit(article_url)
        response = client.request("GET", article_url)
    except (OSError, ValueError):
        return ""
    if response.status != 200:
        return ""
    try:
        return find_og_image(response.body)
    except ValueError:
        return f"{parts.scheme}://{parts.netloc}/favicon.ico"