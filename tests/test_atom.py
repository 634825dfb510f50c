import io

import pytest

from telegafeed.atom import AtomLink, get_link, get_preview_link, parse_atom
from telegafeed.feedutil import EmptyDocumentError, FeedParseError

VALID = """
<feed xmlns="http://www.w3.org/2005/Atom">
    <title>Example Feed</title>
    <entry>
        <title>Atom-Powered Robots Run Amok</title>
        <link href="http://example.com/1" rel="alternate" type="text/html" />
        <updated>2003-12-13T18:30:02Z</updated>
        <content type="text">Some text content</content>
    </entry>
</feed>
"""


def test_parse_atom_valid_input():
    feed = parse_atom(io.StringIO(VALID))
    assert feed.title == "Example Feed"
    assert len(feed.entries) == 1
    entry = feed.entries[0]
    assert entry.title == "Atom-Powered Robots Run Amok"
    assert entry.updated == "2003-12-13T18:30:02Z"
    assert entry.content is not None and entry.content.value == "Some text content"
    assert get_link(entry.links) == "http://example.com/1"


def test_parse_atom_invalid_input():
    with pytest.raises(FeedParseError, match="error decoding Atom feed"):
        parse_atom("<invalid><xml></xml></invalid>")


def test_parse_atom_empty_input():
    with pytest.raises(EmptyDocumentError):
        parse_atom("")


def test_get_link_present():
    links = [
        AtomLink("http://example.com/1", "alternate", "text/html"),
        AtomLink("http://example.com/2", "enclosure", "image/jpeg"),
    ]
    assert get_link(links) == "http://example.com/1"


def test_get_link_absent():
    assert get_link([AtomLink("http://example.com/2", "enclosure", "image/jpeg")]) == ""


def test_get_link_empty():
    assert get_link([]) == ""


def test_get_preview_link_requires_image_prefix():
    links = [AtomLink("image/a.png", "enclosure"), AtomLink("http://example.com/2", "enclosure")]
    assert get_preview_link(links) == "image/a.png"
    assert get_preview_link(links[1:]) == ""