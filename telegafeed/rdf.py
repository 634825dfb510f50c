"""RDF (RSS 1.0) feed model and parser."""

from __future__ import annotations

from dataclasses import dataclass, field

from telegafeed.feedutil import XmlSource, check_root, child_text, read_xml


@dataclass
class RdfItem:
    title: str = ""
    link: str = ""
    description: str = ""
    date: str = ""


@dataclass
class RdfFeed:
    items: list[RdfItem] = field(default_factory=list)


def parse_rdf(source: XmlSource) -> RdfFeed:
    """Parse an RDF document."""
    root = read_xml(source)
    check_root(root, "RDF")
    return RdfFeed(
        items=[
            RdfItem(
                title=child_text(el, "title"),
                link=child_text(el, "link"),
                description=child_text(el, "description"),
                date=child_text(el, "date"),
            )
            for el in root.findall("item")
        ]
    )