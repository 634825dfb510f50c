"""Helpers shared by the feed parsers: date parsing and XML reading."""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from typing import IO, Union

XmlSource = Union[bytes, str, IO[bytes], IO[str]]


class FeedParseError(Exception):
    """Raised when a feed document cannot be decoded."""


class EmptyDocumentError(FeedParseError):
    """Raised when a feed document holds no element at all."""


_RFC3339 = re.compile(
    r"^(\d{4})-(\d{2})-(\d{2})[Tt](\d{2}):(\d{2}):(\d{2})(?:\.(\d+))?"
    r"(?:([Zz])|([+-])(\d{2}):(\d{2}))$"
)
_ZONE_ABBREVIATION = re.compile(r"^(.*) ([A-Z]{3,5})$")


def _parse_rfc3339(text: str) -> datetime:
    match = _RFC3339.match(text)
    if not match:
        raise ValueError(text)
    year, month, day, hour, minute, second, fraction, zulu, sign, oh, om = match.groups()
    micro = int((fraction or "0")[:6].ljust(6, "0"))
    if zulu:
        tz = timezone.utc
    else:
        offset = timedelta(hours=int(oh), minutes=int(om))
        tz = timezone(-offset if sign == "-" else offset)
    return datetime(
        int(year), int(month), int(day), int(hour), int(minute), int(second), micro, tzinfo=tz
    )


def _strptime(layout: str) -> Callable[[str], datetime]:
    def parse(text: str) -> datetime:
        moment = datetime.strptime(text, layout)
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=timezone.utc)
        return moment

    return parse


def _parse_with_abbreviation(text: str) -> datetime:
    match = _ZONE_ABBREVIATION.match(text)
    if not match:
        raise ValueError(text)
    moment = datetime.strptime(match.group(1), "%a, %d %b %Y %H:%M:%S")
    return moment.replace(tzinfo=timezone.utc)


_DATE_PARSERS: tuple[Callable[[str], datetime], ...] = (
    _strptime("%a, %d %b %Y %H:%M:%S %z"),  # RSS standard format
    _strptime("%d %b %y %H:%M %z"),  # alternate RSS format
    _parse_rfc3339,  # Atom/RDF format
    _strptime("%Y-%m-%d"),
    _strptime("%d %b %Y"),
    _parse_with_abbreviation,  # with a time zone name
)


def parse_feed_date(
    date_str: str, now: Callable[[], datetime] | None = None
) -> datetime:
    """Parse a feed date in any known layout; fall back to the current UTC time."""
    clock = now or (lambda: datetime.now(timezone.utc))
    text = date_str.strip()
    if text:
        for parser in _DATE_PARSERS:
            try:
                return parser(text)
            except ValueError:
                continue
    return clock().astimezone(timezone.utc)


def _read_bytes(source: XmlSource) -> bytes:
    data = source if isinstance(source, (bytes, str)) else source.read()
    return data.encode("utf-8") if isinstance(data, str) else data


def _local(name: str) -> str:
    return name.rsplit("}", 1)[-1]


def read_xml(source: XmlSource) -> ET.Element:
    """Parse an XML document and return its root with namespaces stripped from names."""
    data = _read_bytes(source)
    if not data.strip():
        raise EmptyDocumentError("EOF")
    try:
        root = ET.fromstring(data)
    except ET.ParseError as exc:
        raise FeedParseError(str(exc)) from exc
    for element in root.iter():
        if isinstance(element.tag, str):
            element.tag = _local(element.tag)
        element.attrib = {_local(key): value for key, value in element.attrib.items()}
    return root


def child_text(element: ET.Element, name: str) -> str:
    """Return the text of the first child called ``name``, or an empty string."""
    child = element.find(name)
    return "".join(child.itertext()) if child is not None else ""


def check_root(root: ET.Element, name: str) -> None:
    """Raise FeedParseError unless the root element is called ``name``."""
    if root.tag != name:
        raise FeedParseError(f"expected element type <{name}> but have <{root.tag}>")