"""Fetch a feed from an RSSHub route and parse it with ``feedparser``.

Parsing never fails the call: when the body is not a recognisable RSS/Atom
document (an HTML error page, a JSON blob, truncated XML...) the caller gets a
placeholder document whose ``raw_content`` holds the body verbatim.  The raw
body is attached on the success path as well.
"""

from __future__ import annotations

import io
import logging
from typing import List, Optional

import feedparser
from bs4 import BeautifulSoup
from feedparser import FeedParserDict

from rsshub_mcp.main.tools.fetcher import HttpFetcher
from rsshub_mcp.main.tools.models import FeedDocument, FeedItem

logger = logging.getLogger(__name__)

FALLBACK_TITLE = "RSS Feed"
FALLBACK_DESCRIPTION = "RSS feed content"


def clean_html(html_content: str) -> str:
    soup = BeautifulSoup(html_content, "html.parser")
    return soup.get_text(separator=" ", strip=True)


def _entry_to_item(entry: FeedParserDict) -> FeedItem:
    return FeedItem(
        title=entry.get("title", ""),
        description=entry.get("summary", "") or entry.get("description", ""),
        link=entry.get("link", ""),
        pub_date=entry.get("published") or entry.get("updated"),
        author=entry.get("author"),
        categories=[tag.get("term") for tag in entry.get("tags", []) if tag.get("term")],
    )


def is_parsed_feed(parsed: FeedParserDict) -> bool:
    """Return ``True`` when feedparser recognised the document as a feed.

    ``version`` is empty for anything that is not RSS/Atom/RDF.  A malformed
    document (``bozo``) still counts if entries could be recovered from it.
    """
    if not parsed.get("version"):
        return False
    if parsed.bozo and not parsed.entries:
        return False
    return True


def parse_feed_content(content: str, body: Optional[bytes] = None) -> FeedDocument:
    """Turn a feed body into a ``FeedDocument``, falling back to raw passthrough.

    *body* is the undecoded response when available, so feedparser can honour
    the encoding declared in the XML prolog.  It is wrapped in a stream because
    ``feedparser.parse`` treats bare strings as URLs or file names first.
    """
    if body is None:
        body = content.encode("utf-8")
    parsed = feedparser.parse(io.BytesIO(body))
    if not is_parsed_feed(parsed):
        logger.info(
            "Content is not a parseable feed (%s); returning raw body",
            parsed.get("bozo_exception") or "unknown format",
        )
        return FeedDocument(
            title=FALLBACK_TITLE,
            description=FALLBACK_DESCRIPTION,
            items=[],
            raw_content=content,
        )

    channel = parsed.feed
    items: List[FeedItem] = [_entry_to_item(entry) for entry in parsed.entries]
    return FeedDocument(
        title=channel.get("title", ""),
        description=channel.get("description", "") or channel.get("subtitle", ""),
        items=items,
        raw_content=content,
    )


class FeedFetcher:
    """Fetches feed documents from arbitrary RSSHub route paths."""

    def __init__(self, http: HttpFetcher):
        self.http = http

    async def get_feed(self, path: str) -> FeedDocument:
        logger.info("Fetching feed %s from %s", path, self.http.host)
        # get_ok strips exactly one leading "/" from whatever it is given.
        if not path.startswith("/"):
            path = "/" + path
        response = await self.http.get_ok(path)
        return parse_feed_content(response.text, response.content)
