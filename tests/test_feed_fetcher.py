"""Tests for feed fetching and the raw-content fallback."""

from unittest import IsolatedAsyncioTestCase, TestCase

from catalog_fixtures import HOST, HTML_PAGE, RSS_FEED, RecordingTransport, default_routes
from rsshub_mcp.main.tools.errors import UpstreamStatusError
from rsshub_mcp.main.tools.feed_fetcher import (
    FALLBACK_DESCRIPTION,
    FALLBACK_TITLE,
    FeedFetcher,
    parse_feed_content,
)
from rsshub_mcp.main.tools.fetcher import HttpFetcher


class TestParseFeedContent(TestCase):
    def test_rss_channel_and_items(self) -> None:
        feed = parse_feed_content(RSS_FEED)

        self.assertEqual(feed.title, "bilibili live room 3")
        self.assertEqual(feed.description, "Stream notifications - powered by RSSHub")
        self.assertEqual(len(feed.items), 2)
        first = feed.items[0]
        self.assertEqual(first.title, "Stream started")
        self.assertEqual(first.link, "https://live.bilibili.com/3?t=1")
        self.assertEqual(first.author, "Alice")
        self.assertEqual(first.categories, ["Games", "Live"])
        self.assertIsNotNone(first.pub_date)
        self.assertIn("Now live", first.description)
        self.assertIsNone(feed.items[1].author)
        self.assertEqual(feed.items[1].categories, [])
        self.assertEqual(feed.raw_content, RSS_FEED)

    def test_html_falls_back_to_raw_content(self) -> None:
        feed = parse_feed_content(HTML_PAGE)

        self.assertEqual(feed.title, FALLBACK_TITLE)
        self.assertEqual(feed.title, "RSS Feed")
        self.assertEqual(feed.description, FALLBACK_DESCRIPTION)
        self.assertEqual(feed.items, [])
        self.assertEqual(feed.raw_content, HTML_PAGE)

    def test_plain_text_falls_back(self) -> None:
        feed = parse_feed_content("just some text")
        self.assertEqual(feed.items, [])
        self.assertEqual(feed.raw_content, "just some text")


class TestFeedFetcher(IsolatedAsyncioTestCase):
    def setUp(self) -> None:
        self.recorder = RecordingTransport(default_routes())
        self.http = HttpFetcher(HOST, retry_backoff_ms=0, transport=self.recorder.transport)
        self.fetcher = FeedFetcher(self.http)

    async def asyncTearDown(self) -> None:
        await self.http.aclose()

    async def test_leading_slash_is_optional(self) -> None:
        with_slash = await self.fetcher.get_feed("/bilibili/live/room/3")
        without_slash = await self.fetcher.get_feed("bilibili/live/room/3")

        self.assertEqual(with_slash, without_slash)
        self.assertEqual(self.recorder.count("/bilibili/live/room/3"), 2)
        self.assertEqual(str(self.recorder.requests[0].url), HOST + "/bilibili/live/room/3")

    async def test_atom_feed(self) -> None:
        feed = await self.fetcher.get_feed("/github/issue/DIYgod/RSSHub")

        self.assertEqual(feed.title, "GitHub issues")
        self.assertEqual(feed.description, "Issues of DIYgod/RSSHub")
        self.assertEqual(feed.items[0].author, "Bob")
        self.assertEqual(feed.items[0].categories, ["bug"])
        self.assertEqual(feed.items[0].link, "https://github.com/DIYgod/RSSHub/issues/1")
        self.assertIsNotNone(feed.items[0].pub_date)

    async def test_non_feed_is_not_a_failure(self) -> None:
        feed = await self.fetcher.get_feed("/not/a/feed")
        self.assertEqual(feed.title, "RSS Feed")
        self.assertEqual(feed.items, [])
        self.assertEqual(feed.raw_content, HTML_PAGE)

    async def test_missing_route_fails(self) -> None:
        with self.assertRaises(UpstreamStatusError) as ctx:
            await self.fetcher.get_feed("/nope")
        self.assertEqual(ctx.exception.status_code, 404)
