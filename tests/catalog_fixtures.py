"""Sample RSSHub payloads and an ``httpx.MockTransport`` recorder for the tests."""

from __future__ import annotations

import json
from typing import Callable, Dict, List

import httpx

HOST = "http://rsshub.test"

NAMESPACES = {
    "bilibili": {
        "routes": {
            "/live/room/:roomID": {
                "path": "/live/room/:roomID",
                "name": "Live room",
                "maintainers": ["Qixingchen"],
                "example": "/bilibili/live/room/3",
                "parameters": {"roomID": "Room ID"},
                "description": "Notifies when a stream starts",
                "categories": ["live"],
                "features": {
                    "requireConfig": False,
                    "requirePuppeteer": False,
                    "antiCrawler": False,
                    "supportBT": False,
                },
                "radar": [{"source": ["live.bilibili.com/:roomID"], "target": "/live/room/:roomID"}],
                "location": "live-room.ts",
            },
            "/user/video/:uid": {
                "path": ["/user/video/:uid", "/user/video/:uid/:embed?"],
                "name": "UP videos",
                "maintainers": ["DIYgod"],
                "example": "/bilibili/user/video/2267573",
                "features": {
                    "requireConfig": [
                        {"name": "BILIBILI_COOKIE", "optional": True, "description": "Cookie"}
                    ],
                },
                "radar": {"source": "space.bilibili.com/:uid", "target": "/user/video/:uid"},
                "view": 42,
            },
            "/followings/dynamic/:uid": {
                "path": "/followings/dynamic/:uid",
                "name": "Followings dynamic",
                "maintainers": ["TigerCubDen"],
                "description": "Posts from followed LIVE streamers",
            },
            "/live/area/:areaID/:order": {
                "path": "/live/area/:areaID/:order",
                "name": "Live area",
                "maintainers": ["Qixingchen"],
                "example": "/bilibili/live/area/207/online",
            },
        }
    },
    "twitter": {
        "routes": {
            "/user/:id": {
                "path": "/user/:id",
                "name": "User timeline",
                "maintainers": ["DIYgod"],
                "description": "Includes live tweets",
                "example": "/twitter/user/DIYgod",
            }
        }
    },
    "github": {
        "routes": {
            "/issue/:user/:repo": {
                "path": "/issue/:user/:repo",
                "name": "Repo issues",
                "maintainers": ["HenryQW"],
                "example": "/github/issue/DIYgod/RSSHub",
            }
        }
    },
}

RADAR_RULES = {
    "81.cn": {
        "_name": "China Military Online",
        "81rc": [
            {
                "title": "Military talent",
                "docs": "https://docs.rsshub.app/routes/government",
                "source": ["/:category"],
                "target": "/81/81rc/:category",
            }
        ],
        ".": [
            {
                "title": "Front page",
                "docs": "https://docs.rsshub.app/routes/government",
                "source": ["/"],
                "target": "/81/front",
            }
        ],
    }
}

CATEGORY = {
    "163": {
        "name": "NetEase",
        "url": "163.com",
        "categories": ["new-media"],
        "lang": "zh-CN",
        "routes": {
            "/news/rank/:category?/:type?/:time?": {
                "path": "/news/rank/:category?/:type?/:time?",
                "name": "News ranking",
                "maintainers": ["nczitzk"],
            }
        },
        "zh": {"name": "网易"},
    }
}

RSS_FEED = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0" xmlns:dc="http://purl.org/dc/elements/1.1/">
  <channel>
    <title>bilibili live room 3</title>
    <link>https://live.bilibili.com/3</link>
    <description>Stream notifications - powered by RSSHub</description>
    <item>
      <title>Stream started</title>
      <description>&lt;p&gt;Now live&lt;/p&gt;</description>
      <link>https://live.bilibili.com/3?t=1</link>
      <pubDate>Mon, 06 Sep 2021 16:45:00 +0000</pubDate>
      <dc:creator>Alice</dc:creator>
      <category>Games</category>
      <category>Live</category>
    </item>
    <item>
      <title>Stream ended</title>
      <link>https://live.bilibili.com/3?t=2</link>
    </item>
  </channel>
</rss>
"""

ATOM_FEED = """<?xml version="1.0" encoding="utf-8"?>
<feed xmlns="http://www.w3.org/2005/Atom">
  <title>GitHub issues</title>
  <subtitle>Issues of DIYgod/RSSHub</subtitle>
  <id>urn:example:feed</id>
  <updated>2024-01-02T03:04:05Z</updated>
  <entry>
    <title>Route broken</title>
    <id>urn:example:1</id>
    <link href="https://github.com/DIYgod/RSSHub/issues/1"/>
    <updated>2024-01-02T03:04:05Z</updated>
    <summary>It returns 503</summary>
    <author><name>Bob</name></author>
    <category term="bug"/>
  </entry>
</feed>
"""

HTML_PAGE = "<html><head><title>Not RSS</title></head><body>Hello</body></html>"


class RecordingTransport:
    """Serves canned responses by URL path and records every request."""

    def __init__(self, routes: Dict[str, Callable[[httpx.Request], httpx.Response]]):
        self.routes = routes
        self.requests: List[httpx.Request] = []
        self.transport = httpx.MockTransport(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        handler = self.routes.get(request.url.path)
        if handler is None:
            return httpx.Response(404, text="not found")
        return handler(request)

    def count(self, path: str) -> int:
        return sum(1 for request in self.requests if request.url.path == path)


def json_response(payload) -> Callable[[httpx.Request], httpx.Response]:
    body = json.dumps(payload)
    return lambda request: httpx.Response(
        200, text=body, headers={"content-type": "application/json"}
    )


def text_response(text: str, status: int = 200) -> Callable[[httpx.Request], httpx.Response]:
    return lambda request: httpx.Response(status, text=text)


def default_routes() -> Dict[str, Callable[[httpx.Request], httpx.Response]]:
    return {
        "/api/namespace": json_response(NAMESPACES),
        "/api/namespace/bilibili": json_response(NAMESPACES["bilibili"]),
        "/api/radar/rules": json_response(RADAR_RULES),
        "/api/radar/rules/81.cn": json_response(RADAR_RULES["81.cn"]),
        "/api/category/new-media": json_response(CATEGORY),
        "/bilibili/live/room/3": text_response(RSS_FEED),
        "/github/issue/DIYgod/RSSHub": text_response(ATOM_FEED),
        "/not/a/feed": text_response(HTML_PAGE),
    }
