"""
Shared test fixtures.

Provides: settings and row factory fixtures, an in-process fake Supabase REST endpoint,
and an in-process fake Medium feed.
"""

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from dei.core.config import Settings


ANON_KEY = "test-anon-key"
SINGLE_OBJECT = "application/vnd.pgrst.object+json"

RSS_FEED = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0"
     xmlns:dc="http://purl.org/dc/elements/1.1/"
     xmlns:content="http://purl.org/rss/1.0/modules/content/">
  <channel>
    <title>Data Engineering Indonesia - Medium</title>
    <link>https://medium.com/data-engineering-indonesia</link>
    <description>Latest stories</description>
    <item>
      <title>Getting Started with dbt</title>
      <link>https://medium.com/data-engineering-indonesia/getting-started-with-dbt</link>
      <pubDate>Thu, 15 Jan 2026 03:00:00 GMT</pubDate>
      <dc:creator>Budi Santoso</dc:creator>
      <category>dbt</category>
      <category>analytics-engineering</category>
      <content:encoded><![CDATA[<p>Intro to <strong>dbt</strong> models.</p><img src="https://cdn-images.medium.com/dbt.png" alt="dbt" /><p>Second paragraph.</p>]]></content:encoded>
    </item>
    <item>
      <title>Airflow Tips</title>
      <link>https://medium.com/data-engineering-indonesia/airflow-tips</link>
      <pubDate>Mon, 05 Jan 2026 10:00:00 GMT</pubDate>
      <content:encoded><![CDATA[<p>Short tips without images.</p>]]></content:encoded>
    </item>
    <item>
      <title>Kafka 101</title>
      <link>https://medium.com/data-engineering-indonesia/kafka-101</link>
      <pubDate>Fri, 02 Jan 2026 08:00:00 GMT</pubDate>
      <dc:creator>Sari Dewi</dc:creator>
      <category>kafka</category>
      <content:encoded><![CDATA[<p>Streams everywhere.</p>]]></content:encoded>
    </item>
  </channel>
</rss>
"""


def _make_settings(**overrides) -> Settings:
    """Settings isolated from any local .env file."""
    values = {
        "supabase_url": "",
        "supabase_anon_key": "",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def _make_row(**overrides) -> dict:
    """A fully populated `events` row as PostgREST serializes it."""
    row = {
        "id": "a1b2c3",
        "title": "Meetup: Lakehouse in Practice",
        "slug": "lakehouse-in-practice",
        "description": "Talks on running a lakehouse in production.",
        "excerpt": "Lakehouse talks.",
        "start_date": "2026-05-10T10:00:00+07:00",
        "end_date": "2026-05-10T12:00:00+07:00",
        "timezone": "Asia/Makassar",
        "location_type": "physical",
        "venue": "Gedung Data",
        "address": "Jl. Sudirman 1",
        "city": "Jakarta",
        "virtual_link": None,
        "cover_image": "https://example.com/cover.png",
        "category": "Meetup",
        "tags": ["lakehouse", "spark"],
        "status": "upcoming",
        "registration_url": "https://example.com/register",
        "max_attendees": 80,
        "registered_count": 12,
        "created_at": "2026-01-01T00:00:00+00:00",
        "updated_at": "2026-01-02T00:00:00+00:00",
        "published_at": "2026-01-03T00:00:00+00:00",
        "is_featured": True,
    }
    row.update(overrides)
    return row


@pytest.fixture
def make_settings():
    """Factory for Settings that ignore the local .env file."""
    return _make_settings


@pytest.fixture
def make_row():
    """Factory for `events` rows; keyword arguments override columns."""
    return _make_row


def _as_text(value) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


async def _events_handler(request: web.Request) -> web.Response:
    """Minimal PostgREST behaviour for GET /rest/v1/events."""
    app = request.app
    app["requests"].append(dict(request.query))

    if request.headers.get("apikey") != ANON_KEY:
        return web.json_response({"message": "Invalid API key"}, status=401)

    if app["status"] != 200:
        return web.json_response({"message": "Internal error"}, status=app["status"])

    rows = list(app["rows"])
    for column, expression in request.query.items():
        if column in ("select", "order", "limit"):
            continue
        _, _, expected = expression.partition(".")
        rows = [row for row in rows if _as_text(row.get(column)) == expected]

    order = request.query.get("order")
    if order:
        column, _, direction = order.partition(".")
        rows.sort(key=lambda row: row[column], reverse=direction == "desc")

    if "limit" in request.query:
        rows = rows[:int(request.query["limit"])]

    if request.headers.get("Accept") == SINGLE_OBJECT:
        if len(rows) != 1:
            return web.json_response(
                {
                    "code": "PGRST116",
                    "message": "JSON object requested, multiple (or no) rows returned",
                },
                status=406,
            )
        return web.json_response(rows[0])

    return web.json_response(rows)


@pytest.fixture
async def supabase_server():
    """
    Fake Supabase REST endpoint.

    Tests set `server.app["rows"]` and `server.app["status"]`; every request's
    query string is recorded in `server.app["requests"]`.
    """
    app = web.Application()
    app["rows"] = []
    app["status"] = 200
    app["requests"] = []
    app.router.add_get("/rest/v1/events", _events_handler)

    server = TestServer(app)
    await server.start_server()
    yield server
    await server.close()


@pytest.fixture
def configured_settings(supabase_server) -> Settings:
    return _make_settings(
        supabase_url=str(supabase_server.make_url("")),
        supabase_anon_key=ANON_KEY,
    )


@pytest.fixture
def unconfigured_settings() -> Settings:
    return _make_settings()


async def _feed_handler(request: web.Request) -> web.Response:
    return web.Response(text=RSS_FEED, content_type="application/rss+xml")


async def _broken_handler(request: web.Request) -> web.Response:
    return web.Response(text="upstream unavailable", status=503)


async def _garbage_handler(request: web.Request) -> web.Response:
    return web.Response(text="definitely not a feed", content_type="text/plain")


@pytest.fixture
async def feed_server():
    """Fake Medium host serving a good feed, a failing one and a non-feed."""
    app = web.Application()
    app.router.add_get("/feed", _feed_handler)
    app.router.add_get("/broken", _broken_handler)
    app.router.add_get("/garbage", _garbage_handler)

    server = TestServer(app)
    await server.start_server()
    yield server
    await server.close()
