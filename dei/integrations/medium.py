"""Medium RSS integration for the articles page."""
import aiohttp
import logging
from typing import Optional

import feedparser

from dei.core.config import MEDIUM_RSS_URL
from dei.core.schemas import Article, MediumArticle, DEFAULT_AUTHOR
from dei.processor import (
    calculate_reading_time,
    extract_excerpt,
    extract_first_image,
    format_date,
    parse_date,
)

logger = logging.getLogger(__name__)


def _entry_content(entry) -> str:
    """HTML body of a feed entry: content:encoded first, then the summary."""
    for content in entry.get("content") or []:
        value = content.get("value")
        if value:
            return value
    return entry.get("summary") or ""


def _entry_to_article(entry) -> MediumArticle:
    """Convert a feedparser entry to a MediumArticle."""
    categories = [tag.get("term") for tag in entry.get("tags") or [] if tag.get("term")]

    return MediumArticle(
        title=entry.get("title") or "",
        link=entry.get("link") or "",
        pub_date=entry.get("published") or "",
        creator=entry.get("author") or DEFAULT_AUTHOR,
        categories=categories,
        content_encoded=_entry_content(entry),
    )


def _is_parse_failure(feed) -> bool:
    if not feed.get("bozo"):
        return False
    # The declared and detected encodings disagreeing is not a broken feed
    return not isinstance(feed.get("bozo_exception"), feedparser.CharacterEncodingOverride)


async def fetch_medium_articles(
    limit: int = 10,
    feed_url: Optional[str] = None,
) -> list[MediumArticle]:
    """
    Fetch the newest articles from the Medium feed.

    Args:
        limit: Maximum number of items, taken in feed order
        feed_url: Feed to read (defaults to the DEI Medium publication)

    Returns:
        List of MediumArticle objects; empty when the feed can't be fetched
        or parsed
    """
    feed_url = feed_url or MEDIUM_RSS_URL

    try:
        async with aiohttp.ClientSession() as session:
            async with session.get(feed_url) as response:
                if response.status != 200:
                    body = await response.text()
                    logger.error(
                        f"Error fetching Medium RSS: status={response.status}, body={body[:200]}"
                    )
                    return []
                payload = await response.read()

        feed = feedparser.parse(payload)
        if _is_parse_failure(feed):
            logger.error(f"Error parsing Medium RSS: {feed.get('bozo_exception')}")
            return []

        return [_entry_to_article(entry) for entry in feed.entries[:limit]]

    except aiohttp.ClientError as e:
        logger.error(f"Medium RSS connection error: {e}")
        return []
    except Exception as e:
        logger.error(f"Error fetching Medium RSS: {e}")
        return []


def to_article(raw: MediumArticle, excerpt_length: int = 200) -> Article:
    """Derive the presentation fields for one feed item."""
    content = raw.content_encoded
    return Article(
        title=raw.title,
        url=raw.link,
        published_at=parse_date(raw.pub_date),
        published_label=format_date(raw.pub_date) if raw.pub_date else "",
        author=raw.creator,
        excerpt=extract_excerpt(content, excerpt_length),
        categories=list(raw.categories),
        thumbnail=extract_first_image(content),
        content=content or None,
        reading_time=calculate_reading_time(content),
    )


async def get_articles(limit: int = 10, feed_url: Optional[str] = None) -> list[Article]:
    """Fetch the feed and normalize every item for display."""
    raw_articles = await fetch_medium_articles(limit=limit, feed_url=feed_url)
    return [to_article(raw) for raw in raw_articles]
