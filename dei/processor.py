"""Content processing for syndicated article HTML."""
import logging
import math
import re
from datetime import datetime
from email.utils import parsedate_to_datetime
from typing import Optional
from zoneinfo import ZoneInfo

from babel.dates import format_date as babel_format_date

from dei.core.schemas import DEFAULT_TIMEZONE

logger = logging.getLogger(__name__)

# Simple tag-boundary match, not a parser: a '>' inside an attribute value
# ends the tag early
TAG_PATTERN = re.compile(r'<[^>]*>')
WHITESPACE_PATTERN = re.compile(r'\s+')
IMG_SRC_PATTERN = re.compile(r'<img[^>]+src="([^"]+)"')

ELLIPSIS = "..."
WORDS_PER_MINUTE = 200
DISPLAY_LOCALE = "id_ID"


def strip_tags(content: str) -> str:
    """Replace every tag with a space."""
    return TAG_PATTERN.sub(' ', content)


def extract_excerpt(content: str, max_length: int = 200) -> str:
    """
    Plain-text excerpt of HTML content.

    Tags are stripped, whitespace runs collapse to one space, and text
    longer than max_length is cut and suffixed with "...".
    """
    clean_text = WHITESPACE_PATTERN.sub(' ', strip_tags(content)).strip()
    if len(clean_text) <= max_length:
        return clean_text
    return clean_text[:max_length].strip() + ELLIPSIS


def extract_first_image(content: str) -> Optional[str]:
    """Return the src of the first <img> tag, or None."""
    match = IMG_SRC_PATTERN.search(content)
    return match.group(1) if match else None


def parse_date(date_string: str) -> Optional[datetime]:
    """
    Parse an RSS pubDate (RFC 822) or an ISO-8601 string.

    Returns None when neither format matches.
    """
    if not date_string:
        return None
    try:
        return parsedate_to_datetime(date_string)
    except (TypeError, ValueError, IndexError):
        pass
    try:
        return datetime.fromisoformat(date_string.strip())
    except ValueError:
        return None


def format_date(date_string: str) -> str:
    """
    Format a date for display using Indonesian conventions.

    e.g. "2026-01-15T00:00:00Z" -> "15 Januari 2026". Timezone-aware values
    are shown in Jakarta time. Unparsable input is returned unchanged.
    """
    parsed = parse_date(date_string)
    if parsed is None:
        logger.warning(f"Could not parse date: {date_string!r}")
        return date_string

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(ZoneInfo(DEFAULT_TIMEZONE))

    return babel_format_date(parsed.date(), format="long", locale=DISPLAY_LOCALE)


def calculate_reading_time(content: str) -> int:
    """Reading time in whole minutes at 200 words per minute, at least 1."""
    # Empty content still counts as a single word
    word_count = len(strip_tags(content).split()) or 1
    return math.ceil(word_count / WORDS_PER_MINUTE)
