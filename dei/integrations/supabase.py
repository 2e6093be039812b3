"""Supabase (PostgREST) integration for reading the events table."""
import aiohttp
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from dei.core.config import Settings
from dei.core.schemas import Event, DEFAULT_TIMEZONE

logger = logging.getLogger(__name__)

EVENTS_TABLE = "events"
# Makes PostgREST answer with one object, or 406 when zero or many rows match
SINGLE_OBJECT_MEDIA_TYPE = "application/vnd.pgrst.object+json"


@dataclass
class StoreResult:
    """Result of a Supabase query."""
    success: bool
    rows: list[dict] = field(default_factory=list)
    error: Optional[str] = None


def _parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Parse a Postgres timestamptz as serialized by PostgREST.

    Absent values stay None. Unparsable values are logged and become None,
    so callers must tolerate missing timestamps either way.
    """
    if value is None or isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(str(value))
    except ValueError:
        logger.warning(f"Unparsable timestamp from Supabase: {value!r}")
        return None


def _format_timestamp(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def map_row_to_event(row: dict) -> Event:
    """
    Convert a Supabase `events` row to an Event.

    Defaults are applied only where the column is missing or empty. Required
    columns are passed through as-is and the model is built without
    validation, so unknown status/location values reach the caller unchanged.
    """
    return Event.model_construct(
        id=row.get("id"),
        title=row.get("title"),
        slug=row.get("slug"),
        description=row.get("description"),
        excerpt=row.get("excerpt") or "",
        start_date=_parse_timestamp(row.get("start_date")),
        end_date=_parse_timestamp(row.get("end_date")) if row.get("end_date") else None,
        timezone=row.get("timezone") or DEFAULT_TIMEZONE,
        location_type=row.get("location_type") or "virtual",
        venue=row.get("venue"),
        address=row.get("address"),
        city=row.get("city"),
        virtual_link=row.get("virtual_link"),
        cover_image=row.get("cover_image") or "",
        category=row.get("category"),
        tags=tuple(row.get("tags") or ()),
        status=row.get("status") or "upcoming",
        registration_url=row.get("registration_url"),
        max_attendees=row.get("max_attendees"),
        registered_count=row.get("registered_count") or 0,
        created_at=_parse_timestamp(row.get("created_at")),
        updated_at=_parse_timestamp(row.get("updated_at")),
        published_at=_parse_timestamp(row.get("published_at")),
        is_featured=row.get("is_featured") or False,
    )


def map_event_to_row(event: Event) -> dict:
    """Convert an Event back to `events` table columns."""
    return {
        "id": event.id,
        "title": event.title,
        "slug": event.slug,
        "description": event.description,
        "excerpt": event.excerpt,
        "start_date": _format_timestamp(event.start_date),
        "end_date": _format_timestamp(event.end_date),
        "timezone": event.timezone,
        "location_type": event.location_type,
        "venue": event.venue,
        "address": event.address,
        "city": event.city,
        "virtual_link": event.virtual_link,
        "cover_image": event.cover_image,
        "category": event.category,
        "tags": list(event.tags),
        "status": event.status,
        "registration_url": event.registration_url,
        "max_attendees": event.max_attendees,
        "registered_count": event.registered_count,
        "created_at": _format_timestamp(event.created_at),
        "updated_at": _format_timestamp(event.updated_at),
        "published_at": _format_timestamp(event.published_at),
        "is_featured": event.is_featured,
    }


async def select_events(
    settings: Settings,
    filters: Optional[dict[str, str]] = None,
    order: Optional[str] = "start_date.asc",
    limit: Optional[int] = None,
    single: bool = False,
) -> StoreResult:
    """
    Read rows from the Supabase `events` table through PostgREST.

    Args:
        settings: Settings carrying the project URL and anon key
        filters: Column filters in PostgREST syntax, e.g. {"slug": "eq.foo"}
        order: PostgREST order clause
        limit: Maximum number of rows
        single: Ask for exactly one row; zero or several rows is an error

    Returns:
        StoreResult with raw rows, or the error reported by the store
    """
    if not settings.supabase_configured:
        return StoreResult(success=False, error="Supabase not configured")

    url = f"{settings.supabase_url.rstrip('/')}/rest/v1/{EVENTS_TABLE}"
    params = {"select": "*"}
    params.update(filters or {})
    if order:
        params["order"] = order
    if limit is not None:
        params["limit"] = str(limit)

    headers = {
        "apikey": settings.supabase_anon_key,
        "Authorization": f"Bearer {settings.supabase_anon_key}",
        "Accept": SINGLE_OBJECT_MEDIA_TYPE if single else "application/json",
    }

    try:
        async with aiohttp.ClientSession() as session:
            async with session.get(url, params=params, headers=headers) as response:
                if response.status == 200:
                    data = await response.json(content_type=None)
                    if isinstance(data, dict):
                        data = [data]
                    if not isinstance(data, list):
                        return StoreResult(
                            success=False,
                            error=f"Unexpected Supabase payload: {type(data).__name__}"
                        )
                    return StoreResult(success=True, rows=data)
                else:
                    body = await response.text()
                    logger.error(
                        f"Supabase API error: status={response.status}, body={body}"
                    )
                    return StoreResult(
                        success=False,
                        error=f"Supabase returned {response.status}: {body}"
                    )

    except aiohttp.ClientError as e:
        logger.error(f"Supabase connection error: {e}")
        return StoreResult(success=False, error=f"Connection error: {e}")
    except Exception as e:
        logger.error(f"Unexpected Supabase error: {e}")
        return StoreResult(success=False, error=f"Unexpected error: {e}")
