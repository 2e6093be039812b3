"""Built-in events served whenever Supabase is unavailable."""
from datetime import datetime, timezone
from typing import Optional, Tuple
from zoneinfo import ZoneInfo

from dei.core.schemas import Event, DEFAULT_TIMEZONE


JAKARTA = ZoneInfo(DEFAULT_TIMEZONE)

# Bookkeeping timestamps are taken once, when the module is first imported
_LOADED_AT = datetime.now(timezone.utc)


SAMPLE_EVENTS: Tuple[Event, ...] = (
    Event(
        id="1",
        title="DEI Workshop: Introduction to Data Engineering",
        slug="intro-to-data-engineering",
        description=(
            "Join us for an introductory workshop on data engineering fundamentals. "
            "Learn about ETL pipelines, data warehousing, and modern data stack."
        ),
        excerpt=(
            "An introductory workshop covering data engineering fundamentals, "
            "ETL pipelines, and modern data stack."
        ),
        start_date=datetime(2026, 3, 15, 9, 0, tzinfo=JAKARTA),
        end_date=datetime(2026, 3, 15, 12, 0, tzinfo=JAKARTA),
        timezone=DEFAULT_TIMEZONE,
        location_type="virtual",
        virtual_link="https://zoom.us/j/example",
        cover_image="",
        category="Workshop",
        tags=("beginner", "data-engineering", "etl"),
        status="upcoming",
        registration_url="https://forms.google.com/example",
        max_attendees=100,
        registered_count=45,
        created_at=_LOADED_AT,
        updated_at=_LOADED_AT,
        published_at=_LOADED_AT,
        is_featured=True,
    ),
    Event(
        id="2",
        title="Building Data Pipelines with Apache Airflow",
        slug="data-pipelines-airflow",
        description=(
            "Hands-on workshop on building and scheduling data pipelines "
            "using Apache Airflow."
        ),
        excerpt=(
            "Learn to build and schedule data pipelines using Apache Airflow "
            "in this hands-on workshop."
        ),
        start_date=datetime(2026, 4, 20, 13, 0, tzinfo=JAKARTA),
        end_date=datetime(2026, 4, 20, 16, 0, tzinfo=JAKARTA),
        timezone=DEFAULT_TIMEZONE,
        location_type="hybrid",
        venue="Tech Hub Jakarta",
        city="Jakarta",
        cover_image="",
        category="Workshop",
        tags=("airflow", "pipelines", "automation"),
        status="upcoming",
        registration_url="https://forms.google.com/example2",
        max_attendees=50,
        registered_count=23,
        created_at=_LOADED_AT,
        updated_at=_LOADED_AT,
        published_at=_LOADED_AT,
        is_featured=True,
    ),
)


def find_sample_event(slug: str) -> Optional[Event]:
    """Return the sample event with this slug, if any."""
    return next((event for event in SAMPLE_EVENTS if event.slug == slug), None)


def featured_sample_events() -> list[Event]:
    """All featured sample events, in their original order."""
    return [event for event in SAMPLE_EVENTS if event.is_featured]
