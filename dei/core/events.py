"""Read access to community events with a sample-data fallback."""
import logging
from typing import Optional

from dei.core.config import Settings
from dei.core.sample_events import SAMPLE_EVENTS, featured_sample_events, find_sample_event
from dei.core.schemas import DataResult, Event, FallbackReason
from dei.integrations.supabase import map_row_to_event, select_events

logger = logging.getLogger(__name__)

FEATURED_LIMIT = 3


class EventRepository:
    """
    Events for the site pages.

    Design notes:
    - Reads go to Supabase when both the URL and the anon key are set
    - Any failure, missing configuration or empty listing is answered with
      the built-in sample events; nothing is ever raised to the caller
    - Every call returns a DataResult so callers can tell which path ran
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self.configured = settings.supabase_configured
        if not self.configured:
            logger.info("Supabase not configured, sample events will be served")

    async def get_events(self) -> DataResult[list[Event]]:
        """All events ordered by start date."""
        if not self.configured:
            logger.info("Supabase not configured, returning sample events")
            return DataResult.fallback(list(SAMPLE_EVENTS), FallbackReason.NOT_CONFIGURED)

        try:
            result = await select_events(self.settings, order="start_date.asc")
            if not result.success:
                logger.error(f"Error fetching events: {result.error}")
                return DataResult.fallback(
                    list(SAMPLE_EVENTS), FallbackReason.QUERY_ERROR, result.error
                )

            if not result.rows:
                logger.info("No events in Supabase yet, returning sample events")
                return DataResult.fallback(list(SAMPLE_EVENTS), FallbackReason.EMPTY_RESULT)

            return DataResult.ok([map_row_to_event(row) for row in result.rows])

        except Exception as e:
            logger.error(f"Error in get_events: {e}")
            return DataResult.fallback(list(SAMPLE_EVENTS), FallbackReason.QUERY_ERROR, str(e))

    async def get_event_by_slug(self, slug: str) -> DataResult[Optional[Event]]:
        """
        The event with this slug, or None.

        Supabase is asked for exactly one row. When that fails (including
        "no such row"), the sample events are searched instead.
        """
        if not self.configured:
            return DataResult.fallback(find_sample_event(slug), FallbackReason.NOT_CONFIGURED)

        try:
            result = await select_events(
                self.settings,
                filters={"slug": f"eq.{slug}"},
                order=None,
                single=True,
            )
            if not result.success:
                logger.error(f"Error fetching event {slug}: {result.error}")
                return DataResult.fallback(
                    find_sample_event(slug), FallbackReason.QUERY_ERROR, result.error
                )

            event = map_row_to_event(result.rows[0]) if result.rows else None
            return DataResult.ok(event)

        except Exception as e:
            logger.error(f"Error in get_event_by_slug: {e}")
            return DataResult.fallback(find_sample_event(slug), FallbackReason.QUERY_ERROR, str(e))

    async def get_featured_events(self) -> DataResult[list[Event]]:
        """
        Up to three featured, upcoming events.

        The fallback returns every featured sample event without applying
        the limit.
        """
        if not self.configured:
            return DataResult.fallback(featured_sample_events(), FallbackReason.NOT_CONFIGURED)

        try:
            result = await select_events(
                self.settings,
                filters={"is_featured": "eq.true", "status": "eq.upcoming"},
                order="start_date.asc",
                limit=FEATURED_LIMIT,
            )
            if not result.success:
                logger.error(f"Error fetching featured events: {result.error}")
                return DataResult.fallback(
                    featured_sample_events(), FallbackReason.QUERY_ERROR, result.error
                )

            if not result.rows:
                return DataResult.fallback(featured_sample_events(), FallbackReason.EMPTY_RESULT)

            events = [map_row_to_event(row) for row in result.rows[:FEATURED_LIMIT]]
            return DataResult.ok(events)

        except Exception as e:
            logger.error(f"Error in get_featured_events: {e}")
            return DataResult.fallback(featured_sample_events(), FallbackReason.QUERY_ERROR, str(e))
