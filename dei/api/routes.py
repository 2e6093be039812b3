"""FastAPI route definitions."""
from functools import lru_cache

from fastapi import APIRouter, Depends, HTTPException, Query

from dei.core.config import Settings, get_settings
from dei.core.events import EventRepository
from dei.core.schemas import DataResult, SiteConfig
from dei.core.site import build_site_config
from dei.integrations.medium import get_articles

router = APIRouter()


@lru_cache
def get_event_repository() -> EventRepository:
    """Repository built once, from the process settings."""
    return EventRepository(get_settings())


def _envelope(result: DataResult, key: str) -> dict:
    data = result.data
    if isinstance(data, list):
        payload = [item.model_dump(mode="json") for item in data]
    else:
        payload = data.model_dump(mode="json") if data is not None else None
    return {
        key: payload,
        "source": result.source,
        "reason": result.reason.value if result.reason else None,
        "detail": result.detail,
    }


@router.get("/events")
async def list_events(repository: EventRepository = Depends(get_event_repository)):
    """All events, oldest start date first."""
    result = await repository.get_events()
    return _envelope(result, "events")


@router.get("/events/featured")
async def list_featured_events(repository: EventRepository = Depends(get_event_repository)):
    """Featured upcoming events for the home page."""
    result = await repository.get_featured_events()
    return _envelope(result, "events")


@router.get("/events/{slug}")
async def get_event(slug: str, repository: EventRepository = Depends(get_event_repository)):
    """
    A single event by slug.

    Raises:
        HTTPException 404 when neither Supabase nor the sample events have it
    """
    result = await repository.get_event_by_slug(slug)
    if result.data is None:
        raise HTTPException(status_code=404, detail=f"Event not found: {slug}")
    return _envelope(result, "event")


@router.get("/articles")
async def list_articles(
    limit: int = Query(default=10, ge=1, le=50),
    settings: Settings = Depends(get_settings),
):
    """Latest Medium articles; empty when the feed is unavailable."""
    articles = await get_articles(limit=limit, feed_url=settings.medium_feed_url)
    return {"articles": [article.model_dump(mode="json") for article in articles]}


@router.get("/site", response_model=SiteConfig)
async def site_config(settings: Settings = Depends(get_settings)) -> SiteConfig:
    return build_site_config(settings)


@router.get("/health")
async def health_check(settings: Settings = Depends(get_settings)):
    """
    Health check endpoint.

    Returns:
        Simple status message including whether Supabase is configured
    """
    return {
        "status": "healthy",
        "service": "dei-site-data",
        "version": "0.1.0",
        "supabase_configured": settings.supabase_configured,
    }
