"""Data schemas for events, articles and data-access results."""
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Generic, List, Literal, Optional, Tuple, TypeVar

from pydantic import BaseModel, ConfigDict, Field


LocationType = Literal["physical", "virtual", "hybrid"]
EventStatus = Literal["upcoming", "ongoing", "completed", "cancelled"]

DEFAULT_TIMEZONE = "Asia/Jakarta"
DEFAULT_AUTHOR = "DEI Team"


class Event(BaseModel):
    """A community event as stored in the Supabase `events` table."""
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    slug: str
    description: str
    excerpt: str = ""
    start_date: datetime
    end_date: Optional[datetime] = None
    timezone: str = DEFAULT_TIMEZONE
    location_type: LocationType = "virtual"
    # Physical / hybrid details
    venue: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    # Virtual / hybrid details
    virtual_link: Optional[str] = None
    cover_image: str = ""
    category: str
    tags: Tuple[str, ...] = ()
    status: EventStatus = "upcoming"
    registration_url: Optional[str] = None
    max_attendees: Optional[int] = None
    registered_count: int = Field(default=0, ge=0)
    created_at: datetime
    updated_at: datetime
    published_at: datetime
    is_featured: bool = False


class MediumArticle(BaseModel):
    """One item of the Medium RSS feed, with missing fields filled in."""
    title: str = ""
    link: str = ""
    pub_date: str = ""
    creator: str = DEFAULT_AUTHOR
    categories: List[str] = Field(default_factory=list)
    content_encoded: str = ""


class Article(BaseModel):
    """Normalized article ready for the articles page."""
    title: str
    url: str
    published_at: Optional[datetime] = None
    published_label: str = ""
    author: str
    excerpt: str
    categories: List[str] = Field(default_factory=list)
    thumbnail: Optional[str] = None
    content: Optional[str] = None
    reading_time: int = Field(
        default=1,
        ge=1,
        description="Estimated reading time in minutes"
    )


class SiteConfig(BaseModel):
    """Site metadata served at /site."""
    name: str
    description: str
    url: str
    email: str
    linkedin_url: str
    telegram_url: str
    medium_url: str
    founded_year: Optional[int] = None
    member_count: Optional[int] = None


class FallbackReason(str, Enum):
    """Why a repository read was answered with sample data."""
    NOT_CONFIGURED = "not_configured"
    QUERY_ERROR = "query_error"
    EMPTY_RESULT = "empty_result"


T = TypeVar("T")


@dataclass(frozen=True)
class DataResult(Generic[T]):
    """
    Result of a repository read.

    `source` tells callers whether `data` came from Supabase or from the
    built-in sample events; `reason` and `detail` say why a fallback was used.
    """
    data: T
    source: Literal["remote", "fallback"]
    reason: Optional[FallbackReason] = None
    detail: Optional[str] = None

    @classmethod
    def ok(cls, data: T) -> "DataResult[T]":
        """Data read from Supabase."""
        return cls(data=data, source="remote")

    @classmethod
    def fallback(
        cls,
        data: T,
        reason: FallbackReason,
        detail: Optional[str] = None
    ) -> "DataResult[T]":
        """Sample data served instead of a remote read."""
        return cls(data=data, source="fallback", reason=reason, detail=detail)

    @property
    def is_fallback(self) -> bool:
        """True when the data did not come from Supabase."""
        return self.source == "fallback"
