import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict

from engblog.utils import calculate_reading_time


def coerce_datetime(value: Any) -> Optional[datetime.datetime]:
    """Accept datetimes, dates and ISO strings; naive values are taken as UTC."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime.datetime):
        parsed = value
    elif isinstance(value, datetime.date):
        parsed = datetime.datetime.combine(value, datetime.time.min)
    elif isinstance(value, str):
        parsed = datetime.datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    else:
        raise ValueError(f"not a date: {value!r}")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=datetime.timezone.utc)
    return parsed


class Author(BaseModel):
    model_config = ConfigDict(frozen=True, extra="allow")

    slug: str = Field(min_length=1)
    name: str
    avatar: Optional[str] = None
    occupation: Optional[str] = None
    company: Optional[str] = None
    email: Optional[str] = None
    twitter: Optional[str] = None
    linkedin: Optional[str] = None
    github: Optional[str] = None
    stackoverflow: Optional[str] = None
    url: Optional[str] = None
    bio: str = ""


class Post(BaseModel):
    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)

    id: str
    slug: str = Field(min_length=1)
    title: str
    summary: Optional[str] = None
    date: Optional[datetime.datetime] = None
    lastmod: Optional[datetime.datetime] = None
    draft: bool = False
    authors: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    images: List[str] = Field(default_factory=list)
    canonical_url: Optional[str] = Field(default=None, alias="canonicalUrl")
    layout: Optional[str] = Field(default=None, alias="postLayout")
    # link on the external site for posts pulled from a syndicated feed
    syndicated_from: Optional[str] = None
    content: str = ""

    @field_validator("date", "lastmod", mode="before")
    @classmethod
    def _coerce_dates(cls, value):
        return coerce_datetime(value)

    @field_validator("draft", mode="before")
    @classmethod
    def _none_is_not_draft(cls, value):
        return False if value is None else value

    @field_validator("authors", mode="before")
    @classmethod
    def _author_references(cls, value):
        if not value:
            return []
        if isinstance(value, str):
            value = [value]
        # authors may be plain slugs or {"id": slug} references
        return [item.get("id") if isinstance(item, dict) else item for item in value]

    @field_validator("tags", "images", mode="before")
    @classmethod
    def _string_lists(cls, value):
        if not value:
            return []
        if isinstance(value, str):
            return [value]
        return [str(item) for item in value]

    @property
    def reading_time(self) -> str:
        return calculate_reading_time(self.content)

    @property
    def timestamp(self) -> float:
        """Sort key; undated posts count as the epoch."""
        return self.date.timestamp() if self.date else 0.0
