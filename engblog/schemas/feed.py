import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class FeedItem(BaseModel):
    title: str
    description: str = ""
    link: str
    publication_date: Optional[datetime.datetime] = None
    categories: List[str] = Field(default_factory=list)
    author: str = ""


class Feed(BaseModel):
    title: str
    description: str
    items: List[FeedItem] = Field(default_factory=list)
