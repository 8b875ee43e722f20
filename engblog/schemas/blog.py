from typing import List, Optional

from pydantic import BaseModel, Field

from engblog.models.content import Author, Post
from engblog.utils import format_date, title_from_tag, trim_string


def _iso(value) -> Optional[str]:
    return value.isoformat() if value else None


class PostLink(BaseModel):
    slug: str
    title: str


class PostSummary(BaseModel):
    id: str
    slug: str
    title: str
    summary: Optional[str] = None
    excerpt: str = ""
    images: List[str] = Field(default_factory=list)
    publishedAt: Optional[str] = None
    updatedAt: Optional[str] = None
    formattedDate: str = ""
    tags: List[str] = Field(default_factory=list)
    authors: List[str] = Field(default_factory=list)
    readingTime: Optional[str] = None
    syndicatedFrom: Optional[str] = None

    @classmethod
    def from_post(cls, post: Post, locale: str = "en-US") -> "PostSummary":
        return cls(
            id=post.id,
            slug=post.slug,
            title=post.title,
            summary=post.summary,
            excerpt=trim_string(post.summary),
            images=post.images,
            publishedAt=_iso(post.date),
            updatedAt=_iso(post.lastmod),
            formattedDate=format_date(post.date, locale),
            tags=post.tags,
            authors=post.authors,
            readingTime=post.reading_time,
            syndicatedFrom=post.syndicated_from,
        )


class PostDetail(PostSummary):
    content: str
    canonicalUrl: Optional[str] = None
    layout: Optional[str] = None
    newer: Optional[PostLink] = None
    older: Optional[PostLink] = None

    @classmethod
    def from_post(
        cls,
        post: Post,
        newer: Optional[Post] = None,
        older: Optional[Post] = None,
        locale: str = "en-US",
    ) -> "PostDetail":
        summary = PostSummary.from_post(post, locale)
        return cls(
            **summary.model_dump(),
            content=post.content,
            canonicalUrl=post.canonical_url,
            layout=post.layout,
            newer=PostLink(slug=newer.slug, title=newer.title) if newer else None,
            older=PostLink(slug=older.slug, title=older.title) if older else None,
        )


class PostPage(BaseModel):
    items: List[PostSummary]
    page: int
    perPage: int
    total: int
    totalPages: int


class AuthorSummary(BaseModel):
    slug: str
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

    @classmethod
    def from_author(cls, author: Author) -> "AuthorSummary":
        return cls(**author.model_dump(include=set(cls.model_fields)))


class AuthorDetail(AuthorSummary):
    bio: str = ""
    posts: List[PostSummary] = Field(default_factory=list)


class TagCount(BaseModel):
    tag: str
    title: str
    count: int

    @classmethod
    def from_count(cls, tag: str, count: int) -> "TagCount":
        return cls(tag=tag, title=title_from_tag(tag), count=count)


class AuthorCount(BaseModel):
    slug: str
    name: str
    count: int
