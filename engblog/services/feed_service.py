import datetime
import html
import logging
from email.utils import format_datetime
from typing import Iterable, List, Optional

from engblog.models.content import Post
from engblog.schemas.feed import Feed, FeedItem
from engblog.schemas.site import SiteMetadata
from engblog.services.content_index import ContentIndex
from engblog.utils import is_external_link

logger = logging.getLogger(__name__)


def post_link(post: Post) -> str:
    if post.syndicated_from:
        return post.syndicated_from
    return f"/blog/{post.slug}"


def feed_items(posts: Iterable[Post], site: SiteMetadata) -> List[FeedItem]:
    return [
        FeedItem(
            title=post.title,
            description=post.summary or "",
            link=post_link(post),
            publication_date=post.date,
            categories=list(post.tags),
            author=site.email,
        )
        for post in posts
    ]


def site_feed(index: ContentIndex, site: SiteMetadata) -> Feed:
    return Feed(
        title=site.title,
        description=site.description,
        items=feed_items(index.list_posts(), site),
    )


def tag_feed(index: ContentIndex, site: SiteMetadata, tag: str) -> Optional[Feed]:
    """Feed for one tag slug, or None when no listed post carries it."""
    posts = index.posts_by_tag(tag)
    if not posts:
        return None
    return Feed(
        title=f"{tag} - {site.title}",
        description=f"{tag} posts",
        items=feed_items(posts, site),
    )


def rfc822_date(value: datetime.datetime) -> str:
    return format_datetime(value.astimezone(datetime.timezone.utc), usegmt=True)


def _absolute(site: SiteMetadata, link: str) -> str:
    if is_external_link(link):
        return link
    return f"{site.site_url.rstrip('/')}/{link.lstrip('/')}"


def _render_item(item: FeedItem, site: SiteMetadata) -> str:
    link = html.escape(_absolute(site, item.link))
    lines = [
        "<item>",
        f"<title>{html.escape(item.title)}</title>",
        f"<link>{link}</link>",
        f"<guid isPermaLink=\"true\">{link}</guid>",
        f"<description>{html.escape(item.description)}</description>",
    ]
    if item.publication_date:
        lines.append(f"<pubDate>{rfc822_date(item.publication_date)}</pubDate>")
    lines.extend(f"<category>{html.escape(c)}</category>" for c in item.categories)
    if item.author:
        lines.append(f"<author>{html.escape(item.author)}</author>")
    lines.append("</item>")
    return "\n".join(lines)


def render_rss(feed: Feed, site: SiteMetadata) -> str:
    """Serialize a feed as an RSS 2.0 document."""
    dates = [item.publication_date for item in feed.items if item.publication_date]
    last_build = max(dates) if dates else datetime.datetime.now(datetime.timezone.utc)
    editor = html.escape(f"{site.email} ({site.author})")

    return "\n".join(
        [
            '<?xml version="1.0" encoding="UTF-8"?>',
            '<rss version="2.0">',
            "<channel>",
            f"<title>{html.escape(feed.title)}</title>",
            f"<link>{html.escape(site.site_url)}/</link>",
            f"<description>{html.escape(feed.description)}</description>",
            f"<language>{html.escape(site.language)}</language>",
            f"<managingEditor>{editor}</managingEditor>",
            f"<webMaster>{editor}</webMaster>",
            f"<lastBuildDate>{rfc822_date(last_build)}</lastBuildDate>",
            *(_render_item(item, site) for item in feed.items),
            "</channel>",
            "</rss>",
        ]
    )
