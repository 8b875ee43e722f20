import logging
import xml.etree.ElementTree as ET
from email.utils import parsedate_to_datetime
from typing import List, Optional
from urllib.parse import urlparse

import httpx
from pydantic import ValidationError

from engblog.models.content import Post
from engblog.services.content_loader import ContentValidationError, legacy_slug

logger = logging.getLogger(__name__)

CONTENT_NS = "{http://purl.org/rss/1.0/modules/content/}encoded"
DC_CREATOR = "{http://purl.org/dc/elements/1.1/}creator"


def _text(item: ET.Element, tag: str) -> Optional[str]:
    value = item.findtext(tag)
    return value.strip() if value and value.strip() else None


class SyndicatedFeedRepo:
    """
    Posts republished from another site's RSS feed.

    Each <item> becomes a post whose slug is its link with `base_url`
    removed, so the item keeps the same path it had on the source site.
    """

    def __init__(self, url: str, base_url: str = "", fetch=httpx.get):
        self.url = url
        self.base_url = base_url
        self.fetch = fetch

    def slug_for(self, link: Optional[str], title: Optional[str]) -> str:
        if link and self.base_url and link.startswith(self.base_url):
            slug = link[len(self.base_url):]
        elif link:
            slug = urlparse(link).path
        else:
            slug = ""
        slug = slug.strip("/")
        if not slug and title:
            slug = legacy_slug(title)
        return slug

    def list_posts(self) -> List[Post]:
        try:
            response = self.fetch(self.url, timeout=10.0, follow_redirects=True)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.warning(f"Skipping syndicated feed {self.url}: {e}")
            return []

        try:
            root = ET.fromstring(response.content)
        except ET.ParseError as e:
            raise ContentValidationError(self.url, f"bad RSS: {e}") from e

        posts = [self._to_post(item) for item in root.iter("item")]
        logger.debug(f"Found {len(posts)} syndicated posts in {self.url}")
        return posts

    def _to_post(self, item: ET.Element) -> Post:
        link = _text(item, "link")
        title = _text(item, "title")
        entry_id = _text(item, "guid") or link or title or self.url

        pub_date = _text(item, "pubDate")
        try:
            date = parsedate_to_datetime(pub_date) if pub_date else None
        except (TypeError, ValueError) as e:
            raise ContentValidationError(entry_id, f"bad pubDate {pub_date!r}") from e

        try:
            return Post(
                id=entry_id,
                slug=self.slug_for(link, title),
                title=title or "",
                summary=_text(item, "description"),
                date=date,
                tags=[c.text.strip() for c in item.findall("category") if c.text and c.text.strip()],
                content=_text(item, CONTENT_NS) or "",
                syndicated_from=link,
                creator=_text(item, DC_CREATOR) or _text(item, "author"),
            )
        except ValidationError as e:
            raise ContentValidationError(entry_id, e) from e
