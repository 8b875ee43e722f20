import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from engblog import dependencies as deps
from engblog.schemas.site import SiteMetadata
from engblog.services.content_index import ContentIndex
from engblog.services.feed_service import render_rss, site_feed, tag_feed

logger = logging.getLogger(__name__)

router = APIRouter()

RSS_MEDIA_TYPE = "application/xml"


@router.get("/feed.xml")
def get_site_feed(
    index: ContentIndex = Depends(deps.get_content_index),
    site: SiteMetadata = Depends(deps.get_site_metadata),
):
    """RSS feed of every published post."""
    try:
        body = render_rss(site_feed(index, site), site)
    except Exception as e:
        logger.error(f"Failed to render site feed: {e}")
        raise HTTPException(status_code=500, detail="Failed to render feed")
    return Response(content=body, media_type=RSS_MEDIA_TYPE)


@router.get("/tags/{tag}/feed.xml")
def get_tag_feed(
    tag: str,
    index: ContentIndex = Depends(deps.get_content_index),
    site: SiteMetadata = Depends(deps.get_site_metadata),
):
    try:
        feed = tag_feed(index, site, tag)
        if feed is None:
            raise HTTPException(status_code=404, detail="Tag not found")
        body = render_rss(feed, site)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to render feed for tag {tag}: {e}")
        raise HTTPException(status_code=500, detail="Failed to render feed")
    return Response(content=body, media_type=RSS_MEDIA_TYPE)
