import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from engblog import dependencies as deps
from engblog.schemas.blog import PostSummary, TagCount
from engblog.schemas.site import SiteMetadata
from engblog.services.content_index import ContentIndex, sorted_tag_counts

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/tags", response_model=List[TagCount])
def list_tags(index: ContentIndex = Depends(deps.get_content_index)):
    """Tag slugs with post counts, most used first."""
    try:
        return [
            TagCount.from_count(tag, count)
            for tag, count in sorted_tag_counts(index.tag_counts())
        ]
    except Exception as e:
        logger.error(f"Unexpected error listing tags: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve tags")


@router.get("/tags/{tag}", response_model=List[PostSummary])
def posts_for_tag(
    tag: str,
    index: ContentIndex = Depends(deps.get_content_index),
    site: SiteMetadata = Depends(deps.get_site_metadata),
):
    try:
        posts = index.posts_by_tag(tag)
        if not posts:
            raise HTTPException(status_code=404, detail="Tag not found")
        return [PostSummary.from_post(post, site.locale) for post in posts]
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error retrieving posts for tag {tag}: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve posts")
