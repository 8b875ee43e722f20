from fastapi import Depends, Request

from engblog.db.couchdb import get_couch
from engblog.repos.content_repo import CouchContentRepo, FileContentRepo
from engblog.repos.syndicated_repo import SyndicatedFeedRepo
from engblog.schemas.site import SiteMetadata
from engblog.services.content_index import ContentIndex
from engblog.services.content_store import ContentStore
from engblog.settings import Settings


def build_repo(settings_obj: Settings, couch_factory=get_couch):
    if settings_obj.CONTENT_SOURCE == "filesystem":
        return FileContentRepo(settings_obj.CONTENT_DIR)
    if settings_obj.CONTENT_SOURCE == "couchdb":
        couch_db, parser = couch_factory(settings_obj)
        return CouchContentRepo(couch_db, parser, settings_obj)
    raise ValueError(f"Unknown CONTENT_SOURCE: {settings_obj.CONTENT_SOURCE}")


def build_syndicated_repo(settings_obj: Settings):
    if not settings_obj.SYNDICATED_FEED_URL:
        return None
    return SyndicatedFeedRepo(settings_obj.SYNDICATED_FEED_URL, settings_obj.SYNDICATED_BASE_URL)


def get_content_store(request: Request) -> ContentStore:
    return request.app.state.content_store


def get_site_metadata(request: Request) -> SiteMetadata:
    return request.app.state.site


def get_content_index(store: ContentStore = Depends(get_content_store)) -> ContentIndex:
    return store.index
