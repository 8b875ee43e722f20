import logging
from contextlib import asynccontextmanager
from functools import partial

from fastapi import Depends, FastAPI

from engblog.dependencies import build_repo, build_syndicated_repo
from engblog.routers import admin, authors, feeds, posts, tags
from engblog.security import get_api_key
from engblog.services.content_loader import load_index
from engblog.services.content_store import ContentStore
from engblog.services.couchdb_listener import start_listener, stop_listener
from engblog.settings import settings

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper()),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def create_store() -> ContentStore:
    loader = partial(load_index, syndicated=build_syndicated_repo(settings))
    return ContentStore(build_repo(settings), loader=loader)


def should_watch_changes() -> bool:
    return settings.CONTENT_SOURCE == "couchdb" and settings.WATCH_CHANGES


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.site = settings.site_metadata()
    store = create_store()
    store.reload()  # malformed content fails startup
    app.state.content_store = store

    listener_thread = None
    if should_watch_changes():
        listener_thread = start_listener(store)

    try:
        yield
    finally:
        if listener_thread is not None:
            stop_listener()
            listener_thread.join(timeout=10)
            logger.info("CouchDB listener exited gracefully")


app = FastAPI(
    title="Engineering Blog API",
    description="Posts, authors, tags and feeds for the engineering blog",
    lifespan=lifespan,
)

app.include_router(feeds.router)
app.include_router(posts.router, dependencies=[Depends(get_api_key)])
app.include_router(authors.router, dependencies=[Depends(get_api_key)])
app.include_router(tags.router, dependencies=[Depends(get_api_key)])
app.include_router(admin.router, dependencies=[Depends(get_api_key)])


@app.get("/")
async def root():
    return {"message": "Engineering Blog API is running"}
