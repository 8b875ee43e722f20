import json
import logging
import threading

import httpx

from engblog.services.content_store import ContentStore
from engblog.settings import Settings, settings

logger = logging.getLogger(__name__)

STOP_LISTENER_EVENT = threading.Event()  # thread-safe shutdown signal


def listen_changes(store: ContentStore, settings_obj: Settings = settings):
    logger.info("CouchDB listener thread started")
    backoff = 1
    since = "now"

    while not STOP_LISTENER_EVENT.is_set():
        try:
            url = (
                f"{settings_obj.couchdb_url}/{settings_obj.COUCHDB_DATABASE}/_changes"
                f"?feed=continuous&include_docs=true&since={since}&heartbeat=true"
            )
            logger.info(f"Connecting to CouchDB _changes since ({since})...")

            with httpx.stream(
                "GET",
                url,
                timeout=httpx.Timeout(connect=5.0, read=None, write=None, pool=None),
            ) as response:
                logger.info("Connected, waiting for changes...")
                backoff = 1  # reset backoff after successful connection

                for line in response.iter_lines():
                    if STOP_LISTENER_EVENT.is_set():
                        logger.info("Listener stopping...")
                        return

                    # skip heartbeat or empty lines
                    line = line.strip()
                    if not line:
                        continue

                    try:
                        change = json.loads(line)
                        since = change.get("seq", since)
                        process_change(change, store, settings_obj=settings_obj)
                    except json.JSONDecodeError:
                        logger.warning(f"Skipping invalid JSON line: {line}")
                    except Exception as e:
                        logger.error(f"Error processing change: {e}")

        except httpx.RequestError as e:
            logger.error(f"HTTP connection error: {e}")
        except Exception as e:
            logger.error(f"Unexpected listener error: {e}")

        # Reconnect with exponential backoff
        if not STOP_LISTENER_EVENT.is_set():
            logger.info(f"Reconnecting in {backoff} seconds...")
            STOP_LISTENER_EVENT.wait(backoff)
            backoff = min(backoff * 2, 60)  # cap backoff at 60s


def is_content_change(doc: dict, settings_obj: Settings = settings) -> bool:
    path = doc.get("path", doc.get("_id", ""))
    return path.startswith(settings_obj.BLOG_PREFIX) or path.startswith(
        settings_obj.AUTHORS_PREFIX
    )


def process_change(change: dict, store: ContentStore, *, settings_obj: Settings = settings) -> bool:
    """Reload the store when a blog or author document changed. Returns True on reload."""
    doc = change.get("doc")
    if not doc:
        logger.debug(f"No doc in change {change.get('id')}")
        return False

    # Leaf chunks carry no path; their parent doc changes with them.
    if doc.get("type") == "leaf":
        return False

    if not is_content_change(doc, settings_obj):
        logger.debug(f"Skipping doc outside blog/authors paths {doc.get('_id')}")
        return False

    logger.info(f"Content changed ({doc.get('_id')}), reloading snapshot")
    store.reload()
    return True


def start_listener(store: ContentStore, settings_obj: Settings = settings):
    """Start listener in a daemon thread"""
    STOP_LISTENER_EVENT.clear()
    thread = threading.Thread(
        target=listen_changes,
        args=(store, settings_obj),
        daemon=True,
        name="CouchDBListener",
    )
    thread.start()
    logger.info("CouchDB listener started in background thread")
    return thread


def stop_listener():
    """Signal listener to stop"""
    STOP_LISTENER_EVENT.set()
    logger.info("CouchDB listener stopping...")
