import argparse
import logging
from pathlib import Path

from engblog.dependencies import build_repo, build_syndicated_repo
from engblog.services.content_loader import load_index
from engblog.services.feed_service import render_rss, site_feed, tag_feed
from engblog.settings import settings

logger = logging.getLogger(__name__)


def build_feeds(index, site, out_dir: Path) -> list[Path]:
    """Write feed.xml and tags/<tag>/feed.xml under out_dir."""
    written = []

    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / "feed.xml"
    path.write_text(render_rss(site_feed(index, site), site), encoding="utf-8")
    written.append(path)

    for tag in sorted(index.tag_counts()):
        feed = tag_feed(index, site, tag) if tag else None
        if feed is None:
            continue
        path = out_dir / "tags" / tag / "feed.xml"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(render_rss(feed, site), encoding="utf-8")
        written.append(path)
    return written


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Write the blog RSS feeds to disk.")
    parser.add_argument("--out", default="public", help="output directory")
    return parser.parse_args(argv)


if __name__ == "__main__":
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    args = parse_args()
    try:
        paths = build_feeds(
            load_index(build_repo(settings), syndicated=build_syndicated_repo(settings)),
            settings.site_metadata(),
            Path(args.out),
        )
        logger.info(f"Wrote {len(paths)} feeds to {args.out}")
    except Exception as e:
        logger.error(f"Feed build failed: {e}", exc_info=True)
        raise SystemExit(1)
