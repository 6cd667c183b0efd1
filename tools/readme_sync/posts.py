from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Iterable, List, Optional

from .config import DATE_PREFIX_SLUG, MD_H1, MD_SUFFIX, SITE_BASE_URL, SyncConfig
from .errors import ReadmeSyncError
from .github import FileDescriptor, fetch_file_content, list_directory
from .utils import _norm_text, coerce_datetime, date_from_filename, parse_frontmatter

logger = logging.getLogger(__name__)

UNTITLED = "Untitled Post"


@dataclass(frozen=True)
class Post:
    title: str
    url: str
    date: datetime
    source_filename: str


def is_markdown(name: str) -> bool:
    return name.endswith(".md")


def slug_from_filename(name: str) -> str:
    return MD_SUFFIX.sub("", DATE_PREFIX_SLUG.sub("", name, count=1))


def extract_title(attrs: Dict[str, str], body: str) -> str:
    if attrs.get("title"):
        return attrs["title"]
    for m in MD_H1.finditer(body):
        if m["text"].strip():
            return m["text"].strip()
    for line in body.split("\n"):
        if line.strip():
            return line.strip()
    return UNTITLED


def resolve_date(attrs: Dict[str, str], filename: str) -> Optional[datetime]:
    raw = attrs.get("date")
    if raw:
        dt = coerce_datetime(raw)
        if dt is not None:
            return dt
    return date_from_filename(filename)


def post_url(slug: str, when: datetime, site_base_url: str = SITE_BASE_URL) -> str:
    # day-month-year, as the site builds its permalinks
    return f"{site_base_url.rstrip('/')}/{slug}-{when:%d-%m-%Y}/"


def normalize_post(
    file: FileDescriptor,
    attrs: Dict[str, str],
    body: str,
    site_base_url: str = SITE_BASE_URL,
) -> Optional[Post]:
    """
    Build a Post from one file, or None when it has no usable date.
    """
    when = resolve_date(attrs, file.name)
    if when is None:
        return None
    slug = slug_from_filename(file.name)
    return Post(
        title=extract_title(attrs, body),
        url=post_url(slug, when, site_base_url),
        date=when,
        source_filename=file.name,
    )


def select_latest(posts: Iterable[Post], limit: int) -> List[Post]:
    return sorted(posts, key=lambda p: p.date, reverse=True)[:limit]


def collect_posts(client, config: SyncConfig) -> List[Post]:
    """
    List the posts directory and normalise every markdown file in it.

    A failing listing yields no posts at all; a failing file only drops
    that file.
    """
    try:
        files = list_directory(client, config.listing_url)
    except ReadmeSyncError as exc:
        logger.error("! could not list %s: %s", config.listing_url, exc)
        return []

    logger.info("found %d files in %s", len(files), config.posts_dir)

    posts: List[Post] = []
    for f in files:
        if not is_markdown(f.name):
            logger.info("- skipping non-markdown file %s", f.name)
            continue
        try:
            text = _norm_text(fetch_file_content(client, f.download_url))
        except ReadmeSyncError as exc:
            logger.warning("! error fetching %s: %s", f.name, exc)
            continue
        attrs, body = parse_frontmatter(text)
        post = normalize_post(f, attrs, body, config.site_base_url)
        if post is None:
            logger.info("- no valid date for %s, skip", f.name)
            continue
        logger.debug("%s -> %s", f.name, post.url)
        posts.append(post)

    logger.info("✓ processed %d posts", len(posts))
    return posts
