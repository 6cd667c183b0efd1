#!/usr/bin/env python3
"""
Keep the "Latest Blog Post" section of a README in step with a blog repo.

- Lists `_posts/` of the blog repo through the GitHub contents API
- Fetches each markdown post, reads its front matter
- Derives title, date and the site permalink `<slug>-DD-MM-YYYY/`
- Keeps the newest few and rewrites the README between the two markers

Network trouble costs posts, never the run: a broken file is skipped and a
broken listing renders the "no posts" line. Missing markers are fatal.
"""

from __future__ import annotations

import logging
import pathlib
import sys
from dataclasses import dataclass
from typing import List, Optional

import click

from .config import CONFIG_FILE, SyncConfig
from .errors import MarkerNotFoundError
from .github import HttpClient
from .posts import Post, collect_posts, select_latest
from .readme import ReadmeFile, render_post_list, splice_section

logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    posts: List[Post]
    text: str
    changed: bool


def run(
    config: SyncConfig,
    client=None,
    readme: Optional[ReadmeFile] = None,
    write: bool = True,
) -> RunResult:
    """
    Collect, select and splice. Raises MarkerNotFoundError before anything
    is written when the README lacks its markers.
    """
    own_client = client is None
    if own_client:
        client = HttpClient(timeout=config.timeout, user_agent=config.user_agent)
    readme = readme or ReadmeFile(config.readme_file)

    logger.info("fetching latest posts from %s", config.blog_repo)
    try:
        posts = select_latest(collect_posts(client, config), config.max_posts)
    finally:
        if own_client:
            client.close()

    for i, p in enumerate(posts, 1):
        logger.info("%d. %s (%s)", i, p.title, p.date.date().isoformat())

    current = readme.read()
    updated = splice_section(
        current,
        render_post_list(posts),
        config.start_marker,
        config.end_marker,
    )
    changed = updated != current
    if not changed:
        logger.info("= %s unchanged, skip", readme.path)
    elif write:
        readme.write(updated)
        logger.info("✓ %s updated", readme.path)
    return RunResult(posts=posts, text=updated, changed=changed)


@click.command()
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=pathlib.Path),
    default=CONFIG_FILE,
    show_default=True,
    help="YAML file with configuration overrides.",
)
@click.option("--readme", "readme_path", default=None, help="README to rewrite.")
@click.option("--dry-run", is_flag=True, help="Print the new README instead of writing it.")
@click.option("-v", "--verbose", is_flag=True)
@click.option("-q", "--quiet", is_flag=True)
def main(config_path, readme_path, dry_run, verbose, quiet):
    level = logging.DEBUG if verbose else logging.WARNING if quiet else logging.INFO
    logging.basicConfig(level=level, format="%(message)s", force=True)

    try:
        config = SyncConfig.from_yaml(config_path).with_readme(readme_path)
    except ValueError as exc:
        logger.error("ERROR: bad config %s: %s", config_path, exc)
        sys.exit(2)

    try:
        result = run(config, write=not dry_run)
    except MarkerNotFoundError as exc:
        logger.error("ERROR: could not find blog section markers in %s: %s", config.readme_file, exc)
        sys.exit(1)
    except OSError as exc:
        logger.error("ERROR: %s", exc)
        sys.exit(1)

    if dry_run:
        click.echo(result.text, nl=False)


if __name__ == "__main__":
    main()
