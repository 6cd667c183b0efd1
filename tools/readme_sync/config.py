#!/usr/bin/env python3
from __future__ import annotations

import pathlib
import re
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Optional

import yaml

# ---------- Remote blog

BLOG_REPO = "alicelond/alicelond.github.io"
POSTS_DIR = "_posts"
GITHUB_API = "https://api.github.com"
SITE_BASE_URL = "https://signaltosoftware.com"

# ---------- Local README

README_FILE = "README.md"
CONFIG_FILE = "readme-sync.yml"
START_MARKER = "### 📕 Latest Blog Post"
END_MARKER = "### 📖 Currently Reading"
NO_POSTS_LINE = "- No posts available yet"

# ---------- Limits

MAX_POSTS = 5
REQUEST_TIMEOUT = 10
USER_AGENT = "GitHub-Action-README-Update"

# Some shared regexes

DATE_PREFIX = re.compile(r"^(?P<y>\d{4})-(?P<m>\d{2})-(?P<d>\d{2})")
DATE_PREFIX_SLUG = re.compile(r"^\d{4}-\d{2}-\d{2}-")
MD_SUFFIX = re.compile(r"\.md$")
MD_H1 = re.compile(r"^#[ \t]+(?P<text>.+)$", re.MULTILINE)


@dataclass(frozen=True)
class SyncConfig:
    blog_repo: str = BLOG_REPO
    posts_dir: str = POSTS_DIR
    api_base: str = GITHUB_API
    site_base_url: str = SITE_BASE_URL
    readme_file: str = README_FILE
    start_marker: str = START_MARKER
    end_marker: str = END_MARKER
    max_posts: int = MAX_POSTS
    timeout: float = REQUEST_TIMEOUT
    user_agent: str = USER_AGENT

    def __post_init__(self):
        if isinstance(self.max_posts, bool) or not isinstance(self.max_posts, int):
            raise ValueError(f"max_posts must be an integer, got {self.max_posts!r}")
        if self.max_posts < 1:
            raise ValueError(f"max_posts must be positive, got {self.max_posts}")
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")
        # frozen, so go through object.__setattr__
        object.__setattr__(self, "site_base_url", self.site_base_url.rstrip("/"))
        object.__setattr__(self, "api_base", self.api_base.rstrip("/"))

    @property
    def listing_url(self) -> str:
        return (
            f"{self.api_base}/repos/{self.blog_repo}"
            f"/contents/{self.posts_dir.strip('/')}"
        )

    @classmethod
    def from_mapping(cls, data: Dict[str, Any]) -> "SyncConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"unknown config keys: {', '.join(unknown)}")
        try:
            return cls(**data)
        except TypeError as exc:
            raise ValueError(str(exc)) from exc

    @classmethod
    def from_yaml(cls, path: pathlib.Path) -> "SyncConfig":
        """
        Load overrides from a YAML mapping. A missing file yields defaults.
        """
        if not path.exists():
            return cls()
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"{path}: invalid YAML: {exc}") from exc
        if not isinstance(data, dict):
            raise ValueError(f"{path}: expected a mapping at top level")
        return cls.from_mapping(data)

    def with_readme(self, readme_file: Optional[str]) -> "SyncConfig":
        if not readme_file:
            return self
        return replace(self, readme_file=readme_file)
