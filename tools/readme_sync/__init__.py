from __future__ import annotations

from .config import SyncConfig
from .errors import (
    FormatError,
    MarkerNotFoundError,
    NetworkError,
    ReadmeSyncError,
    RequestTimeoutError,
)
from .github import FileDescriptor, HttpClient
from .posts import Post, collect_posts, normalize_post, select_latest
from .readme import ReadmeFile, render_post_list, splice_section
from .utils import parse_frontmatter

__version__ = "0.1.0"
