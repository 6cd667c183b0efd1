from __future__ import annotations

import pathlib
from typing import Iterable

from .config import END_MARKER, NO_POSTS_LINE, START_MARKER
from .errors import MarkerNotFoundError
from .posts import Post


def render_post_list(posts: Iterable[Post]) -> str:
    lines = [f"- [{p.title}]({p.url})" for p in posts]
    return "\n".join(lines) if lines else NO_POSTS_LINE


def splice_section(
    text: str,
    rendered: str,
    start_marker: str = START_MARKER,
    end_marker: str = END_MARKER,
) -> str:
    """
    Replace whatever sits between the two markers with `rendered`.

    The start marker line is kept, the end marker and everything after it
    are left exactly as they were.
    """
    start = text.find(start_marker)
    if start == -1:
        raise MarkerNotFoundError(f"start marker {start_marker!r} not found", start_marker)
    end = text.find(end_marker)
    if end == -1:
        raise MarkerNotFoundError(f"end marker {end_marker!r} not found", end_marker)
    if end < start:
        raise MarkerNotFoundError(
            f"end marker {end_marker!r} appears before start marker {start_marker!r}",
            end_marker,
        )
    return text[:start] + f"{start_marker}\n{rendered}\n" + text[end:]


class ReadmeFile:
    def __init__(self, path: pathlib.Path | str):
        self.path = pathlib.Path(path)

    # newline="" keeps the file's own line endings intact
    def read(self) -> str:
        with self.path.open(encoding="utf-8", newline="") as fh:
            return fh.read()

    def write(self, text: str) -> None:
        with self.path.open("w", encoding="utf-8", newline="") as fh:
            fh.write(text)

    def __repr__(self) -> str:
        return f"ReadmeFile({str(self.path)!r})"
