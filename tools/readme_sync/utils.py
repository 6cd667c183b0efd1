from __future__ import annotations

from datetime import date, datetime
from typing import Dict, Optional, Tuple

import yaml

from .config import DATE_PREFIX

_QUOTES = ('"', "'")


def _norm_text(s: str) -> str:
    return s.replace('\r\n', '\n').replace('\r', '\n').lstrip('\ufeff')


def _strip_quotes(v: str) -> str:
    if len(v) >= 2 and v[0] in _QUOTES and v[-1] == v[0]:
        return v[1:-1]
    return v


def parse_frontmatter(text: str) -> Tuple[Dict[str, str], str]:
    """
    Split a document into its leading `---` block and the body.

    The block must open on the very first line. Every line inside it is
    split at the first colon; the last occurrence of a key wins. Documents
    without a closed block come back untouched with no attributes.
    """
    lines = text.splitlines(keepends=True)
    if not lines or lines[0].rstrip() != "---":
        return {}, text

    for i in range(1, len(lines)):
        if lines[i].rstrip() == "---":
            if i == 1:
                # needs at least one line between the fences
                return {}, text
            attrs: Dict[str, str] = {}
            for line in lines[1:i]:
                key, sep, value = line.partition(":")
                if not sep:
                    continue
                attrs[key.strip()] = _strip_quotes(value.strip())
            return attrs, "".join(lines[i + 1 :])
    return {}, text


def frontmatter_block(attrs: Dict[str, str]) -> str:
    if not attrs:
        return ""
    dumped = yaml.safe_dump(
        dict(attrs), sort_keys=False, allow_unicode=True, default_flow_style=False
    ).rstrip()
    return f"---\n{dumped}\n---\n"


def coerce_datetime(v: str) -> Optional[datetime]:
    """
    Parse a front-matter date into a naive wall-clock datetime.

    Offsets are dropped rather than applied, so the calendar date is the one
    the author wrote down.
    """
    s = _strip_quotes(v.strip())
    if not s:
        return None
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    try:
        dt = datetime.fromisoformat(s)
    except ValueError:
        dt = None
    if dt is None:
        for fmt in ("%Y-%m-%d %H:%M:%S %z", "%Y-%m-%d %H:%M %z", "%Y-%m-%d %H:%M:%S"):
            try:
                dt = datetime.strptime(s, fmt)
                break
            except ValueError:
                continue
    if dt is None:
        return None
    return dt.replace(tzinfo=None)


def date_from_filename(name: str) -> Optional[datetime]:
    m = DATE_PREFIX.match(name)
    if not m:
        return None
    try:
        d = date(int(m["y"]), int(m["m"]), int(m["d"]))
    except ValueError:
        return None
    return datetime(d.year, d.month, d.day)
