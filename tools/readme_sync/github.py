"""
Thin HTTP layer over the GitHub contents API.

One GET per resource, no retries. Every failure is translated into the
errors in `errors.py` so callers never see `requests` exceptions.
"""
from __future__ import annotations

import base64
import json
import logging
from dataclasses import dataclass
from typing import Any, List

import requests

from .config import REQUEST_TIMEOUT, USER_AGENT
from .errors import FormatError, NetworkError, RequestTimeoutError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileDescriptor:
    name: str
    download_url: str


class HttpClient:
    def __init__(self, timeout: float = REQUEST_TIMEOUT, user_agent: str | None = None):
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({"User-Agent": user_agent or USER_AGENT})

    def _get(self, url: str) -> requests.Response:
        logger.debug("GET %s", url)
        try:
            resp = self.session.get(url, timeout=self.timeout)
        except requests.Timeout as exc:
            raise RequestTimeoutError(f"request timed out after {self.timeout}s: {url}", url) from exc
        except requests.RequestException as exc:
            raise NetworkError(f"request failed: {url}: {exc}", url) from exc
        if resp.status_code != 200:
            raise NetworkError(
                f"GET {url} returned {resp.status_code}", url, resp.status_code
            )
        return resp

    def get_text(self, url: str) -> str:
        resp = self._get(url)
        resp.encoding = "utf-8"
        return resp.text

    def get_json(self, url: str) -> Any:
        resp = self._get(url)
        try:
            return resp.json()
        except ValueError as exc:
            raise FormatError(f"failed to parse JSON from {url}: {exc}") from exc

    def close(self) -> None:
        self.session.close()


def list_directory(client, url: str) -> List[FileDescriptor]:
    """
    Turn a contents-API directory listing into file descriptors.

    Entries without a name or without a download URL (sub-directories,
    submodules) are left out.
    """
    payload = client.get_json(url)
    if not isinstance(payload, list):
        raise FormatError(f"expected a JSON array from {url}, got {type(payload).__name__}")

    files: List[FileDescriptor] = []
    for entry in payload:
        if not isinstance(entry, dict):
            raise FormatError(f"unexpected listing entry from {url}: {entry!r}")
        name = entry.get("name")
        download_url = entry.get("download_url")
        if not isinstance(name, str) or not isinstance(download_url, str):
            continue
        if not name or not download_url:
            continue
        files.append(FileDescriptor(name=name, download_url=download_url))
    return files


def decode_embedded_content(payload: dict) -> str:
    encoding = payload.get("encoding", "base64")
    if encoding != "base64":
        raise FormatError(f"unsupported content encoding: {encoding!r}")
    try:
        raw = base64.b64decode(payload["content"])
        return raw.decode("utf-8")
    except (ValueError, TypeError) as exc:
        raise FormatError(f"invalid embedded content: {exc}") from exc


def _looks_embedded(text: str) -> bool:
    return text.lstrip().startswith("{") and '"content"' in text


def fetch_file_content(client, url: str) -> str:
    """
    Return the document behind `url`.

    Raw download URLs give the text as-is. The API form of the same file is
    a JSON object whose `content` is base64; that one gets decoded.
    """
    text = client.get_text(url)
    if not _looks_embedded(text):
        return text
    try:
        payload = json.loads(text)
    except ValueError:
        return text
    if isinstance(payload, dict) and isinstance(payload.get("content"), str):
        return decode_embedded_content(payload)
    return text
