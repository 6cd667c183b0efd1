from __future__ import annotations

from typing import Optional


class ReadmeSyncError(Exception):
    """Base class for everything the sync raises on purpose."""


class NetworkError(ReadmeSyncError):
    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class RequestTimeoutError(NetworkError, TimeoutError):
    pass


class FormatError(ReadmeSyncError):
    pass


class MarkerNotFoundError(ReadmeSyncError):
    def __init__(self, message: str, marker: Optional[str] = None):
        super().__init__(message)
        self.marker = marker
