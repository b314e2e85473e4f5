from __future__ import annotations


class UpstreamError(Exception):
    """Fetching a GHCN data source failed."""


class UpstreamStatusError(UpstreamError):
    def __init__(self, message: str, *, url: str, status_code: int) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class UpstreamNetworkError(UpstreamError):
    pass
