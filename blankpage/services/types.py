"""Shared typed return types for backend services."""

from typing import TypedDict


class DownloadResult(TypedDict):
    filename: str
    media_type: str
    content: str
