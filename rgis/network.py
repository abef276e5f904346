"""Fetching remote files with progress reporting."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Optional

import requests

_CHUNK_SIZE = 1024

ProgressCallback = Callable[[int], None]


class NetworkError(Exception):
    """Raised when a file cannot be fetched."""


@dataclass
class FetchedFile:
    """Downloaded file contents together with its metadata."""

    name: str
    data: bytes
    crs_epsg_code: int


@dataclass
class NetworkFetchJob:
    """A pending download of a named file."""

    url: str
    crs_epsg_code: int
    name: str

    def description(self) -> str:
        return f"Fetching '{self.name}'"

    def perform(self, progress: Optional[ProgressCallback] = None) -> FetchedFile:
        return fetch(self.url, self.crs_epsg_code, self.name, progress)


def _content_length(response: requests.Response) -> int:
    try:
        return int(response.headers.get("Content-Length", 0))
    except ValueError:
        return 0


def fetch(
    url: str,
    crs_epsg_code: int,
    name: str,
    progress: Optional[ProgressCallback] = None,
) -> FetchedFile:
    """Download a URL, reporting whole-percent progress when the size is known."""
    try:
        with requests.get(url, stream=True) as response:
            total_size = _content_length(response)
            buffer = bytearray()
            last_percent = 0
            for chunk in response.iter_content(chunk_size=_CHUNK_SIZE):
                buffer.extend(chunk)
                if total_size > 0:
                    percent = 100 * len(buffer) // total_size
                    if percent != last_percent:
                        if progress is not None:
                            progress(percent)
                        last_percent = percent
    except (requests.RequestException, OSError) as exc:
        raise NetworkError(str(exc)) from exc
    return FetchedFile(name=name, data=bytes(buffer), crs_epsg_code=crs_epsg_code)