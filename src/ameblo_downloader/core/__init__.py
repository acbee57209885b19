"""Core domain layer."""

from ameblo_downloader.core.entities import DownloadReport, EntryDate, EntryState, ErrorPolicy
from ameblo_downloader.core.errors import (
    DownloaderError,
    FilesystemError,
    NetworkError,
    NotFoundError,
    ParseError,
)
from ameblo_downloader.core.interfaces import BlogEntry, EntrySource

__all__ = [
    "BlogEntry",
    "DownloadReport",
    "DownloaderError",
    "EntryDate",
    "EntrySource",
    "EntryState",
    "ErrorPolicy",
    "FilesystemError",
    "NetworkError",
    "NotFoundError",
    "ParseError",
]
