"""Error hierarchy for blog scraping and image downloads."""

from typing import Any, Optional


class DownloaderError(Exception):
    """Base class for all downloader errors.

    Carries the URL (or path) that was being processed and optional
    context such as the selector that failed to match.
    """

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        context: Optional[dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.url = url
        self.context = context or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        parts = [self.message]
        if self.url:
            parts.append(f"URL: {self.url}")
        for key, value in self.context.items():
            parts.append(f"{key}: {value}")
        return " | ".join(parts)


class NetworkError(DownloaderError):
    """An HTTP round trip failed (transport error or error status)."""


class NotFoundError(DownloaderError):
    """An expected element or attribute is missing from the markup."""


class ParseError(DownloaderError):
    """A link or date did not have the expected structure."""


class FilesystemError(DownloaderError):
    """A directory or file could not be created or written."""
