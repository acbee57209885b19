"""Core domain entities."""

import re
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Optional

from ameblo_downloader.core.errors import ParseError

_DATE_PATTERN = re.compile(
    r"^\s*(\d{4})[-/](\d{1,2})[-/](\d{1,2})\s+(\d{1,2}):(\d{1,2}):(\d{1,2})\s*$"
)


class EntryState(str, Enum):
    """Fetch state of an entry document."""

    PENDING = "pending"
    FETCHING = "fetching"
    FETCHED = "fetched"
    FAILED = "failed"


class ErrorPolicy(str, Enum):
    """What to do when saving an image fails."""

    ABORT = "abort"
    SKIP = "skip"


@dataclass(frozen=True)
class EntryDate:
    """Publish timestamp of an entry.

    All names derived from the date (directories, file prefixes) come from
    this value so they stay consistent with each other.
    """

    published: datetime

    @classmethod
    def parse(cls, text: str) -> "EntryDate":
        """Parse ``YYYY-MM-DD HH:MM:SS`` (or ``/`` separated) text."""
        match = _DATE_PATTERN.match(text)
        if not match:
            raise ParseError("Unrecognized publish date", context={"text": text.strip()})
        try:
            published = datetime(*(int(group) for group in match.groups()))
        except ValueError as e:
            raise ParseError(f"Invalid publish date: {e}", context={"text": text.strip()}) from e
        return cls(published)

    @property
    def stamp(self) -> str:
        return self.published.strftime("%Y-%m-%d_%H-%M-%S")

    @property
    def year(self) -> str:
        return f"{self.published.year:04d}"

    @property
    def month(self) -> str:
        return f"{self.published.month:02d}"

    def __str__(self) -> str:
        return self.stamp


@dataclass
class DownloadReport:
    """Counters for one download run."""

    output_dir: Optional[Path] = None
    entries_found: int = 0
    entries_skipped: int = 0
    images_downloaded: int = 0
    images_existing: int = 0
    images_failed: int = 0
