"""Core interfaces for adapters."""

from abc import ABC, abstractmethod
from typing import AsyncIterator

from ameblo_downloader.core.entities import EntryDate, EntryState


class BlogEntry(ABC):
    """One blog post whose document is fetched on first access."""

    reference: str

    @property
    @abstractmethod
    def state(self) -> EntryState:
        """Current fetch state of the entry document."""
        pass

    @abstractmethod
    async def title(self) -> str:
        """Entry title, empty if the page has none."""
        pass

    @abstractmethod
    async def date(self) -> EntryDate:
        """Publish date of the entry."""
        pass

    @abstractmethod
    async def images(self) -> list[str]:
        """Image URLs embedded in the entry body, in document order."""
        pass


class EntrySource(ABC):
    """Interface for enumerating an author's entries and their images."""

    @abstractmethod
    async def count_pages(self, author: str) -> int:
        """Number of entry listing pages for the author."""
        pass

    @abstractmethod
    async def list_entry_references(self, author: str) -> list[str]:
        """Entry references across all listing pages, in page order."""
        pass

    @abstractmethod
    async def list_entries(self, author: str) -> list[BlogEntry]:
        """Lazily fetched entries for every reference of the author."""
        pass

    @abstractmethod
    def iter_image_bytes(self, url: str) -> AsyncIterator[bytes]:
        """Stream the bytes of one image."""
        pass
