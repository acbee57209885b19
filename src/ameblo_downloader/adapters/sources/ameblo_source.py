"""Ameba blog source: pagination, entry enumeration and entry pages."""

from typing import AsyncIterator, Optional
from urllib.parse import urljoin

import httpx
from bs4 import BeautifulSoup

from ameblo_downloader.adapters.sources.parsers import (
    extract_date_text,
    extract_entry_references,
    extract_image_sources,
    extract_last_page_href,
    extract_title,
    parse_last_page_number,
)
from ameblo_downloader.config import SelectorsConfig
from ameblo_downloader.core import (
    BlogEntry,
    EntryDate,
    EntrySource,
    EntryState,
    NetworkError,
    ParseError,
)


class AmebloEntry(BlogEntry):
    """Entry whose page is fetched on first field access and then cached.
    
    A failed fetch leaves no document behind, so the next access retries.
    """
    
    def __init__(self, reference: str, source: "AmebloSource") -> None:
        self.reference = reference
        self.source = source
        self._state = EntryState.PENDING
        self._document: Optional[BeautifulSoup] = None
        self._title: Optional[str] = None
        self._date: Optional[EntryDate] = None
        self._images: Optional[list[str]] = None
    
    @property
    def state(self) -> EntryState:
        return self._state
    
    @property
    def url(self) -> str:
        return self.source.entry_url(self.reference)
    
    async def document(self) -> BeautifulSoup:
        """Return the parsed entry page, fetching it if needed."""
        if self._document is not None:
            return self._document
        
        self._state = EntryState.FETCHING
        try:
            document = await self.source.fetch_document(self.url)
        except (NetworkError, ParseError):
            self._state = EntryState.FAILED
            raise
        
        self._document = document
        self._state = EntryState.FETCHED
        return document
    
    async def title(self) -> str:
        if self._title is None:
            document = await self.document()
            self._title = extract_title(document, self.source.selectors.title)
        return self._title
    
    async def date(self) -> EntryDate:
        if self._date is None:
            document = await self.document()
            text = extract_date_text(
                document,
                self.source.selectors.pubdate,
                self.source.selectors.pubdate_decoration,
            )
            self._date = EntryDate.parse(text)
        return self._date
    
    async def images(self) -> list[str]:
        if self._images is None:
            document = await self.document()
            self._images = extract_image_sources(
                document,
                self.source.selectors.entry_body,
                self.source.selectors.image,
            )
        return list(self._images)
    
    def __repr__(self) -> str:
        return f"AmebloEntry({self.reference!r}, state={self._state.value})"


class AmebloSource(EntrySource):
    """Fetch listing and entry pages of one Ameba blog."""
    
    emoji = "📝"
    name = "Ameba Blog"
    
    INDEX_PATTERN = "{base}/{author}/entrylist.html"
    PAGE_PATTERN = "{base}/{author}/entrylist-{page}.html"
    
    def __init__(
        self,
        client: httpx.AsyncClient,
        base_url: str = "https://ameblo.jp",
        selectors: Optional[SelectorsConfig] = None,
        chunk_size: int = 64 * 1024,
    ) -> None:
        self.client = client
        self.base_url = base_url.rstrip("/")
        self.selectors = selectors or SelectorsConfig()
        self.chunk_size = chunk_size
    
    def index_url(self, author: str) -> str:
        return self.INDEX_PATTERN.format(base=self.base_url, author=author)
    
    def page_url(self, author: str, page: int) -> str:
        return self.PAGE_PATTERN.format(base=self.base_url, author=author, page=page)
    
    def entry_url(self, reference: str) -> str:
        """Resolve a link from the markup against the blog domain."""
        try:
            return urljoin(self.base_url + "/", reference)
        except ValueError as e:
            raise ParseError(f"Malformed URL: {e}", url=reference) from e
    
    async def fetch_document(self, url: str) -> BeautifulSoup:
        """GET a page and parse it."""
        try:
            response = await self.client.get(url)
            response.raise_for_status()
        except httpx.InvalidURL as e:
            raise ParseError(f"Malformed URL: {e}", url=url) from e
        except httpx.HTTPError as e:
            raise NetworkError(f"Failed to fetch page: {e}", url=url) from e
        
        return BeautifulSoup(response.text, "html.parser")
    
    async def count_pages(self, author: str) -> int:
        """Read the page count from the "last page" link of the index page."""
        document = await self.fetch_document(self.index_url(author))
        href = extract_last_page_href(document, self.selectors.pagination_end)
        return parse_last_page_number(href)
    
    async def list_entry_references(self, author: str) -> list[str]:
        """Walk listing pages 1..N and collect entry links."""
        num_pages = await self.count_pages(author)
        print(f"  └─ Listing pages: {num_pages}")
        
        references: list[str] = []
        for page in range(1, num_pages + 1):
            document = await self.fetch_document(self.page_url(author, page))
            page_references, missing = extract_entry_references(
                document, self.selectors.archive_item, self.selectors.entry_link
            )
            for index in missing:
                print(f"  └─ ⚠️  Page {page}: cannot find link in item {index}, skipped")
            references.extend(page_references)
        
        return references
    
    async def list_entries(self, author: str) -> list[AmebloEntry]:
        references = await self.list_entry_references(author)
        return [AmebloEntry(reference, self) for reference in references]
    
    async def iter_image_bytes(self, url: str) -> AsyncIterator[bytes]:
        """Stream one image; the response closes when iteration stops."""
        image_url = self.entry_url(url)
        try:
            async with self.client.stream("GET", image_url) as response:
                response.raise_for_status()
                async for chunk in response.aiter_bytes(self.chunk_size):
                    yield chunk
        except httpx.InvalidURL as e:
            raise ParseError(f"Malformed image URL: {e}", url=image_url) from e
        except httpx.HTTPError as e:
            raise NetworkError(f"Failed to download image: {e}", url=image_url) from e
