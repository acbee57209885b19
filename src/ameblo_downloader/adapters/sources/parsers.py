"""Markup extraction helpers for Ameba blog pages.

Every helper takes the CSS selector it needs so selectors stay in one
place (the settings) and the helpers stay easy to test against fixtures.
"""

from urllib.parse import urlparse

from bs4 import BeautifulSoup

from ameblo_downloader.core.errors import NotFoundError, ParseError


def extract_last_page_href(soup: BeautifulSoup, selector: str) -> str:
    """Return the link target of the "last page" pagination control."""
    page_end = soup.select_one(selector)
    if page_end is None:
        raise NotFoundError("Cannot find the last page link", context={"selector": selector})
    
    href = page_end.get("href")
    if not href:
        raise NotFoundError("Cannot find href in the last page link", context={"selector": selector})
    return href


def parse_last_page_number(href: str) -> int:
    """
    Parse the page number out of a listing link like ``/author/entrylist-12.html``.
    
    Only the last path segment is split, so hyphens in the author name do
    not break the split.
    
    Raises:
        ParseError: if the segment is not ``<name>-<number>.html``
    """
    segment = urlparse(href).path.rstrip("/").rsplit("/", 1)[-1]
    parts = segment.split("-")
    if len(parts) != 2:
        raise ParseError("Cannot split the last page link", url=href)
    
    token = parts[1].removesuffix(".html")
    try:
        return int(token)
    except ValueError as e:
        raise ParseError(f"Page number is not numeric: {token!r}", url=href) from e


def extract_entry_references(
    soup: BeautifulSoup, item_selector: str, link_selector: str
) -> tuple[list[str], list[int]]:
    """Collect entry links from one listing page.
    
    Returns:
        Tuple of (references in document order, indices of items without a link)
    """
    references: list[str] = []
    missing: list[int] = []
    
    for index, item in enumerate(soup.select(item_selector)):
        link = item.select_one(link_selector)
        href = link.get("href") if link is not None else None
        if not href:
            missing.append(index)
            continue
        references.append(href)
    
    return references, missing


def extract_title(soup: BeautifulSoup, selector: str) -> str:
    """Text of the first title element, empty when there is none."""
    element = soup.select_one(selector)
    if element is None:
        return ""
    return element.get_text()


def extract_date_text(soup: BeautifulSoup, selector: str, decoration_selector: str) -> str:
    """Text of the publish date element with decorative children removed."""
    element = soup.select_one(selector)
    if element is None:
        raise NotFoundError("Cannot find the publish date", context={"selector": selector})
    
    for decoration in element.select(decoration_selector):
        decoration.decompose()
    return element.get_text()


def extract_image_sources(soup: BeautifulSoup, body_selector: str, image_selector: str) -> list[str]:
    """Image ``src`` values inside the entry body.
    
    Placeholder embeds pointing at ``file`` URLs are dropped.
    """
    body = soup.select_one(body_selector)
    if body is None:
        return []
    
    images: list[str] = []
    for image in body.select(image_selector):
        src = image.get("src")
        if not src or src.startswith("file"):
            continue
        images.append(src)
    return images
