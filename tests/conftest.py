"""Shared fixtures: a fake Ameba blog served through httpx.MockTransport."""

from typing import Optional

import httpx
import pytest

BASE_URL = "https://ameblo.jp"


def index_page(author: str, last_page: int) -> str:
    return f"""<html><body>
<ul class="skin-paginationNums">
  <li><a class="skin-paginationStart" href="/{author}/entrylist-1.html">1</a></li>
  <li><a class="skin-paginationEnd" href="/{author}/entrylist-{last_page}.html">last</a></li>
</ul>
</body></html>"""


def listing_page(*references: Optional[str]) -> str:
    items = []
    for reference in references:
        if reference is None:
            items.append('<li class="skin-borderQuiet"><h2>no link</h2></li>')
        else:
            items.append(f'<li class="skin-borderQuiet"><h2><a href="{reference}">entry</a></h2></li>')
    return f'<html><body><ul class="skin-archiveList">{"".join(items)}</ul></body></html>'


def entry_page(title: str, date: str, images: list[str]) -> str:
    imgs = "".join(f'<img src="{src}">' for src in images)
    return f"""<html><body>
<article class="skin-entry">
  <h1 class="skin-entryTitle">{title}</h1>
  <p class="skin-entryPubdate"><time datetime="x">{date}<span class="skin-textQuiet">NEW!</span></time></p>
  <div class="skin-entryBody"><p>text</p>{imgs}</div>
</article>
</body></html>"""


class FakeBlog:
    """Serve canned responses by URL and record every request."""
    
    def __init__(self) -> None:
        self.responses: dict[str, tuple[int, bytes]] = {}
        self.requests: list[str] = []
    
    def add(self, url: str, body, status: int = 200) -> None:
        if isinstance(body, str):
            body = body.encode("utf-8")
        self.responses[url] = (status, body)
    
    def handler(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        self.requests.append(url)
        if url not in self.responses:
            return httpx.Response(404, content=b"not found")
        status, body = self.responses[url]
        return httpx.Response(status, content=body)
    
    def count(self, url: str) -> int:
        return self.requests.count(url)
    
    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


@pytest.fixture
def blog() -> FakeBlog:
    return FakeBlog()


@pytest.fixture
def two_entry_blog(blog: FakeBlog) -> FakeBlog:
    """Author with one listing page, two entries, one image each."""
    blog.add(f"{BASE_URL}/author/entrylist.html", index_page("author", 1))
    blog.add(
        f"{BASE_URL}/author/entrylist-1.html",
        listing_page("/author/entry-1.html", "/author/entry-2.html"),
    )
    blog.add(
        f"{BASE_URL}/author/entry-1.html",
        entry_page("First", "2020-05-11 12:34:56", ["https://stat.ameba.jp/a.jpg"]),
    )
    blog.add(
        f"{BASE_URL}/author/entry-2.html",
        entry_page("Second", "2021-01-02 03:04:05", ["file://dummy.png", "https://stat.ameba.jp/b.jpg"]),
    )
    blog.add("https://stat.ameba.jp/a.jpg", b"\xff\xd8image-a")
    blog.add("https://stat.ameba.jp/b.jpg", b"\xff\xd8image-b")
    return blog
