"""CLI entry point for ameblo downloader."""

import asyncio
from pathlib import Path
from typing import Optional

import httpx
import typer

from ameblo_downloader.adapters.sources import AmebloSource
from ameblo_downloader.adapters.storage import ImageStore
from ameblo_downloader.config import Settings, get_settings
from ameblo_downloader.core import DownloaderError, DownloadReport, ErrorPolicy
from ameblo_downloader.use_cases import ImageDownloadService


def main(
    author: str = typer.Argument(..., help="Blog author (the path segment after the domain)"),
    config: Path = typer.Option(Path("config.yaml"), "--config", help="YAML settings file"),
    output_dir: Optional[Path] = typer.Option(None, "--output-dir", help="Root directory for images"),
    on_error: Optional[ErrorPolicy] = typer.Option(
        None, "--on-error", help="abort or skip when saving an image fails"
    ),
) -> None:
    """Download all images of an Ameba blog author."""
    author = author.strip()
    if not author or "/" in author:
        raise typer.BadParameter("author must be a single path segment", param_hint="AUTHOR")
    
    try:
        settings = get_settings(config)
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--config") from e
    if output_dir is not None:
        settings.paths.output_dir = output_dir
    if on_error is not None:
        settings.download.on_error = on_error
    
    try:
        asyncio.run(async_run(author, settings))
    except DownloaderError as e:
        print(f"\n❌ Fatal: {e}")
        raise typer.Exit(code=1)


def app() -> None:
    """CLI entry point."""
    typer.run(main)


async def async_run(author: str, settings: Settings) -> DownloadReport:
    """Async implementation of the download run."""
    outdir = (settings.output_dir / author).resolve()
    
    print("\n" + "=" * 70)
    print("📷  AMEBLO DOWNLOADER")
    print("=" * 70)
    print(f"\n⚙️  Settings:")
    print(f"  • Blog: {settings.base_url}/{author}")
    print(f"  • Output: {outdir}")
    print(f"  • On error: {settings.on_error.value}")
    
    async with httpx.AsyncClient(
        timeout=settings.http.timeout,
        follow_redirects=True,
        headers={"User-Agent": settings.http.user_agent},
    ) as client:
        source = AmebloSource(
            client,
            base_url=settings.base_url,
            selectors=settings.selectors,
            chunk_size=settings.download.chunk_size,
        )
        store = ImageStore(outdir, dir_mode=settings.download.dir_mode)
        service = ImageDownloadService(source, store, on_error=settings.on_error)
        return await service.run(author)


if __name__ == "__main__":
    app()
