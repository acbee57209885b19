"""Business logic use cases."""

from contextlib import aclosing
from pathlib import Path

from ameblo_downloader.adapters.storage import ImageStore
from ameblo_downloader.core import (
    BlogEntry,
    DownloaderError,
    DownloadReport,
    EntryDate,
    EntrySource,
    ErrorPolicy,
    FilesystemError,
)


class ImageDownloadService:
    """Walk an author's entries and save every embedded image."""
    
    def __init__(
        self,
        source: EntrySource,
        store: ImageStore,
        on_error: ErrorPolicy = ErrorPolicy.ABORT,
    ) -> None:
        self.source = source
        self.store = store
        self.on_error = on_error
    
    async def run(self, author: str) -> DownloadReport:
        """Download all images of the author.
        
        Pagination and enumeration errors always propagate. Errors while
        reading an entry skip that entry. Filesystem and image download
        errors propagate under ``ErrorPolicy.ABORT`` and are counted and
        skipped under ``ErrorPolicy.SKIP``.
        """
        report = DownloadReport(output_dir=self.store.root)
        
        print("\n" + "=" * 70)
        print(f"📥 COLLECTING ENTRIES: {author}")
        print("=" * 70)
        
        entries = await self.source.list_entries(author)
        report.entries_found = len(entries)
        print(f"✓ {len(entries)} entries found.")
        
        self.store.ensure_author_dir()
        
        print("\n" + "=" * 70)
        print("💾 DOWNLOADING IMAGES")
        print("=" * 70)
        
        for i, entry in enumerate(entries, 1):
            try:
                images = await entry.images()
                title = await entry.title()
                date = await entry.date()
            except DownloaderError as e:
                print(f"\n  [{i}/{len(entries)}] ⚠️  Skipping {entry.reference}: {e}")
                report.entries_skipped += 1
                continue
            
            print(f"\n  [{i}/{len(entries)}] {title.strip()[:70]}")
            print(f"  └─ URL: {entry.reference}, Date: {date}, Images: {len(images)}")
            
            try:
                self.store.ensure_entry_dir(date)
            except FilesystemError as e:
                self._handle_failure(e)
                print(f"  └─ ⚠️  Skipping entry: {e}")
                report.entries_skipped += 1
                continue
            
            await self._save_images(date, images, report)
        
        self._print_summary(report)
        return report
    
    async def _save_images(self, date: EntryDate, images: list[str], report: DownloadReport) -> None:
        for index, image in enumerate(images):
            target = self.store.image_path(date, index)
            
            if self.store.exists(target):
                print(f"  └─ File {target} exists")
                report.images_existing += 1
                continue
            
            try:
                await self._download(image, target)
            except DownloaderError as e:
                self._handle_failure(e)
                print(f"  └─ ⚠️  Failed {image}: {e}")
                report.images_failed += 1
                continue
            
            report.images_downloaded += 1
            print(f"  └─ ✓ {target.name}")
    
    async def _download(self, url: str, target: Path) -> None:
        async with aclosing(self.source.iter_image_bytes(url)) as chunks:
            await self.store.write_stream(target, chunks)
    
    def _handle_failure(self, error: DownloaderError) -> None:
        """Re-raise the error unless the policy is to skip."""
        if self.on_error is ErrorPolicy.ABORT:
            raise error
    
    def _print_summary(self, report: DownloadReport) -> None:
        print("\n" + "=" * 70)
        print("✅ DONE")
        print("=" * 70)
        print(f"  • Entries: {report.entries_found} (skipped {report.entries_skipped})")
        print(f"  • Downloaded: {report.images_downloaded}")
        print(f"  • Already present: {report.images_existing}")
        if report.images_failed:
            print(f"  • Failed: {report.images_failed}")
        print(f"  • Output: {report.output_dir}")
