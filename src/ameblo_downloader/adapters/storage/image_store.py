"""Filesystem layout for downloaded images.

Existence on disk is the only record of past work: directories and files
that already exist are reported and left untouched.
"""

from pathlib import Path
from typing import AsyncIterable

from ameblo_downloader.core import EntryDate, FilesystemError


class ImageStore:
    """Lay out images as ``<root>/<year>/<month>/<stamp>/<stamp>_<index>.jpg``."""
    
    def __init__(self, root: Path, dir_mode: int = 0o755) -> None:
        self.root = root
        self.dir_mode = dir_mode
    
    def ensure_dir(self, path: Path) -> bool:
        """Create a single directory level.
        
        Returns:
            True if the directory was created, False if it already existed
        """
        if path.is_dir():
            print(f"  └─ Directory {path} exists")
            return False
        
        try:
            path.mkdir(mode=self.dir_mode)
        except FileExistsError:
            # Created by someone else in the meantime
            if path.is_dir():
                print(f"  └─ Directory {path} exists")
                return False
            raise FilesystemError("Path exists and is not a directory", url=str(path))
        except OSError as e:
            raise FilesystemError(f"Cannot create directory: {e}", url=str(path)) from e
        return True
    
    def ensure_author_dir(self) -> Path:
        """Create the output root (and any missing parents)."""
        if self.root.is_dir():
            print(f"  └─ Directory {self.root} exists")
            return self.root
        
        try:
            self.root.mkdir(mode=self.dir_mode, parents=True, exist_ok=True)
        except OSError as e:
            raise FilesystemError(f"Cannot create directory: {e}", url=str(self.root)) from e
        return self.root
    
    def entry_dir(self, date: EntryDate) -> Path:
        return self.root / date.year / date.month / date.stamp
    
    def ensure_entry_dir(self, date: EntryDate) -> Path:
        """Create the year, month and entry directories in turn."""
        year_dir = self.root / date.year
        month_dir = year_dir / date.month
        entry_dir = month_dir / date.stamp
        for path in (year_dir, month_dir, entry_dir):
            self.ensure_dir(path)
        return entry_dir
    
    def image_path(self, date: EntryDate, index: int) -> Path:
        return self.entry_dir(date) / f"{date.stamp}_{index}.jpg"
    
    def exists(self, path: Path) -> bool:
        return path.exists()
    
    async def write_stream(self, path: Path, chunks: AsyncIterable[bytes]) -> int:
        """Write a byte stream to ``path`` via a ``.part`` file.
        
        The final name only appears once the stream has been fully written,
        so an interrupted download is retried on the next run.
        
        Returns:
            Number of bytes written
        """
        partial = path.with_name(path.name + ".part")
        written = 0
        try:
            with open(partial, "wb") as f:
                async for chunk in chunks:
                    f.write(chunk)
                    written += len(chunk)
            partial.replace(path)
        except OSError as e:
            partial.unlink(missing_ok=True)
            raise FilesystemError(f"Cannot write file: {e}", url=str(path)) from e
        except BaseException:
            partial.unlink(missing_ok=True)
            raise
        return written
