"""Storage adapters."""

from ameblo_downloader.adapters.storage.image_store import ImageStore

__all__ = ["ImageStore"]
