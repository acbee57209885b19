"""Source adapters for the blog platform."""

from ameblo_downloader.adapters.sources.ameblo_source import AmebloEntry, AmebloSource

__all__ = ["AmebloEntry", "AmebloSource"]
