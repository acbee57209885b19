"""Download images from an Ameba blog into a date-organized directory tree."""

__version__ = "0.1.0"
