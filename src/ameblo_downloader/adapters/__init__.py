"""Adapters for the blog platform and the local filesystem."""
