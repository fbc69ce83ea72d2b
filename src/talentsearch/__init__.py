"""Candidate search query engine and saved-search store."""

__version__ = "0.1.0"
