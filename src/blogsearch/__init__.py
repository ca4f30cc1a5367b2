"""Semantic search over chunked long-form documents."""

__version__ = "0.1.0"
