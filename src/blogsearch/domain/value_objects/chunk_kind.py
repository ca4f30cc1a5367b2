"""Chunk kind - body text or dedicated title chunk."""

from enum import StrEnum


class ChunkKind(StrEnum):
    """Kinds of chunks produced by the title-aware chunker."""

    BODY = "body"
    TITLE = "title"
