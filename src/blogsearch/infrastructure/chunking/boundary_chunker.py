"""Boundary-aware sliding window chunker."""

import re
from dataclasses import replace

from blogsearch.application.dto.chunking_config import ChunkingConfig
from blogsearch.domain.value_objects import ChunkKind, TextSpan

TITLE_SEPARATOR = "\n\n"

# Share of the window, counted back from its end, searched for a break point.
_BOUNDARY_WINDOW = 0.2
_SENTENCE_END = re.compile(r"[.!?]\s+")
_WHITESPACE = re.compile(r"\s+")


class BoundaryChunker:
    """Chunker that prefers sentence ends, then word breaks, then hard cuts."""

    def chunk(self, text: str, config: ChunkingConfig) -> list[TextSpan]:
        """Split text into overlapping spans of at most ``chunk_size`` characters."""
        if not text or not isinstance(text, str):
            return []

        chunk_size = config.chunk_size
        length = len(text)
        if length <= chunk_size:
            stripped = text.strip()
            return [TextSpan(stripped, 0, length, 0)] if stripped else []

        spans: list[TextSpan] = []
        start = 0
        while start < length:
            end = min(start + chunk_size, length)
            if end < length:
                end = self._find_cut(text, start, end, chunk_size)

            piece = text[start:end].strip()
            if piece:
                spans.append(TextSpan(piece, start, end, len(spans)))

            if end >= length:
                break
            start = max(start + 1, end - config.chunk_overlap)
        return spans

    def chunk_document(
        self, title: str, body: str, config: ChunkingConfig
    ) -> list[TextSpan]:
        """Chunk ``title + "\\n\\n" + body`` and make sure the title lands in the first chunk.

        If the first chunk lost the title it is prepended when that still fits
        in ``chunk_size``; otherwise a dedicated title chunk is inserted at
        position 0 and the body chunks are renumbered after it.
        """
        spans = self.chunk(f"{title}{TITLE_SEPARATOR}{body}", config)
        if not spans or title in spans[0].text:
            return spans

        first = spans[0]
        prefixed = f"{title}{TITLE_SEPARATOR}{first.text}"
        if len(prefixed) <= config.chunk_size:
            return [replace(first, text=prefixed), *spans[1:]]

        title_span = TextSpan(title, 0, len(title), 0, ChunkKind.TITLE)
        return [
            title_span,
            *(replace(span, chunk_index=i) for i, span in enumerate(spans, start=1)),
        ]

    @staticmethod
    def _find_cut(text: str, start: int, end: int, chunk_size: int) -> int:
        """Pick the cut offset for the window ``[start, end)``."""
        search_start = max(start, int(end - chunk_size * _BOUNDARY_WINDOW))

        sentence_end = _last_match_before(_SENTENCE_END, text, search_start, end)
        if sentence_end is not None:
            return sentence_end.end()

        word_break = _last_match_before(_WHITESPACE, text, search_start, end)
        if word_break is not None:
            return word_break.start()

        return end


def _last_match_before(
    pattern: re.Pattern[str], text: str, pos: int, end: int
) -> re.Match[str] | None:
    """Last match of *pattern* scanning from *pos* that starts before *end*."""
    last = None
    for match in pattern.finditer(text, pos):
        if match.start() >= end:
            break
        last = match
    return last
