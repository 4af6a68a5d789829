# src/cfarag/chunker.py
"""Paragraph-respecting chunker for extracted document text."""

from __future__ import annotations

import re
from collections.abc import Iterator

from cfarag.models import SourceDocument, TextChunk

DEFAULT_MAX_CHUNK_SIZE = 3000
DEFAULT_MIN_CHUNK_SIZE = 500
DEFAULT_MIN_PARAGRAPH_CHARS = 0

PARAGRAPH_SEPARATOR = "\n\n"
_PARAGRAPH_BREAK = re.compile(r"\n[ \t]*\n")


def iter_paragraphs(text: str) -> Iterator[tuple[int, int, str]]:
    """Yield ``(start, end, paragraph)`` for each non-blank paragraph.

    Paragraphs are separated by blank lines. Offsets refer to the stripped
    paragraph within ``text``.
    """
    position = 0
    for match in [*_PARAGRAPH_BREAK.finditer(text), None]:
        stop = match.start() if match else len(text)
        raw = text[position:stop]
        stripped = raw.strip()
        if stripped:
            start = position + (len(raw) - len(raw.lstrip()))
            yield start, start + len(stripped), stripped
        if match:
            position = match.end()


class ParagraphChunker:
    """Greedy single-pass packer of paragraphs into bounded chunks.

    Paragraphs are never split and chunks never overlap. A chunk only exceeds
    ``max_chunk_size`` when one paragraph alone is longer than that. Chunks
    shorter than ``min_chunk_size`` are dropped, except that a non-empty
    document which would otherwise produce nothing keeps its last buffer.

    Paragraphs of ``min_paragraph_chars`` characters or fewer (page numbers,
    running headers) are skipped before packing. A chunk span still covers
    any skipped paragraph that sat between two kept ones.
    """

    def __init__(
        self,
        max_chunk_size: int = DEFAULT_MAX_CHUNK_SIZE,
        min_chunk_size: int = DEFAULT_MIN_CHUNK_SIZE,
        min_paragraph_chars: int = DEFAULT_MIN_PARAGRAPH_CHARS,
    ) -> None:
        """Initialize the chunker.

        Args:
            max_chunk_size: Soft cap on characters per chunk
            min_chunk_size: Floor below which packed chunks are discarded
            min_paragraph_chars: Paragraphs this long or shorter are skipped

        Raises:
            ValueError: If min_chunk_size > max_chunk_size or sizes are not positive
        """
        if max_chunk_size <= 0 or min_chunk_size < 0 or min_paragraph_chars < 0:
            raise ValueError("Chunk sizes must be positive")
        if min_chunk_size > max_chunk_size:
            raise ValueError(
                f"min_chunk_size ({min_chunk_size}) must not exceed "
                f"max_chunk_size ({max_chunk_size})"
            )
        self.max_chunk_size = max_chunk_size
        self.min_chunk_size = min_chunk_size
        self.min_paragraph_chars = min_paragraph_chars

    def chunk(self, text: str) -> list[str]:
        """Split text into chunk strings."""
        return [content for _, _, content in self._pack(text)]

    def chunk_document(self, document: SourceDocument) -> list[TextChunk]:
        """Split a source document into TextChunks with ordinal and span."""
        return [
            TextChunk(
                content=content,
                source=document.file_name,
                topic=document.topic,
                ordinal=ordinal,
                start=start,
                end=end,
            )
            for ordinal, (start, end, content) in enumerate(self._pack(document.text))
        ]

    def _pack(self, text: str) -> list[tuple[int, int, str]]:
        packed: list[tuple[int, int, str]] = []
        buffer: list[str] = []
        buffer_len = 0
        span_start = span_end = 0

        def flush() -> None:
            if buffer and buffer_len >= self.min_chunk_size:
                packed.append((span_start, span_end, PARAGRAPH_SEPARATOR.join(buffer)))

        for start, end, paragraph in iter_paragraphs(text):
            if len(paragraph) <= self.min_paragraph_chars:
                continue
            added = len(paragraph) + (len(PARAGRAPH_SEPARATOR) if buffer else 0)
            if buffer and buffer_len + added > self.max_chunk_size:
                flush()
                buffer, buffer_len = [], 0
                added = len(paragraph)
            if not buffer:
                span_start = start
            buffer.append(paragraph)
            buffer_len += added
            span_end = end

        flush()
        if not packed and buffer:
            packed.append((span_start, span_end, PARAGRAPH_SEPARATOR.join(buffer)))
        return packed


def chunk(
    text: str,
    max_chunk_size: int = DEFAULT_MAX_CHUNK_SIZE,
    min_chunk_size: int = DEFAULT_MIN_CHUNK_SIZE,
    min_paragraph_chars: int = DEFAULT_MIN_PARAGRAPH_CHARS,
) -> list[str]:
    """Split text into paragraph-aligned chunks. See ParagraphChunker."""
    return ParagraphChunker(max_chunk_size, min_chunk_size, min_paragraph_chars).chunk(text)
