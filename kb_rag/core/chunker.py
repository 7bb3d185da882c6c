"""
Sentence-aware sliding-window chunker.

Splits documents into overlapping, retrievable chunks. Windows are cut at
the last sentence terminator in their second half when one exists,
otherwise at the fixed window size.

Dependencies: langchain_text_splitters, kb_rag.models
System role: First stage of the ingest path
"""

import logging
from typing import Any

from langchain_text_splitters import TextSplitter

from kb_rag.configs.chunking import ChunkingSettings
from kb_rag.models.document import Chunk, Document

logger = logging.getLogger(__name__)

SENTENCE_TERMINATORS = (". ", ".\n", "! ", "? ")


def split_into_chunks(
    text: str,
    chunk_size: int = 1000,
    overlap: int = 200,
    min_chunk_length: int = 50,
) -> list[str]:
    """
    Split text into overlapping chunks, preferring sentence boundaries.

    Args:
        text: Raw text
        chunk_size: Window size in characters
        overlap: Characters shared between consecutive windows
        min_chunk_length: Chunks whose trimmed length is at or below this are dropped

    Returns:
        list[str]: Trimmed chunks in document order

    Raises:
        ValueError: When overlap is not smaller than chunk_size
    """
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")
    if not 0 <= overlap < chunk_size:
        raise ValueError(
            f"overlap ({overlap}) must be non-negative and smaller than chunk_size ({chunk_size})"
        )

    chunks: list[str] = []
    length = len(text)
    start = 0

    while start < length:
        end = min(start + chunk_size, length)
        window = text[start:end]

        if end < length:
            boundary = max(window.rfind(terminator) for terminator in SENTENCE_TERMINATORS)
            if boundary >= chunk_size * 0.5:
                chunks.append(window[: boundary + 1].strip())
                start = max(start + boundary + 1 - overlap, start + 1)
                continue

        chunks.append(window.strip())

        next_start = end - overlap
        if next_start >= length - overlap:
            break
        start = max(next_start, start + 1)

    return [chunk for chunk in chunks if len(chunk) > min_chunk_length]


class SentenceWindowChunker(TextSplitter):
    """Split documents into overlapping chunks using sentence-aware windows."""

    def __init__(self, settings: ChunkingSettings | None = None, **kwargs: Any) -> None:
        """
        Initialize chunker with splitter configuration.

        Args:
            settings: Chunk size, overlap and noise floor (defaults 1000/200/50)
            **kwargs: Forwarded to TextSplitter (e.g. add_start_index)
        """
        settings = settings or ChunkingSettings()
        super().__init__(
            chunk_size=settings.chunk_size,
            chunk_overlap=settings.chunk_overlap,
            **kwargs,
        )
        self._min_chunk_length = settings.min_chunk_length

    def split_text(self, text: str) -> list[str]:
        """Split raw text into chunk strings."""
        return split_into_chunks(
            text,
            chunk_size=self._chunk_size,
            overlap=self._chunk_overlap,
            min_chunk_length=self._min_chunk_length,
        )

    def chunk_document(self, document: Document) -> list[Chunk]:
        """
        Chunk a document, tagging each chunk with its position.

        Args:
            document: Source document

        Returns:
            list[Chunk]: Chunks carrying parent metadata plus chunk_index/total_chunks
        """
        texts = self.split_text(document.content)
        total = len(texts)
        logger.debug(
            f"{__name__}:chunk_document - {total} chunks from {len(document.content)} chars"
        )
        return [
            Chunk(
                content=text,
                metadata={**document.metadata, "chunk_index": i, "total_chunks": total},
            )
            for i, text in enumerate(texts)
        ]
