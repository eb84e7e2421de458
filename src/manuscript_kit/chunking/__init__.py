from .chunking import (
    MAX_WORDS_PER_CHUNK,
    OVERLAP_WORDS,
    Chunk,
    ChunkedDocument,
    MetaContext,
    chunk_document,
)

__all__ = [
    "MAX_WORDS_PER_CHUNK",
    "OVERLAP_WORDS",
    "Chunk",
    "ChunkedDocument",
    "MetaContext",
    "chunk_document",
]
