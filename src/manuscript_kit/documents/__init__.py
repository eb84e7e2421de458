from .base import DocumentProvider
from .models import ChapterInfo, DocumentInfo, MarkRequest, Paragraph, count_words
from .outline import (
    build_document_info,
    join_paragraphs,
    paragraphs_from_text,
    split_at_headings,
)
from .text_document import MarkedRange, TextDocument

__all__ = [
    "ChapterInfo",
    "DocumentInfo",
    "DocumentProvider",
    "MarkRequest",
    "MarkedRange",
    "Paragraph",
    "TextDocument",
    "build_document_info",
    "count_words",
    "join_paragraphs",
    "paragraphs_from_text",
    "split_at_headings",
]
