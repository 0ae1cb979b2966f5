"""Data models for docpager."""

from .documents import DocumentPage, serialize_document, identifier_to_str

__all__ = [
    "DocumentPage",
    "serialize_document",
    "identifier_to_str"
]
