"""Data models for Apple Books highlight synchronization."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class Highlight:
    """A single highlighted passage read from the annotation store."""

    annotation_id: str
    selected_text: str


@dataclass(frozen=True)
class CatalogEntry:
    """Title and author of a book in the library store."""

    book_id: str
    author_name: str
    book_title: str


@dataclass
class SyncedBook:
    """A catalog entry joined with the highlights recorded against it."""

    book_id: str
    author_name: str
    book_title: str
    highlights: List[Highlight] = field(default_factory=list)


@dataclass(frozen=True)
class Document:
    """A rendered Markdown note, named after the book it belongs to."""

    name: str
    content: str
