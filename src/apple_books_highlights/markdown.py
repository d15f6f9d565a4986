"""Markdown rendering for Apple Books highlights."""
from __future__ import annotations

import re
from typing import List, Sequence

from .models import Document, Highlight, SyncedBook

# Path separators, characters Windows rejects and characters that break Obsidian wikilinks.
ILLEGAL_FILENAME_CHARS = re.compile(r'[\\/:*?"<>|#^\[\]\x00-\x1f]+')
HIGHLIGHT_SEPARATOR = "\n\n---\n"
APPLE_BOOKS_LINK = "ibooks://assetid/{book_id}"


def sanitise_filename(value: str) -> str:
    """Return a filesystem-safe filename derived from ``value``."""

    safe = ILLEGAL_FILENAME_CHARS.sub(" ", value)
    safe = re.sub(r"\s+", " ", safe).strip()
    # A leading dot would hide the note from Obsidian.
    safe = safe.lstrip(".").strip()
    return safe or "untitled"


def book_link(book_id: str) -> str:
    return APPLE_BOOKS_LINK.format(book_id=book_id)


def render_highlights(highlights: Sequence[Highlight]) -> str:
    return HIGHLIGHT_SEPARATOR.join(highlight.selected_text for highlight in highlights)


def render_book_document(book: SyncedBook) -> str:
    lines: List[str] = [
        "## Metadata",
        f"- Author: {book.author_name}",
        f"- [Apple Books Link]({book_link(book.book_id)})",
        "",
        "## Highlights",
    ]
    return "\n".join(lines) + "\n" + render_highlights(book.highlights)


def render_documents(books: Sequence[SyncedBook]) -> List[Document]:
    """Render one document per book, named after the book title."""

    return [
        Document(name=f"{sanitise_filename(book.book_title)}.md", content=render_book_document(book))
        for book in books
    ]
