"""Group highlights by book and join them with library metadata."""
from __future__ import annotations

from typing import Dict, Iterable, List, Sequence

from .errors import RowFormatError
from .models import CatalogEntry, Highlight, SyncedBook

BookAnnotations = Dict[str, List[Highlight]]


def _require_fields(row: Sequence[str], count: int, kind: str) -> None:
    if len(row) < count:
        raise RowFormatError(f"Expected {count} fields in {kind} row, got {len(row)}: {list(row)!r}")


def group_by_book(rows: Iterable[Sequence[str]]) -> BookAnnotations:
    """Collect ``(book_id, annotation_id, selected_text)`` rows per book.

    Books appear in the order of their first highlight and highlights keep the
    order of the rows.
    """

    grouped: BookAnnotations = {}
    for row in rows:
        _require_fields(row, 3, "annotation")
        book_id, annotation_id, selected_text = row[0], row[1], row[2]
        grouped.setdefault(book_id, []).append(
            Highlight(annotation_id=annotation_id, selected_text=selected_text)
        )
    return grouped


def parse_catalog(rows: Iterable[Sequence[str]]) -> List[CatalogEntry]:
    entries: List[CatalogEntry] = []
    for row in rows:
        _require_fields(row, 3, "catalog")
        entries.append(CatalogEntry(book_id=row[0], author_name=row[1], book_title=row[2]))
    return entries


def join_catalog(annotations: BookAnnotations, catalog: Iterable[CatalogEntry]) -> List[SyncedBook]:
    """Attach catalog metadata to grouped highlights.

    Only books present in both inputs are returned, in catalog order. Books
    that were removed from the library are ignored. A book listed twice keeps
    its first position and the metadata of its last entry.
    """

    joined: Dict[str, SyncedBook] = {}
    for entry in catalog:
        highlights = annotations.get(entry.book_id)
        if highlights is None:
            continue
        joined[entry.book_id] = SyncedBook(
            book_id=entry.book_id,
            author_name=entry.author_name,
            book_title=entry.book_title,
            highlights=highlights,
        )
    return list(joined.values())
