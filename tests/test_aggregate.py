import pytest

from apple_books_highlights.aggregate import group_by_book, join_catalog, parse_catalog
from apple_books_highlights.errors import RowFormatError
from apple_books_highlights.models import CatalogEntry, Highlight


def test_group_by_book_preserves_row_order() -> None:
    rows = [
        ["B1", "A1", "Great quote"],
        ["B2", "A2", "Other book"],
        ["B1", "A3", "Another line"],
    ]

    grouped = group_by_book(rows)

    assert list(grouped) == ["B1", "B2"]
    assert grouped["B1"] == [
        Highlight(annotation_id="A1", selected_text="Great quote"),
        Highlight(annotation_id="A3", selected_text="Another line"),
    ]
    assert grouped["B2"] == [Highlight(annotation_id="A2", selected_text="Other book")]


def test_group_by_book_rejects_short_rows() -> None:
    with pytest.raises(RowFormatError):
        group_by_book([["B1", "A1"]])


def test_join_drops_books_missing_from_catalog() -> None:
    annotations = group_by_book([["B1", "A1", "Kept"], ["B2", "A2", "Dropped"]])
    catalog = parse_catalog([["B1", "Jane Doe", "My Book"]])

    books = join_catalog(annotations, catalog)

    assert [book.book_id for book in books] == ["B1"]
    assert books[0].author_name == "Jane Doe"
    assert books[0].book_title == "My Book"
    assert [h.selected_text for h in books[0].highlights] == ["Kept"]


def test_join_skips_catalog_rows_without_highlights() -> None:
    annotations = group_by_book([["B1", "A1", "Quote"]])
    catalog = [
        CatalogEntry(book_id="B9", author_name="Nobody", book_title="Unread"),
        CatalogEntry(book_id="B1", author_name="Jane Doe", book_title="My Book"),
    ]

    books = join_catalog(annotations, catalog)

    assert [book.book_id for book in books] == ["B1"]


def test_join_follows_catalog_order_and_size_bound() -> None:
    annotations = group_by_book(
        [["B1", "A1", "one"], ["B2", "A2", "two"], ["B3", "A3", "three"]]
    )
    catalog = parse_catalog([["B3", "C", "Third"], ["B1", "A", "First"]])

    books = join_catalog(annotations, catalog)

    assert [book.book_id for book in books] == ["B3", "B1"]
    assert len(books) <= min(len(annotations), len(catalog))


def test_join_keeps_first_position_for_repeated_catalog_rows() -> None:
    annotations = group_by_book([["B1", "A1", "one"], ["B2", "A2", "two"]])
    catalog = parse_catalog(
        [["B1", "Old", "Old Title"], ["B2", "B", "Second"], ["B1", "New", "New Title"]]
    )

    books = join_catalog(annotations, catalog)

    assert [(book.book_id, book.book_title) for book in books] == [
        ("B1", "New Title"),
        ("B2", "Second"),
    ]
