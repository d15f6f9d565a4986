"""The sync pipeline: locate, query, join, render and publish."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .aggregate import group_by_book, join_catalog, parse_catalog
from .config import SyncConfig
from .decoders import get_decoder
from .locator import locate_sources
from .markdown import render_documents
from .models import Document, SyncedBook
from .query import ANNOTATION_QUERY, QueryExecutor, build_catalog_query
from .storage import DocumentPublisher, FolderReplacePublisher
from .vault import Vault

logger = logging.getLogger(__name__)

SUCCESS_NOTICE = "Successfully finished Apple Books Highlight Sync"


@dataclass
class SyncResult:
    """Outcome of a completed sync."""

    books: List[SyncedBook] = field(default_factory=list)
    documents: List[Document] = field(default_factory=list)
    written: List[Path] = field(default_factory=list)

    @property
    def highlight_count(self) -> int:
        return sum(len(book.highlights) for book in self.books)


def collect_books(config: SyncConfig, executor: QueryExecutor) -> List[SyncedBook]:
    """Read both databases and return the joined books.

    Nothing in the vault is touched here, so any failure leaves it intact.
    """

    sources = locate_sources(config.annotation_db_dir, config.library_db_dir)

    annotations = group_by_book(executor.fetch_rows(sources.annotation_db, ANNOTATION_QUERY))
    logger.info(
        "Found %d highlight(s) across %d book(s)",
        sum(len(items) for items in annotations.values()),
        len(annotations),
    )
    if not annotations:
        return []

    catalog_rows = executor.fetch_rows(sources.library_db, build_catalog_query(annotations.keys()))
    books = join_catalog(annotations, parse_catalog(catalog_rows))
    skipped = len(annotations.keys() - {book.book_id for book in books})
    if skipped:
        logger.info("Ignoring highlights for %d book(s) no longer in the library", skipped)
    return books


def build_executor(config: SyncConfig) -> QueryExecutor:
    return QueryExecutor(get_decoder(config.output_format), binary=config.sqlite_binary)


def sync_highlights(
    config: SyncConfig,
    *,
    executor: Optional[QueryExecutor] = None,
    publisher: Optional[DocumentPublisher] = None,
) -> SyncResult:
    """Run a full-replace sync and return what was written."""

    executor = executor or build_executor(config)
    publisher = publisher or FolderReplacePublisher(Vault(config.vault_root), config.highlights_folder)

    books = collect_books(config, executor)
    documents = render_documents(books)
    written = publisher.publish(documents)
    return SyncResult(books=books, documents=documents, written=written)
