"""Strategies for publishing rendered highlight notes into the vault."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Sequence, Set

from .models import Document
from .vault import Vault

logger = logging.getLogger(__name__)


class DocumentPublisher:
    """Base class for publishing a complete set of documents."""

    def publish(self, documents: Sequence[Document]) -> List[Path]:
        raise NotImplementedError


class FolderReplacePublisher(DocumentPublisher):
    """Replaces the destination folder with exactly ``documents``.

    Anything already inside the folder is deleted first, including files that
    were not written by a previous sync. Documents are then created one by one
    with no rollback, so a failure part way leaves the folder partially filled.
    """

    def __init__(self, vault: Vault, folder: str) -> None:
        self.vault = vault
        self.folder = folder.strip().strip("/")

    def document_path(self, document: Document) -> str:
        return f"{self.folder}/{document.name}"

    def publish(self, documents: Sequence[Document]) -> List[Path]:
        # Validates the folder before anything is deleted.
        self.vault.resolve(self.folder)

        if self.vault.get_abstract_file(self.folder) is not None:
            self.vault.delete(self.folder, recursive=True)
        self.vault.create_folder(self.folder)

        written: List[Path] = []
        seen: Set[str] = set()
        for document in documents:
            if document.name in seen:
                logger.warning("Overwriting %s: another book has the same title", document.name)
            seen.add(document.name)
            path = self.vault.create(self.document_path(document), document.content)
            if path not in written:
                written.append(path)
        return written


class DryRunPublisher(FolderReplacePublisher):
    """Reports where documents would be written without touching the vault."""

    def publish(self, documents: Sequence[Document]) -> List[Path]:
        self.vault.resolve(self.folder)
        planned: List[Path] = []
        for document in documents:
            path = self.vault.resolve(self.document_path(document))
            if path not in planned:
                planned.append(path)
        return planned
