"""Locate the Apple Books annotation and library databases."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from .errors import SourceNotFoundError

logger = logging.getLogger(__name__)

DATABASE_SUFFIX = ".sqlite"


@dataclass(frozen=True)
class SourceDatabases:
    """Paths of the two databases a sync reads from."""

    annotation_db: Path
    library_db: Path


def _list_directory(directory: Path) -> List[str]:
    try:
        return os.listdir(directory.expanduser())
    except OSError as exc:
        logger.debug("Cannot list %s: %s", directory, exc)
        return []


def find_database(directory: Path, suffix: str = DATABASE_SUFFIX) -> Optional[Path]:
    """Return the first entry of ``directory`` ending in ``suffix``.

    Entries are checked in the order the operating system lists them. An
    unreadable or missing directory is treated as empty.
    """

    for name in _list_directory(directory):
        if name.endswith(suffix):
            return directory.expanduser() / name
    return None


def locate_sources(annotation_dir: Path, library_dir: Path) -> SourceDatabases:
    """Resolve both databases or raise :class:`SourceNotFoundError`."""

    annotation_db = find_database(annotation_dir)
    if annotation_db is None:
        raise SourceNotFoundError("Annotation")

    library_db = find_database(library_dir)
    if library_db is None:
        raise SourceNotFoundError("Books")

    logger.debug("Using annotation database %s", annotation_db)
    logger.debug("Using library database %s", library_db)
    return SourceDatabases(annotation_db=annotation_db, library_db=library_db)
