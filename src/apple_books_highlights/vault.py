"""Minimal file operations on an Obsidian vault stored on the local disk."""
from __future__ import annotations

import logging
import shutil
from pathlib import Path, PurePosixPath
from typing import Optional

from .errors import VaultError

logger = logging.getLogger(__name__)


class Vault:
    """Resolves vault-relative paths and performs file operations on them.

    Paths use ``/`` separators as in Obsidian, e.g. ``"Books/Apple Books"``.
    Every operation is confined to the vault root.
    """

    def __init__(self, root: Path) -> None:
        self.root = root.expanduser().resolve()

    def resolve(self, path: str) -> Path:
        relative = PurePosixPath(path.strip().strip("/"))
        if not relative.parts or ".." in relative.parts:
            raise VaultError(f"Invalid vault path: {path!r}")
        resolved = (self.root / Path(*relative.parts)).resolve()
        if resolved == self.root or self.root not in resolved.parents:
            raise VaultError(f"Path {path!r} is outside the vault {self.root}")
        return resolved

    def get_abstract_file(self, path: str) -> Optional[Path]:
        """Return the on-disk path of ``path`` if a file or folder exists there."""

        resolved = self.resolve(path)
        if resolved.exists() or resolved.is_symlink():
            return resolved
        return None

    def delete(self, path: str, recursive: bool = False) -> None:
        target = self.get_abstract_file(path)
        if target is None:
            return
        if target.is_dir() and not target.is_symlink():
            if recursive:
                shutil.rmtree(target)
            else:
                target.rmdir()
        else:
            target.unlink()
        logger.debug("Deleted %s", target)

    def create_folder(self, path: str) -> Path:
        target = self.resolve(path)
        target.mkdir(parents=True, exist_ok=False)
        return target

    def create(self, path: str, content: str) -> Path:
        target = self.resolve(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
        return target
