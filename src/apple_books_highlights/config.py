"""Configuration helpers for the Apple Books highlight synchroniser."""
from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

APPLE_BOOKS_DATA_DIR = Path.home() / "Library/Containers/com.apple.iBooksX/Data/Documents"
DEFAULT_ANNOTATION_DB_DIR = APPLE_BOOKS_DATA_DIR / "AEAnnotation"
DEFAULT_LIBRARY_DB_DIR = APPLE_BOOKS_DATA_DIR / "BKLibrary"

CONFIG_DIR = Path.home() / ".apple_books_highlights"
CONFIG_FILE = CONFIG_DIR / "config.json"

OUTPUT_FORMATS = ("separator", "json")


@dataclass
class SyncConfig:
    """Holds configuration for syncing highlights."""

    vault_root: Path = Path("./vault")
    highlights_folder: str = "Apple Books Highlights"
    sync_on_startup: bool = False
    annotation_db_dir: Path = DEFAULT_ANNOTATION_DB_DIR
    library_db_dir: Path = DEFAULT_LIBRARY_DB_DIR
    sqlite_binary: str = "sqlite3"
    output_format: str = "separator"

    @classmethod
    def from_mapping(cls, data: Dict[str, Any]) -> "SyncConfig":
        kwargs: Dict[str, Any] = {}
        if "vault_root" in data and data["vault_root"]:
            kwargs["vault_root"] = Path(data["vault_root"])
        if "highlights_folder" in data and data["highlights_folder"]:
            kwargs["highlights_folder"] = str(data["highlights_folder"])
        if "sync_on_startup" in data:
            kwargs["sync_on_startup"] = bool(data["sync_on_startup"])
        if "annotation_db_dir" in data and data["annotation_db_dir"]:
            kwargs["annotation_db_dir"] = Path(data["annotation_db_dir"])
        if "library_db_dir" in data and data["library_db_dir"]:
            kwargs["library_db_dir"] = Path(data["library_db_dir"])
        if "sqlite_binary" in data and data["sqlite_binary"]:
            kwargs["sqlite_binary"] = str(data["sqlite_binary"])
        if data.get("output_format") in OUTPUT_FORMATS:
            kwargs["output_format"] = data["output_format"]
        return cls(**kwargs)

    def to_mapping(self) -> Dict[str, Any]:
        return {
            "vault_root": str(self.vault_root),
            "highlights_folder": self.highlights_folder,
            "sync_on_startup": self.sync_on_startup,
            "annotation_db_dir": str(self.annotation_db_dir),
            "library_db_dir": str(self.library_db_dir),
            "sqlite_binary": self.sqlite_binary,
            "output_format": self.output_format,
        }


def load_config(path: Optional[Path]) -> Dict[str, Any]:
    """Load a JSON configuration file if provided."""

    if path is None:
        return {}
    with path.expanduser().resolve().open("r", encoding="utf-8") as handle:
        return json.load(handle)


def save_config(config: SyncConfig, path: Path = CONFIG_FILE) -> Path:
    """Persist ``config`` as JSON, creating the parent directory if needed."""

    path = path.expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as handle:
        json.dump(config.to_mapping(), handle, indent=2)
    return path
