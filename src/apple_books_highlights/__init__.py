"""Utilities for syncing Apple Books highlights into Markdown."""

from .config import SyncConfig
from .models import Highlight, SyncedBook
from .sync import SyncResult, sync_highlights

__all__ = ["SyncConfig", "Highlight", "SyncedBook", "SyncResult", "sync_highlights"]
