"""Command line entry point for syncing Apple Books highlights into an Obsidian vault."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable, List, Optional

from apple_books_highlights.config import CONFIG_FILE, OUTPUT_FORMATS, SyncConfig, load_config, save_config
from apple_books_highlights.errors import SourceNotFoundError, SyncError
from apple_books_highlights.storage import DryRunPublisher, FolderReplacePublisher
from apple_books_highlights.sync import SUCCESS_NOTICE, build_executor, collect_books, sync_highlights
from apple_books_highlights.vault import Vault


def _parse_args(argv: Iterable[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--config",
        type=Path,
        help=f"Path to JSON settings file (default: {CONFIG_FILE} when it exists)",
        default=None,
    )
    parser.add_argument("--vault", type=Path, help="Path to the root of the Obsidian vault", default=None)
    parser.add_argument("--folder", help="Vault folder for highlight notes; replaced on every sync", default=None)
    parser.add_argument("--annotation-dir", type=Path, help="Directory holding AEAnnotation*.sqlite", default=None)
    parser.add_argument("--library-dir", type=Path, help="Directory holding BKLibrary*.sqlite", default=None)
    parser.add_argument("--sqlite", dest="sqlite_binary", help="sqlite3 executable to use", default=None)
    parser.add_argument("--format", dest="output_format", choices=OUTPUT_FORMATS, default=None)
    parser.add_argument(
        "--sync-on-startup",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Enable or disable syncing when invoked with --on-startup",
    )
    parser.add_argument(
        "--on-startup",
        action="store_true",
        help="Only sync if sync-on-startup is enabled in the settings",
    )
    parser.add_argument("--dry-run", action="store_true", help="Run without writing files")
    parser.add_argument(
        "--list", action="store_true", dest="list_only", help="List books with highlights without writing"
    )
    parser.add_argument("--save", action="store_true", help="Save the effective settings to the settings file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log diagnostic output")
    return parser.parse_args(list(argv))


def _settings_path(args: argparse.Namespace) -> Optional[Path]:
    if args.config is not None:
        return args.config
    return CONFIG_FILE if CONFIG_FILE.exists() else None


def _combine_config(args: argparse.Namespace) -> SyncConfig:
    path = _settings_path(args)
    if args.save and path is not None and not path.expanduser().exists():
        # --save creates the settings file on first use.
        path = None
    try:
        file_config = load_config(path)
    except FileNotFoundError as exc:  # pragma: no cover - user error
        raise SystemExit(f"Configuration file not found: {path}") from exc
    except (OSError, ValueError) as exc:
        raise SystemExit(f"Failed to read configuration file: {exc}") from exc
    config = SyncConfig.from_mapping(file_config)

    if args.vault is not None:
        config.vault_root = args.vault
    if args.folder is not None:
        config.highlights_folder = args.folder
    if args.annotation_dir is not None:
        config.annotation_db_dir = args.annotation_dir
    if args.library_dir is not None:
        config.library_db_dir = args.library_dir
    if args.sqlite_binary is not None:
        config.sqlite_binary = args.sqlite_binary
    if args.output_format is not None:
        config.output_format = args.output_format
    if args.sync_on_startup is not None:
        config.sync_on_startup = args.sync_on_startup
    return config


def _list_books(config: SyncConfig) -> int:
    books = collect_books(config, build_executor(config))
    for book in books:
        print(f"{book.book_title} by {book.author_name} ({len(book.highlights)} highlight(s))")
    print(f"Found {sum(len(b.highlights) for b in books)} highlights across {len(books)} books.")
    return 0


def main(argv: Iterable[str] | None = None) -> int:
    args = _parse_args(sys.argv[1:] if argv is None else argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    config = _combine_config(args)

    if args.save:
        saved = save_config(config, args.config or CONFIG_FILE)
        print(f"Saved settings to {saved}.")

    if args.on_startup and not config.sync_on_startup:
        print("Sync on startup is disabled; nothing to do.")
        return 0

    vault = Vault(config.vault_root)
    publisher_cls = DryRunPublisher if args.dry_run else FolderReplacePublisher
    publisher = publisher_cls(vault, config.highlights_folder)

    try:
        if args.list_only:
            return _list_books(config)
        result = sync_highlights(config, publisher=publisher)
    except SourceNotFoundError as exc:
        print(exc)
        return 1
    except (SyncError, OSError) as exc:
        print(f"Apple Books Highlight Sync failed: {exc}")
        return 1

    if args.dry_run:
        for path in result.written:
            print(f"[DRY-RUN] Would write {path}.")
        print(
            f"Dry-run complete; {len(result.documents)} note(s) for {result.highlight_count} "
            "highlight(s) were not written."
        )
        return 0

    written: List[Path] = result.written
    for path in written:
        print(f"Wrote {path}.")
    print(SUCCESS_NOTICE)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
