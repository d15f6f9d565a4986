"""Run read-only queries against Apple Books databases via the sqlite3 shell."""
from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Callable, Iterable, List, Optional

from .decoders import RowDecoder, Row, SeparatedRowDecoder
from .errors import QueryError

logger = logging.getLogger(__name__)

ANNOTATION_QUERY = (
    "SELECT ZANNOTATIONASSETID,ZANNOTATIONUUID,ZANNOTATIONSELECTEDTEXT from ZAEANNOTATION "
    "where ZANNOTATIONDELETED = 0 AND ZANNOTATIONSELECTEDTEXT NOT NULL;"
)
CATALOG_QUERY_TEMPLATE = "SELECT ZASSETID,ZAUTHOR,ZTITLE from ZBKLIBRARYASSET where ZASSETID in ({ids})"

Runner = Callable[..., "subprocess.CompletedProcess[bytes]"]


def quote_literal(value: str) -> str:
    """Return ``value`` as a single-quoted SQL string literal."""

    return "'" + value.replace("'", "''") + "'"


def build_catalog_query(book_ids: Iterable[str]) -> str:
    return CATALOG_QUERY_TEMPLATE.format(ids=",".join(quote_literal(book_id) for book_id in book_ids))


class QueryExecutor:
    """Invokes the sqlite3 shell in read-only mode and decodes its output.

    Parameters
    ----------
    decoder:
        Decoder that selects the shell output format and parses it. Defaults
        to :class:`SeparatedRowDecoder`.
    binary:
        Name or path of the sqlite3 executable.
    runner:
        Callable with the signature of :func:`subprocess.run`. Primarily
        intended for tests so that no real sqlite3 binary is required.
    """

    def __init__(
        self,
        decoder: Optional[RowDecoder] = None,
        *,
        binary: str = "sqlite3",
        runner: Optional[Runner] = None,
    ) -> None:
        self.decoder = decoder or SeparatedRowDecoder()
        self.binary = binary
        self._runner = runner or subprocess.run

    def build_command(self, database: Path, statement: str) -> List[str]:
        return [self.binary, "--readonly", *self.decoder.command_options(), str(database), statement]

    def run(self, database: Path, statement: str) -> str:
        """Return the raw stdout of ``statement`` executed against ``database``."""

        command = self.build_command(database, statement)
        logger.debug("Running %s against %s", self.binary, database)
        try:
            result = self._runner(command, capture_output=True, check=False)
        except FileNotFoundError as exc:
            raise QueryError(f"{self.binary} executable not found") from exc
        except OSError as exc:
            raise QueryError(f"Failed to run {self.binary}: {exc}") from exc
        if result.returncode != 0:
            stderr = (result.stderr or b"").decode("utf-8", errors="replace")
            message = stderr.strip() or f"exit status {result.returncode}"
            raise QueryError(f"Query against {database.name} failed: {message}")
        # No newline translation: "\r\n" in highlight text is kept as is.
        try:
            return result.stdout.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise QueryError(f"Output from {database.name} is not valid UTF-8: {exc}") from exc

    def fetch_rows(self, database: Path, statement: str) -> List[Row]:
        raw = self.run(database, statement)
        try:
            rows = self.decoder.decode(raw)
        except ValueError as exc:
            raise QueryError(f"Could not decode output from {database.name}: {exc}") from exc
        logger.debug("Decoded %d row(s) from %s", len(rows), database.name)
        return rows
