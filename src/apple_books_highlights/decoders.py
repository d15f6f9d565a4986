"""Decoders that turn sqlite3 shell output into rows of string fields."""
from __future__ import annotations

import json
from typing import List

Row = List[str]

FIELD_SEPARATOR = "|||"
ROW_SEPARATOR = "@@@"


class RowDecoder:
    """Base class for sqlite3 output decoders.

    A decoder knows which shell options produce the format it reads, so the
    executor and the decoder can be swapped together.
    """

    def command_options(self) -> List[str]:
        raise NotImplementedError

    def decode(self, raw: str) -> List[Row]:
        raise NotImplementedError


class SeparatedRowDecoder(RowDecoder):
    """Reads output written with custom ``.separator`` strings.

    The separators are multi-character sequences that are unlikely to appear
    in highlighted text. There is no escaping; text containing a separator
    verbatim will be split incorrectly.
    """

    def __init__(self, row_separator: str = ROW_SEPARATOR, field_separator: str = FIELD_SEPARATOR) -> None:
        if not row_separator or not field_separator:
            raise ValueError("Separators must be non-empty strings")
        self.row_separator = row_separator
        self.field_separator = field_separator

    def command_options(self) -> List[str]:
        return ["-cmd", f".separator {self.field_separator} {self.row_separator}"]

    def decode(self, raw: str) -> List[Row]:
        chunks = [chunk for chunk in raw.split(self.row_separator) if chunk]
        return [chunk.split(self.field_separator) for chunk in chunks]


class JsonRowDecoder(RowDecoder):
    """Reads the array of objects printed by ``sqlite3 -json``."""

    def command_options(self) -> List[str]:
        return ["-json"]

    def decode(self, raw: str) -> List[Row]:
        if not raw.strip():
            # sqlite3 prints nothing at all for an empty result set.
            return []
        records = json.loads(raw)
        if not isinstance(records, list) or not all(isinstance(record, dict) for record in records):
            raise ValueError("expected a JSON array of row objects")
        return [["" if value is None else str(value) for value in record.values()] for record in records]


def get_decoder(output_format: str) -> RowDecoder:
    if output_format == "json":
        return JsonRowDecoder()
    if output_format == "separator":
        return SeparatedRowDecoder()
    raise ValueError(f"Unknown output format: {output_format!r}")
