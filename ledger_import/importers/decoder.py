"""Decode delimited upload text into a header and data rows."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ledger_import.exceptions import FileFormatError

DEFAULT_DELIMITER = ","


@dataclass(frozen=True)
class DecodedRow:
    """One data line split into trimmed values.

    ``index`` is the 1-based position among data rows, the number used
    in row error messages.
    """

    index: int
    values: tuple[str, ...]


@dataclass(frozen=True)
class DecodedTable:
    """Header line plus data rows of an upload."""

    header: tuple[str, ...]
    rows: list[DecodedRow]

    @property
    def column_count(self) -> int:
        """Number of header columns."""
        return len(self.header)


def split_line(line: str, delimiter: str = DEFAULT_DELIMITER) -> tuple[str, ...]:
    """Split a line on the delimiter and trim every field.

    There is no quoting: a value may not contain the delimiter.
    """
    return tuple(value.strip() for value in line.split(delimiter))


def decode_table(text: str, delimiter: str = DEFAULT_DELIMITER) -> DecodedTable:
    """Split upload text into header and data rows.

    Blank and whitespace-only lines are skipped. The header is only used
    for its column count.

    Raises
    ------
    FileFormatError
        If fewer than two non-blank lines are present.
    """
    lines = [line for line in text.splitlines() if line.strip()]
    if len(lines) < 2:
        raise FileFormatError("File must contain headers and at least one data row")

    header = split_line(lines[0], delimiter)
    rows = [
        DecodedRow(index=i, values=split_line(line, delimiter))
        for i, line in enumerate(lines[1:], start=1)
    ]
    return DecodedTable(header=header, rows=rows)


def read_upload(source: str | Path | bytes) -> str:
    """Read an uploaded file as UTF-8 text.

    Parameters
    ----------
    source : str | Path | bytes
        Path to the file, or its raw bytes.

    Returns
    -------
    str
        Decoded text with any byte-order mark removed.
    """
    if isinstance(source, bytes):
        raw = source
    else:
        try:
            raw = Path(source).read_bytes()
        except OSError as e:
            raise FileFormatError(f"Cannot read {source}: {e}") from e

    try:
        # utf-8-sig drops the BOM spreadsheet exports prepend
        return raw.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise FileFormatError(f"File is not valid UTF-8 text: {e}") from e
