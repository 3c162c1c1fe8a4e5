# geoharvest\adapters\persistence\csv_tables.py
"""
CSV implementation of the table store port.

Output tables are UTF-8, comma-delimited, with a header row and ``\\n``
line endings. Input tables are read as ``utf-8-sig`` so spreadsheet exports
that start with a byte-order mark load the same as plain files; header cells
are stripped of surrounding whitespace.

Opening is where fatal problems surface:
- unreadable input / uncreatable output -> TableAccessError
- required header missing                 -> MissingColumnError
"""

from __future__ import annotations

import csv
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Dict, Iterator, List, Sequence, Union

from geoharvest.core.domain.exceptions import MissingColumnError, TableAccessError

PathLike = Union[str, Path]

OUTPUT_ENCODING = "utf-8"
INPUT_ENCODING = "utf-8-sig"
LINE_TERMINATOR = "\n"


def _reason(exc: OSError) -> str:
    return exc.strerror or str(exc)


class CsvTableReader:
    """Streams rows as ``{header: value}`` dicts."""

    def __init__(self, path: PathLike, handle: IO[str]):
        self.path = str(path)
        self._reader = csv.DictReader(handle)
        raw = self._reader.fieldnames or []
        self._reader.fieldnames = [name.strip() for name in raw]
        self.fieldnames: List[str] = list(self._reader.fieldnames)

    def missing_columns(self, required: Sequence[str]) -> List[str]:
        return [name for name in required if name not in self.fieldnames]

    def __iter__(self) -> Iterator[Dict[str, str]]:
        return iter(self._reader)


class CsvTableWriter:
    """Writes positional rows; counts data rows (the header is not counted)."""

    def __init__(self, path: PathLike, handle: IO[str]):
        self.path = str(path)
        self._writer = csv.writer(handle, lineterminator=LINE_TERMINATOR)
        self.rows_written = 0

    def write_header(self, header: Sequence[str]) -> None:
        self._write(header)

    def write_row(self, row: Sequence[str]) -> None:
        self._write(row)
        self.rows_written += 1

    def _write(self, row: Sequence[str]) -> None:
        try:
            self._writer.writerow(row)
        except OSError as e:
            raise TableAccessError(self.path, _reason(e)) from e


class CsvTableStore:
    """Table store backed by CSV files on the local file system."""

    @contextmanager
    def open_reader(self, path: PathLike, required_columns: Sequence[str] = ()) -> Iterator[CsvTableReader]:
        try:
            handle = open(path, "r", encoding=INPUT_ENCODING, newline="")
        except OSError as e:
            raise TableAccessError(str(path), _reason(e)) from e

        with handle:
            reader = CsvTableReader(path, handle)
            missing = reader.missing_columns(required_columns)
            if missing:
                raise MissingColumnError(str(path), missing)
            yield reader

    @contextmanager
    def open_writer(self, path: PathLike, header: Sequence[str]) -> Iterator[CsvTableWriter]:
        target = Path(path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            handle = target.open("w", encoding=OUTPUT_ENCODING, newline="")
        except OSError as e:
            raise TableAccessError(str(path), _reason(e)) from e

        with handle:
            writer = CsvTableWriter(target, handle)
            writer.write_header(header)
            yield writer
