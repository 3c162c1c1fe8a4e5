# geoharvest\core\ports\table_store.py
from typing import ContextManager, Dict, Iterator, List, Protocol, Sequence


class ITableReader(Protocol):
    """A header-addressed, streaming view over an input table."""

    path: str
    fieldnames: List[str]

    def __iter__(self) -> Iterator[Dict[str, str]]:
        ...


class ITableWriter(Protocol):
    """An output table whose header has already been written."""

    path: str
    rows_written: int

    def write_row(self, row: Sequence[str]) -> None:
        ...


class ITableStore(Protocol):
    """
    Port for tabular persistence.

    Opening is the fatal boundary: an unreadable input, an uncreatable
    output or a missing required column raises a SetupError.
    """

    def open_reader(self, path: str, required_columns: Sequence[str] = ()) -> ContextManager[ITableReader]:
        ...

    def open_writer(self, path: str, header: Sequence[str]) -> ContextManager[ITableWriter]:
        ...
