from .csv_tables import CsvTableReader, CsvTableStore, CsvTableWriter
from .reference_data import (
    DEFAULT_COUNTRIES,
    DEFAULT_LANGUAGE_MAP,
    load_countries,
    load_language_map,
    resolve_countries,
    resolve_language_map,
)

__all__ = [
    "CsvTableReader",
    "CsvTableStore",
    "CsvTableWriter",
    "DEFAULT_COUNTRIES",
    "DEFAULT_LANGUAGE_MAP",
    "load_countries",
    "load_language_map",
    "resolve_countries",
    "resolve_language_map",
]
