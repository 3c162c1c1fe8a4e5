# geoharvest\core\ports\__init__.py
"""
Core Ports (Interfaces).

Protocols that the adapters implement, so the use cases can talk to
Overpass and to CSV files without knowing the implementation details.
"""

from .geo_source import IGeoSource
from .table_store import ITableReader, ITableStore, ITableWriter

__all__ = [
    "IGeoSource",
    "ITableReader",
    "ITableStore",
    "ITableWriter",
]
