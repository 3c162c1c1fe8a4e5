# geoharvest\adapters\__init__.py
"""
Driven Adapters.

Concrete implementations of the core ports:
- OverpassAdapter -> IGeoSource
- CsvTableStore   -> ITableStore
"""
