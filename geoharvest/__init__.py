# geoharvest\__init__.py
"""
geoharvest - Administrative Geography Harvester.

Collects countries, states and cities from the Overpass API into CSV tables
and annotates them with spreadsheet translation formulas.

The package follows Hexagonal Architecture (Ports & Adapters):
- core: domain models, pure transforms, ports and use cases.
- adapters: Overpass HTTP client, CSV persistence, reference data.
- shared: configuration, logging, resilience and dependency wiring.
"""

__version__ = "1.0.0"
