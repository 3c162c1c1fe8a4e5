# geoharvest\core\__init__.py
"""
Core Domain Layer.

This package contains the pure logic and entities of the harvester.
- No dependencies on infrastructure (HTTP, file system).
- Defines Interfaces (Ports) that the adapters must implement.
"""
