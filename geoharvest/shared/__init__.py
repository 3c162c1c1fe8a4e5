# geoharvest\shared\__init__.py
"""
Shared utilities package.

Cross-cutting concerns used by the core and the adapters:
configuration, structured logging, tracing, retry policies and the
dependency injection container.
"""
