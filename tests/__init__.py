# tests\__init__.py
"""
Test Suite for geoharvest.

Organization:
- `core`: Pure transforms and Use Cases with a fake geography source.
- `adapters`: Overpass adapter (mocked HTTP session), CSV store, reference data.
- `test_cli.py`: Command line wiring and exit codes.
"""
