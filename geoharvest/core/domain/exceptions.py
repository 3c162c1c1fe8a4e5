# geoharvest/core/domain/exceptions.py
from typing import Iterable


class DomainError(Exception):
    """Base class for all domain-level exceptions."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)

# --- Fatal Setup Errors (abort the run) ---

class SetupError(DomainError):
    """Raised when the run cannot start or continue: files, columns, reference data."""


class TableAccessError(SetupError):
    """Raised when an input table cannot be opened or an output table cannot be created."""
    def __init__(self, path: str, reason: str):
        self.path = path
        super().__init__(f"Cannot access table '{path}': {reason}")


class MissingColumnError(SetupError):
    """Raised when a required column is absent from a table header."""
    def __init__(self, path: str, missing: Iterable[str]):
        self.path = path
        self.missing = list(missing)
        super().__init__(
            f"Table '{path}' is missing required column(s): {', '.join(self.missing)}"
        )


class ReferenceDataError(SetupError):
    """Raised when a country seed list or language map file is unreadable or malformed."""
    def __init__(self, path: str, detail: str):
        self.path = path
        super().__init__(f"Invalid reference data in '{path}': {detail}")

# --- Recoverable Errors (skip the item) ---

class GeoSourceError(DomainError):
    """Raised when a single query against the geography source fails."""
    def __init__(self, target: str, reason: str):
        self.target = target
        self.reason = reason
        super().__init__(f"Geography query for '{target}' failed: {reason}")
