from __future__ import annotations


class EmbeddedDBError(Exception):
    """Base class for all database errors."""


class CorruptDatabaseError(EmbeddedDBError):
    """Backing file is not valid JSON or does not hold a table mapping."""

    def __init__(self, detail: str) -> None:
        super().__init__("Corrupt database!\n" + detail)
        self.detail = detail


class ValidationError(EmbeddedDBError):
    pass
