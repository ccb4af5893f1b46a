from __future__ import annotations
from typing import Any

from .database import Database
from .errors import CorruptDatabaseError, EmbeddedDBError, ValidationError
from .model import Model
from .table import Record, Table

__all__ = [
    "Database",
    "Model",
    "Record",
    "Table",
    "EmbeddedDBError",
    "CorruptDatabaseError",
    "ValidationError",
    "init",
]

__version__ = "0.1.0"


def init(path: str, **kwargs: Any) -> Database:
    """Open the database file at path. Keyword options go to Database."""
    return Database(path, **kwargs)
