from __future__ import annotations
import json
import logging
from typing import Any, Dict, List, Optional

from .errors import CorruptDatabaseError, ValidationError
from .model import Model
from .progress import Progress, ProgressCallback
from .storage import FileStorage
from .table import Record, Table

logger = logging.getLogger(__name__)


class Database:
    """
    In-memory table set backed by a single JSON file.

    The file is read once on construction. Tables live in memory until
    commit(), which rewrites the whole file with every table.
    """
    def __init__(
        self,
        path: str,
        *,
        create: bool = False,
        indent: Optional[int] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> None:
        self.path = str(path)
        self._fs = FileStorage(self.path, indent=indent)
        self._progress = Progress(on_progress)
        self._tables: Dict[str, Table] = {}
        self._open(create)

    def _open(self, create: bool) -> None:
        """
        Read the backing file and build tables. Empty content means no tables.
        """
        self._progress.emit("open.start", 0, self.path)
        if create and not self._fs.exists():
            self._fs.touch()
        try:
            text = self._fs.read_text()
        except UnicodeDecodeError as e:
            raise CorruptDatabaseError(str(e)) from e

        if text == "":
            self._tables = {}
            logger.debug("opened empty database %s", self.path)
            self._progress.emit("open.done", 100, "empty")
            return

        self._progress.emit("open.parse", 50)
        try:
            doc = json.loads(text)
        except json.JSONDecodeError as e:
            raise CorruptDatabaseError(str(e)) from e
        self._tables = self._tables_from_doc(doc)
        logger.debug("opened database %s with %d table(s)", self.path, len(self._tables))
        self._progress.emit("open.done", 100, f"{len(self._tables)} table(s)")

    @staticmethod
    def _tables_from_doc(doc: Any) -> Dict[str, Table]:
        if not isinstance(doc, dict):
            raise CorruptDatabaseError(f"top-level value must be an object, got {type(doc).__name__}")
        tables: Dict[str, Table] = {}
        for name, rows in doc.items():
            if not isinstance(rows, list):
                raise CorruptDatabaseError(f"table {name!r} must be an array")
            records: List[Record] = []
            seen = set()
            for pos, row in enumerate(rows):
                if not isinstance(row, dict):
                    raise CorruptDatabaseError(f"table {name!r} row {pos} is not an object")
                rec_id = row.get("id")
                if not isinstance(rec_id, str) or not rec_id:
                    raise CorruptDatabaseError(f"table {name!r} row {pos} has no string id")
                if rec_id in seen:
                    raise CorruptDatabaseError(f"table {name!r} has duplicate id {rec_id!r}")
                seen.add(rec_id)
                records.append(Record(rec_id, row))
            tables[name] = Table(name, records)
        return tables

    def table(self, name: str) -> Table:
        """Return the named table, creating an empty in-memory one if absent."""
        if not isinstance(name, str):
            raise ValidationError(f"table name must be a string, got {type(name).__name__}")
        tbl = self._tables.get(name)
        if tbl is None:
            tbl = Table(name)
            self._tables[name] = tbl
        return tbl

    def model(self, name: str) -> Model:
        return Model(self, name)

    @property
    def table_names(self) -> List[str]:
        return list(self._tables.keys())

    def to_dict(self) -> Dict[str, List[Dict[str, Any]]]:
        return {name: tbl.to_list() for name, tbl in self._tables.items()}

    def commit(self) -> None:
        """
        Overwrite the backing file with all tables currently in memory.
        """
        self._progress.emit("commit.start", 0, self.path)
        doc = self.to_dict()
        self._progress.emit("commit.write", 50, f"{len(doc)} table(s)")
        n = self._fs.write_document(doc)
        logger.debug("committed %d table(s) to %s", len(doc), self.path)
        self._progress.emit("commit.done", 100, f"{n} bytes")

    def __contains__(self, name: object) -> bool:
        return name in self._tables

    def __repr__(self) -> str:
        return f"Database(path={self.path!r}, tables={self.table_names!r})"
