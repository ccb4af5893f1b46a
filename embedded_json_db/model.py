from __future__ import annotations
from typing import TYPE_CHECKING, Any, Iterable, List, Mapping, Optional

from .errors import ValidationError
from .query import check_query, find_index, search, search_one
from .table import Record

if TYPE_CHECKING:
    from .database import Database


class Model:
    """
    Accessor for one named table of a Database.

    Reads and writes go straight to the shared in-memory table; nothing is
    persisted until commit(). Lookups that find nothing return None.
    """
    def __init__(self, db: "Database", table_name: str) -> None:
        self._db = db
        self._table = db.table(table_name)

    @property
    def name(self) -> str:
        return self._table.name

    def __len__(self) -> int:
        return len(self._table)

    def insert_one(self, record: Mapping[str, Any]) -> str:
        """Append a copy of record under a freshly generated id; returns the id."""
        if not isinstance(record, Mapping):
            raise ValidationError(f"record must be a mapping, got {type(record).__name__}")
        return self._table.append(record).id

    def insert_many(self, records: Iterable[Mapping[str, Any]]) -> None:
        for record in records:
            self.insert_one(record)

    def find_one(self, query: Optional[Mapping[str, Any]] = None) -> Optional[Record]:
        return search_one(check_query(query), self._table.rows)

    def find_many(self, query: Optional[Mapping[str, Any]] = None) -> List[Record]:
        return search(check_query(query), self._table.rows)

    def find_by_id(self, rec_id: str) -> Optional[Record]:
        pos = self._table.position(rec_id)
        if pos is None:
            return None
        return self._table.rows[pos]

    def update_one_by_id(self, rec_id: str, data: Mapping[str, Any]) -> bool:
        """
        Merge data into the record in place. Fields not named in data are kept.
        Returns False if no record has this id.
        """
        if not isinstance(data, Mapping):
            raise ValidationError(f"update must be a mapping, got {type(data).__name__}")
        pos = self._table.position(rec_id)
        if pos is None:
            return False
        self._table.rows[pos].update(data)
        return True

    def delete_one(self, query: Optional[Mapping[str, Any]] = None) -> Optional[Record]:
        pos = find_index(check_query(query), self._table.rows)
        if pos == -1:
            return None
        return self._table.remove_at(pos)

    def delete_one_by_id(self, rec_id: str) -> Optional[Record]:
        pos = self._table.position(rec_id)
        if pos is None:
            return None
        return self._table.remove_at(pos)

    def commit(self) -> None:
        # Writes every table, not just this one
        self._db.commit()

    def __repr__(self) -> str:
        return f"Model({self.name!r}, records={len(self)})"
