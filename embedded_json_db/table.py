from __future__ import annotations
from typing import Any, Dict, Iterator, List, Mapping, Optional

from .errors import ValidationError
from .index import IdIndex
from .utils import new_id


class Record(dict):
    """
    Dict-like record with a fixed id.
    The id is stored under the "id" key so a record serializes and compares
    like a plain dict, and is also exposed as the read-only `id` attribute.
    """
    __slots__ = ("_id",)

    def __init__(self, rec_id: str, fields: Mapping[str, Any]) -> None:
        super().__init__(fields)
        super().__setitem__("id", rec_id)
        self._id = rec_id

    @property
    def id(self) -> str:
        return self._id

    def _check_id(self, key: str, value: Any) -> bool:
        # Returns False when the assignment is a no-op on "id"
        if key != "id":
            return True
        if value != self._id:
            raise ValidationError(f"record id is immutable ({self._id!r} -> {value!r})")
        return False

    def __setitem__(self, key: str, value: Any) -> None:
        if self._check_id(key, value):
            super().__setitem__(key, value)

    def __delitem__(self, key: str) -> None:
        if key == "id":
            raise ValidationError("record id cannot be removed")
        super().__delitem__(key)

    def update(self, *args: Any, **kwargs: Any) -> None:
        patch = dict(*args, **kwargs)
        # Reject an id change before touching any field
        if "id" in patch:
            self._check_id("id", patch.pop("id"))
        for k, v in patch.items():
            super().__setitem__(k, v)

    def __ior__(self, other: Any) -> "Record":
        self.update(other)
        return self

    def setdefault(self, key: str, default: Any = None) -> Any:
        if key not in self:
            self[key] = default
        return self[key]

    def pop(self, key: str, *default: Any) -> Any:
        if key == "id":
            raise ValidationError("record id cannot be removed")
        return super().pop(key, *default)

    def popitem(self) -> Any:
        raise ValidationError("popitem is not supported on records")

    def clear(self) -> None:
        super().clear()
        super().__setitem__("id", self._id)

    def __reduce__(self):
        fields = {k: v for k, v in self.items() if k != "id"}
        return (self.__class__, (self._id, fields))

    def __copy__(self) -> "Record":
        return Record(self._id, self)

    def to_dict(self) -> Dict[str, Any]:
        return dict(self)


class Table:
    """
    Ordered rows of one named table plus the id -> position index over them.
    Shared by every Model bound to the same name.
    """
    def __init__(self, name: str, rows: Optional[List[Record]] = None) -> None:
        self.name = name
        self.rows: List[Record] = rows if rows is not None else []
        self.index = IdIndex()
        self.index.rebuild(self.rows)

    def append(self, fields: Mapping[str, Any]) -> Record:
        rec = Record(new_id(), {k: v for k, v in fields.items() if k != "id"})
        self.rows.append(rec)
        self.index.add(rec.id, len(self.rows) - 1)
        return rec

    def position(self, rec_id: str) -> Optional[int]:
        return self.index.lookup(rec_id)

    def remove_at(self, pos: int) -> Record:
        # list.pop keeps the relative order of the remaining rows
        rec = self.rows.pop(pos)
        self.index.rebuild(self.rows)
        return rec

    def to_list(self) -> List[Dict[str, Any]]:
        return [dict(r) for r in self]

    def __iter__(self) -> Iterator[Record]:
        return iter(self.rows)

    def __len__(self) -> int:
        return len(self.rows)
