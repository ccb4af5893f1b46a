from __future__ import annotations
from typing import Any, Dict, Iterable, Mapping, Optional


class IdIndex:
    """
    Maps record id -> position in the owning table's row list.
    lookup() returns None for unknown ids; there is no sentinel position.
    """
    def __init__(self) -> None:
        self._pos: Dict[str, int] = {}

    def add(self, rec_id: str, pos: int) -> None:
        self._pos[rec_id] = pos

    def lookup(self, rec_id: str) -> Optional[int]:
        return self._pos.get(rec_id)

    def rebuild(self, rows: Iterable[Mapping[str, Any]]) -> None:
        self._pos = {row["id"]: pos for pos, row in enumerate(rows)}

    def __contains__(self, rec_id: object) -> bool:
        return rec_id in self._pos

    def __len__(self) -> int:
        return len(self._pos)
