from __future__ import annotations
from typing import Any, Dict, List, Mapping, Optional, Sequence

from .errors import ValidationError

_MISSING = object()


def strict_equal(a: Any, b: Any) -> bool:
    """
    JSON-style equality: bools never equal numbers, ints equal floats of the
    same value, lists and objects compare deeply.
    """
    if isinstance(a, bool) or isinstance(b, bool):
        return type(a) is type(b) and a == b
    if isinstance(a, dict) and isinstance(b, dict):
        if a.keys() != b.keys():
            return False
        return all(strict_equal(a[k], b[k]) for k in a)
    if isinstance(a, (list, tuple)) and isinstance(b, (list, tuple)):
        if len(a) != len(b):
            return False
        return all(strict_equal(x, y) for x, y in zip(a, b))
    return a == b


def check_query(query: Any) -> Mapping[str, Any]:
    if query is None:
        return {}
    if not isinstance(query, Mapping):
        raise ValidationError(f"query must be a mapping, got {type(query).__name__}")
    return query


def matches(record: Mapping[str, Any], query: Mapping[str, Any]) -> bool:
    """
    True if every key of query is present in record with a strictly equal value.
    An empty query matches every record.
    """
    for k, v in query.items():
        val = record.get(k, _MISSING)
        if val is _MISSING or not strict_equal(val, v):
            return False
    return True


def find_index(query: Mapping[str, Any], rows: Sequence[Mapping[str, Any]]) -> int:
    for pos, row in enumerate(rows):
        if matches(row, query):
            return pos
    return -1


def search_one(query: Mapping[str, Any], rows: Sequence[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    pos = find_index(query, rows)
    if pos == -1:
        return None
    return rows[pos]


def search(query: Mapping[str, Any], rows: Sequence[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [row for row in rows if matches(row, query)]
