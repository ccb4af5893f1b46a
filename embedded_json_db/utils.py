from __future__ import annotations
import json
import uuid
from typing import Any


def new_id() -> str:
    return str(uuid.uuid4())


def dump_json(obj: Any, indent: int | None = None) -> str:
    # Compact unless an indent is requested; keys keep insertion order
    if indent is None:
        return json.dumps(obj, ensure_ascii=False, separators=(",", ":"))
    return json.dumps(obj, ensure_ascii=False, indent=indent)
