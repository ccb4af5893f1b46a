from __future__ import annotations
from typing import Any, Callable, Dict, Optional

ProgressCallback = Callable[[Dict[str, Any]], None]


class Progress:
    """
    Thin adapter over an optional user callback.
    Each event is a dict: {"phase": str, "pct": int, "msg": str}.
    """
    def __init__(self, callback: Optional[ProgressCallback] = None) -> None:
        self._cb = callback

    def emit(self, phase: str, pct: int, msg: str = "") -> None:
        if self._cb is None:
            return
        self._cb({"phase": phase, "pct": max(0, min(100, int(pct))), "msg": msg})
