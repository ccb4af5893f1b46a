from __future__ import annotations
import logging
import os
from typing import Any, Optional

from .utils import dump_json

logger = logging.getLogger(__name__)

ENCODING = "utf-8"


class FileStorage:
    """
    Whole-file I/O for the backing JSON document.
    Every call opens, reads or writes, and closes the file; no handle is held
    between calls.
    """
    def __init__(self, path: str, indent: Optional[int] = None) -> None:
        self.path = path
        self.indent = indent

    def exists(self) -> bool:
        return os.path.exists(self.path)

    def touch(self) -> None:
        # Create an empty file without truncating an existing one
        with open(self.path, "a", encoding=ENCODING):
            pass
        logger.debug("created empty database file %s", self.path)

    def read_text(self) -> str:
        with open(self.path, "r", encoding=ENCODING) as f:
            return f.read()

    def write_document(self, doc: Any) -> int:
        """
        Serialize doc and overwrite the file in place. Returns bytes written.
        No temp file is used, so an interrupted write can leave a truncated file.
        """
        text = dump_json(doc, self.indent)
        data = text.encode(ENCODING)
        with open(self.path, "wb") as f:
            f.write(data)
            f.flush()
        logger.debug("wrote %d bytes to %s", len(data), self.path)
        return len(data)
