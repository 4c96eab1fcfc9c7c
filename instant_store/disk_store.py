from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable

from .interfaces import JsonDocumentStore
from .json_store import atomic_write_text, encode, read_text

logger = logging.getLogger(__name__)


class DiskJsonDocumentStore(JsonDocumentStore):
    """
    Stores a single JSON document on disk at a fixed path.

    - Every load re-reads and re-decodes the whole file (no caching).
    - Every save re-encodes the whole document and replaces the file.
    - `decoder` enforces the expected top-level shape (object or array).
    """

    def __init__(self, path: Path, *, decoder: Callable[[str], Any], seed: Any):
        self._path = path
        self._decoder = decoder
        self._seed = seed

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        return self._path.exists()

    def ensure(self) -> bool:
        """Create the file holding the empty seed document. Returns True if created."""
        if self.exists():
            return False
        self.save(self._seed)
        logger.info("Created %s", self._path)
        return True

    def load(self) -> Any:
        raw = read_text(self._path)
        logger.debug("Read %d bytes from %s", len(raw), self._path)
        return self._decoder(raw)

    def save(self, doc: Any) -> None:
        text = encode(doc)
        atomic_write_text(self._path, text)
        logger.debug("Wrote %d bytes to %s", len(text), self._path)
