from __future__ import annotations

from typing import Any, Protocol


class JsonDocumentStore(Protocol):
    """
    Minimal storage interface: a single JSON document persisted as a whole.
    """

    def load(self) -> Any:
        """Load and return the full document."""
        ...

    def save(self, doc: Any) -> None:
        """Persist the full document, replacing what was there."""
        ...
