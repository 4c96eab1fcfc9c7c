from __future__ import annotations

import copy
import logging
from typing import TYPE_CHECKING, Any, Callable, Iterator

from .records import KeyedRecord
from .util import apply_math, drop_matching, pull_elements, push_elements, to_records, type_tag

if TYPE_CHECKING:
    from .database import Database

logger = logging.getLogger(__name__)


class Action:
    """
    In-memory edit buffer over a Database.

    Both the working copy and the undo snapshot are deep copies of the
    store's mapping at creation time. Edits touch only the working copy;
    nothing reaches the file until `commit()` or `rollback()`.

        action = db.make_edit_buffer()
        action.set("foo", "bar").delete("baz")
        action.commit()
    """

    def __init__(self, db: Database):
        self.db = db
        loaded = db.read()
        self.data: dict[str, Any] = copy.deepcopy(loaded)
        self._original: dict[str, Any] = copy.deepcopy(loaded)

    @property
    def original(self) -> dict[str, Any]:
        return copy.deepcopy(self._original)

    def raw(self) -> dict[str, Any]:
        return self.data

    def keys(self) -> list[str]:
        return list(self.data.keys())

    def values(self) -> list[Any]:
        return list(self.data.values())

    def count(self) -> int:
        return len(self.data)

    def cache(self) -> dict[str, Any]:
        return dict(self.data)

    def all(self) -> list[KeyedRecord]:
        return to_records(self.data)

    def __len__(self) -> int:
        return self.count()

    def __iter__(self) -> Iterator[Any]:
        return iter(self.values())

    def __contains__(self, key: object) -> bool:
        return key in self.data

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    def exists(self, key: str) -> bool:
        return key in self.data

    def type_of(self, key: str) -> str:
        return type_tag(self.data.get(key), present=key in self.data)

    def set(self, key: str, value: Any) -> Action:
        self.data[key] = value
        return self

    def delete(self, *keys: str) -> Action:
        for key in keys:
            self.data.pop(key, None)
        return self

    def filter(self, predicate: Callable[[Any, str, int], Any]) -> Action:
        self.data = drop_matching(self.data, predicate)
        return self

    def math(self, key: str, operator: str, amount: Any) -> Any:
        result = apply_math(self.data.get(key), operator, amount)
        self.data[key] = result
        return result

    def add(self, key: str, amount: Any) -> Any:
        return self.math(key, "+", amount)

    def subtract(self, key: str, amount: Any) -> Any:
        return self.math(key, "-", amount)

    def push(self, key: str, *elements: Any) -> Action:
        self.data[key] = push_elements(self.data.get(key), elements)
        return self

    def pull(self, key: str, *elements: Any) -> Action:
        self.data[key] = pull_elements(self.data.get(key), elements)
        return self

    def commit(self) -> Database:
        """Write the working copy to the store's file."""
        logger.debug("Committing %d entries to %s", len(self.data), self.db.path)
        self.db.write(self.data)
        return self.db

    def rollback(self) -> Database:
        """Write the creation-time snapshot back, discarding every buffered edit."""
        logger.debug("Rolling back %s to its snapshot", self.db.path)
        self.db.write(self._original)
        return self.db

    save = commit
    undo = rollback
