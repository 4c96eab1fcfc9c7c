from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable, Iterator, Mapping

from pydantic import ValidationError

from .disk_store import DiskJsonDocumentStore
from .errors import FormatError, StorageError
from .json_store import decode_mapping
from .records import KeyedRecord
from .settings import get_settings
from .util import (
    apply_math,
    drop_matching,
    from_records,
    pull_elements,
    push_elements,
    random_records,
    to_records,
    type_tag,
)

if TYPE_CHECKING:
    from .action import Action

logger = logging.getLogger(__name__)


class Database:
    """
    Keyed store: a JSON object on disk mapping string keys to JSON values.

    Nothing is cached. Every call reads the whole file, and every mutation
    writes the whole file back before returning.

        db = Database("database.json")
        db.set("foo", 1)
        db.math("foo", "+", 5)  # -> 6
    """

    def __init__(self, path: str | os.PathLike[str] | None = None):
        self._path = Path(path if path is not None else get_settings().default_path)
        self._store = DiskJsonDocumentStore(self._path, decoder=decode_mapping, seed={})

        if not self._store.ensure():
            try:
                self._store.load()
            except StorageError as e:
                logger.warning("Initial read of %s failed: %r", self._path, e)
                raise StorageError("Error happened when reading the file as json at initial attempt!") from e

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self._path)!r})"

    @property
    def path(self) -> Path:
        return self._path

    @property
    def filename(self) -> str:
        return str(self._path)

    # ---------- reads ----------

    def read(self) -> dict[str, Any]:
        return self._store.load()

    raw = read

    def keys(self) -> list[str]:
        return list(self.read().keys())

    def values(self) -> list[Any]:
        return list(self.read().values())

    def count(self) -> int:
        return len(self.read())

    def cache(self) -> dict[str, Any]:
        return dict(self.read())

    def all(self) -> list[KeyedRecord]:
        return to_records(self.read())

    def __len__(self) -> int:
        return self.count()

    def __iter__(self) -> Iterator[Any]:
        return iter(self.values())

    def __contains__(self, key: object) -> bool:
        return key in self.read()

    def get(self, key: str, default: Any = None) -> Any:
        return self.read().get(key, default)

    def exists(self, key: str) -> bool:
        return key in self.keys()

    def type_of(self, key: str) -> str:
        data = self.read()
        return type_tag(data.get(key), present=key in data)

    def random(self, limit: int | None = None) -> KeyedRecord | list[KeyedRecord] | None:
        """
        Random entries. Without a limit, a single record; with one, `limit`
        draws with replacement, so repeats are possible.
        """
        return random_records(self.all(), limit)

    # ---------- writes ----------

    def write(self, data: Mapping[str, Any]) -> None:
        self._store.save(dict(data))

    def set(self, key: str, value: Any) -> None:
        data = self.read()
        data[key] = value
        self.write(data)

    def delete(self, *keys: str) -> None:
        data = self.read()
        for key in keys:
            data.pop(key, None)
        self.write(data)

    def clear(self) -> None:
        self.write({})

    def filter(self, predicate: Callable[[Any, str, int], Any]) -> None:
        """Remove every entry for which `predicate(value, key, index)` is truthy."""
        self.write(drop_matching(self.read(), predicate))

    def math(self, key: str, operator: str, amount: Any) -> Any:
        data = self.read()
        result = apply_math(data.get(key), operator, amount)
        data[key] = result
        self.write(data)
        return result

    def add(self, key: str, amount: Any) -> Any:
        return self.math(key, "+", amount)

    def subtract(self, key: str, amount: Any) -> Any:
        return self.math(key, "-", amount)

    def push(self, key: str, *elements: Any) -> Database:
        data = self.read()
        data[key] = push_elements(data.get(key), elements)
        self.write(data)
        return self

    def pull(self, key: str, *elements: Any) -> Database:
        data = self.read()
        data[key] = pull_elements(data.get(key), elements)
        self.write(data)
        return self

    # ---------- import / export ----------

    def import_(self, source: Any) -> Database:
        """
        Merge entries into this store. `source` may be a mapping, a list of
        keyed records (`{"ID": ..., "data": ...}` or KeyedRecord), or the path
        of another keyed store file.
        """
        if isinstance(source, (str, os.PathLike)):
            return self.import_(Database(source).read())

        if isinstance(source, Mapping):
            incoming = dict(source)
        elif isinstance(source, list):
            try:
                incoming = from_records(source)
            except ValidationError as e:
                raise FormatError(f"Import records must be key/value records: {e}") from e
        else:
            raise FormatError(f"Given data type to import is not an object: {type(source).__name__}")

        data = self.read()
        data.update(incoming)
        self.write(data)
        return self

    def export(self, target: str | os.PathLike[str] | Database) -> Database:
        """Import this store's mapping into `target`, creating it if it is a path."""
        if not isinstance(target, Database):
            if not isinstance(target, (str, os.PathLike)):
                raise FormatError(f"Cannot export to {type(target).__name__}")
            target = Database(target)
        target.import_(self.read())
        return target

    # ---------- edit buffer ----------

    def make_edit_buffer(self) -> Action:
        from .action import Action

        return Action(self)

    action = make_edit_buffer
