from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Callable, Iterator, Mapping, Union

from .disk_store import DiskJsonDocumentStore
from .errors import StorageError
from .json_store import decode_list
from .settings import REMOVAL_MODES, get_settings

logger = logging.getLogger(__name__)

DocumentFilter = Union[Callable[[Any], Any], Mapping[str, Any]]

_MISSING = object()


def matches(record: Any, flt: DocumentFilter) -> bool:
    """
    A callable filter is applied to the record. A mapping filter matches when
    ANY of its fields equals the same field of the record.
    """
    if callable(flt):
        return bool(flt(record))
    if not isinstance(flt, Mapping):
        raise TypeError(f"Filter must be a callable or a mapping, got {type(flt).__name__}")
    if not isinstance(record, Mapping):
        return False
    return any(record.get(k, _MISSING) == v for k, v in flt.items())


class Document:
    """
    List store: a JSON array of records on disk, searched by linear scan.

    `removal` picks what delete_one/delete_many discard for a match:
    "truncate" drops the match together with every record before it,
    "exact" drops only the match.
    """

    def __init__(self, path: str | os.PathLike[str] | None = None, *, removal: str | None = None):
        settings = get_settings()
        self._path = Path(path if path is not None else settings.default_path)
        self._removal = removal if removal is not None else settings.removal_mode
        if self._removal not in REMOVAL_MODES:
            raise ValueError(f"removal must be one of {REMOVAL_MODES}, got {self._removal!r}")
        self._store = DiskJsonDocumentStore(self._path, decoder=decode_list, seed=[])

        if not self._store.ensure():
            try:
                self._store.load()
            except StorageError as e:
                logger.warning("Initial read of %s failed: %r", self._path, e)
                raise StorageError("Error happened when reading the file as json at initial attempt!") from e

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self._path)!r}, removal={self._removal!r})"

    @property
    def path(self) -> Path:
        return self._path

    @property
    def filename(self) -> str:
        return str(self._path)

    @property
    def removal(self) -> str:
        return self._removal

    def read(self) -> list[Any]:
        return self._store.load()

    def write(self, records: list[Any]) -> None:
        self._store.save(list(records))

    def size(self) -> int:
        return len(self.read())

    def all(self) -> list[Any]:
        return self.read()

    get_all = all

    def iterate(self) -> Iterator[Any]:
        yield from self.read()

    def __iter__(self) -> Iterator[Any]:
        return self.iterate()

    def __len__(self) -> int:
        return self.size()

    def insert(self, *records: Any) -> Document:
        data = self.read()
        data.extend(records)
        self.write(data)
        return self

    @staticmethod
    def _first_index(data: list[Any], flt: DocumentFilter) -> int | None:
        for i, record in enumerate(data):
            if matches(record, flt):
                return i
        return None

    def find_one(self, flt: DocumentFilter) -> Any | None:
        data = self.read()
        i = self._first_index(data, flt)
        return data[i] if i is not None else None

    def find_many(self, flt: DocumentFilter) -> list[Any]:
        return [record for record in self.read() if matches(record, flt)]

    def exists(self, flt: DocumentFilter) -> bool:
        return self._first_index(self.read(), flt) is not None

    def delete_one(self, flt: DocumentFilter) -> Document:
        data = self.read()
        i = self._first_index(data, flt)
        if i is None:
            return self
        if self._removal == "truncate":
            self.write(data[i + 1 :])
        else:
            self.write(data[:i] + data[i + 1 :])
        return self

    def delete_many(self, flt: DocumentFilter) -> Document:
        data = self.read()
        hits = [i for i, record in enumerate(data) if matches(record, flt)]
        if not hits:
            return self
        if self._removal == "truncate":
            # each match discards itself and everything before it
            self.write(data[hits[-1] + 1 :])
        else:
            drop = set(hits)
            self.write([record for i, record in enumerate(data) if i not in drop])
        return self

    def clear(self) -> Document:
        self.write([])
        return self
