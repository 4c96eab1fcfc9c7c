from __future__ import annotations


class InstantStoreError(Exception):
    """Base class for every error raised by instant_store."""


class StorageError(InstantStoreError):
    """The backing file could not be read or written."""


class FormatError(StorageError):
    """
    Contents are not valid JSON, not the expected top-level shape,
    or an import source is not one of the accepted shapes.
    """


class TypeMismatchError(InstantStoreError, TypeError):
    """A math/push/pull operation hit a value of the wrong type."""
