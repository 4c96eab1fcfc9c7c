from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from .errors import FormatError, StorageError


def _decode(text: str) -> Any:
    try:
        return json.loads(text)
    except (TypeError, ValueError) as e:
        raise FormatError(f"Invalid JSON: {e}") from e


def decode_mapping(text: str) -> dict[str, Any]:
    """Parse JSON text that must hold a top-level object."""
    doc = _decode(text)
    if not isinstance(doc, dict):
        raise FormatError(f"Expected a JSON object but got {type(doc).__name__}")
    return doc


def decode_list(text: str) -> list[Any]:
    """Parse JSON text that must hold a top-level array."""
    doc = _decode(text)
    if not isinstance(doc, list):
        raise FormatError(f"Expected a JSON array but got {type(doc).__name__}")
    return doc


def encode(value: Any) -> str:
    """
    Serialize to compact JSON (no whitespace, key order kept).

    NaN/Infinity and non-JSON types are rejected rather than written out.
    """
    try:
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError) as e:
        raise FormatError(f"Value is not JSON serializable: {e}") from e


def read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise FormatError(f"{path} is not valid UTF-8: {e}") from e
    except OSError as e:
        raise StorageError(f"Error occurred when reading {path}: {e}") from e


def atomic_write_text(path: Path, text: str) -> None:
    """
    Atomically write text to disk by writing to a temp file then replacing.

    The parent directory must already exist. The temp file is removed if
    the write fails.
    """
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    try:
        with tmp_path.open("w", encoding="utf-8") as f:
            f.write(text)
        tmp_path.replace(path)
    except OSError as e:
        tmp_path.unlink(missing_ok=True)
        raise StorageError(f"Error occurred when writing {path}: {e}") from e
