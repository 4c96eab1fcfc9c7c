from __future__ import annotations

import math
import operator
import random
from typing import Any, Callable, Iterable, Mapping, Sequence

from .errors import TypeMismatchError
from .records import KeyedRecord

MATH_OPERATIONS: dict[str, Callable[[Any, Any], Any]] = {
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
    "/": operator.truediv,
    "**": operator.pow,
}


def is_number(value: Any) -> bool:
    # bool is an int subclass but a distinct JSON type
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def type_tag(value: Any, *, present: bool = True) -> str:
    if not present:
        return "undefined"
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if is_number(value):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    return "object"


def apply_math(current: Any, op: str, amount: Any) -> Any:
    """
    Compute `current <op> amount` after checking both sides are numbers.

    Raises TypeMismatchError for non-numeric operands, and ValueError for an
    unknown operator or a result JSON cannot hold (complex, inf, overflow).
    """
    if not is_number(amount):
        raise TypeMismatchError(f"Expected number but got {type_tag(amount)} to perform math!")
    if not is_number(current):
        raise TypeMismatchError(f"Expected number but got {type_tag(current)} to perform math!")
    fn = MATH_OPERATIONS.get(op)
    if fn is None:
        raise ValueError(f"Unknown math operator {op!r}, expected one of {sorted(MATH_OPERATIONS)}")
    try:
        result = fn(current, amount)
    except OverflowError as e:
        raise ValueError(f"Result of {current!r} {op} {amount!r} is out of range") from e
    if not is_number(result) or (isinstance(result, float) and not math.isfinite(result)):
        raise ValueError(f"Result of {current!r} {op} {amount!r} is not a finite real number")
    return result


def push_elements(current: Any, elements: Sequence[Any]) -> list[Any]:
    if not isinstance(current, list):
        raise TypeMismatchError("Expected an array to push data!")
    return [*current, *elements]


def pull_elements(current: Any, elements: Sequence[Any]) -> list[Any]:
    if not isinstance(current, list):
        raise TypeMismatchError("Expected an array to pull data!")
    return [x for x in current if not any(json_equal(x, e) for e in elements)]


def to_records(data: Mapping[str, Any]) -> list[KeyedRecord]:
    return [KeyedRecord(key=k, value=v) for k, v in data.items()]


def from_records(records: Iterable[KeyedRecord | Mapping[str, Any]]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for rec in records:
        r = rec if isinstance(rec, KeyedRecord) else KeyedRecord.model_validate(rec)
        out[r.key] = r.value
    return out


def random_records(records: Sequence[KeyedRecord], limit: int | None = None) -> KeyedRecord | list[KeyedRecord] | None:
    """
    One uniformly random record, or `limit` independent draws with replacement.
    """
    if not limit:
        return random.choice(records) if records else None
    if not records:
        return []
    return random.choices(records, k=limit)


def drop_matching(data: Mapping[str, Any], predicate: Callable[[Any, str, int], Any]) -> dict[str, Any]:
    """
    Keep the entries for which `predicate(value, key, index)` is falsy.

    Iterates a fixed snapshot of the items, so removals never shift indexes.
    """
    snapshot = list(data.items())
    return {k: v for i, (k, v) in enumerate(snapshot) if not predicate(v, k, i)}


def json_equal(a: Any, b: Any) -> bool:
    """Value equality that keeps JSON types apart (`true` is not `1`)."""
    if type_tag(a) != type_tag(b):
        return False
    if isinstance(a, list):
        return len(a) == len(b) and all(json_equal(x, y) for x, y in zip(a, b))
    if isinstance(a, Mapping) and isinstance(b, Mapping):
        return a.keys() == b.keys() and all(json_equal(a[k], b[k]) for k in a)
    return a == b
