"""Record primitives shared by handles.

A Record is any mutable mapping (normally a plain dict). Lists, tuples, None,
dates, exceptions and read-only mappings are leaves.
"""

from __future__ import annotations

import copy
from collections.abc import MutableMapping
from typing import Any, Dict, Set, Tuple


class _MissingType:
    """Marker for "no value", distinct from a stored None."""

    __slots__ = ()
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    def __reduce__(self):
        return (_MissingType, ())


MISSING = _MissingType()


def is_record(value: Any) -> bool:
    return isinstance(value, MutableMapping)


def deep_copy(record: Any) -> Any:
    return copy.deepcopy(record)


def _merge_into(dst: Any, src: Any, memo: Dict[int, Any], active: Set[Tuple[int, int]]) -> None:
    pair = (id(dst), id(src))
    if pair in active:
        # Cyclic records: this pair is already being merged further up.
        return
    active.add(pair)
    for k, v in src.items():
        cur = dst.get(k, MISSING)
        if is_record(cur) and is_record(v):
            _merge_into(cur, v, memo, active)
        else:
            dst[k] = copy.deepcopy(v, memo)
    active.discard(pair)


def deep_merge(*records: Any) -> Dict[str, Any]:
    """Return a new dict holding every record merged in order (last wins).

    Records found on both sides of a key are merged recursively instead of
    replaced. Leaves are deep-copied through one shared memo, so the result
    never aliases an input while values shared inside the inputs stay shared.
    Arguments that are not records are ignored.
    """
    out: Dict[str, Any] = {}
    memo: Dict[int, Any] = {}
    for r in records:
        if not is_record(r):
            continue
        if not out and not memo:
            # The first record becomes `out`; references back to it point at `out`.
            memo[id(r)] = out
        _merge_into(out, r, memo, set())
    return out
