"""Fluent, array-method-like handle over a (possibly nested) record.

Usage:
    h = wrap({"a": 1, "b": {"c": 2}})
    h.read("b", "c")                      # 2
    h.write(("b", "d"), 3).remove("a")
    h.map(lambda value, key, wrapped: value if wrapped is MISSING else wrapped.read())

Callbacks always receive (value, key, wrapped). `wrapped` is a fresh handle
around `value` when `value` is itself a record, else MISSING.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence, Tuple, Union

from .config import load_settings
from .errors import InvalidArgument
from .joins import fan_out
from .records import MISSING, deep_copy as _deep_copy, deep_merge, is_record

log = logging.getLogger("record_interface.handle")

Callback = Callable[[Any, str, Any], Any]
KeyPath = Union[str, Sequence[str]]


def _as_path(path: Any) -> Tuple[Any, ...]:
    if isinstance(path, (list, tuple)):
        return tuple(path)
    return (path,)


def _variadic_path(path: Tuple[Any, ...]) -> Tuple[Any, ...]:
    # read("b", "c") and read(("b", "c")) address the same value.
    if len(path) == 1 and isinstance(path[0], (list, tuple)):
        return tuple(path[0])
    return path


def _has(record: Any, key: Any) -> bool:
    try:
        return key in record
    except TypeError:
        # Unhashable keys can never be present.
        return False


class RecordHandle:
    def __init__(self, record: Any, deep_copy: Optional[bool] = None):
        if not is_record(record):
            raise InvalidArgument(f"record must be a mutable mapping, got {type(record).__name__}")
        if deep_copy is None:
            deep_copy = load_settings().deep_copy
        self.deep_copy = bool(deep_copy)
        self._src = _deep_copy(record) if self.deep_copy else record
        log.debug("wrapped record keys=%d deep_copy=%s", len(self._src), self.deep_copy)

    # ----------------------------------------
    # Access
    # ----------------------------------------
    @property
    def src(self) -> Any:
        """The working record (shared, not a copy)."""
        return self._src

    def read(self, *path: Any) -> Any:
        """Return the whole record, or the value at `path` (MISSING if absent).

        `path` is either separate keys or a single list/tuple of keys, the
        same shape write() takes.
        """
        cur = self._src
        for key in _variadic_path(path):
            if not is_record(cur) or not _has(cur, key):
                return MISSING
            cur = cur[key]
        return cur

    def write(self, path: Any = MISSING, value: Any = MISSING) -> "RecordHandle":
        """Store `value` at `path`, creating empty dicts for absent intermediates.

        An empty path replaces the whole working record.
        """
        if path is MISSING or value is MISSING:
            raise InvalidArgument("write() requires a key path and a value")
        keys = _as_path(path)
        if not keys:
            self._src = value
            return self

        cur = self._src
        for key in keys[:-1]:
            nxt = cur.get(key, MISSING) if is_record(cur) else MISSING
            if not is_record(nxt):
                nxt = {}
                cur[key] = nxt
            cur = nxt
        cur[keys[-1]] = value
        return self

    def replace(self, value: Any) -> "RecordHandle":
        return self.write((), value)

    def remove(self, *path: Any) -> "RecordHandle":
        keys = _variadic_path(path)
        if not keys:
            return self
        parent = self.read(keys[:-1])
        if is_record(parent) and _has(parent, keys[-1]):
            del parent[keys[-1]]
        return self

    # ----------------------------------------
    # Iteration
    # ----------------------------------------
    def _entries(self) -> List[Tuple[Any, Any]]:
        return list(self._src.items())

    def _args(self, key: Any, value: Any) -> Tuple[Any, Any, Any]:
        return value, key, maybe_wrap(value, self.deep_copy)

    def _result(self, out: Dict[Any, Any], wrap_result: bool) -> Any:
        if not out:
            return MISSING
        if wrap_result:
            return RecordHandle(out, deep_copy=self.deep_copy)
        return out

    def for_each(self, callback: Callback) -> "RecordHandle":
        for key, value in self._entries():
            callback(*self._args(key, value))
        return self

    def map(self, callback: Callback, wrap_result: bool = False) -> Any:
        out = {key: callback(*self._args(key, value)) for key, value in self._entries()}
        return self._result(out, wrap_result)

    def filter(self, callback: Callback, wrap_result: bool = False) -> Any:
        out = {key: value for key, value in self._entries() if callback(*self._args(key, value))}
        return self._result(out, wrap_result)

    def every(self, callback: Callback) -> bool:
        return all(callback(*self._args(key, value)) for key, value in self._entries())

    def some(self, callback: Callback) -> bool:
        return any(callback(*self._args(key, value)) for key, value in self._entries())

    def find(self, callback: Callback) -> Any:
        """Key of the first entry the callback accepts, else MISSING."""
        entry = self.find_entry(callback)
        return MISSING if entry is MISSING else entry[0]

    def find_entry(self, callback: Callback) -> Any:
        for key, value in self._entries():
            if callback(*self._args(key, value)):
                return key, value
        return MISSING

    async def for_each_async(self, callback: Callback) -> "RecordHandle":
        await fan_out(self._thunks(callback, self._entries()))
        return self

    async def map_async(self, callback: Callback, wrap_result: bool = False) -> Any:
        entries = self._entries()
        values = await fan_out(self._thunks(callback, entries))
        out = {key: v for (key, _), v in zip(entries, values)}
        return self._result(out, wrap_result)

    async def filter_async(self, callback: Callback, wrap_result: bool = False) -> Any:
        entries = self._entries()
        keep = await fan_out(self._thunks(callback, entries))
        out = {key: value for (key, value), ok in zip(entries, keep) if ok}
        return self._result(out, wrap_result)

    def _thunks(self, callback: Callback, entries: List[Tuple[Any, Any]]) -> Iterator[Callable[[], Any]]:
        for key, value in entries:
            args = self._args(key, value)
            yield lambda args=args: callback(*args)

    # ----------------------------------------
    # Whole-record copies
    # ----------------------------------------
    def clone(self, wrap_result: bool = False) -> Any:
        copied = _deep_copy(self._src)
        if wrap_result:
            return RecordHandle(copied, deep_copy=False)
        return copied

    def assign(self, *sources: Any) -> Dict[str, Any]:
        """Deep-merge `sources` over a copy of the record; the record is untouched.

        Sources that are not records are skipped.
        """
        records = []
        for i, s in enumerate(sources):
            if not is_record(s):
                log.debug("assign: skipping source %d of type %s", i, type(s).__name__)
                continue
            records.append(s)
        return deep_merge(self._src, *records)

    # ----------------------------------------
    # Container protocol
    # ----------------------------------------
    def __len__(self) -> int:
        return len(self._src)

    def __contains__(self, key: object) -> bool:
        return key in self._src

    def __iter__(self) -> Iterator[Any]:
        return iter(list(self._src))

    def __bool__(self) -> bool:
        return True

    def __repr__(self) -> str:
        return f"RecordHandle(deep_copy={self.deep_copy}, src={self._src!r})"


def maybe_wrap(value: Any, deep_copy: bool) -> Any:
    """Handle around `value` if it is a record, else MISSING. Never cached."""
    if is_record(value):
        return RecordHandle(value, deep_copy=deep_copy)
    return MISSING


def wrap(record: Any, deep_copy: Optional[bool] = None) -> RecordHandle:
    return RecordHandle(record, deep_copy=deep_copy)
