"""Recursive byte-size estimation for a single value.

`visited` holds the id() of every table already priced during the current
top-level estimation. A table seen again (self reference, or the same object
shared between two places) costs 0 the second time.
"""
from __future__ import annotations
from typing import Any, Iterable, Set, Tuple

from ..datatypes import CFrame, ColorSequence, NumberSequence, kind_of
from ..obs.prom import observe_unsupported
from ..utils.logging import get_logger
from .rotations import is_axis_aligned
from .type_sizes import (
    CFRAME_POSITION,
    CFRAME_ROTATION,
    CFRAME_TAG,
    SEQUENCE_HEADER,
    STRING_OVERHEAD,
    TABLE_HEADER,
    TYPE_OVERHEAD,
    lookup,
)


def _string_size(value) -> int:
    if isinstance(value, str):
        # wire length is in bytes
        return len(value.encode("utf-8")) + STRING_OVERHEAD
    return len(value) + STRING_OVERHEAD


def _is_array(tbl) -> bool:
    """True when the table's keys are exactly 1..N."""
    if isinstance(tbl, (list, tuple)):
        return True
    indices = range(1, len(tbl) + 1)
    for key in tbl:
        if isinstance(key, bool) or not isinstance(key, (int, float)):
            return False
        if key not in indices:
            return False
    return True


def _entries(tbl) -> Iterable[Tuple[Any, Any]]:
    if isinstance(tbl, dict):
        return tbl.items()
    return enumerate(tbl, start=1)


def _table_size(tbl, visited: Set[int]) -> int:
    ident = id(tbl)
    if ident in visited:
        return 0
    visited.add(ident)

    if _is_array(tbl):
        count = 0
        value_total = 0
        for _, v in _entries(tbl):
            count += 1
            value_total += estimate(v, visited) + TYPE_OVERHEAD
        return TABLE_HEADER + count + value_total

    key_total = 0
    value_total = 0
    for k, v in _entries(tbl):
        key_total += estimate(k, visited) + TYPE_OVERHEAD
        value_total += estimate(v, visited) + TYPE_OVERHEAD
    return TABLE_HEADER + key_total + value_total


def _cframe_size(cf: CFrame) -> int:
    if is_axis_aligned(cf.rotation):
        return CFRAME_TAG + CFRAME_POSITION
    return CFRAME_TAG + CFRAME_POSITION + CFRAME_ROTATION


def _sequence_size(seq, visited: Set[int]) -> int:
    return SEQUENCE_HEADER + sum(estimate(kp, visited) for kp in seq.keypoints)


def estimate(value: Any, visited: Set[int]) -> int:
    kind = kind_of(value)
    if kind == "nil":
        return 0
    if kind == "string":
        return _string_size(value)
    if kind == "table":
        return _table_size(value, visited)
    if isinstance(value, CFrame):
        return _cframe_size(value)
    if isinstance(value, (NumberSequence, ColorSequence)):
        return _sequence_size(value, visited)
    size = lookup(kind)
    if size is not None:
        return size
    get_logger().warning("unsupported value kind %s; estimating 0 bytes", kind)
    observe_unsupported(kind)
    return 0
