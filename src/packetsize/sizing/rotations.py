"""The 24 axis-aligned orientations.

The replicator sends an axis-aligned CFrame as position only; any other
rotation is sent in full. Matching is exact equality, like the wire format's
own fast-path check, so a rotation off by floating point noise is not aligned.
"""
from __future__ import annotations
from itertools import permutations, product
from typing import FrozenSet, Tuple

from ..datatypes import flatten_rotation


def _det3(m: Tuple[int, ...]) -> int:
    a, b, c, d, e, f, g, h, i = m
    return a * (e * i - f * h) - b * (d * i - f * g) + c * (d * h - e * g)


def _build() -> FrozenSet[Tuple[int, ...]]:
    out = set()
    # signed permutation matrices with determinant +1
    for perm in permutations(range(3)):
        for signs in product((1, -1), repeat=3):
            m = [0] * 9
            for row, col in enumerate(perm):
                m[row * 3 + col] = signs[row]
            if _det3(tuple(m)) == 1:
                out.add(tuple(m))
    return frozenset(out)


AXIS_ALIGNED_ROTATIONS = _build()


def is_axis_aligned(rotation) -> bool:
    try:
        rows = flatten_rotation(rotation)
    except (TypeError, ValueError):
        return False
    try:
        return rows in AXIS_ALIGNED_ROTATIONS
    except TypeError:
        # unhashable components
        return False
