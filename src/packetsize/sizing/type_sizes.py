"""Fixed wire sizes per value kind.

Sizes are componentCount * componentWidth for the kind's known struct layout,
taken from community reverse-engineering of the replicator format. They are
estimates, not a verified protocol description.
"""
from __future__ import annotations
from types import MappingProxyType
from typing import Optional

F32 = 4
I16 = 2

# Per-call remote envelope.
TRANSPORT_OVERHEAD = 9
# Type tag in front of every value, top-level or nested.
TYPE_OVERHEAD = 1
# Unverified: length prefix approximated as 2 bytes.
STRING_OVERHEAD = 2
TABLE_HEADER = 1
SEQUENCE_HEADER = 4

CFRAME_TAG = 1
CFRAME_POSITION = 3 * F32
# Unverified: rotation sent as a quaternion of four half floats.
CFRAME_ROTATION = 4 * 2

TYPE_SIZES = MappingProxyType({
    "boolean": 1,
    "number": 8,
    "EnumItem": 4,
    "BrickColor": 4,
    "Instance": 4,
    "Vector2": 2 * F32,
    "Vector3": 3 * F32,
    "Vector2int16": 2 * I16,
    "Vector3int16": 3 * I16,
    "Region3int16": 6 * I16,
    "Color3": 3 * F32,
    "UDim": 2 * F32,
    "UDim2": 4 * F32,
    "Rect": 4 * F32,
    "Ray": 6 * F32,
    "PhysicalProperties": 5 * F32,
    "NumberRange": 2 * F32,
    "NumberSequenceKeypoint": 3 * F32,
    "ColorSequenceKeypoint": 4 * F32,
    "Faces": 1,
    "Axes": 1,
    "DateTime": 8,
})


def lookup(kind: str) -> Optional[int]:
    return TYPE_SIZES.get(kind)
