"""Packet documents: YAML (or JSON) descriptions of values to estimate.

A document is either a list of values or a mapping::

    skip_transport_overhead: false
    values:
      - true
      - hello
      - {Vector3: [1, 2, 3]}
      - {CFrame: {position: [0, 5, 0], rotation: [[0, 0, 1], [0, 1, 0], [-1, 0, 0]]}}
      - &shared [1, 2, 3]
      - *shared

A single-key mapping whose key names a datatype decodes to that datatype;
`{table: ...}` forces a plain table. Every other list or mapping is a table.
YAML aliases decode to the same object, so they are priced once per packet.
"""
from __future__ import annotations

from typing import Any, Callable, Dict, Optional, Sequence

import yaml

from .datatypes import (
    Axes,
    BrickColor,
    CFrame,
    Color3,
    ColorSequence,
    ColorSequenceKeypoint,
    DateTime,
    EnumItem,
    Faces,
    Instance,
    NumberRange,
    NumberSequence,
    NumberSequenceKeypoint,
    PhysicalProperties,
    Ray,
    Rect,
    Region3int16,
    UDim,
    UDim2,
    Vector2,
    Vector2int16,
    Vector3,
    Vector3int16,
)
from .models import PacketConfig

TABLE_TAG = "table"
DOCUMENT_KEYS = frozenset({"values", "skip_transport_overhead"})


def _is_number(v: Any) -> bool:
    return isinstance(v, (int, float)) and not isinstance(v, bool)


def _nums(node: Any, kind: str, counts: Sequence[int]) -> list:
    if not isinstance(node, list) or len(node) not in counts or not all(_is_number(c) for c in node):
        want = " or ".join(str(c) for c in counts)
        raise ValueError(f"{kind}: expected a list of {want} numbers, got {node!r}")
    return node


def _ints(node: Any, kind: str, count: int) -> list:
    _nums(node, kind, (count,))
    if not all(isinstance(c, int) for c in node):
        raise ValueError(f"{kind}: components must be integers, got {node!r}")
    return node


def _pair(node: Any, kind: str) -> list:
    if not isinstance(node, list) or len(node) != 2:
        raise ValueError(f"{kind}: expected a pair, got {node!r}")
    return node


def _enum_item(node: Any) -> EnumItem:
    if isinstance(node, str):
        return EnumItem.parse(node)
    path, value = _pair(node, "EnumItem")
    if not isinstance(path, str) or not isinstance(value, int):
        raise ValueError(f"EnumItem: expected [path, value], got {node!r}")
    return EnumItem.parse(path, value)


def _scalar(kind: str, typ: type, cls: Callable) -> Callable[[Any], Any]:
    def decode(node: Any):
        if not isinstance(node, typ) or isinstance(node, bool):
            raise ValueError(f"{kind}: expected {typ.__name__}, got {node!r}")
        return cls(node)
    return decode


def _names(kind: str, cls: Callable) -> Callable[[Any], Any]:
    def decode(node: Any):
        if not isinstance(node, list) or not all(isinstance(n, str) for n in node):
            raise ValueError(f"{kind}: expected a list of names, got {node!r}")
        return cls(frozenset(node))
    return decode


def _color_keypoint(node: Any) -> ColorSequenceKeypoint:
    t, rgb = _pair(node, "ColorSequenceKeypoint")
    if not _is_number(t):
        raise ValueError(f"ColorSequenceKeypoint: bad time {t!r}")
    return ColorSequenceKeypoint(t, Color3(*_nums(rgb, "ColorSequenceKeypoint", (3,))))


def _number_keypoint(node: Any) -> NumberSequenceKeypoint:
    return NumberSequenceKeypoint(*_nums(node, "NumberSequenceKeypoint", (2, 3)))


def _keypoint_list(kind: str, point: Callable, cls: Callable) -> Callable[[Any], Any]:
    def decode(node: Any):
        if not isinstance(node, list):
            raise ValueError(f"{kind}: expected a list of keypoints, got {node!r}")
        return cls([point(p) for p in node])
    return decode


def _cframe(node: Any) -> CFrame:
    if isinstance(node, list):
        return CFrame.new(*_nums(node, "CFrame", (3,)))
    if not isinstance(node, dict) or not set(node) <= {"position", "rotation"}:
        raise ValueError(f"CFrame: expected [x, y, z] or {{position, rotation}}, got {node!r}")
    position = Vector3(*_nums(node.get("position", [0, 0, 0]), "CFrame", (3,)))
    if "rotation" not in node:
        return CFrame(position)
    rotation = node["rotation"]
    if isinstance(rotation, list) and len(rotation) == 3:
        for row in rotation:
            _nums(row, "CFrame", (3,))
    else:
        _nums(rotation, "CFrame", (9,))
    return CFrame(position, rotation)


def _region3int16(node: Any) -> Region3int16:
    lo, hi = _pair(node, "Region3int16")
    return Region3int16(
        Vector3int16(*_ints(lo, "Region3int16", 3)),
        Vector3int16(*_ints(hi, "Region3int16", 3)),
    )


def _ray(node: Any) -> Ray:
    origin, direction = _pair(node, "Ray")
    return Ray(Vector3(*_nums(origin, "Ray", (3,))), Vector3(*_nums(direction, "Ray", (3,))))


def _rect(node: Any) -> Rect:
    x0, y0, x1, y1 = _nums(node, "Rect", (4,))
    return Rect(Vector2(x0, y0), Vector2(x1, y1))


def _number_range(node: Any) -> NumberRange:
    if _is_number(node):
        return NumberRange(node, node)
    lo, *rest = _nums(node, "NumberRange", (1, 2))
    return NumberRange(lo, rest[0] if rest else lo)


DECODERS: Dict[str, Callable[[Any], Any]] = {
    "EnumItem": _enum_item,
    "BrickColor": _scalar("BrickColor", int, BrickColor),
    "Instance": _scalar("Instance", str, Instance),
    "DateTime": _scalar("DateTime", int, DateTime),
    "Faces": _names("Faces", Faces),
    "Axes": _names("Axes", Axes),
    "Vector2": lambda n: Vector2(*_nums(n, "Vector2", (2,))),
    "Vector3": lambda n: Vector3(*_nums(n, "Vector3", (3,))),
    "Vector2int16": lambda n: Vector2int16(*_ints(n, "Vector2int16", 2)),
    "Vector3int16": lambda n: Vector3int16(*_ints(n, "Vector3int16", 3)),
    "Region3int16": _region3int16,
    "Color3": lambda n: Color3(*_nums(n, "Color3", (3,))),
    "UDim": lambda n: UDim(*_nums(n, "UDim", (2,))),
    "UDim2": lambda n: UDim2.new(*_nums(n, "UDim2", (4,))),
    "Rect": _rect,
    "Ray": _ray,
    "PhysicalProperties": lambda n: PhysicalProperties(*_nums(n, "PhysicalProperties", (3, 5))),
    "NumberRange": _number_range,
    "NumberSequenceKeypoint": _number_keypoint,
    "ColorSequenceKeypoint": _color_keypoint,
    "NumberSequence": _keypoint_list("NumberSequence", _number_keypoint, NumberSequence),
    "ColorSequence": _keypoint_list("ColorSequence", _color_keypoint, ColorSequence),
    "CFrame": _cframe,
}


def _decode_table(node: Any, memo: Dict[int, Any]) -> Any:
    if id(node) in memo:
        return memo[id(node)]
    if isinstance(node, list):
        out_list: list = []
        memo[id(node)] = out_list
        out_list.extend(decode_value(v, memo) for v in node)
        return out_list
    if isinstance(node, dict):
        out: dict = {}
        memo[id(node)] = out
        for k, v in node.items():
            out[decode_value(k, memo)] = decode_value(v, memo)
        return out
    raise ValueError(f"table: expected a list or mapping, got {node!r}")


def decode_value(node: Any, memo: Optional[Dict[int, Any]] = None) -> Any:
    """Turn one parsed YAML node into an estimator value."""
    if memo is None:
        memo = {}
    if isinstance(node, (list, dict)) and id(node) in memo:
        return memo[id(node)]
    if isinstance(node, dict) and len(node) == 1:
        (tag, body), = node.items()
        if tag == TABLE_TAG:
            return _decode_table(body, memo)
        decoder = DECODERS.get(tag)
        if decoder is not None:
            value = decoder(body)
            memo[id(node)] = value
            return value
    if isinstance(node, (list, dict)):
        return _decode_table(node, memo)
    return node


def load_document(text: str) -> PacketConfig:
    try:
        doc = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ValueError(f"invalid packet document: {e}") from e
    if doc is None:
        return PacketConfig()
    memo: Dict[int, Any] = {}
    if isinstance(doc, list):
        return PacketConfig(values=[decode_value(v, memo) for v in doc])
    if not isinstance(doc, dict) or not isinstance(doc.get("values", []), list):
        raise ValueError("packet document must be a list or a mapping with a 'values' list")
    unknown = set(doc) - DOCUMENT_KEYS
    if unknown:
        raise ValueError(f"unknown packet document keys: {sorted(map(str, unknown))}")
    skip = doc.get("skip_transport_overhead", False)
    if not isinstance(skip, bool):
        raise ValueError("skip_transport_overhead must be a boolean")
    return PacketConfig(
        values=[decode_value(v, memo) for v in doc.get("values", [])],
        skip_transport_overhead=skip,
    )
