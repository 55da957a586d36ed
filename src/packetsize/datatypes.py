"""Python models of the platform's replicated value kinds.

Each datatype is a frozen dataclass carrying a `kind` class attribute that
matches the platform's type name. `kind_of` classifies any Python value the way
the platform's `typeof` would, so the estimator can dispatch on a single string:

  None                      -> "nil"
  bool                      -> "boolean"
  int / float               -> "number"
  str / bytes / bytearray   -> "string"
  list / tuple / dict       -> "table"
  datatype instance         -> its `kind`
  anything else             -> the Python type name (unsupported)
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, FrozenSet, Iterable, Tuple

INT16_MIN = -32768
INT16_MAX = 32767

FACE_NAMES = frozenset({"Top", "Bottom", "Left", "Right", "Front", "Back"})
AXIS_NAMES = frozenset({"X", "Y", "Z"})

IDENTITY_ROTATION = (1.0, 0.0, 0.0, 0.0, 1.0, 0.0, 0.0, 0.0, 1.0)


def kind_of(value) -> str:
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, (str, bytes, bytearray)):
        return "string"
    if isinstance(value, (list, tuple, dict)):
        return "table"
    for cls in DATATYPES:
        if isinstance(value, cls):
            return cls.kind
    return type(value).__name__


def _check_int16(*components: int) -> None:
    for c in components:
        if not isinstance(c, int) or isinstance(c, bool) or not INT16_MIN <= c <= INT16_MAX:
            raise ValueError(f"int16 component out of range: {c!r}")


@dataclass(frozen=True)
class EnumItem:
    kind: ClassVar[str] = "EnumItem"
    enum_type: str
    name: str
    value: int

    @classmethod
    def parse(cls, path: str, value: int = 0) -> "EnumItem":
        """Build from a dotted path such as ``Enum.Material.Plastic``."""
        parts = path.split(".")
        if parts and parts[0] == "Enum":
            parts = parts[1:]
        if len(parts) != 2 or not all(parts):
            raise ValueError(f"bad enum path {path!r}")
        return cls(parts[0], parts[1], value)


@dataclass(frozen=True)
class BrickColor:
    kind: ClassVar[str] = "BrickColor"
    number: int


@dataclass(frozen=True)
class Instance:
    """Reference to a replicated object; only its referent goes on the wire."""

    kind: ClassVar[str] = "Instance"
    path: str


@dataclass(frozen=True)
class Vector2:
    kind: ClassVar[str] = "Vector2"
    x: float = 0.0
    y: float = 0.0


@dataclass(frozen=True)
class Vector3:
    kind: ClassVar[str] = "Vector3"
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


@dataclass(frozen=True)
class Vector2int16:
    kind: ClassVar[str] = "Vector2int16"
    x: int = 0
    y: int = 0

    def __post_init__(self):
        _check_int16(self.x, self.y)


@dataclass(frozen=True)
class Vector3int16:
    kind: ClassVar[str] = "Vector3int16"
    x: int = 0
    y: int = 0
    z: int = 0

    def __post_init__(self):
        _check_int16(self.x, self.y, self.z)


@dataclass(frozen=True)
class Region3int16:
    kind: ClassVar[str] = "Region3int16"
    min: Vector3int16
    max: Vector3int16


@dataclass(frozen=True)
class Color3:
    kind: ClassVar[str] = "Color3"
    r: float = 0.0
    g: float = 0.0
    b: float = 0.0

    @classmethod
    def from_rgb(cls, r: int, g: int, b: int) -> "Color3":
        return cls(r / 255, g / 255, b / 255)


@dataclass(frozen=True)
class UDim:
    kind: ClassVar[str] = "UDim"
    scale: float = 0.0
    offset: int = 0


@dataclass(frozen=True)
class UDim2:
    kind: ClassVar[str] = "UDim2"
    x: UDim = field(default_factory=UDim)
    y: UDim = field(default_factory=UDim)

    @classmethod
    def new(cls, x_scale: float, x_offset: int, y_scale: float, y_offset: int) -> "UDim2":
        return cls(UDim(x_scale, x_offset), UDim(y_scale, y_offset))


@dataclass(frozen=True)
class Rect:
    kind: ClassVar[str] = "Rect"
    min: Vector2 = field(default_factory=Vector2)
    max: Vector2 = field(default_factory=Vector2)


@dataclass(frozen=True)
class Ray:
    kind: ClassVar[str] = "Ray"
    origin: Vector3 = field(default_factory=Vector3)
    direction: Vector3 = field(default_factory=Vector3)


@dataclass(frozen=True)
class PhysicalProperties:
    kind: ClassVar[str] = "PhysicalProperties"
    density: float
    friction: float
    elasticity: float
    friction_weight: float = 1.0
    elasticity_weight: float = 1.0


@dataclass(frozen=True)
class NumberRange:
    kind: ClassVar[str] = "NumberRange"
    min: float
    max: float

    def __post_init__(self):
        if self.min > self.max:
            raise ValueError("NumberRange min must not exceed max")


@dataclass(frozen=True)
class Faces:
    kind: ClassVar[str] = "Faces"
    faces: FrozenSet[str] = frozenset()

    def __post_init__(self):
        object.__setattr__(self, "faces", frozenset(self.faces))
        unknown = self.faces - FACE_NAMES
        if unknown:
            raise ValueError(f"unknown faces: {sorted(unknown)}")


@dataclass(frozen=True)
class Axes:
    kind: ClassVar[str] = "Axes"
    axes: FrozenSet[str] = frozenset()

    def __post_init__(self):
        object.__setattr__(self, "axes", frozenset(self.axes))
        unknown = self.axes - AXIS_NAMES
        if unknown:
            raise ValueError(f"unknown axes: {sorted(unknown)}")


@dataclass(frozen=True)
class DateTime:
    kind: ClassVar[str] = "DateTime"
    unix_millis: int


@dataclass(frozen=True)
class NumberSequenceKeypoint:
    kind: ClassVar[str] = "NumberSequenceKeypoint"
    time: float
    value: float
    envelope: float = 0.0


@dataclass(frozen=True)
class ColorSequenceKeypoint:
    kind: ClassVar[str] = "ColorSequenceKeypoint"
    time: float
    value: Color3


def _keypoints(points: Iterable, cls: type) -> Tuple:
    points = tuple(points)
    for p in points:
        if not isinstance(p, cls):
            raise ValueError(f"expected {cls.__name__}, got {type(p).__name__}")
    return points


@dataclass(frozen=True)
class NumberSequence:
    kind: ClassVar[str] = "NumberSequence"
    keypoints: Tuple[NumberSequenceKeypoint, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "keypoints", _keypoints(self.keypoints, NumberSequenceKeypoint))


@dataclass(frozen=True)
class ColorSequence:
    kind: ClassVar[str] = "ColorSequence"
    keypoints: Tuple[ColorSequenceKeypoint, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "keypoints", _keypoints(self.keypoints, ColorSequenceKeypoint))


def flatten_rotation(rotation) -> Tuple[float, ...]:
    """Return a row-major 9-tuple from a flat sequence or 3 rows of 3."""
    rows = tuple(rotation)
    if len(rows) == 3 and all(isinstance(r, (list, tuple)) for r in rows):
        rows = tuple(c for r in rows for c in r)
    if len(rows) != 9:
        raise ValueError(f"rotation must have 9 components, got {len(rows)}")
    return rows


@dataclass(frozen=True)
class CFrame:
    """Position plus 3x3 rotation matrix (row-major)."""

    kind: ClassVar[str] = "CFrame"
    position: Vector3 = field(default_factory=Vector3)
    rotation: Tuple[float, ...] = IDENTITY_ROTATION

    def __post_init__(self):
        object.__setattr__(self, "rotation", flatten_rotation(self.rotation))

    @classmethod
    def new(cls, x: float = 0.0, y: float = 0.0, z: float = 0.0) -> "CFrame":
        return cls(Vector3(x, y, z))


# Closed set of datatypes; kind_of ignores `kind` attributes on anything else.
DATATYPES = (
    EnumItem,
    BrickColor,
    Instance,
    Vector2,
    Vector3,
    Vector2int16,
    Vector3int16,
    Region3int16,
    Color3,
    UDim,
    UDim2,
    Rect,
    Ray,
    PhysicalProperties,
    NumberRange,
    Faces,
    Axes,
    DateTime,
    NumberSequenceKeypoint,
    ColorSequenceKeypoint,
    NumberSequence,
    ColorSequence,
    CFrame,
)
