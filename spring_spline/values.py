"""Springable value kinds and their channel codecs.

Every kind a spring can animate is listed in :class:`ValueKind`. Each kind has
one :class:`Codec` that splits a value into independent float channels, builds
a value back from channels, and measures how far a spring state is from rest.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from mathutils import Color, Matrix, Vector

from .errors import UnsupportedValueError, ValueKindMismatchError
from .orientation import pose_channels, pose_from_channels


@dataclass(frozen=True)
class Dim:
    """A layout length: a fraction of the parent plus a fixed offset."""

    scale: float = 0.0
    offset: float = 0.0


@dataclass(frozen=True)
class Dim2:
    """A pair of :class:`Dim` values for the two layout axes."""

    x: Dim = Dim()
    y: Dim = Dim()

    @classmethod
    def from_components(cls, x_scale: float, x_offset: float, y_scale: float, y_offset: float) -> "Dim2":
        return cls(Dim(x_scale, x_offset), Dim(y_scale, y_offset))


class ValueKind(Enum):
    SCALAR = "number"
    VECTOR2 = "Vector2"
    VECTOR3 = "Vector3"
    DIM2 = "Dim2"
    DIM = "Dim"
    POSE = "Pose"
    COLOR = "Color"


def _magnitude(values) -> float:
    return math.sqrt(sum(v * v for v in values))


def _difference(a, b) -> tuple:
    return tuple(x - y for x, y in zip(a, b))


def _whole_residuals(position, velocity, target):
    yield _magnitude(_difference(position, target))
    yield _magnitude(velocity)


def _per_channel_residuals(position, velocity, target):
    for p, v, t in zip(position, velocity, target):
        yield abs(p - t)
        yield abs(v)


def _pose_residuals(position, velocity, target):
    yield _magnitude(_difference(position[:3], target[:3]))
    yield _magnitude(velocity[:3])
    yield _magnitude(_difference(position[3:], target[3:]))
    yield _magnitude(velocity[3:])


@dataclass(frozen=True)
class Codec:
    """Channel strategy for one :class:`ValueKind`.

    Attributes:
        kind: The kind this codec serves.
        width: Number of channels.
        encode: Value to channel tuple.
        decode: Channel tuple to value.
        residuals: Distances from rest of a ``(position, velocity, target)``
            channel state; the spring is settled when none exceeds epsilon.
        bounds: Inclusive range position channels are clamped to.
        angular: Indices of channels that hold angles in radians.
    """

    kind: ValueKind
    width: int
    encode: Callable[[object], tuple]
    decode: Callable[[tuple], object]
    residuals: Callable
    bounds: tuple | None = None
    angular: tuple = ()

    @property
    def zero(self) -> tuple:
        return (0.0,) * self.width

    def constrain(self, channels: tuple) -> tuple:
        if self.bounds is None:
            return channels
        low, high = self.bounds
        return tuple(min(max(c, low), high) for c in channels)

    def settled(self, position, velocity, target, epsilon: float) -> bool:
        return all(r <= epsilon for r in self.residuals(position, velocity, target))


_CODECS = {
    ValueKind.SCALAR: Codec(
        kind=ValueKind.SCALAR,
        width=1,
        encode=lambda value: (float(value),),
        decode=lambda channels: channels[0],
        residuals=_per_channel_residuals,
    ),
    ValueKind.VECTOR2: Codec(
        kind=ValueKind.VECTOR2,
        width=2,
        encode=lambda value: (float(value.x), float(value.y)),
        decode=lambda channels: Vector(channels),
        residuals=_whole_residuals,
    ),
    ValueKind.VECTOR3: Codec(
        kind=ValueKind.VECTOR3,
        width=3,
        encode=lambda value: (float(value.x), float(value.y), float(value.z)),
        decode=lambda channels: Vector(channels),
        residuals=_whole_residuals,
    ),
    ValueKind.DIM2: Codec(
        kind=ValueKind.DIM2,
        width=4,
        encode=lambda value: (
            float(value.x.scale),
            float(value.x.offset),
            float(value.y.scale),
            float(value.y.offset),
        ),
        decode=lambda channels: Dim2.from_components(*channels),
        residuals=_per_channel_residuals,
    ),
    ValueKind.DIM: Codec(
        kind=ValueKind.DIM,
        width=2,
        encode=lambda value: (float(value.scale), float(value.offset)),
        decode=lambda channels: Dim(*channels),
        residuals=_per_channel_residuals,
    ),
    ValueKind.POSE: Codec(
        kind=ValueKind.POSE,
        width=6,
        encode=pose_channels,
        decode=pose_from_channels,
        residuals=_pose_residuals,
        angular=(3, 4, 5),
    ),
    ValueKind.COLOR: Codec(
        kind=ValueKind.COLOR,
        width=3,
        encode=lambda value: (float(value.r), float(value.g), float(value.b)),
        decode=lambda channels: Color(channels),
        residuals=_whole_residuals,
        bounds=(0.0, 1.0),
    ),
}


def classify(value) -> ValueKind:
    """Return the kind of ``value`` or raise :class:`UnsupportedValueError`."""
    if isinstance(value, bool):
        raise UnsupportedValueError(value)
    if isinstance(value, (int, float)):
        return ValueKind.SCALAR
    if isinstance(value, Vector):
        if len(value) == 2:
            return ValueKind.VECTOR2
        if len(value) == 3:
            return ValueKind.VECTOR3
    elif isinstance(value, Dim2):
        return ValueKind.DIM2
    elif isinstance(value, Dim):
        return ValueKind.DIM
    elif isinstance(value, Matrix):
        if len(value) == 4 and len(value[0]) == 4:
            return ValueKind.POSE
    elif isinstance(value, Color):
        return ValueKind.COLOR
    raise UnsupportedValueError(value)


def codec_for(kind: ValueKind) -> Codec:
    return _CODECS[kind]


def expect(kind: ValueKind, value, role: str = "value") -> tuple:
    """Encode ``value`` after checking it is of ``kind``."""
    try:
        actual = classify(value)
    except UnsupportedValueError:
        raise ValueKindMismatchError(kind, value, role) from None
    if actual is not kind:
        raise ValueKindMismatchError(kind, value, role)
    return _CODECS[kind].encode(value)


__all__ = ["Dim", "Dim2", "ValueKind", "Codec", "classify", "codec_for", "expect"]
