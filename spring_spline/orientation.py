"""Pose and rotation helpers shared by springs and splines.

A pose is a 4x4 world matrix: translation plus rotation, the same layout the
viewport hands out as ``matrix_world``. Springs see a pose as six float
channels ``(x, y, z, rx, ry, rz)`` with the rotation as an Euler triple in
``settings.euler_order``; splines keep the matrix and blend rotations as
quaternions.
"""

from __future__ import annotations

import math

from mathutils import Euler, Matrix, Quaternion, Vector

from .properties import settings

EPS = 1e-8
TAU = 2.0 * math.pi

_AXES = {
    "X": (1.0, 0.0, 0.0),
    "Y": (0.0, 1.0, 0.0),
    "Z": (0.0, 0.0, 1.0),
}


def axis_vector(axis: str) -> Vector:
    """Return the unit vector for an axis name such as ``'Y'`` or ``'-Z'``."""
    sign = -1.0 if axis.startswith("-") else 1.0
    return Vector(_AXES[axis.lstrip("-")]) * sign


def _to_quaternion(rotation) -> Quaternion:
    if isinstance(rotation, Quaternion):
        return rotation.copy()
    # Euler and Matrix (3x3 or 4x4) both convert directly
    return rotation.to_quaternion()


def compose(location, rotation=None) -> Matrix:
    """Build a pose from a location and an optional rotation."""
    pose = Matrix.Translation(Vector(location))
    if rotation is not None:
        pose = pose @ _to_quaternion(rotation).to_matrix().to_4x4()
    return pose


def as_pose(value) -> Matrix:
    """Return a copy of ``value`` as a pose, promoting bare locations."""
    if isinstance(value, Matrix):
        if len(value) == 4 and len(value[0]) == 4:
            return value.copy()
        return value.to_4x4()
    return compose(value)


def pose_channels(pose: Matrix, order: str | None = None) -> tuple:
    """Split a pose into ``(x, y, z, rx, ry, rz)``."""
    location = pose.to_translation()
    angles = pose.to_euler(order or settings.euler_order)
    return (
        float(location.x),
        float(location.y),
        float(location.z),
        float(angles.x),
        float(angles.y),
        float(angles.z),
    )


def pose_from_channels(channels, order: str | None = None) -> Matrix:
    """Inverse of :func:`pose_channels`."""
    x, y, z, rx, ry, rz = channels
    rotation = Euler((rx, ry, rz), order or settings.euler_order)
    return Matrix.Translation(Vector((x, y, z))) @ rotation.to_matrix().to_4x4()


def closest_angle(angle: float, reference: float) -> float:
    """Pick whichever of ``angle`` and ``angle ± 2π`` lies nearest ``reference``."""
    best = angle
    for candidate in (angle + TAU, angle - TAU):
        if abs(candidate - reference) < abs(best - reference):
            best = candidate
    return best


def smoothstep(t: float) -> float:
    """Cubic ease-in/ease-out, ``3t² - 2t³``."""
    return t * t * (3.0 - 2.0 * t)


def look_at(position, direction, fallback=None) -> Matrix:
    """Pose at ``position`` whose track axis faces ``direction``.

    ``fallback`` supplies the rotation when ``direction`` has no length.
    """
    direction = Vector(direction)
    if direction.length < EPS:
        return compose(position, fallback)
    rotation = direction.to_track_quat(settings.track_axis, settings.up_axis)
    return compose(position, rotation)


def look_vector(pose: Matrix) -> Vector:
    """World direction the pose's track axis points along."""
    return pose.to_quaternion() @ axis_vector(settings.track_axis)


def slerp_rotation(origin, target, alpha: float) -> Quaternion:
    return _to_quaternion(origin).slerp(_to_quaternion(target), alpha)


def slerp_pose(origin: Matrix, target: Matrix, alpha: float) -> Matrix:
    """Lerp the translations and slerp the rotations of two poses."""
    location = origin.to_translation().lerp(target.to_translation(), alpha)
    return compose(location, slerp_rotation(origin, target, alpha))


def from_orientation_degrees(x: float, y: float, z: float) -> Quaternion:
    """Rotation from Euler angles given in degrees."""
    angles = Euler((math.radians(x), math.radians(y), math.radians(z)), settings.euler_order)
    return angles.to_quaternion()


def to_orientation_degrees(rotation) -> Vector:
    """Euler angles of a rotation (quaternion, euler or matrix), in degrees."""
    angles = _to_quaternion(rotation).to_euler(settings.euler_order)
    return Vector((math.degrees(angles.x), math.degrees(angles.y), math.degrees(angles.z)))


__all__ = [
    "axis_vector",
    "compose",
    "as_pose",
    "pose_channels",
    "pose_from_channels",
    "closest_angle",
    "smoothstep",
    "look_at",
    "look_vector",
    "slerp_rotation",
    "slerp_pose",
    "from_orientation_degrees",
    "to_orientation_degrees",
]
