"""Property definitions and module tunables for springs and splines."""

from __future__ import annotations

from dataclasses import dataclass

from .errors import InvalidParameterError


def _below_min(prop, value):
    return InvalidParameterError(f"{prop.name} must be >= {prop.min} ({prop.description}), got {value}")


def _note_soft_max(prop, value) -> None:
    if settings.debug and prop.soft_max is not None and value > prop.soft_max:
        print(f"[SS] {prop.name} {value} is above its usual range (soft max {prop.soft_max})")


@dataclass(frozen=True)
class FloatProperty:
    name: str
    default: float
    min: float | None = None
    soft_max: float | None = None
    description: str = ""
    # Below-min values snap to min instead of being rejected
    clamp: bool = False

    def coerce(self, value) -> float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InvalidParameterError(f"{self.name} must be a number, got {value!r}")
        value = float(value)
        if self.min is not None and value < self.min:
            if self.clamp:
                return self.min
            raise _below_min(self, value)
        _note_soft_max(self, value)
        return value


@dataclass(frozen=True)
class IntProperty:
    name: str
    default: int
    min: int | None = None
    soft_max: int | None = None
    description: str = ""

    def coerce(self, value) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidParameterError(f"{self.name} must be an integer, got {value!r}")
        if self.min is not None and value < self.min:
            raise _below_min(self, value)
        _note_soft_max(self, value)
        return value


@dataclass
class Settings:
    """Tunables shared by every spring and spline.

    Attributes:
        epsilon: Default settle threshold for ``Spring.is_animating``.
        arc_length_step: Parametric step used when summing segment lengths.
        track_axis: Local axis that faces along the curve for ``Track``.
        up_axis: Local axis kept upright by ``Track``.
        euler_order: Euler order of the rotation channels of a pose.
        debug: Print ``[SS]`` diagnostics.
    """

    epsilon: float = 1e-4
    arc_length_step: float = 0.01
    track_axis: str = "-Z"
    up_axis: str = "Y"
    euler_order: str = "XYZ"
    debug: bool = False


settings = Settings()


_SPRING_PROPS = {
    "damper": FloatProperty(
        name="Damper",
        default=1.0,
        min=0.0,
        soft_max=2.0,
        description="0 = none, 1 = critical, >1 = over-damped",
    ),
    "speed": FloatProperty(
        name="Speed",
        default=1.0,
        min=0.0,
        soft_max=50.0,
        description="Angular frequency of the spring, negative values stop it",
        clamp=True,
    ),
}

_SPLINE_PROPS = {
    "segments": IntProperty(
        name="Segments",
        default=10,
        min=1,
        soft_max=100,
        description="Curve samples per control point, higher is smoother but slower to draw",
    ),
}


__all__ = ["FloatProperty", "IntProperty", "Settings", "settings"]
