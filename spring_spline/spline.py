"""Catmull-Rom spline through oriented control points.

Control points are poses (4x4 matrices). A query returns a pose on the curve:

* ``point_at_parametric_alpha`` spreads alpha evenly over the segments, so
  the speed along the curve changes with segment length and curvature.
* ``point_at_arc_length_alpha`` reparameterizes alpha with the cumulative
  arc-length table, so equal alpha steps cover roughly equal distances.

The rotation of the result follows the curve (``Alignment.TRACK``) or blends
the rotations of the two control points around it (``Alignment.NODES``).

The first and last control points are reused as their own outer neighbours,
which flattens the curvature at both ends of the curve.
"""

from __future__ import annotations

import math
from bisect import bisect_left
from enum import Enum

from mathutils import Matrix, Vector

from .draw import collect_curve_samples
from .errors import DegenerateSplineError, SplineError
from .handlers import Signal
from .orientation import as_pose, compose, look_at, slerp_rotation, smoothstep
from .properties import _SPLINE_PROPS, settings


class Alignment(str, Enum):
    TRACK = "Track"
    NODES = "Nodes"


def catmull_rom(p0: Vector, p1: Vector, p2: Vector, p3: Vector):
    """Return the polynomial coefficients of the segment from ``p1`` to ``p2``.

    Order is the interpolated point at ``p1``, the tangent, the second and
    the third derivative terms.
    """
    return (
        p1.copy(),
        0.5 * (p2 - p0),
        p0 - 2.5 * p1 + 2.0 * p2 - 0.5 * p3,
        1.5 * (p1 - p2) + 0.5 * (p3 - p0),
    )


def evaluate(point: Vector, tangent: Vector, second: Vector, third: Vector, t: float) -> Vector:
    return point + tangent * t + second * (t * t) + third * (t * t * t)


def derivative(tangent: Vector, second: Vector, third: Vector, t: float) -> Vector:
    return tangent + 2.0 * second * t + 3.0 * third * (t * t)


def _window(items, index: int):
    last = len(items) - 1
    return (
        items[max(index - 1, 0)],
        items[index],
        items[min(index + 1, last)],
        items[min(index + 2, last)],
    )


class Spline:
    """A curve through ``control_points`` with precomputed arc-length tables.

    Tables are only built for three or more control points; with fewer, only
    parametric queries are available.
    """

    def __init__(self, control_points, segments: int | None = None):
        if segments is None:
            segments = _SPLINE_PROPS["segments"].default
        self._segments = _SPLINE_PROPS["segments"].coerce(segments)
        self._control_points = self._coerce_points(control_points)
        self._visible = False
        self._curve = []
        self._curve_drawn = False
        self._curve_length = 0.0
        self._distance_points = []
        self._normalized_distance_points = []
        self._destroyed = False

        self.changed = Signal()
        self.destroying = Signal()

        self._update()

    def __repr__(self) -> str:
        return (
            f"Spline(control_points={len(self._control_points)}, segments={self._segments}, "
            f"length={self._curve_length:.4f})"
        )

    @staticmethod
    def _coerce_points(control_points) -> list:
        points = []
        for index, point in enumerate(control_points):
            try:
                points.append(as_pose(point))
            except (TypeError, ValueError) as exc:
                raise SplineError(f"Control point {index} is not a 3D location or pose: {point!r}") from exc
        if not points:
            raise SplineError("A spline needs at least one control point")
        return points

    # -------------------- PROPERTIES --------------------

    @property
    def control_points(self) -> list:
        return [point.copy() for point in self._control_points]

    @control_points.setter
    def control_points(self, value):
        self._control_points = self._coerce_points(value)
        self._update()

    @property
    def segments(self) -> int:
        return self._segments

    @segments.setter
    def segments(self, value: int):
        self._segments = _SPLINE_PROPS["segments"].coerce(value)
        self._update()

    resolution = segments

    @property
    def visible(self) -> bool:
        return self._visible

    @visible.setter
    def visible(self, value: bool):
        self._visible = bool(value)
        if self._visible and not self._curve_drawn:
            self._draw_curve()

    @property
    def curve(self) -> list:
        """Samples of the curve for display, see :func:`collect_curve_samples`."""
        if not self._curve_drawn:
            self._draw_curve()
        return list(self._curve)

    @property
    def curve_length(self) -> float:
        return self._curve_length

    @property
    def distance_points(self) -> tuple:
        return tuple(self._distance_points)

    @property
    def normalized_distance_points(self) -> tuple:
        return tuple(self._normalized_distance_points)

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    # -------------------- INTERNAL --------------------

    def _draw_curve(self) -> None:
        self._curve = collect_curve_samples(self)
        self._curve_drawn = True

    def _update(self) -> None:
        self._curve_length = 0.0
        self._distance_points = []
        self._normalized_distance_points = []
        self._curve = []
        self._curve_drawn = False

        count = len(self._control_points)
        if count >= 3:
            positions = [point.to_translation() for point in self._control_points]
            steps = max(1, round(1.0 / settings.arc_length_step))

            for index in range(count - 1):
                basis = catmull_rom(*_window(positions, index))
                length = 0.0
                last_position = positions[index]
                for step in range(1, steps + 1):
                    position = evaluate(*basis, step / steps)
                    length += (position - last_position).length
                    last_position = position
                self._curve_length += length
                self._distance_points.append(self._curve_length)

            if self._curve_length > 0.0:
                self._normalized_distance_points = [
                    distance / self._curve_length for distance in self._distance_points
                ]

        if self._visible:
            self._draw_curve()

        if settings.debug:
            print(f"[SS] rebuilt {self!r}")
        self.changed.fire(self)

    def _pose_on_segment(self, index: int, t: float, alignment: Alignment) -> Matrix:
        c0, c1, c2, c3 = _window(self._control_points, index)
        point, tangent, second, third = catmull_rom(
            c0.to_translation(), c1.to_translation(), c2.to_translation(), c3.to_translation()
        )
        position = evaluate(point, tangent, second, third, t)

        if alignment is Alignment.TRACK:
            return look_at(position, derivative(tangent, second, third, t), fallback=c1)
        return compose(position, slerp_rotation(c1, c2, smoothstep(t)))

    # -------------------- QUERIES --------------------

    def point_at_parametric_alpha(self, alpha: float, alignment: Alignment | str = Alignment.TRACK) -> Matrix:
        """Pose at ``alpha`` with alpha spread evenly across the segments."""
        alignment = Alignment(alignment)
        if alpha == 1:
            return self._control_points[-1].copy()

        scaled = (len(self._control_points) - 1) * alpha
        index = min(max(math.floor(scaled), 0), len(self._control_points) - 1)
        return self._pose_on_segment(index, scaled - index, alignment)

    def point_at_arc_length_alpha(self, alpha: float, alignment: Alignment | str = Alignment.TRACK) -> Matrix:
        """Pose at ``alpha`` with alpha measured as a fraction of curve length."""
        alignment = Alignment(alignment)
        normalized = self._normalized_distance_points
        if not normalized:
            if len(self._control_points) < 3:
                raise DegenerateSplineError(
                    f"Arc-length queries need at least 3 control points, spline has {len(self._control_points)}"
                )
            raise DegenerateSplineError("Arc-length queries need a spline with non-zero length")

        index = min(bisect_left(normalized, alpha), len(normalized) - 1)
        previous = normalized[index - 1] if index > 0 else 0.0
        span = normalized[index] - previous
        t = (alpha - previous) / span if span > 0.0 else 0.0
        return self._pose_on_segment(index, t, alignment)

    def destroy(self) -> None:
        """Notify ``destroying`` handlers once, then drop handlers and curve."""
        if self._destroyed:
            return
        self._destroyed = True
        self.destroying.fire(self)
        self.destroying.disconnect_all()
        self.changed.disconnect_all()
        self._curve = []
        self._curve_drawn = False
        self._visible = False


__all__ = ["Alignment", "Spline", "catmull_rom", "evaluate", "derivative"]
