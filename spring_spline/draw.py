"""Display helpers for splines.

Nothing here renders; a host viewport draws the samples and segments these
functions collect.
"""

from __future__ import annotations

from dataclasses import dataclass

from mathutils import Vector


@dataclass(frozen=True)
class CurveSample:
    """One display point of a curve.

    ``name`` carries the 1-based index of the arc-length segment the sample
    falls in (``Point0`` when the spline has no tables), ``length`` the
    distance from the previous sample.
    """

    name: str
    alpha: float
    position: Vector
    length: float


def collect_curve_samples(spline) -> list:
    """Sample ``spline`` at ``segments`` points per control point, plus the end."""
    count = len(spline.control_points)
    total = spline.segments * count
    normalized = spline.normalized_distance_points

    samples = []
    last_position = None
    for i in range(total + 1):
        alpha = i / total
        position = spline.point_at_parametric_alpha(alpha).to_translation()

        segment_index = 0
        for j, distance in enumerate(normalized, start=1):
            if distance >= alpha:
                segment_index = j
                break

        length = (last_position - position).length if last_position is not None else 0.0
        samples.append(CurveSample(f"Point{segment_index}", alpha, position, length))
        last_position = position

    return samples


def collect_curve_segments(samples) -> list:
    """Consecutive sample positions as ``(start, end)`` line segments."""
    return [(a.position, b.position) for a, b in zip(samples, samples[1:])]


def diagnose_curve(spline) -> None:
    """Print diagnostic information about a spline's tables and samples."""
    points = spline.control_points
    print(
        f"[SS] control_points={len(points)}, segments={spline.segments}, "
        f"length={spline.curve_length:.4f}, visible={spline.visible}"
    )
    for index, (distance, normalized) in enumerate(
        zip(spline.distance_points, spline.normalized_distance_points), start=1
    ):
        print(f"  - segment {index}: distance={distance:.4f} normalized={normalized:.4f}")
    if len(points) < 3:
        print("  (!!) Fewer than 3 control points, arc-length queries are unavailable.")
    elif spline.curve_length == 0.0:
        print("  (!!) Control points coincide, the curve has no length.")


__all__ = ["CurveSample", "collect_curve_samples", "collect_curve_segments", "diagnose_curve"]
