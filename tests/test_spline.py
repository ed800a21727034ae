import pytest
from mathutils import Euler, Vector

from spring_spline import Alignment, DegenerateSplineError, InvalidParameterError, Spline, SplineError
from spring_spline.orientation import compose, look_vector, to_orientation_degrees


def _collinear_spline():
    return Spline([Vector((x, 0.0, 0.0)) for x in (0.0, 10.0, 20.0, 30.0)])


def _rotated_points():
    return [
        compose((0.0, 0.0, 0.0), Euler((0.0, 0.0, 0.0), "XYZ")),
        compose((4.0, 2.0, 0.0), Euler((0.0, 0.0, 0.6), "XYZ")),
        compose((8.0, -1.0, 3.0), Euler((0.2, 0.0, 1.2), "XYZ")),
        compose((12.0, 0.0, 1.0), Euler((0.0, 0.4, -0.5), "XYZ")),
    ]


def _assert_vector(actual, expected, tol=1e-5):
    assert tuple(actual) == pytest.approx(tuple(expected), abs=tol)


def test_collinear_midpoint_faces_along_x():
    spline = _collinear_spline()

    pose = spline.point_at_parametric_alpha(0.5, "Track")

    assert pose.to_translation() == Vector((15.0, 0.0, 0.0))
    _assert_vector(look_vector(pose), (1.0, 0.0, 0.0))


def test_track_faces_backwards_along_x():
    spline = Spline([Vector((-x, 0.0, 0.0)) for x in (0.0, 5.0, 10.0)])

    pose = spline.point_at_parametric_alpha(0.3)

    _assert_vector(look_vector(pose), (-1.0, 0.0, 0.0))


@pytest.mark.parametrize("alignment", [Alignment.TRACK, Alignment.NODES])
def test_parametric_endpoint_is_exact(alignment):
    points = _rotated_points()
    spline = Spline(points)

    assert spline.point_at_parametric_alpha(1, alignment) == points[-1]
    assert spline.point_at_parametric_alpha(1.0, alignment) == points[-1]


def test_parametric_start_sits_on_first_point():
    points = _rotated_points()
    spline = Spline(points)

    pose = spline.point_at_parametric_alpha(0.0, Alignment.NODES)

    assert pose.to_translation() == points[0].to_translation()
    assert pose.to_quaternion().rotation_difference(points[0].to_quaternion()).angle == pytest.approx(0.0, abs=1e-3)


def test_parametric_alpha_passes_through_control_points():
    points = _rotated_points()
    spline = Spline(points)

    for index, alpha in ((1, 1 / 3), (2, 2 / 3)):
        pose = spline.point_at_parametric_alpha(alpha)
        _assert_vector(pose.to_translation(), points[index].to_translation(), tol=1e-4)


def test_arc_length_table_is_increasing_and_ends_at_one():
    spline = Spline(_rotated_points())
    normalized = spline.normalized_distance_points

    assert len(normalized) == 3
    assert normalized[0] > 0.0
    assert all(a < b for a, b in zip(normalized, normalized[1:]))
    assert normalized[-1] == 1.0
    assert spline.distance_points[-1] == spline.curve_length


def test_collinear_arc_lengths():
    spline = _collinear_spline()

    assert spline.curve_length == pytest.approx(30.0, abs=1e-3)
    assert spline.distance_points == pytest.approx((10.0, 20.0, 30.0), abs=1e-3)


def test_arc_length_query_on_collinear_points():
    spline = _collinear_spline()

    pose = spline.point_at_arc_length_alpha(0.5)

    _assert_vector(pose.to_translation(), (15.0, 0.0, 0.0), tol=1e-3)
    _assert_vector(look_vector(pose), (1.0, 0.0, 0.0))


def test_arc_length_query_hits_control_points_at_table_entries():
    points = _rotated_points()
    spline = Spline(points)

    for index, normalized in enumerate(spline.normalized_distance_points, start=1):
        pose = spline.point_at_arc_length_alpha(normalized)
        _assert_vector(pose.to_translation(), points[index].to_translation(), tol=1e-4)


def test_arc_length_spacing_is_more_even_than_parametric():
    # A short segment followed by a long one
    spline = Spline([Vector((x, 0.0, 0.0)) for x in (0.0, 1.0, 2.0, 20.0)])

    parametric = spline.point_at_parametric_alpha(0.5).to_translation().x
    linear = spline.point_at_arc_length_alpha(0.5).to_translation().x

    assert abs(linear - 10.0) < abs(parametric - 10.0)


def test_nodes_alignment_eases_between_rotations():
    start = compose((0.0, 0.0, 0.0), Euler((0.0, 0.0, 0.0), "XYZ"))
    end = compose((10.0, 0.0, 0.0), Euler((0.0, 0.0, 1.5707963267948966), "XYZ"))
    spline = Spline([start, end])

    halfway = spline.point_at_parametric_alpha(0.5, "Nodes")
    quarter = spline.point_at_parametric_alpha(0.25, "Nodes")

    assert to_orientation_degrees(halfway).z == pytest.approx(45.0, abs=1e-3)
    # smoothstep(0.25) = 0.15625
    assert to_orientation_degrees(quarter).z == pytest.approx(14.0625, abs=1e-3)
    _assert_vector(halfway.to_translation(), (5.0, 0.0, 0.0))


def test_fewer_than_three_points_skip_tables():
    spline = Spline([Vector((0.0, 0.0, 0.0)), Vector((4.0, 0.0, 0.0))])

    assert spline.normalized_distance_points == ()
    assert spline.curve_length == 0.0
    with pytest.raises(DegenerateSplineError, match="at least 3"):
        spline.point_at_arc_length_alpha(0.5)
    _assert_vector(spline.point_at_parametric_alpha(0.5).to_translation(), (2.0, 0.0, 0.0))


def test_single_point_parametric_query():
    spline = Spline([Vector((1.0, 2.0, 3.0))])

    pose = spline.point_at_parametric_alpha(0.4, "Nodes")

    _assert_vector(pose.to_translation(), (1.0, 2.0, 3.0))


def test_coincident_points_reject_arc_length_queries():
    spline = Spline([Vector((1.0, 1.0, 1.0))] * 3)

    assert spline.curve_length == 0.0
    with pytest.raises(DegenerateSplineError, match="non-zero length"):
        spline.point_at_arc_length_alpha(0.2)

    pose = spline.point_at_parametric_alpha(0.2, "Track")
    _assert_vector(pose.to_translation(), (1.0, 1.0, 1.0))
    assert tuple(pose.to_quaternion()) == pytest.approx((1.0, 0.0, 0.0, 0.0), abs=1e-6)


def test_empty_control_points():
    with pytest.raises(SplineError):
        Spline([])


def test_unknown_alignment():
    spline = _collinear_spline()

    with pytest.raises(ValueError):
        spline.point_at_parametric_alpha(0.5, "Sideways")


def test_control_point_write_rebuilds_tables():
    spline = _collinear_spline()
    rebuilt = []
    spline.changed.connect(rebuilt.append)

    spline.control_points = [Vector((0.0, x, 0.0)) for x in (0.0, 5.0, 10.0)]

    assert rebuilt == [spline]
    assert spline.curve_length == pytest.approx(10.0, abs=1e-3)
    assert len(spline.normalized_distance_points) == 2


def test_control_points_are_copies():
    spline = _collinear_spline()
    points = spline.control_points
    points[0].translation = Vector((99.0, 0.0, 0.0))

    assert spline.control_points[0].to_translation() == Vector((0.0, 0.0, 0.0))


def test_segments_write():
    spline = _collinear_spline()
    length = spline.curve_length

    spline.segments = 4
    assert spline.segments == 4
    assert spline.resolution == 4
    assert spline.curve_length == length

    with pytest.raises(InvalidParameterError):
        spline.segments = 0
    with pytest.raises(InvalidParameterError):
        Spline([Vector((0.0, 0.0, 0.0))], segments=2.5)


def test_destroy_fires_once():
    spline = _collinear_spline()
    fired = []
    spline.destroying.connect(fired.append)
    spline.changed.connect(lambda _spline: fired.append("changed"))

    spline.destroy()
    spline.destroy()

    assert fired == [spline]
    assert spline.destroyed is True
    assert len(spline.destroying) == 0
    assert len(spline.changed) == 0


def _rotation_gap(pose, reference):
    return pose.to_quaternion().rotation_difference(reference.to_quaternion()).angle


def test_zero_span_segment_starts_at_its_control_point():
    start = compose((0.0, 0.0, 0.0), Euler((0.0, 0.0, 0.8), "XYZ"))
    points = [start, start, start, Vector((10.0, 0.0, 0.0)), Vector((20.0, 0.0, 0.0))]
    spline = Spline(points)

    assert spline.normalized_distance_points[0] == 0.0

    for alignment in (Alignment.TRACK, Alignment.NODES):
        pose = spline.point_at_arc_length_alpha(0.0, alignment)
        assert pose.to_translation() == start.to_translation()
        assert _rotation_gap(pose, start) == pytest.approx(0.0, abs=1e-4)


def test_alpha_past_the_table_uses_last_segment():
    spline = _collinear_spline()

    pose = spline.point_at_arc_length_alpha(1.0 + 1e-12)

    _assert_vector(pose.to_translation(), (30.0, 0.0, 0.0), tol=1e-4)
    _assert_vector(spline.point_at_arc_length_alpha(1.0).to_translation(), (30.0, 0.0, 0.0), tol=1e-4)


def test_track_without_direction_keeps_start_rotation():
    start = compose((0.0, 0.0, 0.0), Euler((0.3, 0.0, 0.5), "XYZ"))
    end = compose((10.0, 0.0, 0.0), Euler((0.0, 0.0, -1.0), "XYZ"))
    spline = Spline([start, start, end])

    # The first segment has no tangent at its start
    pose = spline.point_at_parametric_alpha(0.0, Alignment.TRACK)

    assert pose.to_translation() == start.to_translation()
    assert _rotation_gap(pose, start) == pytest.approx(0.0, abs=1e-4)
    assert _rotation_gap(pose, end) > 0.5


def test_flat_control_point_is_rejected():
    with pytest.raises(SplineError, match="Control point 1"):
        Spline([Vector((0.0, 0.0, 0.0)), Vector((1.0, 2.0))])
