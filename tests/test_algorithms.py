import math

import pytest
from shapely.geometry import LineString, MultiLineString, Point, Polygon, box
from shapely.ops import unary_union

from rgis.algorithms import chaikin_smoothing, earcut_triangles, outlier_scores


def test_chaikin_single_segment_worked_example():
    result = chaikin_smoothing(LineString([(0, 0), (4, 0)]), 1)
    assert list(result.coords) == [(0, 0), (1, 0), (3, 0), (4, 0)]


def test_chaikin_zero_iterations_keeps_geometry():
    line = LineString([(0, 0), (2, 3), (5, 1)])
    assert chaikin_smoothing(line, 0).equals(line)


def test_chaikin_open_line_keeps_end_points_and_grows():
    line = LineString([(0, 0), (2, 3), (5, 1), (7, 7)])
    result = chaikin_smoothing(line, 1)
    coords = list(result.coords)
    assert coords[0] == (0, 0)
    assert coords[-1] == (7, 7)
    assert len(coords) == 2 * (len(line.coords) - 1) + 2


def test_chaikin_polygon_stays_closed_and_inside_convex_shape():
    square = box(0, 0, 4, 4)
    smoothed = chaikin_smoothing(square, 2)
    ring = list(smoothed.exterior.coords)
    assert ring[0] == ring[-1]
    assert square.covers(smoothed)
    assert smoothed.area < square.area


def test_chaikin_closed_ring_count():
    ring = LineString([(0, 0), (4, 0), (4, 4), (0, 0)])
    result = chaikin_smoothing(ring, 1)
    assert len(result.coords) == 2 * (len(ring.coords) - 1) + 1
    assert result.coords[0] == result.coords[-1]


def test_chaikin_multi_line_string_smooths_each_part():
    a = LineString([(0, 0), (1, 1), (2, 0)])
    b = LineString([(5, 5), (6, 7), (8, 5)])
    result = chaikin_smoothing(MultiLineString([a, b]), 2)
    assert result.geoms[0].equals(chaikin_smoothing(a, 2))
    assert result.geoms[1].equals(chaikin_smoothing(b, 2))


def test_chaikin_rejects_points():
    with pytest.raises(TypeError):
        chaikin_smoothing(Point(0, 0), 1)


def test_chaikin_rejects_negative_iterations():
    with pytest.raises(ValueError):
        chaikin_smoothing(LineString([(0, 0), (1, 1)]), -1)


def _check_triangulation(polygon):
    triangles = earcut_triangles(polygon)
    total = sum(t.area for t in triangles)
    assert total == pytest.approx(polygon.area)
    assert unary_union(triangles).area == pytest.approx(polygon.area)
    grown = polygon.buffer(1e-9)
    assert all(grown.covers(t) for t in triangles)
    assert all(len(t.exterior.coords) == 4 for t in triangles)
    return triangles


def test_earcut_square_gives_two_triangles():
    triangles = _check_triangulation(box(0, 0, 1, 1))
    assert len(triangles) == 2


def test_earcut_concave_polygon():
    shape = Polygon([(0, 0), (2, 0), (2, 1), (1, 1), (1, 2), (0, 2)])
    _check_triangulation(shape)


def test_earcut_clockwise_input():
    shape = Polygon([(0, 0), (0, 3), (3, 3), (3, 0)])
    _check_triangulation(shape)


def test_earcut_polygon_with_hole():
    shape = Polygon(
        [(0, 0), (10, 0), (10, 10), (0, 10)],
        [[(4, 4), (6, 4), (6, 6), (4, 6)]],
    )
    _check_triangulation(shape)


def test_earcut_polygon_with_two_holes():
    shape = Polygon(
        [(0, 0), (20, 0), (20, 10), (0, 10)],
        [
            [(2, 2), (6, 2), (6, 6), (2, 6)],
            [(12, 3), (16, 3), (16, 7), (12, 7)],
        ],
    )
    _check_triangulation(shape)


def test_earcut_empty_polygon():
    assert earcut_triangles(Polygon()) == []


def test_outlier_scores_few_points_are_neutral():
    assert outlier_scores([(0, 0), (1, 1), (5, 5)], 15) == [1.0, 1.0, 1.0]


def test_outlier_scores_flag_distant_point():
    grid = [(x, y) for x in range(5) for y in range(5)]
    scores = outlier_scores(grid + [(100, 100)], 15)
    assert len(scores) == 26
    assert scores[-1] > 2
    assert all(score < 2 for score in scores[:-1])


def test_outlier_scores_symmetric_points_are_equal():
    ring = [
        (math.cos(2 * math.pi * i / 8), math.sin(2 * math.pi * i / 8)) for i in range(8)
    ]
    scores = outlier_scores(ring, 2)
    assert scores == pytest.approx([scores[0]] * 8)


def test_outlier_scores_accept_shapely_points():
    tuples = [(0, 0), (1, 0), (0, 1), (1, 1), (10, 10)]
    points = [Point(p) for p in tuples]
    assert outlier_scores(points, 2) == pytest.approx(outlier_scores(tuples, 2))