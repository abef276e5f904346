"""Geometry algorithms: Chaikin smoothing, ear-clipping triangulation and outlier scores."""

from __future__ import annotations

import math
from collections.abc import Iterable
from typing import Any, Iterator, List, Sequence, Tuple

from shapely.geometry import (
    LinearRing,
    LineString,
    MultiLineString,
    MultiPolygon,
    Point,
    Polygon,
)
from shapely.geometry.base import BaseGeometry

XY = Tuple[float, float]


def _xy(coords: Iterable[Sequence[float]]) -> List[XY]:
    return [(float(c[0]), float(c[1])) for c in coords]


# Chaikin smoothing


def _smooth_coords(coords: List[XY]) -> List[XY]:
    if not coords:
        return []
    first, last = coords[0], coords[-1]
    closed = first == last
    out: List[XY] = [] if closed else [first]
    for (x0, y0), (x1, y1) in zip(coords, coords[1:]):
        out.append((0.75 * x0 + 0.25 * x1, 0.75 * y0 + 0.25 * y1))
        out.append((0.25 * x0 + 0.75 * x1, 0.25 * y0 + 0.75 * y1))
    if not closed:
        out.append(last)
    elif out:
        out.append(out[0])
    return out


def _smooth_iterated(coords: List[XY], iterations: int) -> List[XY]:
    for _ in range(iterations):
        coords = _smooth_coords(coords)
    return coords


def chaikin_smoothing(geometry: BaseGeometry, iterations: int) -> BaseGeometry:
    """Smooth a (multi) line string or (multi) polygon with Chaikin's algorithm.

    Open lines keep their end points; closed rings stay closed.
    """
    if iterations < 0:
        raise ValueError("iterations must not be negative")
    kind = geometry.geom_type
    if kind == "LineString":
        return LineString(_smooth_iterated(_xy(geometry.coords), iterations))
    if kind == "LinearRing":
        return LinearRing(_smooth_iterated(_xy(geometry.coords), iterations))
    if kind == "Polygon":
        if geometry.is_empty:
            return geometry
        shell = _smooth_iterated(_xy(geometry.exterior.coords), iterations)
        holes = [_smooth_iterated(_xy(r.coords), iterations) for r in geometry.interiors]
        return Polygon(shell, holes)
    if kind == "MultiLineString":
        return MultiLineString([chaikin_smoothing(g, iterations) for g in geometry.geoms])
    if kind == "MultiPolygon":
        return MultiPolygon([chaikin_smoothing(g, iterations) for g in geometry.geoms])
    raise TypeError(f"cannot smooth geometry of type {kind}")


# Ear-clipping triangulation


def _cross(a: XY, b: XY, c: XY) -> float:
    return (b[0] - a[0]) * (c[1] - a[1]) - (b[1] - a[1]) * (c[0] - a[0])


def _signed_area(points: List[XY]) -> float:
    shifted = points[1:] + points[:1]
    return sum(x0 * y1 - x1 * y0 for (x0, y0), (x1, y1) in zip(points, shifted)) / 2


def _ring_points(ring: Any, counter_clockwise: bool) -> List[XY]:
    points: List[XY] = []
    for coord in _xy(ring.coords):
        if not points or points[-1] != coord:
            points.append(coord)
    if len(points) > 1 and points[0] == points[-1]:
        points.pop()
    if (_signed_area(points) > 0) != counter_clockwise:
        points.reverse()
    return points


def _edges(points: List[XY]) -> Iterator[Tuple[XY, XY]]:
    return zip(points, points[1:] + points[:1])


def _segments_cross(p1: XY, p2: XY, q1: XY, q2: XY) -> bool:
    d1, d2 = _cross(q1, q2, p1), _cross(q1, q2, p2)
    d3, d4 = _cross(p1, p2, q1), _cross(p1, p2, q2)
    return d1 * d2 < 0 and d3 * d4 < 0


def _strictly_on_segment(p: XY, a: XY, b: XY) -> bool:
    if p in (a, b) or _cross(a, b, p) != 0:
        return False
    dot = (p[0] - a[0]) * (b[0] - a[0]) + (p[1] - a[1]) * (b[1] - a[1])
    length = (b[0] - a[0]) ** 2 + (b[1] - a[1]) ** 2
    return 0 < dot < length


def _bridge_is_clear(
    start: XY, end: XY, edges: List[Tuple[XY, XY]], points: List[XY], polygon: Polygon
) -> bool:
    if any(_segments_cross(start, end, q1, q2) for q1, q2 in edges):
        return False
    if any(_strictly_on_segment(p, start, end) for p in points):
        return False
    middle = ((start[0] + end[0]) / 2, (start[1] + end[1]) / 2)
    return polygon.contains(Point(middle))


def _eliminate_holes(outer: List[XY], holes: List[List[XY]], polygon: Polygon) -> List[XY]:
    ring = list(outer)
    pending = sorted(holes, key=lambda hole: max(x for x, _ in hole), reverse=True)
    for position, hole in enumerate(pending):
        rest = pending[position:]
        edges = list(_edges(ring)) + [edge for h in rest for edge in _edges(h)]
        points = ring + [p for h in rest for p in h]
        candidates = sorted(
            (math.dist(m, v), hole_index, ring_index)
            for hole_index, m in enumerate(hole)
            for ring_index, v in enumerate(ring)
        )
        for _, hole_index, ring_index in candidates:
            if _bridge_is_clear(hole[hole_index], ring[ring_index], edges, points, polygon):
                ring = (
                    ring[: ring_index + 1]
                    + hole[hole_index:]
                    + hole[: hole_index + 1]
                    + ring[ring_index:]
                )
                break
        else:
            raise ValueError("could not connect a hole to the outer ring")
    return ring


def _in_triangle(p: XY, a: XY, b: XY, c: XY) -> bool:
    return _cross(a, b, p) >= 0 and _cross(b, c, p) >= 0 and _cross(c, a, p) >= 0


def _is_ear(remaining: List[XY], a: XY, b: XY, c: XY) -> bool:
    corners = (a, b, c)
    return not any(_in_triangle(p, a, b, c) for p in remaining if p not in corners)


def _clip_ears(points: List[XY]) -> List[Tuple[XY, XY, XY]]:
    remaining = list(points)
    triangles: List[Tuple[XY, XY, XY]] = []
    while len(remaining) > 3:
        count = len(remaining)
        fallback = None
        for index, b in enumerate(remaining):
            a, c = remaining[index - 1], remaining[(index + 1) % count]
            turn = _cross(a, b, c)
            if turn == 0:
                del remaining[index]
                break
            if turn > 0:
                if fallback is None:
                    fallback = index
                if _is_ear(remaining, a, b, c):
                    triangles.append((a, b, c))
                    del remaining[index]
                    break
        else:
            # Numerically degenerate input: clip a convex vertex regardless.
            index = fallback if fallback is not None else 0
            triangles.append(
                (remaining[index - 1], remaining[index], remaining[(index + 1) % count])
            )
            del remaining[index]
    if len(remaining) == 3 and _cross(*remaining) != 0:
        triangles.append((remaining[0], remaining[1], remaining[2]))
    return triangles


def earcut_triangles(polygon: Polygon) -> List[Polygon]:
    """Triangulate a polygon (holes included) by ear clipping."""
    if polygon.is_empty:
        return []
    outer = _ring_points(polygon.exterior, counter_clockwise=True)
    if len(outer) < 3:
        return []
    holes = [_ring_points(r, counter_clockwise=False) for r in polygon.interiors]
    holes = [hole for hole in holes if len(hole) >= 3]
    vertices = _eliminate_holes(outer, holes, polygon)
    return [Polygon(triangle) for triangle in _clip_ears(vertices)]


# Local outlier factor


def _point_xy(point: Any) -> XY:
    if isinstance(point, Point):
        return (point.x, point.y)
    return (float(point[0]), float(point[1]))


def outlier_scores(points: Iterable[Any], k: int) -> List[float]:
    """Local outlier factor of each point over its k nearest neighbours.

    Scores near 1 mean a point is as dense as its neighbours; larger scores
    mark outliers. With no more than k points every score is 1.
    """
    coords = [_point_xy(p) for p in points]
    count = len(coords)
    if k < 1 or count <= k:
        return [1.0] * count
    distances = [[math.dist(p, q) for q in coords] for p in coords]
    neighbours = [
        sorted((j for j in range(count) if j != i), key=row.__getitem__)[:k]
        for i, row in enumerate(distances)
    ]
    k_distance = [distances[i][nbrs[-1]] for i, nbrs in enumerate(neighbours)]
    densities = []
    for i, nbrs in enumerate(neighbours):
        reach = sum(max(k_distance[j], distances[i][j]) for j in nbrs) / k
        densities.append(math.inf if reach == 0 else 1.0 / reach)
    scores = []
    for density, nbrs in zip(densities, neighbours):
        if math.isinf(density):
            scores.append(1.0)
        else:
            scores.append(sum(densities[j] for j in nbrs) / (k * density))
    return scores