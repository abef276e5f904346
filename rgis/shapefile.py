"""Reader for the main (.shp) file of an ESRI shapefile."""

from __future__ import annotations

import struct
from collections.abc import Iterator, Sequence
from typing import List, Optional, Tuple

from shapely.geometry import (
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
)
from shapely.geometry.base import BaseGeometry

FILE_CODE = 9994
HEADER_SIZE = 100

_RECORD_HEADER = struct.Struct(">ii")

_NULL_TYPES = frozenset({0})
_POINT_TYPES = frozenset({1, 11, 21})
_POLYLINE_TYPES = frozenset({3, 13, 23})
_POLYGON_TYPES = frozenset({5, 15, 25})
_MULTIPOINT_TYPES = frozenset({8, 18, 28})

_XY = Tuple[float, float]


class ShapefileError(Exception):
    """Raised when shapefile data is malformed or uses an unsupported shape."""


def read_shapefile(data: bytes) -> List[BaseGeometry]:
    """Geometries of all non-null records, in file order."""
    if len(data) < HEADER_SIZE:
        raise ShapefileError("shapefile header is truncated")
    (file_code,) = struct.unpack_from(">i", data, 0)
    if file_code != FILE_CODE:
        raise ShapefileError(f"invalid shapefile file code: {file_code}")
    (length_words,) = struct.unpack_from(">i", data, 24)
    end = min(length_words * 2, len(data))
    return list(_records(data, end))


def _records(data: bytes, end: int) -> Iterator[BaseGeometry]:
    offset = HEADER_SIZE
    while offset < end:
        if offset + _RECORD_HEADER.size > end:
            raise ShapefileError("record header is truncated")
        number, words = _RECORD_HEADER.unpack_from(data, offset)
        start = offset + _RECORD_HEADER.size
        stop = start + words * 2
        if words < 2 or stop > end:
            raise ShapefileError(f"record {number} is truncated")
        geometry = _parse_record(data[start:stop], number)
        if geometry is not None:
            yield geometry
        offset = stop


def _parse_record(content: bytes, number: int) -> Optional[BaseGeometry]:
    try:
        return _decode_shape(content)
    except struct.error as exc:
        raise ShapefileError(f"record {number} is malformed: {exc}") from exc


def _decode_shape(content: bytes) -> Optional[BaseGeometry]:
    (shape_type,) = struct.unpack_from("<i", content, 0)
    if shape_type in _NULL_TYPES:
        return None
    if shape_type in _POINT_TYPES:
        x, y = struct.unpack_from("<2d", content, 4)
        return Point(x, y)
    if shape_type in _MULTIPOINT_TYPES:
        (count,) = struct.unpack_from("<i", content, 36)
        return MultiPoint(_points(content, 40, count))
    if shape_type in _POLYLINE_TYPES or shape_type in _POLYGON_TYPES:
        num_parts, num_points = struct.unpack_from("<2i", content, 36)
        if num_parts < 0:
            raise ShapefileError(f"negative part count: {num_parts}")
        indices = struct.unpack_from(f"<{num_parts}i", content, 44)
        points = _points(content, 44 + 4 * num_parts, num_points)
        parts = _split(points, indices)
        if shape_type in _POLYLINE_TYPES:
            return _lines(parts)
        return _polygons(parts)
    raise ShapefileError(f"unsupported shape type: {shape_type}")


def _points(content: bytes, offset: int, count: int) -> List[_XY]:
    if count < 0:
        raise ShapefileError(f"negative point count: {count}")
    values = struct.unpack_from(f"<{2 * count}d", content, offset)
    return list(zip(values[0::2], values[1::2]))


def _split(points: List[_XY], indices: Sequence[int]) -> List[List[_XY]]:
    bounds = [*indices, len(points)]
    parts = []
    for start, stop in zip(bounds, bounds[1:]):
        if not 0 <= start <= stop <= len(points):
            raise ShapefileError("part indices are out of range")
        parts.append(points[start:stop])
    return parts


def _lines(parts: List[List[_XY]]) -> BaseGeometry:
    if not parts:
        raise ShapefileError("polyline has no parts")
    if any(len(part) < 2 for part in parts):
        raise ShapefileError("polyline part has fewer than two points")
    if len(parts) == 1:
        return LineString(parts[0])
    return MultiLineString(parts)


def _signed_area(ring: List[_XY]) -> float:
    shifted = ring[1:] + ring[:1]
    return sum(x0 * y1 - x1 * y0 for (x0, y0), (x1, y1) in zip(ring, shifted)) / 2


def _polygons(parts: List[List[_XY]]) -> BaseGeometry:
    if not parts:
        raise ShapefileError("polygon has no rings")
    shells: List[Tuple[List[_XY], List[List[_XY]]]] = []
    for ring in parts:
        if len(ring) < 3:
            raise ShapefileError("polygon ring has fewer than three points")
        # Outer rings are stored clockwise, holes counter-clockwise.
        if _signed_area(ring) < 0 or not shells:
            shells.append((ring, []))
        else:
            shells[-1][1].append(ring)
    polygons = [Polygon(shell, holes) for shell, holes in shells]
    if len(polygons) == 1:
        return polygons[0]
    return MultiPolygon(polygons)