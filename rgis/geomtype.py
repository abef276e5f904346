"""Bit flags describing which kinds of geometry a layer holds."""

from __future__ import annotations

import enum
from collections.abc import Iterable

from shapely.geometry.base import BaseGeometry


class GeomType(enum.Flag):
    """A set of geometry kinds."""

    POINT = 0b000000001
    LINE = 0b000000010
    LINE_STRING = 0b000000100
    POLYGON = 0b000001000
    MULTI_POINT = 0b000010000
    MULTI_LINE_STRING = 0b000100000
    MULTI_POLYGON = 0b001000000
    RECT = 0b010000000
    TRIANGLE = 0b100000000

    def __str__(self) -> str:
        return _LABELS.get(self.value, "(Unimplemented type")

    def has_fill(self) -> bool:
        """Whether geometries of these kinds are drawn with a fill colour."""
        return bool(self & _FILLED)


_LABELS = {
    GeomType.POINT.value: "Point",
    GeomType.LINE.value: "Line",
    GeomType.LINE_STRING.value: "LineString",
    GeomType.POLYGON.value: "Polygon",
    GeomType.MULTI_POINT.value: "MultiPoint",
    GeomType.MULTI_LINE_STRING.value: "MultiLineString",
    GeomType.MULTI_POLYGON.value: "MultiPolygon",
    GeomType.RECT.value: "Rectangle",
    GeomType.TRIANGLE.value: "Triangle",
}

_FILLED = (
    GeomType.POLYGON
    | GeomType.MULTI_POLYGON
    | GeomType.RECT
    | GeomType.TRIANGLE
    | GeomType.POINT
    | GeomType.MULTI_POINT
)

_BY_SHAPELY_TYPE = {
    "Point": GeomType.POINT,
    "LineString": GeomType.LINE_STRING,
    "LinearRing": GeomType.LINE_STRING,
    "Polygon": GeomType.POLYGON,
    "MultiPoint": GeomType.MULTI_POINT,
    "MultiLineString": GeomType.MULTI_LINE_STRING,
    "MultiPolygon": GeomType.MULTI_POLYGON,
}


def determine(geometries: Iterable[BaseGeometry]) -> GeomType:
    """Union of the kinds of all given geometries, looking inside collections."""
    result = GeomType(0)
    for geometry in geometries:
        kind = geometry.geom_type
        if kind == "GeometryCollection":
            result |= determine(geometry.geoms)
        elif kind in _BY_SHAPELY_TYPE:
            result |= _BY_SHAPELY_TYPE[kind]
        else:
            raise TypeError(f"unsupported geometry type: {kind}")
    return result