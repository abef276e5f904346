"""Operations that visit a layer's geometries and produce a text or a new layer."""

from __future__ import annotations

import abc
import enum
import functools
import math
import operator
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Callable, ClassVar, Dict, List, Optional, Tuple, Union

from shapely import affinity
from shapely.geometry import (
    GeometryCollection,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Polygon,
)
from shapely.geometry.base import BaseGeometry

from .algorithms import chaikin_smoothing, earcut_triangles, outlier_scores
from .features import FeatureCollection
from .geomtype import GeomType
from .projected import Unprojected

ALL_GEOM_TYPES = functools.reduce(operator.or_, GeomType)

_OUTLIER_NEIGHBOURS = 15
_OUTLIER_THRESHOLD = 2.0
_ROTATION_DEGREES = 45.0
_SMOOTHING_ITERATIONS = 2


@dataclass(frozen=True)
class TextOutcome:
    """An operation result to be shown as text."""

    text: str


@dataclass(frozen=True)
class FeatureCollectionOutcome:
    """An operation result that becomes a new layer."""

    feature_collection: Unprojected[FeatureCollection]


Outcome = Union[TextOutcome, FeatureCollectionOutcome]


def _collection_outcome(geometry: BaseGeometry) -> FeatureCollectionOutcome:
    return FeatureCollectionOutcome(Unprojected(FeatureCollection.from_geometry(geometry)))


class Action(enum.Enum):
    """What an operation needs next."""

    RENDER_UI = "render_ui"
    PERFORM = "perform"


class Operation(abc.ABC):
    """Visitor over a feature collection; subclasses override the visits they need."""

    NAME: ClassVar[str] = ""
    ALLOWED_GEOM_TYPES: ClassVar[GeomType] = ALL_GEOM_TYPES

    def perform(self, feature_collection: Unprojected[FeatureCollection]) -> Outcome:
        """Visit every feature and geometry, then finalize."""
        self.visit_feature_collection(feature_collection)
        for feature in feature_collection.features():
            self.visit_feature(feature)
            geometry = feature.value.geometry
            if geometry is None:
                continue
            self.visit_geometry(geometry)
            if geometry.geom_type == "GeometryCollection":
                for member in geometry.geoms:
                    self.visit_geometry(member)
                continue
            handler = self._handlers().get(geometry.geom_type)
            if handler is not None:
                handler(geometry)
        return self.finalize()

    def _handlers(self) -> Dict[str, Callable[[Any], None]]:
        return {
            "Point": self.visit_point,
            "LineString": self.visit_line_string,
            "LinearRing": self.visit_line_string,
            "Polygon": self.visit_polygon,
            "MultiPoint": self.visit_multi_point,
            "MultiLineString": self.visit_multi_line_string,
            "MultiPolygon": self.visit_multi_polygon,
        }

    @abc.abstractmethod
    def finalize(self) -> Outcome:
        """Produce the result and reset accumulated state."""

    def next_action(self) -> Action:
        return Action.PERFORM

    def visit_feature_collection(self, feature_collection: Unprojected[FeatureCollection]) -> None:
        pass

    def visit_feature(self, feature: Unprojected[Any]) -> None:
        pass

    def visit_geometry(self, geometry: BaseGeometry) -> None:
        pass

    def visit_point(self, point: Any) -> None:
        pass

    def visit_line_string(self, line_string: Any) -> None:
        pass

    def visit_polygon(self, polygon: Any) -> None:
        pass

    def visit_multi_point(self, multi_point: Any) -> None:
        pass

    def visit_multi_line_string(self, multi_line_string: Any) -> None:
        pass

    def visit_multi_polygon(self, multi_polygon: Any) -> None:
        pass


class ConvexHull(Operation):
    """Convex hull of all geometries."""

    NAME = "Convex hull"
    ALLOWED_GEOM_TYPES = ALL_GEOM_TYPES

    def __init__(self) -> None:
        self._geometries: List[BaseGeometry] = []

    def visit_geometry(self, geometry: BaseGeometry) -> None:
        self._geometries.append(geometry)

    def finalize(self) -> Outcome:
        geometries, self._geometries = self._geometries, []
        return _collection_outcome(GeometryCollection(geometries).convex_hull)


class Outliers(Operation):
    """Keep only the points that are not local outliers."""

    NAME = "Detect outliers"
    ALLOWED_GEOM_TYPES = GeomType.POINT | GeomType.MULTI_POINT

    def __init__(self) -> None:
        self._points: List[Tuple[float, float]] = []

    def visit_point(self, point: Any) -> None:
        self._points.append((point.x, point.y))

    def visit_multi_point(self, multi_point: Any) -> None:
        self._points.extend((p.x, p.y) for p in multi_point.geoms)

    def finalize(self) -> Outcome:
        points, self._points = self._points, []
        scores = outlier_scores(points, _OUTLIER_NEIGHBOURS)
        kept = [point for point, score in zip(points, scores) if score < _OUTLIER_THRESHOLD]
        return _collection_outcome(MultiPoint(kept))


class Rotate(Operation):
    """Rotate all geometries by 45 degrees around their common centroid."""

    NAME = "Rotate geometries"
    ALLOWED_GEOM_TYPES = ALL_GEOM_TYPES

    def __init__(self) -> None:
        self._rotated: BaseGeometry = GeometryCollection()

    def visit_feature_collection(self, feature_collection: Unprojected[FeatureCollection]) -> None:
        collection = feature_collection.value.to_geometry_collection()
        if collection.is_empty:
            self._rotated = collection
        else:
            self._rotated = affinity.rotate(collection, _ROTATION_DEGREES, origin="centroid")

    def finalize(self) -> Outcome:
        rotated, self._rotated = self._rotated, GeometryCollection()
        return _collection_outcome(rotated)


def _simplify_coords(coords: List[Any], epsilon: float, min_points: int) -> List[Any]:
    if not epsilon > 0 or len(coords) < min_points:
        return coords
    simplified = list(LineString(coords).simplify(epsilon, preserve_topology=False).coords)
    return simplified if len(simplified) >= min_points else coords


def _simplify_line(line: Any, epsilon: float) -> LineString:
    return LineString(_simplify_coords(list(line.coords), epsilon, 2))


def _simplify_polygon(polygon: Any, epsilon: float) -> Polygon:
    if polygon.is_empty:
        return polygon
    shell = _simplify_coords(list(polygon.exterior.coords), epsilon, 4)
    holes = [_simplify_coords(list(r.coords), epsilon, 4) for r in polygon.interiors]
    return Polygon(shell, holes)


class Simplify(Operation):
    """Douglas-Peucker simplification; needs an epsilon and a confirmation."""

    NAME = "Simplify geometries"
    ALLOWED_GEOM_TYPES = (
        GeomType.LINE_STRING
        | GeomType.MULTI_LINE_STRING
        | GeomType.POLYGON
        | GeomType.MULTI_POLYGON
    )

    def __init__(self, epsilon: Optional[float] = None) -> None:
        self.epsilon = epsilon
        self._simplified: List[BaseGeometry] = []
        self._confirmed = False

    def parse_epsilon(self, text: str) -> Optional[float]:
        """Set epsilon from text; returns the value, or None if the text is no number."""
        if text != text.strip() or "_" in text:
            return None
        try:
            value = float(text)
        except ValueError:
            return None
        self.epsilon = value
        return value

    def _require_epsilon(self) -> float:
        if self.epsilon is None:
            raise ValueError("epsilon has not been set")
        return self.epsilon

    def preview(self, feature_collection: Unprojected[FeatureCollection]) -> Tuple[int, int]:
        """Node counts before and after simplifying with the current epsilon."""
        self._require_epsilon()
        outcome = self.perform(feature_collection)
        assert isinstance(outcome, FeatureCollectionOutcome)
        return (
            feature_collection.value.coords_count(),
            outcome.feature_collection.value.coords_count(),
        )

    def confirm(self) -> None:
        self._require_epsilon()
        self._confirmed = True

    def next_action(self) -> Action:
        return Action.PERFORM if self._confirmed else Action.RENDER_UI

    def visit_line_string(self, line_string: Any) -> None:
        if self.epsilon is not None:
            self._simplified.append(_simplify_line(line_string, self.epsilon))

    def visit_multi_line_string(self, multi_line_string: Any) -> None:
        if self.epsilon is not None:
            self._simplified.append(
                MultiLineString([_simplify_line(g, self.epsilon) for g in multi_line_string.geoms])
            )

    def visit_polygon(self, polygon: Any) -> None:
        if self.epsilon is not None:
            self._simplified.append(_simplify_polygon(polygon, self.epsilon))

    def visit_multi_polygon(self, multi_polygon: Any) -> None:
        if self.epsilon is not None:
            self._simplified.append(
                MultiPolygon([_simplify_polygon(g, self.epsilon) for g in multi_polygon.geoms])
            )

    def finalize(self) -> Outcome:
        simplified, self._simplified = self._simplified, []
        return _collection_outcome(GeometryCollection(simplified))


class Smoothing(Operation):
    """Chaikin smoothing of lines and polygons."""

    NAME = "Smooth geometries"
    ALLOWED_GEOM_TYPES = (
        GeomType.LINE_STRING
        | GeomType.MULTI_LINE_STRING
        | GeomType.POLYGON
        | GeomType.MULTI_POLYGON
    )

    def __init__(self) -> None:
        self._smoothed: List[BaseGeometry] = []

    def _smooth(self, geometry: BaseGeometry) -> None:
        self._smoothed.append(chaikin_smoothing(geometry, _SMOOTHING_ITERATIONS))

    def visit_line_string(self, line_string: Any) -> None:
        self._smooth(line_string)

    def visit_multi_line_string(self, multi_line_string: Any) -> None:
        self._smooth(multi_line_string)

    def visit_polygon(self, polygon: Any) -> None:
        self._smooth(polygon)

    def visit_multi_polygon(self, multi_polygon: Any) -> None:
        self._smooth(multi_polygon)

    def finalize(self) -> Outcome:
        smoothed, self._smoothed = self._smoothed, []
        return _collection_outcome(GeometryCollection(smoothed))


class Triangulate(Operation):
    """Split polygons into triangles."""

    NAME = "Triangulate"
    ALLOWED_GEOM_TYPES = GeomType.POLYGON | GeomType.MULTI_POLYGON

    def __init__(self) -> None:
        self._triangles: List[Polygon] = []

    def visit_polygon(self, polygon: Any) -> None:
        self._triangles.extend(earcut_triangles(polygon))

    def visit_multi_polygon(self, multi_polygon: Any) -> None:
        for polygon in multi_polygon.geoms:
            self.visit_polygon(polygon)

    def finalize(self) -> Outcome:
        triangles, self._triangles = self._triangles, []
        return _collection_outcome(MultiPolygon(triangles))


def _format_number(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    if value.is_integer():
        return str(int(value))
    return format(Decimal(repr(value)), "f")


class UnsignedArea(Operation):
    """Total unsigned area of all polygons."""

    NAME = "Area (unsigned)"
    ALLOWED_GEOM_TYPES = (
        GeomType.POLYGON | GeomType.MULTI_POLYGON | GeomType.RECT | GeomType.TRIANGLE
    )

    def __init__(self) -> None:
        self._total_area = 0.0

    def visit_polygon(self, polygon: Any) -> None:
        self._total_area += polygon.area

    def visit_multi_polygon(self, multi_polygon: Any) -> None:
        for polygon in multi_polygon.geoms:
            self._total_area += polygon.area

    def finalize(self) -> Outcome:
        return TextOutcome(f"Area: {_format_number(self._total_area)}")