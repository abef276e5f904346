"""Features, feature collections and their bounding rectangles."""

from __future__ import annotations

import itertools
import threading
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

import shapely
from shapely.geometry import GeometryCollection, Point, box
from shapely.geometry.base import BaseGeometry

Value = Union[str, float, bool, None]
Properties = Dict[str, Value]
Coord = Tuple[float, float]


class BoundingRectError(Exception):
    """Raised when no bounding rectangle can be computed."""

    def __init__(self, message: str = "could not generate bounding rect") -> None:
        super().__init__(message)


def _as_geometry(value: Any) -> BaseGeometry:
    if isinstance(value, BaseGeometry):
        return value
    if isinstance(value, Rect):
        return value.to_polygon()
    return Point(value)


@dataclass(frozen=True)
class Rect:
    """An axis-aligned rectangle; corners are normalised on creation."""

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    def __post_init__(self) -> None:
        lo_x, hi_x = sorted((self.min_x, self.max_x))
        lo_y, hi_y = sorted((self.min_y, self.max_y))
        object.__setattr__(self, "min_x", lo_x)
        object.__setattr__(self, "max_x", hi_x)
        object.__setattr__(self, "min_y", lo_y)
        object.__setattr__(self, "max_y", hi_y)

    @classmethod
    def from_geometry(cls, geometry: BaseGeometry) -> Optional["Rect"]:
        """Bounding rectangle of a geometry, or None for an empty one."""
        if geometry.is_empty:
            return None
        return cls(*geometry.bounds)

    def merge(self, other: "Rect") -> "Rect":
        return Rect(
            min(self.min_x, other.min_x),
            min(self.min_y, other.min_y),
            max(self.max_x, other.max_x),
            max(self.max_y, other.max_y),
        )

    def width(self) -> float:
        return self.max_x - self.min_x

    def height(self) -> float:
        return self.max_y - self.min_y

    def center(self) -> Coord:
        return ((self.min_x + self.max_x) / 2, (self.min_y + self.max_y) / 2)

    def contains(self, geometry: Any) -> bool:
        return self.to_polygon().contains(_as_geometry(geometry))

    def to_polygon(self) -> BaseGeometry:
        return box(self.min_x, self.min_y, self.max_x, self.max_y)


def merge_rects(rects: Iterable[Rect]) -> Rect:
    """Smallest rectangle covering all given ones."""
    iterator = iter(rects)
    try:
        result = next(iterator)
    except StopIteration:
        raise BoundingRectError() from None
    for rect in iterator:
        result = result.merge(rect)
    return result


class _IdCounter:
    def __init__(self) -> None:
        self._counter = itertools.count(1)
        self._lock = threading.Lock()

    def next(self) -> int:
        with self._lock:
            return next(self._counter)


_FEATURE_IDS = _IdCounter()


@dataclass(frozen=True, order=True)
class FeatureId:
    """Process-wide unique, increasing feature identifier."""

    value: int

    @classmethod
    def new(cls) -> "FeatureId":
        return cls(_FEATURE_IDS.next())


@dataclass
class Feature:
    """A geometry with properties; the bounding rectangle is derived if not given."""

    geometry: Optional[BaseGeometry] = None
    properties: Properties = field(default_factory=dict)
    id: FeatureId = field(default_factory=FeatureId.new)
    bounding_rect: Optional[Rect] = None

    def __post_init__(self) -> None:
        if self.bounding_rect is None:
            self.recalculate_bounding_rect()

    def recalculate_bounding_rect(self) -> None:
        self.bounding_rect = (
            Rect.from_geometry(self.geometry) if self.geometry is not None else None
        )

    def coords_count(self) -> int:
        if self.geometry is None:
            return 0
        return int(shapely.get_num_coordinates(self.geometry))

    def coords(self) -> Iterator[Coord]:
        if self.geometry is None:
            return
        for x, y in shapely.get_coordinates(self.geometry):
            yield (float(x), float(y))

    def contains(self, geometry: Any) -> bool:
        if self.bounding_rect is None or self.geometry is None:
            return False
        return self.bounding_rect.contains(geometry) and self.geometry.contains(
            _as_geometry(geometry)
        )


@dataclass
class FeatureCollection:
    """An ordered list of features with a cached bounding rectangle."""

    features: List[Feature] = field(default_factory=list)
    bounding_rect: Optional[Rect] = None

    @classmethod
    def from_geometry(cls, geometry: BaseGeometry) -> "FeatureCollection":
        return cls.from_feature(Feature(geometry=geometry))

    @classmethod
    def from_feature(cls, feature: Feature) -> "FeatureCollection":
        return cls(features=[feature], bounding_rect=feature.bounding_rect)

    @classmethod
    def from_features(cls, features: Iterable[Feature]) -> "FeatureCollection":
        collection = cls(features=list(features))
        collection.recalculate_bounding_rect()
        return collection

    def geometries(self) -> Iterator[BaseGeometry]:
        return (f.geometry for f in self.features if f.geometry is not None)

    def to_geometry_collection(self) -> GeometryCollection:
        return GeometryCollection(list(self.geometries()))

    def compute_bounding_rect(self) -> Rect:
        """Bounding rectangle computed from the geometries themselves."""
        rects = (Rect.from_geometry(g) for g in self.geometries())
        return merge_rects(r for r in rects if r is not None)

    def recalculate_bounding_rect(self) -> None:
        rects = [f.bounding_rect for f in self.features if f.bounding_rect is not None]
        self.bounding_rect = merge_rects(rects) if rects else None

    def coords_count(self) -> int:
        return sum(f.coords_count() for f in self.features)

    def contains(self, geometry: Any) -> bool:
        if self.bounding_rect is None or not self.bounding_rect.contains(geometry):
            return False
        target = _as_geometry(geometry)
        return any(g.contains(target) for g in self.geometries())