"""Wrappers that mark a value as being in projected or unprojected coordinates."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any, Generic, Optional, TypeVar

from shapely.geometry import GeometryCollection, Point
from shapely.geometry.base import BaseGeometry

from .features import FeatureCollection, FeatureId, Properties

G = TypeVar("G")


class Frame(Generic[G]):
    """A value tagged with the coordinate frame it lives in."""

    __slots__ = ("value",)

    def __init__(self, value: G) -> None:
        self.value = value

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other) and self.value == other.value  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self), self.value))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.value!r})"

    def as_raw(self) -> G:
        return self.value

    def contains(self, other: "Frame[Any]") -> bool:
        """Containment test; both sides must be in the same frame."""
        if type(other) is not type(self):
            raise TypeError(
                f"cannot compare {type(self).__name__} with {type(other).__name__}"
            )
        raw, other_raw = self.value, other.value
        if isinstance(raw, BaseGeometry) and not isinstance(other_raw, BaseGeometry):
            other_raw = Point(other_raw)
        return raw.contains(other_raw)  # type: ignore[attr-defined]

    # Feature collection helpers

    @classmethod
    def from_geometry(cls, geometry: BaseGeometry) -> "Frame[FeatureCollection]":
        return cls(FeatureCollection.from_geometry(geometry))

    def features(self) -> Iterator["Frame[Any]"]:
        return (type(self)(feature) for feature in self.value.features)  # type: ignore[attr-defined]

    def bounding_rect(self) -> "Frame[Any]":
        return type(self)(self.value.compute_bounding_rect())  # type: ignore[attr-defined]

    def to_geometry_collection(self) -> "Frame[GeometryCollection]":
        return type(self)(self.value.to_geometry_collection())  # type: ignore[attr-defined]

    def to_geometry_collection_geometry(self) -> "Frame[BaseGeometry]":
        return type(self)(self.value.to_geometry_collection())  # type: ignore[attr-defined]

    # Feature helpers

    def feature_id(self) -> FeatureId:
        return self.value.id  # type: ignore[attr-defined]

    def properties(self) -> Properties:
        return self.value.properties  # type: ignore[attr-defined]

    def geometry(self) -> Optional["Frame[BaseGeometry]"]:
        geometry = self.value.geometry  # type: ignore[attr-defined]
        return None if geometry is None else type(self)(geometry)


class Projected(Frame[G]):
    """A value in the projected (display) coordinate system."""

    __slots__ = ()

    def into_unprojected(self) -> "Unprojected[G]":
        return Unprojected(self.value)


class Unprojected(Frame[G]):
    """A value in its source coordinate system."""

    __slots__ = ()

    def into_projected(self) -> Projected[G]:
        return Projected(self.value)