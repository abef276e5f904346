"""Loading geospatial files of the supported formats into feature collections."""

from __future__ import annotations

import enum
import json
import xml.etree.ElementTree as ElementTree
from collections.abc import Iterator
from typing import Any, List, Optional

import shapely.errors
import shapely.wkt
from shapely.geometry import GeometryCollection, LineString, MultiLineString, Point, shape
from shapely.geometry.base import BaseGeometry

from .features import FeatureCollection
from .shapefile import ShapefileError, read_shapefile


class FileFormat(enum.Enum):
    """Supported input file formats."""

    GEOJSON = "geojson"
    SHAPEFILE = "shapefile"
    WKT = "wkt"
    GPX = "gpx"

    def is_plaintext(self) -> bool:
        return self is not FileFormat.SHAPEFILE

    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]


_DISPLAY_NAMES = {
    FileFormat.GEOJSON: "GeoJSON",
    FileFormat.GPX: "GPX",
    FileFormat.SHAPEFILE: "Shapefile",
    FileFormat.WKT: "WKT",
}


class LoadError(Exception):
    """Raised when a file cannot be loaded."""


class NoGeometryError(LoadError):
    """Raised when a file holds no geometry."""

    def __init__(self, message: str = "No geometry found in GeoJSON file") -> None:
        super().__init__(message)


def _combine(geometries: List[BaseGeometry]) -> Optional[BaseGeometry]:
    if not geometries:
        return None
    if len(geometries) == 1:
        return geometries[0]
    return GeometryCollection(geometries)


def _require(geometries: List[BaseGeometry]) -> FeatureCollection:
    geometry = _combine(geometries)
    if geometry is None:
        raise NoGeometryError()
    return FeatureCollection.from_geometry(geometry)


def _geojson_geometries(document: Any) -> Iterator[BaseGeometry]:
    if not isinstance(document, dict):
        raise LoadError("GeoJSON document must be an object")
    kind = document.get("type")
    if kind == "FeatureCollection":
        for feature in document.get("features") or []:
            yield from _geojson_geometries(feature)
    elif kind == "Feature":
        geometry = document.get("geometry")
        if geometry is not None:
            yield shape(geometry)
    else:
        yield shape(document)


def load_geojson(data: bytes) -> FeatureCollection:
    """Load a GeoJSON document."""
    try:
        document = json.loads(data)
        geometries = list(_geojson_geometries(document))
    except (ValueError, TypeError, KeyError, AttributeError, shapely.errors.ShapelyError) as exc:
        raise LoadError(str(exc)) from exc
    return _require(geometries)


def _local(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _children(element: ElementTree.Element, name: str) -> Iterator[ElementTree.Element]:
    return (child for child in element if _local(child.tag) == name)


def _lon_lat(element: ElementTree.Element) -> tuple:
    return (float(element.attrib["lon"]), float(element.attrib["lat"]))


def _gpx_geometries(root: ElementTree.Element) -> Iterator[BaseGeometry]:
    for element in root:
        name = _local(element.tag)
        if name == "wpt":
            yield Point(_lon_lat(element))
        elif name == "rte":
            points = [_lon_lat(p) for p in _children(element, "rtept")]
            if points:
                yield LineString(points)
        elif name == "trk":
            segments = [
                [_lon_lat(p) for p in _children(segment, "trkpt")]
                for segment in _children(element, "trkseg")
            ]
            segments = [s for s in segments if s]
            if segments:
                yield MultiLineString(segments)


def load_gpx(data: bytes) -> FeatureCollection:
    """Load a GPX document: waypoints, routes and tracks."""
    try:
        root = ElementTree.fromstring(data)
        if _local(root.tag) != "gpx":
            raise LoadError(f"expected a gpx root element, found {_local(root.tag)!r}")
        geometries = list(_gpx_geometries(root))
    except ElementTree.ParseError as exc:
        raise LoadError(str(exc)) from exc
    except (ValueError, KeyError, shapely.errors.ShapelyError) as exc:
        raise LoadError(str(exc)) from exc
    return _require(geometries)


def load_wkt(data: bytes) -> FeatureCollection:
    """Load well-known text; empty input gives an empty collection."""
    try:
        text = data.decode("utf-8")
        if not text.strip():
            return FeatureCollection()
        geometry = shapely.wkt.loads(text)
    except (ValueError, shapely.errors.ShapelyError) as exc:
        raise LoadError(str(exc)) from exc
    return FeatureCollection.from_geometry(geometry)


def load_shapefile(data: bytes) -> FeatureCollection:
    """Load the main file of a shapefile."""
    try:
        geometries = read_shapefile(data)
    except ShapefileError as exc:
        raise LoadError(str(exc)) from exc
    return _require(geometries)


_LOADERS = {
    FileFormat.GEOJSON: load_geojson,
    FileFormat.GPX: load_gpx,
    FileFormat.SHAPEFILE: load_shapefile,
    FileFormat.WKT: load_wkt,
}


def load_file(file_format: FileFormat, data: bytes) -> FeatureCollection:
    """Load data of the given format into a feature collection."""
    return _LOADERS[file_format](data)