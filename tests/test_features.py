import pytest
from shapely.geometry import LineString, Point, Polygon, box

from rgis.features import (
    BoundingRectError,
    Feature,
    FeatureCollection,
    FeatureId,
    Rect,
    merge_rects,
)


def test_rect_from_geometry_and_size():
    rect = Rect.from_geometry(box(0, 0, 2, 3))
    assert rect == Rect(0, 0, 2, 3)
    assert rect.width() == 2
    assert rect.height() == 3


def test_rect_from_empty_geometry_is_none():
    assert Rect.from_geometry(Polygon()) is None


def test_rect_normalises_corners():
    assert Rect(2, 5, 0, 1) == Rect(0, 1, 2, 5)


def test_rect_merge():
    merged = Rect(0, 0, 1, 1).merge(Rect(-2, 0.5, 0.5, 4))
    assert merged == Rect(-2, 0, 1, 4)


def test_merge_rects_many():
    rects = [Rect(0, 0, 1, 1), Rect(5, 5, 6, 6), Rect(-1, 2, 0, 3)]
    assert merge_rects(rects) == Rect(-1, 0, 6, 6)


def test_merge_rects_empty_raises():
    with pytest.raises(BoundingRectError, match="could not generate bounding rect"):
        merge_rects([])


def test_rect_center():
    assert Rect(0, 0, 2, 4).center() == (1.0, 2.0)


def test_rect_contains():
    rect = Rect(0, 0, 2, 2)
    assert rect.contains((1, 1))
    assert rect.contains(Point(1, 1))
    assert not rect.contains((3, 3))


def test_rect_to_polygon_roundtrip():
    rect = Rect(1, 2, 3, 4)
    assert Rect.from_geometry(rect.to_polygon()) == rect


def test_feature_ids_unique_and_increasing():
    a = FeatureId.new()
    b = FeatureId.new()
    assert b > a
    assert Feature().id != Feature().id


def test_feature_bounding_rect_computed():
    feature = Feature(geometry=LineString([(0, 0), (3, 4)]))
    assert feature.bounding_rect == Rect(0, 0, 3, 4)


def test_feature_without_geometry():
    feature = Feature()
    assert feature.bounding_rect is None
    assert feature.coords_count() == 0
    assert list(feature.coords()) == []
    assert feature.contains((0, 0)) is False


def test_feature_coords():
    points = [(0.0, 0.0), (1.0, 2.0), (3.0, 1.0)]
    feature = Feature(geometry=LineString(points))
    assert list(feature.coords()) == points
    assert feature.coords_count() == len(points)


def test_feature_contains():
    feature = Feature(geometry=box(0, 0, 10, 10), properties={"name": "a"})
    assert feature.contains((5, 5))
    assert not feature.contains((20, 5))


def test_feature_recalculate_bounding_rect():
    feature = Feature(geometry=box(0, 0, 1, 1))
    feature.geometry = box(0, 0, 5, 5)
    feature.recalculate_bounding_rect()
    assert feature.bounding_rect == Rect(0, 0, 5, 5)


def test_collection_from_geometry():
    collection = FeatureCollection.from_geometry(box(0, 0, 1, 2))
    assert len(collection.features) == 1
    assert collection.bounding_rect == Rect(0, 0, 1, 2)


def test_collection_from_features_merges_rects():
    features = [Feature(geometry=box(0, 0, 1, 1)), Feature(), Feature(geometry=Point(4, 5))]
    collection = FeatureCollection.from_features(features)
    assert collection.bounding_rect == Rect(0, 0, 4, 5)
    assert list(collection.geometries()) == [features[0].geometry, features[2].geometry]


def test_collection_compute_bounding_rect():
    collection = FeatureCollection.from_features(
        [Feature(geometry=box(0, 0, 1, 1)), Feature(geometry=box(2, 2, 3, 3))]
    )
    assert collection.compute_bounding_rect() == Rect(0, 0, 3, 3)


def test_collection_compute_bounding_rect_empty_raises():
    with pytest.raises(BoundingRectError):
        FeatureCollection().compute_bounding_rect()
    with pytest.raises(BoundingRectError):
        FeatureCollection.from_features([Feature()]).compute_bounding_rect()


def test_collection_to_geometry_collection():
    collection = FeatureCollection.from_features(
        [Feature(geometry=Point(1, 1)), Feature(), Feature(geometry=Point(2, 2))]
    )
    gc = collection.to_geometry_collection()
    assert list(gc.geoms) == [Point(1, 1), Point(2, 2)]


def test_collection_coords_count():
    collection = FeatureCollection.from_features(
        [Feature(geometry=Point(1, 1)), Feature(geometry=LineString([(0, 0), (1, 1)]))]
    )
    assert collection.coords_count() == 3


def test_collection_contains():
    collection = FeatureCollection.from_features(
        [Feature(geometry=box(0, 0, 1, 1)), Feature(geometry=box(5, 5, 6, 6))]
    )
    assert collection.contains((5.5, 5.5))
    assert not collection.contains((3, 3))
    assert not FeatureCollection().contains((0, 0))


def test_collection_recalculate_after_change():
    collection = FeatureCollection.from_geometry(box(0, 0, 1, 1))
    collection.features.append(Feature(geometry=box(1, 1, 9, 9)))
    collection.recalculate_bounding_rect()
    assert collection.bounding_rect == Rect(0, 0, 9, 9)